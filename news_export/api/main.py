import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI

from news_export.api.deps import get_settings
from news_export.api.routes import export_preview
from news_export.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    settings = get_settings()

    # Fail fast on a missing or invalid rules file
    load_rules(settings.rules_path)
    logger.info("Rules loaded from %s", settings.rules_path)

    yield


app = FastAPI(
    title="News Export API",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.include_router(export_preview.router, prefix="/api/export", tags=["Export"])


@app.get("/health")
def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "ok", "service": "news_export"}
