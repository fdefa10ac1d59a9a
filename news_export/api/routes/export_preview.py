"""
Export Preview API Routes.

Exports a post without publishing it, so editors can inspect the
document JSON the publishing API would receive.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, Field

from news_export.api.deps import get_export_settings, get_theme_repo
from news_export.components.builders import list_component_specs
from news_export.components.export import ExportPostInput, run_export
from news_export.components.themes import (
    GetUsedThemeInput,
    SaveThemeInput,
    ThemeRepoPort,
    run_get_used_theme,
    run_save_theme,
)
from news_export.domain.entities import ExportSettings, PostPayload, Theme

router = APIRouter()


# --- Request/Response Models ---


class PreviewRequest(BaseModel):
    """Post to export, with optional per-request settings."""

    post: PostPayload
    settings: ExportSettings | None = Field(
        default=None, description="Overrides the settings from rules.yaml"
    )


class ThemeResponse(BaseModel):
    name: str
    values: dict[str, Any]


class SaveThemeRequest(BaseModel):
    name: str
    values: dict[str, Any] = Field(default_factory=dict)
    make_used: bool = False


def _serialize_errors(errors: list[Any]) -> list[dict[str, Any]]:
    return [{"code": e.code, "message": e.message} for e in errors]


# --- Routes ---


@router.post("/preview")
def preview_export(
    request: PreviewRequest,
    settings: ExportSettings = Depends(get_export_settings),
    repo: ThemeRepoPort = Depends(get_theme_repo),
) -> Response:
    """
    Export a post and return the document.

    The body is the exact serialized document, not a re-encoding of it.
    """
    result = run_export(
        ExportPostInput(post=request.post, settings=request.settings or settings),
        theme_repo=repo,
    )
    if not result.success or result.document_json is None:
        raise HTTPException(
            status_code=422,
            detail={"errors": _serialize_errors(result.errors)},
        )
    return Response(content=result.document_json, media_type="application/json")


@router.get("/specs")
def get_specs(repo: ThemeRepoPort = Depends(get_theme_repo)) -> dict[str, Any]:
    """Specs of every component as the used theme sees them."""
    theme = run_get_used_theme(GetUsedThemeInput(), repo=repo).theme
    return list_component_specs(theme)


@router.get("/theme", response_model=ThemeResponse)
def get_used_theme(repo: ThemeRepoPort = Depends(get_theme_repo)) -> ThemeResponse:
    theme = run_get_used_theme(GetUsedThemeInput(), repo=repo).theme
    if theme is None:
        raise HTTPException(status_code=404, detail="Theme not found")
    return ThemeResponse(name=theme.name, values=theme.values)


@router.put("/theme", response_model=ThemeResponse)
def save_theme(
    request: SaveThemeRequest,
    repo: ThemeRepoPort = Depends(get_theme_repo),
) -> ThemeResponse:
    """Save a theme, optionally making it the one exports use."""
    theme = Theme(name=request.name, values=request.values)
    result = run_save_theme(
        SaveThemeInput(theme=theme, make_used=request.make_used),
        repo=repo,
    )
    if not result.success or result.theme is None:
        raise HTTPException(
            status_code=400,
            detail={"errors": _serialize_errors(result.errors)},
        )
    return ThemeResponse(name=result.theme.name, values=result.theme.values)
