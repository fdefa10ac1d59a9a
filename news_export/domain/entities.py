import logging
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# --- Enums / Literals ---
ContentFormat = Literal["html", "markdown"]
Slot = Literal["meta", "body"]

# --- Export Input ---


class ContentFragment(BaseModel):
    """
    One unit of parsed post content.

    ``markup`` carries text fragments, ``url`` carries media fragments.
    Kind-specific extras go in ``fields``.
    """

    kind: str
    markup: str = ""
    url: str | None = None
    alignment: str | None = None
    level: int | None = None
    caption: str | None = None
    fields: dict[str, Any] = Field(default_factory=dict)


class PostPayload(BaseModel):
    id: int | str
    title: str = ""
    excerpt: str = ""
    author: str = ""
    published_at: datetime | None = None
    modified_at: datetime | None = None
    fragments: list[ContentFragment] = Field(default_factory=list)


class ExportSettings(BaseModel):
    """Export-time options. Fixed for the whole run."""

    model_config = ConfigDict(frozen=True)

    content_format: ContentFormat = "html"
    language: str = "en"
    document_version: str = "1.7"
    generator_name: str = "news_export"
    generator_version: str = "0.1.0"


# --- Themes ---


class Theme(BaseModel):
    """
    Named set of presentation values.

    Missing keys answer None so callers can pick their own literal fallback.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    values: dict[str, Any] = Field(default_factory=dict)

    def get_value(self, key: str) -> Any:
        return self.values.get(key)

    def get_int(self, key: str, default: int = 0) -> Any:
        """
        Integer coercion for sizes and line heights.

        A value that is not numeric is logged and passed through unchanged.
        """
        value = self.values.get(key)
        if value is None or value == "":
            return default
        try:
            return int(float(value))
        except (TypeError, ValueError):
            logger.warning(
                "Theme '%s' value %r for '%s' is not numeric; passing it through",
                self.name, value, key,
            )
            return value

    def get_fraction(self, key: str, default: int = 0) -> Any:
        """
        Percent value as a fraction (50 -> 0.5).

        Whole results stay integers so 0 encodes as ``0``, not ``0.0``.
        """
        whole = self.get_int(key, default)
        if not isinstance(whole, int):
            return whole
        if whole % 100 == 0:
            return whole // 100
        return whole / 100

    @property
    def json_templates(self) -> dict[str, dict[str, Any]]:
        """Per-component spec overrides saved with the theme."""
        templates = self.values.get("json_templates") or {}
        if not isinstance(templates, dict):
            logger.warning("Theme '%s' has malformed json_templates; ignoring", self.name)
            return {}
        return templates
