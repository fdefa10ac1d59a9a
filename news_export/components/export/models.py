"""
Export component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from news_export.domain.entities import ExportSettings, PostPayload


@dataclass(frozen=True)
class ExportValidationError:
    """Reason an export run was aborted."""

    code: str
    message: str


@dataclass(frozen=True)
class ExportPostInput:
    """Input for exporting one post."""

    post: PostPayload
    settings: ExportSettings = field(default_factory=ExportSettings)


@dataclass(frozen=True)
class ExportOutput:
    """
    Output of an export run.

    ``document_json`` is None whenever the run was aborted.
    """

    document_json: str | None
    errors: list[ExportValidationError] = field(default_factory=list)
    success: bool = True
