"""
Export component - one post to one JSON document.
"""

from .component import (
    COVER_CAPTION_KIND,
    Export,
    derive_post_fragments,
    pair_cover_captions,
    run,
    run_export,
)
from .models import ExportOutput, ExportPostInput, ExportValidationError

__all__ = [
    # Entry points
    "run",
    "run_export",
    # Input models
    "ExportPostInput",
    # Output models
    "ExportOutput",
    "ExportValidationError",
    # Run
    "COVER_CAPTION_KIND",
    "Export",
    "derive_post_fragments",
    "pair_cover_captions",
]
