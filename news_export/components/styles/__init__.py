"""
Styles component - deduplicated style and layout tables.
"""

from .component import ALWAYS_EMITTED, CATEGORY_KEYS, StyleTable

__all__ = [
    "ALWAYS_EMITTED",
    "CATEGORY_KEYS",
    "StyleTable",
]
