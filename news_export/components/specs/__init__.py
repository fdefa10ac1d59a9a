"""
Specs component - named JSON templates with placeholder tokens.
"""

from .component import SpecRegistry
from .models import Spec

__all__ = [
    "Spec",
    "SpecRegistry",
]
