"""
Themes component - named presentation settings for exports.
"""

from ._impl import (
    DEFAULT_THEME_NAME,
    DEFAULT_THEME_VALUES,
    ThemeStore,
    get_default_theme,
)
from .component import (
    run,
    run_get_used_theme,
    run_save_theme,
)
from .models import (
    GetUsedThemeInput,
    SaveThemeInput,
    ThemeOutput,
    ThemeValidationError,
)
from .ports import ThemeRepoPort

__all__ = [
    # Entry points
    "run",
    "run_get_used_theme",
    "run_save_theme",
    # Input models
    "GetUsedThemeInput",
    "SaveThemeInput",
    # Output models
    "ThemeOutput",
    "ThemeValidationError",
    # Ports
    "ThemeRepoPort",
    # Store
    "DEFAULT_THEME_NAME",
    "DEFAULT_THEME_VALUES",
    "ThemeStore",
    "get_default_theme",
]
