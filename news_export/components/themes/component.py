"""
Themes component - named presentation settings for exports.

Invariants:
- I1: A used theme is always available (built-in default as fallback)
- I2: Missing keys read as None; callers choose the literal fallback
- I3: Themes are not mutated during an export
"""

from __future__ import annotations

from news_export.core.errors import InvalidSpecError, InvalidThemeError, ThemeNotFoundError
from news_export.domain.json_values import validate_template

from ._impl import ThemeStore
from .models import GetUsedThemeInput, SaveThemeInput, ThemeOutput, ThemeValidationError
from .ports import ThemeRepoPort

# --- Component Entry Points ---


def run_get_used_theme(inp: GetUsedThemeInput, *, repo: ThemeRepoPort) -> ThemeOutput:
    """Resolve the theme exports should use."""
    return ThemeOutput(theme=ThemeStore(repo).get_used_theme())


def run_save_theme(inp: SaveThemeInput, *, repo: ThemeRepoPort) -> ThemeOutput:
    """
    Save a theme.

    Spec overrides in ``json_templates`` must be plain JSON data; a theme
    carrying anything else is rejected before it reaches the repo.
    """
    errors: list[ThemeValidationError] = []
    if not inp.theme.name.strip():
        errors.append(
            ThemeValidationError(code="required", message="Theme name is required", field="name")
        )

    try:
        validate_template(inp.theme.values.get("json_templates") or {})
    except InvalidSpecError as e:
        errors.append(
            ThemeValidationError(code="invalid_template", message=str(e), field="json_templates")
        )

    if errors:
        return ThemeOutput(theme=None, errors=errors, success=False)

    store = ThemeStore(repo)
    try:
        store.save_theme(inp.theme)
    except InvalidThemeError as e:
        return ThemeOutput(
            theme=None,
            errors=[ThemeValidationError(code=e.code, message=str(e), field="name")],
            success=False,
        )

    if inp.make_used:
        try:
            store.set_used(inp.theme.name)
        except (ThemeNotFoundError, InvalidThemeError) as e:
            return ThemeOutput(
                theme=inp.theme,
                errors=[ThemeValidationError(code=e.code, message=str(e), field="name")],
                success=False,
            )

    return ThemeOutput(theme=inp.theme)


def run(
    inp: GetUsedThemeInput | SaveThemeInput,
    *,
    repo: ThemeRepoPort,
) -> ThemeOutput:
    """
    Main entry point for the themes component.

    Dispatches to appropriate handler based on input type.
    """
    if isinstance(inp, GetUsedThemeInput):
        return run_get_used_theme(inp, repo=repo)
    elif isinstance(inp, SaveThemeInput):
        return run_save_theme(inp, repo=repo)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
