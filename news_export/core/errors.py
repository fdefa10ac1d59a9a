"""
Export error hierarchy.

Every failure raised while building a document derives from ExportError so
the export entry point can abort a run with one except clause.

Not errors:
- Empty fragments are skipped silently (no node is emitted).
- Style/layout name collisions are resolved by suffixing.
"""

from __future__ import annotations


class ExportError(Exception):
    """Base class for failures that abort an export run."""

    code = "export_error"


class UnknownSpecError(ExportError):
    """Raised when a builder asks for a spec that was never registered."""

    code = "unknown_spec"

    def __init__(self, spec_name: str, component_type: str) -> None:
        self.spec_name = spec_name
        self.component_type = component_type
        super().__init__(f"Spec '{spec_name}' is not registered for component '{component_type}'")


class UnknownComponentError(ExportError):
    """Raised when a fragment kind has no builder."""

    code = "unknown_component"

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"No component builder for fragment kind '{kind}'")


class UnresolvedTokenError(ExportError):
    """Raised when a template still has tokens with no substitution value."""

    code = "unresolved_token"

    def __init__(self, tokens: list[str]) -> None:
        self.tokens = sorted(tokens)
        names = ", ".join(f"#{t}#" for t in self.tokens)
        super().__init__(f"Unresolved template tokens: {names}")


class InvalidSpecError(ExportError):
    """Raised when a template contains something other than JSON data."""

    code = "invalid_spec"

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid spec template: {reason}")


class DanglingReferenceError(ExportError):
    """Raised when a node references a style or layout that is not in the table."""

    code = "dangling_reference"

    def __init__(self, category: str, name: str) -> None:
        self.category = category
        self.name = name
        super().__init__(f"Component references unknown {category} '{name}'")


class ExportStateError(ExportError):
    """Raised when the document assembler is driven out of order."""

    code = "invalid_state"

    def __init__(self, from_state: str, action: str) -> None:
        self.from_state = from_state
        self.action = action
        super().__init__(f"Cannot {action} while document is '{from_state}'")


class InvalidFragmentError(ExportError):
    """Raised when a fragment carries a field its builder cannot read."""

    code = "invalid_fragment"

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"Invalid '{kind}' fragment: {reason}")


class ThemeNotFoundError(ExportError):
    """Raised when an admin action names a theme that does not exist."""

    code = "theme_not_found"

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Theme '{name}' does not exist")


class InvalidThemeError(ExportError):
    """Raised when a theme name or stored theme file cannot be used."""

    code = "invalid_theme"

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Theme '{name}' is invalid: {reason}")


class RulesLoadError(ValueError):
    """Raised when rules.yaml cannot be parsed or validated."""
