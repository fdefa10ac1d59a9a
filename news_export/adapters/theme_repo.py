"""
Theme repository adapters.

InMemoryThemeRepo backs tests and the preview API. YamlThemeRepo keeps one
``<name>.yaml`` file per theme plus a ``_used`` pointer file.
"""

from __future__ import annotations

import copy
import os
from pathlib import Path
from typing import Any

import yaml

from news_export.core.errors import InvalidThemeError

USED_POINTER = "_used"


class InMemoryThemeRepo:
    def __init__(
        self,
        themes: dict[str, dict[str, Any]] | None = None,
        used: str | None = None,
    ) -> None:
        self._themes = copy.deepcopy(themes or {})
        self._used = used

    def load(self, name: str) -> dict[str, Any] | None:
        values = self._themes.get(name)
        return copy.deepcopy(values) if values is not None else None

    def save(self, name: str, values: dict[str, Any]) -> None:
        self._themes[name] = copy.deepcopy(values)

    def list_names(self) -> list[str]:
        return sorted(self._themes)

    def get_used_name(self) -> str | None:
        return self._used

    def set_used_name(self, name: str) -> None:
        self._used = name


class YamlThemeRepo:
    def __init__(self, base_path: str):
        self.base_path = Path(base_path).resolve()
        if not self.base_path.exists():
            os.makedirs(self.base_path, exist_ok=True)

    def _safe_path(self, name: str) -> Path:
        # Prevent traversal
        target = (self.base_path / f"{name}.yaml").resolve()
        if target.parent != self.base_path:
            raise InvalidThemeError(name, "name must not leave the theme directory")
        return target

    def load(self, name: str) -> dict[str, Any] | None:
        target = self._safe_path(name)
        if not target.exists():
            return None
        with open(target) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise InvalidThemeError(name, f"{target.name} is not valid YAML") from e
        if not isinstance(data, dict):
            raise InvalidThemeError(name, f"{target.name} must contain a mapping")
        return data

    def save(self, name: str, values: dict[str, Any]) -> None:
        target = self._safe_path(name)
        with open(target, "w") as f:
            yaml.safe_dump(values, f, sort_keys=True, allow_unicode=True)

    def list_names(self) -> list[str]:
        return sorted(p.stem for p in self.base_path.glob("*.yaml"))

    def get_used_name(self) -> str | None:
        pointer = self.base_path / USED_POINTER
        if not pointer.exists():
            return None
        name = pointer.read_text().strip()
        return name or None

    def set_used_name(self, name: str) -> None:
        (self.base_path / USED_POINTER).write_text(name)
