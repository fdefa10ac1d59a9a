import os
from functools import lru_cache
from pathlib import Path

from fastapi import Depends

from news_export.adapters.theme_repo import InMemoryThemeRepo, YamlThemeRepo
from news_export.components.themes import ThemeRepoPort
from news_export.domain.entities import ExportSettings
from news_export.rules.loader import load_rules
from news_export.rules.models import ExportRules


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(
            os.environ.get("NEWS_EXPORT_RULES", str(self.base_dir / "rules.yaml"))
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules(settings: Settings = Depends(get_settings)) -> ExportRules:
    return load_rules(settings.rules_path)


def get_export_settings(rules: ExportRules = Depends(get_rules)) -> ExportSettings:
    return rules.to_settings()


# --- Repos ---
# Shared so themes saved over the API outlive the request
_memory_repo = InMemoryThemeRepo()


def get_theme_repo(rules: ExportRules = Depends(get_rules)) -> ThemeRepoPort:
    if rules.theme.directory:
        repo: ThemeRepoPort = YamlThemeRepo(rules.theme.directory)
    else:
        repo = _memory_repo

    used = rules.theme.used
    if used and repo.get_used_name() is None and used in repo.list_names():
        repo.set_used_name(used)
    return repo
