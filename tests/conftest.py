from datetime import datetime

import pytest

from news_export.adapters.theme_repo import InMemoryThemeRepo
from news_export.components.themes import ThemeStore
from news_export.domain.entities import ContentFragment, PostPayload


@pytest.fixture
def theme_repo() -> InMemoryThemeRepo:
    return InMemoryThemeRepo()


@pytest.fixture
def theme_store(theme_repo: InMemoryThemeRepo) -> ThemeStore:
    return ThemeStore(theme_repo)


@pytest.fixture
def post() -> PostPayload:
    """A post as the upstream content parser hands it over."""
    return PostPayload(
        id=42,
        title="Hello World",
        author="Testuser",
        published_at=datetime(2016, 8, 26, 12, 0),
        modified_at=datetime(2016, 8, 27, 9, 30),
        fragments=[
            ContentFragment(kind="body", markup="<p>First paragraph.</p>"),
            ContentFragment(kind="heading", markup="<h2>Section</h2>"),
            ContentFragment(kind="body", markup="<p>Second paragraph.</p>"),
        ],
    )
