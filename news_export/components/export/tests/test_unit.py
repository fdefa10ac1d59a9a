"""
Export component unit tests.

Full document output is covered in tests/unit/test_export_document.py.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from news_export.adapters.theme_repo import InMemoryThemeRepo
from news_export.components.export import (
    ExportPostInput,
    derive_post_fragments,
    pair_cover_captions,
    run,
)
from news_export.domain.entities import ContentFragment, PostPayload


class TestPairCoverCaptions:
    def test_caption_after_cover(self) -> None:
        fragments = [
            ContentFragment(kind="cover", url="u"),
            ContentFragment(kind="body", markup="b"),
            ContentFragment(kind="cover_caption", markup="Cap"),
        ]

        paired = pair_cover_captions(fragments)

        assert [f.kind for f in paired] == ["cover", "body"]
        assert paired[0].caption == "Cap"

    def test_caption_before_cover(self) -> None:
        fragments = [
            ContentFragment(kind="cover_caption", markup="Cap"),
            ContentFragment(kind="cover", url="u"),
        ]

        assert pair_cover_captions(fragments)[0].caption == "Cap"

    def test_existing_caption_kept(self) -> None:
        fragments = [
            ContentFragment(kind="cover", url="u", caption="Own"),
            ContentFragment(kind="cover_caption", markup="Other"),
        ]

        assert pair_cover_captions(fragments)[0].caption == "Own"

    def test_input_not_modified(self) -> None:
        cover = ContentFragment(kind="cover", url="u")

        pair_cover_captions([cover, ContentFragment(kind="cover_caption", markup="Cap")])

        assert cover.caption is None

    def test_empty_caption_ignored(self) -> None:
        fragments = [
            ContentFragment(kind="cover", url="u"),
            ContentFragment(kind="cover_caption", markup="  "),
        ]

        paired = pair_cover_captions(fragments)

        assert len(paired) == 1
        assert paired[0].caption is None


class TestDerivePostFragments:
    def test_all_fields(self) -> None:
        post = PostPayload(
            id=1,
            title="T",
            author="A",
            excerpt="E",
            published_at=datetime(2020, 1, 1),
        )

        derived = derive_post_fragments(post)

        assert [f.kind for f in derived] == ["title", "byline", "intro"]
        assert derived[1].fields == {"author": "A", "date": datetime(2020, 1, 1)}

    def test_existing_fragments_not_duplicated(self) -> None:
        post = PostPayload(
            id=1,
            title="T",
            author="A",
            fragments=[ContentFragment(kind="byline", markup="Staff")],
        )

        assert [f.kind for f in derive_post_fragments(post)] == ["title"]

    def test_blank_fields(self) -> None:
        assert derive_post_fragments(PostPayload(id=1, title="  ")) == []


def test_run_dispatch() -> None:
    result = run(ExportPostInput(post=PostPayload(id=1, title="T")), theme_repo=InMemoryThemeRepo())
    assert result.success is True

    with pytest.raises(ValueError):
        run("nope", theme_repo=InMemoryThemeRepo())  # type: ignore[arg-type]
