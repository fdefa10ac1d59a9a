"""
End-to-end export tests: post payload in, document JSON out.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

import pytest

from news_export.adapters.theme_repo import InMemoryThemeRepo
from news_export.components.assembler import iter_nodes
from news_export.components.export import Export, ExportPostInput, run_export
from news_export.components.themes import ThemeStore
from news_export.core.errors import InvalidFragmentError, UnknownComponentError
from news_export.domain.entities import ContentFragment, ExportSettings, PostPayload


def export(post: PostPayload, store: ThemeStore, **settings: Any) -> dict[str, Any]:
    return json.loads(Export(ExportSettings(**settings), store, post).perform())


def roles(document: dict[str, Any]) -> list[str]:
    return [c["role"] for c in document["components"]]


def with_fragments(post: PostPayload, *fragments: ContentFragment) -> PostPayload:
    return post.model_copy(update={"fragments": list(fragments)})


class TestDocumentShape:
    def test_header_fields(self, post: PostPayload, theme_store: ThemeStore) -> None:
        document = export(post, theme_store)

        assert document["version"] == "1.7"
        assert document["identifier"] == "post-42"
        assert document["language"] == "en"
        assert document["title"] == "Hello World"
        assert document["layout"] == {"columns": 7, "width": 1024, "margin": 100, "gutter": 20}
        assert document["documentStyle"] == {"backgroundColor": "#fafafa"}

    def test_top_level_key_order(self, post: PostPayload, theme_store: ThemeStore) -> None:
        document = export(post, theme_store)

        assert list(document) == [
            "version",
            "identifier",
            "language",
            "title",
            "layout",
            "components",
            "componentTextStyles",
            "componentLayouts",
            "documentStyle",
            "metadata",
        ]

    def test_metadata(self, post: PostPayload, theme_store: ThemeStore) -> None:
        metadata = export(post, theme_store)["metadata"]

        assert metadata["authors"] == ["Testuser"]
        assert metadata["datePublished"] == "2016-08-26T12:00:00"
        assert metadata["dateModified"] == "2016-08-27T09:30:00"
        assert metadata["generatorName"] == "news_export"
        assert "excerpt" not in metadata
        assert "thumbnailURL" not in metadata

    def test_components_in_order(self, post: PostPayload, theme_store: ThemeStore) -> None:
        document = export(post, theme_store)

        assert roles(document) == ["title", "byline", "body", "heading2", "body"]
        assert document["components"][2]["text"] == "<p>First paragraph.</p>"
        assert document["components"][4]["text"] == "<p>Second paragraph.</p>"

    def test_byline_format(self, post: PostPayload, theme_store: ThemeStore) -> None:
        byline = export(post, theme_store)["components"][1]

        assert byline["text"] == "by Testuser | Aug 26, 2016 | 12:00 PM"

    def test_every_reference_resolves(self, post: PostPayload, theme_store: ThemeStore) -> None:
        post = with_fragments(
            post,
            ContentFragment(kind="cover", url="https://e.com/c.jpg", caption="Cover"),
            ContentFragment(kind="photo", url="https://e.com/p.jpg", caption="Photo"),
            ContentFragment(kind="quote", markup="<p>Quoted</p>"),
            ContentFragment(kind="divider"),
        )
        document = export(post, theme_store)

        for node in iter_nodes(document["components"]):
            if "textStyle" in node:
                assert node["textStyle"] in document["componentTextStyles"]
            if "layout" in node:
                assert node["layout"] in document["componentLayouts"]


class TestRuns:
    def test_deterministic(self, post: PostPayload, theme_store: ThemeStore) -> None:
        first = Export(ExportSettings(), theme_store, post).perform()
        second = Export(ExportSettings(), theme_store, post).perform()

        assert first == second

    def test_style_tables_not_shared(self, post: PostPayload, theme_store: ThemeStore) -> None:
        """A second run does not see the first run's suffixed names."""
        centered = with_fragments(
            post, ContentFragment(kind="body", markup="<p>x</p>", alignment="center")
        )
        export(centered, theme_store)

        plain = with_fragments(post, ContentFragment(kind="body", markup="<p>y</p>"))
        document = export(plain, theme_store)

        assert document["components"][-1]["textStyle"] == "default-body"

    def test_distinct_styles_suffixed(self, post: PostPayload, theme_store: ThemeStore) -> None:
        post = with_fragments(
            post,
            ContentFragment(kind="body", markup="<p>a</p>"),
            ContentFragment(kind="body", markup="<p>b</p>", alignment="center"),
            ContentFragment(kind="body", markup="<p>c</p>"),
        )
        document = export(post, theme_store)

        body_styles = [c["textStyle"] for c in document["components"] if c["role"] == "body"]
        assert body_styles == ["default-body", "default-body-2", "default-body"]
        assert document["componentTextStyles"]["default-body-2"]["textAlignment"] == "center"

    def test_empty_fragments_skipped(self, post: PostPayload, theme_store: ThemeStore) -> None:
        post = with_fragments(
            post,
            ContentFragment(kind="body", markup="<p></p>"),
            ContentFragment(kind="photo", url=""),
        )
        document = export(post, theme_store)

        assert roles(document) == ["title", "byline"]
        assert "default-body" not in document["componentTextStyles"]

    def test_markdown_format(self, post: PostPayload, theme_store: ThemeStore) -> None:
        post = with_fragments(post, ContentFragment(kind="body", markup="<p><em>Hi</em></p>"))
        body = export(post, theme_store, content_format="markdown")["components"][-1]

        assert body == {
            "role": "body",
            "text": "_Hi_",
            "format": "markdown",
            "textStyle": "default-body",
            "layout": "body-layout",
        }

    def test_used_theme_applied(self, post: PostPayload) -> None:
        repo = InMemoryThemeRepo({"Dark": {"body_color": "#000000"}}, used="Dark")

        document = export(post, ThemeStore(repo))

        assert document["componentTextStyles"]["default-body"]["textColor"] == "#000000"

    def test_unknown_kind_aborts(self, post: PostPayload, theme_store: ThemeStore) -> None:
        post = with_fragments(post, ContentFragment(kind="gallery", markup="x"))

        with pytest.raises(UnknownComponentError):
            Export(ExportSettings(), theme_store, post).perform()


class TestCover:
    @pytest.mark.parametrize("caption_first", [True, False])
    def test_caption_joins_cover(
        self, post: PostPayload, theme_store: ThemeStore, caption_first: bool
    ) -> None:
        cover = ContentFragment(kind="cover", url="https://e.com/c.jpg")
        caption = ContentFragment(kind="cover_caption", markup="A caption")
        body = ContentFragment(kind="body", markup="<p>Text</p>")
        fragments = [body, caption, cover] if caption_first else [body, cover, caption]

        document = export(with_fragments(post, *fragments), theme_store)
        header = document["components"][0]

        assert header["role"] == "header"
        assert header["components"][0]["role"] == "photo"
        assert header["components"][0]["caption"]["text"] == "A caption"
        assert header["components"][1]["role"] == "caption"
        assert header["components"][1]["text"] == "A caption"
        assert roles(document) == ["header", "title", "byline", "body"]

    def test_cover_without_caption(self, post: PostPayload, theme_store: ThemeStore) -> None:
        cover = ContentFragment(kind="cover", url="https://e.com/c.jpg")
        document = export(with_fragments(post, cover), theme_store)

        first = document["components"][0]
        assert first["role"] == "photo"
        assert first["URL"] == "https://e.com/c.jpg"
        assert first["layout"] == "headerPhotoLayout"
        assert document["metadata"]["thumbnailURL"] == "https://e.com/c.jpg"

    def test_caption_without_cover_dropped(
        self, post: PostPayload, theme_store: ThemeStore
    ) -> None:
        caption = ContentFragment(kind="cover_caption", markup="Lonely")
        document = export(with_fragments(post, caption), theme_store)

        assert roles(document) == ["title", "byline"]


class TestDerivedFragments:
    def test_excerpt_becomes_intro(self, post: PostPayload, theme_store: ThemeStore) -> None:
        post = post.model_copy(update={"excerpt": "Short summary"})
        document = export(post, theme_store)

        assert roles(document)[:3] == ["title", "byline", "intro"]
        assert document["metadata"]["excerpt"] == "Short summary"

    def test_explicit_title_wins(self, post: PostPayload, theme_store: ThemeStore) -> None:
        post = with_fragments(post, ContentFragment(kind="title", markup="Custom title"))
        document = export(post, theme_store)

        titles = [c for c in document["components"] if c["role"] == "title"]
        assert [t["text"] for t in titles] == ["Custom title"]

    def test_no_author_no_byline(self, theme_store: ThemeStore) -> None:
        post = PostPayload(id="abc", title="T", published_at=datetime(2020, 1, 1))

        document = export(post, theme_store)

        assert roles(document) == ["title"]
        assert document["identifier"] == "post-abc"


class TestRunExport:
    def test_success(self, post: PostPayload, theme_repo: InMemoryThemeRepo) -> None:
        result = run_export(ExportPostInput(post=post), theme_repo=theme_repo)

        assert result.success is True
        assert result.errors == []
        assert json.loads(result.document_json)["identifier"] == "post-42"

    def test_failure_has_no_document(
        self, post: PostPayload, theme_repo: InMemoryThemeRepo
    ) -> None:
        post = with_fragments(
            post,
            ContentFragment(kind="body", markup="<p>ok</p>"),
            ContentFragment(kind="gallery"),
        )

        result = run_export(ExportPostInput(post=post), theme_repo=theme_repo)

        assert result.success is False
        assert result.document_json is None
        assert result.errors[0].code == "unknown_component"
        assert "gallery" in result.errors[0].message

    def test_bad_byline_date(self, post: PostPayload, theme_repo: InMemoryThemeRepo) -> None:
        """A date the byline cannot read is reported, not raised."""
        post = with_fragments(
            post,
            ContentFragment(kind="byline", fields={"author": "Ann", "date": "26/08/2016"}),
        )

        result = run_export(ExportPostInput(post=post), theme_repo=theme_repo)

        assert result.success is False
        assert result.document_json is None
        assert result.errors[0].code == "invalid_fragment"
        assert "26/08/2016" in result.errors[0].message


class TestInvalidFragment:
    def test_perform_raises(self, post: PostPayload, theme_store: ThemeStore) -> None:
        post = with_fragments(
            post, ContentFragment(kind="byline", fields={"author": "Ann", "date": 20160826})
        )

        with pytest.raises(InvalidFragmentError):
            Export(ExportSettings(), theme_store, post).perform()
