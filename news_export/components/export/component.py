"""
Export component - one post to one JSON document.

Key behaviors:
- Resolves the used theme once per run
- Builds fragments strictly in order against a fresh style table
- A failing fragment aborts the run; no partial document is produced
- Cover captions are paired with the cover wherever they appear
- Title, byline and intro are derived from post fields when the
  fragment stream does not carry them
"""

from __future__ import annotations

import logging
from typing import Any

from news_export.components.builders import (
    BuildContext,
    build_fragment,
    create_builders,
    plain_text,
)
from news_export.components.themes import ThemeRepoPort, ThemeStore
from news_export.core.errors import ExportError
from news_export.domain.entities import ContentFragment, ExportSettings, PostPayload

from .models import ExportOutput, ExportPostInput, ExportValidationError

logger = logging.getLogger(__name__)

COVER_CAPTION_KIND = "cover_caption"


def pair_cover_captions(fragments: list[ContentFragment]) -> list[ContentFragment]:
    """
    Move ``cover_caption`` fragments onto the cover fragment.

    Source order does not matter. A cover that already has a caption
    keeps it. Captions without a cover are dropped.
    """
    captions = [f for f in fragments if f.kind == COVER_CAPTION_KIND and f.markup.strip()]
    rest = [f for f in fragments if f.kind != COVER_CAPTION_KIND]
    if not captions:
        return rest

    for i, fragment in enumerate(rest):
        if fragment.kind == "cover":
            if not fragment.caption:
                rest[i] = fragment.model_copy(update={"caption": captions[0].markup})
            return rest

    logger.debug("Dropping %d cover caption(s) without a cover", len(captions))
    return rest


def derive_post_fragments(post: PostPayload) -> list[ContentFragment]:
    """Fragments for post fields the upstream parser does not emit."""
    present = {f.kind for f in post.fragments}
    derived: list[ContentFragment] = []

    if "title" not in present and post.title.strip():
        derived.append(ContentFragment(kind="title", markup=post.title))
    if "byline" not in present and post.author.strip():
        fields: dict[str, Any] = {"author": post.author}
        if post.published_at is not None:
            fields["date"] = post.published_at
        derived.append(ContentFragment(kind="byline", fields=fields))
    if "intro" not in present and post.excerpt.strip():
        derived.append(ContentFragment(kind="intro", markup=post.excerpt))

    return derived


class Export:
    """
    A single export run.

    Each perform() call owns a fresh style table and assembler.
    """

    def __init__(
        self,
        settings: ExportSettings,
        theme_store: ThemeStore,
        post: PostPayload,
    ) -> None:
        self.settings = settings
        self.theme_store = theme_store
        self.post = post

    def fragments(self) -> list[ContentFragment]:
        return derive_post_fragments(self.post) + pair_cover_captions(list(self.post.fragments))

    def perform(self) -> str:
        """
        Build and serialize the document.

        Raises:
            ExportError: On the first fragment that cannot be built.
        """
        theme = self.theme_store.get_used_theme()
        logger.info("Exporting post %s with theme '%s'", self.post.id, theme.name)

        ctx = BuildContext.create(theme, self.settings)
        builders = create_builders(theme)
        fragments = self.fragments()

        ctx.assembler.begin()
        for fragment in fragments:
            build_fragment(fragment, ctx, builders)
        components = ctx.assembler.finalize()

        output = ctx.assembler.serialize(self.document_fields(ctx, fragments), ctx.styles)
        logger.info(
            "Exported post %s: %d components, %d styles/layouts",
            self.post.id, len(components), len(ctx.styles),
        )
        return output

    def document_fields(
        self, ctx: BuildContext, fragments: list[ContentFragment]
    ) -> dict[str, Any]:
        """Document-level values around the component tree."""
        post = self.post
        metadata: dict[str, Any] = {}
        if post.excerpt.strip():
            metadata["excerpt"] = plain_text(post.excerpt)
        if post.author.strip():
            metadata["authors"] = [post.author.strip()]
        if post.published_at is not None:
            metadata["datePublished"] = post.published_at.isoformat()
            metadata["dateCreated"] = post.published_at.isoformat()
        if post.modified_at is not None:
            metadata["dateModified"] = post.modified_at.isoformat()
        cover = next((f for f in fragments if f.kind == "cover" and f.url), None)
        if cover is not None:
            metadata["thumbnailURL"] = cover.url
        metadata["generatorName"] = self.settings.generator_name
        metadata["generatorVersion"] = self.settings.generator_version

        return {
            "version": self.settings.document_version,
            "identifier": f"post-{post.id}",
            "language": self.settings.language,
            "title": plain_text(post.title),
            "layout": ctx.grid.to_json(),
            "documentStyle": {
                "backgroundColor": ctx.theme.get_value("body_background_color") or "#fafafa",
            },
            "metadata": metadata,
        }


# --- Component Entry Points ---


def run_export(inp: ExportPostInput, *, theme_repo: ThemeRepoPort) -> ExportOutput:
    """
    Export one post.

    Args:
        inp: Post payload and export settings.
        theme_repo: Where saved themes live.

    Returns:
        ExportOutput with the document, or errors and no document.
    """
    export = Export(inp.settings, ThemeStore(theme_repo), inp.post)
    try:
        document_json = export.perform()
    except ExportError as e:
        logger.error("Export of post %s aborted: %s", inp.post.id, e)
        return ExportOutput(
            document_json=None,
            errors=[ExportValidationError(code=e.code, message=str(e))],
            success=False,
        )

    return ExportOutput(document_json=document_json)


def run(inp: ExportPostInput, *, theme_repo: ThemeRepoPort) -> ExportOutput:
    """
    Main entry point for the export component.
    """
    if isinstance(inp, ExportPostInput):
        return run_export(inp, theme_repo=theme_repo)
    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
