"""
Markup helpers for content fragments.

Fragments arrive as small pieces of HTML produced by the upstream content
parser. These helpers answer the questions the builders ask about them:
is there any text, which alignment was requested, and what the text looks
like in each output format.
"""

from __future__ import annotations

import html
import re

TAG_PATTERN = re.compile(r"<(/?)(\w+)([^>]*)>", re.IGNORECASE)
ATTR_PATTERN = re.compile(r'(\w[\w-]*)\s*=\s*(?:"([^"]*)"|\'([^\']*)\'|(\S+))', re.IGNORECASE)

ALIGNMENTS = ("left", "center", "right", "justified")

# Inline/block tags the target API accepts in html-formatted text
ALLOWED_HTML_TAGS = frozenset(
    {
        "p", "a", "b", "strong", "i", "em", "code", "del", "s", "sub", "sup",
        "br", "ul", "ol", "li", "blockquote", "pre", "samp",
    }
)

_STYLE_ALIGN = re.compile(r"text-align\s*:\s*(left|center|right|justify)", re.IGNORECASE)
_ATTR_ALIGN = re.compile(r"""\balign\s*=\s*["']?(left|center|right|justify)""", re.IGNORECASE)
_CLASS_ALIGN = re.compile(r"has-text-align-(left|center|right|justify)", re.IGNORECASE)


def parse_attributes(attr_string: str) -> dict[str, str]:
    """Parse HTML attributes from a tag's attribute string."""
    attrs = {}
    for match in ATTR_PATTERN.finditer(attr_string):
        name = match.group(1).lower()
        value = match.group(2) or match.group(3) or match.group(4) or ""
        attrs[name] = value
    return attrs


def strip_tags(markup: str) -> str:
    """Remove all tags and decode entities."""
    return html.unescape(TAG_PATTERN.sub("", markup))


def has_text(markup: str | None) -> bool:
    """True when the markup contains visible text after stripping tags and whitespace."""
    if not markup:
        return False
    return bool(strip_tags(markup).replace("\xa0", " ").strip())


def _normalize_alignment(value: str) -> str:
    value = value.lower()
    return "justified" if value == "justify" else value


def detect_alignment(markup: str | None) -> str | None:
    """
    Find an explicit alignment request in markup.

    Checked in order: inline ``text-align`` style, legacy ``align``
    attribute, editor ``has-text-align-*`` class.
    """
    if not markup:
        return None
    for pattern in (_STYLE_ALIGN, _ATTR_ALIGN, _CLASS_ALIGN):
        match = pattern.search(markup)
        if match:
            return _normalize_alignment(match.group(1))
    return None


def clean_html(markup: str) -> str:
    """
    Reduce markup to the tags the target API renders.

    Unknown tags are dropped but their text is kept. Attributes are removed
    except ``href`` on links.
    """

    def replace(match: re.Match[str]) -> str:
        closing, tag, attrs = match.group(1), match.group(2).lower(), match.group(3)
        if tag not in ALLOWED_HTML_TAGS:
            return ""
        if closing:
            return f"</{tag}>"
        if tag == "a":
            href = parse_attributes(attrs).get("href")
            if href:
                return f'<a href="{html.escape(href, quote=True)}">'
        if tag == "br":
            return "<br>"
        return f"<{tag}>"

    return TAG_PATTERN.sub(replace, markup).strip()


_MARKDOWN_OPEN = {"strong": "**", "b": "**", "em": "_", "i": "_", "code": "`"}


def html_to_markdown(markup: str) -> str:
    """Convert inline markup to markdown markers and strip everything else."""
    link_stack: list[str] = []

    def replace(match: re.Match[str]) -> str:
        closing, tag, attrs = match.group(1), match.group(2).lower(), match.group(3)

        if tag in _MARKDOWN_OPEN:
            return _MARKDOWN_OPEN[tag]
        if tag == "a":
            if closing:
                href = link_stack.pop() if link_stack else ""
                return f"]({href})" if href else ""
            href = parse_attributes(attrs).get("href", "")
            link_stack.append(href)
            return "[" if href else ""
        if tag == "br":
            return "\n"
        if tag in ("ul", "ol"):
            return "\n"
        if tag == "li":
            return "\n" if closing else "- "
        if tag == "p" and closing:
            return "\n\n"
        return ""

    text = html.unescape(TAG_PATTERN.sub(replace, markup))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
