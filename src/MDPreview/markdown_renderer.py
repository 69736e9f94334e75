"""Render fetched Markdown to HTML with image references made absolute."""

from __future__ import annotations

import re
from typing import Callable, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from MDPreview.models import AssetContext
from MDPreview.path_resolver import RAW_BASE, resolve_asset_url

# src= attribute of an <img> tag; the lookbehind skips data-src and friends
_HTML_IMG_SRC_RE = re.compile(
    r"(?P<head><img\b[^>]*?(?<![\w-])src\s*=\s*)(?P<quote>[\"'])(?P<src>.*?)(?P=quote)",
    re.IGNORECASE | re.DOTALL,
)


def _parser() -> MarkdownIt:
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


def rewrite_html_images(html: str, resolve: Callable[[str], str]) -> str:
    """Resolve the ``src`` of every ``<img>`` tag in a raw HTML fragment."""
    return _HTML_IMG_SRC_RE.sub(
        lambda m: f"{m['head']}{m['quote']}{resolve(m['src'])}{m['quote']}", html
    )


def rewrite_image_tokens(tokens: Sequence[Token], resolve: Callable[[str], str]) -> None:
    """Rewrite image sources in a parsed token stream, in place.

    Only ``image`` tokens and raw HTML tokens are touched, so code spans
    and fenced or indented code blocks keep their text.
    """
    for token in tokens:
        if token.type in ("html_block", "html_inline"):
            token.content = rewrite_html_images(token.content, resolve)
        elif token.type == "image":
            token.attrSet("src", resolve(str(token.attrGet("src") or "")))
        if token.children:
            rewrite_image_tokens(token.children, resolve)


def render_document(
    text: str,
    context: AssetContext,
    *,
    raw_base: str = RAW_BASE,
) -> str:
    """Return *text* rendered as HTML, with image URLs resolved against *context*.

    Markdown images (inline and reference style) and HTML ``<img>`` tags
    are resolved; link targets are left as written.
    """

    def resolve(src: str) -> str:
        return resolve_asset_url(src, context, raw_base=raw_base)

    md = _parser()
    tokens = md.parse(text)
    rewrite_image_tokens(tokens, resolve)
    return md.renderer.render(tokens, md.options, {})
