"""Resolve asset references found in a document to absolute URLs."""

from __future__ import annotations

import re

from MDPreview.models import AssetContext

RAW_BASE = "https://raw.githubusercontent.com"

# "http:", "https:", "data:", "mailto:" ... or protocol-relative "//host"
_ABSOLUTE_RE = re.compile(r"^(?:[A-Za-z][A-Za-z0-9+.\-]*:|//)")


def is_absolute(src: str) -> bool:
    return bool(_ABSOLUTE_RE.match(src))


def document_dir(document_path: str) -> str:
    """Return the directory part of *document_path* ("" at the repo root)."""
    if "/" not in document_path:
        return ""
    return document_path.rsplit("/", maxsplit=1)[0]


def resolve_asset_url(
    raw_src: str,
    context: AssetContext,
    *,
    raw_base: str = RAW_BASE,
) -> str:
    """Turn *raw_src* into an absolute raw-content URL.

    Absolute and protocol-relative URLs, empty references and in-page
    anchors come back unchanged. Otherwise the reference is resolved
    against the directory of ``context.document_path``:

        >>> ctx = AssetContext("o", "r", "main", "docs/a/b.md")
        >>> resolve_asset_url("./img.png", ctx)
        'https://raw.githubusercontent.com/o/r/main/docs/a/img.png'

    A leading ``/`` addresses the repository root. ``..`` segments are
    left in place; the raw host collapses them.
    """
    if not raw_src or raw_src.startswith("#") or is_absolute(raw_src):
        return raw_src

    src = raw_src.removeprefix("./")
    if src.startswith("/"):
        dir_path = ""
        src = src.lstrip("/")
    else:
        dir_path = document_dir(context.document_path)

    base = f"{raw_base.rstrip('/')}/{context.owner}/{context.repo}/{context.branch}"
    if dir_path:
        return f"{base}/{dir_path}/{src}"
    return f"{base}/{src}"
