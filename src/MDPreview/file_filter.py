"""Markdown document detection and sidebar path filtering."""

from __future__ import annotations

import re
from typing import Iterable

from MDPreview.models import DocumentRef, TreeBlob, TreeNode

# Case-sensitive on purpose: ".MD" and ".markdown" files are not listed.
MARKDOWN_SUFFIX = ".md"


def is_markdown_path(path: str) -> bool:
    """Return True if *path* names a Markdown document."""
    return path.endswith(MARKDOWN_SUFFIX)


def markdown_blobs(nodes: Iterable[TreeNode]) -> list[TreeBlob]:
    """Keep file entries with a Markdown path, in tree order."""
    return [
        node
        for node in nodes
        if isinstance(node, TreeBlob) and is_markdown_path(node.path)
    ]


# ---------------------------------------------------------------------------
# Sidebar filter
# ---------------------------------------------------------------------------


def parse_pattern_input(raw: str) -> list[str]:
    """Split a comma-separated filter string into patterns.

    Surrounding whitespace is stripped and empty segments are dropped.
    """
    if not raw:
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


def compile_filter(raw: str) -> tuple[list[re.Pattern[str]], list[str]]:
    """Compile the patterns in *raw*.

    Returns ``(compiled, errors)``. When any pattern is invalid *compiled*
    is empty so the caller never filters with half a pattern list.
    """
    compiled: list[re.Pattern[str]] = []
    errors: list[str] = []
    for p in parse_pattern_input(raw):
        try:
            compiled.append(re.compile(p))
        except re.error as exc:
            errors.append(f"`{p}`: {exc}")
    if errors:
        return [], errors
    return compiled, errors


def filter_documents(
    documents: Iterable[DocumentRef],
    compiled: list[re.Pattern[str]],
) -> list[DocumentRef]:
    """Keep documents whose path matches any pattern (all when no patterns)."""
    if not compiled:
        return list(documents)
    return [d for d in documents if any(p.search(d.path) for p in compiled)]
