"""Group documents by directory for the sidebar."""

from __future__ import annotations

from typing import Iterable

from MDPreview.models import DocumentRef
from MDPreview.path_resolver import document_dir


def group_by_directory(documents: Iterable[DocumentRef]) -> dict[str, list[DocumentRef]]:
    """Map each directory ("" for the repo root) to its documents.

    Root documents come first; other directories keep the order in which
    they first appear, and documents keep their tree order.

    Example:
        README.md, docs/a.md, docs/api/b.md
        -> {"": [README.md], "docs": [docs/a.md], "docs/api": [docs/api/b.md]}
    """
    groups: dict[str, list[DocumentRef]] = {}
    for doc in documents:
        groups.setdefault(document_dir(doc.path), []).append(doc)

    if "" in groups:
        root = groups.pop("")
        return {"": root, **groups}
    return groups


def display_label(directory: str) -> str:
    return f"{directory}/" if directory else "/"
