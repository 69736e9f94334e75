"""Tests for tree_builder module."""

from MDPreview.models import DocumentRef
from MDPreview.tree_builder import display_label, group_by_directory


def _docs(*paths: str) -> list[DocumentRef]:
    return [DocumentRef(path=p, blob_url="", content_url="") for p in paths]


class TestGroupByDirectory:
    def test_empty(self):
        assert group_by_directory([]) == {}

    def test_root_first_then_first_seen_order(self):
        docs = _docs("docs/b.md", "README.md", "api/x.md", "docs/a.md", "CHANGELOG.md")
        groups = group_by_directory(docs)

        assert list(groups) == ["", "docs", "api"]
        assert [d.path for d in groups[""]] == ["README.md", "CHANGELOG.md"]
        assert [d.path for d in groups["docs"]] == ["docs/b.md", "docs/a.md"]

    def test_nested_directories_are_separate_groups(self):
        groups = group_by_directory(_docs("docs/a.md", "docs/api/b.md"))
        assert list(groups) == ["docs", "docs/api"]

    def test_no_root_documents(self):
        groups = group_by_directory(_docs("docs/a.md"))
        assert "" not in groups


class TestDisplayLabel:
    def test_root(self):
        assert display_label("") == "/"

    def test_directory(self):
        assert display_label("docs/api") == "docs/api/"
