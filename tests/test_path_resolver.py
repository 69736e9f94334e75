"""Tests for path_resolver module."""

import pytest

from MDPreview.models import AssetContext
from MDPreview.path_resolver import document_dir, is_absolute, resolve_asset_url

RAW = "https://raw.githubusercontent.com"


def _ctx(document_path: str = "docs/a/b.md") -> AssetContext:
    return AssetContext(owner="o", repo="r", branch="main", document_path=document_path)


class TestResolveAssetUrl:
    def test_dot_slash_relative_to_document_dir(self):
        assert resolve_asset_url("./img.png", _ctx()) == f"{RAW}/o/r/main/docs/a/img.png"

    def test_plain_relative_to_document_dir(self):
        assert resolve_asset_url("img/x.png", _ctx()) == f"{RAW}/o/r/main/docs/a/img/x.png"

    def test_document_at_root_has_no_dir_prefix(self):
        assert resolve_asset_url("pic.png", _ctx("README.md")) == f"{RAW}/o/r/main/pic.png"

    @pytest.mark.parametrize(
        "src",
        [
            "http://x.com/i.png",
            "https://x.com/i.png",
            "//cdn.example.com/i.png",
            "data:image/png;base64,AAAA",
        ],
    )
    def test_absolute_returned_unchanged(self, src):
        assert resolve_asset_url(src, _ctx()) == src
        assert resolve_asset_url(src, _ctx("README.md")) == src

    def test_parent_traversal_passed_through(self):
        assert resolve_asset_url("../../logo.png", _ctx()) == (
            f"{RAW}/o/r/main/docs/a/../../logo.png"
        )

    def test_leading_slash_is_repo_root(self):
        assert resolve_asset_url("/assets/logo.png", _ctx()) == (
            f"{RAW}/o/r/main/assets/logo.png"
        )

    def test_empty_and_anchor_unchanged(self):
        assert resolve_asset_url("", _ctx()) == ""
        assert resolve_asset_url("#top", _ctx()) == "#top"

    def test_only_one_dot_slash_stripped(self):
        assert resolve_asset_url("././a.png", _ctx("README.md")) == f"{RAW}/o/r/main/./a.png"

    def test_custom_raw_base(self):
        url = resolve_asset_url("a.png", _ctx("README.md"), raw_base="https://raw.example/")
        assert url == "https://raw.example/o/r/main/a.png"


class TestHelpers:
    def test_document_dir(self):
        assert document_dir("README.md") == ""
        assert document_dir("docs/a/b.md") == "docs/a"

    def test_is_absolute(self):
        assert is_absolute("https://x")
        assert is_absolute("//x")
        assert not is_absolute("img.png")
        assert not is_absolute("./http.png")
