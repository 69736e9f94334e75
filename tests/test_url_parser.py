"""Tests for url_parser module."""

import pytest

from MDPreview.url_parser import RepoInputError, parse_repo_input


class TestParseRepoInput:
    def test_owner_repo(self):
        ref = parse_repo_input("octocat/Hello-World")
        assert ref.owner == "octocat"
        assert ref.name == "Hello-World"

    def test_whitespace_and_slashes_ignored(self):
        ref = parse_repo_input("  /octocat//hello/  ")
        assert ref.full_name == "octocat/hello"

    def test_github_url(self):
        ref = parse_repo_input("https://github.com/owner/repo")
        assert ref.full_name == "owner/repo"

    def test_github_url_with_git_suffix(self):
        assert parse_repo_input("https://github.com/owner/repo.git").name == "repo"

    def test_github_url_without_scheme(self):
        assert parse_repo_input("github.com/owner/repo/").full_name == "owner/repo"

    def test_tree_url_uses_repo_only(self):
        ref = parse_repo_input("https://github.com/owner/repo/tree/feature/x")
        assert ref.full_name == "owner/repo"

    def test_blob_url_uses_repo_only(self):
        ref = parse_repo_input("https://github.com/owner/repo/blob/main/docs/a.md")
        assert ref.full_name == "owner/repo"

    def test_extra_parts_use_last_two(self):
        assert parse_repo_input("a/b/c").full_name == "b/c"

    def test_case_preserved(self):
        assert parse_repo_input("MyOrg/MyRepo").full_name == "MyOrg/MyRepo"

    def test_single_part_raises(self):
        with pytest.raises(RepoInputError, match="owner/repo"):
            parse_repo_input("justarepo")

    def test_empty_raises(self):
        with pytest.raises(RepoInputError):
            parse_repo_input("   ")

    def test_host_only_url_raises(self):
        with pytest.raises(RepoInputError):
            parse_repo_input("https://github.com/")
