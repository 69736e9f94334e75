"""Parse user input into a repository reference."""

from __future__ import annotations

from urllib.parse import urlparse

from MDPreview.models import RepoRef


class RepoInputError(Exception):
    """Raised when the input does not name an owner/repo pair."""


def parse_repo_input(raw: str) -> RepoRef:
    """Parse ``owner/repo`` or a GitHub URL and return a RepoRef.

    Supported formats:
      - owner/repo
      - github.com/owner/repo
      - https://github.com/owner/repo(.git)
      - https://github.com/owner/repo/tree/branch/...  (branch is ignored)
    """
    text = raw.strip()
    if not text:
        raise RepoInputError("Repository is empty.")

    if "://" in text:
        path = urlparse(text).path
    elif text.startswith("github.com/"):
        path = text.removeprefix("github.com/")
    else:
        path = text

    parts = [p for p in path.split("/") if p]
    if len(parts) >= 4 and parts[2] in ("tree", "blob"):
        parts = parts[:2]
    if len(parts) < 2:
        raise RepoInputError('Please use the format "owner/repo".')

    owner, repo = parts[-2], parts[-1].removesuffix(".git")
    if not repo:
        raise RepoInputError('Please use the format "owner/repo".')
    return RepoRef(owner=owner, name=repo)
