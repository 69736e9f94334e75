"""GitHub REST API provider."""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

import requests

from MDPreview.file_filter import markdown_blobs
from MDPreview.models import (
    AuthMode,
    DocumentRef,
    RepoRef,
    RepoSnapshot,
    TreeBlob,
    TreeDir,
    TreeNode,
    UserRepoSummary,
)
from MDPreview.path_resolver import RAW_BASE
from MDPreview.providers.base import DocumentProvider

logger = logging.getLogger(__name__)

RAW_ACCEPT = "application/vnd.github.raw+json"


class GitHubError(Exception):
    """Raised for GitHub API errors.

    ``status_code`` is None when the request never got an HTTP response
    (connection refused, DNS failure, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(GitHubError):
    """The repository does not exist (or is invisible to this token)."""


class AccessDeniedError(GitHubError):
    """HTTP 403: a private repository without credentials, or rate limiting."""


class FetchError(GitHubError):
    """Metadata or tree retrieval failed."""


class ListError(FetchError):
    """Listing the user's repositories failed."""


class ContentFetchError(GitHubError):
    """Fetching a document's text failed."""


def _normalize_token(token: str | None) -> str | None:
    if token is None:
        return None
    return token.strip() or None


class GitHubProvider(DocumentProvider):
    """Provider for GitHub repositories using the REST API."""

    API_BASE = "https://api.github.com"
    RAW_BASE = RAW_BASE
    TIMEOUT = 30

    def __init__(self, api_base: str | None = None, raw_base: str | None = None):
        self.api_base = (api_base or self.API_BASE).rstrip("/")
        self.raw_base = (raw_base or self.RAW_BASE).rstrip("/")
        self.session = requests.Session()
        self.session.headers["Accept"] = "application/vnd.github+json"
        self.session.headers["User-Agent"] = "MDPreview/1.0"

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _auth_headers(token: str | None) -> dict[str, str]:
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def _get(
        self,
        url: str,
        token: str | None,
        error_cls: type[GitHubError],
        params: dict | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """GET *url*, turning transport failures into *error_cls*."""
        request_headers = self._auth_headers(token)
        if headers:
            request_headers.update(headers)
        try:
            resp = self.session.get(
                url, params=params, headers=request_headers, timeout=self.TIMEOUT
            )
        except requests.RequestException as exc:
            raise error_cls(f"Network error while requesting {url}: {exc}") from exc
        logger.debug("GET %s -> %s", url, resp.status_code)
        return resp

    @staticmethod
    def _json(
        resp: requests.Response,
        error_cls: type[GitHubError],
        expected: type = dict,
    ):
        """Decode a 2xx body, raising *error_cls* unless it is an *expected*."""
        try:
            data = resp.json()
        except ValueError as exc:
            raise error_cls(
                f"Unexpected non-JSON response from {resp.url}.",
                status_code=resp.status_code,
            ) from exc
        if not isinstance(data, expected):
            raise error_cls(
                f"Unexpected response shape from {resp.url}: "
                f"expected {expected.__name__}, got {type(data).__name__}.",
                status_code=resp.status_code,
            )
        return data

    # ------------------------------------------------------------------
    # URL construction
    # ------------------------------------------------------------------

    def raw_content_url(self, owner: str, repo: str, branch: str, path: str) -> str:
        return f"{self.raw_base}/{owner}/{repo}/{branch}/{quote(path, safe='/')}"

    def contents_api_url(self, owner: str, repo: str, branch: str, path: str) -> str:
        encoded = "/".join(quote(segment, safe="") for segment in path.split("/"))
        query = urlencode({"ref": branch})
        return f"{self.api_base}/repos/{owner}/{repo}/contents/{encoded}?{query}"

    def is_contents_api_url(self, url: str) -> bool:
        return url.startswith(f"{self.api_base}/repos/") and "/contents/" in url

    def content_url(
        self, mode: AuthMode, owner: str, repo: str, branch: str, path: str
    ) -> str:
        if mode is AuthMode.AUTHENTICATED:
            return self.contents_api_url(owner, repo, branch, path)
        return self.raw_content_url(owner, repo, branch, path)

    # ------------------------------------------------------------------
    # Repository resolution
    # ------------------------------------------------------------------

    def get_default_branch(self, ref: RepoRef, token: str | None = None) -> str:
        url = f"{self.api_base}/repos/{ref.owner}/{ref.name}"
        resp = self._get(url, token, FetchError)

        if resp.status_code == 404:
            raise NotFoundError(
                f"Repository {ref.full_name} not found. Check the name, "
                "or sign in with a token for private repos.",
                status_code=404,
            )
        if resp.status_code == 403:
            raise AccessDeniedError(
                "Access denied. The API rate limit may be exceeded, or the "
                "repository is private and needs a token with access to it.",
                status_code=403,
            )
        if resp.status_code == 401:
            raise FetchError(
                "Authentication failed. Check your GitHub token.",
                status_code=401,
            )
        if not resp.ok:
            raise FetchError(
                f"Failed to fetch repository details (HTTP {resp.status_code}).",
                status_code=resp.status_code,
            )

        branch = self._json(resp, FetchError).get("default_branch")
        if not branch or not isinstance(branch, str):
            raise FetchError(
                "Repository metadata has no default branch.",
                status_code=resp.status_code,
            )
        return branch

    def list_tree(
        self, ref: RepoRef, branch: str, token: str | None = None
    ) -> tuple[list[TreeNode], bool]:
        """Return ``(nodes, truncated)`` from one recursive tree request."""
        url = f"{self.api_base}/repos/{ref.owner}/{ref.name}/git/trees/{branch}"
        resp = self._get(url, token, FetchError, params={"recursive": "1"})
        if not resp.ok:
            raise FetchError(
                f"Failed to fetch file tree (HTTP {resp.status_code}).",
                status_code=resp.status_code,
            )

        data = self._json(resp, FetchError)
        tree = data.get("tree", [])
        if not isinstance(tree, list):
            raise FetchError(
                "Unexpected file tree response: 'tree' is not a list.",
                status_code=resp.status_code,
            )
        nodes: list[TreeNode] = []
        for item in tree:
            if not isinstance(item, dict):
                raise FetchError(
                    "Unexpected file tree entry.", status_code=resp.status_code
                )
            node = _parse_tree_node(item)
            if node is not None:
                nodes.append(node)
        return nodes, bool(data.get("truncated"))

    def resolve(self, ref: RepoRef, token: str | None = None) -> RepoSnapshot:
        token = _normalize_token(token)
        mode = AuthMode.for_token(token)

        branch = self.get_default_branch(ref, token)
        nodes, truncated = self.list_tree(ref, branch, token)
        if truncated:
            logger.warning(
                "Tree for %s@%s is truncated; some documents may be missing",
                ref.full_name,
                branch,
            )

        documents = tuple(
            DocumentRef(
                path=blob.path,
                blob_url=blob.url,
                content_url=self.content_url(
                    mode, ref.owner, ref.name, branch, blob.path
                ),
            )
            for blob in markdown_blobs(nodes)
        )
        return RepoSnapshot(
            owner=ref.owner,
            name=ref.name,
            branch=branch,
            documents=documents,
            auth_mode=mode,
            truncated=truncated,
        )

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def fetch_text(
        self,
        content_url: str,
        token: str | None = None,
        raw: bool | None = None,
    ) -> str:
        """Fetch the text behind *content_url*.

        *raw* forces the raw ``Accept`` negotiation on or off. By default it
        is sent with a token and for any contents-endpoint URL, which would
        otherwise answer with a base64 JSON envelope.
        """
        token = _normalize_token(token)
        if raw is None:
            raw = bool(token) or self.is_contents_api_url(content_url)
        headers = {"Accept": RAW_ACCEPT} if raw else None
        resp = self._get(content_url, token, ContentFetchError, headers=headers)
        if not resp.ok:
            raise ContentFetchError(
                f"Failed to fetch markdown content (HTTP {resp.status_code}).",
                status_code=resp.status_code,
            )
        if resp.encoding is None or resp.encoding.lower() == "iso-8859-1":
            # raw.githubusercontent.com serves text/plain without a charset
            resp.encoding = "utf-8"
        return resp.text

    # ------------------------------------------------------------------
    # User repositories
    # ------------------------------------------------------------------

    def list_user_repos(self, token: str | None = None) -> list[UserRepoSummary]:
        token = _normalize_token(token)
        if not token:
            return []

        url = f"{self.api_base}/user/repos"
        resp = self._get(
            url, token, ListError, params={"sort": "updated", "per_page": "100"}
        )
        if not resp.ok:
            raise ListError(
                f"Failed to list your repositories (HTTP {resp.status_code}).",
                status_code=resp.status_code,
            )

        data = self._json(resp, ListError, expected=list)
        repos: list[UserRepoSummary] = []
        for item in data:
            if not isinstance(item, dict) or not item.get("full_name") or not item.get("name"):
                raise ListError(
                    "Unexpected repository entry in the response.",
                    status_code=resp.status_code,
                )
            owner = item.get("owner") or {}
            repos.append(
                UserRepoSummary(
                    full_name=item["full_name"],
                    name=item["name"],
                    owner=owner.get("login", "") if isinstance(owner, dict) else "",
                    is_fork=bool(item.get("fork")),
                )
            )
        return repos


def _parse_tree_node(item: dict) -> TreeNode | None:
    """Map a raw tree entry onto a node variant; submodules are dropped."""
    kind = item.get("type")
    path = item.get("path", "")
    if not path:
        return None
    if kind == "blob":
        return TreeBlob(path=path, url=item.get("url", ""))
    if kind == "tree":
        return TreeDir(path=path)
    return None
