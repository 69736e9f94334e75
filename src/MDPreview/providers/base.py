"""Abstract base class for document providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from MDPreview.models import AuthMode, DocumentRef, RepoRef, RepoSnapshot, UserRepoSummary


class DocumentProvider(ABC):
    """Base class for hosting services that serve Markdown documents."""

    @abstractmethod
    def resolve(self, ref: RepoRef, token: str | None = None) -> RepoSnapshot:
        """Resolve the default branch and list the repository's documents."""

    @abstractmethod
    def fetch_text(
        self,
        content_url: str,
        token: str | None = None,
        raw: bool | None = None,
    ) -> str:
        """Fetch the raw text behind a document's content URL.

        *raw* requests raw-content negotiation; None lets the provider decide.
        """

    @abstractmethod
    def list_user_repos(self, token: str | None = None) -> list[UserRepoSummary]:
        """List the signed-in user's repositories, most recently updated first."""

    def fetch_document(
        self,
        snapshot: RepoSnapshot,
        document: DocumentRef,
        token: str | None = None,
    ) -> str:
        """Fetch *document* from *snapshot*.

        An authenticated snapshot addresses the contents endpoint, so raw
        negotiation is always requested for it, with or without *token*.
        """
        raw = snapshot.auth_mode is AuthMode.AUTHENTICATED
        return self.fetch_text(document.content_url, token, raw=raw)

    def list_forks(self, token: str | None = None) -> list[UserRepoSummary]:
        """Return only the forks among the user's repositories.

        Without a token this is an empty list and no request is made.
        """
        if not token:
            return []
        return [repo for repo in self.list_user_repos(token) if repo.is_fork]
