"""Data classes for MDPreview."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class AuthMode(Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"

    @classmethod
    def for_token(cls, token: str | None) -> AuthMode:
        return cls.AUTHENTICATED if token else cls.ANONYMOUS


@dataclass(frozen=True)
class RepoRef:
    owner: str
    name: str

    def __post_init__(self) -> None:
        if not self.owner or not self.name:
            raise ValueError("Both owner and repository name are required.")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class TreeBlob:
    path: str
    url: str = ""


@dataclass(frozen=True)
class TreeDir:
    path: str


TreeNode = TreeBlob | TreeDir


@dataclass(frozen=True)
class DocumentRef:
    path: str
    blob_url: str
    content_url: str

    @property
    def file_name(self) -> str:
        return self.path.rsplit("/", maxsplit=1)[-1]


@dataclass(frozen=True)
class RepoSnapshot:
    owner: str
    name: str
    branch: str
    documents: tuple[DocumentRef, ...] = field(default_factory=tuple)
    auth_mode: AuthMode = AuthMode.ANONYMOUS
    truncated: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def find(self, path: str) -> DocumentRef | None:
        for doc in self.documents:
            if doc.path == path:
                return doc
        return None


@dataclass(frozen=True)
class AssetContext:
    owner: str
    repo: str
    branch: str
    document_path: str

    @classmethod
    def for_document(cls, snapshot: RepoSnapshot, document: DocumentRef) -> AssetContext:
        return cls(
            owner=snapshot.owner,
            repo=snapshot.name,
            branch=snapshot.branch,
            document_path=document.path,
        )


@dataclass(frozen=True)
class UserRepoSummary:
    full_name: str
    name: str
    owner: str
    is_fork: bool = False
