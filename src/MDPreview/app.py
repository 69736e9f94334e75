"""Streamlit UI for MDPreview."""

from __future__ import annotations

import logging

import streamlit as st

from MDPreview import token_store
from MDPreview.file_filter import compile_filter, filter_documents
from MDPreview.history import HistoryStore
from MDPreview.markdown_renderer import render_document
from MDPreview.models import AssetContext, AuthMode, RepoSnapshot
from MDPreview.providers.github import (
    AccessDeniedError,
    GitHubError,
    GitHubProvider,
)
from MDPreview.tree_builder import display_label, group_by_directory
from MDPreview.url_parser import RepoInputError, parse_repo_input

logger = logging.getLogger(__name__)

NETWORK_ERROR = "Network error. Check your connection."


def _qp(key: str, default: str = "") -> str:
    """Read a query parameter, returning *default* if absent."""
    params = st.query_params
    return params.get(key, default)


@st.cache_resource
def _provider() -> GitHubProvider:
    return GitHubProvider()


@st.cache_resource
def _history() -> HistoryStore:
    return HistoryStore()


def _error_message(exc: GitHubError) -> str:
    if exc.status_code is None:
        return NETWORK_ERROR
    return str(exc)


def main() -> None:
    st.set_page_config(
        page_title="MD Previewer",
        page_icon="📄",
        layout="wide",
    )

    # --- Header with settings popover ---
    header_left, header_right = st.columns([8, 1])
    with header_left:
        st.title("MD Previewer")
    with header_right:
        st.markdown("<div style='height: 1.5rem'></div>", unsafe_allow_html=True)
        with st.popover("⚙", use_container_width=True):
            token = _token_settings()

    history = _history()
    state = st.session_state

    # Open the repository from ?repo= or the last one viewed, once per session.
    if "started" not in state:
        state["started"] = True
        initial = _qp("repo") or history.last_repo
        if initial:
            _load_repo(initial, token, save_to_history=bool(_qp("repo")))

    with st.sidebar:
        _repo_form(token)
        modes = ["Documents", "Recent"]
        if token:
            modes += ["My repos", "My forks"]
        # A widget's key cannot be written after it renders, so _load_repo
        # leaves the requested view here for the next run.
        if "pending_view" in state:
            state["view"] = state.pop("pending_view")
        if state.get("view") not in modes:
            state["view"] = "Documents"
        mode = st.radio(
            "View", modes, key="view", horizontal=True, label_visibility="collapsed"
        )

        if state.get("error"):
            st.error(state["error"])

        if mode == "Recent":
            _recent_view(history, token)
        elif mode == "My repos":
            _user_repos_view(token, forks_only=False)
        elif mode == "My forks":
            _user_repos_view(token, forks_only=True)
        else:
            _documents_view(token)

    _content_pane()


def _token_settings() -> str | None:
    st.subheader("Settings")
    saved = token_store.load() or ""
    entered = st.text_input(
        "GitHub Token (optional)",
        value=_qp("token") or saved,
        type="password",
        help="Required for private repos and the My repos / My forks views. "
        "Increases the rate limit from 60 to 5,000 requests/hour.",
    )

    if token_store.is_available():
        remember = st.checkbox(
            "Save token to OS keychain",
            value=bool(saved),
            help="Stored in macOS Keychain or Windows Credential Manager.",
        )
        if remember and entered:
            token_store.save(entered.strip())
        elif saved and (not remember or not entered):
            token_store.delete()

    st.caption("Use the ⋮ menu → Settings to switch between light and dark themes.")
    return token_store.current_token(entered)


def _repo_form(token: str | None) -> None:
    with st.form("repo_form", clear_on_submit=True):
        raw = st.text_input("Repository", placeholder="owner/repo")
        submitted = st.form_submit_button("Load Repo", use_container_width=True)
    if submitted and raw.strip():
        _load_repo(raw, token, save_to_history=True)


def _load_repo(raw: str, token: str | None, save_to_history: bool) -> None:
    state = st.session_state
    state["error"] = None
    state["pending_view"] = "Documents"
    state.pop("snapshot", None)
    state.pop("content", None)

    try:
        ref = parse_repo_input(raw)
    except RepoInputError as exc:
        state["error"] = str(exc)
        return

    try:
        with st.spinner(f"Loading {ref.full_name}..."):
            snapshot = _provider().resolve(ref, token)
    except AccessDeniedError as exc:
        state["error"] = str(exc)
        if not token:
            state["error"] += " Add a GitHub token in Settings (⚙)."
        return
    except GitHubError as exc:
        logger.info("Failed to resolve %s: %s", ref.full_name, exc)
        state["error"] = _error_message(exc)
        return

    state["snapshot"] = snapshot
    if not snapshot.documents:
        state["error"] = "No Markdown files found in this repository."
    elif save_to_history:
        _history().add(snapshot.full_name)


def _fetch_selected(snapshot: RepoSnapshot, path: str, token: str | None) -> None:
    state = st.session_state
    current = state.get("content")
    if current and current["path"] == path:
        return

    document = snapshot.find(path)
    if document is None:
        return

    fetch_token = token if snapshot.auth_mode is AuthMode.AUTHENTICATED else None
    try:
        with st.spinner(f"Fetching {document.file_name}..."):
            text = _provider().fetch_document(snapshot, document, fetch_token)
    except GitHubError as exc:
        st.toast(f"Failed to load file: {_error_message(exc)}")
        return
    state["content"] = {"path": path, "text": text}


def _documents_view(token: str | None) -> None:
    snapshot: RepoSnapshot | None = st.session_state.get("snapshot")
    if snapshot is None:
        st.caption("Enter a repository to start.")
        return

    st.subheader(snapshot.full_name)
    st.caption(f"Branch: `{snapshot.branch}`")
    if snapshot.truncated:
        st.warning("This repository is very large; the file list may be incomplete.")
    if not snapshot.documents:
        return

    filter_raw = st.text_input(
        "Filter (regex, comma-separated)",
        placeholder=r"^docs/, README",
    )
    compiled, errors = compile_filter(filter_raw)
    for err in errors:
        st.error(f"Invalid regex: {err}")
    documents = filter_documents(snapshot.documents, compiled)

    selected = (st.session_state.get("content") or {}).get("path")
    for directory, docs in group_by_directory(documents).items():
        st.markdown(f"**{display_label(directory)}**")
        for doc in docs:
            label = f"▸ {doc.file_name}" if doc.path == selected else doc.file_name
            if st.button(label, key=f"doc:{doc.path}", use_container_width=True):
                _fetch_selected(snapshot, doc.path, token)
                st.rerun()


def _recent_view(history: HistoryStore, token: str | None) -> None:
    recent = history.recent
    if not recent:
        st.caption("No history yet.")
        return
    for full_name in recent:
        if st.button(full_name, key=f"recent:{full_name}", use_container_width=True):
            _load_repo(full_name, token, save_to_history=True)
            st.rerun()
    if st.button("🗑 Clear History", use_container_width=True):
        history.clear()
        st.rerun()


def _user_repos_view(token: str | None, forks_only: bool) -> None:
    provider = _provider()
    try:
        with st.spinner("Fetching your repositories..."):
            repos = provider.list_forks(token) if forks_only else provider.list_user_repos(token)
    except GitHubError as exc:
        st.error(_error_message(exc))
        return

    if not repos:
        st.caption("No forks found." if forks_only else "No repositories found.")
        return
    for repo in repos:
        if st.button(repo.full_name, key=f"user:{repo.full_name}", use_container_width=True):
            _load_repo(repo.full_name, token, save_to_history=True)
            st.rerun()


def _content_pane() -> None:
    snapshot: RepoSnapshot | None = st.session_state.get("snapshot")
    content = st.session_state.get("content")
    if snapshot is None or not content:
        st.markdown("### 📖")
        st.caption("Select a file to preview its content.")
        return

    document = snapshot.find(content["path"])
    if document is None:
        return

    st.subheader(document.file_name)
    st.caption(document.path)
    st.divider()
    context = AssetContext.for_document(snapshot, document)
    st.html(render_document(content["text"], context, raw_base=_provider().raw_base))


if __name__ == "__main__":
    main()
