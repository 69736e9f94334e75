"""GitHub token lookup and OS keychain storage (macOS Keychain / Windows Credential Manager)."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

_SERVICE_NAME = "MDPreview"
TOKEN_KEY = "github_token"
ENV_VAR = "GITHUB_TOKEN"
_AVAILABLE = False

try:
    import keyring

    _AVAILABLE = True
except Exception:
    logger.warning("keyring not available; token persistence disabled")


def is_available() -> bool:
    """Return True if the OS keychain is usable."""
    return _AVAILABLE


def load(key: str = TOKEN_KEY) -> str | None:
    """Load a token from the OS keychain. Returns None on failure."""
    if not _AVAILABLE:
        return None
    try:
        return keyring.get_password(_SERVICE_NAME, key)
    except Exception:
        logger.warning("Failed to read %s from keyring", key)
        return None


def save(value: str, key: str = TOKEN_KEY) -> bool:
    """Save a token to the OS keychain. Returns True on success."""
    if not _AVAILABLE or not value:
        return False
    try:
        keyring.set_password(_SERVICE_NAME, key, value)
        return True
    except Exception:
        logger.warning("Failed to save %s to keyring", key)
        return False


def delete(key: str = TOKEN_KEY) -> bool:
    """Delete a token from the OS keychain. Returns True on success."""
    if not _AVAILABLE:
        return False
    try:
        keyring.delete_password(_SERVICE_NAME, key)
        return True
    except Exception:
        return False


def current_token(explicit: str | None = None) -> str | None:
    """Return the token to use for the next request, or None.

    Lookup order: *explicit* (settings field / query parameter), the
    keychain, then the ``GITHUB_TOKEN`` environment variable. Blank values
    count as absent.
    """
    for candidate in (explicit, load(), os.environ.get(ENV_VAR)):
        if candidate and candidate.strip():
            return candidate.strip()
    return None
