"""Credential Stores — durable slot for the client's bearer token.

Invariants:
    - load() returns None when nothing is stored (never an empty string)
    - clear() is idempotent
    - The file store writes the token with owner-only permissions
"""

import os
from pathlib import Path


class FileCredentialStore:
    """Persists the credential to a single file so sessions survive restarts."""

    def __init__(self, path: str | Path):
        self._path = Path(path).expanduser()

    def load(self) -> str | None:
        try:
            text = self._path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return text or None

    def save(self, credential: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(credential, encoding="utf-8")
        os.chmod(self._path, 0o600)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


class MemoryCredentialStore:
    """In-process store for tests and short-lived tools."""

    def __init__(self, credential: str | None = None):
        self._credential = credential

    def load(self) -> str | None:
        return self._credential or None

    def save(self, credential: str) -> None:
        self._credential = credential

    def clear(self) -> None:
        self._credential = None
