"""Shared-password sign-in.

Everyone uses the same password and picks a free-text username; the username
only scopes which question sets are listed and deletable. This is not a
security boundary.
"""

from __future__ import annotations

import hmac
from typing import Optional, Protocol


class Authenticator(Protocol):
    def authenticate(self, username: str, password: str) -> Optional[str]: ...


class SharedPasswordAuthenticator:
    def __init__(self, shared_password: str) -> None:
        self._password = shared_password

    def authenticate(self, username: str, password: str) -> Optional[str]:
        """Return the normalized username on success, else ``None``."""
        name = (username or "").strip()
        if not name:
            return None
        if not hmac.compare_digest(
            (password or "").encode("utf-8"), self._password.encode("utf-8")
        ):
            return None
        return name
