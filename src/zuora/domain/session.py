"""Session: one authenticated connection to the remote service.

INVARIANT: a Session is either active or invalidated, never partially
valid. Invalidation is one-way; a fresh login creates a new Session.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, PrivateAttr


class Session(BaseModel):
    """Authenticated session token returned by ``login``."""

    key: str
    server_url: str | None = None
    username: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    _active: bool = PrivateAttr(default=True)

    @classmethod
    def generate(cls, result: dict[str, Any], *, username: str | None = None) -> Session | None:
        """Build a Session from a parsed login result, or None without a token."""
        key = result.get("Session")
        if not key:
            return None
        return cls(key=str(key), server_url=result.get("ServerUrl"), username=username)

    @property
    def active(self) -> bool:
        return self._active

    def invalidate(self) -> None:
        self._active = False

    @property
    def masked_key(self) -> str:
        """Session key with all but the last four characters hidden."""
        if len(self.key) <= 4:
            return "*" * len(self.key)
        return "*" * (len(self.key) - 4) + self.key[-4:]
