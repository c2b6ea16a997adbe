"""Tracking of clients the user has authorized during the session.

Account management pages read this list to let users review and revoke
clients. Result generation only ever appends to it.
"""

from __future__ import annotations

from typing import Protocol


class ClientListTracker(Protocol):
    """Protocol for recording authorized client ids."""

    async def add(self, client_id: str) -> None:
        """Record client_id. Adding an id twice has no additional effect."""
        ...


class InMemoryClientList:
    """Ordered, duplicate-free client list held in process memory."""

    def __init__(self):
        self._clients: list[str] = []

    @property
    def clients(self) -> list[str]:
        return list(self._clients)

    async def add(self, client_id: str) -> None:
        if client_id not in self._clients:
            self._clients.append(client_id)
