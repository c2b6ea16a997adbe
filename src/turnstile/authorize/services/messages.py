"""Sign-in message storage.

Messages are written when a login is required and read back by the login
page once the user has authenticated. Only the store-assigned id travels
through the browser, so ids must be URL-safe and never shared between two
messages.
"""

from __future__ import annotations

import logging
import secrets
import time
from dataclasses import dataclass
from typing import Protocol

from turnstile.authorize.models.errors import MessageStoreError
from turnstile.authorize.models.signin import SignInMessage

logger = logging.getLogger(__name__)


class MessageStore(Protocol):
    """Protocol for persisting sign-in messages by reference."""

    async def write(self, message: SignInMessage) -> str:
        """Persist message and return its unique, URL-safe id."""
        ...

    async def read(self, id: str) -> SignInMessage | None:
        """Return the stored message, or None if unknown or expired."""
        ...

    async def delete(self, id: str) -> None:
        """Discard the message once the login flow has consumed it."""
        ...


@dataclass(frozen=True)
class _StoredMessage:
    payload: str  # JSON
    expires_at: float  # Unix timestamp


class InMemoryMessageStore:
    """Message store held in process memory with time-based expiry.

    Messages are kept serialized so what is read back is an independent
    copy, matching the behavior of out-of-process stores.
    """

    def __init__(self, lifetime: float = 300.0, max_id_attempts: int = 5):
        """Initialize the message store.

        Args:
            lifetime: Seconds a message stays readable after being written
            max_id_attempts: Id allocation retries before giving up
        """
        self.lifetime = lifetime
        self.max_id_attempts = max_id_attempts
        self._messages: dict[str, _StoredMessage] = {}

    @property
    def messages(self) -> dict[str, SignInMessage]:
        """Snapshot of the stored, unexpired messages keyed by id."""
        now = time.time()
        return {
            id: SignInMessage.model_validate_json(stored.payload)
            for id, stored in self._messages.items()
            if stored.expires_at > now
        }

    async def write(self, message: SignInMessage) -> str:
        now = time.time()
        self._remove_expired(now)

        stored = _StoredMessage(
            payload=message.model_dump_json(),
            expires_at=now + self.lifetime,
        )

        # No await between the membership check and the insert, so
        # concurrent writers can never be handed the same id.
        for _ in range(self.max_id_attempts):
            id = secrets.token_urlsafe(32)
            if id not in self._messages:
                self._messages[id] = stored
                logger.debug(f"Stored sign-in message {id}")
                return id

        raise MessageStoreError(
            f"Could not allocate a unique message id after "
            f"{self.max_id_attempts} attempts"
        )

    async def read(self, id: str) -> SignInMessage | None:
        stored = self._messages.get(id)
        if stored is None:
            return None

        if stored.expires_at <= time.time():
            logger.warning(f"Sign-in message {id} has expired")
            del self._messages[id]
            return None

        return SignInMessage.model_validate_json(stored.payload)

    async def delete(self, id: str) -> None:
        self._messages.pop(id, None)

    def _remove_expired(self, now: float) -> None:
        expired = [
            id for id, stored in self._messages.items() if stored.expires_at <= now
        ]
        for id in expired:
            del self._messages[id]
        if expired:
            logger.debug(f"Removed {len(expired)} expired sign-in messages")
