"""Localization collaborator for error page messages."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class LocalizationService(Protocol):
    """Protocol for looking up display text for message codes."""

    async def get_message(self, code: str) -> str | None:
        """Return the translated text for code, or None if there is none."""
        ...


class DictLocalizationService:
    """Localization backed by a static code to text mapping."""

    def __init__(self, messages: Mapping[str, str] | None = None):
        self._messages = dict(messages or {})

    async def get_message(self, code: str) -> str | None:
        return self._messages.get(code)
