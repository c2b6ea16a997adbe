"""Sign-in message passed to the login page by reference.

The message describes which authorization flow to resume once the user has
authenticated. It is persisted by a message store and only its id travels
through the browser.
"""

from __future__ import annotations

import time

from pydantic import BaseModel, Field


class SignInMessage(BaseModel):
    """Deferred authentication context."""

    return_url: str | None = None
    client_id: str | None = None
    idp: str | None = None
    tenant: str | None = None
    display_mode: str | None = None
    ui_locales: str | None = None
    login_hint: str | None = None
    acr_values: list[str] = Field(default_factory=list)

    created_at: float = Field(default_factory=time.time)  # Unix timestamp
