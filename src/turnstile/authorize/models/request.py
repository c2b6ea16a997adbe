"""Validated authorization request and response models.

The request has already passed protocol validation by the time it reaches
result generation; these models only carry what is needed to decide how
the browser is told what happened next.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from turnstile.authorize.models.errors import InvalidResponseModeError

PROMPT_NONE = "none"


class ResponseMode(str, Enum):
    """How authorization result parameters are delivered (OAuth 2.0 Multiple
    Response Type Encoding Practices, Form Post Response Mode)."""

    QUERY = "query"
    FRAGMENT = "fragment"
    FORM_POST = "form_post"

    @classmethod
    def parse(cls, value: str | ResponseMode | None) -> ResponseMode:
        """Convert a boundary string into a response mode.

        Raises:
            InvalidResponseModeError: If value is not a supported mode
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidResponseModeError(value) from None


class ErrorType(str, Enum):
    """Who caused an authorization error."""

    USER = "user"  # end-user mistake, no safe redirect target
    CLIENT = "client"  # relying party misconfiguration

    @classmethod
    def _missing_(cls, value: object) -> ErrorType | None:
        # Accept "User" / "Client" spellings arriving from other layers
        if isinstance(value, str):
            for member in cls:
                if member.value == value.lower():
                    return member
        return None


class Client(BaseModel):
    """Registered client metadata needed for result generation."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_name: str | None = None


class ValidatedAuthorizeRequest(BaseModel):
    """Immutable record of a parsed and validated authorize request."""

    model_config = ConfigDict(frozen=True)

    response_mode: str
    client_id: str
    client: Client
    redirect_uri: str | None = None
    state: str | None = None
    subject: str | None = None
    prompt_mode: str | None = None

    @property
    def is_prompt_none(self) -> bool:
        return self.prompt_mode == PROMPT_NONE


class AuthorizeResponse(BaseModel):
    """Protocol parameters to deliver back to the client.

    Token and code values are opaque here. The state is always echoed from
    the request.
    """

    model_config = ConfigDict(frozen=True)

    request: ValidatedAuthorizeRequest
    code: str | None = None
    id_token: str | None = None
    access_token: str | None = None
    token_type: str | None = None
    expires_in: int | None = None
    scope: str | None = None
    session_state: str | None = None
    error: str | None = None
    error_description: str | None = None

    @property
    def redirect_uri(self) -> str | None:
        return self.request.redirect_uri

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_parameters(self) -> dict[str, Any]:
        """Build the name/value pairs to encode into the response."""
        if self.is_error:
            params = {
                "error": self.error,
                "error_description": self.error_description,
            }
        else:
            params = {
                "code": self.code,
                "id_token": self.id_token,
                "access_token": self.access_token,
                "token_type": self.token_type,
                "expires_in": self.expires_in,
                "scope": self.scope,
            }

        params["state"] = self.request.state
        params["session_state"] = self.session_state

        return {name: value for name, value in params.items() if value is not None}
