"""Result variants produced by the authorization endpoint.

Exactly one variant is produced per call. Hosting code dispatches on the
variant type, never on error codes:

    match result:
        case AuthorizeRedirectResult(uri=uri):
            ...
        case ErrorPageResult(model=model):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass

from turnstile.authorize.models.request import AuthorizeResponse


@dataclass(frozen=True)
class ReturnInfo:
    """Data needed to bounce a client-caused error back to the client."""

    client_id: str
    client_name: str | None
    uri: str
    is_post: bool = False
    post_body: str | None = None

    def __post_init__(self) -> None:
        if self.is_post != (self.post_body is not None):
            raise ValueError("post_body must be set if and only if is_post is True")


@dataclass(frozen=True)
class ErrorViewModel:
    """Display payload for the error page."""

    error_code: str
    error_message: str
    request_id: str | None = None
    return_info: ReturnInfo | None = None


@dataclass(frozen=True)
class ErrorPageResult:
    model: ErrorViewModel


@dataclass(frozen=True)
class AuthorizeResult:
    """Non-interactive outcome, used when prompting was suppressed."""

    response: AuthorizeResponse


@dataclass(frozen=True)
class AuthorizeRedirectResult:
    response: AuthorizeResponse
    uri: str


@dataclass(frozen=True)
class AuthorizeFormPostResult:
    response: AuthorizeResponse
    uri: str
    body: str


@dataclass(frozen=True)
class LoginPageResult:
    """Redirect to the login page referencing a stored sign-in message."""

    id: str


AuthorizeEndpointResult = (
    ErrorPageResult
    | AuthorizeResult
    | AuthorizeRedirectResult
    | AuthorizeFormPostResult
    | LoginPageResult
)
