from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthorizeEndpointOptions:
    """Configuration for authorization endpoint result generation."""

    login_url: str = "/login"
    signin_query_parameter: str = "signin"
    # prompt=none suppression is only defined for client errors
    suppress_user_errors_for_prompt_none: bool = False
