"""Successful authorization result generation."""

from __future__ import annotations

import logging

from turnstile.authorize.models.request import AuthorizeResponse, ResponseMode
from turnstile.authorize.models.results import (
    AuthorizeFormPostResult,
    AuthorizeRedirectResult,
)
from turnstile.authorize.primitives.response_mode import encode_response
from turnstile.authorize.services.client_list import ClientListTracker

logger = logging.getLogger(__name__)


async def create_authorize_result(
    response: AuthorizeResponse,
    *,
    client_list: ClientListTracker,
) -> AuthorizeRedirectResult | AuthorizeFormPostResult:
    """Deliver an authorization response to the client.

    The client id is always recorded in the client list, whichever response
    mode is used.

    Args:
        response: Response parameters and the request they answer
        client_list: Tracker of clients the user has authorized

    Returns:
        AuthorizeRedirectResult for query and fragment,
        AuthorizeFormPostResult for form_post

    Raises:
        InvalidResponseModeError: If the request's response mode is unsupported
    """
    request = response.request
    await client_list.add(request.client_id)

    response_mode = ResponseMode.parse(request.response_mode)
    if not response.redirect_uri:
        logger.warning(
            f"Authorization response for client {request.client_id} has no "
            f"redirect URI, encoding against an empty base"
        )

    encoded = encode_response(
        response.redirect_uri or "", response.to_parameters(), response_mode
    )

    if response_mode is ResponseMode.FORM_POST:
        logger.info(f"Posting authorization response to client {request.client_id}")
        return AuthorizeFormPostResult(
            response=response, uri=encoded.uri, body=encoded.body
        )

    logger.info(
        f"Redirecting authorization response to client {request.client_id} "
        f"using {response_mode.value}"
    )
    return AuthorizeRedirectResult(response=response, uri=encoded.uri)
