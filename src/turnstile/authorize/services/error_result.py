"""Error result generation for the authorization endpoint.

Distinguishes errors the end user caused from errors caused by the client's
configuration. Both are shown on an error page; client errors additionally
carry the information needed to send the error back to the client when a
redirect URI is known.
"""

from __future__ import annotations

import logging

from turnstile.authorize.models.options import AuthorizeEndpointOptions
from turnstile.authorize.models.request import (
    AuthorizeResponse,
    ErrorType,
    ResponseMode,
    ValidatedAuthorizeRequest,
)
from turnstile.authorize.models.results import (
    AuthorizeResult,
    ErrorPageResult,
    ErrorViewModel,
    ReturnInfo,
)
from turnstile.authorize.primitives.response_mode import (
    build_form_post_form,
    encode_response,
)
from turnstile.authorize.services.context import RequestContext
from turnstile.authorize.services.localization import LocalizationService

logger = logging.getLogger(__name__)


async def create_error_result(
    error_type: ErrorType,
    error_code: str,
    request: ValidatedAuthorizeRequest,
    *,
    localization: LocalizationService,
    context: RequestContext | None = None,
    options: AuthorizeEndpointOptions | None = None,
) -> ErrorPageResult | AuthorizeResult:
    """Build the result for a failed authorization request.

    Args:
        error_type: Whether the user or the client caused the error
        error_code: Protocol error code, e.g. "unauthorized_client"
        request: The validated request the error belongs to
        localization: Source of the display message
        context: Correlation context of the current request
        options: Endpoint configuration

    Returns:
        AuthorizeResult when prompting is suppressed (prompt=none),
        otherwise ErrorPageResult

    Raises:
        InvalidResponseModeError: If a client error arrives with an
            unsupported response mode
    """
    options = options or AuthorizeEndpointOptions()
    error_type = ErrorType(error_type)

    response_mode = None
    if error_type is ErrorType.CLIENT:
        # Resolved first so a misconfigured mode is never hidden by prompt=none
        try:
            response_mode = ResponseMode.parse(request.response_mode)
        except ValueError:
            logger.error(
                f"Client {request.client_id} reached error generation with "
                f"unsupported response mode {request.response_mode!r}"
            )
            raise

    if request.is_prompt_none and _suppress_for_prompt_none(error_type, options):
        logger.info(
            f"Suppressing {error_type.value} error page for client "
            f"{request.client_id} because prompt=none: {error_code}"
        )
        return AuthorizeResult(
            response=AuthorizeResponse(request=request, error=error_code)
        )

    return_info = None
    if response_mode is not None and request.redirect_uri:
        return_info = _build_return_info(error_code, request, response_mode)

    model = ErrorViewModel(
        error_code=error_code,
        error_message=await _resolve_message(error_code, localization),
        request_id=context.request_id if context else None,
        return_info=return_info,
    )

    logger.info(
        f"Showing {error_type.value} error page for client {request.client_id}: "
        f"{error_code} (request {model.request_id})"
    )
    return ErrorPageResult(model=model)


def _suppress_for_prompt_none(
    error_type: ErrorType, options: AuthorizeEndpointOptions
) -> bool:
    if error_type is ErrorType.CLIENT:
        return True
    return options.suppress_user_errors_for_prompt_none


async def _resolve_message(error_code: str, localization: LocalizationService) -> str:
    """Look up the display text, falling back to the raw error code."""
    try:
        message = await localization.get_message(error_code)
    except Exception as e:
        logger.warning(f"Localization lookup failed for {error_code}: {e}")
        return error_code

    return message or error_code


def _build_return_info(
    error_code: str,
    request: ValidatedAuthorizeRequest,
    response_mode: ResponseMode,
) -> ReturnInfo:
    parameters = {"error": error_code}
    if request.state is not None:
        parameters["state"] = request.state
    encoded = encode_response(request.redirect_uri, parameters, response_mode)

    # The error page hosts the form itself and submits it on user request
    post_body = None
    if encoded.is_post:
        post_body = build_form_post_form(encoded.uri, parameters)

    return ReturnInfo(
        client_id=request.client.client_id,
        client_name=request.client.client_name,
        uri=encoded.uri,
        is_post=encoded.is_post,
        post_body=post_body,
    )
