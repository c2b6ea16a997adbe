"""Starlette responses for authorization endpoint results.

Turns a result variant into the HTTP response the browser receives.
"""

from __future__ import annotations

import html
import logging

from starlette.responses import HTMLResponse, RedirectResponse, Response

from turnstile.authorize.models.options import AuthorizeEndpointOptions
from turnstile.authorize.models.results import (
    AuthorizeEndpointResult,
    AuthorizeFormPostResult,
    AuthorizeRedirectResult,
    AuthorizeResult,
    ErrorPageResult,
    ErrorViewModel,
    LoginPageResult,
)
from turnstile.authorize.primitives.response_mode import add_query_parameters

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-store", "Pragma": "no-cache"}
AUTHORIZE_ERROR_HEADER = "X-Authorize-Error"
RETURN_POST_SCRIPT = "document.forms[0].submit();"


def to_response(
    result: AuthorizeEndpointResult,
    options: AuthorizeEndpointOptions | None = None,
) -> Response:
    """Build the HTTP response for result.

    Raises:
        TypeError: If result is not an authorization endpoint result
    """
    options = options or AuthorizeEndpointOptions()
    logger.debug(f"Writing HTTP response for {type(result).__name__}")

    match result:
        case AuthorizeRedirectResult(uri=uri):
            return RedirectResponse(uri, status_code=302, headers=NO_CACHE_HEADERS)
        case AuthorizeFormPostResult(body=body):
            return HTMLResponse(body, headers=NO_CACHE_HEADERS)
        case LoginPageResult(id=id):
            login_uri = add_query_parameters(
                options.login_url, {options.signin_query_parameter: id}
            )
            return RedirectResponse(login_uri, status_code=302)
        case ErrorPageResult(model=model):
            return HTMLResponse(
                render_error_page(model), status_code=400, headers=NO_CACHE_HEADERS
            )
        case AuthorizeResult(response=response):
            headers = dict(NO_CACHE_HEADERS)
            if response.error:
                headers[AUTHORIZE_ERROR_HEADER] = response.error
            return Response(status_code=204, headers=headers)

    raise TypeError(f"Unsupported authorization result: {type(result).__name__}")


def render_error_page(model: ErrorViewModel) -> str:
    """Render a minimal error page for model."""
    parts = [
        "<!DOCTYPE html>",
        "<html><head><title>Error</title></head><body>",
        f"<h1>{html.escape(model.error_message)}</h1>",
        f"<p>Error code: {html.escape(model.error_code)}</p>",
    ]

    if model.request_id:
        parts.append(f"<p>Request id: {html.escape(model.request_id)}</p>")

    info = model.return_info
    if info is not None:
        client = html.escape(info.client_name or info.client_id)
        if info.is_post:
            # The return form is the only form on the page
            parts.append(info.post_body)
            parts.append(
                f'<p><button type="button" onclick="{RETURN_POST_SCRIPT}">'
                f"Return to {client}</button></p>"
            )
        else:
            parts.append(
                f'<p><a href="{html.escape(info.uri)}">Return to {client}</a></p>'
            )

    parts.append("</body></html>")
    return "\n".join(parts)
