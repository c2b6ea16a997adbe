"""Response mode encoding for authorization responses.

Implements the three delivery mechanisms a client may negotiate:
- query: parameters appended to the redirect URI query string
- fragment: parameters placed in the redirect URI fragment
- form_post: an auto-submitting HTML form targeting the redirect URI
  (OAuth 2.0 Form Post Response Mode)
"""

from __future__ import annotations

import html
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode, urlsplit, urlunsplit

from turnstile.authorize.models.request import ResponseMode

logger = logging.getLogger(__name__)

FORM_TEMPLATE = """<form method="post" action="{action}">
{inputs}
<noscript><button type="submit">Click here to continue</button></noscript>
</form>"""

FORM_POST_TEMPLATE = """<!DOCTYPE html>
<html>
<head><title>Submit this form</title></head>
<body>
{form}
<script>window.addEventListener("load", function () {{ document.forms[0].submit(); }});</script>
</body>
</html>
"""


@dataclass(frozen=True)
class EncodedResponse:
    """Encoded authorization response.

    For form_post the uri is the unadorned form action and body holds the
    HTML document; for query and fragment body is None.
    """

    uri: str
    body: str | None = None

    @property
    def is_post(self) -> bool:
        return self.body is not None


def encode_response(
    base_uri: str,
    parameters: Mapping[str, Any],
    mode: ResponseMode | str,
) -> EncodedResponse:
    """Encode parameters against base_uri using the given response mode.

    Args:
        base_uri: Client redirect URI
        parameters: Name/value pairs to deliver, None values are dropped
        mode: Response mode, as an enum member or the raw protocol string

    Returns:
        EncodedResponse: Redirect URI, plus form body for form_post

    Raises:
        InvalidResponseModeError: If mode is not a supported response mode
    """
    response_mode = ResponseMode.parse(mode)
    params = {name: value for name, value in parameters.items() if value is not None}

    logger.debug(
        f"Encoding {len(params)} parameters for {base_uri} "
        f"as {response_mode.value}"
    )

    if response_mode is ResponseMode.QUERY:
        return EncodedResponse(uri=add_query_parameters(base_uri, params))
    if response_mode is ResponseMode.FRAGMENT:
        return EncodedResponse(uri=add_fragment_parameters(base_uri, params))
    return EncodedResponse(uri=base_uri, body=build_form_post_body(base_uri, params))


def add_query_parameters(base_uri: str, parameters: Mapping[str, Any]) -> str:
    """Append parameters to the query string, preserving any existing query."""
    if not parameters:
        return base_uri

    scheme, netloc, path, query, fragment = urlsplit(base_uri)
    encoded = urlencode(parameters)
    query = f"{query}&{encoded}" if query else encoded
    return urlunsplit((scheme, netloc, path, query, fragment))


def add_fragment_parameters(base_uri: str, parameters: Mapping[str, Any]) -> str:
    """Place parameters in the fragment, replacing any existing fragment."""
    base, _, _ = base_uri.partition("#")
    return f"{base}#{urlencode(parameters)}"


def build_form_post_body(action: str, parameters: Mapping[str, Any]) -> str:
    """Build an HTML document that posts parameters to action on load."""
    return FORM_POST_TEMPLATE.format(form=build_form_post_form(action, parameters))


def build_form_post_form(action: str, parameters: Mapping[str, Any]) -> str:
    """Build the <form> element carrying parameters as hidden inputs.

    The form does not submit itself. Without scripting a submit button
    is shown instead.
    """
    inputs = "\n".join(
        f'<input type="hidden" name="{html.escape(str(name))}" '
        f'value="{html.escape(str(value))}" />'
        for name, value in parameters.items()
    )
    return FORM_TEMPLATE.format(action=html.escape(action), inputs=inputs)
