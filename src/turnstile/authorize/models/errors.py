"""Exception hierarchy for authorization endpoint result generation.

Unrecognized response modes are configuration defects and surface as
exceptions rather than as result variants.
"""

from __future__ import annotations


class ResponseGenerationError(Exception):
    """Base exception for all result generation errors."""

    pass


class InvalidResponseModeError(ResponseGenerationError, ValueError):
    """Raised when a response mode outside query/fragment/form_post is used.

    Mode validity is established during request validation, so reaching
    this error means the pipeline was misconfigured.
    """

    def __init__(self, response_mode: object):
        super().__init__(f"Unsupported response mode: {response_mode!r}")
        self.response_mode = response_mode


class MessageStoreError(ResponseGenerationError):
    """Raised when a sign-in message cannot be persisted."""

    pass
