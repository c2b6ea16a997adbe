"""Authorization endpoint result generation.

Entry point for the hosting layer. Threads the injected collaborators into
the error, authorize, and login result builders and returns a single result
variant per call.
"""

from __future__ import annotations

from turnstile.authorize.models.options import AuthorizeEndpointOptions
from turnstile.authorize.models.request import (
    AuthorizeResponse,
    ErrorType,
    ValidatedAuthorizeRequest,
)
from turnstile.authorize.models.results import (
    AuthorizeFormPostResult,
    AuthorizeRedirectResult,
    AuthorizeResult,
    ErrorPageResult,
    LoginPageResult,
)
from turnstile.authorize.models.signin import SignInMessage
from turnstile.authorize.services.authorize_result import create_authorize_result
from turnstile.authorize.services.client_list import ClientListTracker
from turnstile.authorize.services.context import RequestContext
from turnstile.authorize.services.error_result import create_error_result
from turnstile.authorize.services.localization import LocalizationService
from turnstile.authorize.services.login_result import create_login_result
from turnstile.authorize.services.messages import MessageStore


class AuthorizeEndpointResultGenerator:
    """Decides how the browser is told the outcome of an authorize request.

    Holds no per-request state, so a single instance can serve concurrent
    requests. Request correlation data is passed in per call.
    """

    def __init__(
        self,
        localization: LocalizationService,
        message_store: MessageStore,
        client_list: ClientListTracker,
        options: AuthorizeEndpointOptions | None = None,
    ):
        """Initialize the result generator.

        Args:
            localization: Display text lookup for error codes
            message_store: Storage for sign-in messages
            client_list: Tracker of clients the user has authorized
            options: Endpoint configuration
        """
        self.localization = localization
        self.message_store = message_store
        self.client_list = client_list
        self.options = options or AuthorizeEndpointOptions()

    async def create_error_result(
        self,
        error_type: ErrorType,
        error_code: str,
        request: ValidatedAuthorizeRequest,
        context: RequestContext | None = None,
    ) -> ErrorPageResult | AuthorizeResult:
        return await create_error_result(
            error_type,
            error_code,
            request,
            localization=self.localization,
            context=context,
            options=self.options,
        )

    async def create_authorize_result(
        self, response: AuthorizeResponse
    ) -> AuthorizeRedirectResult | AuthorizeFormPostResult:
        return await create_authorize_result(response, client_list=self.client_list)

    async def create_login_result(self, message: SignInMessage) -> LoginPageResult:
        return await create_login_result(message, message_store=self.message_store)
