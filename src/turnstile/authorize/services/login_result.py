"""Login-required result generation."""

from __future__ import annotations

import logging

from turnstile.authorize.models.results import LoginPageResult
from turnstile.authorize.models.signin import SignInMessage
from turnstile.authorize.services.messages import MessageStore

logger = logging.getLogger(__name__)


async def create_login_result(
    message: SignInMessage,
    *,
    message_store: MessageStore,
) -> LoginPageResult:
    """Store message and point the browser at the login page by its id."""
    id = await message_store.write(message)
    logger.info(f"Login required for client {message.client_id}, message {id}")
    return LoginPageResult(id=id)
