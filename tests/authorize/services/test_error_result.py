"""Tests for authorization error result generation.

High-impact tests covering:
- Message localization and fallback to the error code
- User vs client error classification
- Return info encoding per response mode
- prompt=none suppression
- Fatal handling of unsupported response modes
"""

from unittest.mock import AsyncMock

import pytest

from turnstile.authorize.models.errors import InvalidResponseModeError
from turnstile.authorize.models.options import AuthorizeEndpointOptions
from turnstile.authorize.models.request import (
    Client,
    ErrorType,
    ValidatedAuthorizeRequest,
)
from turnstile.authorize.models.results import AuthorizeResult, ErrorPageResult
from turnstile.authorize.services.context import RequestContext
from turnstile.authorize.services.error_result import create_error_result
from turnstile.authorize.services.localization import DictLocalizationService


class ErrorResultTestCase:
    """Shared arrangement for error result tests."""

    def setup_method(self):
        # Arrange
        self.localization = DictLocalizationService({"error": "translation"})
        self.context = RequestContext(request_id="555")
        self.request = ValidatedAuthorizeRequest(
            response_mode="fragment",
            client_id="client_id",
            subject="bob",
            client=Client(client_id="client_id", client_name="Test Client"),
        )

    async def create(self, error_type, error_code="error", request=None, **kwargs):
        kwargs.setdefault("localization", self.localization)
        kwargs.setdefault("context", self.context)
        return await create_error_result(
            error_type, error_code, request or self.request, **kwargs
        )


class TestErrorPageModel(ErrorResultTestCase):
    """Test the error page display payload."""

    async def test_model_has_code_translation_and_request_id(self):
        """Test the page model carries code, translated message and request id."""
        # Act
        result = await self.create(ErrorType.USER)

        # Assert
        assert isinstance(result, ErrorPageResult)
        assert result.model.error_code == "error"
        assert result.model.error_message == "translation"
        assert result.model.request_id == "555"

    async def test_missing_translation_falls_back_to_error_code(self):
        """Test an untranslated code is shown verbatim."""
        # Act
        result = await self.create(ErrorType.USER, error_code="invalid_request")

        # Assert
        assert result.model.error_message == "invalid_request"

    async def test_empty_translation_falls_back_to_error_code(self):
        """Test an empty translation is treated as missing."""
        # Arrange
        localization = DictLocalizationService({"error": ""})

        # Act
        result = await self.create(ErrorType.USER, localization=localization)

        # Assert
        assert result.model.error_message == "error"

    async def test_failing_localization_falls_back_to_error_code(self):
        """Test a failing localization backend degrades to the raw code."""
        # Arrange
        localization = AsyncMock()
        localization.get_message.side_effect = ConnectionError("backend down")

        # Act
        result = await self.create(ErrorType.USER, localization=localization)

        # Assert
        assert result.model.error_message == "error"
        localization.get_message.assert_awaited_once_with("error")

    async def test_missing_context_leaves_request_id_unset(self):
        """Test no request context means no request id on the page."""
        # Act
        result = await self.create(ErrorType.USER, context=None)

        # Assert
        assert result.model.request_id is None


class TestReturnInfo(ErrorResultTestCase):
    """Test return info for user and client errors."""

    async def test_user_error_has_no_return_info(self):
        """Test user errors never carry return info."""
        result = await self.create(ErrorType.USER)

        assert result.model.return_info is None

    async def test_user_error_with_redirect_uri_has_no_return_info(self):
        """Test user errors ignore a known redirect URI."""
        # Arrange
        request = self.request.model_copy(
            update={"redirect_uri": "http://client/callback"}
        )

        # Act
        result = await self.create(ErrorType.USER, request=request)

        # Assert
        assert result.model.return_info is None

    async def test_client_error_without_redirect_uri_has_no_return_info(self):
        """Test client errors without redirect URI show a plain error page."""
        result = await self.create(ErrorType.CLIENT)

        assert isinstance(result, ErrorPageResult)
        assert result.model.return_info is None

    async def test_client_error_has_return_info(self):
        """Test client errors carry the client's id and name."""
        # Arrange
        request = self.request.model_copy(
            update={"redirect_uri": "http://client/callback"}
        )

        # Act
        result = await self.create(ErrorType.CLIENT, request=request)

        # Assert
        info = result.model.return_info
        assert info is not None
        assert info.client_id == "client_id"
        assert info.client_name == "Test Client"

    async def test_form_post_has_plain_uri_and_post_body(self):
        """Test form_post return info has the plain URI and a return form."""
        # Arrange
        request = self.request.model_copy(
            update={
                "state": "123",
                "redirect_uri": "http://client/callback",
                "response_mode": "form_post",
            }
        )

        # Act
        result = await self.create(ErrorType.CLIENT, request=request)

        # Assert
        info = result.model.return_info
        assert info.is_post
        assert info.uri == "http://client/callback"
        assert info.post_body
        assert 'name="error" value="error"' in info.post_body
        assert 'name="state" value="123"' in info.post_body

    async def test_fragment_has_encoded_uri(self):
        """Test fragment return info encodes error and state after '#'."""
        # Arrange
        request = self.request.model_copy(
            update={
                "state": "123",
                "redirect_uri": "http://client/callback",
                "response_mode": "fragment",
            }
        )

        # Act
        result = await self.create(ErrorType.CLIENT, request=request)

        # Assert
        info = result.model.return_info
        assert not info.is_post
        assert info.post_body is None
        assert info.uri.startswith("http://client/callback#")
        assert "state=123" in info.uri
        assert "error=error" in info.uri

    async def test_query_has_encoded_uri(self):
        """Test query return info encodes error and state in the query."""
        # Arrange
        request = self.request.model_copy(
            update={
                "state": "123",
                "redirect_uri": "http://client/callback",
                "response_mode": "query",
            }
        )

        # Act
        result = await self.create(ErrorType.CLIENT, request=request)

        # Assert
        info = result.model.return_info
        assert not info.is_post
        assert info.uri.startswith("http://client/callback?")
        assert "state=123" in info.uri

    async def test_missing_state_is_not_encoded(self):
        """Test an unset state is left out of the return URI."""
        # Arrange
        request = self.request.model_copy(
            update={"redirect_uri": "http://client/callback", "response_mode": "query"}
        )

        # Act
        result = await self.create(ErrorType.CLIENT, request=request)

        # Assert
        assert result.model.return_info.uri == "http://client/callback?error=error"


class TestUnsupportedResponseMode(ErrorResultTestCase):
    """Test unsupported response modes are fatal for client errors."""

    async def test_client_error_with_unknown_mode_raises(self):
        """Test an unsupported mode on a client error is fatal."""
        # Arrange
        request = self.request.model_copy(update={"response_mode": "unknown"})

        # Act & Assert
        with pytest.raises(InvalidResponseModeError):
            await self.create(ErrorType.CLIENT, request=request)

    async def test_unknown_mode_is_not_masked_by_prompt_none(self):
        """Test prompt=none does not hide an unsupported mode."""
        # Arrange
        request = self.request.model_copy(
            update={"response_mode": "unknown", "prompt_mode": "none"}
        )

        # Act & Assert
        with pytest.raises(InvalidResponseModeError):
            await self.create(ErrorType.CLIENT, request=request)

    async def test_user_error_does_not_depend_on_mode(self):
        """Test user errors render even with an unsupported mode."""
        # Arrange
        request = self.request.model_copy(update={"response_mode": "unknown"})

        # Act
        result = await self.create(ErrorType.USER, request=request)

        # Assert
        assert isinstance(result, ErrorPageResult)


class TestPromptNone(ErrorResultTestCase):
    """Test prompt=none suppression of interactive error pages."""

    async def test_client_error_returns_authorize_result(self):
        """Test prompt=none turns a client error into a silent result."""
        # Arrange
        request = self.request.model_copy(update={"prompt_mode": "none"})

        # Act
        result = await self.create(ErrorType.CLIENT, error_code="foo", request=request)

        # Assert
        assert isinstance(result, AuthorizeResult)
        assert result.response.request == request
        assert result.response.error == "foo"

    async def test_client_error_with_redirect_uri_returns_authorize_result(self):
        """Test prompt=none suppression also applies with a redirect URI."""
        # Arrange
        request = self.request.model_copy(
            update={"prompt_mode": "none", "redirect_uri": "http://client/callback"}
        )

        # Act
        result = await self.create(ErrorType.CLIENT, request=request)

        # Assert
        assert isinstance(result, AuthorizeResult)

    async def test_user_error_shows_page_by_default(self):
        """Test user errors still show a page under prompt=none by default."""
        # Arrange
        request = self.request.model_copy(update={"prompt_mode": "none"})

        # Act
        result = await self.create(ErrorType.USER, request=request)

        # Assert
        assert isinstance(result, ErrorPageResult)

    async def test_user_error_suppression_is_configurable(self):
        """Test user error suppression under prompt=none can be enabled."""
        # Arrange
        request = self.request.model_copy(update={"prompt_mode": "none"})
        options = AuthorizeEndpointOptions(suppress_user_errors_for_prompt_none=True)

        # Act
        result = await self.create(ErrorType.USER, request=request, options=options)

        # Assert
        assert isinstance(result, AuthorizeResult)


class TestReturnForm(ErrorResultTestCase):
    """Test the return form embedded in form_post return info."""

    async def test_form_post_return_form_does_not_submit_itself(self):
        """Test the return form waits for the user instead of auto-posting."""
        # Arrange
        request = self.request.model_copy(
            update={
                "state": "123",
                "redirect_uri": "http://client/callback",
                "response_mode": "form_post",
            }
        )

        # Act
        result = await self.create(ErrorType.CLIENT, request=request)

        # Assert
        post_body = result.model.return_info.post_body
        assert post_body.startswith(
            '<form method="post" action="http://client/callback">'
        )
        assert post_body.endswith("</form>")
        assert "<html" not in post_body
        assert "<script" not in post_body


class TestErrorTypeCoercion(ErrorResultTestCase):
    """Test error types arriving as plain strings."""

    @pytest.mark.parametrize("error_type", ["Client", "CLIENT", "client"])
    async def test_error_type_accepts_capitalized_strings(self, error_type):
        """Test error types spelled 'User' or 'Client' are accepted."""
        # Arrange
        request = self.request.model_copy(
            update={"redirect_uri": "http://client/callback"}
        )

        # Act
        result = await self.create(error_type, request=request)

        # Assert
        assert result.model.return_info is not None

    async def test_unknown_error_type_raises(self):
        """Test an unknown error type string is rejected."""
        with pytest.raises(ValueError):
            await self.create("server")
