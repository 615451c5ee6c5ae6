"""
Test chat completions: validation, request construction and error classification
"""
from unittest.mock import Mock, patch

import pytest

from selena.core.chat import CHAT_PATH, DEFAULT_MODEL, ChatAPI
from selena.core.errors import (
    APIError,
    AuthenticationError,
    ErrorKind,
    HTTPStatusError,
    NetworkError,
    RateLimitError,
    ValidationError,
)
from selena.core.logger import Logger
from selena.core.models import ChatResponse
from selena.core.transport import HTTPTransport


@pytest.fixture
def transport():
    mock = Mock(spec=HTTPTransport)
    mock.request.return_value = ChatResponse(response="hi")
    return mock


@pytest.fixture
def chat(transport):
    return ChatAPI(transport)


class TestValidation:
    """Bad parameters are rejected before any request is made"""

    @pytest.mark.parametrize("message", [None, ""])
    def test_missing_message(self, chat, transport, message):
        with pytest.raises(ValidationError) as exc_info:
            chat.completions(message=message)
        assert exc_info.value.field == "message"
        assert exc_info.value.message == "message parameter is required"
        transport.request.assert_not_called()

    @pytest.mark.parametrize("message", [123, ["hi"], {"text": "hi"}])
    def test_non_string_message(self, chat, transport, message):
        with pytest.raises(ValidationError) as exc_info:
            chat.completions(message=message)
        assert exc_info.value.field == "message"
        assert exc_info.value.kind == ErrorKind.VALIDATION
        transport.request.assert_not_called()

    def test_non_string_model(self, chat, transport):
        with pytest.raises(ValidationError) as exc_info:
            chat.completions(message="hi", model=42)
        assert exc_info.value.field == "model"
        assert exc_info.value.message == "model must be a string"
        transport.request.assert_not_called()


class TestRequestConstruction:
    """Body, endpoint and streaming flag sent to the transport"""

    def test_default_model_and_no_stream_key(self, chat, transport):
        result = chat.completions(message="hello")

        assert result == {"response": "hi"}
        args, kwargs = transport.request.call_args
        assert args == (CHAT_PATH,)
        assert CHAT_PATH == "/api/chat?skd=true"
        assert kwargs["method"] == "POST"
        assert kwargs["body"] == {"model": DEFAULT_MODEL, "message": "hello"}
        assert kwargs["stream"] is False

    def test_stream_flag_and_callback_forwarded(self, chat, transport):
        on_token = Mock()

        chat.completions(message="hello", model="selena-lite", stream=True, on_token=on_token)

        kwargs = transport.request.call_args[1]
        assert kwargs["body"] == {"model": "selena-lite", "message": "hello", "stream": True}
        assert kwargs["stream"] is True
        assert kwargs["on_token"] is on_token


class TestErrorClassification:
    """HTTP failures are mapped by status code, everything else passes through"""

    def test_401_becomes_authentication_error(self, chat, transport):
        transport.request.side_effect = HTTPStatusError(401, "Unauthorized", "token revoked")

        with pytest.raises(AuthenticationError) as exc_info:
            chat.completions(message="hi")

        error = exc_info.value
        assert error.kind == ErrorKind.AUTHENTICATION
        assert error.status == 401
        assert error.message == "Invalid API key or authentication failed"

    def test_429_becomes_rate_limit_error(self, chat, transport):
        transport.request.side_effect = HTTPStatusError(429, "Too Many Requests", "slow down")

        with pytest.raises(RateLimitError) as exc_info:
            chat.completions(message="hi")

        assert exc_info.value.kind == ErrorKind.API
        assert exc_info.value.status == 429
        assert exc_info.value.message == "Rate limit exceeded"

    def test_400_becomes_validation_error_without_field(self, chat, transport):
        transport.request.side_effect = HTTPStatusError(400, "Bad Request", "bad")

        with pytest.raises(ValidationError) as exc_info:
            chat.completions(message="hi")

        assert exc_info.value.message == "Invalid request parameters"
        assert exc_info.value.field is None

    def test_other_status_wraps_original_message(self, chat, transport):
        transport.request.side_effect = HTTPStatusError(503, "Service Unavailable", "maintenance")

        with pytest.raises(APIError) as exc_info:
            chat.completions(message="hi")

        error = exc_info.value
        assert type(error) is APIError
        assert error.status == 503
        assert error.message == "API request failed: HTTP 503: Service Unavailable - maintenance"
        assert isinstance(error.__cause__, HTTPStatusError)

    def test_network_error_passes_through_even_with_http_text(self, chat, transport):
        original = NetworkError("Connection error: proxy said HTTP 404")
        transport.request.side_effect = original

        with pytest.raises(NetworkError) as exc_info:
            chat.completions(message="hi")

        assert exc_info.value is original

    def test_decode_error_passes_through(self, chat, transport):
        transport.request.side_effect = ValueError("Expecting value")

        with pytest.raises(ValueError):
            chat.completions(message="hi")


class TestChatLogging:
    """Progress logged at info, failures at error, never the message text"""

    def test_logs_metadata_not_content(self, transport, log_console):
        chat = ChatAPI(transport, Logger("info", console=log_console))

        chat.completions(message="top secret prompt")

        text = log_console.file.getvalue()
        assert "Creating chat completion" in text
        assert '"messageLength": 17' in text
        assert "Chat completion created successfully" in text
        assert "top secret prompt" not in text

    def test_logs_failure(self, transport, log_console):
        transport.request.side_effect = HTTPStatusError(401, "Unauthorized", "nope")
        chat = ChatAPI(transport, Logger("error", console=log_console))

        with pytest.raises(AuthenticationError):
            chat.completions(message="hi")

        assert "[Selena ERROR] Chat completion failed HTTP 401" in log_console.file.getvalue()


class TestEndToEnd:
    """ChatAPI over a real transport with requests mocked out"""

    @patch('selena.core.transport.requests.request')
    def test_streaming_completion(self, mock_request, make_response):
        body = 'data: {"response":"He"}\ndata: {"response":"llo"}\ndata: [DONE]\n'
        mock_request.return_value = make_response(body, content_type="text/event-stream")
        chat = ChatAPI(HTTPTransport("https://elaxi.xyz", "sk-test"))
        tokens = []

        result = chat.completions(message="hi", stream=True, on_token=tokens.append)

        assert result == {"response": "Hello"}
        assert tokens == ["He", "llo"]

    @patch('selena.core.transport.requests.request')
    def test_unauthorized_response(self, mock_request, make_response):
        mock_request.return_value = make_response('{"error": "bad key"}', status=401, reason="Unauthorized")
        chat = ChatAPI(HTTPTransport("https://elaxi.xyz", "sk-bad"))

        with pytest.raises(AuthenticationError) as exc_info:
            chat.completions(message="hi")

        assert exc_info.value.status == 401
