from typing import Callable, Optional

from .errors import (
    APIError,
    AuthenticationError,
    HTTPStatusError,
    RateLimitError,
    ValidationError,
)
from .logger import Logger
from .models import ChatResponse
from .transport import HTTPTransport

DEFAULT_MODEL = "selena-pro-v1"
CHAT_PATH = "/api/chat?skd=true"


class ChatAPI:
    """chat resource - the /api/chat endpoint."""

    def __init__(self, transport: HTTPTransport, logger: Logger = None):
        self._transport = transport
        self._logger = logger

    def completions(
        self,
        message: str = None,
        model: str = None,
        stream: bool = False,
        on_token: Optional[Callable[[str], None]] = None,
    ) -> ChatResponse:
        """Create a chat completion.

        Args:
            message: Prompt text (required)
            model: Model name, defaults to "selena-pro-v1"
            stream: Ask the server for a streamed response
            on_token: Called with each streamed token, in arrival order

        Returns:
            ChatResponse whose ``response`` field holds the full text

        Raises:
            ValidationError: On bad parameters (before any request) or HTTP 400
            AuthenticationError: On HTTP 401
            RateLimitError: On HTTP 429
            APIError: On any other non-2xx status
        """
        if not message:
            raise ValidationError("message parameter is required", "message")
        if not isinstance(message, str):
            raise ValidationError("message must be a string", "message")
        if model is not None and not isinstance(model, str):
            raise ValidationError("model must be a string", "model")

        model = model or DEFAULT_MODEL
        if self._logger:
            self._logger.info("Creating chat completion", {
                "model": model,
                "messageLength": len(message),
                "stream": bool(stream),
            })

        body = {"model": model, "message": message}
        if stream:
            body["stream"] = True

        try:
            response = self._transport.request(
                CHAT_PATH,
                method="POST",
                body=body,
                on_token=on_token,
                stream=bool(stream),
            )
        except HTTPStatusError as e:
            if self._logger:
                self._logger.error("Chat completion failed", e.message)
            raise self._classify(e) from e
        except Exception as e:
            if self._logger:
                self._logger.error("Chat completion failed", str(e))
            raise

        if self._logger:
            self._logger.info("Chat completion created successfully")
        return response

    @staticmethod
    def _classify(error: HTTPStatusError) -> Exception:
        status = error.status
        if status == 401:
            return AuthenticationError("Invalid API key or authentication failed", 401)
        if status == 429:
            return RateLimitError("Rate limit exceeded", 429, response=error.body)
        if status == 400:
            return ValidationError("Invalid request parameters", None)
        return APIError(
            f"API request failed: {error.message}",
            status or 500,
            response=error.body,
        )
