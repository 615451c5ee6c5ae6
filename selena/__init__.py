"""
Selena AI - Python SDK for the Selena chat completion API

Example:
    >>> from selena import SelenaAI
    >>> client = SelenaAI(api_key="sk-...", logging="info")
    >>> print(client.chat.completions(message="Hello!").response)
"""

__version__ = "1.0.0"
VERSION = __version__

from .client import SelenaAI
from .core.chat import ChatAPI
from .core.errors import (
    APIError,
    APITimeoutError,
    AuthenticationError,
    ErrorKind,
    HTTPStatusError,
    NetworkError,
    RateLimitError,
    SelenaError,
    ValidationError,
)
from .core.logger import Logger
from .core.models import ChatResponse
from .core.transport import HTTPTransport

__all__ = [
    "SelenaAI",
    "ChatAPI",
    "ChatResponse",
    "HTTPTransport",
    "Logger",
    "SelenaError",
    "ErrorKind",
    "ValidationError",
    "AuthenticationError",
    "APIError",
    "RateLimitError",
    "HTTPStatusError",
    "NetworkError",
    "APITimeoutError",
    "VERSION",
]
