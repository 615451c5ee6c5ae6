from __future__ import annotations

from enum import Enum
from typing import Any, Optional


# =============================================================================
# Exceptions
# =============================================================================

class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    API = "api"
    NETWORK = "network"


class SelenaError(Exception):
    """Base exception for SDK errors."""

    kind: ErrorKind = ErrorKind.API
    code: str = "SELENA_ERROR"

    def __init__(
        self,
        message: str,
        status: int = None,
        field: str = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "status": self.status,
            "field": self.field,
        }

    def __str__(self):
        if self.status:
            return f"[{self.status}] {self.message}"
        return self.message


class ValidationError(SelenaError):
    """Raised for bad caller input. Never reaches the network."""
    kind = ErrorKind.VALIDATION
    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, field=field, details={"field": field})


class AuthenticationError(SelenaError):
    """Raised for 401 errors."""
    kind = ErrorKind.AUTHENTICATION
    code = "AUTH_ERROR"

    def __init__(self, message: str = "Authentication failed", status: int = 401):
        super().__init__(message, status=status)


class APIError(SelenaError):
    """Raised for non-2xx responses."""
    kind = ErrorKind.API
    code = "API_ERROR"

    def __init__(self, message: str, status: int = None, response: Any = None):
        super().__init__(message, status=status, details={"status": status, "response": response})
        self.response = response


class RateLimitError(APIError):
    """Raised for 429 errors."""
    pass


class HTTPStatusError(APIError):
    """Raw non-2xx failure from the transport, before classification."""

    def __init__(self, status: int, reason: str, body: str):
        super().__init__(f"HTTP {status}: {reason} - {body}", status=status, response=body)
        self.reason = reason
        self.body = body

    def __str__(self):
        return self.message


class NetworkError(SelenaError):
    """Raised when the connection fails."""
    kind = ErrorKind.NETWORK
    code = "NETWORK_ERROR"

    def __init__(self, message: str = "Network error occurred"):
        super().__init__(message)


class APITimeoutError(NetworkError):
    """Raised on timeout."""
    pass
