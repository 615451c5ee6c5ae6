from __future__ import annotations

import json
import queue
import threading
import time
from typing import Callable, Optional, Union

import requests

from .errors import APITimeoutError, HTTPStatusError, NetworkError
from .logger import Logger
from .models import ChatResponse

REQUEST_TIMEOUT = 30.0
STREAM_CONTENT_TYPES = ("text/plain", "text/event-stream")
TOKEN_FIELDS = ("response", "text", "content", "token")
DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


# =============================================================================
# HTTP Transport
# =============================================================================

class HTTPTransport:
    """Low-level HTTP transport using requests.

    Handles both plain JSON responses and ``data: {...}`` event-stream bodies
    behind a single ``request`` call. The body of a streaming response is read
    in full and then parsed line by line.
    """

    def __init__(self, base_url: str, api_key: str, logger: Logger = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.logger = logger
        self.timeout = REQUEST_TIMEOUT

    def _build_headers(self, extra_headers: dict = None) -> dict:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _debug(self, message: str, *args):
        if self.logger:
            self.logger.debug(message, *args)

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        headers: dict = None,
        body: Union[dict, str, None] = None,
        on_token: Optional[Callable[[str], None]] = None,
        stream: Optional[bool] = None,
    ) -> ChatResponse:
        """Make an HTTP request and return the decoded response.

        Args:
            endpoint: Path appended to the base URL (may carry a query string)
            method: HTTP method
            headers: Extra headers, overriding the defaults on conflict
            body: JSON-serializable dict or an already encoded string
            on_token: Called with each token of a streaming response, in order
            stream: Caller-declared streaming mode. ``None`` falls back to
                checking whether the request body mentions "stream".

        Raises:
            HTTPStatusError: On a non-2xx status
            APITimeoutError: When the 30 second timeout expires
            NetworkError: On any other transport failure
        """
        url = f"{self.base_url}{endpoint}"
        data = body if body is None or isinstance(body, str) else json.dumps(body)
        start_time = time.monotonic()

        self._debug(f"→ {method.upper()} {url}")
        if data is not None:
            try:
                self._debug("Body:", json.loads(data))
            except ValueError:
                self._debug("Body:", data)

        try:
            response = self._send(method, url, self._build_headers(headers), data)

            if not 200 <= response.status_code < 300:
                raise HTTPStatusError(
                    response.status_code,
                    response.reason or "",
                    self._error_body(response),
                )

            text = response.content.decode("utf-8", errors="replace")
            if self._is_streaming(response, data, stream):
                self._debug("Raw streaming response:", text[:200] + "...")
                result = self._parse_stream(text, on_token)
            else:
                result = ChatResponse.from_payload(json.loads(text))

            duration = int((time.monotonic() - start_time) * 1000)
            self._debug(f"← {response.status_code} ({duration}ms)")
            self._debug(
                "Response:",
                result.to_dict() if isinstance(result, ChatResponse) else result,
            )
            return result

        except Exception as e:
            if self.logger:
                self.logger.error("Request failed:", str(e))
            raise

    def _send(self, method: str, url: str, headers: dict, data: Optional[str]) -> requests.Response:
        """Run the request on a worker thread, bounding the whole call by ``self.timeout``.

        The ``timeout`` passed to requests only bounds single connect and read
        operations. The worker reads the full body before handing it back.
        """
        outcome = queue.Queue(maxsize=1)

        def worker():
            try:
                outcome.put((True, requests.request(
                    method.upper(),
                    url,
                    headers=headers,
                    data=data.encode("utf-8") if data is not None else None,
                    timeout=self.timeout,
                )))
            except Exception as e:
                outcome.put((False, e))

        threading.Thread(target=worker, name="selena-request", daemon=True).start()

        try:
            ok, value = outcome.get(timeout=self.timeout)
        except queue.Empty:
            raise APITimeoutError(f"Request timed out after {self.timeout:g}s") from None

        if ok:
            return value
        if isinstance(value, requests.Timeout):
            raise APITimeoutError(f"Request timed out after {self.timeout:g}s") from value
        if isinstance(value, requests.RequestException):
            raise NetworkError(f"Connection error: {value}") from value
        raise value

    @staticmethod
    def _error_body(response: requests.Response) -> str:
        try:
            body = response.content.decode("utf-8")
        except (UnicodeDecodeError, requests.RequestException):
            body = ""
        return body or response.reason or ""

    @staticmethod
    def _is_streaming(response: requests.Response, data: Optional[str], stream: Optional[bool]) -> bool:
        content_type = (response.headers.get("Content-Type") or "").lower()
        if any(ct in content_type for ct in STREAM_CONTENT_TYPES):
            return True
        if stream is not None:
            return bool(stream)
        return data is not None and "stream" in data

    def _parse_stream(self, text: str, on_token: Optional[Callable[[str], None]] = None) -> ChatResponse:
        """Aggregate ``data:`` frames into one response, firing ``on_token`` per token."""
        full_response = ""

        for line in text.split("\n"):
            line = line.rstrip("\r")
            if not line.startswith(DATA_PREFIX):
                continue
            payload = line[len(DATA_PREFIX):].strip()
            if not payload or payload == DONE_SENTINEL:
                continue

            try:
                frame = json.loads(payload)
            except ValueError:
                self._debug("Failed to parse JSON line:", line)
                continue
            if not isinstance(frame, dict):
                self._debug("Skipping non-object frame:", line)
                continue

            token = extract_token(frame)
            if token:
                full_response += token
                if callable(on_token):
                    on_token(token)

        return ChatResponse(response=full_response.strip())


def extract_token(frame: dict) -> str:
    """Return the first non-empty token field of a streaming frame."""
    for key in TOKEN_FIELDS:
        value = frame.get(key)
        if value:
            return value if isinstance(value, str) else str(value)
    return ""
