"""HTTP response values carrying JSON bodies."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}
TEXT_HEADERS = {
    "Content-Type": "text/plain",
    "Access-Control-Allow-Origin": "*",
}

_ERROR_FALLBACK = b"Internal Server Error: Failed to stringify error JSON response."


def _json_headers() -> dict[str, str]:
    return dict(JSON_HEADERS)


@dataclass(frozen=True)
class Response:
    """A finished HTTP response: status code, body bytes and headers."""

    status: int
    body: bytes
    headers: dict[str, str] = field(default_factory=_json_headers)

    def json(self) -> Any:
        """Decode the body as JSON."""
        return json.loads(self.body)


def _encode(payload: Any) -> bytes:
    text = json.dumps(
        payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False
    )
    return text.encode("utf-8")


def json_response(status: int, payload: Any) -> Response:
    """Build a response whose body is ``payload`` as compact JSON."""
    return Response(status, _encode(payload), _json_headers())


def error_response(status: int, status_text: str, message: str) -> Response:
    """Build a structured JSON error response.

    Falls back to a plain-text 500 response if the error cannot be encoded.
    """
    payload = {"status_code": status, "error": status_text, "message": message}
    try:
        return json_response(status, payload)
    except (TypeError, ValueError):
        logger.error(
            "Failed to stringify error object; falling back to plain text error."
        )
        return Response(500, _ERROR_FALLBACK, dict(TEXT_HEADERS))