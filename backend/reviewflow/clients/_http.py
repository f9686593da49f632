"""Small helpers shared by the httpx-based clients."""

from __future__ import annotations

from typing import Any

import httpx

from reviewflow.workflow.errors import UnexpectedError

# Default timeout for outbound calls (seconds)
DEFAULT_TIMEOUT = 30.0


def json_body(response: httpx.Response) -> dict[str, Any] | None:
    """Decode a JSON object body, or None when the body is not a JSON object."""
    try:
        body = response.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


def require_json_body(response: httpx.Response, *, service: str) -> dict[str, Any]:
    body = json_body(response)
    if body is None:
        raise UnexpectedError(
            f"{service} returned a non-JSON response",
            details={"status_code": response.status_code},
        )
    return body


def error_message(error: Any) -> str:
    """Pull ``message`` out of an ``{"error": {...}}`` payload."""
    if isinstance(error, dict):
        message = error.get("message")
        return message if isinstance(message, str) else ""
    if isinstance(error, str):
        return error
    return ""
