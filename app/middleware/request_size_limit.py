"""Request body size limit middleware.

Rejects requests whose body exceeds max_upload_size, for both Content-Length
and Transfer-Encoding: chunked. API paths get a JSON error body; pages get a
short HTML notice.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming.
"""

import html
import json
from typing import Any, Callable

API_PREFIX = "/api/"


def _get_header(scope: dict, name: str) -> str | None:
    """Return first header value for name (case-insensitive)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("utf-8", errors="replace")
    return None


def _payload_too_large(scope: dict, max_bytes: int, actual: int | None) -> tuple[bytes, bytes]:
    """Return (content_type, body) for a 413 response."""
    message = f"Request body must be at most {max_bytes} bytes"
    if scope.get("path", "").startswith(API_PREFIX):
        details: dict[str, Any] = {"max_bytes": max_bytes}
        if actual is not None:
            details["content_length"] = actual
        body = json.dumps(
            {"error": "PAYLOAD_TOO_LARGE", "message": message, "details": details}
        )
        return b"application/json", body.encode()
    body = (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\"><title>413</title></head>"
        f"<body><p>{html.escape(message)}</p><p><a href=\"/\">&larr;</a></p>"
        "</body></html>"
    )
    return b"text/html; charset=utf-8", body.encode()


async def _send_413(send: Callable, scope: dict, max_bytes: int, actual: int | None = None) -> None:
    content_type, body = _payload_too_large(scope, max_bytes, actual)
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", content_type)],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes (Content-Length or chunked). Raw ASGI."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return

        content_length_str = _get_header(scope, "content-length")
        if content_length_str:
            try:
                length = int(content_length_str)
            except ValueError:
                length = 0
            if length > max_bytes:
                await _send_413(send, scope, max_bytes, length)
                return
            await app(scope, receive, send)
            return

        if (_get_header(scope, "transfer-encoding") or "").lower() != "chunked":
            await app(scope, receive, send)
            return

        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                await _send_413(send, scope, max_bytes, total)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        pending = list(chunks)

        async def replay() -> dict:
            if pending:
                return {
                    "type": "http.request",
                    "body": pending.pop(0),
                    "more_body": bool(pending),
                }
            return await receive()

        await app(scope, replay, send)

    return asgi_app
