"""
Payload size limit for authentication routes.

Oversized bodies are rejected before anything parses them. A declared
Content-Length over the limit is refused up front; otherwise the body is
buffered as it arrives (chunked uploads included) and refused as soon as
the running total passes the limit.
"""

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from shared.config import get_settings
from shared.exceptions import PayloadTooLargeError

AUTH_PATH_PREFIX = "/api/auth/"


def too_large_response(limit: int) -> JSONResponse:
    error = PayloadTooLargeError(
        "Request payload too large",
        details=f"Maximum {limit // 1024}kb allowed",
    )
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


class AuthBodySizeLimit:
    """ASGI middleware; registered in create_app()."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not scope["path"].startswith(AUTH_PATH_PREFIX):
            await self.app(scope, receive, send)
            return

        limit = get_settings().auth_max_body_bytes
        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > limit:
            await too_large_response(limit)(scope, receive, send)
            return

        buffered: list[Message] = []
        received = 0
        while True:
            message = await receive()
            buffered.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > limit:
                await too_large_response(limit)(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        async def replay() -> Message:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await self.app(scope, replay, send)
