"""
Request ID propagation.

An inbound ``X-Request-ID`` is reused when it looks like an opaque token,
otherwise a fresh one is generated. The id is bound into the log context,
stored on ``request.state.request_id`` and echoed on the response.
"""

import re
import uuid

from devconnector.logging import bind_context

REQUEST_ID_HEADER = b"x-request-id"
_ACCEPTABLE_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def _inbound_request_id(scope) -> str | None:
    for name, value in scope.get("headers", ()):
        if name == REQUEST_ID_HEADER:
            candidate = value.decode("latin-1").strip()
            return candidate if _ACCEPTABLE_ID.match(candidate) else None
    return None


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = _inbound_request_id(scope) or uuid.uuid4().hex
        scope.setdefault("state", {})["request_id"] = request_id
        bind_context(request_id=request_id)

        async def send_with_id(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", []).append((REQUEST_ID_HEADER, request_id.encode()))
            await send(message)

        await self.app(scope, receive, send_with_id)
