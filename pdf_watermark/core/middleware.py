from __future__ import annotations

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .config import Settings
from .errors import PayloadTooLarge
from .logging import configure_logging

logger = configure_logging(__name__)


class BodySizeLimitMiddleware:
    """Rejects request bodies larger than ``settings.max_body_bytes`` with 413.

    A declared ``Content-Length`` is checked up front. Bodies without one
    (chunked uploads) are counted while the app reads them.
    """

    def __init__(self, app: ASGIApp, settings: Settings) -> None:
        self.app = app
        self.settings = settings

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = self.settings.max_body_bytes
        length = Headers(scope=scope).get("content-length")
        if length and length.isdigit() and int(length) > limit:
            logger.warning("Rejected request of %s bytes (limit %s)", length, limit)
            await self._reject(scope, receive, send)
            return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > limit:
                    exceeded = True
                    raise PayloadTooLarge("Request body too large.")
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            # whatever the app answers after the overflow is replaced by the 413
            if exceeded:
                return
            response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except PayloadTooLarge:
            if not exceeded:
                raise

        if exceeded and not response_started:
            logger.warning("Rejected streamed request after %s bytes (limit %s)", received, limit)
            await self._reject(scope, receive, send)

    @staticmethod
    async def _reject(scope: Scope, receive: Receive, send: Send) -> None:
        error = PayloadTooLarge("Request body too large.")
        response = JSONResponse(status_code=error.status_code, content=error.to_payload())
        await response(scope, receive, send)
