"""Serverless entry point.

The hosting platform invokes the ASGI callable once per incoming request
instead of the service running its own listen loop. The FastAPI app is
built lazily on the first request and reused for the lifetime of the
process; concurrent first requests wait on the same build.
"""

import asyncio
import inspect
import json
from collections.abc import Awaitable, Callable

from src.logging.structured import generate_request_id, get_logger, request_id_var
from src.main import INTERNAL_ERROR_BODY, create_app

ASGIApp = Callable[[dict, Callable, Callable], Awaitable[None]]
AppFactory = Callable[[], ASGIApp | Awaitable[ASGIApp]]


class LazyASGIApp:
    """ASGI app that builds its delegate once, on first use.

    Any failure while building or serving is logged and, if the response
    has not started yet, answered with a generic 500.
    """

    def __init__(self, factory: AppFactory):
        self._factory = factory
        self._app: ASGIApp | None = None
        self._lock = asyncio.Lock()

    @property
    def ready(self) -> bool:
        return self._app is not None

    async def get_app(self) -> ASGIApp:
        """Return the built app, building it if this is the first call."""
        if self._app is not None:
            return self._app

        async with self._lock:
            # Another request may have finished the build while we waited
            if self._app is None:
                app = self._factory()
                if inspect.isawaitable(app):
                    app = await app
                self._app = app
        return self._app

    async def __call__(self, scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] == "lifespan":
            await _acknowledge_lifespan(receive, send)
            return

        response_started = False

        async def tracking_send(message: dict) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        rid = generate_request_id()
        token = request_id_var.set(rid)
        try:
            app = await self.get_app()
            await app(scope, receive, tracking_send)
        except Exception:
            get_logger().exception(
                "Unhandled error while serving request",
                extra={"log_data": {"path": scope.get("path", ""), "ready": self.ready}},
            )
            if not response_started and scope["type"] == "http":
                await _send_internal_error(send, rid)
        finally:
            request_id_var.reset(token)


async def _acknowledge_lifespan(receive: Callable, send: Callable) -> None:
    """Complete startup/shutdown immediately; the app is built per process on demand."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return


async def _send_internal_error(send: Callable, request_id: str) -> None:
    body = json.dumps(INTERNAL_ERROR_BODY).encode("utf-8")
    await send({
        "type": "http.response.start",
        "status": 500,
        "headers": [
            (b"content-type", b"application/json"),
            (b"content-length", str(len(body)).encode("ascii")),
            (b"x-request-id", request_id.encode("ascii")),
        ],
    })
    await send({"type": "http.response.body", "body": body})


app = LazyASGIApp(create_app)
