"""ASGI host adapter: serves a router as an ASGI 3.0 application.

The only component that touches raw ASGI directly. Builds a ``Context``
from the scope, dispatches the router with a no-op tail, and sends
whatever the handlers left on the context. A request nothing handled
becomes a 404; ``HTTPError`` becomes its own status; anything else is
logged and becomes a 500.
"""

import logging

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard._internal.types import Handler
from switchyard.config import AppConfig
from switchyard.context import Context
from switchyard.errors import HTTPError
from switchyard.server.sender import (
    Response,
    response_from_context,
    response_from_error,
    send_response,
)

logger = logging.getLogger("switchyard.server")


async def _unhandled() -> None:
    return None


class ASGIApp:
    """Wrap a router (or any ``handler(context, next)``) for an ASGI server.

    Usage::

        router = Router()
        router.get("/", index)
        app = ASGIApp(router)          # hand to any ASGI server
        app.run()                      # or serve with the dev server
    """

    __slots__ = ("config", "router")

    def __init__(self, router: Handler, config: AppConfig | None = None) -> None:
        self.router = router
        self.config = config or AppConfig()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] != "http":
            return

        context = Context.from_asgi(scope)
        response = await self.handle(context)
        await send_response(response, send, head=context.method == "HEAD")

    async def handle(self, context: Context) -> Response:
        """Dispatch *context* and build the response to send."""
        try:
            await self.router(context, _unhandled)
        except HTTPError as exc:
            logger.debug("%d %s %s: %s", exc.status, context.method, context.path, exc.detail)
            return response_from_error(exc)
        except Exception:
            logger.exception("500 %s %s", context.method, context.path)
            return Response(500, b"Internal Server Error")
        return response_from_context(context)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge the ASGI lifespan protocol. Routers have no hooks."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve this app with the development server."""
        from switchyard.server.dev import run_dev_server

        run_dev_server(
            self,
            host or self.config.host,
            port or self.config.port,
            reload=self.config.debug,
            reload_include=self.config.reload_include,
            reload_dirs=self.config.reload_dirs,
            log_level=self.config.log_level,
        )
