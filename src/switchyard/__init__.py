"""Switchyard: an ordered request router for async middleware pipelines.

Maps a request (method + path) to a chain of ``handler(context, next)``
callables, mounts routers inside routers under path prefixes, and layers
path parameters onto a per-request context.

Basic usage::

    from switchyard import ASGIApp, Router

    async def show(context, next):
        context.body = f"user {context.params['id']}"

    router = Router()
    router.get("/users/:id", show)
    app = ASGIApp(router)

Nesting::

    api = Router()
    api.use("/v1", router)     # /v1/users/42 -> show, params {"id": "42"}
"""

__version__ = "0.1.0"
__all__ = [
    "METHODS",
    "ASGIApp",
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "Context",
    "HTTPError",
    "NotFound",
    "RouteOptions",
    "Router",
    "SwitchyardError",
    "compose",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import switchyard`` fast while providing a clean top-level API.
    """
    if name in ("Router", "METHODS"):
        from switchyard import router as _router

        return getattr(_router, name)

    if name == "Context":
        from switchyard.context import Context

        return Context

    if name in ("AppConfig", "RouteOptions"):
        from switchyard import config as _config

        return getattr(_config, name)

    if name == "ASGIApp":
        from switchyard.server.asgi import ASGIApp

        return ASGIApp

    if name == "compose":
        from switchyard._internal.compose import compose

        return compose

    if name in ("SwitchyardError", "ConfigurationError", "HTTPError", "BadRequest", "NotFound"):
        from switchyard import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
