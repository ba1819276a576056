"""Development server.

Starts a pounce ASGI server with a live ``ASGIApp`` object. Requires the
``server`` extra (``pip install switchyard[server]``).
"""


def run_dev_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
    reload_include: tuple[str, ...] = (),
    reload_dirs: tuple[str, ...] = (),
    log_level: str = "info",
) -> None:
    """Start a single-worker pounce server for *app*.

    Pounce's ``run()`` takes an import string; we have a live object, so
    ``pounce.Server`` is used directly with the ASGI callable.

    Args:
        app: ASGI callable (usually an ``ASGIApp``).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        reload_include: Extra file extensions to watch when reload is active.
        reload_dirs: Extra directories to watch alongside cwd.
        log_level: Server log level (debug, info, warning, error, critical).
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = (
            "The development server requires pounce. "
            "Install it with: pip install switchyard[server]"
        )
        raise ImportError(msg) from exc

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        reload_include=reload_include,
        reload_dirs=reload_dirs,
        log_level=log_level,
    )
    Server(config, app).run()
