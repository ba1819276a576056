"""Route and server configuration.

Both config types are frozen dataclasses. Changing a setting means
building a new instance (see ``RouteOptions.merge``).
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

from switchyard.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RouteOptions:
    """Options forwarded to the path compiler for one registration.

    Defaults match the usual web-router conventions::

        RouteOptions()                      # case-insensitive, lenient "/", anchored
        RouteOptions(sensitive=True)        # "/test" no longer matches "/TEST"
        RouteOptions(end=False)             # prefix match, used by mounts
    """

    sensitive: bool = False
    strict: bool = False
    end: bool = True

    def merge(self, *overrides: "RouteOptions | Mapping[str, Any] | None") -> "RouteOptions":
        """Return a copy with *overrides* applied left to right.

        Mapping overrides replace only the keys they name. A
        ``RouteOptions`` override replaces every key.
        """
        result = self
        for override in overrides:
            if override is None:
                continue
            if isinstance(override, RouteOptions):
                result = override
                continue
            _validate(override)
            if override:
                result = replace(result, **override)
        return result


_OPTION_NAMES = frozenset(f.name for f in fields(RouteOptions))


def _validate(options: Mapping[str, Any]) -> None:
    for key, value in options.items():
        if key not in _OPTION_NAMES:
            expected = ", ".join(sorted(_OPTION_NAMES))
            msg = f"Unknown route option {key!r}. Expected one of: {expected}."
            raise ConfigurationError(msg)
        if not isinstance(value, bool):
            msg = f"Route option {key!r} must be a bool, got {type(value).__name__}."
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Host configuration for serving a router over ASGI.

    Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Reload (development mode: requires debug=True)
    reload_include: tuple[str, ...] = ()  # Extra extensions to watch (e.g. ".toml")
    reload_dirs: tuple[str, ...] = ()  # Extra directories to watch alongside cwd

    log_level: str = "info"
