"""Typed ASGI definitions.

Replaces the standard Scope = MutableMapping[str, Any] with a typed
dataclass for internal use. Users never see these.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias
from urllib.parse import quote

# Raw ASGI types (matching the spec)
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]

# Printable ASCII is kept as-is in a raw path, "%" included so escapes survive
_PATH_SAFE = "".join(chr(code) for code in range(0x20, 0x7F))


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """The parts of an HTTP scope the router cares about.

    ``raw_path`` is preferred over ``path`` because servers hand over
    ``path`` already percent-decoded, and captures are decoded once,
    by the route that matched them.
    """

    method: str
    path: str
    query_string: str

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse raw ASGI scope into typed object."""
        raw_path: bytes = scope.get("raw_path") or b""
        if raw_path:
            # Some servers include the query string in raw_path
            raw_path = raw_path.split(b"?", 1)[0]
            # Non-ASCII bytes sent unencoded are escaped, so captures decode as UTF-8
            path = quote(raw_path, safe=_PATH_SAFE)
        else:
            path = scope["path"].split("?", 1)[0]
        return cls(
            method=scope["method"].upper(),
            path=path or "/",
            query_string=scope.get("query_string", b"").decode("latin-1"),
        )
