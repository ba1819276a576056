"""Per-request context passed through every handler.

Unlike a frozen request object, the context is deliberately mutable:
mounts rewrite ``path``/``url`` for the duration of a nested dispatch,
matched routes layer their captures onto ``params``, and handlers write
``status``/``body``/``headers`` for the host adapter to send.

Each request gets its own ``Context``. Never share one across requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from switchyard._internal.asgi import Scope


@dataclass(eq=False)
class Context:
    """Routing view of one request plus the response being built.

    Arbitrary attributes may be set on the context by middleware
    (``context.user = ...``); ``state`` is there for callers who prefer
    an explicit dict.
    """

    method: str
    path: str
    url: str
    original_url: str | None = None
    params: dict[str, str | None] = field(default_factory=dict)
    state: dict[str, Any] = field(default_factory=dict)

    # -- Response, written by handlers --
    status: int | None = None
    body: Any = None
    headers: list[tuple[str, str]] = field(default_factory=list)

    @classmethod
    def from_url(cls, method: str, url: str, **kwargs: Any) -> Context:
        """Build a context from a method and a request target like ``/a/b?x=1``."""
        path = url.split("?", 1)[0].split("#", 1)[0] or "/"
        return cls(method=method.upper(), path=path, url=url, **kwargs)

    @classmethod
    def from_asgi(cls, scope: Scope) -> Context:
        """Build a context from an ASGI HTTP scope."""
        from switchyard._internal.asgi import HTTPScope

        http = HTTPScope.from_scope(scope)
        url = f"{http.path}?{http.query_string}" if http.query_string else http.path
        return cls(method=http.method, path=http.path, url=url)

    @property
    def query_string(self) -> str:
        """Everything after the first ``?`` in the current ``url``."""
        _, _, query = self.url.partition("?")
        return query

    def set_header(self, name: str, value: str) -> None:
        """Replace any existing response header called *name*."""
        lowered = name.lower()
        self.headers = [(k, v) for k, v in self.headers if k.lower() != lowered]
        self.headers.append((name, value))
