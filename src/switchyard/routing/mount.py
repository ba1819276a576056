"""Prefix mounts: run a router (or any middleware) under a path prefix.

While the mounted handler runs, ``context.path`` and ``context.url`` are
rewritten to the part after the prefix. When it calls ``next``, the
outer view is put back for the rest of the outer table, and the suffix
view is re-applied once ``next`` returns. Both switches restore on every
exit, including exceptions.

``context.original_url`` is recorded by the first mount a request passes
through and never overwritten by deeper ones.
"""

import logging
from dataclasses import dataclass
from typing import Any

from switchyard._internal.invoke import invoke
from switchyard._internal.types import Handler, Next
from switchyard.config import RouteOptions
from switchyard.context import Context
from switchyard.routing.layer import Layer, Match

logger = logging.getLogger("switchyard.routing")

# (url, path)
View = tuple[str, str]


def show(context: Context, view: View) -> None:
    """Point ``context.url``/``context.path`` at *view*."""
    context.url, context.path = view


def strip_prefix(url: str, length: int) -> str:
    """Drop the first *length* characters, keeping the result rooted at ``/``.

    ``"/mount/app"`` -> ``"/app"``, ``"/mount"`` -> ``"/"``,
    ``"/mount?q=1"`` -> ``"/?q=1"``.
    """
    rest = url[length:]
    if not rest or rest[0] in "?#":
        return "/" + rest
    return rest


class MountContinuation:
    """The ``next`` handed to a mounted handler.

    Switches back to the outer view, runs the outer continuation, then
    switches to the suffix view again.
    """

    __slots__ = ("_context", "_next", "_saved", "_suffix")

    def __init__(self, context: Context, next: Next, saved: View, suffix: View) -> None:
        self._context = context
        self._next = next
        self._saved = saved
        self._suffix = suffix

    async def __call__(self) -> Any:
        # Plain try/finally: frozen HTTPError refuses the __traceback__
        # assignment a generator-based context manager makes on the way out
        show(self._context, self._saved)
        try:
            return await self._next()
        finally:
            show(self._context, self._suffix)


@dataclass(frozen=True, slots=True)
class MountLayer(Layer):
    """A layer that matches a path prefix and delegates with a rewritten view."""

    @classmethod
    def at(
        cls,
        path: str | None,
        handler: Handler,
        options: RouteOptions | None = None,
    ) -> "MountLayer":
        """Mount *handler* at *path*, compiled in prefix mode whatever *options* say."""
        opts = (options or RouteOptions()).merge({"end": False})
        return cls.build(None, path, handler, opts)  # type: ignore[return-value]

    async def handle(self, context: Context, match: Match, next: Next) -> Any:
        if context.original_url is None:
            context.original_url = context.url

        saved: View = (context.url, context.path)
        length = len(match.prefix)
        suffix: View = (strip_prefix(context.url, length), context.path[length:] or "/")
        logger.debug("mount %r: %s -> %s", self.path or "/", saved[1], suffix[1])

        show(context, suffix)
        try:
            mounted_next = MountContinuation(context, next, saved, suffix)
            return await invoke(self.handler, context, mounted_next)
        finally:
            show(context, saved)
