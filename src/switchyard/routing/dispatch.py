"""Per-request walk over a route table.

The dispatcher tests layers in registration order. The first layer whose
method and path both match is invoked with a ``Continuation``; awaiting
that continuation resumes the walk at the next layer. When the table is
exhausted, the tail continuation (supplied by whoever called the router)
runs instead.

``params`` handling around a matched handler::

    outer  = context.params                  # what the caller saw
    merged = {**outer, **match.params}       # what the handler sees
    handler(context, next)                   # next() sees outer again,
                                             # then merged once it returns
    context.params = outer                   # restored, even on error
"""

import logging
from collections.abc import Sequence
from typing import Any

from switchyard._internal.types import Next
from switchyard.context import Context
from switchyard.routing.layer import Layer

logger = logging.getLogger("switchyard.routing")


class Dispatcher:
    """Walks one route table for one request."""

    __slots__ = ("context", "table", "tail")

    def __init__(self, table: Sequence[Layer], context: Context, tail: Next) -> None:
        self.table = table
        self.context = context
        self.tail = tail

    async def proceed(self, start: int = 0) -> Any:
        """Invoke the first matching layer at or after *start*.

        Misses are skipped in a loop, so a long table of non-matching
        layers does not deepen the call stack.
        """
        context = self.context
        for index in range(start, len(self.table)):
            layer = self.table[index]
            if layer.method is not None and layer.method != context.method:
                continue

            match = layer.attempt(context.path)
            if match is None:
                continue

            logger.debug("%s %s matched %r", context.method, context.path, layer.path or "*")
            outer = context.params
            merged = {**outer, **match.params}
            context.params = merged
            try:
                return await layer.handle(
                    context, match, Continuation(self, index + 1, outer, merged)
                )
            finally:
                context.params = outer

        logger.debug("%s %s fell through %d layers", context.method, context.path, len(self.table))
        return await self.tail()


class Continuation:
    """The ``next`` handed to a matched handler.

    Holds its own resume position, so awaiting it twice walks the rest of
    the table twice from the same point.
    """

    __slots__ = ("_dispatcher", "_merged", "_outer", "resume_at")

    def __init__(
        self,
        dispatcher: Dispatcher,
        resume_at: int,
        outer: dict[str, str | None],
        merged: dict[str, str | None],
    ) -> None:
        self._dispatcher = dispatcher
        self.resume_at = resume_at
        self._outer = outer
        self._merged = merged

    async def __call__(self) -> Any:
        context = self._dispatcher.context
        context.params = self._outer
        try:
            return await self._dispatcher.proceed(self.resume_at)
        finally:
            context.params = self._merged
