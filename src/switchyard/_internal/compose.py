"""Fold several ``handler(context, next)`` callables into one.

Used when a single registration names more than one handler::

    router.post("/items", require_login, validate, create_item)

The composed handler calls ``require_login`` first; its ``next`` runs
``validate``, whose ``next`` runs ``create_item``, whose ``next`` is the
continuation the router handed to the composed handler.
"""

from collections.abc import Sequence
from functools import partial
from typing import Any

from switchyard._internal.invoke import invoke
from switchyard._internal.types import Handler, Next


async def _done() -> None:
    return None


def compose(handlers: Sequence[Handler]) -> Handler:
    """Return one handler that runs *handlers* in order.

    Raises ``TypeError`` if any element is not callable. Inside a single
    run, each handler's ``next`` may be awaited at most once; a second
    call raises ``RuntimeError``.
    """
    chain = tuple(handlers)
    for handler in chain:
        if not callable(handler):
            msg = f"Middleware must be callable, got {handler!r}."
            raise TypeError(msg)

    async def composed(context: Any, next: Next | None = None) -> Any:
        last = -1

        async def dispatch(index: int) -> Any:
            nonlocal last
            if index <= last:
                msg = "next() called multiple times"
                raise RuntimeError(msg)
            last = index
            if index == len(chain):
                return await (next or _done)()
            return await invoke(chain[index], context, partial(dispatch, index + 1))

        return await dispatch(0)

    return composed
