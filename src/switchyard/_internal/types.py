"""Shared type aliases used across switchyard modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# Continuation handed to every handler: ``await next()`` resumes the chain
Next: TypeAlias = Callable[[], Awaitable[Any]]

# Middleware-shaped handler: ``handler(context, next)``, sync or async
Handler: TypeAlias = Callable[..., Any]
