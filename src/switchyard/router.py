"""Router: registration façade over a route table.

A router is itself a ``handler(context, next)``, so it can be mounted in
another router or handed to a host adapter directly::

    users = Router()
    users.get("/:id", show_user)

    api = Router()
    api.use("/users", users)
    api.all(not_found)

Every registration method accepts an optional leading path, one or more
handlers (nested lists are flattened), and an optional trailing options
mapping; keyword arguments are options too. Registrations return the
router, so they chain.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from switchyard._internal.compose import compose
from switchyard._internal.types import Handler, Next
from switchyard.config import RouteOptions
from switchyard.context import Context
from switchyard.errors import ConfigurationError
from switchyard.routing.dispatch import Dispatcher
from switchyard.routing.layer import Layer, RouteTable
from switchyard.routing.mount import MountLayer

# Verbs with a dedicated registration method
METHODS: tuple[str, ...] = (
    "GET",
    "POST",
    "PUT",
    "DELETE",
    "PATCH",
    "HEAD",
    "OPTIONS",
    "TRACE",
    "CONNECT",
)

# (method, path, action) wired by Router(actions=...), in registration order
ACTIONS: tuple[tuple[str, str, str], ...] = (
    ("GET", "/", "index"),
    ("GET", "/new", "new"),
    ("POST", "/", "create"),
    ("GET", "/:id", "show"),
    ("GET", "/:id/edit", "edit"),
    ("PUT", "/:id", "update"),
    ("DELETE", "/:id", "destroy"),
)

_ACTION_KEYS = frozenset({"use", *(action for _, _, action in ACTIONS)})


async def _noop() -> None:
    return None


def _flatten(items: Iterable[Any]) -> Iterable[Any]:
    for item in items:
        if isinstance(item, (list, tuple)):
            yield from _flatten(item)
        else:
            yield item


class Router:
    """Ordered route table plus the methods that fill it.

    Args:
        actions: Optional mapping of conventional action names
            (``index``, ``new``, ``create``, ``show``, ``edit``,
            ``update``, ``destroy``) to handlers, plus an optional
            ``use`` handler installed before all of them.
        options: Default route options for every registration on this
            router. Keyword arguments are merged on top.

    Defaults apply to this router's own table only; a mounted router
    keeps its own.
    """

    __slots__ = ("_defaults", "_table")

    def __init__(
        self,
        actions: Mapping[str, Handler | Iterable[Handler]] | None = None,
        options: RouteOptions | Mapping[str, Any] | None = None,
        **defaults: Any,
    ) -> None:
        self._defaults = RouteOptions().merge(options, defaults)
        self._table = RouteTable()
        if actions is not None:
            self._register_actions(actions)

    # -- Entry point --

    async def __call__(self, context: Context, next: Next | None = None) -> Any:
        """Dispatch *context* through this router's table.

        *next* runs once the table is exhausted without a handler taking
        over. The table is frozen by the first call.
        """
        self._table.freeze()
        return await Dispatcher(self._table, context, next or _noop).proceed()

    # -- Introspection --

    @property
    def routes(self) -> tuple[Layer, ...]:
        """Registered layers, in registration order."""
        return tuple(self._table)

    @property
    def defaults(self) -> RouteOptions:
        """Default options merged into every registration."""
        return self._defaults

    # -- Registration --

    def route(self, method: str, *args: Any, **options: Any) -> "Router":
        """Register handlers for *method* (any verb, e.g. ``"PROPFIND"``)."""
        path, handler, opts = self._normalize(args, options)
        self._table.append(Layer.build(method, path, handler, opts))
        return self

    def all(self, *args: Any, **options: Any) -> "Router":
        """Register handlers for every method."""
        path, handler, opts = self._normalize(args, options)
        self._table.append(Layer.build(None, path, handler, opts))
        return self

    def use(self, *args: Any, **options: Any) -> "Router":
        """Mount a router or middleware under an optional path prefix.

        Inside the mount, ``path``/``url`` are relative to the prefix.
        The prefix is never anchored at the end, whatever ``end`` says.
        """
        path, handler, opts = self._normalize(args, options)
        self._table.append(MountLayer.at(path, handler, opts))
        return self

    def get(self, *args: Any, **options: Any) -> "Router":
        return self.route("GET", *args, **options)

    def post(self, *args: Any, **options: Any) -> "Router":
        return self.route("POST", *args, **options)

    def put(self, *args: Any, **options: Any) -> "Router":
        return self.route("PUT", *args, **options)

    def delete(self, *args: Any, **options: Any) -> "Router":
        return self.route("DELETE", *args, **options)

    def patch(self, *args: Any, **options: Any) -> "Router":
        return self.route("PATCH", *args, **options)

    def head(self, *args: Any, **options: Any) -> "Router":
        return self.route("HEAD", *args, **options)

    def options(self, *args: Any, **options: Any) -> "Router":
        return self.route("OPTIONS", *args, **options)

    def trace(self, *args: Any, **options: Any) -> "Router":
        return self.route("TRACE", *args, **options)

    def connect(self, *args: Any, **options: Any) -> "Router":
        return self.route("CONNECT", *args, **options)

    # -- Internal --

    def _normalize(
        self,
        args: tuple[Any, ...],
        options: Mapping[str, Any],
    ) -> tuple[str | None, Handler, RouteOptions]:
        """Split ``(path?, *handlers, options?)`` into its three parts."""
        rest = list(args)
        path: str | None = None
        if rest and isinstance(rest[0], str):
            path = rest.pop(0)

        overrides: RouteOptions | Mapping[str, Any] | None = None
        if rest and isinstance(rest[-1], (Mapping, RouteOptions)):
            overrides = rest.pop()

        handlers = list(_flatten(rest))
        if not handlers:
            msg = "Expected a handler but got none."
            raise ConfigurationError(msg)
        for handler in handlers:
            if not callable(handler):
                msg = f"Handlers must be callable, got {handler!r}."
                raise ConfigurationError(msg)

        handler = handlers[0] if len(handlers) == 1 else compose(handlers)
        return path, handler, self._defaults.merge(overrides, options)

    def _register_actions(self, actions: Mapping[str, Handler | Iterable[Handler]]) -> None:
        unknown = set(actions) - _ACTION_KEYS
        if unknown:
            expected = ", ".join(sorted(_ACTION_KEYS))
            msg = f"Unknown router action(s) {sorted(unknown)}. Expected any of: {expected}."
            raise ConfigurationError(msg)

        if actions.get("use") is not None:
            self.use(actions["use"])

        for method, path, action in ACTIONS:
            handler = actions.get(action)
            if handler is None:
                continue
            self.route(method, path, handler)
