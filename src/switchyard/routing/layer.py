"""Route entries (layers), their match results, and the route table."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from switchyard._internal.invoke import invoke
from switchyard._internal.types import Handler, Next
from switchyard.config import RouteOptions
from switchyard.context import Context
from switchyard.errors import ConfigurationError
from switchyard.routing.params import decode_param
from switchyard.routing.pattern import CompiledPattern, compile_pattern


@dataclass(frozen=True, slots=True)
class Match:
    """Result of testing one layer against one path.

    Built fresh on every attempt and never stored on the layer, so two
    requests sharing a router cannot see each other's captures.

    ``captures`` is the positional view, ``params`` the named one.
    """

    prefix: str = ""
    captures: tuple[str | None, ...] = ()
    params: dict[str, str | None] = field(default_factory=dict)


_MATCH_ANY = Match()


@dataclass(frozen=True, slots=True)
class Layer:
    """One registered binding of method, path pattern, and handler.

    ``method=None`` matches every method; ``pattern=None`` matches every path.
    """

    method: str | None
    path: str | None
    pattern: CompiledPattern | None
    handler: Handler
    options: RouteOptions = RouteOptions()

    @classmethod
    def build(
        cls,
        method: str | None,
        path: str | None,
        handler: Handler,
        options: RouteOptions | None = None,
    ) -> "Layer":
        """Compile *path* once and bind it to *handler*."""
        opts = options or RouteOptions()
        pattern = compile_pattern(path, opts) if path else None
        return cls(
            method=method.upper() if method else None,
            path=path or None,
            pattern=pattern,
            handler=handler,
            options=opts,
        )

    def attempt(self, path: str) -> Match | None:
        """Test *path* against this layer's pattern.

        Returns ``None`` when the path does not match. Raises
        ``BadRequest`` when it matches but a capture cannot be decoded;
        that is a client error, not a miss.
        """
        if self.pattern is None:
            return _MATCH_ANY

        m = self.pattern.match(path)
        if m is None:
            return None

        captures = tuple(None if raw is None else decode_param(raw) for raw in m.groups())
        params = {key.name: value for key, value in zip(self.pattern.keys, captures, strict=True)}
        return Match(prefix=m.group(0), captures=captures, params=params)

    async def handle(self, context: Context, match: Match, next: Next) -> Any:
        """Run the handler for a request this layer matched."""
        return await invoke(self.handler, context, next)


class RouteTable:
    """Append-only, ordered list of layers owned by one router.

    Populated during setup. Frozen on the first dispatch; after that,
    ``append`` raises ``ConfigurationError``.
    """

    __slots__ = ("_frozen", "_layers")

    def __init__(self) -> None:
        self._layers: list[Layer] = []
        self._frozen = False

    def append(self, layer: Layer) -> None:
        if self._frozen:
            msg = (
                "Cannot register routes after the router has started serving. "
                "Register all routes before the first request."
            )
            raise ConfigurationError(msg)
        self._layers.append(layer)

    def freeze(self) -> None:
        """Stop accepting layers. Idempotent."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._layers)

    def __getitem__(self, index: int) -> Layer:
        return self._layers[index]

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._layers)
