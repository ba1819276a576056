"""Path template compiler.

Turns an Express-style path template into an anchored regular expression
plus the ordered list of keys its capture groups fill::

    "/users"              -> static match
    "/users/:id"          -> one named segment
    "/users/:id?"         -> optional segment (the leading "/" goes with it)
    "/files/:path*"       -> zero or more segments
    "/files/:path+"       -> one or more segments
    "/users/:id(\\d+)"    -> custom group pattern
    "/assets/(.*)"        -> unnamed group, keyed by position ("0", "1", ...)
    "/static/*"           -> anything, keyed by position

Compilation happens once, at registration time. Errors are
``ConfigurationError`` so that a bad template fails setup, not a request.
"""

import re
from dataclasses import dataclass

from switchyard.config import RouteOptions
from switchyard.errors import ConfigurationError

DEFAULT_DELIMITER = "/"

_TOKEN = re.compile(
    # "\:" and friends: a literal character
    r"(\\.)"
    # optional prefix, then ":name(group)", ":name", or "(group)", then a modifier
    r"|([/.])?(?:(?::(\w+)(?:\(((?:\\.|[^\\()])+)\))?|\(((?:\\.|[^\\()])+)\))([+*?])?"
    # or a bare asterisk
    r"|(\*))"
)


@dataclass(frozen=True, slots=True)
class Key:
    """One capture group declared by a template.

    ``name`` is the parameter name, or the group's position (as a string)
    for unnamed groups.
    """

    name: str
    prefix: str = ""
    delimiter: str = DEFAULT_DELIMITER
    optional: bool = False
    repeat: bool = False
    partial: bool = False
    asterisk: bool = False
    pattern: str = r"[^/]+?"


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """A compiled template: the regex and the keys of its groups, in order."""

    template: str
    regex: re.Pattern[str]
    keys: tuple[Key, ...]

    def match(self, path: str) -> re.Match[str] | None:
        return self.regex.match(path)


def parse_template(template: str) -> list[str | Key]:
    """Split *template* into literal strings and ``Key`` tokens.

    Examples::

        "/users"        -> ["/users"]
        "/users/:id"    -> ["/users", Key("id", prefix="/")]
        "/:a.:ext?"     -> [Key("a", prefix="/"), Key("ext", prefix=".", optional=True)]
    """
    tokens: list[str | Key] = []
    position = 0
    index = 0
    path = ""

    for match in _TOKEN.finditer(template):
        path += template[index : match.start()]
        index = match.end()
        escaped, prefix, name, capture, group, modifier, asterisk = match.groups()

        if escaped:
            path += escaped[1]
            continue

        following = template[index] if index < len(template) else None
        if path:
            tokens.append(path)
            path = ""

        if name is None:
            name = str(position)
            position += 1

        delimiter = prefix or DEFAULT_DELIMITER
        pattern = capture or group
        if pattern is None:
            pattern = ".*" if asterisk else f"[^{re.escape(delimiter)}]+?"

        tokens.append(
            Key(
                name=name,
                prefix=prefix or "",
                delimiter=delimiter,
                optional=modifier in ("?", "*"),
                repeat=modifier in ("+", "*"),
                partial=prefix is not None and following is not None and following != prefix,
                asterisk=asterisk is not None,
                pattern=pattern,
            )
        )

    path += template[index:]
    if path:
        tokens.append(path)
    return tokens


def _tokens_to_regex(tokens: list[str | Key], options: RouteOptions) -> str:
    route = ""
    for token in tokens:
        if isinstance(token, str):
            route += re.escape(token)
            continue

        prefix = re.escape(token.prefix)
        capture = f"(?:{token.pattern})"
        if token.repeat:
            capture += f"(?:{prefix}{capture})*"
        if token.optional:
            if token.partial:
                capture = f"{prefix}({capture})?"
            else:
                capture = f"(?:{prefix}({capture}))?"
        else:
            capture = f"{prefix}({capture})"
        route += capture

    delimiter = re.escape(DEFAULT_DELIMITER)
    ends_with_delimiter = route.endswith(delimiter)

    # Lenient mode: a single trailing "/" is optional
    if not options.strict:
        if ends_with_delimiter:
            route = route[: -len(delimiter)]
        route += rf"(?:{delimiter}(?=\Z))?"

    if options.end:
        route += r"\Z"
    elif not (options.strict and ends_with_delimiter):
        # Prefix mode stops at a segment boundary: "/mount" must not match "/mountain"
        route += rf"(?={delimiter}|\Z)"

    return "^" + route


def compile_pattern(template: str, options: RouteOptions | None = None) -> CompiledPattern:
    """Compile *template* under *options*.

    Raises ``ConfigurationError`` for duplicate parameter names or a
    group pattern that is not a valid regular expression.
    """
    opts = options or RouteOptions()
    tokens = parse_template(template)
    keys = tuple(token for token in tokens if isinstance(token, Key))

    seen: set[str] = set()
    for key in keys:
        if key.name in seen:
            msg = f"Duplicate parameter {key.name!r} in route path {template!r}."
            raise ConfigurationError(msg)
        seen.add(key.name)

    source = _tokens_to_regex(tokens, opts)
    try:
        regex = re.compile(source, 0 if opts.sensitive else re.IGNORECASE)
    except re.error as exc:
        msg = f"Invalid route path {template!r}: {exc}"
        raise ConfigurationError(msg) from exc

    return CompiledPattern(template=template, regex=regex, keys=keys)
