"""Tests for switchyard.routing.pattern: path template compiler."""

import pytest

from switchyard.config import RouteOptions
from switchyard.errors import ConfigurationError
from switchyard.routing.pattern import Key, compile_pattern, parse_template


def _groups(template: str, path: str, **options: bool) -> tuple[str | None, ...] | None:
    m = compile_pattern(template, RouteOptions(**options)).match(path)
    return None if m is None else m.groups()


class TestParseTemplate:
    def test_static(self) -> None:
        assert parse_template("/users") == ["/users"]

    def test_named_param(self) -> None:
        tokens = parse_template("/users/:id")
        assert tokens == ["/users", Key(name="id", prefix="/")]

    def test_modifiers(self) -> None:
        optional, repeat_any, repeat_some = (
            parse_template("/:a?")[0],
            parse_template("/:b*")[0],
            parse_template("/:c+")[0],
        )
        assert isinstance(optional, Key)
        assert optional.optional and not optional.repeat
        assert isinstance(repeat_any, Key)
        assert repeat_any.optional and repeat_any.repeat
        assert isinstance(repeat_some, Key)
        assert repeat_some.repeat and not repeat_some.optional

    def test_unnamed_groups_are_numbered(self) -> None:
        tokens = parse_template("/(\\d+)/*")
        keys = [t for t in tokens if isinstance(t, Key)]
        assert [k.name for k in keys] == ["0", "1"]
        assert keys[1].asterisk is True

    def test_escaped_colon_is_literal(self) -> None:
        assert parse_template("/a\\:b") == ["/a:b"]

    def test_dot_prefix(self) -> None:
        tokens = parse_template("/:file.:ext")
        ext = tokens[1]
        assert isinstance(ext, Key)
        assert ext.prefix == "."
        assert ext.delimiter == "."


class TestNamedParams:
    def test_single_segment(self) -> None:
        assert _groups("/:id", "/abc") == ("abc",)

    def test_does_not_span_segments(self) -> None:
        assert _groups("/:id", "/abc/def") is None

    def test_multiple(self) -> None:
        assert _groups("/:foo/:bar", "/123/456") == ("123", "456")

    def test_custom_group(self) -> None:
        assert _groups("/:id(\\d+)", "/42") == ("42",)
        assert _groups("/:id(\\d+)", "/abc") is None

    def test_optional_absent(self) -> None:
        assert _groups("/:id?", "/") == (None,)

    def test_optional_present(self) -> None:
        assert _groups("/:id?", "/abc") == ("abc",)

    def test_zero_or_more(self) -> None:
        assert _groups("/files/:path*", "/files") == (None,)
        assert _groups("/files/:path*", "/files/a/b/c") == ("a/b/c",)

    def test_one_or_more(self) -> None:
        assert _groups("/files/:path+", "/files") is None
        assert _groups("/files/:path+", "/files/a/b") == ("a/b",)

    def test_file_and_extension(self) -> None:
        assert _groups("/:file.:ext", "/photo.jpg") == ("photo", "jpg")

    def test_unnamed_group(self) -> None:
        assert _groups("/assets/(.*)", "/assets/css/site.css") == ("css/site.css",)

    def test_asterisk(self) -> None:
        assert _groups("/static/*", "/static/js/app.js") == ("js/app.js",)


class TestOptions:
    def test_case_insensitive_by_default(self) -> None:
        assert _groups("/test", "/TEST") == ()

    def test_sensitive(self) -> None:
        assert _groups("/test", "/test", sensitive=True) == ()
        assert _groups("/test", "/TEST", sensitive=True) is None

    def test_trailing_slash_lenient_by_default(self) -> None:
        assert _groups("/test", "/test/") == ()

    def test_strict_trailing_slash(self) -> None:
        assert _groups("/test", "/test/", strict=True) is None
        assert _groups("/test/", "/test/", strict=True) == ()

    def test_anchored_by_default(self) -> None:
        assert _groups("/mount", "/mount/app") is None

    def test_prefix_mode(self) -> None:
        m = compile_pattern("/mount", RouteOptions(end=False)).match("/mount/app")
        assert m is not None
        assert m.group(0) == "/mount"

    def test_prefix_mode_respects_segment_boundary(self) -> None:
        assert _groups("/mount", "/mountain", end=False) is None

    def test_prefix_mode_consumes_trailing_slash(self) -> None:
        m = compile_pattern("/mount", RouteOptions(end=False)).match("/mount/")
        assert m is not None
        assert m.group(0) == "/mount/"

    def test_root_prefix_matches_everything(self) -> None:
        m = compile_pattern("/", RouteOptions(end=False)).match("/anything")
        assert m is not None
        assert m.group(0) == ""

    def test_trailing_newline_is_not_ignored(self) -> None:
        assert _groups("/test", "/test\n") is None


class TestCompileErrors:
    def test_duplicate_names(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate parameter 'id'"):
            compile_pattern("/:id/:id")

    def test_invalid_group_regex(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid route path"):
            compile_pattern("/:id([)")

    def test_keys_in_order(self) -> None:
        compiled = compile_pattern("/:user/posts/:post")
        assert [k.name for k in compiled.keys] == ["user", "post"]
        assert compiled.template == "/:user/posts/:post"
