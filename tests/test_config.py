"""Tests for switchyard.config: route options and host config."""

import pytest

from switchyard.config import AppConfig, RouteOptions
from switchyard.errors import ConfigurationError


class TestRouteOptions:
    def test_defaults(self) -> None:
        opts = RouteOptions()
        assert opts.sensitive is False
        assert opts.strict is False
        assert opts.end is True

    def test_frozen(self) -> None:
        opts = RouteOptions()
        with pytest.raises(AttributeError):
            opts.sensitive = True  # type: ignore[misc]

    def test_merge_mapping_replaces_named_keys_only(self) -> None:
        base = RouteOptions(sensitive=True)
        merged = base.merge({"strict": True})
        assert merged == RouteOptions(sensitive=True, strict=True)
        assert base == RouteOptions(sensitive=True)

    def test_merge_later_wins(self) -> None:
        merged = RouteOptions().merge({"sensitive": True}, {"sensitive": False})
        assert merged.sensitive is False

    def test_merge_skips_none(self) -> None:
        assert RouteOptions().merge(None, {}) == RouteOptions()

    def test_merge_route_options_replaces_everything(self) -> None:
        merged = RouteOptions(sensitive=True).merge(RouteOptions(strict=True))
        assert merged == RouteOptions(strict=True)

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown route option 'caseless'"):
            RouteOptions().merge({"caseless": True})

    def test_non_bool_value(self) -> None:
        with pytest.raises(ConfigurationError, match="must be a bool"):
            RouteOptions().merge({"end": "no"})


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.host == "127.0.0.1"
        assert config.port == 8000
        assert config.debug is False
        assert config.log_level == "info"

    def test_override(self) -> None:
        config = AppConfig(port=3000, debug=True)
        assert config.port == 3000
        assert config.debug is True
