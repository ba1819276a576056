"""Tests for switchyard.routing.params: capture decoding."""

import pytest

from switchyard.errors import BadRequest
from switchyard.routing.params import decode_param


class TestDecodeParam:
    def test_plain_passthrough(self) -> None:
        assert decode_param("abc") == "abc"

    def test_utf8(self) -> None:
        assert decode_param("caf%C3%A9") == "café"

    def test_encoded_slash(self) -> None:
        assert decode_param("a%2Fb") == "a/b"

    def test_plus_is_not_space(self) -> None:
        assert decode_param("a+b") == "a+b"

    def test_stray_percent(self) -> None:
        with pytest.raises(BadRequest) as exc_info:
            decode_param("%zz")
        assert exc_info.value.status == 400
        assert "%zz" in exc_info.value.detail

    def test_truncated_escape(self) -> None:
        with pytest.raises(BadRequest):
            decode_param("abc%A")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(BadRequest):
            decode_param("%FF")
