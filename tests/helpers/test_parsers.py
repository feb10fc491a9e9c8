"""Tests for parsing utilities."""

import pytest

from blockhash_colors.helpers.parsers import (
    is_hex_string,
    parse_hex_int,
    parse_optional_int,
)


class TestIsHexString:
    """Tests for is_hex_string function."""

    def test_accepts_mixed_case_hex(self) -> None:
        """Test that upper and lower case hex digits are accepted."""
        assert is_hex_string("00000000000000000001d4ae")
        assert is_hex_string("ABCdef0123")

    def test_rejects_prefixed_hex(self) -> None:
        """Test that a 0x prefix is not part of a block hash."""
        assert not is_hex_string("0xabc")

    @pytest.mark.parametrize("value", ["", "xyz", "ab cd", "abc\n", None, 123, ["ab"]])
    def test_rejects_non_hex(self, value: object) -> None:
        """Test that empty strings, non-hex text and non-strings are rejected."""
        assert not is_hex_string(value)


class TestParseHexInt:
    """Tests for parse_hex_int function."""

    def test_parses_prefixed_and_bare_hex(self) -> None:
        """Test parsing hex with and without 0x prefix."""
        assert parse_hex_int("0xff") == 255
        assert parse_hex_int("10") == 16

    def test_none_returns_default(self) -> None:
        """Test None falls back to the default."""
        assert parse_hex_int(None) == 0
        assert parse_hex_int(None, 7) == 7


class TestParseOptionalInt:
    """Tests for parse_optional_int function."""

    def test_integers_pass_through(self) -> None:
        """Test that integers are returned unchanged."""
        assert parse_optional_int(812345) == 812345

    def test_float_truncated(self) -> None:
        """Test that floats are truncated."""
        assert parse_optional_int(1700000000.9) == 1700000000

    def test_decimal_and_hex_strings(self) -> None:
        """Test decimal and 0x-prefixed strings."""
        assert parse_optional_int(" 42 ") == 42
        assert parse_optional_int("0x10") == 16

    @pytest.mark.parametrize(
        "value",
        [
            None,
            True,
            "n/a",
            "0xzz",
            {"height": 1},
            float("nan"),
            float("inf"),
            float("-inf"),
        ],
    )
    def test_unparseable_returns_none(self, value: object) -> None:
        """Test that missing, boolean, non-finite and malformed values yield None."""
        assert parse_optional_int(value) is None
