"""Parsing utilities for common data transformations."""

import math
import re

from typing import Any


HEX_HASH_PATTERN = re.compile(r"^[0-9a-fA-F]+$")


def is_hex_string(value: Any) -> bool:
    """Check that a value is a non-empty hexadecimal string.

    Example:
        >>> is_hex_string("aA01")
        True
        >>> is_hex_string("0xaa")
        False
    """
    return isinstance(value, str) and HEX_HASH_PATTERN.fullmatch(value) is not None


def parse_hex_int(hex_value: str | None, default: int = 0) -> int:
    """Parse hex string to integer.

    Args:
        hex_value: Hex-encoded string or None
        default: Default value if hex_value is None

    Returns:
        int: Parsed integer value

    Example:
        >>> parse_hex_int("0xff")
        255
        >>> parse_hex_int(None, 0)
        0
    """
    if hex_value is None:
        return default
    return int(hex_value, 16)


def parse_optional_int(value: Any) -> int | None:
    """Best-effort conversion of an explorer field to an integer.

    Block explorers disagree on number encoding: Bitcoin APIs send plain
    integers, Ethereum-style APIs send ``0x`` hex strings.

    Args:
        value: Raw field value

    Returns:
        int | None: Parsed integer, or None if the value is missing or unparseable

    Example:
        >>> parse_optional_int("0x10")
        16
        >>> parse_optional_int("812345")
        812345
        >>> parse_optional_int("n/a") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # JSON decoders accept NaN and Infinity
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        try:
            if text.lower().startswith("0x"):
                return parse_hex_int(text)
            return int(text)
        except ValueError:
            return None
    return None


__all__ = [
    "HEX_HASH_PATTERN",
    "is_hex_string",
    "parse_hex_int",
    "parse_optional_int",
]
