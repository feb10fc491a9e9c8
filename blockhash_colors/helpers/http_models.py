"""Type definitions for HTTP responses."""

from typing import Any


# Block explorer payloads: a single block object or a list of blocks.
# Any is used for nested values since pyright has trouble with recursive
# type aliases
type JsonResponse = dict[str, Any] | list[Any]

__all__ = ["JsonResponse"]
