"""Exception hierarchy for the block hash color pipeline.

Every error that crosses a component boundary inherits from
:class:`BlockhashColorsError`, so the orchestrator and the CLI can report a
failed run without leaking raw ``httpx`` or ``OSError`` exceptions.

Hierarchy
---------
BlockhashColorsError
├── ConfigError
├── SourceUnavailableError
├── ResponseShapeError
├── EmptyInputError
└── PublishPartialFailureError
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from blockhash_colors.publish.models import PublishResult


class BlockhashColorsError(Exception):
    """Base exception for all pipeline errors."""


class ConfigError(BlockhashColorsError):
    """Raised when the configuration file cannot be read or validated."""


class SourceUnavailableError(BlockhashColorsError):
    """Raised when the hash source cannot deliver a block hash.

    Either the retry budget was exhausted on server or network failures,
    or the upstream rejected the request with a 4xx status.
    """

    def __init__(self, message: str, *, attempts: int = 0) -> None:
        super().__init__(message)
        self.attempts = attempts


class ResponseShapeError(BlockhashColorsError):
    """Raised when an upstream payload does not carry a block hash."""


class EmptyInputError(BlockhashColorsError):
    """Raised when palette derivation is invoked without a usable hash."""


class PublishPartialFailureError(BlockhashColorsError):
    """Raised when one or more output formats failed to write."""

    def __init__(self, result: PublishResult) -> None:
        super().__init__("; ".join(result.errors) or "Publish failed")
        self.result = result


__all__ = [
    "BlockhashColorsError",
    "ConfigError",
    "EmptyInputError",
    "PublishPartialFailureError",
    "ResponseShapeError",
    "SourceUnavailableError",
]
