"""Protocols for the pipeline's two side-effecting edges.

The orchestrator reads block data through a :class:`HashSource` and writes
rendered files through an :class:`OutputWriter`. Callers pick the concrete
implementation (network or in-memory source, filesystem or in-memory
writer); nothing is detected at runtime.
"""

from typing import Any, Protocol


class HashSource(Protocol):
    """Contract for anything that can supply the latest block."""

    async def fetch_latest_block(self) -> dict[str, Any]:
        """Return the latest block object, carrying a ``hash`` or ``id`` field.

        Raises:
            SourceUnavailableError: If no block could be obtained.
        """
        ...  # pragma: no cover

    async def fetch_block(self, block_hash: str) -> dict[str, Any] | None:
        """Return full details for ``block_hash``, or None if unavailable."""
        ...  # pragma: no cover


class OutputWriter(Protocol):
    """Contract for output sinks used by the publisher."""

    def ensure_target(self) -> None:
        """Prepare the destination; calling it repeatedly is harmless."""
        ...  # pragma: no cover

    def write(self, name: str, content: str) -> str:
        """Write ``content`` under ``name`` and return where it landed.

        Raises:
            OSError: If the content could not be stored.
        """
        ...  # pragma: no cover


__all__ = ["HashSource", "OutputWriter"]
