"""In-memory hash source for offline derivation and tests."""

from typing import Any

from blockhash_colors.exceptions import ResponseShapeError, SourceUnavailableError
from blockhash_colors.source.client import extract_latest_block


class StaticHashSource:
    """Serves a fixed payload as if it came from a block explorer."""

    def __init__(
        self,
        payload: str | dict[str, Any] | list[Any],
        blocks: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        """Initialize the static source.

        Args:
            payload: A hash string, a block object or a list of blocks
            blocks: Optional block details keyed by hash, served by fetch_block
        """
        self.payload = {"hash": payload} if isinstance(payload, str) else payload
        self.blocks = blocks or {}

    async def fetch_latest_block(self) -> dict[str, Any]:
        """Return the latest block of the payload.

        Raises:
            SourceUnavailableError: If the payload carries no block hash
        """
        try:
            return extract_latest_block(self.payload)
        except ResponseShapeError as e:
            raise SourceUnavailableError(str(e), attempts=1) from e

    async def fetch_block(self, block_hash: str) -> dict[str, Any] | None:
        """Return stored details for ``block_hash``, if any."""
        return self.blocks.get(block_hash)


__all__ = ["StaticHashSource"]
