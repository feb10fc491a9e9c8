"""Pydantic models for normalized ledger data."""

from pydantic import BaseModel, ConfigDict, Field

from blockhash_colors.helpers.constants import DEFAULT_ALGORITHM


class BlockMetadata(BaseModel):
    """Informational block fields; never used for color derivation."""

    height: int | None = Field(default=None, description="Block height")
    timestamp: int | None = Field(default=None, description="Unix timestamp")
    tx_count: int = Field(default=0, description="Transaction count", alias="txCount")
    size: int | None = Field(default=None, description="Block size in bytes")

    model_config = ConfigDict(populate_by_name=True)


class LedgerData(BaseModel):
    """Result of normalizing a raw block response."""

    hash: str = Field(
        default="", description="Lowercase hex hash, empty when unusable"
    )
    hashes: list[str] = Field(
        default_factory=list, description="Every valid hash in the payload"
    )
    metadata: BlockMetadata = Field(default_factory=BlockMetadata)
    algorithm: str = DEFAULT_ALGORITHM

    @property
    def has_hash(self) -> bool:
        """Whether the payload carried a usable hash."""
        return bool(self.hash)


__all__ = ["BlockMetadata", "LedgerData"]
