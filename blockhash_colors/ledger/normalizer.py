"""Ledger normalizer.

Turns whatever the block explorer returned (a hash string, a block object
or a list of blocks) into a lowercase hex hash plus best-effort metadata.
An invalid hash is not an error here: it comes back as an empty string and
the derivation step refuses to work on it.
"""

import re

from typing import Any

from blockhash_colors.helpers.constants import DEFAULT_ALGORITHM
from blockhash_colors.helpers.logging import get_logger
from blockhash_colors.helpers.parsers import is_hex_string, parse_optional_int
from blockhash_colors.ledger.models import BlockMetadata, LedgerData


logger = get_logger(__name__)

_NON_HEX = re.compile(r"[^a-f0-9]")


def _preview(value: str) -> str:
    return f"{value[:16]}..." if len(value) > 16 else value


def parse_block_hash(block: Any) -> str | None:
    """Extract and validate the hash of a single block.

    Args:
        block: A hash string or a block object with a ``hash`` or ``id`` field

    Returns:
        str | None: The raw hash if it is valid hex, otherwise None

    Example:
        >>> parse_block_hash({"id": "00ab"})
        '00ab'
        >>> parse_block_hash({"hash": "0xzz"}) is None
        True
    """
    if not block:
        return None

    if isinstance(block, str):
        candidate: Any = block
    elif isinstance(block, dict):
        candidate = block.get("hash") or block.get("id")
    else:
        candidate = None

    if is_hex_string(candidate):
        logger.debug("Parsed hash: %s", _preview(candidate))
        return candidate

    logger.warning("Invalid hash format: %r", candidate)
    return None


def parse_block_array(blocks: Any) -> list[str]:
    """Extract every valid hash from a list of blocks, preserving order."""
    if not isinstance(blocks, list) or not blocks:
        return []

    hashes = [h for h in (parse_block_hash(block) for block in blocks) if h]
    logger.debug("Parsed %d hashes from %d blocks", len(hashes), len(blocks))
    return hashes


def normalize_hash(value: str | None) -> str:
    """Lowercase a hash and drop any character outside ``[a-f0-9]``.

    Example:
        >>> normalize_hash("aA01")
        'aa01'
        >>> normalize_hash(None)
        ''
    """
    if not value:
        return ""
    return _NON_HEX.sub("", value.lower())


def extract_block_metadata(block: Any) -> BlockMetadata:
    """Pull height, timestamp, transaction count and size from a block.

    Field names differ between explorers, so a few aliases are tried for
    each value. Missing or malformed values fall back to defaults; this
    never raises.

    Args:
        block: Raw block object

    Returns:
        BlockMetadata: Extracted metadata (all defaults for non-objects)
    """
    if not isinstance(block, dict):
        return BlockMetadata()

    transactions = block.get("tx") or block.get("transactions")
    if isinstance(transactions, list):
        tx_count = len(transactions)
    else:
        tx_count = (
            parse_optional_int(block.get("n_tx"))
            or parse_optional_int(block.get("tx_count"))
            or 0
        )

    height = block.get("height")
    if height is None:
        height = block.get("block_height", block.get("number"))

    timestamp = block.get("timestamp")
    if timestamp is None:
        timestamp = block.get("time")

    return BlockMetadata(
        height=parse_optional_int(height),
        timestamp=parse_optional_int(timestamp),
        tx_count=tx_count,
        size=parse_optional_int(block.get("size")),
    )


def normalize(raw: Any, algorithm: str = DEFAULT_ALGORITHM) -> LedgerData:
    """Normalize a raw block response.

    Args:
        raw: Hash string, block object or list of block objects (newest first)
        algorithm: Digest algorithm recorded alongside the hash

    Returns:
        LedgerData: Normalized hash (empty if unusable), all hashes and metadata

    Example:
        >>> normalize("aA01").hash
        'aa01'
        >>> normalize("XYZ").hash
        ''
    """
    if not raw:
        logger.warning("No raw data provided")
        return LedgerData(algorithm=algorithm)

    if isinstance(raw, list):
        hashes = parse_block_array(raw)
        block_hash = hashes[0] if hashes else None
        metadata = extract_block_metadata(raw[0])
    else:
        block_hash = parse_block_hash(raw)
        hashes = [block_hash] if block_hash else []
        metadata = extract_block_metadata(raw)

    normalized = normalize_hash(block_hash)
    logger.info(
        "Normalized hash %s (%d hashes, height=%s)",
        _preview(normalized) if normalized else None,
        len(hashes),
        metadata.height,
    )

    return LedgerData(
        hash=normalized,
        hashes=[normalize_hash(h) for h in hashes],
        metadata=metadata,
        algorithm=algorithm,
    )


__all__ = [
    "extract_block_metadata",
    "normalize",
    "normalize_hash",
    "parse_block_array",
    "parse_block_hash",
]
