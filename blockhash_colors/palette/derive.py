"""Palette derivation engine.

The normalized block hash is hashed again with a 256-bit digest. Each
palette color consumes a 6-hex-character window of that digest:

    chars 0-2  hue         0x000-0xfff  -> 0-360 degrees
    chars 3-4  saturation  0x00-0xff    -> saturation range
    char  5    lightness   0x0-0xf      -> lightness range

Window ``i`` starts at ``(i * 6) % 64`` and wraps around the end of the
digest, so palettes of more than ten colors reuse earlier digest bytes.
Existing palettes depend on this layout; it must not change.
"""

import hashlib

from blockhash_colors.exceptions import EmptyInputError
from blockhash_colors.helpers.config import ColorDerivationConfig
from blockhash_colors.helpers.constants import DIGEST_HEX_LENGTH, SEGMENT_LENGTH
from blockhash_colors.helpers.logging import get_logger
from blockhash_colors.ledger.models import BlockMetadata
from blockhash_colors.palette.color import hsl_to_css, hsl_to_hex, round_half_up
from blockhash_colors.palette.models import HSL, Color, ColorSwatch, Palette


logger = get_logger(__name__)


def compute_digest(value: str, algorithm: str = "sha256") -> str:
    """Hex digest of the UTF-8 encoding of ``value``.

    Args:
        value: Normalized block hash
        algorithm: hashlib name of a 256-bit digest

    Returns:
        str: 64 lowercase hex characters

    Raises:
        ValueError: If the algorithm does not produce a 256-bit digest
    """
    digest = hashlib.new(algorithm, value.encode("utf-8")).hexdigest()
    if len(digest) != DIGEST_HEX_LENGTH:
        msg = f"{algorithm} is not a 256-bit digest"
        raise ValueError(msg)
    return digest


def digest_window(digest: str, index: int) -> str:
    """Return the 6-character window used for palette entry ``index``.

    Example:
        >>> digest_window("0123456789" * 6 + "abcd", 10)
        'abcd01'
    """
    offset = (index * SEGMENT_LENGTH) % len(digest)
    return (digest + digest)[offset : offset + SEGMENT_LENGTH]


def _scale(fraction: float, bounds: tuple[float, float]) -> float:
    low, high = bounds
    return low + fraction * (high - low)


def make_color(hsl: HSL) -> Color:
    """Build a Color whose hex and css notations match ``hsl``."""
    return Color(hsl=hsl, hex=hsl_to_hex(hsl), css=hsl_to_css(hsl))


def derive_single_color(window: str, config: ColorDerivationConfig) -> Color:
    """Map one 6-hex-character digest window to a color.

    Args:
        window: Six hex characters taken from the digest
        config: Saturation and lightness ranges

    Returns:
        Color: The derived color
    """
    hue = int(window[0:3], 16) / 4095 * 360
    saturation = _scale(int(window[3:5], 16) / 255, config.saturation_range)
    lightness = _scale(int(window[5:6], 16) / 15, config.lightness_range)

    return make_color(
        HSL(
            h=round_half_up(hue),
            s=round_half_up(saturation * 100),
            l=round_half_up(lightness * 100),
        )
    )


def complementary(color: Color) -> Color:
    """Rotate a color's hue by 180 degrees, keeping saturation and lightness."""
    return make_color(
        HSL(h=(color.hsl.h + 180) % 360, s=color.hsl.s, l=color.hsl.l)
    )


def derive(
    normalized_hash: str,
    config: ColorDerivationConfig | None = None,
    metadata: BlockMetadata | None = None,
) -> Palette:
    """Derive a deterministic palette from a normalized block hash.

    Args:
        normalized_hash: Lowercase hex hash from the normalizer
        config: Derivation parameters (defaults apply when omitted)
        metadata: Block metadata carried along for the outputs

    Returns:
        Palette: ``palette_size`` swatches plus the complementary accent

    Raises:
        EmptyInputError: If ``normalized_hash`` is empty

    Example:
        ```python
        from blockhash_colors.palette.derive import derive

        palette = derive("00000000000000000001d4ae")
        print(palette.primary.hex, palette.accent.hex)
        ```
    """
    if not normalized_hash:
        msg = "No hash provided for color derivation"
        raise EmptyInputError(msg)

    config = config or ColorDerivationConfig()
    digest = compute_digest(normalized_hash, config.algorithm)

    swatches = []
    for index in range(config.palette_size):
        color = derive_single_color(digest_window(digest, index), config)
        swatches.append(ColorSwatch(index=index, **color.model_dump()))

    palette = Palette(
        source_hash=normalized_hash,
        algorithm=config.algorithm,
        swatches=swatches,
        accent=complementary(swatches[0]),
        metadata=metadata or BlockMetadata(),
    )
    logger.info(
        "Derived %d colors (primary=%s, accent=%s)",
        len(swatches),
        palette.primary.hex if palette.primary else None,
        palette.accent.hex if palette.accent else None,
    )
    return palette


__all__ = [
    "complementary",
    "compute_digest",
    "derive",
    "derive_single_color",
    "digest_window",
    "make_color",
]
