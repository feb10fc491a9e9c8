"""Color space conversions between HSL, RGB and hex notation."""

import math

from blockhash_colors.palette.models import HSL


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    Python's ``round`` uses banker's rounding (``round(0.5) == 0``), which
    would shift some hue and channel values by one.

    Example:
        >>> round_half_up(2.5)
        3
    """
    return math.floor(value + 0.5)


def _clamp_channel(value: float) -> int:
    return max(0, min(255, round_half_up(value)))


def hsl_to_rgb(hsl: HSL) -> tuple[int, int, int]:
    """Convert HSL to 8-bit RGB using the six-sector chroma formula.

    Args:
        hsl: Color with hue in degrees, saturation and lightness in percent

    Returns:
        tuple[int, int, int]: Red, green and blue channels in [0, 255]

    Example:
        >>> hsl_to_rgb(HSL(h=0, s=100, l=50))
        (255, 0, 0)
    """
    s = hsl.s / 100
    l = hsl.l / 100  # noqa: E741

    c = (1 - abs(2 * l - 1)) * s
    x = c * (1 - abs((hsl.h / 60) % 2 - 1))
    m = l - c / 2

    if 0 <= hsl.h < 60:
        r, g, b = c, x, 0.0
    elif 60 <= hsl.h < 120:
        r, g, b = x, c, 0.0
    elif 120 <= hsl.h < 180:
        r, g, b = 0.0, c, x
    elif 180 <= hsl.h < 240:
        r, g, b = 0.0, x, c
    elif 240 <= hsl.h < 300:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return (
        _clamp_channel((r + m) * 255),
        _clamp_channel((g + m) * 255),
        _clamp_channel((b + m) * 255),
    )


def rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    """Format RGB channels as a lowercase ``#rrggbb`` string."""
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb`` (leading ``#`` optional) into RGB channels.

    Raises:
        ValueError: If the string is not six hex digits
    """
    value = hex_color.strip().removeprefix("#")
    if len(value) != 6:
        msg = f"Expected 6 hex digits, got {hex_color!r}"
        raise ValueError(msg)
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def hsl_to_hex(hsl: HSL) -> str:
    """Convert HSL to a ``#rrggbb`` string."""
    return rgb_to_hex(hsl_to_rgb(hsl))


def hsl_to_css(hsl: HSL) -> str:
    """Render HSL as a CSS ``hsl()`` expression.

    Example:
        >>> hsl_to_css(HSL(h=210, s=75, l=55))
        'hsl(210, 75%, 55%)'
    """
    return f"hsl({hsl.h}, {hsl.s}%, {hsl.l}%)"


def hex_to_hsl(hex_color: str) -> HSL:
    """Convert ``#rrggbb`` to HSL rounded to integers.

    The result is lossy: converting it back can differ from the input by a
    few units per channel.
    """
    red, green, blue = (channel / 255 for channel in hex_to_rgb(hex_color))

    high = max(red, green, blue)
    low = min(red, green, blue)
    lightness = (high + low) / 2

    if high == low:
        hue = saturation = 0.0
    else:
        delta = high - low
        saturation = (
            delta / (2 - high - low) if lightness > 0.5 else delta / (high + low)
        )
        if high == red:
            hue = ((green - blue) / delta + (6 if green < blue else 0)) / 6
        elif high == green:
            hue = ((blue - red) / delta + 2) / 6
        else:
            hue = ((red - green) / delta + 4) / 6

    return HSL(
        h=round_half_up(hue * 360),
        s=round_half_up(saturation * 100),
        l=round_half_up(lightness * 100),
    )


__all__ = [
    "hex_to_hsl",
    "hex_to_rgb",
    "hsl_to_css",
    "hsl_to_hex",
    "hsl_to_rgb",
    "rgb_to_hex",
    "round_half_up",
]
