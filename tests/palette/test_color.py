"""Tests for color space conversions."""

import pytest

from blockhash_colors.palette.color import (
    hex_to_hsl,
    hex_to_rgb,
    hsl_to_css,
    hsl_to_hex,
    hsl_to_rgb,
    rgb_to_hex,
    round_half_up,
)
from blockhash_colors.palette.models import HSL


class TestRoundHalfUp:
    """Tests for round_half_up function."""

    def test_halves_round_up(self) -> None:
        """Test that .5 rounds up, unlike banker's rounding."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(127.5) == 128

    def test_other_values(self) -> None:
        """Test ordinary rounding."""
        assert round_half_up(2.49) == 2
        assert round_half_up(2.51) == 3
        assert round_half_up(0) == 0


class TestHslToRgb:
    """Tests for hsl_to_rgb function."""

    @pytest.mark.parametrize(
        ("hsl", "expected"),
        [
            (HSL(h=0, s=100, l=50), (255, 0, 0)),
            (HSL(h=60, s=100, l=50), (255, 255, 0)),
            (HSL(h=120, s=100, l=50), (0, 255, 0)),
            (HSL(h=180, s=100, l=50), (0, 255, 255)),
            (HSL(h=240, s=100, l=50), (0, 0, 255)),
            (HSL(h=300, s=100, l=50), (255, 0, 255)),
            (HSL(h=360, s=100, l=50), (255, 0, 0)),
        ],
    )
    def test_primary_and_secondary_hues(
        self, hsl: HSL, expected: tuple[int, int, int]
    ) -> None:
        """Test each hue sector boundary."""
        assert hsl_to_rgb(hsl) == expected

    def test_greyscale(self) -> None:
        """Test that zero saturation yields grey."""
        assert hsl_to_rgb(HSL(h=200, s=0, l=50)) == (128, 128, 128)
        assert hsl_to_rgb(HSL(h=0, s=0, l=0)) == (0, 0, 0)
        assert hsl_to_rgb(HSL(h=0, s=0, l=100)) == (255, 255, 255)


class TestHexConversions:
    """Tests for hex formatting and parsing."""

    def test_rgb_to_hex_is_lowercase_and_padded(self) -> None:
        """Test lowercase #rrggbb formatting."""
        assert rgb_to_hex((255, 10, 0)) == "#ff0a00"

    def test_hex_to_rgb(self) -> None:
        """Test parsing with and without leading #."""
        assert hex_to_rgb("#FF0A00") == (255, 10, 0)
        assert hex_to_rgb("00ff00") == (0, 255, 0)

    def test_hex_to_rgb_invalid_length(self) -> None:
        """Test that short hex strings are rejected."""
        with pytest.raises(ValueError, match="Expected 6 hex digits"):
            hex_to_rgb("#fff")

    def test_hsl_to_hex(self) -> None:
        """Test HSL to hex conversion."""
        assert hsl_to_hex(HSL(h=240, s=100, l=50)) == "#0000ff"

    def test_hsl_to_css(self) -> None:
        """Test CSS hsl() formatting."""
        assert hsl_to_css(HSL(h=210, s=75, l=55)) == "hsl(210, 75%, 55%)"


class TestHexToHsl:
    """Tests for hex_to_hsl function."""

    def test_pure_colors(self) -> None:
        """Test conversion of pure hues."""
        assert hex_to_hsl("#ff0000") == HSL(h=0, s=100, l=50)
        assert hex_to_hsl("#00ff00") == HSL(h=120, s=100, l=50)
        assert hex_to_hsl("#0000ff") == HSL(h=240, s=100, l=50)

    def test_grey(self) -> None:
        """Test that greys have no hue or saturation."""
        assert hex_to_hsl("#808080") == HSL(h=0, s=0, l=50)

    @pytest.mark.parametrize(
        "hsl",
        [HSL(h=17, s=72, l=48), HSL(h=205, s=64, l=61), HSL(h=333, s=88, l=43)],
    )
    def test_round_trip_within_tolerance(self, hsl: HSL) -> None:
        """Test that HSL -> hex -> HSL stays within a few units."""
        back = hex_to_hsl(hsl_to_hex(hsl))

        assert abs(back.h - hsl.h) <= 2
        assert abs(back.s - hsl.s) <= 2
        assert abs(back.l - hsl.l) <= 1
