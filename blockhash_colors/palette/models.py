"""Pydantic models for derived colors and palettes."""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from blockhash_colors.ledger.models import BlockMetadata


class HSL(BaseModel):
    """Color in hue/saturation/lightness, rounded to integers."""

    h: int = Field(..., ge=0, le=360, description="Hue in degrees")
    s: int = Field(..., ge=0, le=100, description="Saturation in percent")
    l: int = Field(..., ge=0, le=100, description="Lightness in percent")  # noqa: E741

    model_config = ConfigDict(frozen=True)


class Color(BaseModel):
    """A color in the three notations written to the output files."""

    hsl: HSL
    hex: str = Field(..., pattern=r"^#[0-9a-f]{6}$", description="#rrggbb")
    css: str = Field(..., description="CSS hsl() expression")

    model_config = ConfigDict(frozen=True)


class ColorSwatch(Color):
    """A palette entry; ``index`` is its position in derivation order."""

    index: int = Field(..., ge=0)


class Palette(BaseModel):
    """Colors derived from one block hash."""

    source_hash: str = Field(..., description="Normalized block hash")
    algorithm: str = Field(..., description="Digest algorithm used")
    swatches: list[ColorSwatch] = Field(default_factory=list)
    accent: Color | None = Field(
        default=None, description="Primary rotated 180 degrees in hue"
    )
    metadata: BlockMetadata = Field(default_factory=BlockMetadata)
    derived_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def primary(self) -> ColorSwatch | None:
        """First swatch of the palette."""
        return self.swatches[0] if self.swatches else None

    @property
    def hex_values(self) -> list[str]:
        """Hex notation of every swatch, in order."""
        return [swatch.hex for swatch in self.swatches]


__all__ = ["HSL", "Color", "ColorSwatch", "Palette"]
