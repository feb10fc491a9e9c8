"""Renderers turning a palette into CSS, JSON and an HTML preview."""

from datetime import UTC, datetime
from html import escape
import json

from typing import Any

from blockhash_colors.palette.models import HSL, Color, Palette


def format_timestamp(moment: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix.

    Example:
        >>> format_timestamp(datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC))
        '2024-01-02T03:04:05.000Z'
    """
    moment = (moment or datetime.now(UTC)).astimezone(UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _hsl_triplet(hsl: HSL) -> str:
    return f"{hsl.h}, {hsl.s}%, {hsl.l}%"


def _color_document(color: Color | None) -> dict[str, Any] | None:
    if color is None:
        return None
    return {"hex": color.hex, "css": color.css, "hsl": color.hsl.model_dump()}


def render_css(palette: Palette, generated_at: datetime | None = None) -> str:
    """Render the palette as a ``:root`` block of CSS custom properties.

    Palette variables are numbered from 1 (``--color-1`` is the primary).
    """
    lines = [
        f"/* BlockHash Accent Colors - Generated {format_timestamp(generated_at)} */",
        f"/* Source Hash: {palette.source_hash or 'N/A'} */",
        ":root {",
    ]

    for name, color in (("primary", palette.primary), ("accent", palette.accent)):
        if color is None:
            continue
        lines.extend([
            f"  --{name}-color: {color.css};",
            f"  --{name}-hex: {color.hex};",
            f"  --{name}-hsl: {_hsl_triplet(color.hsl)};",
        ])

    for position, swatch in enumerate(palette.swatches, start=1):
        lines.extend([
            f"  --color-{position}: {swatch.css};",
            f"  --color-{position}-hex: {swatch.hex};",
            f"  --color-{position}-hsl: {_hsl_triplet(swatch.hsl)};",
        ])

    lines.append("}")
    return "\n".join(lines)


def build_json_document(
    palette: Palette, generated_at: datetime | None = None
) -> dict[str, Any]:
    """Build the ``colors.json`` document as a plain dict."""
    return {
        "generatedAt": format_timestamp(generated_at),
        "sourceHash": palette.source_hash,
        "algorithm": palette.algorithm,
        "primary": _color_document(palette.primary),
        "accent": _color_document(palette.accent),
        "palette": [
            {
                "index": swatch.index,
                "hex": swatch.hex,
                "css": swatch.css,
                "hsl": swatch.hsl.model_dump(),
            }
            for swatch in palette.swatches
        ],
    }


def render_json(palette: Palette, generated_at: datetime | None = None) -> str:
    """Render the palette as the ``colors.json`` document (2-space indent)."""
    return json.dumps(build_json_document(palette, generated_at), indent=2)


def render_html(palette: Palette) -> str:
    """Render a minimal preview fragment with inline-styled swatches."""
    primary = palette.primary.hex if palette.primary else "#000000"
    accent = palette.accent.hex if palette.accent else "#ffffff"

    swatches = "".join(
        f'<div style="width: 32px; height: 32px; background: {swatch.hex}; '
        f'border-radius: 4px;" title="{swatch.hex}"></div>'
        for swatch in palette.swatches
    )

    return "\n".join([
        "<!-- BlockHash Accent Colors Preview -->",
        f'<div class="blockhash-colors" data-hash="{escape(palette.source_hash)}">',
        f'  <div class="palette" style="display: flex; gap: 4px;">{swatches}</div>',
        f'  <div class="primary" style="color: {primary};">Primary: {primary}</div>',
        f'  <div class="accent" style="color: {accent};">Accent: {accent}</div>',
        "</div>",
    ])


__all__ = [
    "build_json_document",
    "format_timestamp",
    "render_css",
    "render_html",
    "render_json",
]
