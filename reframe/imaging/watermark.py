from __future__ import annotations
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from reframe.imaging.colors import hex_to_rgba

# Tried in order when no font path is configured.
FONT_CANDIDATES = (
    "DejaVuSans.ttf",
    "Arial.ttf",
    "arial.ttf",
    "Helvetica.ttc",
    "Roboto-Regular.ttf",
    "LiberationSans-Regular.ttf",
)


def watermark_anchor(width: int, height: int, margin: int) -> Tuple[int, int]:
    return max(0, width - margin), max(0, height - margin)


def load_font(size: int, font_path: Optional[str | Path] = None):
    candidates = ([str(font_path)] if font_path else []) + list(FONT_CANDIDATES)
    for name in candidates:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def build_watermark_layer(
    width: int,
    height: int,
    text: str,
    hex_color: str,
    opacity: float,
    font_size: int,
    margin: int,
    font_path: Optional[str | Path] = None,
) -> Image.Image:
    """
    Full-canvas transparent layer with `text` drawn so that its bottom-right
    corner sits on the watermark anchor; longer text grows leftward/upward.
    """
    layer = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    if not text:
        return layer

    fill = hex_to_rgba(hex_color, opacity)
    font = load_font(font_size, font_path)
    draw = ImageDraw.Draw(layer)

    ax, ay = watermark_anchor(width, height, margin)
    _, _, right, bottom = draw.textbbox((0, 0), text, font=font)
    draw.text((ax - right, ay - bottom), text, font=font, fill=fill)
    return layer
