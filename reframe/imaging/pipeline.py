# reframe/imaging/pipeline.py
# Purpose: Compose one platform frame from a master image.
# - cover / contain / blurred-contain base canvas
# - logo stamped bottom-right, inset by the watermark margin
# - watermark text always drawn last (on top)
# - lossless encode (PNG, TIFF)

from __future__ import annotations

import io
import logging
from typing import Callable, Dict, Tuple

from PIL import Image, ImageEnhance, ImageFilter, ImageOps

from reframe.imaging.colors import hex_to_rgba
from reframe.imaging.logo import prepare_logo
from reframe.imaging.presets import Preset
from reframe.imaging.watermark import build_watermark_layer
from reframe.models.enums import FitMode
from reframe.models.settings import ExportSettings

log = logging.getLogger("reframe.pipeline")

BLUR_RADIUS = 30
BLUR_SATURATION = 0.9
BLUR_BRIGHTNESS = 0.95

CanvasBuilder = Callable[[Image.Image, Tuple[int, int], ExportSettings], Image.Image]


# ---------------------------- fit strategies ----------------------------
def _cover(master: Image.Image, size: Tuple[int, int]) -> Image.Image:
    return ImageOps.fit(master, size, method=Image.Resampling.LANCZOS, centering=(0.5, 0.5))


def _centred_on(canvas: Image.Image, fg: Image.Image) -> Image.Image:
    left = (canvas.width - fg.width) // 2
    top = (canvas.height - fg.height) // 2
    canvas.alpha_composite(fg, dest=(left, top))
    return canvas


def cover_canvas(master: Image.Image, size: Tuple[int, int], settings: ExportSettings) -> Image.Image:
    return _cover(master, size)


def contain_canvas(master: Image.Image, size: Tuple[int, int], settings: ExportSettings) -> Image.Image:
    canvas = Image.new("RGBA", size, hex_to_rgba(settings.background_hex))
    fg = ImageOps.contain(master, size, method=Image.Resampling.LANCZOS)
    return _centred_on(canvas, fg)


def blurred_contain_canvas(master: Image.Image, size: Tuple[int, int], settings: ExportSettings) -> Image.Image:
    bg = _cover(master, size).filter(ImageFilter.GaussianBlur(BLUR_RADIUS))

    # Enhance colour channels only; Brightness would also darken alpha.
    alpha = bg.getchannel("A")
    rgb = bg.convert("RGB")
    rgb = ImageEnhance.Color(rgb).enhance(BLUR_SATURATION)
    rgb = ImageEnhance.Brightness(rgb).enhance(BLUR_BRIGHTNESS)
    bg = rgb.convert("RGBA")
    bg.putalpha(alpha)

    fg = ImageOps.contain(master, size, method=Image.Resampling.LANCZOS)
    return _centred_on(bg, fg)


CANVAS_BUILDERS: Dict[FitMode, CanvasBuilder] = {
    FitMode.COVER: cover_canvas,
    FitMode.CONTAIN: contain_canvas,
    FitMode.BLURRED_CONTAIN: blurred_contain_canvas,
}


# ---------------------------- overlays ----------------------------
def logo_position(canvas_size: Tuple[int, int], logo_size: Tuple[int, int], margin: int) -> Tuple[int, int]:
    W, H = canvas_size
    lw, lh = logo_size
    return max(0, W - lw - margin), max(0, H - lh - margin)


def encode(image: Image.Image, settings: ExportSettings) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format=settings.export_format.value)
    return buf.getvalue()


# ---------------------------- public API ----------------------------
class FrameComposer:
    """
    Builds finished frames for one export configuration. The fit strategy is
    resolved once here rather than on every compose() call.
    """

    def __init__(self, settings: ExportSettings):
        self.settings = settings
        self._build_canvas = CANVAS_BUILDERS[settings.fit_mode]

    def compose_image(self, master: Image.Image, preset: Preset) -> Image.Image:
        s = self.settings
        base = self._build_canvas(master.convert("RGBA"), preset.size, s)

        W = base.width or preset.width
        H = base.height or preset.height
        log.debug("Base canvas for %s: %dx%d (%s)", preset.key, W, H, s.fit_mode.value)

        logo = prepare_logo(W, s)
        if logo is not None:
            base.alpha_composite(logo.image, dest=logo_position((W, H), (logo.width, logo.height), s.watermark_margin))

        base.alpha_composite(build_watermark_layer(
            W, H,
            text=s.watermark_text,
            hex_color=s.watermark_hex,
            opacity=s.watermark_opacity,
            font_size=s.watermark_font_size,
            margin=s.watermark_margin,
            font_path=s.watermark_font_path,
        ))
        return base

    def compose(self, master: Image.Image, preset: Preset) -> bytes:
        return encode(self.compose_image(master, preset), self.settings)


def compose_frame(master: Image.Image, preset: Preset, settings: ExportSettings) -> bytes:
    return FrameComposer(settings).compose(master, preset)
