from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from PIL import Image, ImageOps

from reframe.models.settings import ExportSettings

log = logging.getLogger("reframe.logo")


@dataclass(frozen=True)
class PreparedLogo:
    image: Image.Image
    width: int
    height: int


def logo_box(canvas_width: int, natural_width: int, natural_height: int, pct: float) -> tuple[int, int]:
    """Target (width, height) box for a logo on a canvas `canvas_width` wide."""
    target_w = max(1, int(round(canvas_width * pct)))
    if natural_width > 0 and natural_height > 0:
        target_h = max(1, int(round(natural_height * (target_w / natural_width))))
    else:
        target_h = target_w
    return target_w, target_h


def prepare_logo(canvas_width: int, settings: ExportSettings) -> Optional[PreparedLogo]:
    """
    Load the configured logo and scale it to `logo_max_width_pct` of the canvas.
    Returns None when the logo is missing or unreadable; the frame is then
    exported without one.
    """
    path = settings.logo_path
    try:
        with Image.open(path) as im:
            im.load()
            nat_w, nat_h = im.size
            if nat_w <= 0 or nat_h <= 0:
                log.warning("Logo has invalid dimensions %dx%d: %s", nat_w, nat_h, path)
                return None
            box = logo_box(canvas_width, nat_w, nat_h, settings.logo_max_width_pct)
            scaled = ImageOps.contain(im.convert("RGBA"), box, method=Image.Resampling.LANCZOS)
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as e:
        # PNG chunk corruption surfaces as SyntaxError from load()
        log.warning("Logo unavailable, exporting without it (%s): %s", path, e)
        return None

    return PreparedLogo(image=scaled, width=scaled.width, height=scaled.height)
