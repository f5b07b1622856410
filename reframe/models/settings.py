from __future__ import annotations
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from reframe.imaging.colors import hex_to_rgba
from reframe.models.enums import FitMode, ExportFormat
from reframe.models.errors import ConfigError

LOGO_PCT_MIN = 0.05
LOGO_PCT_MAX = 0.4

# Accepted spellings for EXPORT_MODE.
_FIT_MODE_ALIASES = {
    "cover": FitMode.COVER,
    "contain": FitMode.CONTAIN,
    "blurred-contain": FitMode.BLURRED_CONTAIN,
    "blurcontain": FitMode.BLURRED_CONTAIN,
    "blurred_contain": FitMode.BLURRED_CONTAIN,
}


def clamp_logo_pct(value: float) -> float:
    return max(LOGO_PCT_MIN, min(LOGO_PCT_MAX, float(value)))


def parse_fit_mode(value: str) -> FitMode:
    key = value.strip().lower()
    if key not in _FIT_MODE_ALIASES:
        raise ConfigError(
            f"Unsupported export mode: {value!r} (choose cover, contain or blurred-contain)"
        )
    return _FIT_MODE_ALIASES[key]


def parse_export_format(value: str) -> ExportFormat:
    try:
        return ExportFormat(value.strip().upper())
    except ValueError:
        raise ConfigError(f"Unsupported export format: {value!r} (choose png or tiff)") from None


# Variable names used by the earlier exporter, read when the EXPORT_* name is unset.
LEGACY_NAMES = {
    "EXPORT_LOGO_PATH": "BURNA_LOGO_PATH",
    "EXPORT_LOGO_MAX_WIDTH_PCT": "BURNA_LOGO_MAX_WIDTH_PCT",
    "EXPORT_WATERMARK_TEXT": "BURNA_WATERMARK_TEXT",
    "EXPORT_WATERMARK_HEX": "BURNA_WATERMARK_HEX",
    "EXPORT_WM_OPACITY": "BURNA_WM_OPACITY",
    "EXPORT_WM_FONT_SIZE": "BURNA_WM_FONT_SIZE",
    "EXPORT_WM_MARGIN": "BURNA_WM_MARGIN",
}


def _get(env: Mapping[str, str], name: str, default: str) -> str:
    value = env.get(name)
    if not value and name in LEGACY_NAMES:
        value = env.get(LEGACY_NAMES[name])
    return value or default


def _number(env: Mapping[str, str], name: str, default: str) -> float:
    raw = _get(env, name, default)
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = math.nan
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be a number, got {raw!r}")
    return value


@dataclass(frozen=True)
class ExportSettings:
    fit_mode: FitMode = FitMode.BLURRED_CONTAIN
    background_hex: str = "#0A0F1C"
    export_format: ExportFormat = ExportFormat.PNG
    root: Path = Path("assets/memes")
    logo_path: Path = Path("branding/burnaai_logo.png")
    logo_max_width_pct: float = 0.16
    watermark_text: str = "BurnaAI"
    watermark_hex: str = "#FFFFFF"
    watermark_opacity: float = 0.7
    watermark_font_size: int = 42
    watermark_margin: int = 28
    watermark_font_path: Optional[Path] = field(default=None)

    def __post_init__(self):
        # Fail at resolution time, not halfway through a batch.
        hex_to_rgba(self.background_hex)
        hex_to_rgba(self.watermark_hex)
        if not 0.0 <= self.watermark_opacity <= 1.0:
            raise ConfigError(f"Watermark opacity must be between 0 and 1, got {self.watermark_opacity}")
        if self.watermark_font_size <= 0:
            raise ConfigError(f"Watermark font size must be positive, got {self.watermark_font_size}")
        if self.watermark_margin < 0:
            raise ConfigError(f"Watermark margin must not be negative, got {self.watermark_margin}")
        object.__setattr__(self, "logo_max_width_pct", clamp_logo_pct(self.logo_max_width_pct))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ExportSettings":
        """
        Resolve settings once from environment variables (or an injected mapping).
        Unset variables fall back to their BURNA_* name where one exists,
        then to the dataclass defaults.
        """
        env = os.environ if environ is None else environ
        font_path = env.get("EXPORT_WM_FONT_PATH", "").strip()
        return cls(
            fit_mode=parse_fit_mode(env.get("EXPORT_MODE") or "blurred-contain"),
            background_hex=(env.get("EXPORT_BG_HEX") or "#0A0F1C").strip(),
            export_format=parse_export_format(env.get("EXPORT_FORMAT") or "png"),
            root=Path(env.get("EXPORT_ROOT") or "assets/memes"),
            logo_path=Path(_get(env, "EXPORT_LOGO_PATH", "branding/burnaai_logo.png")),
            logo_max_width_pct=_number(env, "EXPORT_LOGO_MAX_WIDTH_PCT", "0.16"),
            watermark_text=_get(env, "EXPORT_WATERMARK_TEXT", "BurnaAI"),
            watermark_hex=_get(env, "EXPORT_WATERMARK_HEX", "#FFFFFF").strip(),
            watermark_opacity=_number(env, "EXPORT_WM_OPACITY", "0.7"),
            watermark_font_size=int(round(_number(env, "EXPORT_WM_FONT_SIZE", "42"))),
            watermark_margin=int(round(_number(env, "EXPORT_WM_MARGIN", "28"))),
            watermark_font_path=Path(font_path) if font_path else None,
        )
