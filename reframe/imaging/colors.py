from __future__ import annotations
from typing import Tuple

from reframe.models.errors import ConfigError

RGBA = Tuple[int, int, int, int]

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def hex_to_rgba(hex_str: str, alpha: float = 1.0) -> RGBA:
    """
    Parse "#RGB" / "#RRGGBB" (leading '#' optional) into an RGBA tuple.
    `alpha` is a fraction in [0, 1].
    """
    h = str(hex_str).strip().lstrip("#")
    if len(h) not in (3, 6) or not set(h) <= _HEX_DIGITS:
        raise ConfigError(f"Invalid hex colour: {hex_str!r} (expected 3 or 6 hex digits)")
    if not 0.0 <= alpha <= 1.0:
        raise ConfigError(f"Alpha must be between 0 and 1, got {alpha}")

    if len(h) == 3:
        h = "".join(c + c for c in h)
    value = int(h, 16)
    return (
        (value >> 16) & 255,
        (value >> 8) & 255,
        value & 255,
        int(round(alpha * 255)),
    )
