from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Preset:
    key: str
    width: int
    height: int

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)


# Keys double as output directory names and filename suffixes.
PRESETS: Tuple[Preset, ...] = (
    Preset("x", 1600, 900),
    Preset("linkedin", 1200, 627),
    Preset("instagram", 1080, 1080),
)
