from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(slots=True, frozen=True)
class Color:
    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in self.tuple():
            assert 0 <= channel <= 255, (
                f"Expected all color values to be between 0 and 255. Found {self.tuple()}"
            )

    @classmethod
    def from_hex(cls, value: int) -> "Color":
        if not 0 <= value <= 0xFFFFFF:
            raise ValueError(f"Expected a 24-bit RGB value, got {value:#x}")
        return cls(r=(value >> 16) & 0xFF, g=(value >> 8) & 0xFF, b=value & 0xFF)

    def tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def normalized(self) -> tuple[float, float, float]:
        """Channels scaled to ``[0, 1]`` as shaders expect them."""
        return (self.r / 255.0, self.g / 255.0, self.b / 255.0)

    def __iter__(self) -> Iterator[int]:
        return iter(self.tuple())


LIME_GREEN = Color.from_hex(0xCDFF7C)
# Complement of the lime green used for the second glyph
COMPLEMENTARY_PURPLE = Color.from_hex(0x320083)
