"""Color string parsing"""

import colorsys
import re
from dataclasses import dataclass
from typing import Optional, Tuple

import webcolors

from .exceptions import ColorParseError

_RGB_FUNCTION = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*[\d.]+\s*)?\)$",
    re.IGNORECASE,
)
_HUE_FUNCTION = re.compile(
    r"^(hsla?|hsv)\(\s*(\d+(?:\.\d+)?)\s*,\s*(\d+(?:\.\d+)?)%?\s*,"
    r"\s*(\d+(?:\.\d+)?)%?\s*(?:,\s*[\d.]+\s*)?\)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Color:
    """Parsed color with its canonical lowercase hex form"""

    rgb: Tuple[int, int, int]
    hex: str

    @property
    def red(self) -> int:
        return self.rgb[0]

    @property
    def green(self) -> int:
        return self.rgb[1]

    @property
    def blue(self) -> int:
        return self.rgb[2]

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> "Color":
        triplet = webcolors.IntegerRGB(red, green, blue)
        return cls(rgb=(red, green, blue), hex=webcolors.rgb_to_hex(triplet))


def _from_hue_function(kind: str, hue: str, saturation: str, third: str) -> Color:
    """hsl(h, s%, l%) or hsv(h, s%, v%) with hue in degrees"""
    h = float(hue) % 360 / 360
    s = float(saturation) / 100
    x = float(third) / 100
    if s > 1 or x > 1:
        raise ValueError(f"{kind} component out of range")

    if kind.lower().startswith("hsl"):
        channels = colorsys.hls_to_rgb(h, x, s)
    else:
        channels = colorsys.hsv_to_rgb(h, s, x)
    return Color.from_rgb(*(int(c * 255 + 0.5) for c in channels))


def parse_color(value: Optional[str]) -> Color:
    """Parse "#ff00ff", "#f0f", "rgb(255, 0, 255)", "hsl(300, 100%, 50%)",
    "hsv(300, 100%, 100%)" or a CSS name. Hex needs its leading "#".
    """
    if value is None:
        raise ColorParseError(value)
    text = value.strip()
    if not text:
        raise ColorParseError(value)

    match = _RGB_FUNCTION.match(text)
    if match:
        components = tuple(int(c) for c in match.groups())
        if any(c > 255 for c in components):
            raise ColorParseError(value)
        return Color.from_rgb(*components)

    match = _HUE_FUNCTION.match(text)
    if match:
        try:
            return _from_hue_function(*match.groups())
        except ValueError as e:
            raise ColorParseError(value) from e

    try:
        if text.startswith("#"):
            hex_value = webcolors.normalize_hex(text)
        else:
            hex_value = webcolors.name_to_hex(text.lower())
    except ValueError as e:
        raise ColorParseError(value) from e

    rgb = webcolors.hex_to_rgb(hex_value)
    return Color(rgb=(rgb.red, rgb.green, rgb.blue), hex=hex_value)
