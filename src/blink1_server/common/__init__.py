from .colors import Color, parse_color
from .exceptions import (
    Blink1ServerError,
    ColorParseError,
    DeviceError,
    SchedulerError,
    ValidationError,
)
from . import morse_code

__all__ = [
    "Color",
    "parse_color",
    "morse_code",
    "Blink1ServerError",
    "ColorParseError",
    "DeviceError",
    "SchedulerError",
    "ValidationError",
]
