"""Common exceptions for the blink1 server."""


class Blink1ServerError(Exception):
    """Base exception for all blink1 server errors."""

    pass


class ValidationError(Blink1ServerError):
    """Configuration validation error"""

    pass


class ColorParseError(Blink1ServerError):
    """Color string could not be parsed"""

    def __init__(self, value):
        super().__init__(f"Unrecognized color: {value!r}")
        self.value = value


class DeviceError(Blink1ServerError):
    """Device driver or I/O error"""

    pass


class SchedulerError(Blink1ServerError):
    """Deferred work could not be scheduled"""

    pass
