"""Single fade commands against the device handle."""

import logging
import math
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .config import SystemDefaults
from .device import DeviceHandle

logger = logging.getLogger(__name__)

NO_DEVICE_MESSAGE = "no blink1"
SUCCESS_MESSAGE = "success"

BLACK: Tuple[int, int, int] = (0, 0, 0)


def fade_millis(duration_ms: float) -> int:
    """Whole milliseconds the device can fade over"""
    if not math.isfinite(duration_ms) or duration_ms > SystemDefaults.MAX_FADE_MS:
        return SystemDefaults.MAX_FADE_MS
    return max(int(duration_ms), 0)


class CommandStatus(Enum):
    """Command execution status"""

    SUCCESS = "success"
    NO_DEVICE = "no_device"
    FAILED = "failed"


@dataclass
class CommandResult:
    """Result of one fade command"""

    status: CommandStatus
    message: str
    timestamp: float = field(default_factory=time.time)

    @property
    def success(self) -> bool:
        return self.status == CommandStatus.SUCCESS

    def __str__(self) -> str:
        return self.message


class CommandExecutor:
    """Issues fade commands, turning device failures into result values"""

    def __init__(self, handle: DeviceHandle):
        self.handle = handle
        self.executed = 0
        self.failures = 0

    def fade_to(
        self, duration_ms: float, red: int, green: int, blue: int, ledn: int = 0
    ) -> CommandResult:
        """Fade to an RGB color; never raises on hardware failure"""
        device = self.handle.ensure_connected()
        if device is None:
            return CommandResult(CommandStatus.NO_DEVICE, NO_DEVICE_MESSAGE)

        fade_ms = fade_millis(duration_ms)
        self.executed += 1
        try:
            device.fade_to_rgb(fade_ms, red, green, blue, ledn)
        except Exception as e:
            # USB unplug surfaces here; reconnect on the next command
            self.failures += 1
            logger.warning(f"Fade to {(red, green, blue)} failed: {e}")
            self.handle.disconnect()
            return CommandResult(CommandStatus.FAILED, str(e))

        logger.debug(
            f"Fade to {(red, green, blue)} over {fade_ms}ms on led {ledn}"
        )
        return CommandResult(CommandStatus.SUCCESS, SUCCESS_MESSAGE)
