import logging
from typing import Any, Dict, List, Optional

from ..common.colors import parse_color
from ..common.exceptions import ColorParseError
from ..common.morse_code import encode
from .blink import BlinkScheduler
from .commands import CommandExecutor
from .config import SystemConfig, SystemDefaults
from .device import DeviceDriver, DeviceHandle, create_driver
from .morse import MorseJob, MorseScheduler
from .scheduler import AsyncioPulseScheduler, PulseScheduler
from .state import SessionState

logger = logging.getLogger(__name__)

BAD_COLOR_MESSAGE = "bad hex color specified"


def _bad_color(raw: Optional[str]) -> str:
    return f"{BAD_COLOR_MESSAGE} {raw if raw is not None else ''}"


class SessionController:
    """Owns the device session, the animation schedulers and the session state.

    Every method runs on the event loop thread, so none of the state here
    needs locking.
    """

    def __init__(
        self,
        config: SystemConfig,
        driver: Optional[DeviceDriver] = None,
        scheduler: Optional[PulseScheduler] = None,
    ):
        self.config = config
        self.handle = DeviceHandle(driver or create_driver(config.device))
        self.scheduler = scheduler or AsyncioPulseScheduler()
        self.executor = CommandExecutor(self.handle)
        self.state = SessionState()

        self.blinker = BlinkScheduler(self.executor, self.scheduler)
        morse_color = parse_color(config.scheduler.morse_color)
        self.morse_player = MorseScheduler(
            self.blinker,
            self.scheduler,
            morse_color.rgb,
            config.scheduler.morse_ledn,
        )
        self.is_running = False

    @property
    def connected(self) -> bool:
        return self.handle.connected

    @property
    def serials(self) -> List[str]:
        return self.handle.serials

    def start(self) -> None:
        """Look for a device up front so the first status call is accurate"""
        self.handle.ensure_connected()
        self.is_running = True
        if self.connected:
            logger.info(f"Session started with blink1 {self.serials[0]}")
        else:
            logger.info("Session started, no blink1 found yet")

    def stop(self) -> None:
        """Drop pending animations and release the device"""
        self.scheduler.cancel_all()
        self.handle.disconnect()
        self.is_running = False
        logger.info("Session stopped")

    def snapshot(self, cmd: str, status: str) -> Dict[str, Any]:
        """Connection and session state for a response"""
        return {
            "connected": self.connected,
            "serials": self.serials,
            **self.state.get_state(),
            "cmd": cmd,
            "status": status,
        }

    def status(self) -> Dict[str, Any]:
        """Status snapshot, retrying the device connection first"""
        self.handle.ensure_connected()
        info = self.snapshot("info", "success")
        info["code"] = encode(SystemDefaults.STATUS_SAMPLE_TEXT)
        return info

    def fade_to_rgb(self, rgb: Optional[str], time: float, ledn: int) -> str:
        """Fade once to a color over time seconds; returns the status text"""
        try:
            color = parse_color(rgb)
        except ColorParseError:
            logger.info(f"Rejected color {rgb!r}")
            return _bad_color(rgb)

        self._begin_command()
        self.state.record_fade(color.hex, time, ledn)
        result = self.executor.fade_to(time * 1000, *color.rgb, ledn)
        return result.message

    def blink(self, rgb: Optional[str], time: float, ledn: int, repeats: int) -> str:
        """Start blinking a color; returns the status of the first fade"""
        try:
            color = parse_color(rgb)
        except ColorParseError:
            logger.info(f"Rejected color {rgb!r}")
            return _bad_color(rgb)

        self._begin_command()
        self.state.record_blink(color.hex, time, ledn, repeats)
        result = self.blinker.blink(color.rgb, time * 1000, ledn, repeats)
        return result.message

    def morse(self, message: str, time: float) -> MorseJob:
        """Play a message as morse with a unit of time seconds"""
        self._begin_command()
        return self.morse_player.play(message, time * 1000)

    def _begin_command(self) -> None:
        if self.config.scheduler.cancel_previous_jobs:
            self.scheduler.cancel_all()

    def get_state(self) -> Dict[str, Any]:
        """Get current controller state"""
        return {
            "is_running": self.is_running,
            "device": self.handle.get_state(),
            "session": self.state.get_state(),
            "scheduler": self.scheduler.get_state(),
            "commands": {
                "executed": self.executor.executed,
                "failures": self.executor.failures,
                "blink_jobs": self.blinker.jobs_started,
            },
        }
