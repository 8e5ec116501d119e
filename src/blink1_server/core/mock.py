from dataclasses import dataclass, field
from typing import Callable, List, Optional
import logging
import time

from .device import Device, DeviceDriver
from ..common.exceptions import DeviceError

logger = logging.getLogger(__name__)


@dataclass
class FadeRecord:
    """One fade issued to the mock device"""

    at_ms: float
    fade_ms: int
    rgb: tuple
    ledn: int


@dataclass
class MockDeviceState:
    """Shared state of the simulated hardware"""

    serials: List[str] = field(default_factory=list)
    plugged_in: bool = True
    history: List[FadeRecord] = field(default_factory=list)
    color: tuple = (0, 0, 0)


class MockDevice(Device):
    """In-memory blink1 for development without hardware"""

    def __init__(self, serial: str, state: MockDeviceState, clock: Callable[[], float]):
        self.serial = serial
        self._state = state
        self._clock = clock
        self.closed = False

    def fade_to_rgb(
        self, fade_ms: int, red: int, green: int, blue: int, ledn: int = 0
    ) -> None:
        if self.closed or not self._state.plugged_in:
            raise DeviceError(f"blink1 {self.serial} not responding")

        self._state.color = (red, green, blue)
        self._state.history.append(
            FadeRecord(
                at_ms=self._clock(),
                fade_ms=fade_ms,
                rgb=(red, green, blue),
                ledn=ledn,
            )
        )
        logger.debug(f"Mock fade to {(red, green, blue)} over {fade_ms}ms on led {ledn}")

    def close(self) -> None:
        self.closed = True


class MockDriver(DeviceDriver):
    """Driver for the simulated device; unplug() and plug_in() emulate USB events"""

    def __init__(
        self,
        serials: Optional[List[str]] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.state = MockDeviceState(serials=list(serials or []))
        self._clock = clock or (lambda: time.monotonic() * 1000)
        self.open_count = 0

    @property
    def history(self) -> List[FadeRecord]:
        return self.state.history

    def unplug(self) -> None:
        self.state.plugged_in = False
        logger.info("Mock blink1 unplugged")

    def plug_in(self) -> None:
        self.state.plugged_in = True
        logger.info("Mock blink1 plugged in")

    def enumerate(self) -> List[str]:
        return list(self.state.serials) if self.state.plugged_in else []

    def open(self, serial: str) -> Device:
        if serial not in self.enumerate():
            raise DeviceError(f"blink1 {serial} not found")
        self.open_count += 1
        return MockDevice(serial, self.state, self._clock)
