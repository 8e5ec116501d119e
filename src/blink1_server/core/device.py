"""Connection handling for the blink(1) USB device."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple
import logging

from .config import DeviceConfig
from ..common.exceptions import DeviceError

logger = logging.getLogger(__name__)


class Device(ABC):
    """An open connection to one physical device"""

    @abstractmethod
    def fade_to_rgb(
        self, fade_ms: int, red: int, green: int, blue: int, ledn: int = 0
    ) -> None:
        """Fade to an RGB color over fade_ms milliseconds"""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying connection"""
        pass


class DeviceDriver(ABC):
    """Discovers and opens devices"""

    @abstractmethod
    def enumerate(self) -> List[str]:
        """Return the serial numbers of attached devices"""
        pass

    @abstractmethod
    def open(self, serial: str) -> Device:
        """Open a connection to the device with the given serial"""
        pass


class Blink1Device(Device):
    """Wraps a blink1.blink1.Blink1 instance"""

    def __init__(self, blink1: Any, serial: str):
        self._blink1 = blink1
        self.serial = serial

    def fade_to_rgb(
        self, fade_ms: int, red: int, green: int, blue: int, ledn: int = 0
    ) -> None:
        self._blink1.fade_to_rgb(fade_ms, red, green, blue, ledn)

    def close(self) -> None:
        self._blink1.close()


class Blink1Driver(DeviceDriver):
    """Driver backed by the blink1 package (hidapi)"""

    def __init__(self, gamma: Tuple[float, float, float] = (1.0, 1.0, 1.0)):
        try:
            from blink1.blink1 import Blink1

            logger.debug("Successfully imported blink1 library")
        except (ImportError, OSError) as e:
            logger.error(f"Failed to import blink1 library: {e}")
            raise DeviceError(f"blink1 library unavailable: {e}") from e

        self._blink1_class = Blink1
        self.gamma = gamma

    def enumerate(self) -> List[str]:
        return list(self._blink1_class.list())

    def open(self, serial: str) -> Device:
        blink1 = self._blink1_class(serial_number=serial, gamma=self.gamma)
        return Blink1Device(blink1, serial)


def create_driver(config: DeviceConfig) -> DeviceDriver:
    """Factory function to create the configured device driver"""
    if config.driver == "blink1":
        return Blink1Driver(gamma=config.gamma)
    elif config.driver == "mock":
        from .mock import MockDriver

        logger.info("Using mock blink1 driver")
        return MockDriver(serials=config.mock_serials)
    else:
        raise ValueError(f"Unknown driver type: {config.driver}")


class DeviceHandle:
    """Holds at most one live device connection and reconnects on demand.

    Absence of a connection means "known disconnected". Presence does not
    mean the device still answers; that is only discovered when a command
    fails, at which point the caller drops the handle with disconnect().
    """

    def __init__(self, driver: DeviceDriver):
        self.driver = driver
        self._device: Optional[Device] = None
        self._serials: List[str] = []

    @property
    def connected(self) -> bool:
        return self._device is not None

    @property
    def device(self) -> Optional[Device]:
        return self._device

    @property
    def serials(self) -> List[str]:
        """Device roster from the last enumeration"""
        return list(self._serials)

    def ensure_connected(self) -> Optional[Device]:
        """Open the first enumerated device if no connection is held"""
        if self._device is not None:
            return self._device

        try:
            self._serials = list(self.driver.enumerate())
        except Exception as e:
            logger.warning(f"Device enumeration failed: {e}")
            self._serials = []
            return None

        if not self._serials:
            return None

        serial = self._serials[0]
        try:
            self._device = self.driver.open(serial)
            logger.info(f"Connected to blink1 {serial}")
        except Exception as e:
            logger.warning(f"Failed to open blink1 {serial}: {e}")
            self._device = None
        return self._device

    def disconnect(self) -> None:
        """Drop the live connection so the next use reconnects"""
        device, self._device = self._device, None
        if device is None:
            return
        try:
            device.close()
        except Exception as e:
            logger.debug(f"Ignoring error while closing device: {e}")
        logger.info("Disconnected from blink1")

    def get_state(self) -> Dict[str, Any]:
        """Get current connection state"""
        return {"connected": self.connected, "serials": self.serials}
