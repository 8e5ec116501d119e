from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Tuple
import logging

from ..common.colors import parse_color
from ..common.exceptions import ColorParseError, ValidationError

logger = logging.getLogger(__name__)


@dataclass
class SystemDefaults:
    """Device and protocol constants for the blink(1) server"""

    # blink(1) hardware limits
    MAX_LED_INDEX: ClassVar[int] = 18  # 0 addresses every LED
    MAX_FADE_MS: ClassVar[int] = 655350  # 16-bit count of 10ms ticks

    # Request defaults
    DEFAULT_FADE_TIME: ClassVar[float] = 0.1  # seconds
    DEFAULT_LEDN: ClassVar[int] = 0
    DEFAULT_REPEATS: ClassVar[int] = 3
    DEFAULT_MORSE_MESSAGE: ClassVar[str] = "sos"
    DEFAULT_MORSE_TIME: ClassVar[float] = 0.4  # seconds per morse unit
    DEFAULT_MORSE_COLOR: ClassVar[str] = "#eeeeee"
    DEFAULT_MORSE_LEDN: ClassVar[int] = 0
    DEFAULT_COLOR: ClassVar[str] = "#000000"
    STATUS_SAMPLE_TEXT: ClassVar[str] = "Hello, world"

    # Device defaults
    DEFAULT_DRIVER: ClassVar[str] = "blink1"
    DEFAULT_GAMMA: ClassVar[Tuple[float, float, float]] = (1.0, 1.0, 1.0)

    # Network defaults
    DEFAULT_HOST: ClassVar[str] = "0.0.0.0"
    DEFAULT_PORT: ClassVar[int] = 8080
    DEFAULT_LOG_LEVEL: ClassVar[str] = "INFO"

    @classmethod
    def get_all_defaults(cls) -> Dict[str, Any]:
        """Get all default values as a dictionary"""
        return {
            name: value
            for name, value in vars(cls).items()
            if name.startswith("DEFAULT_")
            and isinstance(value, (int, float, str, bool, tuple))
        }


DRIVER_TYPES = ("blink1", "mock")


@dataclass
class DeviceConfig:
    """USB device selection"""

    driver: str = SystemDefaults.DEFAULT_DRIVER
    gamma: Tuple[float, float, float] = SystemDefaults.DEFAULT_GAMMA

    # Serial numbers reported by the mock driver
    mock_serials: List[str] = field(default_factory=lambda: ["MOCK0001"])

    def validate(self) -> None:
        """Validate device settings"""
        if self.driver not in DRIVER_TYPES:
            raise ValidationError(
                f"Unknown driver '{self.driver}', expected one of {DRIVER_TYPES}"
            )
        if len(self.gamma) != 3 or any(g <= 0 for g in self.gamma):
            raise ValidationError("Gamma must be three positive values")


@dataclass
class SchedulerConfig:
    """Blink and morse timing settings"""

    morse_unit_s: float = SystemDefaults.DEFAULT_MORSE_TIME
    morse_color: str = SystemDefaults.DEFAULT_MORSE_COLOR
    morse_ledn: int = SystemDefaults.DEFAULT_MORSE_LEDN

    # Last-job-wins: a new color command cancels pulses still pending from
    # earlier blink and morse jobs. Off keeps overlapping jobs interleaving.
    cancel_previous_jobs: bool = False

    def validate(self) -> None:
        """Validate scheduler settings"""
        if self.morse_unit_s <= 0:
            raise ValidationError("Morse unit time must be positive")
        try:
            parse_color(self.morse_color)
        except ColorParseError as e:
            raise ValidationError(f"Invalid morse color: {self.morse_color}") from e
        if not 0 <= self.morse_ledn <= SystemDefaults.MAX_LED_INDEX:
            raise ValidationError(
                f"Morse LED index must be between 0 and {SystemDefaults.MAX_LED_INDEX}"
            )
        if self.cancel_previous_jobs:
            logger.info("Last-job-wins cancellation enabled")


@dataclass
class ServerConfig:
    """HTTP server settings"""

    host: str = SystemDefaults.DEFAULT_HOST
    port: int = SystemDefaults.DEFAULT_PORT
    log_level: str = SystemDefaults.DEFAULT_LOG_LEVEL

    def validate(self) -> None:
        """Validate server settings"""
        if not 1 <= self.port <= 65535:
            raise ValidationError("Port must be between 1 and 65535")
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ValidationError(f"Unknown log level: {self.log_level}")


@dataclass
class SystemConfig:
    """Main system configuration"""

    device: DeviceConfig = field(default_factory=DeviceConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    def __post_init__(self):
        """Validate entire configuration"""
        try:
            self.device.validate()
            self.scheduler.validate()
            self.server.validate()
        except Exception as e:
            logger.error(f"Configuration validation failed: {e}")
            raise

    @classmethod
    def create_default(cls) -> "SystemConfig":
        """Create default configuration"""
        return cls()

    def update(self, updates: Dict[str, Any]) -> None:
        """Update configuration with new values"""
        if "device" in updates:
            self.device = DeviceConfig(**updates["device"])
        if "scheduler" in updates:
            self.scheduler = SchedulerConfig(**updates["scheduler"])
        if "server" in updates:
            self.server = ServerConfig(**updates["server"])

        # Revalidate after updates
        self.__post_init__()
