"""Last-known command parameters for status queries."""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict

from .config import SystemDefaults

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Parameters of the most recent color command"""

    last_color: str = SystemDefaults.DEFAULT_COLOR
    last_time: float = 0
    last_ledn: int = 0
    last_repeats: int = 0

    def record_fade(self, color_hex: str, time: float, ledn: int) -> None:
        self.last_color = color_hex
        self.last_time = time
        self.last_ledn = ledn
        logger.debug(f"Session state: {self.last_color} over {time}s on led {ledn}")

    def record_blink(self, color_hex: str, time: float, ledn: int, repeats: int) -> None:
        self.record_fade(color_hex, time, ledn)
        self.last_repeats = repeats

    def get_state(self) -> Dict[str, Any]:
        return asdict(self)
