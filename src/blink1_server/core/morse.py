"""Morse code playback as scheduled blink pulses."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..common.morse_code import encode, symbol_weight
from .blink import BlinkScheduler
from .scheduler import PulseScheduler, ScheduledTask

logger = logging.getLogger(__name__)


@dataclass
class Pulse:
    """One light pulse, offset relative to the start of the message"""

    offset_ms: float
    length_ms: float
    symbol: str


def plan_pulses(code: str, unit_ms: float) -> List[Pulse]:
    """Turn morse symbols into timed pulses.

    Each symbol advances the clock by its length (dash = 2 units, dot = 1),
    gaps advance it by one unit without lighting. The first symbol always
    produces a pulse, even a zero-length one for a gap or an empty code.
    """
    if not code:
        return [Pulse(0.0, 0.0, "")]

    weights = np.array([symbol_weight(s) for s in code], dtype=float)
    lengths = weights * unit_ms
    advance = np.where(lengths != 0, lengths, unit_ms)
    offsets = np.concatenate(([0.0], np.cumsum(advance[:-1])))

    pulses = [Pulse(0.0, float(lengths[0]), code[0])]
    for i in range(1, len(code)):
        if weights[i] in (1, 2):
            pulses.append(Pulse(float(offsets[i]), float(lengths[i]), code[i]))
    return pulses


class MorseJob:
    """All pulses of one message, scheduled up front"""

    def __init__(
        self,
        blinker: BlinkScheduler,
        scheduler: PulseScheduler,
        message: str,
        unit_ms: float,
        rgb: Tuple[int, int, int],
        ledn: int = 0,
    ):
        self.blinker = blinker
        self.scheduler = scheduler
        self.message = message
        self.code = encode(message)
        self.unit_ms = unit_ms
        self.rgb = rgb
        self.ledn = ledn
        self.pulses = plan_pulses(self.code, unit_ms)
        self.start_ms: Optional[float] = None
        self.tasks: List[ScheduledTask] = []

    @property
    def duration_ms(self) -> float:
        last = self.pulses[-1]
        return last.offset_ms + last.length_ms

    def start(self) -> None:
        """Fire the first pulse now and schedule the others"""
        self.start_ms = self.scheduler.now_ms()
        logger.debug(
            f"Morse {self.message!r} as {self.code!r}: {len(self.pulses)} pulses "
            f"over {self.duration_ms:.0f}ms"
        )

        first, *rest = self.pulses
        self._fire(first)
        for pulse in rest:
            self.tasks.append(
                self.scheduler.call_at(
                    self.start_ms + pulse.offset_ms,
                    self._fire,
                    pulse,
                    name=f"morse-pulse-{pulse.symbol}",
                )
            )

    def cancel(self) -> None:
        for task in self.tasks:
            task.cancel()

    def _fire(self, pulse: Pulse) -> None:
        # A pulse is a single blink whose on and off halves each last half of it
        self.blinker.blink(self.rgb, pulse.length_ms / 2, self.ledn, repeats=1)


class MorseScheduler:
    """Plays text messages as morse blinks"""

    def __init__(
        self,
        blinker: BlinkScheduler,
        scheduler: PulseScheduler,
        rgb: Tuple[int, int, int],
        ledn: int = 0,
    ):
        self.blinker = blinker
        self.scheduler = scheduler
        self.rgb = rgb
        self.ledn = ledn

    def play(self, message: str, unit_ms: float) -> MorseJob:
        job = MorseJob(
            self.blinker, self.scheduler, message, unit_ms, self.rgb, self.ledn
        )
        job.start()
        return job
