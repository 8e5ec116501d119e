"""On/off blinking driven by the pulse scheduler."""

import logging
from typing import Optional, Tuple

from .commands import BLACK, CommandExecutor, CommandResult
from .config import SystemDefaults
from .scheduler import PulseScheduler, ScheduledTask

logger = logging.getLogger(__name__)


def phase_count(repeats: int) -> int:
    """Number of fades a blink with the given repeat count issues.

    The repeat counter is decremented after each OFF phase and only checked
    afterwards, so a count of zero or less still yields one ON+OFF cycle.
    """
    return 2 * max(repeats, 1)


class BlinkJob:
    """Alternates one LED between a color and black.

    Phase i fires at start + i * period and fades over period / 2. The first
    phase runs when the job starts; each later phase is a scheduled task armed
    by its predecessor for its precomputed trigger time, so phases of one job
    never reorder.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        scheduler: PulseScheduler,
        rgb: Tuple[int, int, int],
        period_ms: float,
        ledn: int = 0,
        repeats: int = 1,
    ):
        self.executor = executor
        self.scheduler = scheduler
        self.rgb = rgb
        # Each half of a phase is one fade, bounded by the device fade range
        self.period_ms = min(max(period_ms, 0.0), 2.0 * SystemDefaults.MAX_FADE_MS)
        self.ledn = ledn
        self.repeats = repeats
        self.remaining = repeats
        self.on = True
        self.phase = 0
        self.start_ms: Optional[float] = None
        self.last_result: Optional[CommandResult] = None
        self._task: Optional[ScheduledTask] = None

    @property
    def finished(self) -> bool:
        return self.start_ms is not None and self._task is None

    def trigger_time(self, phase: int) -> float:
        return self.start_ms + phase * self.period_ms

    def start(self) -> CommandResult:
        """Run the first ON phase now and arm the rest"""
        if self.start_ms is not None:
            raise RuntimeError("Blink job already started")
        self.start_ms = self.scheduler.now_ms()
        logger.debug(
            f"Blink {self.rgb} on led {self.ledn}: {self.repeats} repeats, "
            f"period {self.period_ms}ms, {phase_count(self.repeats)} fades"
        )
        return self._run_phase()

    def cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _run_phase(self) -> CommandResult:
        fade_ms = self.period_ms / 2
        was_on = self.on
        if was_on:
            result = self.executor.fade_to(fade_ms, *self.rgb, self.ledn)
        else:
            result = self.executor.fade_to(fade_ms, *BLACK, self.ledn)
            self.remaining -= 1

        self.last_result = result
        self.on = not self.on
        self.phase += 1

        if was_on or self.remaining > 0:
            self._task = self.scheduler.call_at(
                self.trigger_time(self.phase),
                self._run_phase,
                name=f"blink-phase-{self.phase}",
            )
        else:
            self._task = None
            logger.debug(f"Blink {self.rgb} on led {self.ledn} finished")
        return result


class BlinkScheduler:
    """Starts independent blink jobs; overlapping jobs interleave on the device"""

    def __init__(self, executor: CommandExecutor, scheduler: PulseScheduler):
        self.executor = executor
        self.scheduler = scheduler
        self.jobs_started = 0

    def blink(
        self,
        rgb: Tuple[int, int, int],
        period_ms: float,
        ledn: int = 0,
        repeats: int = 1,
    ) -> CommandResult:
        """Start a blink job and return the result of its first fade"""
        job = BlinkJob(self.executor, self.scheduler, rgb, period_ms, ledn, repeats)
        self.jobs_started += 1
        return job.start()
