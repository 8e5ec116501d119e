"""Tests for morse encoding and playback."""

import numpy as np
import pytest

from blink1_server.common.morse_code import encode, symbol_weight
from blink1_server.core.blink import BlinkScheduler
from blink1_server.core.commands import CommandExecutor
from blink1_server.core.device import DeviceHandle
from blink1_server.core.morse import MorseJob, MorseScheduler, plan_pulses

LIGHT = (238, 238, 238)
BLACK = (0, 0, 0)


@pytest.fixture
def player(driver, scheduler):
    blinker = BlinkScheduler(CommandExecutor(DeviceHandle(driver)), scheduler)
    return MorseScheduler(blinker, scheduler, LIGHT, ledn=0)


class TestEncoding:
    """Text to morse"""

    def test_sos(self):
        assert encode("sos") == "... --- ..."

    def test_case_insensitive(self):
        assert encode("SoS") == encode("sos")

    def test_words_are_separated_by_slash(self):
        assert encode("hi you") == ".... .. / -.-- --- ..-"

    def test_punctuation(self):
        assert encode("Hello, world") == (
            ".... . .-.. .-.. --- --..-- / .-- --- .-. .-.. -.."
        )

    def test_unknown_characters_are_dropped(self):
        assert encode("s#o~s") == "... --- ..."
        assert encode("###") == ""

    def test_extra_whitespace_collapses(self):
        assert encode("  e   e ") == ". / ."

    def test_symbol_weights(self):
        assert [symbol_weight(s) for s in ".- /x"] == [1, 2, 0, 0, 0]


class TestPulsePlanning:
    """Symbols to timed pulses"""

    def test_sos_plan(self):
        pulses = plan_pulses("... --- ...", 400)
        assert [(p.offset_ms, p.length_ms) for p in pulses] == [
            (0, 400),
            (400, 400),
            (800, 400),
            (1600, 800),
            (2400, 800),
            (3200, 800),
            (4400, 400),
            (4800, 400),
            (5200, 400),
        ]

    def test_dash_is_twice_a_dot(self):
        dot, dash = plan_pulses(".-", 100)
        assert dash.length_ms == 2 * dot.length_ms
        assert dash.offset_ms == 100

    def test_gaps_advance_the_clock(self):
        pulses = plan_pulses(". / .", 100)
        # dot, then three gap symbols of one unit each
        assert [p.offset_ms for p in pulses] == [0, 400]

    def test_leading_gap_fires_zero_length_pulse(self):
        pulses = plan_pulses(" .", 100)
        assert [(p.offset_ms, p.length_ms) for p in pulses] == [(0, 0), (100, 100)]

    def test_empty_code_fires_one_empty_pulse(self):
        pulses = plan_pulses("", 100)
        assert len(pulses) == 1
        assert pulses[0].length_ms == 0

    def test_offsets_are_strictly_increasing(self):
        pulses = plan_pulses(encode("the quick brown fox"), 250)
        offsets = np.array([p.offset_ms for p in pulses])
        assert np.all(np.diff(offsets) > 0)


class TestMorsePlayback:
    """Pulses reaching the device"""

    def test_sos_timeline(self, player, driver, scheduler):
        job = player.play("sos", 400)
        assert job.code == "... --- ..."
        # 8 pulses are still waiting, the first already fired
        assert len(job.tasks) == 8
        scheduler.run_all()

        on = [(r.at_ms, r.fade_ms) for r in driver.history if r.rgb == LIGHT]
        off = [(r.at_ms, r.fade_ms) for r in driver.history if r.rgb == BLACK]
        assert on == [
            (0, 100),
            (400, 100),
            (800, 100),
            (1600, 200),
            (2400, 200),
            (3200, 200),
            (4400, 100),
            (4800, 100),
            (5200, 100),
        ]
        assert off == [
            (200, 100),
            (600, 100),
            (1000, 100),
            (2000, 200),
            (2800, 200),
            (3600, 200),
            (4600, 100),
            (5000, 100),
            (5400, 100),
        ]
        assert all(r.ledn == 0 for r in driver.history)

    def test_first_pulse_fires_immediately(self, player, driver):
        player.play("e", 300)
        assert [(r.at_ms, r.fade_ms, r.rgb) for r in driver.history] == [
            (0, 75, LIGHT)
        ]

    def test_duration(self, driver, scheduler):
        blinker = BlinkScheduler(CommandExecutor(DeviceHandle(driver)), scheduler)
        job = MorseJob(blinker, scheduler, "sos", 400, LIGHT)
        assert job.duration_ms == 5600

    def test_cancel(self, player, driver, scheduler):
        job = player.play("sos", 400)
        job.cancel()
        scheduler.run_all()
        # Only the first pulse, which had already started
        assert [r.rgb for r in driver.history] == [LIGHT, BLACK]

    def test_overlapping_messages_interleave(self, player, driver, scheduler):
        player.play("e", 400)
        player.play("t", 400)
        scheduler.run_all()
        assert [(r.at_ms, r.fade_ms, r.rgb) for r in driver.history] == [
            (0, 100, LIGHT),
            (0, 200, LIGHT),
            (200, 100, BLACK),
            (400, 200, BLACK),
        ]
