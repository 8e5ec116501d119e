import heapq
import itertools
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add src directory to Python path if not already there
src_dir = Path(__file__).parent.parent.absolute() / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))

from blink1_server.api.app import init_app
from blink1_server.core.config import DeviceConfig, SystemConfig
from blink1_server.core.control import SessionController
from blink1_server.core.mock import MockDriver
from blink1_server.core.scheduler import PulseScheduler


class ManualPulseScheduler(PulseScheduler):
    """Virtual clock that only moves when a test advances it"""

    def __init__(self):
        super().__init__()
        self._now = 0.0
        self._queue = []
        self._seq = itertools.count()

    def now_ms(self) -> float:
        return self._now

    def _arm(self, task) -> None:
        heapq.heappush(self._queue, (task.when_ms, next(self._seq), task))

    def advance(self, ms: float) -> None:
        """Run everything due within the next ms milliseconds"""
        self.run_until(self._now + ms)

    def run_until(self, when_ms: float) -> None:
        while self._queue and self._queue[0][0] <= when_ms:
            when, _, task = heapq.heappop(self._queue)
            self._now = max(self._now, when)
            task.run()
        self._now = max(self._now, when_ms)

    def run_all(self) -> None:
        while self._queue:
            self.run_until(self._queue[0][0])


@pytest.fixture
def scheduler():
    """Manual clock scheduler"""
    return ManualPulseScheduler()


@pytest.fixture
def driver(scheduler):
    """Mock driver with one attached device, stamped with the manual clock"""
    return MockDriver(serials=["MOCK0001"], clock=scheduler.now_ms)


@pytest.fixture
def empty_driver(scheduler):
    """Mock driver with nothing attached"""
    return MockDriver(serials=[], clock=scheduler.now_ms)


@pytest.fixture
def system_config():
    """Test system configuration"""
    return SystemConfig(device=DeviceConfig(driver="mock"))


@pytest.fixture
def controller(system_config, driver, scheduler):
    """Started session controller on the mock device"""
    controller = SessionController(system_config, driver=driver, scheduler=scheduler)
    controller.start()
    yield controller
    controller.stop()


@pytest.fixture
def client(controller):
    """Create a test client with the session controller injected"""
    app = init_app(controller)
    return TestClient(app)
