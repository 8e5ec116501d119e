"""Core components for blink1 device control"""

from .config import SystemConfig, SystemDefaults, DeviceConfig, SchedulerConfig
from .control import SessionController
from .state import SessionState
from .commands import CommandExecutor, CommandResult, CommandStatus
from .device import DeviceHandle, DeviceDriver, Device, create_driver
from .scheduler import PulseScheduler, AsyncioPulseScheduler, ScheduledTask
from .blink import BlinkJob, BlinkScheduler
from .morse import MorseJob, MorseScheduler, plan_pulses

__all__ = [
    # Configuration
    "SystemConfig",
    "SystemDefaults",
    "DeviceConfig",
    "SchedulerConfig",
    # Control
    "SessionController",
    "SessionState",
    # Commands
    "CommandExecutor",
    "CommandResult",
    "CommandStatus",
    # Device
    "DeviceHandle",
    "DeviceDriver",
    "Device",
    "create_driver",
    # Scheduling
    "PulseScheduler",
    "AsyncioPulseScheduler",
    "ScheduledTask",
    "BlinkJob",
    "BlinkScheduler",
    "MorseJob",
    "MorseScheduler",
    "plan_pulses",
]
