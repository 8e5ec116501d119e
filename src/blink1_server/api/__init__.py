"""REST interface for the blink1 session"""

from .app import app, init_app
from .models import Blink1Response, Blink1StatusResponse, MorseResponse
from .control import router as control_router, help_router

__all__ = [
    # Application
    "app",
    "init_app",
    # Routers
    "control_router",
    "help_router",
    # Models
    "Blink1Response",
    "Blink1StatusResponse",
    "MorseResponse",
]
