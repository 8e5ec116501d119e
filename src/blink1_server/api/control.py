import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse

from ..core.config import SystemDefaults
from ..core.control import SessionController
from .models import Blink1Response, Blink1StatusResponse, MorseResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/blink1", tags=["blink1"])
help_router = APIRouter(tags=["help"])

HELP_PAGE = (
    "<html>"
    "<h2> Welcome to blink1-server</h2>"
    "<p>"
    "Supported URIs: <ul>"
    "<li>   <code> /blink1 </code> "
    " -- status info</li>"
    "<li>   <code> /blink1/fadeToRGB?rgb=%23FF00FF&time=1.5&ledn=2 </code> "
    "-- fade to a RGB color over time for led</li>"
    "<li>   <code> /blink1/blink?rgb=%23FF0000&time=1&repeats=3 </code> "
    "-- blink a RGB color on and off repeats times</li>"
    "<li>   <code> /blink1/morse?message=hi&time=.3 </code> "
    "-- send a morse code message</li>"
    "</ul></p>"
    "When starting server, argument specified is port to run on, e.g.:"
    "<code> blink1-server 8080 </code>"
    "</html>"
)


def get_controller(request: Request) -> SessionController:
    """Dependency injection for the session controller"""
    controller = getattr(request.app.state, "session_controller", None)
    if controller is None:
        raise HTTPException(
            status_code=503,
            detail="Session not initialized. Please try again in a moment.",
        )
    return controller


def _number(value: Optional[str]) -> Optional[float]:
    """Lenient query number: missing, unparseable or zero gives None"""
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if not math.isfinite(number) or number == 0:
        return None
    return number


def _query_float(value: Optional[str], default: float) -> float:
    number = _number(value)
    return default if number is None else number


def _query_int(value: Optional[str], default: int) -> int:
    number = _number(value)
    return default if number is None else int(number)


def _morse_unit(value: Optional[str], default: float) -> float:
    """Morse unit in seconds; unlike other times an explicit zero is kept"""
    if not value:
        return default
    try:
        unit = float(value)
    except ValueError:
        return default
    if unit < 0 or not math.isfinite(unit * 1000):
        return default
    return unit


# Endpoints
@router.get("", response_model=Blink1StatusResponse)
async def get_status(controller: SessionController = Depends(get_controller)):
    """Status info"""
    info = controller.status()
    return Blink1StatusResponse.from_snapshot(info, code=info["code"])


@router.get("/fadeToRGB", response_model=Blink1Response)
async def fade_to_rgb(
    rgb: Optional[str] = None,
    time: Optional[str] = None,
    ledn: Optional[str] = None,
    controller: SessionController = Depends(get_controller),
):
    """Fade to a RGB color over time seconds for an LED"""
    status = controller.fade_to_rgb(
        rgb,
        _query_float(time, SystemDefaults.DEFAULT_FADE_TIME),
        _query_int(ledn, SystemDefaults.DEFAULT_LEDN),
    )
    return Blink1Response.from_snapshot(controller.snapshot("fadeToRGB", status))


@router.get("/blink", response_model=Blink1Response)
async def blink(
    rgb: Optional[str] = None,
    time: Optional[str] = None,
    ledn: Optional[str] = None,
    repeats: Optional[str] = None,
    count: Optional[str] = None,
    controller: SessionController = Depends(get_controller),
):
    """Blink a RGB color on and off"""
    repeat_count = _query_int(
        repeats, _query_int(count, SystemDefaults.DEFAULT_REPEATS)
    )
    status = controller.blink(
        rgb,
        _query_float(time, SystemDefaults.DEFAULT_FADE_TIME),
        _query_int(ledn, SystemDefaults.DEFAULT_LEDN),
        repeat_count,
    )
    return Blink1Response.from_snapshot(controller.snapshot("blink1", status))


@router.get("/morse", response_model=MorseResponse)
async def morse(
    message: Optional[str] = None,
    time: Optional[str] = None,
    controller: SessionController = Depends(get_controller),
):
    """Send a morse code message"""
    message = message or SystemDefaults.DEFAULT_MORSE_MESSAGE
    unit = _morse_unit(time, controller.config.scheduler.morse_unit_s)
    job = controller.morse(message, unit)
    return MorseResponse(
        code=job.code,
        message=message,
        time=unit,
        blink1Connected=controller.connected,
        blink1Serials=controller.serials,
    )


@help_router.get("/", response_class=HTMLResponse)
async def help_page():
    """Usage help"""
    return HELP_PAGE
