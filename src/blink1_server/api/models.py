from typing import Any, Dict, List

from pydantic import BaseModel


# Response Models
class Blink1Response(BaseModel):
    """Device and session state returned by color commands"""

    blink1Connected: bool
    blink1Serials: List[str]
    lastColor: str
    lastTime: float
    lastLedn: int
    lastRepeats: int
    cmd: str
    status: str

    @classmethod
    def from_snapshot(cls, snapshot: Dict[str, Any], **extra: Any) -> "Blink1Response":
        return cls(
            blink1Connected=snapshot["connected"],
            blink1Serials=snapshot["serials"],
            lastColor=snapshot["last_color"],
            lastTime=snapshot["last_time"],
            lastLedn=snapshot["last_ledn"],
            lastRepeats=snapshot["last_repeats"],
            cmd=snapshot["cmd"],
            status=snapshot["status"],
            **extra,
        )


class Blink1StatusResponse(Blink1Response):
    """Status snapshot with a sample morse encoding"""

    code: str


class MorseResponse(BaseModel):
    """Accepted morse message"""

    code: str
    message: str
    time: float
    blink1Connected: bool
    blink1Serials: List[str]
