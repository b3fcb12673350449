from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class LightState(BaseModel):
    # strict: "55", true and 55.0 are not ints on the wire
    model_config = ConfigDict(frozen=True, strict=True)

    on: int  # 0 | 1
    brightness: int
    temperature: int


class DeviceReading(BaseModel):
    """One polled snapshot.

    Wire shape: ``{"numberOfLights": 1, "lights": [{"on": 1, "brightness": 55, "temperature": 198}]}``
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    light_count: int = Field(alias="numberOfLights")
    lights: Tuple[LightState, ...]


class PollOutcome(str, Enum):
    OK = "ok"
    ERROR = "error"
    READ_ALL_ERROR = "readAllError"
    PARSE_ERROR = "parseError"


@dataclass(frozen=True)
class PollResult:
    outcome: PollOutcome
    polled_at: datetime
    status_code: Optional[int] = None
    reading: Optional[DeviceReading] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is PollOutcome.OK
