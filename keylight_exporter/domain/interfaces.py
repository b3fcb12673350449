from __future__ import annotations
from datetime import datetime
from typing import Protocol, runtime_checkable

from .models import PollOutcome


@runtime_checkable
class Recorder(Protocol):
    """Sink for poll measurements.

    Every method is fire-and-forget: it returns nothing and must not raise.
    """

    def record_poll_outcome(self, outcome: PollOutcome) -> None:
        ...

    def record_status_code(self, code: int) -> None:
        ...

    def record_last_poll_time(self, ts: datetime) -> None:
        ...

    def record_last_good_poll_time(self, ts: datetime) -> None:
        ...

    def record_last_error_time(self, ts: datetime) -> None:
        ...

    def record_poll_duration(self, seconds: float) -> None:
        ...

    def record_parse_duration(self, seconds: float) -> None:
        ...

    def record_on_off(self, value: int) -> None:
        ...

    def record_brightness(self, value: int) -> None:
        ...

    def record_temperature(self, value: int) -> None:
        ...
