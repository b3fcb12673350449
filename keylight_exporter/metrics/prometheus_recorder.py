from __future__ import annotations

import functools
import logging
from datetime import datetime

from prometheus_client import CollectorRegistry, Counter, Gauge

from ..domain.models import PollOutcome

logger = logging.getLogger(__name__)

NAMESPACE = "elgato_keylight"


def _fire_and_forget(fn):
    """Log and drop sink failures; recording never breaks a poll cycle."""

    @functools.wraps(fn)
    def wrapper(self, *args, **kwargs) -> None:
        try:
            fn(self, *args, **kwargs)
        except Exception:
            logger.warning("Recording %s%r failed", fn.__name__, args, exc_info=True)

    return wrapper


class PrometheusRecorder:
    """Recorder backed by prometheus_client metrics in ``registry``.

    Counters are exposed with the ``_total`` suffix, e.g.
    ``elgato_keylight_polls_total{state="ok"}``.
    """

    def __init__(self, registry: CollectorRegistry) -> None:
        self.registry = registry

        self._polls = Counter(
            "polls", "Number of polls we have attempted", ["state"],
            namespace=NAMESPACE, registry=registry,
        )
        self._status_codes = Counter(
            "status_code_count", "A count of each status code encountered", ["statusCode"],
            namespace=NAMESPACE, registry=registry,
        )
        self._last_good_poll = Gauge(
            "last_good_poll_seconds", "The UNIX timestamp in seconds of the last good poll",
            namespace=NAMESPACE, registry=registry,
        )
        self._last_poll = Gauge(
            "last_poll_seconds", "The UNIX timestamp in seconds of the last poll",
            namespace=NAMESPACE, registry=registry,
        )
        self._poll_duration = Counter(
            "poll_duration", "The total duration of polling in seconds",
            namespace=NAMESPACE, registry=registry,
        )
        self._parse_duration = Counter(
            "parse_duration", "The total duration of parsing in seconds",
            namespace=NAMESPACE, registry=registry,
        )
        self._last_error = Gauge(
            "last_error_time_seconds", "The UNIX timestamp in seconds of the last error",
            namespace=NAMESPACE, registry=registry,
        )
        self._on_off = Gauge(
            "onoff", "Whether the keylight is on or off",
            namespace=NAMESPACE, registry=registry,
        )
        self._brightness = Gauge(
            "brightness", "The brightness of the keylight",
            namespace=NAMESPACE, registry=registry,
        )
        self._temperature = Gauge(
            "temperature", "The temperature of the keylight",
            namespace=NAMESPACE, registry=registry,
        )

    @staticmethod
    def _epoch_seconds(ts: datetime) -> float:
        return float(int(ts.timestamp()))

    @_fire_and_forget
    def record_poll_outcome(self, outcome: PollOutcome) -> None:
        self._polls.labels(state=PollOutcome(outcome).value).inc()

    @_fire_and_forget
    def record_status_code(self, code: int) -> None:
        self._status_codes.labels(statusCode=str(code)).inc()

    @_fire_and_forget
    def record_last_poll_time(self, ts: datetime) -> None:
        self._last_poll.set(self._epoch_seconds(ts))

    @_fire_and_forget
    def record_last_good_poll_time(self, ts: datetime) -> None:
        self._last_good_poll.set(self._epoch_seconds(ts))

    @_fire_and_forget
    def record_last_error_time(self, ts: datetime) -> None:
        self._last_error.set(self._epoch_seconds(ts))

    @_fire_and_forget
    def record_poll_duration(self, seconds: float) -> None:
        self._poll_duration.inc(seconds)

    @_fire_and_forget
    def record_parse_duration(self, seconds: float) -> None:
        self._parse_duration.inc(seconds)

    @_fire_and_forget
    def record_on_off(self, value: int) -> None:
        self._on_off.set(value)

    @_fire_and_forget
    def record_brightness(self, value: int) -> None:
        self._brightness.set(value)

    @_fire_and_forget
    def record_temperature(self, value: int) -> None:
        self._temperature.set(value)
