"""Shared fixtures: a call-recording Recorder, settings and device payloads."""

from __future__ import annotations

from typing import Any

import pytest

from keylight_exporter.core.config import Settings

GOOD_BODY = b'{"numberOfLights":1,"lights":[{"on":1,"brightness":55,"temperature":198}]}'


class RecordingRecorder:
    """Recorder that remembers every call, in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def values(self, name: str) -> list[Any]:
        return [value for n, value in self.calls if n == name]

    def _add(self, name: str, value: Any) -> None:
        self.calls.append((name, value))

    def record_poll_outcome(self, outcome):
        self._add("poll_outcome", outcome)

    def record_status_code(self, code):
        self._add("status_code", code)

    def record_last_poll_time(self, ts):
        self._add("last_poll_time", ts)

    def record_last_good_poll_time(self, ts):
        self._add("last_good_poll_time", ts)

    def record_last_error_time(self, ts):
        self._add("last_error_time", ts)

    def record_poll_duration(self, seconds):
        self._add("poll_duration", seconds)

    def record_parse_duration(self, seconds):
        self._add("parse_duration", seconds)

    def record_on_off(self, value):
        self._add("on_off", value)

    def record_brightness(self, value):
        self._add("brightness", value)

    def record_temperature(self, value):
        self._add("temperature", value)


@pytest.fixture
def recorder() -> RecordingRecorder:
    return RecordingRecorder()


@pytest.fixture
def settings(monkeypatch) -> Settings:
    monkeypatch.chdir("/")  # keep a developer's .env out of the tests
    return Settings(ipaddress="10.0.0.5", port=9123, timeout_seconds=0.5, poll_interval_seconds=60)


@pytest.fixture
def good_body() -> bytes:
    return GOOD_BODY
