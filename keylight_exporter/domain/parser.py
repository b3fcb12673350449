from __future__ import annotations

import logging
from typing import Union

from pydantic import ValidationError

from .errors import ParseError
from .interfaces import Recorder
from .models import DeviceReading

logger = logging.getLogger(__name__)


class Parser:
    def __init__(self, recorder: Recorder) -> None:
        self._recorder = recorder

    def parse(self, body: Union[bytes, str]) -> DeviceReading:
        """Decode a status payload and publish the first light's values.

        Raises ParseError for invalid JSON, a shape mismatch or an empty
        ``lights`` list. Values are passed through without range checks.
        """
        try:
            reading = DeviceReading.model_validate_json(body)
        except ValidationError as e:
            first = e.errors()[0]
            where = ".".join(str(p) for p in first["loc"]) or "<root>"
            raise ParseError(f"invalid status payload at {where}: {first['msg']}") from e

        if not reading.lights:
            raise ParseError(
                f"status payload has no lights (numberOfLights={reading.light_count})"
            )

        # Only the first light is reported
        light = reading.lights[0]
        self._recorder.record_on_off(light.on)
        self._recorder.record_brightness(light.brightness)
        self._recorder.record_temperature(light.temperature)

        logger.debug(
            "Parsed reading: on=%d brightness=%d temperature=%d (lights=%d)",
            light.on, light.brightness, light.temperature, len(reading.lights),
        )
        return reading
