from __future__ import annotations
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

import httpx

from ..core.config import Settings
from ..core.timeutil import now_utc
from ..domain.errors import ParseError, ReadError, RequestError
from ..domain.interfaces import Recorder
from ..domain.models import PollOutcome, PollResult
from ..domain.parser import Parser
from ..storage.archive import PollArchive


logger = logging.getLogger(__name__)


class Poller:
    """Runs one poll-parse-record cycle against the device."""

    def __init__(
        self,
        settings: Settings,
        client: httpx.AsyncClient,
        recorder: Recorder,
        parser: Parser,
        archive: Optional[PollArchive] = None,
    ) -> None:
        self._settings = settings
        self._client = client
        self._recorder = recorder
        self._parser = parser
        self._archive = archive

    @property
    def url(self) -> str:
        return self._settings.poll_url

    # httpx timeouts apply per phase and per socket read; ``deadline`` bounds
    # the whole exchange (headers and body) to one timeout_seconds.

    async def _send(self, url: str, deadline: float) -> httpx.Response:
        started = time.perf_counter()
        try:
            request = self._client.build_request(
                "GET", url, timeout=self._settings.timeout_seconds
            )
            return await asyncio.wait_for(
                self._client.send(request, stream=True), timeout=deadline - started
            )
        except asyncio.TimeoutError as e:
            raise RequestError(
                f"GET {url}: no response within {self._settings.timeout_seconds}s"
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RequestError(f"GET {url}: {type(e).__name__}: {e}") from e
        finally:
            self._recorder.record_poll_duration(time.perf_counter() - started)

    async def _read_body(self, response: httpx.Response, deadline: float) -> bytes:
        remaining = max(deadline - time.perf_counter(), 0.0)
        try:
            return await asyncio.wait_for(response.aread(), timeout=remaining)
        except asyncio.TimeoutError as e:
            raise ReadError(
                f"body not complete within {self._settings.timeout_seconds}s"
            ) from e
        except httpx.HTTPError as e:
            raise ReadError(f"reading body: {type(e).__name__}: {e}") from e

    async def poll(self) -> PollResult:
        url = self.url
        polled_at = now_utc()
        self._recorder.record_last_poll_time(polled_at)
        deadline = time.perf_counter() + self._settings.timeout_seconds

        # 1) Request
        try:
            response = await self._send(url, deadline)
        except RequestError as e:
            logger.warning("Poll failed: %s", e)
            self._recorder.record_last_error_time(polled_at)
            self._recorder.record_poll_outcome(PollOutcome.ERROR)
            return PollResult(PollOutcome.ERROR, polled_at, error=str(e))

        # 2) Status + body; any status code counts as a response
        status_code = response.status_code
        try:
            self._recorder.record_status_code(status_code)
            body = await self._read_body(response, deadline)
        except ReadError as e:
            logger.warning("Poll of %s got status %d but %s", url, status_code, e)
            self._recorder.record_poll_outcome(PollOutcome.READ_ALL_ERROR)
            return PollResult(
                PollOutcome.READ_ALL_ERROR, polled_at, status_code=status_code, error=str(e)
            )
        finally:
            await response.aclose()

        self._recorder.record_last_good_poll_time(polled_at)

        # 3) Archive raw body (best effort, off the event loop)
        if self._archive is not None:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self._archive.store, polled_at, body)

        # 4) Parse
        started = time.perf_counter()
        try:
            reading = self._parser.parse(body)
        except ParseError as e:
            logger.warning("Poll of %s (status %d): %s", url, status_code, e)
            self._recorder.record_last_error_time(polled_at)
            self._recorder.record_poll_outcome(PollOutcome.PARSE_ERROR)
            return PollResult(
                PollOutcome.PARSE_ERROR, polled_at, status_code=status_code, error=str(e)
            )
        finally:
            self._recorder.record_parse_duration(time.perf_counter() - started)

        self._recorder.record_poll_outcome(PollOutcome.OK)
        logger.debug("Poll OK: %s status=%d", url, status_code)
        return PollResult(PollOutcome.OK, polled_at, status_code=status_code, reading=reading)


@dataclass
class LiveState:
    last_result: Optional[PollResult] = None
    cycles: int = 0
    running: bool = False


class PollLoop:
    """Calls ``Poller.poll()`` forever, one cycle at a time, until stopped."""

    def __init__(self, poller: Poller, interval_seconds: float) -> None:
        self._poller = poller
        self._interval = interval_seconds

        self._task: Optional[asyncio.Task] = None
        self._stop = asyncio.Event()

        self.live = LiveState()

    async def start(self) -> None:
        self._stop.clear()
        self.live.running = True
        self._task = asyncio.create_task(self._run(), name="poll_loop")

    async def stop(self) -> None:
        self._stop.set()
        if self._task:
            await self._task
            self._task = None

    async def _run(self) -> None:
        logger.info(
            "Poll loop started (url=%s interval=%ss)",
            self._poller.url,
            self._interval,
        )
        # Poll first, then wait; a stop request never interrupts a cycle
        while True:
            try:
                self.live.last_result = await self._poller.poll()
            except Exception as e:
                logger.exception("Poll loop error: %s", e)
            self.live.cycles += 1

            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self._interval)
                break
            except asyncio.TimeoutError:
                pass

        self.live.running = False
        logger.info("Poll loop stopped after %d cycles", self.live.cycles)
