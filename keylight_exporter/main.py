from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

import httpx
from fastapi import FastAPI
from prometheus_client import CollectorRegistry

from .core.config import Settings
from .api.routes import router as api_router, metrics
from .domain.parser import Parser
from .metrics.prometheus_recorder import PrometheusRecorder
from .services.poller import Poller, PollLoop
from .storage.archive import PollArchive


logger = logging.getLogger(__name__)


def build_archive(settings: Settings) -> Optional[PollArchive]:
    if not settings.datastore:
        return None
    if not Path(settings.datastore).is_dir():
        logger.warning("Datastore %s is not a directory; archive writes will fail", settings.datastore)
    return PollArchive(settings.datastore)


def create_app(
    settings: Settings,
    *,
    registry: Optional[CollectorRegistry] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """Wire recorder, parser, poller and routes for one device.

    ``transport`` replaces the network layer of the poll client (tests).
    """
    registry = registry if registry is not None else CollectorRegistry()
    recorder = PrometheusRecorder(registry)
    parser = Parser(recorder)
    archive = build_archive(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Starting %s (device=%s metrics=%s)",
            settings.app_name, settings.poll_url, settings.metric_path,
        )

        async with httpx.AsyncClient(timeout=settings.timeout_seconds, transport=transport) as client:
            poller = Poller(settings, client, recorder, parser, archive)
            poll_loop = PollLoop(poller, settings.poll_interval_seconds)
            app.state.poll_loop = poll_loop
            await poll_loop.start()

            try:
                yield
            finally:
                await poll_loop.stop()
                app.state.poll_loop = None

        logger.info("Shutdown complete")

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry
    app.state.poll_loop = None

    app.add_api_route(settings.metric_path, metrics, methods=["GET"], include_in_schema=False)
    app.include_router(api_router)
    return app
