from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from ..core.config import Settings
from ..services.poller import PollLoop

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Dependency getters: everything lives on app.state, set up in main.create_app ---
def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> CollectorRegistry:
    return request.app.state.registry


def get_poll_loop(request: Request) -> PollLoop:
    loop = getattr(request.app.state, "poll_loop", None)
    if loop is None:
        raise RuntimeError("Poll loop not running")
    return loop


async def metrics(registry: CollectorRegistry = Depends(get_registry)) -> Response:
    """Prometheus text exposition; mounted at ``settings.metric_path``."""
    return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)


@router.get("/live")
async def get_live(
    settings: Settings = Depends(get_settings),
    loop: PollLoop = Depends(get_poll_loop),
):
    r = loop.live.last_result
    light = r.reading.lights[0] if r and r.reading else None
    return {
        "app": settings.app_name,
        "device_url": settings.poll_url,
        "poll_interval_seconds": settings.poll_interval_seconds,
        "running": loop.live.running,
        "cycles": loop.live.cycles,
        "last_poll": {
            "polled_at_utc": r.polled_at.isoformat() if r else None,
            "outcome": r.outcome.value if r else None,
            "status_code": r.status_code if r else None,
            "error": r.error if r else None,
        },
        "light": light.model_dump() if light else None,
    }
