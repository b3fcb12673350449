"""
Prometheus exporter for an Elgato Key Light.

Polls the light's status endpoint every --interval seconds and serves the
values on --metricport at --metricurl.

Usage:
    python -m keylight_exporter                                   # defaults
    python -m keylight_exporter --ipaddress 192.168.1.50 --interval 5
    python -m keylight_exporter --file lights.json                # parse once, print metrics

Unset flags fall back to KEYLIGHT_* environment variables / .env.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn
from prometheus_client import CollectorRegistry, generate_latest
from pydantic import ValidationError

from .core.config import Settings
from .core.log import configure_logging
from .domain.errors import ParseError
from .domain.parser import Parser
from .main import create_app
from .metrics.prometheus_recorder import PrometheusRecorder

logger = logging.getLogger("keylight_exporter")

# argparse dest -> Settings field
_FLAG_FIELDS = {
    "timeout": "timeout_seconds",
    "ipaddress": "ipaddress",
    "port": "port",
    "metricport": "metric_port",
    "interval": "poll_interval_seconds",
    "pollurl": "poll_path",
    "metricurl": "metric_path",
    "datastore": "datastore",
    "file": "file",
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Prometheus exporter for an Elgato Key Light")

    p.add_argument("--timeout", type=float, help="Timeout for polling light, seconds (default: 1)")
    p.add_argument("--ipaddress", help="IP address of light (default: 192.168.1.209)")
    p.add_argument("--port", type=int, help="Port of light (default: 9123)")
    p.add_argument("--metricport", type=int, help="Port for serving metrics (default: 9091)")
    p.add_argument("--interval", type=float, help="Polling interval, seconds (default: 10)")
    p.add_argument("--pollurl", help="Path to poll on the light (default: elgato/lights)")
    p.add_argument("--metricurl", help="Path to serve metrics on (default: /metrics)")
    p.add_argument("--datastore", help="Directory to archive raw poll bodies in, blank to disable")
    p.add_argument("--file", help="Parse this file, print the metrics and exit")

    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return p


def load_settings(args: argparse.Namespace) -> Settings:
    overrides = {
        field: getattr(args, dest)
        for dest, field in _FLAG_FIELDS.items()
        if getattr(args, dest) is not None
    }
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return Settings(**overrides)


def parse_file(path: str) -> int:
    """Single-file mode: decode one saved payload and print its metrics."""
    try:
        body = Path(path).read_bytes()
    except OSError as e:
        logger.critical("Cannot read %s: %s", path, e)
        return 1

    registry = CollectorRegistry()
    parser = Parser(PrometheusRecorder(registry))
    try:
        parser.parse(body)
    except ParseError as e:
        logger.critical("Cannot parse %s: %s", path, e)
        return 1

    sys.stdout.write(generate_latest(registry).decode("utf-8"))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except ValidationError as e:
        configure_logging()
        logger.critical("Invalid configuration: %s", e)
        return 2

    configure_logging(settings.log_level, settings.log_file)

    if settings.file:
        return parse_file(settings.file)

    app = create_app(settings)
    # uvicorn exits the process itself if the metrics port cannot be bound
    uvicorn.run(app, host=settings.metric_host, port=settings.metric_port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
