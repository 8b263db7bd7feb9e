"""Command line entry point: run the pipeline once and print the result."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from threading import Event
from typing import List, Optional

from .app import build_orchestrator
from .entities import Coordinate, PublishedState
from .errors import ImproperlyConfigured
from .settings import Settings


logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nowcast", description="Fetch the forecast for the current location")
    parser.add_argument("--lat", type=float, help="Latitude (overrides NOWCAST_LOCATION)")
    parser.add_argument("--lon", type=float, help="Longitude (overrides NOWCAST_LOCATION)")
    parser.add_argument("--wait", type=float, default=30.0, help="Seconds to wait for a result")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    options = parser.parse_args(argv)
    if (options.lat is None) != (options.lon is None):
        parser.error("--lat and --lon must be given together")

    try:
        settings = Settings.from_env()
        if options.lat is not None:
            settings = replace(settings, location=Coordinate(options.lat, options.lon))
    except (ImproperlyConfigured, ValueError) as exc:
        parser.error(str(exc))

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    published = Event()
    result: List[PublishedState] = []

    def on_state(state: PublishedState) -> None:
        result.append(state)
        published.set()

    with build_orchestrator(settings) as orchestrator:
        orchestrator.state.subscribe(on_state)
        orchestrator.start()
        if not published.wait(options.wait):
            logger.error("No forecast published within %.1f seconds", options.wait)
            return 2

    state = result[-1]
    sys.stdout.write(json.dumps(state.as_dict(), ensure_ascii=False) + "\n")
    return 1 if state.has_error else 0


__all__ = ["create_parser", "main"]
