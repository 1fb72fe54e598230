"""Command-line entry point.

With no positional arguments the HTTP service is started. With
``<cc> <lat> <lng> <radius>`` a single lookup runs in-process against the
local directory and the ranked codes are printed, one per line.
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import List, Optional, TextIO, Tuple

import uvicorn

from locationcode.core.config import Settings, settings as default_settings
from locationcode.core.errors import BootstrapError
from locationcode.core.logging import configure_logging
from locationcode.main import create_app, load_directory
from locationcode.services.code_service import LocationCodeService

logger = logging.getLogger(__name__)

USAGE = "[cc] [lat] [lng] [radius]"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="locationcode", description="Location code service")
    p.add_argument("--data-dir", default=default_settings.data_dir, help="Data cache directory")
    p.add_argument("--host", default=default_settings.host)
    p.add_argument("--port", type=int, default=default_settings.port)
    p.add_argument("--log-level", default=default_settings.log_level)
    p.add_argument("query", nargs="*", help=USAGE)
    return p.parse_args(argv)


def parse_query(args: List[str]) -> Tuple[str, float, float, float]:
    """Raises ValueError with a printable message."""
    if len(args) != 4:
        raise ValueError(USAGE)
    cc = args[0].upper()
    values = []
    for raw, field in zip(args[1:], ("latitude", "longitude", "radius")):
        try:
            value = float(raw)
            if not math.isfinite(value):
                raise ValueError("not a finite number")
        except ValueError as e:
            raise ValueError(f"could not parse {raw} as {field}: {e}") from e
        values.append(value)
    lat, lng, radius_km = values
    return cc, lat, lng, radius_km


def run_lookup(svc: LocationCodeService, query: Tuple[str, float, float, float], out: TextIO = sys.stdout) -> int:
    cc, lat, lng, radius_km = query
    for a in svc.resolve(cc, radius_km, lat, lng):
        out.write(f"{a.code}\t{a.name} ({a.distance:f})\n")
    return 0


def grace_seconds(settings: Settings) -> int:
    # uvicorn takes whole seconds; never round a grace period down to none
    return math.ceil(settings.shutdown_grace_seconds)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    query = None
    if args.query:
        try:
            query = parse_query(args.query)
        except ValueError as e:
            print(e)
            return 2

    settings: Settings = default_settings.model_copy(
        update={"data_dir": args.data_dir, "host": args.host, "port": args.port}
    )

    try:
        directory = load_directory(settings)
    except BootstrapError as e:
        logger.error(f"data error: {e}")
        return 2

    if query is not None:
        return run_lookup(LocationCodeService(directory, settings.policy), query)

    uvicorn.run(
        create_app(directory=directory, settings=settings),
        host=settings.host,
        port=settings.port,
        timeout_graceful_shutdown=grace_seconds(settings),
        log_config=None,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
