"""
Command-line entry point.

Usage:
    orbit-locator STARLINK-1008
    orbit-locator --all --source celestrak --kml satellites.kml
    python -m orbit_locator --time 2025-04-28T12:00:00Z --verbose
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from orbit_locator.config import TrackerConfig
from orbit_locator.fetcher import TLESourceError, load_tle_text
from orbit_locator.kml import write_kml
from orbit_locator.logging_config import configure_logging, get_logger
from orbit_locator.tracker import SatelliteTracker

logger = get_logger(__name__)


def parse_time(value: str) -> datetime:
    """Parse an ISO 8601 timestamp; naive values are taken as UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        timestamp = datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO 8601 time: {value!r}") from None
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orbit-locator",
        description="Locate satellites from TLE data with a simplified analytical propagator",
    )
    parser.add_argument("names", nargs="*", metavar="NAME", help="Satellite names to locate")
    parser.add_argument("--all", action="store_true", help="Locate every satellite in the catalog")
    parser.add_argument(
        "--time", type=parse_time, default=None, help="Target time, ISO 8601 (default: now)"
    )
    parser.add_argument(
        "--source", choices=["builtin", "file", "celestrak"], default=None, help="TLE source"
    )
    parser.add_argument("--tle-file", default=None, help="Local TLE catalog path")
    parser.add_argument("--group", default=None, help="CelesTrak group name")
    parser.add_argument("--kml", default=None, metavar="PATH", help="Write a KML file")
    parser.add_argument("--workers", type=int, default=None, help="Worker threads")
    parser.add_argument(
        "--verify-checksum", action="store_true", default=None, help="Reject bad TLE checksums"
    )
    levels = parser.add_mutually_exclusive_group()
    levels.add_argument("--verbose", action="store_true", help="Enable debug logging")
    levels.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default=None
    )
    parser.add_argument("--json-logs", action="store_true", default=None, help="JSON log lines")
    parser.add_argument("--log-file", default=None, help="Also log to this file")
    return parser


def format_report(locations) -> str:
    """Plain-text table of located satellites."""
    lines = [f"{'NAME':<24} {'LAT[deg]':>10} {'LON[deg]':>11} {'ALT[km]':>10} {'V[km/s]':>8}"]
    for name, loc in locations.items():
        velocity = loc.velocity if loc.velocity is not None else float("nan")
        lines.append(
            f"{name:<24} {loc.latitude:>10.4f} {loc.longitude:>11.4f} "
            f"{loc.altitude:>10.3f} {velocity:>8.3f}"
        )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = TrackerConfig.from_env().with_overrides(
            log_level="DEBUG" if args.verbose else args.log_level,
            log_file=args.log_file,
            json_logs=args.json_logs,
            tle_source=args.source,
            tle_file=args.tle_file,
            celestrak_group=args.group,
            max_workers=args.workers,
            verify_checksum=args.verify_checksum,
        )
    except ValueError as e:
        parser.error(str(e))

    configure_logging(
        level=config.log_level, log_file=config.log_file, json_logs=config.json_logs
    )

    target = args.time if args.time is not None else datetime.now(timezone.utc)

    try:
        catalog_text = load_tle_text(config)
    except TLESourceError as e:
        logger.error(f"Could not load TLE data: {e}")
        return 1

    tracker = SatelliteTracker(catalog_text, verify_checksum=config.verify_checksum)
    available = tracker.names()
    if args.all:
        names = available
    elif args.names:
        names = args.names
    else:
        names = available[:1]

    if not names:
        logger.error("No satellites in TLE catalog")
        return 1

    logger.info(f"Locating {len(names)} satellite(s) at {target.isoformat()}")
    locations = tracker.locate_many(names, target, max_workers=config.max_workers)
    if not locations:
        logger.error("No satellite could be located")
        return 1

    print(format_report(locations))

    if args.kml:
        count = write_kml(args.kml, names, locations, target)
        logger.info(f"Wrote {count} placemark(s) to {args.kml}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
