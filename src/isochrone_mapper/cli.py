"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import requests
from pydantic import ValidationError

from isochrone_mapper import __version__
from isochrone_mapper.config import get_settings
from isochrone_mapper.exceptions import IsochroneError
from isochrone_mapper.flows.isochrone import isochrone_flow
from isochrone_mapper.schemas import MAX_BUDGET_MINUTES, MIN_BUDGET_MINUTES, TravelMode


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="isochrone-mapper",
        description="Map the area reachable from an address within a travel-time budget",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    compute_parser = subparsers.add_parser("compute", help="Compute an isochrone for an address")
    compute_parser.add_argument("address", type=str, help="Origin address")
    compute_parser.add_argument(
        "--minutes",
        type=int,
        default=30,
        help="Travel-time budget in minutes, 1-120 (default: 30)",
    )
    compute_parser.add_argument(
        "--mode",
        type=str.upper,
        choices=[m.value for m in TravelMode],
        default=TravelMode.DRIVING.value,
        help="Travel mode (default: DRIVING)",
    )
    compute_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write GeoJSON to this file instead of stdout",
    )

    subparsers.add_parser("info", help="Show application info")

    return parser


def configure_logging(debug: bool) -> None:
    """Route library logging to stderr."""
    level = logging.DEBUG if debug else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def cmd_compute(args: argparse.Namespace) -> int:
    """Handle the 'compute' command."""
    if not MIN_BUDGET_MINUTES <= args.minutes <= MAX_BUDGET_MINUTES:
        print(
            f"Error: --minutes must be between {MIN_BUDGET_MINUTES} and {MAX_BUDGET_MINUTES}",
            file=sys.stderr,
        )
        return 1

    try:
        feature = isochrone_flow(args.address, budget_minutes=args.minutes, mode=args.mode)
    except IsochroneError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Error: invalid request: {exc}", file=sys.stderr)
        return 1
    except requests.RequestException as exc:
        print(f"Error: geocoding request failed: {exc}", file=sys.stderr)
        return 1

    text = json.dumps(feature, indent=2)
    if args.output is None:
        print(text)
    else:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text)
        print(f"Wrote isochrone to {args.output}", file=sys.stderr)
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"API key configured: {bool(settings.google_maps_api_key)}")
    print(
        f"Batching: {settings.chunk_size} per chunk, {settings.max_concurrent_chunks} concurrent, "
        f"{settings.wave_delay_seconds}s between waves"
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    configure_logging(args.debug or get_settings().debug)

    commands = {
        "compute": cmd_compute,
        "info": cmd_info,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
