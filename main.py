#!/usr/bin/env python3
"""
SlotBook - provider availability and appointment booking.

Main entry point for the command line client.
"""

import argparse
import asyncio
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from loguru import logger
from pydantic import ValidationError

from slotbook.core.config.settings import get_settings
from slotbook.core.exceptions import ConfigurationError, SlotBookError
from slotbook.core.logger import setup_structured_logging
from slotbook.services.api import BackendApiClient
from slotbook.services.booking import BookingCoordinator, SlotPartition


def render_partition(partition: SlotPartition) -> List[str]:
    """Render morning/afternoon sections as text lines."""
    lines = []
    for title, slots in (("Morning", partition.morning), ("Afternoon", partition.afternoon)):
        lines.append(f"{title}:")
        if not slots:
            lines.append("  (no slots)")
        for slot in slots:
            lines.append(f"  {slot.label}  {'free' if slot.available else 'taken'}")
    return lines


async def list_providers(coordinator: BookingCoordinator) -> int:
    """Print the provider directory."""
    providers = await coordinator.load_providers()
    for provider in providers:
        print(f"{provider.id}\t{provider.name}")
    return 0


async def show_availability(coordinator: BookingCoordinator) -> int:
    """Print the day's slots for the coordinator's current provider/date."""
    outcome = await coordinator.refresh()
    if outcome.failed:
        print(f"Availability unavailable: {outcome.error}", file=sys.stderr)
        return 1
    for line in render_partition(coordinator.partition):
        print(line)
    return 0


async def book(coordinator: BookingCoordinator, hour: int) -> int:
    """Load the day, select ``hour`` and confirm it."""
    outcome = await coordinator.refresh()
    if outcome.failed:
        print(f"Availability unavailable: {outcome.error}", file=sys.stderr)
        return 1

    if not coordinator.select_hour(hour):
        print(f"{hour:02d}:00 is not available", file=sys.stderr)
        return 1

    result = await coordinator.confirm()
    if result.is_failure():
        print(f"Booking failed ({result.kind}): {result.error}", file=sys.stderr)
        return 1

    confirmation = result.unwrap()
    print(f"Booked appointment {confirmation.id} at {confirmation.timestamp.isoformat()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SlotBook - book a provider's free hour")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (overrides SLOTBOOK_LOG_LEVEL)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("providers", help="List providers")

    availability = sub.add_parser("availability", help="Show a provider's day")
    availability.add_argument("--provider", required=True, help="Provider ID")
    availability.add_argument(
        "--date", type=date.fromisoformat, default=date.today(), help="Day (YYYY-MM-DD)"
    )

    booking = sub.add_parser("book", help="Book a free hour")
    booking.add_argument("--provider", required=True, help="Provider ID")
    booking.add_argument(
        "--date", type=date.fromisoformat, default=date.today(), help="Day (YYYY-MM-DD)"
    )
    booking.add_argument("--hour", type=int, required=True, help="Hour of day (0-23)")
    return parser


async def run(args: argparse.Namespace, client: BackendApiClient) -> int:
    """Run one CLI command against an open client."""
    coordinator = BookingCoordinator(
        client,
        client,
        client,
        initial_provider_id=getattr(args, "provider", None),
        initial_date=getattr(args, "date", None),
    )
    if args.command == "providers":
        return await list_providers(coordinator)
    if args.command == "availability":
        return await show_availability(coordinator)
    return await book(coordinator, args.hour)


async def _main_async(args: argparse.Namespace) -> int:
    settings = get_settings()
    async with BackendApiClient.from_settings(settings) as client:
        return await run(args, client)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)

    setup_structured_logging(
        args.log_level or settings.log_level,
        json_format=settings.log_json,
        logs_dir=Path(settings.logs_dir) if settings.logs_dir else None,
    )

    try:
        sys.exit(asyncio.run(_main_async(args)))
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(2)
    except SlotBookError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
