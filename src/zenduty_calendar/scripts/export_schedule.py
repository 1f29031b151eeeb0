#!/usr/bin/env python3
"""
Export the combined on-call schedule of one member as an .ics file.

Fetches every schedule of every team the member belongs to, keeps only the
member's shifts and writes the calendar to a file or stdout.

Usage:
    zenduty-export-schedule --member someone@example.com --output oncall.ics
"""

import argparse
import asyncio
import sys
from pathlib import Path

from zenduty_calendar.api.logging import configure_logging
from zenduty_calendar.core.config import SCHEDULE_MONTHS, ZENDUTY_USERNAME
from zenduty_calendar.core.errors import ZendutyError
from zenduty_calendar.core.zenduty_client import close_zenduty_client, get_zenduty_client
from zenduty_calendar.services.schedules import combined_schedule


async def export_schedule(member: str, months: int) -> bytes:
    """Combined schedule of ``member``, filtered to their own events."""
    client = get_zenduty_client()
    try:
        schedule = await combined_schedule(client, member, months=months)
        return schedule.only_attendees(member).to_ics()
    finally:
        await close_zenduty_client()


def main() -> int:
    parser = argparse.ArgumentParser(description="Export a member's Zenduty on-call calendar")
    parser.add_argument(
        "--member",
        default=ZENDUTY_USERNAME,
        help="member email (default: ZENDUTY_USERNAME)",
    )
    parser.add_argument(
        "--months",
        type=int,
        default=SCHEDULE_MONTHS,
        help=f"schedule window in months (default: {SCHEDULE_MONTHS})",
    )
    parser.add_argument("--output", type=Path, help="output file (default: stdout)")
    args = parser.parse_args()

    if not args.member:
        parser.error("--member is required when ZENDUTY_USERNAME is not set")

    configure_logging()
    try:
        data = asyncio.run(export_schedule(args.member, args.months))
    except ZendutyError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        args.output.write_bytes(data)
        print(f"Saved: {args.output}", file=sys.stderr)
    else:
        sys.stdout.buffer.write(data)
    return 0


if __name__ == "__main__":
    sys.exit(main())
