#!/usr/bin/env python3
"""
List Zenduty teams and their on-call schedules.

Usage:
    zenduty-list-teams
    zenduty-list-teams --member someone@example.com
"""

import argparse
import asyncio

from zenduty_calendar.api.logging import configure_logging
from zenduty_calendar.core.zenduty_client import close_zenduty_client, get_zenduty_client
from zenduty_calendar.services.schedules import teams_for_user


async def list_teams(member: str | None) -> None:
    """Print teams (optionally only those of ``member``) with their schedules."""
    client = get_zenduty_client()
    try:
        print("Fetching teams from Zenduty...\n")
        teams = await client.list_teams()
        if member:
            teams = teams_for_user(teams, member)

        print(f"Found {len(teams)} teams\n")
        print("=" * 80)

        for team in teams:
            print(f"\nTeam: {team.name}")
            print(f"  ID: {team.id}")
            print(f"  Members: {', '.join(m.user.email for m in team.members) or 'None'}")

            schedules = await client.list_schedules(team.id)
            if schedules:
                print(f"  Schedules ({len(schedules)}):")
                for schedule in schedules:
                    print(f"    - {schedule.name}")
                    print(f"      ID: {schedule.id}")
                    if schedule.description:
                        print(f"      Description: {schedule.description}")
            else:
                print("  Schedules: None")

            print("-" * 80)

        print("\nDone!")
    finally:
        await close_zenduty_client()


def main() -> None:
    parser = argparse.ArgumentParser(description="List Zenduty teams and schedules")
    parser.add_argument("--member", help="only show teams this email is a member of")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(list_teams(args.member))


if __name__ == "__main__":
    main()
