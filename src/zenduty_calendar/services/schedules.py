"""
Schedule discovery and aggregation across a user's Zenduty teams.
"""

import asyncio
import logging
from typing import Awaitable, Iterable, TypeVar

from icalendar import Event

from zenduty_calendar.core.config import (
    COMBINED_CALENDAR_NAME,
    FETCH_CONCURRENCY,
    SCHEDULE_MONTHS,
)
from zenduty_calendar.core.zenduty_client import ZendutyClient
from zenduty_calendar.models.schedule import Schedule
from zenduty_calendar.models.teams import Team

logger = logging.getLogger(__name__)

T = TypeVar("T")


def teams_for_user(teams: Iterable[Team], email: str) -> list[Team]:
    """Teams whose member list contains ``email`` (exact, case-sensitive)."""
    return [team for team in teams if team.contains_user(email)]


def relabel_event(event: Event, team_name: str, schedule_name: str) -> None:
    """Overwrite summary and description with the team/schedule the shift belongs to."""
    summary = f"on call for team {team_name}"
    for name, value in (
        ("SUMMARY", summary),
        ("DESCRIPTION", f"{summary} (schedule: {schedule_name})"),
    ):
        event.pop(name, None)
        event.add(name, value)


async def _gather_bounded(coros: list[Awaitable[T]], limit: int) -> list[T]:
    """
    Run coroutines with at most ``limit`` in flight, results in input order.

    The first failure cancels everything still pending and is re-raised.
    """
    semaphore = asyncio.Semaphore(max(1, limit))

    async def run(coro: Awaitable[T]) -> T:
        async with semaphore:
            return await coro

    tasks = [asyncio.ensure_future(run(coro)) for coro in coros]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def combined_schedule(
    client: ZendutyClient,
    email: str,
    months: int = SCHEDULE_MONTHS,
    concurrency: int = FETCH_CONCURRENCY,
) -> Schedule:
    """
    Combined on-call schedule of every team the given user is a member of.

    Events keep the order (team, schedule, event in feed). Every event is
    relabelled with its team and schedule name; the feed's own summary and
    description are dropped. Any failed fetch aborts the whole aggregation.
    """
    teams = teams_for_user(await client.list_teams(), email)
    logger.info("found %d teams for %s", len(teams), email)

    schedule_lists = await _gather_bounded(
        [client.list_schedules(team.id) for team in teams], concurrency
    )
    pairs = [
        (team, schedule)
        for team, schedules in zip(teams, schedule_lists)
        for schedule in schedules
    ]
    calendars = await _gather_bounded(
        [client.get_schedule(team.id, schedule.id, months) for team, schedule in pairs],
        concurrency,
    )

    combined = Schedule.new(COMBINED_CALENDAR_NAME)
    for (team, schedule), calendar in zip(pairs, calendars):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "got calendar response for team %s schedule %s: %s",
                team.name,
                schedule.name,
                calendar.to_ics().decode("utf-8", errors="replace"),
            )
        for event in calendar.events:
            relabel_event(event, team.name, schedule.name)
            combined.add_event(event)
    return combined
