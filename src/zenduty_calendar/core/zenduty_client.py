"""
Zenduty dashboard client with lazy initialization.
"""

import logging

import httpx
from pydantic import TypeAdapter, ValidationError

from zenduty_calendar.core.config import (
    SCHEDULE_MONTHS,
    ZENDUTY_BASE_URL,
    ZENDUTY_PASSWORD,
    ZENDUTY_TIMEOUT_SECONDS,
    ZENDUTY_USERNAME,
)
from zenduty_calendar.core.errors import DecodeError
from zenduty_calendar.core.session import Credentials, ZendutySession
from zenduty_calendar.models.schedule import Schedule
from zenduty_calendar.models.teams import CalendarFeedRef, ScheduleRef, Team

logger = logging.getLogger(__name__)

_teams_adapter = TypeAdapter(list[Team])
_schedules_adapter = TypeAdapter(list[ScheduleRef])
_feed_adapter = TypeAdapter(CalendarFeedRef)


def _decode(resp: httpx.Response, adapter: TypeAdapter, what: str):
    try:
        return adapter.validate_json(resp.content)
    except ValidationError as exc:
        raise DecodeError(f"can't decode {what}: {exc}") from exc


class ZendutyClient:
    """Read-only access to teams, schedules and schedule feeds."""

    def __init__(self, session: ZendutySession) -> None:
        self._session = session

    @property
    def session(self) -> ZendutySession:
        return self._session

    async def list_teams(self) -> list[Team]:
        """GET /api/account/teams"""
        await self._session.ensure_session()
        resp = await self._session.request("GET", "/api/account/teams")
        return _decode(resp, _teams_adapter, "team list")

    async def list_schedules(self, team_id: str) -> list[ScheduleRef]:
        """GET /api/account/teams/{team_id}/schedules"""
        await self._session.ensure_session()
        resp = await self._session.request("GET", f"/api/account/teams/{team_id}/schedules")
        return _decode(resp, _schedules_adapter, f"schedules of team {team_id}")

    async def get_schedule(
        self, team_id: str, schedule_id: str, months: int = SCHEDULE_MONTHS
    ) -> Schedule:
        """
        Fetch one schedule as a calendar.

        Zenduty answers with a short-lived signed URL instead of the feed
        itself, so this is two requests: the authenticated lookup of the
        URL and an unauthenticated download of the feed.
        """
        await self._session.ensure_session()
        resp = await self._session.request(
            "GET",
            f"/api/account/teams/{team_id}/schedules/{schedule_id}/get_schedule_ics/",
            params={"months": months, "is_team_or_user": 1},
        )
        feed = _decode(resp, _feed_adapter, f"feed url of schedule {schedule_id!r}")
        try:
            absolute = httpx.URL(feed.url).is_absolute_url
        except httpx.InvalidURL:
            absolute = False
        if not absolute:
            raise DecodeError(f"feed url of schedule {schedule_id!r} is not absolute: {feed.url!r}")

        resp = await self._session.request("GET", feed.url, authenticated=False)
        schedule = Schedule.from_ics(resp.content)
        logger.debug(
            "fetched schedule %s of team %s: %d events", schedule_id, team_id, len(schedule)
        )
        return schedule

    async def aclose(self) -> None:
        await self._session.aclose()


_zenduty_client: ZendutyClient | None = None


def env_credentials() -> Credentials:
    """Default credential resolver reading ZENDUTY_USERNAME/ZENDUTY_PASSWORD."""
    return Credentials(email=ZENDUTY_USERNAME, password=ZENDUTY_PASSWORD)


def get_zenduty_client() -> ZendutyClient:
    """Get or create the Zenduty client (lazy initialization)."""
    global _zenduty_client
    if _zenduty_client is None:
        session = ZendutySession(
            credentials=env_credentials,
            base_url=ZENDUTY_BASE_URL,
            timeout=ZENDUTY_TIMEOUT_SECONDS,
        )
        _zenduty_client = ZendutyClient(session)
    return _zenduty_client


async def close_zenduty_client() -> None:
    """Close the shared client, if one was created."""
    global _zenduty_client
    if _zenduty_client is not None:
        await _zenduty_client.aclose()
        _zenduty_client = None
