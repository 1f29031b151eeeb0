"""Calendar feed endpoints."""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import Response

from zenduty_calendar.api.dependencies import get_client
from zenduty_calendar.core import config
from zenduty_calendar.core.zenduty_client import ZendutyClient
from zenduty_calendar.models.schedule import Schedule
from zenduty_calendar.services.schedules import combined_schedule

router = APIRouter()


def calendar_response(schedule: Schedule) -> Response:
    """Serialize a schedule as a cacheable text/calendar response."""
    return Response(
        content=schedule.to_ics(),
        media_type="text/calendar; charset=utf-8",
        headers={"Cache-Control": f"max-age={config.CACHE_MAX_AGE_SECONDS}, public"},
    )


async def member_schedule(client: ZendutyClient, member: str) -> Response:
    schedule = await combined_schedule(client, member, months=config.SCHEDULE_MONTHS)
    return calendar_response(schedule.only_attendees(member))


@router.get("/calendar/{team}/{schedule}/{member}")
async def team_schedule_endpoint(
    team: str,
    schedule: str,
    member: str,
    client: ZendutyClient = Depends(get_client),
):
    """
    One schedule of one team, identified by their UUIDs.

    Only events attended by ``member`` (an email address) are kept.
    """
    result = await client.get_schedule(team, schedule, config.SCHEDULE_MONTHS)
    return calendar_response(result.only_attendees(member))


@router.get("/myschedule")
async def my_schedule_endpoint(client: ZendutyClient = Depends(get_client)):
    """
    Combined schedule of all teams the configured Zenduty user is part of.

    Only events which contain that user as attendee are kept.
    """
    if not config.ZENDUTY_USERNAME:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="ZENDUTY_USERNAME is not configured",
        )
    return await member_schedule(client, config.ZENDUTY_USERNAME)


@router.get("/myschedule/{member}")
async def member_schedule_endpoint(
    member: str,
    client: ZendutyClient = Depends(get_client),
):
    """
    Combined schedule of all teams ``member`` (an email address) is part of.

    Only events which contain that member as attendee are kept.
    """
    return await member_schedule(client, member)
