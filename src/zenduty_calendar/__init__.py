"""Combined Zenduty on-call calendars served as iCalendar feeds."""

from zenduty_calendar.core.errors import (
    DecodeError,
    LoginError,
    ParseError,
    RemoteStatusError,
    SessionInitError,
    TransportError,
    ZendutyError,
)
from zenduty_calendar.core.session import Credentials, ZendutySession
from zenduty_calendar.core.zenduty_client import ZendutyClient
from zenduty_calendar.models.schedule import Schedule
from zenduty_calendar.services.schedules import combined_schedule

__version__ = "1.0.0"

__all__ = [
    "Credentials",
    "ZendutySession",
    "ZendutyClient",
    "Schedule",
    "combined_schedule",
    "ZendutyError",
    "SessionInitError",
    "LoginError",
    "TransportError",
    "RemoteStatusError",
    "DecodeError",
    "ParseError",
]
