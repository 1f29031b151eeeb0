"""
Typed records for the Zenduty dashboard API.

Field names follow the JSON payloads (``unique_id``, ``username``...) via
aliases; unknown fields are ignored.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        # null fields fall back to their defaults
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class User(_ApiModel):
    """Identity of a team member as reported by Zenduty."""

    id: str = Field("", alias="username")
    first_name: str = ""
    last_name: str = ""
    email: str = ""


class TeamMember(_ApiModel):
    """Membership of a user in a team."""

    id: str = Field("", alias="unique_id")
    user: User = Field(default_factory=User)
    joining_date: datetime | None = None


class Team(_ApiModel):
    """A Zenduty team and its members."""

    id: str = Field(alias="unique_id")
    name: str = ""
    account: str = ""
    members: list[TeamMember] = Field(default_factory=list)

    def contains_user(self, email: str) -> bool:
        """Exact, case-sensitive match on the member email."""
        return any(member.user.email == email for member in self.members)


class ScheduleRef(_ApiModel):
    """On-call schedule metadata within one team."""

    id: str = Field(alias="unique_id")
    name: str = ""
    summary: str = ""
    description: str = ""


class CalendarFeedRef(_ApiModel):
    """Short-lived signed URL of a schedule's iCalendar feed."""

    url: str
