"""Tests for ZendutyClient: typed decoding and the two-step feed download."""

import pytest

from conftest import PASSWORD, USER1, run_async
from zenduty_calendar.core import zenduty_client
from zenduty_calendar.core.errors import (
    DecodeError,
    LoginError,
    ParseError,
    RemoteStatusError,
)


class TestListTeams:
    def test_decodes_teams(self, fake, client):
        teams = run_async(client.list_teams())

        assert [t.id for t in teams] == ["team-a", "team-b", "team-c"]
        platform = teams[0]
        assert platform.name == "Platform"
        assert platform.account == "acc-1"
        assert [m.user.email for m in platform.members] == [
            "user1@example.com",
            "user2@example.com",
        ]
        assert platform.members[0].joining_date.year == 2024
        assert platform.contains_user("user2@example.com")
        assert not platform.contains_user("USER2@example.com")

    def test_logs_in_before_first_call(self, fake, client):
        run_async(client.list_teams())
        assert fake.paths() == ["/login/", "/api/account/loginAjax/", "/api/account/teams"]

    def test_null_fields_fall_back_to_defaults(self, fake, client):
        fake.teams = [{"unique_id": "t1", "name": None, "members": None, "extra": 1}]
        teams = run_async(client.list_teams())
        assert teams[0].name == ""
        assert teams[0].members == []

    def test_status_error(self, fake, client):
        fake.failures["/api/account/teams"] = 500
        with pytest.raises(RemoteStatusError) as exc_info:
            run_async(client.list_teams())
        assert exc_info.value.status_code == 500

    def test_malformed_json(self, fake, client):
        fake.teams = "not a list"
        with pytest.raises(DecodeError):
            run_async(client.list_teams())

    def test_login_failure_surfaces(self, fake, client):
        fake.login_success = False
        with pytest.raises(LoginError):
            run_async(client.list_teams())
        assert fake.count("/api/account/teams") == 0


class TestListSchedules:
    def test_decodes_schedules(self, fake, client):
        schedules = run_async(client.list_schedules("team-a"))
        assert [(s.id, s.name) for s in schedules] == [
            ("sched-a1", "Primary"),
            ("sched-a2", "Secondary"),
        ]
        assert schedules[0].description == "Primary rotation"

    def test_missing_id_is_decode_error(self, fake, client):
        fake.schedules["team-a"] = [{"name": "no id"}]
        with pytest.raises(DecodeError):
            run_async(client.list_schedules("team-a"))


class TestGetSchedule:
    def test_two_step_fetch(self, fake, client):
        schedule = run_async(client.get_schedule("team-a", "sched-a1", months=6))

        assert len(schedule) == 2
        assert schedule.contains_event_id("a1-1")

        lookup, download = fake.requests[-2:]
        assert lookup.url.path == "/api/account/teams/team-a/schedules/sched-a1/get_schedule_ics/"
        assert lookup.url.params["months"] == "6"
        assert lookup.url.params["is_team_or_user"] == "1"
        assert "sessionid=" in lookup.headers["cookie"]

        # signed URL: no session cookie, no CSRF header
        assert download.url.host == "feeds.example.com"
        assert "cookie" not in download.headers
        assert "X-CSRFToken" not in download.headers

    def test_default_window(self, fake, client):
        run_async(client.get_schedule("team-a", "sched-a1"))
        assert fake.requests[-2].url.params["months"] == "12"

    def test_lookup_status_error(self, fake, client):
        fake.failures["/api/account/teams/team-a/schedules/sched-a1/get_schedule_ics/"] = 404
        with pytest.raises(RemoteStatusError) as exc_info:
            run_async(client.get_schedule("team-a", "sched-a1"))
        assert exc_info.value.status_code == 404

    def test_feed_status_error(self, fake, client):
        fake.failures["/feeds/sched-a1.ics"] = 410
        with pytest.raises(RemoteStatusError) as exc_info:
            run_async(client.get_schedule("team-a", "sched-a1"))
        assert exc_info.value.status_code == 410

    def test_malformed_feed(self, fake, client):
        fake.feeds["sched-a1"] = b"<html>expired link</html>"
        with pytest.raises(ParseError):
            run_async(client.get_schedule("team-a", "sched-a1"))

    def test_relative_feed_url(self, fake, client):
        fake.feed_urls["sched-a1"] = "/feeds/sched-a1.ics"
        with pytest.raises(DecodeError):
            run_async(client.get_schedule("team-a", "sched-a1"))


class TestSharedClient:
    def test_env_credentials_reads_configured_user(self, monkeypatch):
        monkeypatch.setattr(zenduty_client, "ZENDUTY_USERNAME", USER1)
        monkeypatch.setattr(zenduty_client, "ZENDUTY_PASSWORD", PASSWORD)
        creds = zenduty_client.env_credentials()
        assert creds.email == USER1
        assert creds.password == PASSWORD

    def test_get_zenduty_client_is_shared_until_closed(self, monkeypatch):
        monkeypatch.setattr(zenduty_client, "_zenduty_client", None)
        first = zenduty_client.get_zenduty_client()
        assert zenduty_client.get_zenduty_client() is first
        run_async(zenduty_client.close_zenduty_client())
        assert zenduty_client._zenduty_client is None
