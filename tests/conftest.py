"""
Pytest configuration and shared fixtures.
"""

import asyncio

import pytest
from fixtures.fake_zenduty import BASE_URL, FakeZenduty

from zenduty_calendar.core.session import Credentials, ZendutySession
from zenduty_calendar.core.zenduty_client import ZendutyClient

USER1 = "user1@example.com"
USER2 = "user2@example.com"
PASSWORD = "s3cret"


def run_async(coro):
    """Helper to run async coroutine in sync test."""
    return asyncio.run(coro)


def make_session(fake: FakeZenduty, email: str = USER1) -> ZendutySession:
    """Session talking to the fake service (no real network)."""
    return ZendutySession(
        lambda: Credentials(email=email, password=PASSWORD),
        base_url=BASE_URL,
        transport=fake.transport(),
    )


@pytest.fixture
def fake():
    """Fake Zenduty with three teams (see fixtures/fake_zenduty.py)."""
    return FakeZenduty()


@pytest.fixture
def client(fake):
    """Client wired to the fake service."""
    return ZendutyClient(make_session(fake))
