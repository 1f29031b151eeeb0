"""FastAPI dependencies for shared resources."""

from zenduty_calendar.core.zenduty_client import ZendutyClient, get_zenduty_client


def get_client() -> ZendutyClient:
    """The process-wide Zenduty client; overridden in tests."""
    return get_zenduty_client()
