"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from zenduty_calendar.api.dependencies import get_client
from zenduty_calendar.api.models.responses import HealthResponse
from zenduty_calendar.core import config
from zenduty_calendar.core.zenduty_client import ZendutyClient

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(client: ZendutyClient = Depends(get_client)):
    """
    Health check endpoint for monitoring.

    Returns 200 if credentials are configured, 503 otherwise. Does not
    contact Zenduty.
    """
    credentials_configured = config.credentials_configured()
    timestamp = datetime.now(timezone.utc).isoformat()
    session_active = client.session.is_logged_in()

    if credentials_configured:
        return HealthResponse(
            status="healthy",
            version=config.API_VERSION,
            credentials_configured=True,
            session_active=session_active,
            timestamp=timestamp,
        )
    else:
        return JSONResponse(
            status_code=503,
            content=HealthResponse(
                status="unhealthy",
                version=config.API_VERSION,
                credentials_configured=False,
                session_active=session_active,
                timestamp=timestamp,
                error="ZENDUTY_USERNAME or ZENDUTY_PASSWORD not set",
            ).model_dump(),
        )
