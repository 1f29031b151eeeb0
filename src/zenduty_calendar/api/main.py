"""FastAPI application entry point."""

import logging
import warnings
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from zenduty_calendar.api.logging import access_log_middleware, configure_logging
from zenduty_calendar.api.routes import calendar_router, health_router, index_router
from zenduty_calendar.core import config
from zenduty_calendar.core.errors import ZendutyError
from zenduty_calendar.core.zenduty_client import close_zenduty_client, get_zenduty_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    # Startup: log in once so credential problems surface immediately
    if not config.credentials_configured():
        warnings.warn("ZENDUTY_USERNAME or ZENDUTY_PASSWORD not set")
    elif config.LOGIN_ON_STARTUP:
        await get_zenduty_client().session.login()

    yield

    await close_zenduty_client()


app = FastAPI(
    title="Zenduty Calendar",
    description="Combined, per-user iCalendar feeds of Zenduty on-call schedules",
    version=config.API_VERSION,
    debug=config.API_DEBUG,
    lifespan=lifespan,
)

app.middleware("http")(access_log_middleware)


def error_body(exc: Exception) -> str:
    """Plain-text error body; full error text only in debug mode."""
    kind = exc.kind if isinstance(exc, ZendutyError) else "internal server error"
    if config.API_DEBUG:
        return f"{kind}: {exc}"
    return kind


@app.exception_handler(ZendutyError)
async def zenduty_exception_handler(request: Request, exc: ZendutyError):
    """Turn client errors into a plain 500 response."""
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return PlainTextResponse(error_body(exc), status_code=500)


# Global exception handler for unexpected errors
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("%s %s failed", request.method, request.url.path, exc_info=exc)
    return PlainTextResponse(error_body(exc), status_code=500)


# Include routers
app.include_router(index_router)
app.include_router(health_router)
app.include_router(calendar_router)


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    configure_logging()
    uvicorn.run(
        "zenduty_calendar.api.main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.API_DEBUG,
    )


# Entry point for uvicorn
if __name__ == "__main__":
    main()
