"""Logging setup and HTTP access logging for the API."""

import logging
import time
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from fastapi import Request

from zenduty_calendar.core.config import LOG_LEVEL

access_logger = logging.getLogger("zenduty_calendar.access")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging once for the server and scripts."""
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO, which would include signed feed URLs
    logging.getLogger("httpx").setLevel(logging.WARNING)


@dataclass
class RequestLog:
    """Captured request/response data for the access log."""

    request_id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    method: str = ""
    path: str = ""
    remote_addr: str | None = None
    user_agent: str | None = None
    status_code: int = 0
    processing_time_ms: int = 0


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def log_request(log: RequestLog) -> None:
    """Write one access log line."""
    access_logger.info(
        "access method=%s path=%s status=%d duration_ms=%d remote_addr=%s user_agent=%r request_id=%s",
        log.method,
        log.path,
        log.status_code,
        log.processing_time_ms,
        log.remote_addr,
        log.user_agent,
        log.request_id,
        extra={"request": asdict(log)},
    )


async def access_log_middleware(request: Request, call_next):
    """Log every request after it has been handled."""
    start_time = time.time()
    request_log = RequestLog(
        method=request.method,
        path=request.url.path,
        remote_addr=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    request_log.status_code = 500
    try:
        response = await call_next(request)
        request_log.status_code = response.status_code
        response.headers["X-Request-ID"] = request_log.request_id
        return response
    finally:
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        log_request(request_log)
