"""
Cookie-backed session against the Zenduty web dashboard.

Zenduty's dashboard endpoints are protected by a Django session cookie
(``sessionid``) and a CSRF cookie (``csrftoken``) that has to be echoed in the
``X-CSRFToken`` header. There is no API token involved: a session is obtained
by loading the login page (which seeds the CSRF cookie) and posting the
credentials to the AJAX login endpoint.
"""

import asyncio
import inspect
import logging
from http.cookiejar import Cookie
from typing import Awaitable, Callable, Iterator, NamedTuple, Union

import httpx

from zenduty_calendar.core.errors import (
    LoginError,
    RemoteStatusError,
    SessionInitError,
    TransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://www.zenduty.com"
DEFAULT_TIMEOUT = 5.0

SESSION_COOKIE = "sessionid"
CSRF_COOKIE = "csrftoken"
CSRF_HEADER = "X-CSRFToken"

LOGIN_PAGE_PATH = "/login/"
LOGIN_PATH = "/api/account/loginAjax/"


class Credentials(NamedTuple):
    """Login credentials for the Zenduty dashboard."""

    email: str
    password: str


# Called on every login, may be sync or async
CredentialResolver = Callable[[], Union[Credentials, Awaitable[Credentials]]]


class ZendutySession:
    """Owns the HTTP client and cookie jar of one logged-in Zenduty user.

    Usage::

        async with ZendutySession(lambda: Credentials(email, password)) as session:
            await session.ensure_session()
            resp = await session.request("GET", "/api/account/teams")
    """

    def __init__(
        self,
        credentials: CredentialResolver,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        try:
            url = httpx.URL(base_url.rstrip("/"))
        except httpx.InvalidURL as exc:
            raise SessionInitError(f"invalid base url {base_url!r}: {exc}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise SessionInitError(f"invalid base url {base_url!r}")

        self._credentials = credentials
        self._base_url = url
        self._login_lock = asyncio.Lock()
        self._http = httpx.AsyncClient(
            base_url=url,
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    @property
    def base_url(self) -> httpx.URL:
        return self._base_url

    # ── Cookie helpers ───────────────────────────────────────────

    def _cookies_named(self, name: str) -> Iterator[Cookie]:
        """Yield cookies called ``name`` that apply to the base host."""
        host = self._base_url.host
        for cookie in self._http.cookies.jar:
            if cookie.name != name:
                continue
            domain = cookie.domain.lstrip(".")
            if host == domain or host.endswith("." + domain):
                yield cookie

    def _discard_session(self) -> None:
        for cookie in list(self._cookies_named(SESSION_COOKIE)):
            self._http.cookies.jar.clear(cookie.domain, cookie.path, cookie.name)

    def is_logged_in(self) -> bool:
        """True while an unexpired session cookie exists for the base host."""
        return any(not cookie.is_expired() for cookie in self._cookies_named(SESSION_COOKIE))

    def csrf_token(self) -> str | None:
        """Current CSRF token from the jar; it can rotate between requests."""
        for cookie in self._cookies_named(CSRF_COOKIE):
            if not cookie.is_expired():
                return cookie.value
        return None

    # ── Login ────────────────────────────────────────────────────

    async def ensure_session(self) -> None:
        """Log in unless a valid session cookie is already present."""
        if self.is_logged_in():
            return
        async with self._login_lock:
            # another task may have logged in while we waited
            if self.is_logged_in():
                return
            await self._login()

    async def login(self) -> None:
        """Unconditionally (re)login."""
        async with self._login_lock:
            await self._login()

    async def _login(self) -> None:
        try:
            page = await self._http.get(LOGIN_PAGE_PATH)
        except httpx.TransportError as exc:
            raise LoginError(f"error getting login page: {exc}") from exc
        if not page.is_success:
            raise LoginError(f"error getting login page: status {page.status_code}")

        credentials = self._credentials()
        if inspect.isawaitable(credentials):
            credentials = await credentials

        try:
            resp = await self.request(
                "POST",
                LOGIN_PATH,
                json={"email": credentials.email, "password": credentials.password},
            )
        except (TransportError, RemoteStatusError) as exc:
            self._discard_session()
            raise LoginError(f"error logging in: {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            self._discard_session()
            raise LoginError("error logging in: malformed login response") from exc

        if not isinstance(body, dict) or body.get("success") is not True:
            self._discard_session()
            raise LoginError(f"login rejected for {credentials.email}")
        if not self.is_logged_in():
            raise LoginError("login succeeded but no session cookie was set")

        logger.info("logged in to %s as %s", self._base_url, credentials.email)

    # ── Requests ─────────────────────────────────────────────────

    async def request(
        self,
        method: str,
        url: str,
        authenticated: bool = True,
        **kwargs,
    ) -> httpx.Response:
        """Send a request and raise on transport failures or non-2xx statuses.

        Authenticated requests carry the JSON content type and the CSRF token
        read from the jar at send time; the session itself rides on cookies.
        Unauthenticated requests (signed feed URLs) get no extra headers.
        """
        headers: dict[str, str] = {}
        if authenticated:
            headers["content-type"] = "application/json"
            token = self.csrf_token()
            if token:
                headers[CSRF_HEADER] = token
        headers.update(kwargs.pop("headers", None) or {})

        logger.debug("request %s %s", method, url)
        try:
            resp = await self._http.request(method, url, headers=headers, **kwargs)
        except httpx.TransportError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        if not resp.is_success:
            raise RemoteStatusError(resp.status_code, str(resp.url))
        return resp

    # ── Lifecycle ────────────────────────────────────────────────

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ZendutySession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
