"""Structured exceptions for the Zenduty session client."""


class ZendutyError(Exception):
    """Base exception for all Zenduty client errors."""

    # Short label safe to show to HTTP callers
    kind = "zenduty error"


class SessionInitError(ZendutyError):
    """The HTTP client or cookie jar could not be set up."""

    kind = "session setup failed"


class LoginError(ZendutyError):
    """Login page fetch failed or the login was rejected."""

    kind = "login failed"


class TransportError(ZendutyError):
    """Network-level failure (connect, timeout, protocol)."""

    kind = "remote service unreachable"


class RemoteStatusError(ZendutyError):
    """Non-2xx response from an API or feed endpoint."""

    kind = "remote service returned an error"

    def __init__(self, status_code: int, url: str, message: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message or f"received error code {status_code} from {url}")


class DecodeError(ZendutyError):
    """Malformed JSON (or unexpected JSON shape) in a response body."""

    kind = "unexpected response from remote service"


class ParseError(ZendutyError):
    """Calendar feed body could not be parsed."""

    kind = "invalid calendar feed"
