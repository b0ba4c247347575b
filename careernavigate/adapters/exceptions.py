"""Exceptions raised by the outbound API adapters."""

from typing import Optional


class AdapterError(Exception):
    """Base class for every failure talking to an external API.

    Feature code catches this one class to turn transport and protocol
    failures into a user-visible, non-fatal message.
    """


class AdapterHTTPError(AdapterError):
    """The API answered with a 4xx/5xx status, or the connection failed (status 0)."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AdapterTimeoutError(AdapterError):
    """The request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """A response arrived but is not shaped like the API's documented reply."""

    def __init__(self, message: str, body_preview: Optional[str] = None) -> None:
        super().__init__(message)
        self.body_preview = body_preview


class AdapterConfigurationError(AdapterError):
    """The adapter cannot be used as configured (missing API key, bad timeout)."""
