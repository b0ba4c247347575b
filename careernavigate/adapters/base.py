"""Shared HTTP plumbing for the outbound API adapters.

Adapters own a ``requests.Session`` and funnel every call through
_make_request, which maps transport failures, HTTP error statuses and
non-JSON bodies onto the AdapterError hierarchy and logs each outcome.
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

import requests

from careernavigate.logging import get_logger

from .exceptions import (
    AdapterConfigurationError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
)

logger = get_logger(__name__, component="adapter")

DEFAULT_USER_AGENT = "CareerNavigate/1.0"


def _loggable_url(url: str) -> str:
    """URL without its query string; query params may carry API keys."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


class BaseAdapter:
    """Base class for HTTP API adapters.

    Attributes:
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header for HTTP requests
    """

    ADAPTER_NAME = "base"

    def __init__(self, timeout: int = 90, user_agent: str = DEFAULT_USER_AGENT) -> None:
        """Initialize adapter with configuration.

        Args:
            timeout: HTTP request timeout in seconds (5-300)
            user_agent: User-Agent header for requests

        Raises:
            AdapterConfigurationError: If timeout is outside valid range or user_agent is empty
        """
        if not 5 <= timeout <= 300:
            raise AdapterConfigurationError(
                f"Timeout must be between 5 and 300 seconds, got: {timeout}"
            )
        if not user_agent or not user_agent.strip():
            raise AdapterConfigurationError("user_agent cannot be empty")

        self.timeout = timeout
        self.user_agent = user_agent.strip()

        self._session = requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    def close(self) -> None:
        self._session.close()

    def _make_request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, str]] = None,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the decoded JSON body.

        Args:
            url: URL to request
            method: HTTP method
            headers: Extra headers merged over the session defaults
            params: Query parameters
            json_data: JSON body

        Returns:
            Parsed JSON (dict or list)

        Raises:
            AdapterHTTPError: On 4xx/5xx status or connection failure
            AdapterTimeoutError: On request timeout
            AdapterResponseError: When the body is not JSON
        """
        log_url = _loggable_url(url)

        logger.debug(
            f"HTTP {method} request to {log_url}",
            extra={
                "event": "adapter.request.sent",
                "adapter": self.ADAPTER_NAME,
                "method": method,
                "url": log_url,
                "timeout": self.timeout,
            },
        )

        try:
            response = self._session.request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json_data,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {log_url} timed out after {self.timeout} seconds",
                extra={
                    "event": "adapter.request.timeout",
                    "adapter": self.ADAPTER_NAME,
                    "url": log_url,
                    "timeout": self.timeout,
                },
            )
            raise AdapterTimeoutError(
                f"Request to {log_url} timed out after {self.timeout} seconds",
                url=log_url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {log_url} failed: {type(e).__name__}",
                extra={
                    "event": "adapter.request.failed",
                    "adapter": self.ADAPTER_NAME,
                    "error_type": type(e).__name__,
                    "url": log_url,
                },
            )
            raise AdapterHTTPError(
                f"Request to {log_url} failed: {type(e).__name__}",
                status_code=0,
                url=log_url,
            ) from e

        if response.status_code >= 400:
            transient = response.status_code == 429 or response.status_code >= 500
            logger.log(
                logging.WARNING if transient else logging.ERROR,
                f"HTTP {response.status_code} error from {log_url}",
                extra={
                    "event": "adapter.request.http_error",
                    "adapter": self.ADAPTER_NAME,
                    "status_code": response.status_code,
                    "url": log_url,
                },
            )
            raise AdapterHTTPError(
                f"HTTP {response.status_code}: {response.reason}",
                status_code=response.status_code,
                url=log_url,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                f"Failed to parse JSON response from {log_url}",
                extra={
                    "event": "adapter.response.invalid_json",
                    "adapter": self.ADAPTER_NAME,
                    "url": log_url,
                },
            )
            raise AdapterResponseError(
                f"Failed to parse JSON response from {log_url}: {e}",
                body_preview=(response.text or "")[:200],
            ) from e

        logger.debug(
            "HTTP request succeeded",
            extra={
                "event": "adapter.request.succeeded",
                "adapter": self.ADAPTER_NAME,
                "status_code": response.status_code,
                "url": log_url,
            },
        )
        return data
