"""Bento API client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import KEY_LENGTH_RANGE, Config
from .context import Context
from .exceptions import (
    APIResponseError,
    BadRequestError,
    ConfigurationError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from .resources import (
    BroadcastsResource,
    CommandsResource,
    EmailsResource,
    EventsResource,
    ExperimentalResource,
    FieldsResource,
    StatsResource,
    SubscribersResource,
    TagsResource,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://app.bentonow.com/api/v1"
SUCCESS_STATUSES = (200, 201)


class BentoClient:
    """Client for interacting with the Bento API.

    Example:
        ```python
        from bento import BentoClient, EventData

        client = BentoClient(
            publishable_key="your-publishable-key",
            secret_key="your-secret-key",
            site_uuid="your-site-uuid",
        )

        # Look up a subscriber
        subscriber = client.subscribers.find("user@example.com")

        # Track an event
        client.events.track([EventData(type="$completed_onboarding", email="user@example.com")])

        # Site statistics
        stats = client.stats.site()
        ```
    """

    def __init__(
        self,
        publishable_key: str,
        secret_key: str,
        site_uuid: str,
        timeout: float = 0.0,
        key_length: tuple[int, int] | None = KEY_LENGTH_RANGE,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the Bento client.

        Args:
            publishable_key: Your Bento publishable key.
            secret_key: Your Bento secret key.
            site_uuid: Your Bento site UUID.
            timeout: Request timeout in seconds (0 means 10 seconds).
            key_length: Accepted credential length band, or None to skip.
            base_url: Base URL for the Bento API.
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests.

        Raises:
            ConfigurationError: If a credential is missing or malformed, or
                the timeout is negative.
        """
        config = Config(
            publishable_key=publishable_key,
            secret_key=secret_key,
            site_uuid=site_uuid,
            timeout=timeout,
            key_length=key_length,
        )
        self._setup(config, base_url, transport)

    @classmethod
    def from_config(
        cls,
        config: Config,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> BentoClient:
        """Create a client from an already validated Config."""
        client = cls.__new__(cls)
        client._setup(config, base_url, transport)
        return client

    @classmethod
    def from_env(
        cls,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> BentoClient:
        """Create a client from BENTO_* environment variables."""
        return cls.from_config(Config.from_env(), base_url=base_url, transport=transport)

    def _setup(
        self,
        config: Config,
        base_url: str,
        transport: httpx.BaseTransport | None,
    ) -> None:
        self.config = config
        self.base_url = base_url.rstrip("/")
        self._client = self._build_http_client(transport)

        # Resource endpoints
        self.subscribers = SubscribersResource(self)
        self.events = EventsResource(self)
        self.emails = EmailsResource(self)
        self.broadcasts = BroadcastsResource(self)
        self.tags = TagsResource(self)
        self.fields = FieldsResource(self)
        self.commands = CommandsResource(self)
        self.stats = StatsResource(self)
        self.experimental = ExperimentalResource(self)

    def _build_http_client(self, transport: httpx.BaseTransport | None) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            auth=(self.config.publishable_key, self.config.secret_key),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
                "User-Agent": f"bento-python-{self.config.site_uuid}",
            },
            timeout=self.config.timeout,
            transport=transport,
        )

    def set_transport(self, transport: httpx.BaseTransport) -> None:
        """Replace the HTTP transport.

        Meant for setup time (pointing the client at a test double); it is not
        synchronized against requests already in flight.
        """
        if transport is None:
            raise ConfigurationError("HTTP transport cannot be None")
        previous = self._client
        self._client = self._build_http_client(transport)
        previous.close()

    def execute(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        ctx: Context | None = None,
    ) -> httpx.Response:
        """Send one authenticated request and check its status.

        Raises:
            Cancelled: If ``ctx`` was cancelled before dispatch.
            DeadlineExceeded: If ``ctx`` expired before dispatch.
            APIResponseError: On any status other than 200 or 201.
            httpx.TransportError: Passed through from the transport.
        """
        if ctx is not None:
            error = ctx.err()
            if error is not None:
                raise error

        query = dict(params or {})
        query["site_uuid"] = self.config.site_uuid

        timeout = self.config.timeout
        remaining = ctx.remaining() if ctx is not None else None
        if remaining is not None:
            timeout = min(timeout, remaining)

        request = self._client.build_request(
            method,
            path,
            params=query,
            json=json,
            timeout=timeout,
        )
        logger.debug("bento request: %s %s", method, request.url.path)
        response = self._client.send(request)
        logger.debug("bento response: %s %s -> %d", method, request.url.path, response.status_code)

        self._handle_response(response)
        return response

    def _handle_response(self, response: httpx.Response) -> None:
        """Raise the exception matching a non-success status."""
        status = response.status_code
        if status in SUCCESS_STATUSES:
            return
        if status == 400:
            raise BadRequestError(_error_message(response, "Invalid request"))
        if status == 401:
            raise UnauthorizedError(_error_message(response, "Authentication required"))
        if status == 403:
            raise ForbiddenError(_error_message(response, "Access denied"))
        if status == 404:
            raise NotFoundError(_error_message(response, "Resource not found"))
        if status == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                _error_message(response, "Rate limit exceeded"),
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        if status == 500:
            raise ServerError(_error_message(response, "Internal server error"))
        if status == 503:
            raise ServiceUnavailableError(_error_message(response, "Service unavailable"))
        raise APIResponseError(
            _error_message(response, f"unexpected API response: {status}"),
            status_code=status,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> BentoClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def _error_message(response: httpx.Response, default: str) -> str:
    if not response.content:
        return default
    try:
        data = response.json()
    except ValueError:
        return default
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return data["error"]
    return default
