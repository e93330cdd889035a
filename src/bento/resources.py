"""Bento API resources, one class per endpoint family."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

import httpx

from .context import Context
from .exceptions import (
    APIResponseError,
    InvalidBatchSizeError,
    InvalidContentError,
    InvalidNameError,
    InvalidRequestError,
    InvalidSegmentIDError,
    PartialBatchFailureError,
    SubscriberNotFoundError,
)
from .types import (
    BatchResult,
    BlacklistData,
    BroadcastData,
    BroadcastType,
    CommandData,
    CommandType,
    EmailData,
    EventData,
    FieldData,
    JSONObject,
    ReportResponse,
    SubscriberData,
    SubscriberInput,
    TagData,
    ValidationData,
    ValidationResponse,
)
from .validation import check_email, check_ip, check_tag_list, check_tags

if TYPE_CHECKING:
    from .client import BentoClient

MAX_EMAILS_PER_BATCH = 60


def decode_json(response: httpx.Response, *expected_fields: str) -> dict[str, Any]:
    """Decode a JSON object body, requiring ``expected_fields`` to be present.

    Raises:
        APIResponseError: If the body is not a JSON object or a field is missing.
    """
    try:
        data = response.json()
    except ValueError as e:
        raise APIResponseError(f"failed to parse response: {e}", status_code=response.status_code)

    if not isinstance(data, dict):
        raise APIResponseError(
            f"invalid JSON response: expected an object, got {type(data).__name__}",
            status_code=response.status_code,
        )

    for name in expected_fields:
        if name not in data:
            raise APIResponseError(
                f"missing required field in response: {name}",
                status_code=response.status_code,
            )
    return data


def _decode_record(response: httpx.Response, key: str = "data") -> dict[str, Any] | None:
    data = decode_json(response).get(key)
    if data is not None and not isinstance(data, dict):
        raise APIResponseError(f"invalid {key!r} in response", status_code=response.status_code)
    return data


def _decode_records(response: httpx.Response, key: str = "data") -> list[dict[str, Any]]:
    records = decode_json(response).get(key)
    if records is None:
        return []
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise APIResponseError(f"invalid {key!r} in response", status_code=response.status_code)
    return records


def _batch_result(response: httpx.Response, operation: str) -> BatchResult:
    """Read a ``{"results", "failed"}`` envelope, raising on any failed item."""
    data = decode_json(response)
    results = data.get("results", 0)
    failed = data.get("failed", 0)
    if not isinstance(results, int) or not isinstance(failed, int):
        raise APIResponseError(
            f"invalid batch counts in response: results={results!r}, failed={failed!r}",
            status_code=response.status_code,
        )
    if failed > 0:
        raise PartialBatchFailureError(operation, results, failed, status_code=response.status_code)
    return BatchResult(results=results, failed=failed)


def _parse(response: httpx.Response, record_type: Any, data: dict[str, Any]) -> Any:
    try:
        return record_type.from_dict(data)
    except (AttributeError, TypeError, ValueError) as e:
        raise APIResponseError(f"failed to parse response: {e}", status_code=response.status_code)


def _require_items(items: Sequence[Any], what: str) -> None:
    if not items:
        raise InvalidRequestError(f"invalid request parameters: no {what} provided")


class SubscribersResource:
    """Subscribers API resource."""

    def __init__(self, client: BentoClient):
        self._client = client

    def find(self, email: str, ctx: Context | None = None) -> SubscriberData:
        """Find a subscriber by email.

        Args:
            email: Subscriber email address.
            ctx: Optional cancellation context.

        Returns:
            The subscriber record.

        Raises:
            InvalidEmailError: If the address does not parse.
            SubscriberNotFoundError: If the API returns an empty record.
        """
        check_email(email)
        response = self._client.execute(
            "GET", "/fetch/subscribers", params={"email": email}, ctx=ctx
        )
        record = _decode_record(response)
        subscriber = _parse(response, SubscriberData, record or {})
        if not subscriber.id:
            raise SubscriberNotFoundError(email)
        return subscriber

    def create(self, subscriber: SubscriberInput, ctx: Context | None = None) -> SubscriberData:
        """Create a subscriber.

        Args:
            subscriber: Subscriber to create.
            ctx: Optional cancellation context.

        Returns:
            The created subscriber record.
        """
        check_email(subscriber.email)
        check_tags(subscriber.tags)
        check_tags(subscriber.remove_tags)
        response = self._client.execute(
            "POST", "/fetch/subscribers", json={"subscriber": subscriber.to_dict()}, ctx=ctx
        )
        return _parse(response, SubscriberData, _decode_record(response) or {})

    def import_batch(
        self,
        subscribers: Sequence[SubscriberInput],
        ctx: Context | None = None,
    ) -> BatchResult:
        """Import subscribers in one batch.

        Every subscriber is validated before the request is sent.

        Returns:
            Batch counts.

        Raises:
            PartialBatchFailureError: If the API reports failed items.
        """
        _require_items(subscribers, "subscribers")
        for subscriber in subscribers:
            check_email(subscriber.email)
            check_tags(subscriber.tags)
            check_tags(subscriber.remove_tags)

        response = self._client.execute(
            "POST",
            "/batch/subscribers",
            json={"subscribers": [s.to_dict() for s in subscribers]},
            ctx=ctx,
        )
        return _batch_result(response, "import")


class EventsResource:
    """Events API resource."""

    def __init__(self, client: BentoClient):
        self._client = client

    def track(self, events: Sequence[EventData], ctx: Context | None = None) -> BatchResult:
        """Track one or more events.

        Args:
            events: Events to send; each needs a type and a valid email.
            ctx: Optional cancellation context.

        Returns:
            Batch counts.

        Raises:
            PartialBatchFailureError: If the API reports failed items.
        """
        _require_items(events, "events")
        for event in events:
            check_email(event.email)
            if not event.type:
                raise InvalidRequestError("invalid request parameters: event type is required")

        response = self._client.execute(
            "POST", "/batch/events", json={"events": [e.to_dict() for e in events]}, ctx=ctx
        )
        return _batch_result(response, "event tracking")


class EmailsResource:
    """Transactional emails API resource."""

    def __init__(self, client: BentoClient):
        self._client = client

    def send(self, emails: Sequence[EmailData], ctx: Context | None = None) -> int:
        """Send up to 60 emails.

        Args:
            emails: Emails to send.
            ctx: Optional cancellation context.

        Returns:
            Number of emails the API accepted.
        """
        _require_items(emails, "emails")
        if len(emails) > MAX_EMAILS_PER_BATCH:
            raise InvalidBatchSizeError(
                f"invalid batch size: maximum of {MAX_EMAILS_PER_BATCH} emails allowed per request",
                value=len(emails),
            )

        for email in emails:
            check_email(email.to, label="recipient")
            check_email(email.from_, label="sender")
            if not email.subject:
                raise InvalidRequestError("invalid request parameters: subject is required")
            if not email.html_body:
                raise InvalidRequestError("invalid request parameters: html_body is required")

        response = self._client.execute(
            "POST", "/batch/emails", json={"emails": [e.to_dict() for e in emails]}, ctx=ctx
        )
        results = decode_json(response).get("results", 0)
        if not isinstance(results, int):
            raise APIResponseError(
                f"invalid batch counts in response: results={results!r}",
                status_code=response.status_code,
            )
        return results


class BroadcastsResource:
    """Broadcasts API resource."""

    def __init__(self, client: BentoClient):
        self._client = client

    def list(self, ctx: Context | None = None) -> list[BroadcastData]:
        """List broadcasts."""
        response = self._client.execute("GET", "/fetch/broadcasts", ctx=ctx)
        return [_parse(response, BroadcastData, b) for b in _decode_records(response, "broadcasts")]

    def create(self, broadcasts: Sequence[BroadcastData], ctx: Context | None = None) -> None:
        """Create one or more broadcasts.

        Args:
            broadcasts: Broadcasts to create.
            ctx: Optional cancellation context.

        Raises:
            InvalidRequestError: If name, subject, content or type is missing.
            InvalidEmailError: If the sender address does not parse.
            InvalidBatchSizeError: If batch_size_per_hour is not positive.
            InvalidTagsError: If a tag filter has empty entries.
        """
        _require_items(broadcasts, "broadcasts")
        for broadcast in broadcasts:
            if not broadcast.name:
                raise InvalidRequestError("invalid request parameters: broadcast name is required")
            if not broadcast.subject:
                raise InvalidRequestError("invalid request parameters: broadcast subject is required")
            if not broadcast.content:
                raise InvalidRequestError("invalid request parameters: broadcast content is required")
            if not isinstance(broadcast.type, BroadcastType):
                try:
                    BroadcastType(broadcast.type)
                except ValueError:
                    raise InvalidRequestError(
                        f"invalid request parameters: invalid broadcast type: {broadcast.type}",
                        value=broadcast.type,
                    )
            check_email(broadcast.from_.email)
            if broadcast.batch_size_per_hour <= 0:
                raise InvalidBatchSizeError(
                    "invalid batch size: batch size must be positive",
                    value=broadcast.batch_size_per_hour,
                )
            check_tag_list(broadcast.inclusive_tags)
            check_tag_list(broadcast.exclusive_tags)

        self._client.execute(
            "POST",
            "/batch/broadcasts",
            json={"broadcasts": [b.to_dict() for b in broadcasts]},
            ctx=ctx,
        )


class TagsResource:
    """Tags API resource."""

    def __init__(self, client: BentoClient):
        self._client = client

    def list(self, ctx: Context | None = None) -> list[TagData]:
        """List tags."""
        response = self._client.execute("GET", "/fetch/tags", ctx=ctx)
        return [_parse(response, TagData, t) for t in _decode_records(response)]

    def create(self, name: str, ctx: Context | None = None) -> TagData:
        """Create a tag.

        Args:
            name: Tag name.
            ctx: Optional cancellation context.

        Returns:
            Created tag.
        """
        if not name:
            raise InvalidRequestError("invalid request parameters: tag name is required")
        response = self._client.execute(
            "POST", "/fetch/tags", json={"tag": {"name": name}}, ctx=ctx
        )
        return _parse(response, TagData, _decode_record(response) or {})


class FieldsResource:
    """Custom fields API resource."""

    def __init__(self, client: BentoClient):
        self._client = client

    def list(self, ctx: Context | None = None) -> list[FieldData]:
        """List custom fields."""
        response = self._client.execute("GET", "/fetch/fields", ctx=ctx)
        return [_parse(response, FieldData, f) for f in _decode_records(response)]

    def create(self, key: str, ctx: Context | None = None) -> FieldData:
        """Create a custom field.

        Args:
            key: Field key.
            ctx: Optional cancellation context.

        Returns:
            Created field.
        """
        if not key:
            raise InvalidRequestError("invalid request parameters: field key is required")
        response = self._client.execute(
            "POST", "/fetch/fields", json={"field": {"key": key}}, ctx=ctx
        )
        return _parse(response, FieldData, _decode_record(response) or {})


class CommandsResource:
    """Subscriber commands API resource."""

    def __init__(self, client: BentoClient):
        self._client = client

    def execute(self, commands: Sequence[CommandData], ctx: Context | None = None) -> BatchResult:
        """Run subscriber commands.

        Args:
            commands: Commands to run.
            ctx: Optional cancellation context.

        Returns:
            Batch counts.

        Commands:
            - add_tag
            - add_tag_via_event
            - remove_tag
            - add_field
            - remove_field
            - subscribe
            - unsubscribe
            - change_email
        """
        _require_items(commands, "commands")
        for command in commands:
            check_email(command.email)
            if not command.query:
                raise InvalidRequestError("invalid request parameters: command query is required")
            _check_command_type(command.command)

        response = self._client.execute(
            "POST", "/fetch/commands", json={"command": [c.to_dict() for c in commands]}, ctx=ctx
        )
        return _batch_result(response, "command execution")


def _check_command_type(command: CommandType | str) -> None:
    try:
        CommandType(command)
    except ValueError:
        raise InvalidRequestError(
            f"invalid request parameters: invalid command type: {command}",
            value=command,
        )


class StatsResource:
    """Statistics API resource."""

    def __init__(self, client: BentoClient):
        self._client = client

    def site(self, ctx: Context | None = None) -> JSONObject:
        """Get site statistics."""
        response = self._client.execute("GET", "/stats/site", ctx=ctx)
        return decode_json(response)

    def segment(self, segment_id: str, ctx: Context | None = None) -> JSONObject:
        """Get statistics for a segment.

        Args:
            segment_id: Segment ID.
            ctx: Optional cancellation context.
        """
        if not segment_id:
            raise InvalidSegmentIDError("invalid segment ID: segment ID is required")
        response = self._client.execute(
            "GET", "/stats/segment", params={"segment_id": segment_id}, ctx=ctx
        )
        return decode_json(response)

    def report(self, report_id: str, ctx: Context | None = None) -> JSONObject:
        """Get statistics for a report.

        Args:
            report_id: Report ID.
            ctx: Optional cancellation context.
        """
        if not report_id:
            raise InvalidRequestError("invalid request parameters: report ID is required")
        response = self._client.execute(
            "GET", "/stats/report", params={"report_id": report_id}, ctx=ctx
        )
        return decode_json(response)

    def report_chart(self, report_id: str, ctx: Context | None = None) -> ReportResponse:
        """Get a report decoded into its chart series."""
        if not report_id:
            raise InvalidRequestError("invalid request parameters: report ID is required")
        response = self._client.execute(
            "GET", "/stats/report", params={"report_id": report_id}, ctx=ctx
        )
        return _parse(response, ReportResponse, decode_json(response, "chart_style", "data"))


class ExperimentalResource:
    """Experimental utility endpoints."""

    def __init__(self, client: BentoClient):
        self._client = client

    def blacklist(self, data: BlacklistData, ctx: Context | None = None) -> JSONObject:
        """Check whether a domain or IP address is blacklisted.

        Args:
            data: Domain and/or IP address to check.
            ctx: Optional cancellation context.
        """
        if not data.domain and not data.ip_address:
            raise InvalidRequestError(
                "invalid request parameters: either domain or IP address is required"
            )
        params: dict[str, Any] = {}
        if data.domain:
            params["domain"] = data.domain
        if data.ip_address:
            params["ip"] = check_ip(data.ip_address)

        response = self._client.execute(
            "GET", "/experimental/blacklist.json", params=params, ctx=ctx
        )
        return decode_json(response)

    def validate_email(self, data: ValidationData, ctx: Context | None = None) -> ValidationResponse:
        """Validate an email address.

        Args:
            data: Address plus optional name, user agent and IP address.
            ctx: Optional cancellation context.

        Returns:
            Validation verdict.
        """
        check_email(data.email_address)
        params: dict[str, Any] = {"email": data.email_address}
        if data.full_name:
            params["name"] = data.full_name
        if data.user_agent:
            params["user_agent"] = data.user_agent
        if data.ip_address:
            params["ip"] = check_ip(data.ip_address)

        response = self._client.execute(
            "POST", "/experimental/validation", params=params, ctx=ctx
        )
        valid = decode_json(response, "valid")["valid"]
        if not isinstance(valid, bool):
            raise APIResponseError(
                f"invalid 'valid' in response: {valid!r}", status_code=response.status_code
            )
        return ValidationResponse(valid=valid)

    def content_moderation(self, content: str, ctx: Context | None = None) -> JSONObject:
        """Run content moderation on a piece of text."""
        if not content:
            raise InvalidContentError("invalid content: content is required")
        response = self._client.execute(
            "POST", "/experimental/content_moderation", params={"content": content}, ctx=ctx
        )
        return decode_json(response)

    def gender(self, full_name: str, ctx: Context | None = None) -> JSONObject:
        """Predict gender from a full name."""
        if not full_name:
            raise InvalidNameError("invalid name format: full name is required")
        response = self._client.execute(
            "POST", "/experimental/gender", params={"name": full_name}, ctx=ctx
        )
        return decode_json(response)

    def geolocate(self, ip_address: str, ctx: Context | None = None) -> JSONObject:
        """Geolocate an IP address."""
        check_ip(ip_address)
        response = self._client.execute(
            "GET", "/experimental/geolocation", params={"ip": ip_address}, ctx=ctx
        )
        return decode_json(response)
