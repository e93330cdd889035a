"""Data types sent to and decoded from the Bento API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

JSONValue = Union[str, int, float, bool, None, dict[str, "JSONValue"], list["JSONValue"]]
JSONObject = dict[str, JSONValue]


class BroadcastType(str, Enum):
    PLAIN = "plain"
    RAW = "raw"


class CommandType(str, Enum):
    """Subscriber command kinds accepted by ``/fetch/commands``."""

    ADD_TAG = "add_tag"
    ADD_TAG_VIA_EVENT = "add_tag_via_event"
    REMOVE_TAG = "remove_tag"
    ADD_FIELD = "add_field"
    REMOVE_FIELD = "remove_field"
    SUBSCRIBE = "subscribe"
    UNSUBSCRIBE = "unsubscribe"
    CHANGE_EMAIL = "change_email"


class ChartType(str, Enum):
    """Chart styles reported by ``/stats/report``."""

    COUNTER = "counter"
    COLUMN = "column_chart"
    AREA = "area_chart"
    LINE = "line_chart"


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop empty optional members, mirroring the API's omitempty encoding."""
    return {k: v for k, v in data.items() if v not in (None, "", [], {})}


def _attributes(data: dict[str, Any]) -> dict[str, Any]:
    attributes = data.get("attributes")
    if attributes is None:
        return {}
    if not isinstance(attributes, dict):
        raise ValueError(f"attributes must be an object, got {type(attributes).__name__}")
    return attributes


# =============================================================================
# Subscribers
# =============================================================================


@dataclass
class SubscriberInput:
    """A subscriber to create or import."""

    email: str
    first_name: str = ""
    last_name: str = ""
    tags: list[str] | None = None
    remove_tags: list[str] | None = None
    fields: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "email": self.email,
            **_compact(
                {
                    "first_name": self.first_name,
                    "last_name": self.last_name,
                    "tags": self.tags,
                    "remove_tags": self.remove_tags,
                    "fields": self.fields,
                }
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubscriberInput:
        return cls(
            email=data.get("email") or "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            tags=data.get("tags"),
            remove_tags=data.get("remove_tags"),
            fields=data.get("fields"),
        )


@dataclass
class SubscriberData:
    """A subscriber record as returned by the API."""

    id: str
    type: str = ""
    uuid: str = ""
    email: str = ""
    fields: dict[str, Any] = field(default_factory=dict)
    cached_tag_ids: list[str] = field(default_factory=list)
    unsubscribed_at: str | None = None
    navigation_url: str = ""

    @property
    def is_unsubscribed(self) -> bool:
        return self.unsubscribed_at is not None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubscriberData:
        attributes = _attributes(data)
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            uuid=attributes.get("uuid") or "",
            email=attributes.get("email") or "",
            fields=attributes.get("fields") or {},
            cached_tag_ids=attributes.get("cached_tag_ids") or [],
            unsubscribed_at=attributes.get("unsubscribed_at"),
            navigation_url=attributes.get("navigation_url") or "",
        )


# =============================================================================
# Events and emails
# =============================================================================


@dataclass
class EventData:
    """A tracking event tied to a subscriber email."""

    type: str
    email: str
    fields: dict[str, Any] | None = None
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "email": self.email,
            **_compact({"fields": self.fields, "details": self.details}),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventData:
        return cls(
            type=data.get("type") or "",
            email=data.get("email") or "",
            fields=data.get("fields"),
            details=data.get("details"),
        )


@dataclass
class EmailData:
    """A transactional email. ``from_`` is sent as ``from``."""

    to: str
    from_: str
    subject: str
    html_body: str
    transactional: bool = False
    personalizations: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "from": self.from_,
            "subject": self.subject,
            "html_body": self.html_body,
            "transactional": self.transactional,
            **_compact({"personalizations": self.personalizations}),
        }


# =============================================================================
# Broadcasts
# =============================================================================


@dataclass
class ContactData:
    email: str
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {**_compact({"name": self.name}), "email": self.email}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContactData:
        return cls(email=data.get("email") or "", name=data.get("name") or "")


@dataclass
class BroadcastData:
    """A broadcast campaign.

    ``inclusive_tags`` and ``exclusive_tags`` are comma-separated tag names.
    ``batch_size_per_hour`` must be positive when creating a broadcast.
    """

    name: str
    subject: str
    content: str
    type: BroadcastType
    from_: ContactData
    batch_size_per_hour: int
    inclusive_tags: str = ""
    exclusive_tags: str = ""
    segment_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        broadcast_type = self.type.value if isinstance(self.type, BroadcastType) else self.type
        return {
            "name": self.name,
            "subject": self.subject,
            "content": self.content,
            "type": broadcast_type,
            "from": self.from_.to_dict(),
            **_compact(
                {
                    "inclusive_tags": self.inclusive_tags,
                    "exclusive_tags": self.exclusive_tags,
                    "segment_id": self.segment_id,
                }
            ),
            "batch_size_per_hour": self.batch_size_per_hour,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BroadcastData:
        raw_type = data.get("type") or BroadcastType.PLAIN.value
        try:
            broadcast_type: BroadcastType | str = BroadcastType(raw_type)
        except ValueError:
            broadcast_type = raw_type
        return cls(
            name=data.get("name") or "",
            subject=data.get("subject") or "",
            content=data.get("content") or "",
            type=broadcast_type,
            from_=ContactData.from_dict(data.get("from") or {}),
            batch_size_per_hour=data.get("batch_size_per_hour") or 0,
            inclusive_tags=data.get("inclusive_tags") or "",
            exclusive_tags=data.get("exclusive_tags") or "",
            segment_id=data.get("segment_id") or "",
        )


# =============================================================================
# Commands, tags and fields
# =============================================================================


@dataclass
class CommandData:
    """One subscriber mutation for ``/fetch/commands``."""

    command: CommandType
    email: str
    query: str

    def to_dict(self) -> dict[str, Any]:
        command = self.command.value if isinstance(self.command, CommandType) else self.command
        return {"command": command, "email": self.email, "query": self.query}


@dataclass
class TagData:
    id: str
    type: str = ""
    name: str = ""
    created_at: str = ""
    discarded_at: str | None = None
    site_id: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TagData:
        attributes = _attributes(data)
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            name=attributes.get("name") or "",
            created_at=attributes.get("created_at") or "",
            discarded_at=attributes.get("discarded_at"),
            site_id=attributes.get("site_id") or 0,
        )


@dataclass
class FieldData:
    id: str
    type: str = ""
    name: str = ""
    key: str = ""
    whitelisted: bool | None = None
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FieldData:
        """Create from API response dict.

        Raises:
            ValueError: If ``created_at`` is not an ISO 8601 timestamp.
        """
        attributes = _attributes(data)
        created_at = attributes.get("created_at")
        return cls(
            id=data.get("id") or "",
            type=data.get("type") or "",
            name=attributes.get("name") or "",
            key=attributes.get("key") or "",
            whitelisted=attributes.get("whitelisted"),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )


# =============================================================================
# Experimental lookups
# =============================================================================


@dataclass
class BlacklistData:
    """Blacklist lookup parameters. At least one member is required."""

    domain: str = ""
    ip_address: str = ""


@dataclass
class ValidationData:
    email_address: str
    full_name: str = ""
    user_agent: str = ""
    ip_address: str = ""


@dataclass
class ValidationResponse:
    valid: bool


# =============================================================================
# Batches and reports
# =============================================================================


@dataclass
class BatchResult:
    """Counts from a ``{"results": N, "failed": M}`` batch envelope."""

    results: int
    failed: int = 0


@dataclass
class ReportDataPoint:
    group: str
    date: str
    value: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReportDataPoint:
        return cls(group=data.get("g") or "", date=data.get("x") or "", value=data.get("y") or 0)


@dataclass
class ReportResponse:
    chart_style: ChartType
    data: list[ReportDataPoint]
    report_name: str = ""
    report_type: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReportResponse:
        """Create from API response dict.

        Raises:
            ValueError: If ``chart_style`` is not a known ChartType.
        """
        return cls(
            chart_style=ChartType(data.get("chart_style")),
            data=[ReportDataPoint.from_dict(point) for point in data.get("data") or []],
            report_name=data.get("report_name") or "",
            report_type=data.get("report_type") or "",
        )
