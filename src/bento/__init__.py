"""Bento Python SDK - Subscribers, events, emails and broadcasts for Bento."""

import logging

from .client import BentoClient, DEFAULT_BASE_URL
from .config import Config, DEFAULT_TIMEOUT, KEY_LENGTH_RANGE
from .context import Context
from .resources import MAX_EMAILS_PER_BATCH
from .types import (
    BatchResult,
    BlacklistData,
    BroadcastData,
    BroadcastType,
    ChartType,
    CommandData,
    CommandType,
    ContactData,
    EmailData,
    EventData,
    FieldData,
    JSONObject,
    JSONValue,
    ReportDataPoint,
    ReportResponse,
    SubscriberData,
    SubscriberInput,
    TagData,
    ValidationData,
    ValidationResponse,
)
from .exceptions import (
    BentoError,
    ErrorKind,
    ConfigurationError,
    InvalidKeyLengthError,
    ValidationError,
    InvalidEmailError,
    InvalidIPAddressError,
    InvalidNameError,
    InvalidContentError,
    InvalidSegmentIDError,
    InvalidBatchSizeError,
    InvalidTagsError,
    InvalidRequestError,
    APIResponseError,
    BadRequestError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    ServiceUnavailableError,
    PartialBatchFailureError,
    SubscriberNotFoundError,
    Cancelled,
    DeadlineExceeded,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "BentoClient",
    "Config",
    "Context",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "KEY_LENGTH_RANGE",
    "MAX_EMAILS_PER_BATCH",
    "BatchResult",
    "BlacklistData",
    "BroadcastData",
    "BroadcastType",
    "ChartType",
    "CommandData",
    "CommandType",
    "ContactData",
    "EmailData",
    "EventData",
    "FieldData",
    "JSONObject",
    "JSONValue",
    "ReportDataPoint",
    "ReportResponse",
    "SubscriberData",
    "SubscriberInput",
    "TagData",
    "ValidationData",
    "ValidationResponse",
    "BentoError",
    "ErrorKind",
    "ConfigurationError",
    "InvalidKeyLengthError",
    "ValidationError",
    "InvalidEmailError",
    "InvalidIPAddressError",
    "InvalidNameError",
    "InvalidContentError",
    "InvalidSegmentIDError",
    "InvalidBatchSizeError",
    "InvalidTagsError",
    "InvalidRequestError",
    "APIResponseError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "ServiceUnavailableError",
    "PartialBatchFailureError",
    "SubscriberNotFoundError",
    "Cancelled",
    "DeadlineExceeded",
]
