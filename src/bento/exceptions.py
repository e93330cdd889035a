"""Bento SDK exceptions."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of failure categories raised by the SDK."""

    INVALID_CONFIGURATION = "invalid_configuration"
    INVALID_KEY_LENGTH = "invalid_key_length"
    INVALID_EMAIL = "invalid_email"
    INVALID_IP_ADDRESS = "invalid_ip_address"
    INVALID_NAME = "invalid_name"
    INVALID_CONTENT = "invalid_content"
    INVALID_SEGMENT_ID = "invalid_segment_id"
    INVALID_BATCH_SIZE = "invalid_batch_size"
    INVALID_TAGS = "invalid_tags"
    INVALID_REQUEST = "invalid_request"
    API_RESPONSE = "api_response"
    PARTIAL_BATCH_FAILURE = "partial_batch_failure"
    NOT_FOUND = "not_found"
    CANCELLED = "cancelled"
    DEADLINE_EXCEEDED = "deadline_exceeded"


class BentoError(Exception):
    """Base exception for Bento SDK."""

    kind: ErrorKind | None = None

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        value: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.value = value
        super().__init__(self.message)


class ConfigurationError(BentoError):
    """Raised when client configuration is missing or malformed."""

    kind = ErrorKind.INVALID_CONFIGURATION

    def __init__(self, message: str = "invalid configuration: missing required fields", value: Any = None):
        super().__init__(message, value=value)


class InvalidKeyLengthError(ConfigurationError):
    """Raised when a credential falls outside the accepted length band."""

    kind = ErrorKind.INVALID_KEY_LENGTH


class ValidationError(BentoError):
    """Raised when request input fails local validation.

    Validation errors are always raised before anything is sent.
    """

    default_message = "invalid request parameters"

    def __init__(self, message: str | None = None, value: Any = None):
        if message is None:
            message = self.default_message
            if value is not None:
                message = f"{message}: {value}"
        super().__init__(message, value=value)


class InvalidEmailError(ValidationError):
    kind = ErrorKind.INVALID_EMAIL
    default_message = "invalid email address"


class InvalidIPAddressError(ValidationError):
    kind = ErrorKind.INVALID_IP_ADDRESS
    default_message = "invalid IP address"


class InvalidNameError(ValidationError):
    kind = ErrorKind.INVALID_NAME
    default_message = "invalid name format"


class InvalidContentError(ValidationError):
    kind = ErrorKind.INVALID_CONTENT
    default_message = "invalid content"


class InvalidSegmentIDError(ValidationError):
    kind = ErrorKind.INVALID_SEGMENT_ID
    default_message = "invalid segment ID"


class InvalidBatchSizeError(ValidationError):
    kind = ErrorKind.INVALID_BATCH_SIZE
    default_message = "invalid batch size"


class InvalidTagsError(ValidationError):
    kind = ErrorKind.INVALID_TAGS
    default_message = "invalid tags format"


class InvalidRequestError(ValidationError):
    kind = ErrorKind.INVALID_REQUEST


class APIResponseError(BentoError):
    """Raised for an unexpected status code or an undecodable body."""

    kind = ErrorKind.API_RESPONSE

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is None:
            message = f"unexpected API response: {status_code}"
        super().__init__(message, status_code=status_code)


class BadRequestError(APIResponseError):
    """Raised when the API rejects the request (400)."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, status_code=400)


class UnauthorizedError(APIResponseError):
    """Raised when authentication fails (401)."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, status_code=401)


class ForbiddenError(APIResponseError):
    """Raised when access is denied (403)."""

    def __init__(self, message: str = "Access denied"):
        super().__init__(message, status_code=403)


class NotFoundError(APIResponseError):
    """Raised when a resource is not found (404)."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class RateLimitError(APIResponseError):
    """Raised when rate limit is exceeded (429)."""

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int | None = None):
        super().__init__(message, status_code=429)
        self.retry_after = retry_after


class ServerError(APIResponseError):
    """Raised when the API fails internally (500)."""

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, status_code=500)


class ServiceUnavailableError(APIResponseError):
    """Raised when the API is temporarily unavailable (503)."""

    def __init__(self, message: str = "Service unavailable"):
        super().__init__(message, status_code=503)


class PartialBatchFailureError(BentoError):
    """Raised when a batch call succeeds but reports failed items.

    ``results`` and ``failed`` keep the counts from the response so callers
    can still see how much of the batch went through.
    """

    kind = ErrorKind.PARTIAL_BATCH_FAILURE

    def __init__(self, operation: str, results: int, failed: int, status_code: int | None = None):
        super().__init__(
            f"{operation} partially failed: {results} succeeded, {failed} failed",
            status_code=status_code,
        )
        self.operation = operation
        self.results = results
        self.failed = failed


class SubscriberNotFoundError(BentoError):
    """Raised when a subscriber lookup returns an empty record."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, email: str):
        super().__init__(f"subscriber not found: {email}", value=email)
        self.email = email


class Cancelled(BentoError):
    """Raised when the caller's context was cancelled."""

    kind = ErrorKind.CANCELLED

    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceeded(BentoError):
    """Raised when the caller's context deadline has passed."""

    kind = ErrorKind.DEADLINE_EXCEEDED

    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)
