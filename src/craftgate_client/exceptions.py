"""
Exception hierarchy for Craftgate client.

Every failure in the signing, transport and decoding path surfaces as a
subclass of CraftgateError.
"""

from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from .models.errors import ErrorGroup, UnhandledErrorGroup


class CraftgateError(Exception):
    """Base exception for all Craftgate client errors."""
    pass


class ResponseFormat(Enum):
    """Shape of the data payload a caller expects."""
    SINGLE = "single"
    PAGINATED = "paginated"


# API errors returned in the response envelope
class ApiError(CraftgateError):
    """Error reported by the API in the `errors` envelope."""

    def __init__(self, code: int, description: str):
        super().__init__(f"[{code}] {description}")
        self.code = code
        self.description = description

    def __reduce__(self):
        return type(self), (self.code, self.description)


class ValidationError(ApiError):
    """Request rejected before reaching payment processing (code < 10000)."""
    pass


class PaymentError(ApiError):
    """Gateway or bank level decline (code >= 10000)."""

    def __init__(
        self,
        code: int,
        description: str,
        group: Union["ErrorGroup", "UnhandledErrorGroup"],
    ):
        super().__init__(code, description)
        self.group = group

    def __reduce__(self):
        return type(self), (self.code, self.description, self.group)

    def __str__(self) -> str:
        return f"[{self.code}] {self.description} ({self.group.value})"


# Decoding errors
class UnexpectedFormatError(CraftgateError):
    """Server returned single data where paginated was expected, or vice versa."""

    def __init__(self, expected: ResponseFormat):
        super().__init__(f"Unexpected response format, expected {expected.value} data")
        self.expected = expected

    def __reduce__(self):
        return type(self), (self.expected,)


class DecodeError(CraftgateError):
    """Malformed JSON or an envelope that does not match the expected schema."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class ContractViolationError(CraftgateError):
    """Response broke an invariant the API guarantees."""
    pass


# Signing errors
class SignatureError(CraftgateError):
    """Base exception for request signing failures. Never retried."""
    pass


class IncompatibleBodyError(SignatureError):
    """Request body cannot be materialized as contiguous bytes for signing."""

    def __init__(self, body_type: str):
        super().__init__(f"Body is incompatible for safe consumption: {body_type}")
        self.body_type = body_type

    def __reduce__(self):
        return type(self), (self.body_type,)


class InvalidHeaderValueError(SignatureError):
    """Header value contains characters an HTTP header cannot carry."""

    def __init__(self, header: str):
        super().__init__(f"Invalid header value for {header}")
        self.header = header

    def __reduce__(self):
        return type(self), (self.header,)


# Transport errors
class TransportError(CraftgateError):
    """Base exception for HTTP transport failures."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[bytes] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class ConnectivityError(TransportError):
    """Network errors or timeouts persisted through every retry."""
    pass


class HttpServerError(TransportError):
    """Server errors (5xx) persisted through every retry."""
    pass


class HttpStatusError(TransportError):
    """Non-success status without an error envelope to explain it."""
    pass
