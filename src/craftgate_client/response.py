"""
Response envelope decoding for Craftgate API.

Every response body is an envelope carrying exactly one of `data` or `errors`:

    {"data": {...}}                                      single item
    {"data": {"items": [...], "page": 0, "size": 25,
              "totalSize": 3}}                           paginated items
    {"errors": {"errorCode": "10051",
                "errorDescription": "...",
                "errorGroup": "NOT_SUFFICIENT_FUNDS"}}   error

The body is decoded into a generic JSON value first and the single/paginated
variant is then chosen by the shape of `data`.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar, Union

from .constants import PAYMENT_ERROR_CODE_THRESHOLD
from .exceptions import (
    ApiError,
    ContractViolationError,
    DecodeError,
    HttpStatusError,
    PaymentError,
    ResponseFormat,
    UnexpectedFormatError,
    ValidationError,
)
from .models.errors import ErrorResponse, UnhandledErrorGroup
from .models.transport import RawResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

PAGINATION_KEYS = ("items", "page", "size", "totalSize")


def _identity(value: Any) -> Any:
    return value


def _parse_item(parse_item: Callable[[Any], T], value: Any) -> T:
    try:
        return parse_item(value)
    except (KeyError, TypeError, ValueError, ArithmeticError) as e:
        raise DecodeError(f"Response data does not match expected schema: {e!r}") from e


def _non_negative_int(data: Dict[str, Any], key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DecodeError(f"Invalid pagination field {key}: {value!r}")
    return value


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of a paginated result."""
    items: List[T]
    page: int
    size: int
    total_size: int

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], parse_item: Callable[[Any], T] = _identity
    ) -> "Page[T]":
        return cls(
            items=[_parse_item(parse_item, item) for item in data["items"]],
            page=_non_negative_int(data, "page"),
            size=_non_negative_int(data, "size"),
            total_size=_non_negative_int(data, "totalSize"),
        )

    def to_dict(self, serialize_item: Callable[[T], Any] = _identity) -> Dict[str, Any]:
        return {
            "items": [serialize_item(item) for item in self.items],
            "page": self.page,
            "size": self.size,
            "totalSize": self.total_size,
        }


@dataclass(frozen=True)
class SingleData(Generic[T]):
    value: Optional[T]


@dataclass(frozen=True)
class PaginatedData(Generic[T]):
    page: Page[T]


@dataclass(frozen=True)
class ErrorData:
    error: ErrorResponse


EnvelopeBody = Union[SingleData, PaginatedData, ErrorData]


def is_paginated(data: Any) -> bool:
    """True if a `data` value carries every pagination key."""
    return (
        isinstance(data, dict)
        and all(key in data for key in PAGINATION_KEYS)
        and isinstance(data["items"], list)
    )


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """Decoded response envelope."""
    body: EnvelopeBody
    status: Optional[int] = None

    @classmethod
    def from_dict(
        cls, payload: Any, parse_item: Callable[[Any], T] = _identity
    ) -> "ApiResponse[T]":
        """
        Build an envelope from a decoded JSON value.

        Raises:
            DecodeError: If the value is not a well-formed envelope
        """
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected JSON object envelope, got {type(payload).__name__}")

        status = payload.get("status")
        if status is not None and (isinstance(status, bool) or not isinstance(status, int)):
            raise DecodeError(f"Invalid envelope status: {status!r}")

        has_data = "data" in payload
        has_errors = "errors" in payload
        if has_data and has_errors:
            raise DecodeError("Envelope carries both data and errors")
        if not has_data and not has_errors:
            raise DecodeError("Envelope carries neither data nor errors")

        if has_errors:
            body: EnvelopeBody = ErrorData(ErrorResponse.from_dict(payload["errors"]))
        elif is_paginated(payload["data"]):
            body = PaginatedData(Page.from_dict(payload["data"], parse_item))
        elif payload["data"] is None:
            body = SingleData(None)
        else:
            body = SingleData(_parse_item(parse_item, payload["data"]))

        return cls(body=body, status=status)

    def to_dict(self, serialize_item: Callable[[T], Any] = _identity) -> Dict[str, Any]:
        payload: Dict[str, Any] = {}
        if self.status is not None:
            payload["status"] = self.status

        if isinstance(self.body, ErrorData):
            payload["errors"] = self.body.error.to_dict()
        elif isinstance(self.body, PaginatedData):
            payload["data"] = self.body.page.to_dict(serialize_item)
        else:
            value = self.body.value
            payload["data"] = None if value is None else serialize_item(value)
        return payload


def to_api_error(error: ErrorResponse) -> ApiError:
    """
    Map an error envelope to ValidationError or PaymentError.

    Raises:
        ContractViolationError: If a payment error (code >= 10000) has no group
    """
    if error.code < PAYMENT_ERROR_CODE_THRESHOLD:
        return ValidationError(error.code, error.description)

    if error.group is None:
        raise ContractViolationError(
            f"Payment error {error.code} is expected to carry an error group"
        )
    if isinstance(error.group, UnhandledErrorGroup):
        logger.warning(f"Unhandled error group {error.group.value!r} for error {error.code}")
    return PaymentError(error.code, error.description, error.group)


def load_json(response: RawResponse) -> Any:
    """Parse the response body as JSON."""
    try:
        return json.loads(response.body)
    except ValueError as e:
        if not response.ok:
            raise HttpStatusError(
                f"HTTP {response.status}: {response.text()[:200]}",
                status_code=response.status,
                response_body=response.body,
            ) from e
        raise DecodeError(
            f"Invalid JSON response (Status {response.status}): {e}",
            raw=response.text()[:200],
        ) from e


def parse_envelope(
    response: RawResponse, parse_item: Callable[[Any], T] = _identity
) -> ApiResponse[T]:
    """
    Decode a response into an envelope, raising for error envelopes.

    Raises:
        HttpStatusError: For a non-success status without an error envelope
        DecodeError: For malformed envelopes, with the start of the body in `raw`
    """
    payload = load_json(response)
    if not response.ok and not (isinstance(payload, dict) and "errors" in payload):
        raise HttpStatusError(
            f"HTTP {response.status}: {response.text()[:200]}",
            status_code=response.status,
            response_body=response.body,
        )

    try:
        envelope = ApiResponse.from_dict(payload, parse_item)
    except DecodeError as e:
        if e.raw is not None:
            raise
        raise DecodeError(str(e), raw=response.text()[:200]) from e

    if isinstance(envelope.body, ErrorData):
        raise to_api_error(envelope.body.error)
    return envelope


def decode_single(
    response: RawResponse, parse_item: Callable[[Any], T] = _identity
) -> Optional[T]:
    """
    Decode a single-item response.

    Returns:
        The parsed item, or None if the server sent `data: null`

    Raises:
        ValidationError / PaymentError: For error envelopes
        UnexpectedFormatError: If the server sent paginated data
        DecodeError: For malformed bodies
    """
    envelope = parse_envelope(response, parse_item)
    if isinstance(envelope.body, PaginatedData):
        raise UnexpectedFormatError(ResponseFormat.SINGLE)
    return envelope.body.value


def decode_paginated(
    response: RawResponse, parse_item: Callable[[Any], T] = _identity
) -> Page[T]:
    """
    Decode a paginated response.

    Raises:
        ValidationError / PaymentError: For error envelopes
        UnexpectedFormatError: If the server sent single-item data
        DecodeError: For malformed bodies
    """
    envelope = parse_envelope(response, parse_item)
    if isinstance(envelope.body, SingleData):
        raise UnexpectedFormatError(ResponseFormat.PAGINATED)
    return envelope.body.page


def decode_empty(response: RawResponse) -> None:
    """
    Check a response that carries no data.

    An error envelope is raised as usual; any other non-success status raises
    HttpStatusError.
    """
    if response.body.strip():
        payload = load_json(response)
        if isinstance(payload, dict) and "errors" in payload:
            raise to_api_error(ErrorResponse.from_dict(payload["errors"]))

    if not response.ok:
        raise HttpStatusError(
            f"HTTP {response.status}",
            status_code=response.status,
            response_body=response.body,
        )
