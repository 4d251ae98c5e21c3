"""
Utility functions for Craftgate client.

Helper functions for turning request models into wire payloads and raw
response values into typed fields.
"""

import dataclasses
import json
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import quote, urlencode


def sanitize_dict(data: Dict[str, Any]) -> Dict[str, Any]:
    """Remove None values from dictionary."""
    return {key: value for key, value in data.items() if value is not None}


def to_camel_case(name: str) -> str:
    """Convert snake_case field name to camelCase."""
    head, *tail = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def decimal_to_json_number(value: Decimal) -> Union[int, float]:
    """
    Convert a Decimal to a JSON number that keeps its exact value.

    Raises:
        ValueError: If the value has no exact float form that json can emit
    """
    if not value.is_finite():
        raise ValueError(f"Decimal {value} cannot be sent as a JSON number")
    if value == value.to_integral_value():
        return int(value)
    number = float(value)
    # json writes repr(float), the shortest digits that read back as the same float
    if Decimal(repr(number)) != value:
        raise ValueError(
            f"Decimal {value} cannot be sent as a JSON number without losing precision"
        )
    return number


def to_wire_value(value: Any) -> Any:
    """Convert a model value to its JSON representation."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return decimal_to_json_number(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return model_to_payload(value)
    if isinstance(value, (list, tuple)):
        return [to_wire_value(item) for item in value]
    if isinstance(value, dict):
        return {key: to_wire_value(item) for key, item in value.items()}
    return value


def model_to_payload(model: Any) -> Dict[str, Any]:
    """Serialize a request dataclass to a camelCase dict without None fields."""
    payload = {
        to_camel_case(f.name): to_wire_value(getattr(model, f.name))
        for f in dataclasses.fields(model)
    }
    return sanitize_dict(payload)


def encode_json_body(payload: Mapping[str, Any]) -> bytes:
    """Encode a payload to the exact UTF-8 bytes that are signed and sent."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(item) for item in value)
    return str(to_wire_value(value))


def build_query_string(params: Mapping[str, Any]) -> str:
    """Build a query string, dropping None values. Order follows params."""
    pairs = [(key, _query_value(value)) for key, value in params.items() if value is not None]
    return urlencode(pairs, quote_via=quote)


def build_url(base_url: str, path: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Join base URL, path and query into the final on-wire URL."""
    url = f"{base_url.rstrip('/')}/{path.lstrip('/')}"
    query = build_query_string(params) if params else ""
    return f"{url}?{query}" if query else url


def to_decimal(value: Union[Decimal, float, int, str]) -> Decimal:
    """Convert a numeric JSON value to Decimal without float artifacts."""
    try:
        return Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal value: {value!r}") from e


def optional_decimal(value: Any) -> Optional[Decimal]:
    return None if value is None else to_decimal(value)


def parse_datetime(value: str) -> datetime:
    """Parse an API timestamp such as 2021-11-15T14:07:18."""
    return datetime.fromisoformat(value)


def optional_datetime(value: Optional[str]) -> Optional[datetime]:
    return None if value is None else parse_datetime(value)


def optional_enum(enum_cls, value: Any):
    return None if value is None else enum_cls(value)
