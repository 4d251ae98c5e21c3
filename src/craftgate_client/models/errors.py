"""
Error envelope models for Craftgate client.

The gateway reports failures as {"errorCode", "errorDescription", "errorGroup"}.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from ..exceptions import DecodeError

MAX_ERROR_CODE = 2 ** 32 - 1


class ErrorGroup(Enum):
    """Classification of a payment decline reason."""
    AMEX_CAN_USE_ONLY_MR = "AMEX_CAN_USE_ONLY_MR"
    APM_ERROR = "APM_ERROR"
    APPROVED_COMPLETED = "APPROVED_COMPLETED"
    BIN_NOT_FOUND = "BIN_NOT_FOUND"
    BLOCKED_CARD = "BLOCKED_CARD"
    CARD_NOT_PERMITTED = "CARD_NOT_PERMITTED"
    COMMUNICATION_OR_SYSTEM_ERROR = "COMMUNICATION_OR_SYSTEM_ERROR"
    CVC2_MAX_ATTEMPT = "CVC2_MAX_ATTEMPT"
    CVC_REQUIRED = "CVC_REQUIRED"
    DEBIT_CARDS_INSTALLMENT_NOT_ALLOWED = "DEBIT_CARDS_INSTALLMENT_NOT_ALLOWED"
    DEBIT_CARDS_REQUIRES_3DS = "DEBIT_CARDS_REQUIRES_3DS"
    DECLINED = "DECLINED"
    DO_NOT_HONOUR = "DO_NOT_HONOUR"
    EXCEEDS_ALLOWABLE_PIN_TRIES = "EXCEEDS_ALLOWABLE_PIN_TRIES"
    EXCEEDS_WITHDRAWAL_AMOUNT_LIMIT = "EXCEEDS_WITHDRAWAL_AMOUNT_LIMIT"
    EXPIRED_CARD = "EXPIRED_CARD"
    FRAUD_CHECK_BLOCK = "FRAUD_CHECK_BLOCK"
    FRAUD_SUSPECT = "FRAUD_SUSPECT"
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_CARD_NUMBER = "INVALID_CARD_NUMBER"
    INVALID_CARD_TYPE = "INVALID_CARD_TYPE"
    INVALID_CAVV = "INVALID_CAVV"
    INVALID_CHARS_IN_EMAIL = "INVALID_CHARS_IN_EMAIL"
    INVALID_CVC2_LENGTH = "INVALID_CVC2_LENGTH"
    INVALID_CVC2 = "INVALID_CVC2"
    INVALID_ECI = "INVALID_ECI"
    INVALID_EXPIRE_YEAR_MONTH = "INVALID_EXPIRE_YEAR_MONTH"
    INVALID_IP = "INVALID_IP"
    INVALID_MERCHANT_OR_SP = "INVALID_MERCHANT_OR_SP"
    INVALID_PIN = "INVALID_PIN"
    INVALID_TRANSACTION = "INVALID_TRANSACTION"
    ISSUER_OR_SWITCH_INOPERATIVE = "ISSUER_OR_SWITCH_INOPERATIVE"
    LOST_CARD = "LOST_CARD"
    MAY_HAVE_ALREADY_REFUNDED = "MAY_HAVE_ALREADY_REFUNDED"
    NOT_PERMITTED_TO_CARDHOLDER = "NOT_PERMITTED_TO_CARDHOLDER"
    NOT_PERMITTED_TO_FOREIGN_CARD = "NOT_PERMITTED_TO_FOREIGN_CARD"
    NOT_PERMITTED_TO_INSTALLMENT = "NOT_PERMITTED_TO_INSTALLMENT"
    NOT_PERMITTED_TO_TERMINAL = "NOT_PERMITTED_TO_TERMINAL"
    NOT_SUFFICIENT_AWARD = "NOT_SUFFICIENT_AWARD"
    NOT_SUFFICIENT_FUNDS = "NOT_SUFFICIENT_FUNDS"
    NO_RESPONSE = "NO_RESPONSE"
    NO_SUCH_ISSUER = "NO_SUCH_ISSUER"
    ORDER_ID_ALREADY_USED = "ORDER_ID_ALREADY_USED"
    PICKUP_CARD = "PICKUP_CARD"
    POS_BALANCE_NOT_SUFFICIENT = "POS_BALANCE_NOT_SUFFICIENT"
    REFER_TO_CARD_ISSUER = "REFER_TO_CARD_ISSUER"
    REQUEST_BLOCKED_BY_BANK = "REQUEST_BLOCKED_BY_BANK"
    REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
    REQUIRES_DAY_END = "REQUIRES_DAY_END"
    RESTRICTED_BY_LAW = "RESTRICTED_BY_LAW"
    RESTRICTED_CARD = "RESTRICTED_CARD"
    SALES_AMOUNT_LESS_THAN_AWARD = "SALES_AMOUNT_LESS_THAN_AWARD"
    STOLEN_CARD = "STOLEN_CARD"
    THREEDS_INIT_ERROR = "THREEDS_INIT_ERROR"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class UnhandledErrorGroup:
    """Error group this client version does not know about yet."""
    value: str


AnyErrorGroup = Union[ErrorGroup, UnhandledErrorGroup]


def parse_error_code(raw: Any) -> int:
    """
    Normalize an error code sent as a JSON integer or a string of digits.

    Raises:
        DecodeError: If the value is neither
    """
    if isinstance(raw, bool):
        raise DecodeError(f"Invalid error code: {raw!r}")
    if isinstance(raw, int):
        code = raw
    elif isinstance(raw, str) and raw.isascii() and raw.isdigit():
        code = int(raw)
    else:
        raise DecodeError(f"Invalid error code, expected integer or string: {raw!r}")

    if code < 0 or code > MAX_ERROR_CODE:
        raise DecodeError(f"Error code out of range: {code}")
    return code


def parse_error_group(raw: str) -> AnyErrorGroup:
    """Map a raw group string to ErrorGroup, keeping unknown values intact."""
    try:
        return ErrorGroup(raw)
    except ValueError:
        return UnhandledErrorGroup(raw)


@dataclass(frozen=True)
class ErrorResponse:
    """Contents of the `errors` envelope."""
    code: int
    description: str
    group: Optional[AnyErrorGroup] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorResponse":
        if not isinstance(data, dict):
            raise DecodeError(f"Expected errors object, got {type(data).__name__}")
        if "errorCode" not in data:
            raise DecodeError("Error envelope is missing errorCode")

        description = data.get("errorDescription")
        if not isinstance(description, str):
            raise DecodeError("Error envelope is missing errorDescription")

        group = data.get("errorGroup")
        if group is not None and not isinstance(group, str):
            raise DecodeError(f"Invalid error group: {group!r}")

        return cls(
            code=parse_error_code(data["errorCode"]),
            description=description,
            group=parse_error_group(group) if group is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "errorCode": self.code,
            "errorDescription": self.description,
        }
        if self.group is not None:
            data["errorGroup"] = self.group.value
        return data
