"""
Onboarding (member) models for Craftgate client.

Immutable data structures for member creation, update and search.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from ..utils import (
    model_to_payload,
    optional_datetime,
    optional_enum,
    parse_datetime,
    to_decimal,
)
from .common import Status


class MemberType(Enum):
    """Legal form of a member."""
    PERSONAL = "PERSONAL"
    PRIVATE_COMPANY = "PRIVATE_COMPANY"
    LIMITED_OR_JOINT_STOCK_COMPANY = "LIMITED_OR_JOINT_STOCK_COMPANY"


class SettlementEarningsDestination(Enum):
    """Where a sub merchant's earnings are settled."""
    IBAN = "IBAN"
    WALLET = "WALLET"
    CROSS_BORDER = "CROSS_BORDER"


@dataclass(frozen=True)
class CreateMemberRequest:
    """Member creation request.

    Company fields (legal_company_title, tax_office, tax_number) are required
    by the API for sellers with limited/joint stock companies; contact fields
    for buyers and personal/private company sellers.
    """
    member_external_id: str
    address: str
    email: str
    phone_number: str
    member_type: Optional[MemberType] = None
    name: Optional[str] = None
    iban: Optional[str] = None  # TR IBAN only
    legal_company_title: Optional[str] = None
    tax_office: Optional[str] = None
    tax_number: Optional[str] = None
    contact_name: Optional[str] = None
    contact_surname: Optional[str] = None
    identity_number: Optional[str] = None
    settlement_earnings_destination: SettlementEarningsDestination = SettlementEarningsDestination.IBAN
    is_buyer: Optional[bool] = None
    is_sub_merchant: Optional[bool] = None
    sub_merchant_maximum_allowed_negative_balance: Decimal = Decimal("0")

    def to_payload(self) -> Dict[str, Any]:
        return model_to_payload(self)


@dataclass(frozen=True)
class UpdateMemberRequest:
    """Member update request."""
    name: str
    email: str
    address: str
    contact_name: str
    contact_surname: str
    is_buyer: Optional[bool] = None
    is_sub_merchant: Optional[bool] = None
    member_type: Optional[MemberType] = None
    phone_number: Optional[str] = None
    identity_number: Optional[str] = None
    legal_company_title: Optional[str] = None
    tax_office: Optional[str] = None
    tax_number: Optional[str] = None
    iban: Optional[str] = None
    settlement_earnings_destination: Optional[SettlementEarningsDestination] = None
    sub_merchant_maximum_allowed_negative_balance: Optional[Decimal] = None

    def to_payload(self) -> Dict[str, Any]:
        return model_to_payload(self)


@dataclass(frozen=True)
class SearchMembersRequest:
    """Member search filters, sent as query parameters."""
    page: int = 0
    size: int = 25
    is_buyer: Optional[bool] = None
    is_sub_merchant: Optional[bool] = None
    member_type: Optional[MemberType] = None
    member_external_id: Optional[str] = None
    member_ids: Optional[List[int]] = None
    name: Optional[str] = None

    def __post_init__(self):
        if self.page < 0:
            raise ValueError("page cannot be negative")
        if self.size <= 0:
            raise ValueError("size must be positive")

    def to_query(self) -> Dict[str, Any]:
        return model_to_payload(self)


@dataclass(frozen=True)
class Member:
    """Member as returned by the API."""
    id: int
    created_date: datetime
    status: Status
    member_external_id: str
    address: str
    email: str
    phone_number: str
    sub_merchant_maximum_allowed_negative_balance: Decimal
    updated_date: Optional[datetime] = None
    is_buyer: Optional[bool] = None
    is_sub_merchant: Optional[bool] = None
    member_type: Optional[MemberType] = None
    name: Optional[str] = None
    iban: Optional[str] = None
    legal_company_title: Optional[str] = None
    tax_office: Optional[str] = None
    tax_number: Optional[str] = None
    contact_name: Optional[str] = None
    contact_surname: Optional[str] = None
    identity_number: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Member":
        return cls(
            id=int(data["id"]),
            created_date=parse_datetime(data["createdDate"]),
            status=Status(data["status"]),
            member_external_id=data["memberExternalId"],
            address=data["address"],
            email=data["email"],
            phone_number=data["phoneNumber"],
            sub_merchant_maximum_allowed_negative_balance=to_decimal(
                data.get("subMerchantMaximumAllowedNegativeBalance", 0)
            ),
            updated_date=optional_datetime(data.get("updatedDate")),
            is_buyer=data.get("isBuyer"),
            is_sub_merchant=data.get("isSubMerchant"),
            member_type=optional_enum(MemberType, data.get("memberType")),
            name=data.get("name"),
            iban=data.get("iban"),
            legal_company_title=data.get("legalCompanyTitle"),
            tax_office=data.get("taxOffice"),
            tax_number=data.get("taxNumber"),
            contact_name=data.get("contactName"),
            contact_surname=data.get("contactSurname"),
            identity_number=data.get("identityNumber"),
        )
