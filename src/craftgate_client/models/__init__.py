"""
Data models for Craftgate client.

This package contains all data structures used throughout the Craftgate
client, following the state-first principle with immutable data structures.
"""

from .common import CardType, Currency, Status
from .config import ConnectionConfig, RetryConfig
from .errors import ErrorGroup, ErrorResponse, UnhandledErrorGroup
from .members import (
    CreateMemberRequest,
    Member,
    MemberType,
    SearchMembersRequest,
    SettlementEarningsDestination,
    UpdateMemberRequest,
)
from .payments import (
    CardAssociation,
    CheckoutPaymentInitiationRequest,
    CheckoutPaymentInitiationResponse,
    MerchantPos,
    Payment,
    PaymentGroup,
    PaymentItem,
    PaymentMethod,
    PaymentPhase,
    PaymentSource,
    PaymentStatus,
    PaymentTransaction,
    PaymentType,
)
from .transport import PreparedRequest, RawResponse

__all__ = [
    # Configuration
    "ConnectionConfig",
    "RetryConfig",
    # Shared
    "Status",
    "Currency",
    "CardType",
    # Errors
    "ErrorGroup",
    "ErrorResponse",
    "UnhandledErrorGroup",
    # Onboarding
    "CreateMemberRequest",
    "UpdateMemberRequest",
    "SearchMembersRequest",
    "Member",
    "MemberType",
    "SettlementEarningsDestination",
    # Payments
    "CheckoutPaymentInitiationRequest",
    "CheckoutPaymentInitiationResponse",
    "Payment",
    "PaymentItem",
    "PaymentTransaction",
    "MerchantPos",
    "PaymentType",
    "PaymentGroup",
    "PaymentStatus",
    "PaymentPhase",
    "PaymentMethod",
    "PaymentSource",
    "CardAssociation",
    # Transport
    "PreparedRequest",
    "RawResponse",
]
