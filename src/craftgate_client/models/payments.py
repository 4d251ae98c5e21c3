"""
Payment models for Craftgate client.

Immutable data structures for the checkout (common payment page) flow and
payment retrieval.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional

from ..utils import (
    model_to_payload,
    optional_decimal,
    optional_enum,
    parse_datetime,
    to_decimal,
)
from .common import CardType, Currency


class PaymentType(Enum):
    """Way a payment is collected."""
    CARD_PAYMENT = "CARD_PAYMENT"
    DEPOSIT_PAYMENT = "DEPOSIT_PAYMENT"
    WALLET_PAYMENT = "WALLET_PAYMENT"
    CARD_AND_WALLET_PAYMENT = "CARD_AND_WALLET_PAYMENT"
    BANK_TRANSFER = "BANK_TRANSFER"


class PaymentGroup(Enum):
    """Product or service the payment is for."""
    PRODUCT = "PRODUCT"
    LISTING_OR_SUBSCRIPTION = "LISTING_OR_SUBSCRIPTION"


class PaymentStatus(Enum):
    FAILURE = "FAILURE"
    SUCCESS = "SUCCESS"
    INIT_THREEDS = "INIT_THREEDS"
    CALLBACK_THREEDS = "CALLBACK_THREEDS"


class PaymentPhase(Enum):
    """Transaction phase of the payment at the bank."""
    AUTH = "AUTH"
    PRE_AUTH = "PRE_AUTH"
    POST_AUTH = "POST_AUTH"


class PaymentMethod(Enum):
    """Methods offered on the common payment page."""
    CARD = "CARD"
    MASTERPASS = "MASTERPASS"
    PAPARA = "PAPARA"
    PAYONEER = "PAYONEER"
    SODEXO = "SODEXO"
    EDENRED = "EDENRED"
    EDENRED_GIFT = "EDENRED_GIFT"
    PAYPAL = "PAYPAL"
    AFTERPAY = "AFTERPAY"
    KLARNA = "KLARNA"
    STRIPE = "STRIPE"


class PaymentSource(Enum):
    """Integration a payment came from."""
    API = "API"
    MASTERPASS = "MASTERPASS"
    CHECKOUT_FORM = "CHECKOUT_FORM"


class CardAssociation(Enum):
    VISA = "VISA"
    MASTER_CARD = "MASTER_CARD"
    AMEX = "AMEX"
    TROY = "TROY"
    JCB = "JCB"
    UNION_PAY = "UNION_PAY"
    MAESTRO = "MAESTRO"
    DISCOVER = "DISCOVER"
    DINERS_CLUB = "DINERS_CLUB"


@dataclass(frozen=True)
class PaymentItem:
    """Basket item of a payment request."""
    price: Decimal
    name: Optional[str] = None
    external_id: Optional[str] = None
    sub_merchant_member_id: Optional[int] = None
    sub_merchant_member_price: Optional[Decimal] = None


@dataclass(frozen=True)
class CheckoutPaymentInitiationRequest:
    """Request to open a common payment page."""
    price: Decimal
    paid_price: Decimal
    callback_url: str
    items: List[PaymentItem]
    currency: Currency = Currency.TRY
    payment_group: PaymentGroup = PaymentGroup.PRODUCT
    payment_phase: PaymentPhase = PaymentPhase.AUTH
    conversation_id: Optional[str] = None
    external_id: Optional[str] = None
    bank_order_id: Optional[str] = None
    buyer_member_id: Optional[int] = None
    payment_channel: Optional[str] = None
    card_user_key: Optional[str] = None
    enabled_installments: Optional[List[int]] = None
    allow_only_credit_card: Optional[bool] = None
    allow_only_stored_cards: Optional[bool] = None
    allow_store_card_after_payment: Optional[bool] = None
    allow_installment_only_commercial_cards: Optional[bool] = None
    force_auth_for_non_credit_cards: Optional[bool] = None
    force_three_d_s: Optional[bool] = None
    ttl: Optional[int] = None
    masterpass_gsm_number: Optional[str] = None
    masterpass_user_id: Optional[str] = None
    apm_user_identity: Optional[str] = None
    enabled_payment_methods: Optional[List[PaymentMethod]] = None

    def __post_init__(self):
        if not self.items:
            raise ValueError("At least one payment item is required")

    def to_payload(self) -> Dict[str, Any]:
        return model_to_payload(self)


@dataclass(frozen=True)
class CheckoutPaymentInitiationResponse:
    """Token and URL of an initiated common payment page."""
    token: str
    page_url: str
    token_expire_date: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CheckoutPaymentInitiationResponse":
        return cls(
            token=data["token"],
            page_url=data["pageUrl"],
            token_expire_date=data["tokenExpireDate"],
        )


@dataclass(frozen=True)
class MerchantPos:
    """POS the payment was received from."""
    id: int
    name: str
    alias: str
    bank_id: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MerchantPos":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            alias=data["alias"],
            bank_id=int(data["bankId"]),
        )


@dataclass(frozen=True)
class PaymentTransaction:
    """Per-item transaction of a payment."""
    id: int
    price: Decimal
    paid_price: Decimal
    external_id: Optional[str] = None
    name: Optional[str] = None
    sub_merchant_member_id: Optional[int] = None
    merchant_payout_amount: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PaymentTransaction":
        sub_merchant_member_id = data.get("subMerchantMemberId")
        return cls(
            id=int(data["id"]),
            price=to_decimal(data["price"]),
            paid_price=to_decimal(data["paidPrice"]),
            external_id=data.get("externalId"),
            name=data.get("name"),
            sub_merchant_member_id=(
                int(sub_merchant_member_id) if sub_merchant_member_id is not None else None
            ),
            merchant_payout_amount=optional_decimal(data.get("merchantPayoutAmount")),
        )


@dataclass(frozen=True)
class Payment:
    """Payment as returned by the API."""
    id: int
    created_date: datetime
    price: Decimal
    paid_price: Decimal
    currency: Currency
    payment_status: PaymentStatus
    wallet_price: Decimal = Decimal("0")
    installment: int = 1
    conversation_id: Optional[str] = None
    external_id: Optional[str] = None
    buyer_member_id: Optional[int] = None
    payment_type: Optional[PaymentType] = None
    payment_group: Optional[PaymentGroup] = None
    payment_source: Optional[PaymentSource] = None
    payment_phase: Optional[PaymentPhase] = None
    payment_channel: Optional[str] = None
    is_three_d_s: Optional[bool] = None
    card_type: Optional[CardType] = None
    card_association: Optional[CardAssociation] = None
    card_brand: Optional[str] = None
    bin_number: Optional[str] = None
    last_four_digits: Optional[str] = None
    card_holder_name: Optional[str] = None
    card_user_key: Optional[str] = None
    card_token: Optional[str] = None
    auth_code: Optional[str] = None
    host_reference: Optional[str] = None
    order_id: Optional[str] = None
    pos: Optional[MerchantPos] = None
    payment_transactions: List[PaymentTransaction] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Payment":
        buyer_member_id = data.get("buyerMemberId")
        pos = data.get("pos")
        return cls(
            id=int(data["id"]),
            created_date=parse_datetime(data["createdDate"]),
            price=to_decimal(data["price"]),
            paid_price=to_decimal(data["paidPrice"]),
            currency=Currency(data["currency"]),
            payment_status=PaymentStatus(data["paymentStatus"]),
            wallet_price=to_decimal(data.get("walletPrice", 0)),
            installment=int(data.get("installment", 1)),
            conversation_id=data.get("conversationId"),
            external_id=data.get("externalId"),
            buyer_member_id=int(buyer_member_id) if buyer_member_id is not None else None,
            payment_type=optional_enum(PaymentType, data.get("paymentType")),
            payment_group=optional_enum(PaymentGroup, data.get("paymentGroup")),
            payment_source=optional_enum(PaymentSource, data.get("paymentSource")),
            payment_phase=optional_enum(PaymentPhase, data.get("paymentPhase")),
            payment_channel=data.get("paymentChannel"),
            is_three_d_s=data.get("isThreeDS"),
            card_type=optional_enum(CardType, data.get("cardType")),
            card_association=optional_enum(CardAssociation, data.get("cardAssociation")),
            card_brand=data.get("cardBrand"),
            bin_number=data.get("binNumber"),
            last_four_digits=data.get("lastFourDigits"),
            card_holder_name=data.get("cardHolderName"),
            card_user_key=data.get("cardUserKey"),
            card_token=data.get("cardToken"),
            auth_code=data.get("authCode"),
            host_reference=data.get("hostReference"),
            order_id=data.get("orderId"),
            pos=MerchantPos.from_dict(pos) if pos is not None else None,
            payment_transactions=[
                PaymentTransaction.from_dict(item)
                for item in data.get("paymentTransactions") or []
            ],
        )
