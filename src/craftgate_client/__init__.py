"""
Craftgate Client - async Python client for the Craftgate payment gateway API.

Every request is signed with the x-api-key / x-rnd-key / x-auth-version /
x-signature header scheme and sent through a tracing, retry and signing
pipeline.
"""

from .auth import ApiCredentials, SecretString, SignatureHeaders, generate_nonce, sign_request
from .client import CraftgateClient, create_craftgate_client
from .exceptions import (
    ApiError,
    ConnectivityError,
    ContractViolationError,
    CraftgateError,
    DecodeError,
    HttpServerError,
    HttpStatusError,
    IncompatibleBodyError,
    InvalidHeaderValueError,
    PaymentError,
    ResponseFormat,
    SignatureError,
    TransportError,
    UnexpectedFormatError,
    ValidationError,
)
from .models import (
    # Configuration
    ConnectionConfig,
    RetryConfig,
    # Onboarding
    CreateMemberRequest,
    UpdateMemberRequest,
    SearchMembersRequest,
    Member,
    MemberType,
    SettlementEarningsDestination,
    # Payments
    CheckoutPaymentInitiationRequest,
    CheckoutPaymentInitiationResponse,
    Payment,
    PaymentItem,
    PaymentGroup,
    PaymentPhase,
    PaymentMethod,
    Currency,
    # Errors
    ErrorGroup,
    UnhandledErrorGroup,
)
from .response import ApiResponse, Page, decode_paginated, decode_single

__all__ = [
    # Main Client
    "CraftgateClient",
    "create_craftgate_client",
    "ConnectionConfig",
    "RetryConfig",
    # Signing
    "ApiCredentials",
    "SecretString",
    "SignatureHeaders",
    "generate_nonce",
    "sign_request",
    # Responses
    "ApiResponse",
    "Page",
    "decode_single",
    "decode_paginated",
    # Models
    "CreateMemberRequest",
    "UpdateMemberRequest",
    "SearchMembersRequest",
    "Member",
    "MemberType",
    "SettlementEarningsDestination",
    "CheckoutPaymentInitiationRequest",
    "CheckoutPaymentInitiationResponse",
    "Payment",
    "PaymentItem",
    "PaymentGroup",
    "PaymentPhase",
    "PaymentMethod",
    "Currency",
    "ErrorGroup",
    "UnhandledErrorGroup",
    # Exceptions
    "CraftgateError",
    "ApiError",
    "ValidationError",
    "PaymentError",
    "UnexpectedFormatError",
    "ResponseFormat",
    "DecodeError",
    "ContractViolationError",
    "SignatureError",
    "IncompatibleBodyError",
    "InvalidHeaderValueError",
    "TransportError",
    "ConnectivityError",
    "HttpServerError",
    "HttpStatusError",
]
