# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing Craftgate client.
"""

import json
from typing import Any, Dict, List, Union

import pytest

from craftgate_client.auth import ApiCredentials
from craftgate_client.models import ConnectionConfig, RetryConfig
from craftgate_client.models.transport import PreparedRequest, RawResponse


GOLDEN_ACCESS_KEY = "key-1"
GOLDEN_SECRET_KEY = "FooBar123!"
GOLDEN_NONCE = "Xa15Fp11T"
GOLDEN_MEMBER_BODY = (
    '{"email": "haluk.demir@example.com","name": "Haluk Demir",'
    '"phoneNumber": "905551111111",'
    '"address": "Beylerbeyi Cad. Lale Sok. No: 38 Daire: 3 Üsküdar",'
    '"identityNumber": "11111111110","contactName": "Haluk",'
    '"contactSurname": "Demir",'
    '"memberExternalId": "0ac49f08-f2a9-4326-a4d8-f6c1b01596fb"}'
)


def json_response(payload: Any, status: int = 200) -> RawResponse:
    """Build a RawResponse carrying a JSON payload."""
    return RawResponse(status=status, body=json.dumps(payload).encode("utf-8"))


class ScriptedTransport:
    """
    Transport stage that replays scripted outcomes.

    Each outcome is either a RawResponse to return or an exception to raise.
    The last outcome repeats once the script is exhausted.
    """

    def __init__(self, outcomes: List[Union[RawResponse, BaseException]]):
        self._outcomes = list(outcomes)
        self.requests: List[PreparedRequest] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    async def __call__(self, request: PreparedRequest) -> RawResponse:
        self.requests.append(request)
        index = min(len(self.requests), len(self._outcomes)) - 1
        outcome = self._outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


# Configuration fixtures
@pytest.fixture
def credentials() -> ApiCredentials:
    return ApiCredentials(access_key=GOLDEN_ACCESS_KEY, secret_key=GOLDEN_SECRET_KEY)


@pytest.fixture
def connection_config(credentials) -> ConnectionConfig:
    return ConnectionConfig(credentials=credentials, sandbox=True)


@pytest.fixture
def retry_config() -> RetryConfig:
    """Retry config without backoff delays."""
    return RetryConfig(max_retries=3, retry_delay=0.0)


# Mock data fixtures
@pytest.fixture
def member_data() -> Dict[str, Any]:
    """Member as returned by the onboarding API."""
    return {
        "id": 89508,
        "createdDate": "2021-11-15T14:07:18",
        "updatedDate": None,
        "status": "ACTIVE",
        "isBuyer": True,
        "isSubMerchant": False,
        "memberType": "PERSONAL",
        "memberExternalId": "d8fa867b-000b-4b96-ad3c-43ea22e65e3f",
        "name": "Haluk Demir",
        "address": "Suadiye Mah. Örnek Cd. No:23, 34740 Kadıköy/İstanbul",
        "email": "haluk.demir@example.com",
        "phoneNumber": "905551111111",
        "contactName": "Haluk",
        "contactSurname": "Demir",
        "identityNumber": "11111111110",
        "subMerchantMaximumAllowedNegativeBalance": 0.0,
    }


@pytest.fixture
def payment_data() -> Dict[str, Any]:
    """Card payment as returned by the payment API."""
    return {
        "id": 1234,
        "createdDate": "2023-04-01T10:20:30",
        "price": 10.0,
        "paidPrice": 10.0,
        "walletPrice": 0.0,
        "currency": "TRY",
        "buyerMemberId": None,
        "installment": 1,
        "conversationId": "456d1297-908e-4bd6-a13b-4be31a6e47d5",
        "externalId": "test123",
        "paymentType": "CARD_PAYMENT",
        "paymentGroup": "PRODUCT",
        "paymentSource": "CHECKOUT_FORM",
        "paymentStatus": "SUCCESS",
        "paymentPhase": "AUTH",
        "isThreeDS": False,
        "cardType": "CREDIT_CARD",
        "cardAssociation": "MASTER_CARD",
        "binNumber": "54066600",
        "lastFourDigits": "0008",
        "cardHolderName": "Haluk Demir",
        "hostReference": "mock00001iyzihostrfn",
        "orderId": "order-1",
        "pos": {"id": 1, "name": "Garanti POS", "alias": "garanti", "bankId": 62},
        "paymentTransactions": [
            {
                "id": 5678,
                "externalId": "item-1",
                "name": "Item 1",
                "price": 10.0,
                "paidPrice": 10.0,
                "merchantPayoutAmount": 9.5,
            }
        ],
    }
