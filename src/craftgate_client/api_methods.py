"""
API method implementations for Craftgate client.

Each method builds the final URL and body bytes, sends them through the
pipeline and decodes the response envelope into a model.
"""

import logging
from typing import Any, Mapping, Optional, TypeVar
from urllib.parse import quote

from .exceptions import DecodeError
from .http_client import SendFn
from .models.members import CreateMemberRequest, Member, SearchMembersRequest, UpdateMemberRequest
from .models.payments import (
    CheckoutPaymentInitiationRequest,
    CheckoutPaymentInitiationResponse,
    Payment,
)
from .models.transport import PreparedRequest, RawResponse
from .response import Page, decode_empty, decode_paginated, decode_single
from .utils import build_url, encode_json_body

logger = logging.getLogger(__name__)

T = TypeVar("T")

MEMBERS_PATH = "/onboarding/v1/members"
CHECKOUT_PAYMENTS_PATH = "/payment/v1/checkout-payments"
CARD_PAYMENTS_PATH = "/payment/v1/card-payments"


def _path_segment(value: Any) -> str:
    return quote(str(value), safe="")


def _required(value: Optional[T], what: str) -> T:
    if value is None:
        raise DecodeError(f"Response carries no {what} data")
    return value


class APIMethods:
    """Container for all API method implementations."""

    def __init__(self, send: SendFn, base_url: str):
        """Initialize API methods with the request pipeline."""
        self._send = send
        self._base_url = base_url

    def prepare_request(
        self,
        method: str,
        path: str,
        payload: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> PreparedRequest:
        """Resolve the final URL and body bytes of a request."""
        url = build_url(self._base_url, path, params)
        if payload is None:
            return PreparedRequest(method, url)
        return PreparedRequest(
            method,
            url,
            headers={"Content-Type": "application/json"},
            body=encode_json_body(payload),
        )

    async def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Mapping[str, Any]] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> RawResponse:
        return await self._send(self.prepare_request(method, path, payload, params))

    # Onboarding
    async def create_member(self, request: CreateMemberRequest) -> Member:
        response = await self._request("POST", MEMBERS_PATH, request.to_payload())
        return _required(decode_single(response, Member.from_dict), "member")

    async def update_member(self, member_id: int, request: UpdateMemberRequest) -> Member:
        response = await self._request(
            "PUT", f"{MEMBERS_PATH}/{_path_segment(member_id)}", request.to_payload()
        )
        return _required(decode_single(response, Member.from_dict), "member")

    async def retrieve_member(self, member_id: int) -> Optional[Member]:
        response = await self._request("GET", f"{MEMBERS_PATH}/{_path_segment(member_id)}")
        return decode_single(response, Member.from_dict)

    async def search_members(self, request: SearchMembersRequest) -> Page[Member]:
        response = await self._request("GET", MEMBERS_PATH, params=request.to_query())
        return decode_paginated(response, Member.from_dict)

    # Payments
    async def initiate_checkout_payment(
        self, request: CheckoutPaymentInitiationRequest
    ) -> CheckoutPaymentInitiationResponse:
        response = await self._request(
            "POST", f"{CHECKOUT_PAYMENTS_PATH}/init", request.to_payload()
        )
        return _required(
            decode_single(response, CheckoutPaymentInitiationResponse.from_dict), "checkout"
        )

    async def checkout_payment_inquiry(self, token: str) -> Payment:
        response = await self._request("GET", f"{CHECKOUT_PAYMENTS_PATH}/{_path_segment(token)}")
        return _required(decode_single(response, Payment.from_dict), "payment")

    async def expire_common_page_token(self, token: str) -> None:
        response = await self._request(
            "DELETE", f"{CHECKOUT_PAYMENTS_PATH}/{_path_segment(token)}"
        )
        decode_empty(response)
        logger.info("Checkout payment token expired")

    async def retrieve_payment(self, payment_id: int) -> Payment:
        response = await self._request("GET", f"{CARD_PAYMENTS_PATH}/{_path_segment(payment_id)}")
        return _required(decode_single(response, Payment.from_dict), "payment")
