# -*- coding: utf-8 -*-
"""
Tests for request/response models, configuration and wire helpers.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from craftgate_client.auth import ApiCredentials
from craftgate_client.constants import PRODUCTION_BASE_URL, SANDBOX_BASE_URL
from craftgate_client.models import (
    CardAssociation,
    CheckoutPaymentInitiationRequest,
    CheckoutPaymentInitiationResponse,
    ConnectionConfig,
    CreateMemberRequest,
    Currency,
    Member,
    MemberType,
    Payment,
    PaymentGroup,
    PaymentItem,
    PaymentMethod,
    PaymentStatus,
    RetryConfig,
    SearchMembersRequest,
    Status,
    UpdateMemberRequest,
)
from craftgate_client.utils import (
    build_url,
    decimal_to_json_number,
    encode_json_body,
    to_camel_case,
)


class TestConnectionConfig:

    def test_sandbox_selects_sandbox_url(self, credentials):
        assert ConnectionConfig(credentials=credentials, sandbox=True).resolved_base_url == (
            SANDBOX_BASE_URL
        )
        assert ConnectionConfig(credentials=credentials).resolved_base_url == PRODUCTION_BASE_URL

    def test_base_url_override(self, credentials):
        config = ConnectionConfig(
            credentials=credentials, sandbox=True, base_url="http://localhost:8000/"
        )
        assert config.resolved_base_url == "http://localhost:8000"

    def test_repr_hides_credentials(self, connection_config):
        assert "FooBar123!" not in repr(connection_config)
        assert "key-1" not in repr(connection_config)

    @pytest.mark.parametrize("access_key,secret_key,message", [
        ("", "secret", "API key cannot be empty"),
        ("key", "", "Secret key cannot be empty"),
    ])
    def test_empty_keys(self, access_key, secret_key, message):
        with pytest.raises(ValueError, match=message):
            ConnectionConfig(credentials=ApiCredentials(access_key=access_key, secret_key=secret_key))

    def test_invalid_timeout(self, credentials):
        with pytest.raises(ValueError, match="Timeout must be positive"):
            ConnectionConfig(credentials=credentials, timeout=0)

    def test_invalid_base_url(self, credentials):
        with pytest.raises(ValueError, match="HTTP/HTTPS"):
            ConnectionConfig(credentials=credentials, base_url="ftp://craftgate.io")


class TestRetryConfig:

    def test_defaults(self):
        config = RetryConfig()
        assert config.max_retries == 3
        assert config.delay_for(0) == 0.5
        assert config.delay_for(1) == 1.0

    @pytest.mark.parametrize("status,transient", [
        (500, True), (502, True), (504, True), (599, True),
        (400, False), (404, False), (429, False), (200, False),
    ])
    def test_transient_status(self, status, transient):
        assert RetryConfig().is_transient_status(status) is transient

    @pytest.mark.parametrize("kwargs", [
        {"max_retries": -1},
        {"retry_delay": -0.1},
        {"backoff_factor": 0.5},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            RetryConfig(**kwargs)


class TestMemberModels:

    def test_create_member_payload(self):
        request = CreateMemberRequest(
            member_external_id="0ac49f08-f2a9-4326-a4d8-f6c1b01596fb",
            address="Beylerbeyi Cad. Lale Sok. No: 38 Daire: 3 Üsküdar",
            email="haluk.demir@example.com",
            phone_number="905551111111",
            name="Haluk Demir",
            identity_number="11111111110",
            contact_name="Haluk",
            contact_surname="Demir",
            is_buyer=True,
        )

        assert request.to_payload() == {
            "memberExternalId": "0ac49f08-f2a9-4326-a4d8-f6c1b01596fb",
            "address": "Beylerbeyi Cad. Lale Sok. No: 38 Daire: 3 Üsküdar",
            "email": "haluk.demir@example.com",
            "phoneNumber": "905551111111",
            "name": "Haluk Demir",
            "identityNumber": "11111111110",
            "contactName": "Haluk",
            "contactSurname": "Demir",
            "settlementEarningsDestination": "IBAN",
            "isBuyer": True,
            "subMerchantMaximumAllowedNegativeBalance": 0,
        }

    def test_update_member_payload_omits_unset_fields(self):
        request = UpdateMemberRequest(
            name="Haluk Demir",
            email="haluk.demir@example.com",
            address="Üsküdar",
            contact_name="Haluk",
            contact_surname="Demir",
            member_type=MemberType.PRIVATE_COMPANY,
            sub_merchant_maximum_allowed_negative_balance=Decimal("12.50"),
        )
        payload = request.to_payload()

        assert payload["memberType"] == "PRIVATE_COMPANY"
        assert payload["subMerchantMaximumAllowedNegativeBalance"] == 12.5
        assert "iban" not in payload
        assert "isBuyer" not in payload

    def test_search_query(self):
        query = SearchMembersRequest(is_buyer=True, member_ids=[1, 2], name="Haluk").to_query()
        assert query == {
            "page": 0,
            "size": 25,
            "isBuyer": True,
            "memberIds": [1, 2],
            "name": "Haluk",
        }

    @pytest.mark.parametrize("kwargs", [{"page": -1}, {"size": 0}])
    def test_search_validation(self, kwargs):
        with pytest.raises(ValueError):
            SearchMembersRequest(**kwargs)

    def test_member_from_dict(self, member_data):
        member = Member.from_dict(member_data)

        assert member.id == 89508
        assert member.created_date == datetime(2021, 11, 15, 14, 7, 18)
        assert member.updated_date is None
        assert member.status is Status.ACTIVE
        assert member.member_type is MemberType.PERSONAL
        assert member.is_buyer is True
        assert member.address == "Suadiye Mah. Örnek Cd. No:23, 34740 Kadıköy/İstanbul"
        assert member.sub_merchant_maximum_allowed_negative_balance == Decimal("0.0")

    def test_models_are_immutable(self, member_data):
        member = Member.from_dict(member_data)
        with pytest.raises(AttributeError):
            member.email = "other@example.com"


class TestPaymentModels:

    def _request(self, **overrides):
        fields = dict(
            price=Decimal("100"),
            paid_price=Decimal("100"),
            callback_url="https://www.your-website.com/craftgate-checkout-callback",
            items=[
                PaymentItem(external_id="38983903", name="Item 1", price=Decimal("30")),
                PaymentItem(external_id="92983294", name="Item 2", price=Decimal("50")),
                PaymentItem(external_id="78420204", name="Item 3", price=Decimal("20")),
            ],
            conversation_id="456d1297-908e-4bd6-a13b-4be31a6e47d5",
        )
        fields.update(overrides)
        return CheckoutPaymentInitiationRequest(**fields)

    def test_checkout_payload(self):
        payload = self._request(
            enabled_payment_methods=[PaymentMethod.CARD],
            force_three_d_s=True,
        ).to_payload()

        assert payload["price"] == 100
        assert payload["paidPrice"] == 100
        assert payload["currency"] == "TRY"
        assert payload["paymentGroup"] == "PRODUCT"
        assert payload["paymentPhase"] == "AUTH"
        assert payload["callbackUrl"].endswith("craftgate-checkout-callback")
        assert payload["forceThreeDS"] is True
        assert payload["enabledPaymentMethods"] == ["CARD"]
        assert payload["items"][0] == {"price": 30, "name": "Item 1", "externalId": "38983903"}
        assert "ttl" not in payload

    def test_checkout_requires_items(self):
        with pytest.raises(ValueError, match="payment item"):
            self._request(items=[])

    def test_fractional_price(self):
        payload = self._request(price=Decimal("10.25"), paid_price=Decimal("10.25")).to_payload()
        assert payload["price"] == 10.25

    def test_fractional_price_keeps_its_digits(self):
        request = self._request(price=Decimal("0.1"), paid_price=Decimal("12345.67"))
        body = encode_json_body(request.to_payload())

        assert b'"price":0.1,' in body
        assert b'"paidPrice":12345.67,' in body

    @pytest.mark.parametrize("price", [
        Decimal("12345678901234567.89"),
        Decimal("0.10000000000000000001"),
    ])
    def test_price_without_exact_json_number(self, price):
        with pytest.raises(ValueError, match="losing precision"):
            self._request(price=price, paid_price=price).to_payload()

    def test_non_finite_price(self):
        with pytest.raises(ValueError):
            self._request(price=Decimal("NaN"), paid_price=Decimal("1")).to_payload()

    def test_checkout_response(self):
        response = CheckoutPaymentInitiationResponse.from_dict({
            "token": "d1811bb0-25a2-40c7-ba71-c8b605259611",
            "pageUrl": "https://sandbox-ui.craftgate.io/checkout/d1811bb0",
            "tokenExpireDate": "2022-07-06T19:44:57",
        })
        assert response.token == "d1811bb0-25a2-40c7-ba71-c8b605259611"
        assert response.page_url.startswith("https://")

    def test_payment_from_dict(self, payment_data):
        payment = Payment.from_dict(payment_data)

        assert payment.id == 1234
        assert payment.price == Decimal("10.0")
        assert payment.currency is Currency.TRY
        assert payment.payment_status is PaymentStatus.SUCCESS
        assert payment.payment_group is PaymentGroup.PRODUCT
        assert payment.card_association is CardAssociation.MASTER_CARD
        assert payment.pos.bank_id == 62
        assert payment.payment_transactions[0].merchant_payout_amount == Decimal("9.5")
        assert payment.buyer_member_id is None

    def test_payment_minimal(self):
        payment = Payment.from_dict({
            "id": 1,
            "createdDate": "2023-04-01T10:20:30",
            "price": 1,
            "paidPrice": 1,
            "currency": "USD",
            "paymentStatus": "FAILURE",
        })
        assert payment.pos is None
        assert payment.payment_transactions == []


class TestWireHelpers:

    @pytest.mark.parametrize("name,expected", [
        ("phone_number", "phoneNumber"),
        ("force_three_d_s", "forceThreeDS"),
        ("price", "price"),
    ])
    def test_camel_case(self, name, expected):
        assert to_camel_case(name) == expected

    def test_json_body_keeps_utf8(self):
        body = encode_json_body({"address": "Üsküdar", "price": 10})
        assert body == '{"address":"Üsküdar","price":10}'.encode("utf-8")

    def test_build_url(self):
        url = build_url(
            "https://api.craftgate.io/",
            "/onboarding/v1/members",
            {"page": 0, "isBuyer": True, "name": "Haluk Demir", "memberType": None},
        )
        assert url == (
            "https://api.craftgate.io/onboarding/v1/members?page=0&isBuyer=true&name=Haluk%20Demir"
        )

    def test_build_url_without_query(self):
        assert build_url("https://api.craftgate.io", "payment/v1/card-payments/1", {}) == (
            "https://api.craftgate.io/payment/v1/card-payments/1"
        )

    @pytest.mark.parametrize("value,expected", [
        (Decimal("100"), 100),
        (Decimal("100.00"), 100),
        (Decimal("0.1"), 0.1),
        (Decimal("9.99"), 9.99),
    ])
    def test_decimal_to_json_number(self, value, expected):
        number = decimal_to_json_number(value)
        assert number == expected
        assert type(number) is type(expected)

    @pytest.mark.parametrize("value", [Decimal("Infinity"), Decimal("1.00000000000000000000001")])
    def test_decimal_without_json_number(self, value):
        with pytest.raises(ValueError):
            decimal_to_json_number(value)
