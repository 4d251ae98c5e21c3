#!/usr/bin/env python3
"""
Example: Open a common payment page and look up the resulting payment.

This example demonstrates how to:
1. Create a sandbox client from environment variables
2. Initiate a checkout payment and print the payment page URL
3. Query the payment created through a checkout token
4. Retrieve the same payment by its ID

Prerequisites:
- Set CRAFTGATE_API_KEY and CRAFTGATE_SECRET_KEY environment variables
- Install the package in development mode: pip install -e .

Usage:
    # Open a payment page
    python examples/checkout_payment.py

    # After paying on the page, inspect the payment behind the token
    python examples/checkout_payment.py <token>

Environment Variables:
    CRAFTGATE_API_KEY=your_api_key_here
    CRAFTGATE_SECRET_KEY=your_secret_key_here
"""

import asyncio
import logging
import sys
from decimal import Decimal

from dotenv import load_dotenv

load_dotenv()

from craftgate_client import (
    CheckoutPaymentInitiationRequest,
    CraftgateClient,
    CraftgateError,
    PaymentGroup,
    PaymentItem,
    PaymentPhase,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def open_payment_page(client: CraftgateClient) -> None:
    request = CheckoutPaymentInitiationRequest(
        price=Decimal("10"),
        paid_price=Decimal("10"),
        payment_group=PaymentGroup.PRODUCT,
        payment_phase=PaymentPhase.AUTH,
        external_id="test123",
        callback_url="http://127.0.0.1:3000/callback",
        items=[PaymentItem(price=Decimal("10"))],
    )

    response = await client.initiate_checkout_payment(request)
    print(f"Token:      {response.token}")
    print(f"Expires at: {response.token_expire_date}")
    print(f"Open this page to pay: {response.page_url}")


async def show_payment(client: CraftgateClient, token: str) -> None:
    payment = await client.checkout_payment_inquiry(token)
    retrieved = await client.retrieve_payment(payment.id)

    print(f"Payment {payment.id}: {payment.payment_status.value}")
    print(f"  Paid:  {payment.paid_price} {payment.currency.value}")
    if retrieved.card_association is not None:
        print(f"  Card:  {retrieved.card_association.value} ****{retrieved.last_four_digits}")
    for transaction in retrieved.payment_transactions:
        print(f"  Item {transaction.id}: {transaction.paid_price}")


async def main():
    async with CraftgateClient.from_env(sandbox=True) as client:
        try:
            if len(sys.argv) > 1:
                await show_payment(client, sys.argv[1])
            else:
                await open_payment_page(client)
        except CraftgateError as e:
            logger.error(f"Request failed: {e}")
            sys.exit(1)

        stats = client.get_statistics()
        logger.info(
            f"{stats.total_requests} requests, avg {stats.avg_duration_ms:.1f} ms"
        )


if __name__ == "__main__":
    asyncio.run(main())
