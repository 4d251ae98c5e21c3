"""
Craftgate Client - Main orchestration module.

This module provides the CraftgateClient class that coordinates all client
functionality:
- Data models are immutable structures in models/
- Request signing is handled by auth.py
- The HTTP pipeline (tracing, retry, signing, transport) lives in http_client.py
- Session management is handled by session_manager.py
- API methods are implemented in api_methods.py
- Envelope decoding is handled by response.py
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .api_methods import APIMethods
from .auth import ApiCredentials
from .constants import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY, DEFAULT_TIMEOUT
from .http_client import AiohttpTransport, build_pipeline
from .models import (
    CheckoutPaymentInitiationRequest,
    CheckoutPaymentInitiationResponse,
    ConnectionConfig,
    CreateMemberRequest,
    Member,
    Payment,
    RetryConfig,
    SearchMembersRequest,
    UpdateMemberRequest,
)
from .monitoring import PerformanceMonitor, Statistics
from .response import Page
from .session_manager import SessionManager

logger = logging.getLogger(__name__)

TRUTHY_VALUES = ("1", "true", "yes", "on")


class CraftgateClient:
    """
    Main Craftgate client orchestrator.

    Holds the credentials, the shared aiohttp session and the request
    pipeline. Safe to share between concurrent tasks of one event loop.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        retry_config: Optional[RetryConfig] = None,
    ):
        """Initialize Craftgate client with configuration."""
        self._config = config
        self._retry_config = retry_config or RetryConfig()
        self._session_manager = SessionManager(config)
        self._monitor = PerformanceMonitor()
        self._pipeline = build_pipeline(
            AiohttpTransport(self._session_manager),
            config.credentials,
            self._retry_config,
            self._monitor,
        )
        self._api_methods = APIMethods(self._pipeline, config.resolved_base_url)
        self._closed = False

    @classmethod
    def from_env(cls, sandbox: Optional[bool] = None) -> "CraftgateClient":
        """Create client from environment variables (and a .env file if present)."""
        load_dotenv()
        api_key = os.getenv("CRAFTGATE_API_KEY", "")
        secret_key = os.getenv("CRAFTGATE_SECRET_KEY", "")

        if sandbox is None:
            sandbox = os.getenv("CRAFTGATE_SANDBOX", "false").strip().lower() in TRUTHY_VALUES

        config = ConnectionConfig(
            credentials=ApiCredentials(access_key=api_key, secret_key=secret_key),
            sandbox=sandbox,
            base_url=os.getenv("CRAFTGATE_BASE_URL") or None,
        )
        return cls(config)

    @property
    def base_url(self) -> str:
        return self._config.resolved_base_url

    @property
    def closed(self) -> bool:
        return self._closed

    # Onboarding methods
    async def create_member(self, request: CreateMemberRequest) -> Member:
        """Create a buyer or sub merchant member."""
        self._ensure_open()
        return await self._api_methods.create_member(request)

    async def update_member(self, member_id: int, request: UpdateMemberRequest) -> Member:
        """Update an existing member."""
        self._ensure_open()
        return await self._api_methods.update_member(member_id, request)

    async def retrieve_member(self, member_id: int) -> Optional[Member]:
        """Get a member by ID, or None if the API returns no data."""
        self._ensure_open()
        return await self._api_methods.retrieve_member(member_id)

    async def search_members(
        self, request: Optional[SearchMembersRequest] = None
    ) -> Page[Member]:
        """Search members; defaults to the first page of 25."""
        self._ensure_open()
        return await self._api_methods.search_members(request or SearchMembersRequest())

    # Payment methods
    async def initiate_checkout_payment(
        self, request: CheckoutPaymentInitiationRequest
    ) -> CheckoutPaymentInitiationResponse:
        """
        Open a common payment page.

        Note: POST requests are retried on transient failures like any other
        call. Set `conversation_id` or `external_id` so a repeated initiation
        can be matched on the merchant side.
        """
        self._ensure_open()
        return await self._api_methods.initiate_checkout_payment(request)

    async def checkout_payment_inquiry(self, token: str) -> Payment:
        """Get the payment created through a common payment page token."""
        self._ensure_open()
        return await self._api_methods.checkout_payment_inquiry(token)

    async def expire_common_page_token(self, token: str) -> None:
        """Invalidate a common payment page token."""
        self._ensure_open()
        await self._api_methods.expire_common_page_token(token)

    async def retrieve_payment(self, payment_id: int) -> Payment:
        """Get a card payment by ID."""
        self._ensure_open()
        return await self._api_methods.retrieve_payment(payment_id)

    # Monitoring
    def get_statistics(self) -> Statistics:
        """Get request statistics recorded by the tracing stage."""
        return self._monitor.statistics

    async def close(self) -> None:
        """Close client and cleanup resources."""
        if not self._closed:
            await self._session_manager.close_session()
            self._closed = True
            logger.info("Craftgate client closed")

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Client is closed")

    # Context manager support
    async def __aenter__(self) -> "CraftgateClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def __repr__(self) -> str:
        return f"CraftgateClient(base_url={self.base_url!r}, closed={self._closed})"


def create_craftgate_client(
    api_key: str,
    secret_key: str,
    sandbox: bool = False,
    base_url: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    max_retries: int = DEFAULT_MAX_RETRIES,
    retry_delay: float = DEFAULT_RETRY_DELAY,
) -> CraftgateClient:
    """
    Factory function to create Craftgate client with common configuration.

    Args:
        api_key: API access key
        secret_key: API secret key
        sandbox: Use the sandbox environment
        base_url: Override the environment's base URL
        timeout: Request timeout in seconds
        max_retries: Maximum number of retry attempts
        retry_delay: Initial delay between retries in seconds

    Returns:
        Configured CraftgateClient instance
    """
    config = ConnectionConfig(
        credentials=ApiCredentials(access_key=api_key, secret_key=secret_key),
        sandbox=sandbox,
        base_url=base_url,
        timeout=timeout,
    )

    retry_config = RetryConfig(
        max_retries=max_retries,
        retry_delay=retry_delay,
    )

    return CraftgateClient(config, retry_config)
