"""
Configuration models for Craftgate client.

Immutable configuration structures following state-first design.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..auth import ApiCredentials
from ..constants import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_MAX_DELAY,
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_DELAY,
    DEFAULT_TIMEOUT,
    PRODUCTION_BASE_URL,
    SANDBOX_BASE_URL,
)


@dataclass(frozen=True)
class ConnectionConfig:
    """Configuration for Craftgate client connection."""
    credentials: ApiCredentials = field(repr=False)
    sandbox: bool = False
    base_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not isinstance(self.credentials, ApiCredentials):
            raise TypeError("credentials must be an ApiCredentials instance")
        if not self.credentials.access_key:
            raise ValueError("API key cannot be empty")
        if not self.credentials.secret_key:
            raise ValueError("Secret key cannot be empty")
        if self.timeout <= 0:
            raise ValueError(f"Timeout must be positive, got {self.timeout}")
        if self.base_url is not None and not self.base_url.startswith(("http://", "https://")):
            raise ValueError("Base URL must be a valid HTTP/HTTPS URL")

    @property
    def resolved_base_url(self) -> str:
        """Base URL selected by the sandbox flag unless explicitly overridden."""
        if self.base_url:
            return self.base_url.rstrip("/")
        return SANDBOX_BASE_URL if self.sandbox else PRODUCTION_BASE_URL


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for request retry behavior."""
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR
    max_delay: float = DEFAULT_MAX_DELAY
    retry_on_status: Tuple[int, ...] = (500, 502, 503, 504)

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if self.retry_delay < 0 or self.max_delay < 0:
            raise ValueError("Retry delays cannot be negative")
        if self.backoff_factor < 1:
            raise ValueError("backoff_factor must be at least 1")

    def is_transient_status(self, status: int) -> bool:
        """Server errors are transient; client errors are not."""
        return status in self.retry_on_status or 500 <= status < 600

    def delay_for(self, attempt: int) -> float:
        """Backoff delay before the retry following `attempt` (0-based)."""
        return min(self.retry_delay * (self.backoff_factor ** attempt), self.max_delay)
