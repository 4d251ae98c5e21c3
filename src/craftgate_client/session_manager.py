"""
Session management for Craftgate client.

One aiohttp session (and with it one connection pool) is shared by every
request of a client. It is opened lazily on the first request, so a client
can be built outside a running event loop.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from .models.config import ConnectionConfig

logger = logging.getLogger(__name__)

USER_AGENT = "craftgate-client/0.1"
DEFAULT_HEADERS = {"User-Agent": USER_AGENT, "Accept": "application/json"}
POOL_SIZE = 100


class SessionManager:
    """Opens, shares and closes the client's aiohttp session."""

    def __init__(self, config: ConnectionConfig):
        self._config = config
        self._session: Optional[aiohttp.ClientSession] = None
        self._lock: Optional[asyncio.Lock] = None

    async def create_session(self) -> aiohttp.ClientSession:
        """Return the open session, opening it on first use."""
        if self._session is not None and not self._session.closed:
            return self._session

        # Created here so it binds to the loop that runs the requests
        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession(
                    connector=aiohttp.TCPConnector(limit=POOL_SIZE, ttl_dns_cache=300),
                    timeout=aiohttp.ClientTimeout(total=self._config.timeout),
                    headers=DEFAULT_HEADERS,
                )
                logger.debug(f"Opened HTTP session for {self._config.resolved_base_url}")
        return self._session

    async def close_session(self) -> None:
        """Close the session and release pooled connections."""
        session, self._session = self._session, None
        if session is not None and not session.closed:
            await session.close()
            logger.debug("Closed HTTP session")

    @property
    def session(self) -> Optional[aiohttp.ClientSession]:
        """Current session, if one has been opened."""
        return self._session
