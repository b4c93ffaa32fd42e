"""
Shared HTTP session handling for the provider fetchers.

This module handles:
- Lazy aiohttp session creation
- Request timeout configuration
- Session cleanup
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from .config import Config
from .monitor.metrics import MetricsCollector
from .utils import strict_json_loads

logger = logging.getLogger(__name__)


class BaseFetcher:
    """
    Owns one aiohttp session for a single provider.

    Fetchers never share a session, so the two providers can be polled
    side by side without coordinating.
    """

    provider = "base"

    def __init__(self, config: Config, metrics: Optional[MetricsCollector] = None):
        self.config = config
        self.metrics = metrics or MetricsCollector()

        self.session = None
        self.session_lock = asyncio.Lock()

    async def get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        async with self.session_lock:
            if self.session is None or self.session.closed:
                # total=None leaves requests unbounded unless REQUEST_TIMEOUT is set
                timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)
                self.session = aiohttp.ClientSession(timeout=timeout, trust_env=True)
                logger.debug(f"Created new aiohttp session for {self.provider}")

            return self.session

    async def read_json(self, response: aiohttp.ClientResponse) -> Any:
        """Decode a response body as strict JSON, whatever its content type."""
        return await response.json(content_type=None, loads=strict_json_loads)

    async def close(self):
        """Close the aiohttp session."""
        async with self.session_lock:
            if self.session and not self.session.closed:
                await self.session.close()
                self.session = None
                logger.debug(f"Closed aiohttp session for {self.provider}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
