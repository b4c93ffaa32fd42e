"""
Request pacing for the exchange-info provider.

The provider's free tier caps calls per minute, so every request is
followed by a fixed pause. There is no token bucket and no adaptation to
429 responses.
"""

import time
import asyncio
import logging
from typing import Any, Dict, Optional
from dataclasses import dataclass

from .config import Config
from .monitor.metrics import MetricsCollector

logger = logging.getLogger(__name__)


@dataclass
class RateLimitMetrics:
    """Metrics for rate limiter performance."""
    waits: int = 0
    total_wait_time: float = 0.0


class FixedDelayRateLimiter:
    """Sleeps a fixed delay after each request."""

    def __init__(self, config: Config, metrics: Optional[MetricsCollector] = None):
        self.delay = config.request_delay_seconds
        self.metrics = metrics or MetricsCollector()
        self.metrics_data = RateLimitMetrics()

        logger.debug(f"Initialized FixedDelayRateLimiter with {self.delay:.2f}s delay")

    async def wait(self) -> float:
        """
        Pause for the configured delay.

        Returns:
            Time waited in seconds
        """
        start_wait = time.monotonic()
        await asyncio.sleep(self.delay)
        waited = time.monotonic() - start_wait

        self.metrics_data.waits += 1
        self.metrics_data.total_wait_time += waited
        self.metrics.record_timing("rate_limit_wait_seconds", waited)
        return waited

    def get_metrics(self) -> Dict[str, Any]:
        return {
            "delay": self.delay,
            "waits": self.metrics_data.waits,
            "total_wait_time": self.metrics_data.total_wait_time
        }
