"""
Exchange trust score retrieval from CoinGecko.

This module handles:
- One detail request per monitored exchange
- Fixed pacing between requests
- Skipping exchanges whose request fails
"""

import time
import logging
from typing import List, Optional

from .config import Config
from .fetcher import BaseFetcher
from .models import TrustScoreRecord
from .monitor.metrics import MetricsCollector
from .rate_limiter import FixedDelayRateLimiter
from .utils import utc_timestamp
from .validators import PayloadValidator

logger = logging.getLogger(__name__)


class TrustScoreFetcher(BaseFetcher):
    """
    Polls the exchange-info provider once per monitored exchange.

    Requests run strictly one after another, each followed by the rate
    limiter's pause, and results keep the order of the monitored list.
    """

    provider = "coingecko"

    def __init__(
        self,
        config: Config,
        metrics: Optional[MetricsCollector] = None,
        rate_limiter: Optional[FixedDelayRateLimiter] = None
    ):
        super().__init__(config, metrics)
        self.rate_limiter = rate_limiter or FixedDelayRateLimiter(config, self.metrics)
        self.validator = PayloadValidator(self.metrics)

    def exchange_url(self, exchange_id: str) -> str:
        base_url = self.config.trust_score_api.base_url.rstrip("/")
        return f"{base_url}/exchanges/{exchange_id}"

    async def fetch_exchange_trust_score(self, exchange_id: str) -> Optional[TrustScoreRecord]:
        """
        Fetch trust data for a single exchange.

        Args:
            exchange_id: Provider identifier (e.g., 'binance')

        Returns:
            TrustScoreRecord, or None when the provider answers with a
            non-2xx status

        Raises:
            aiohttp.ClientError: On network failure
            ValueError: If the body is not a JSON object
        """
        session = await self.get_session()
        start_time = time.monotonic()

        async with session.get(self.exchange_url(exchange_id)) as response:
            self.metrics.record_api_call(
                self.provider, time.monotonic() - start_time, response.status
            )

            if not 200 <= response.status < 300:
                self.metrics.record_error(
                    self.provider, f"http_{response.status}", tags={"exchange": exchange_id}
                )
                logger.warning(f"CoinGecko API failed for {exchange_id}: {response.status}")
                return None

            data = await self.read_json(response)

        validation = self.validator.validate_exchange(data)
        if not validation.valid:
            raise ValueError("; ".join(validation.issues))

        return TrustScoreRecord.from_payload(data, utc_timestamp())

    async def fetch_exchange_trust_scores(self) -> List[TrustScoreRecord]:
        """
        Fetch trust scores for every monitored exchange.

        Returns:
            One record per exchange that answered successfully, in
            monitored-list order
        """
        logger.info("Fetching exchange trust scores from CoinGecko...")

        results = []
        for exchange_id in self.config.trust_score_api.monitored_exchanges:
            try:
                record = await self.fetch_exchange_trust_score(exchange_id)
                if record is not None:
                    results.append(record)
            except Exception as e:
                self.metrics.record_error(
                    self.provider, type(e).__name__, tags={"exchange": exchange_id}
                )
                logger.error(f"Error fetching {exchange_id}: {e}")

            # Runs after the last exchange too
            await self.rate_limiter.wait()

        logger.info(f"Fetched trust scores for {len(results)} exchanges")
        return results
