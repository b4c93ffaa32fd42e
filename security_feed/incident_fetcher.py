"""
Security incident retrieval from the CPW tracker API.

Best-effort source: every failure is logged and turned into an empty
result so the snapshot can still be written.
"""

import time
import logging
from typing import Any, Dict, List, Optional

from .config import Config
from .fetcher import BaseFetcher
from .monitor.metrics import MetricsCollector
from .utils import get_date_range
from .validators import PayloadValidator

logger = logging.getLogger(__name__)


class IncidentFetcher(BaseFetcher):
    """Queries the incident provider for the lookback window."""

    provider = "cpw"

    def __init__(self, config: Config, metrics: Optional[MetricsCollector] = None):
        super().__init__(config, metrics)
        self.validator = PayloadValidator(self.metrics)

    def _build_request(self) -> Dict[str, Any]:
        api = self.config.incident_api
        window = get_date_range(self.config.lookback_days)
        return {
            "headers": {
                "Content-Type": "application/json",
                "x-rapidapi-host": api.host,
                "x-rapidapi-key": api.api_key
            },
            "json": {
                "entities": api.entities,
                "topic": api.topic,
                "startTime": window.start_time,
                "endTime": window.end_time
            }
        }

    async def fetch_security_incidents(self) -> List[Dict[str, Any]]:
        """
        Fetch security incidents reported during the lookback window.

        Returns:
            Incident objects tagged with ``source`` and ``category``; an empty
            list when the credential is missing or the request fails
        """
        api = self.config.incident_api
        if not api.api_key:
            logger.warning("RAPIDAPI_KEY not set, skipping CPW API")
            return []

        request = self._build_request()
        logger.info("Fetching security incidents from CPW API...")

        start_time = time.monotonic()
        try:
            session = await self.get_session()
            async with session.post(api.url, **request) as response:
                self.metrics.record_api_call(
                    self.provider, time.monotonic() - start_time, response.status
                )
                response.raise_for_status()
                data = await self.read_json(response)
        except Exception as e:
            self.metrics.record_error(self.provider, type(e).__name__)
            logger.error(f"CPW API error: {e}")
            return []

        validation = self.validator.validate_incidents(data)
        if validation.issues:
            logger.warning(f"CPW API payload issues: {validation.issues}")

        results = [
            {**item, "source": "cpw", "category": "security_incident"}
            for item in validation.records
        ]
        logger.info(f"Found {len(results)} security incidents")
        return results
