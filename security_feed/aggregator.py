"""
Aggregation and persistence of the security snapshot.

This module handles:
- Running both provider fetches concurrently
- Building the combined snapshot
- Writing the snapshot and its component files
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import aiofiles

from .config import Config
from .incident_fetcher import IncidentFetcher
from .models import Snapshot
from .monitor.metrics import MetricsCollector
from .trust_score_fetcher import TrustScoreFetcher
from .utils import ensure_directory, to_pretty_json, utc_timestamp

logger = logging.getLogger(__name__)


class SecurityDataAggregator:
    """
    Merges the incident feed and the exchange trust scores into one snapshot.

    Fetch failures never reach this class; only storage errors raised by
    ``save_data`` propagate to the caller.
    """

    def __init__(
        self,
        config: Config,
        incident_fetcher: Optional[IncidentFetcher] = None,
        trust_score_fetcher: Optional[TrustScoreFetcher] = None,
        metrics: Optional[MetricsCollector] = None
    ):
        self.config = config
        self.metrics = metrics or MetricsCollector()
        self.incident_fetcher = incident_fetcher or IncidentFetcher(config, self.metrics)
        self.trust_score_fetcher = trust_score_fetcher or TrustScoreFetcher(config, self.metrics)

    async def aggregate_data(self) -> Snapshot:
        """
        Fetch both sources side by side and combine them.

        Returns:
            Snapshot with summary counters derived from the fetched lists
        """
        logger.info("Starting data aggregation from multiple sources...")

        try:
            incidents, trust_scores = await asyncio.gather(
                self.incident_fetcher.fetch_security_incidents(),
                self.trust_score_fetcher.fetch_exchange_trust_scores()
            )
        finally:
            await asyncio.gather(
                self.incident_fetcher.close(),
                self.trust_score_fetcher.close()
            )

        self.metrics.export()

        return Snapshot.build(
            last_updated=utc_timestamp(),
            incidents=incidents,
            trust_scores=trust_scores,
            time_range_days=self.config.lookback_days
        )

    def output_paths(self) -> Dict[str, Path]:
        storage = self.config.storage
        data_dir = Path(storage.data_dir)
        return {
            "snapshot": data_dir / storage.snapshot_file,
            "incidents": data_dir / storage.incidents_file,
            "trust_scores": data_dir / storage.trust_scores_file
        }

    async def _write_json(self, path: Path, data: Any):
        async with aiofiles.open(path, 'w', encoding='utf-8') as f:
            await f.write(to_pretty_json(data))

    async def save_data(self, snapshot: Snapshot):
        """
        Write the snapshot and its component lists to the data directory.

        Existing files are overwritten in place.

        Raises:
            OSError: If the directory cannot be created or a file written
        """
        ensure_directory(self.config.storage.data_dir)
        paths = self.output_paths()

        await self._write_json(paths["snapshot"], snapshot.to_dict())
        logger.info(f"Saved data to {paths['snapshot'].name}")

        await self._write_json(paths["incidents"], snapshot.incidents_document())
        await self._write_json(paths["trust_scores"], snapshot.trust_scores_document())
        logger.info("Saved component data files")
