"""
Command-line entry point: fetch, aggregate and persist one snapshot.
"""

import sys
import time
import asyncio
import logging
from typing import Optional

from .aggregator import SecurityDataAggregator
from .config import Config
from .utils import format_duration

logger = logging.getLogger(__name__)


async def run(config: Config) -> int:
    """Run one update and return the process exit status."""
    start_time = time.monotonic()
    try:
        config.validate()
        aggregator = SecurityDataAggregator(config)
        snapshot = await aggregator.aggregate_data()
        await aggregator.save_data(snapshot)
    except Exception as e:
        logger.error(f"Update failed: {e}")
        return 1

    logger.info("Data update completed successfully")
    logger.info(f"  - Security incidents: {len(snapshot.incidents)}")
    logger.info(f"  - Trust scores: {len(snapshot.trust_scores)}")
    logger.info(f"  - Last updated: {snapshot.last_updated}")
    logger.info(f"  - Duration: {format_duration(time.monotonic() - start_time)}")
    return 0


def main(config: Optional[Config] = None) -> int:
    try:
        config = config or Config.from_env()
        config.setup_logging()
    except Exception as e:
        # no-op when setup_logging got as far as basicConfig
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Update failed: {e}")
        return 1

    logger.debug(f"Configuration: {config.to_dict()}")
    return asyncio.run(run(config))


if __name__ == "__main__":
    sys.exit(main())
