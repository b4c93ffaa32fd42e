"""
Security Feed: exchange security incidents and trust scores

This package is responsible for:
- Fetching recent security incidents for cryptocurrency exchanges
- Fetching trust scores for a fixed set of monitored exchanges
- Merging both into a single timestamped snapshot
- Writing the snapshot to disk as JSON
"""

from .aggregator import SecurityDataAggregator
from .config import Config, MONITORED_EXCHANGES
from .incident_fetcher import IncidentFetcher
from .models import LookbackWindow, Snapshot, SnapshotSummary, TrustScoreRecord
from .monitor.metrics import MetricsCollector
from .rate_limiter import FixedDelayRateLimiter
from .trust_score_fetcher import TrustScoreFetcher
from .utils import get_date_range
from .validators import PayloadValidator

__version__ = "1.0.0"
__all__ = [
    "SecurityDataAggregator",
    "Config",
    "MONITORED_EXCHANGES",
    "IncidentFetcher",
    "TrustScoreFetcher",
    "FixedDelayRateLimiter",
    "PayloadValidator",
    "MetricsCollector",
    "LookbackWindow",
    "TrustScoreRecord",
    "SnapshotSummary",
    "Snapshot",
    "get_date_range"
]
