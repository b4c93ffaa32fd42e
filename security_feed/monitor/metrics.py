"""
Run metrics collection.

This module handles:
- Counters for API calls and errors
- Timing statistics
- Metrics export to the log
"""

import threading
import logging
from typing import Dict, Any, Optional, List
from datetime import datetime
from dataclasses import dataclass, field
from collections import defaultdict

logger = logging.getLogger(__name__)


@dataclass
class MetricPoint:
    """A single metric data point."""
    timestamp: datetime
    value: float
    tags: Dict[str, str] = field(default_factory=dict)


class MetricsCollector:
    """
    Collects counters and timings for one run.

    Counters are keyed by metric name; tagged points are kept so errors can
    be traced back to the provider and exchange that produced them.
    """

    def __init__(self):
        self.counters = defaultdict(int)
        self.timings = defaultdict(list)
        self.points = defaultdict(list)

        self.lock = threading.Lock()

    def increment(self, name: str, value: int = 1, tags: Optional[Dict[str, str]] = None):
        """
        Increment a counter metric.

        Args:
            name: Metric name
            value: Value to increment by
            tags: Optional tags for the metric
        """
        with self.lock:
            self.counters[name] += value
            self._record_point(name, value, tags)

    def record_timing(self, name: str, value: float, tags: Optional[Dict[str, str]] = None):
        """
        Record a timing metric.

        Args:
            name: Metric name
            value: Timing value in seconds
            tags: Optional tags for the metric
        """
        with self.lock:
            self.timings[name].append(value)
            self._record_point(name, value, tags)

    def record_api_call(self, provider: str, duration: float, status: int):
        """Record API call metrics."""
        tags = {"provider": provider, "status": str(status)}
        self.increment("api_calls_total", tags=tags)
        self.record_timing("api_duration_seconds", duration, tags=tags)

    def record_error(self, component: str, error_type: str, tags: Optional[Dict[str, str]] = None):
        """Record error metric."""
        self.increment(
            "errors_total",
            tags={"component": component, "error_type": error_type, **(tags or {})}
        )

    def _record_point(self, name: str, value: float, tags: Optional[Dict[str, str]] = None):
        self.points[name].append(
            MetricPoint(timestamp=datetime.now(), value=value, tags=tags or {})
        )

    def get_counter(self, name: str) -> int:
        """Get counter value."""
        with self.lock:
            return self.counters.get(name, 0)

    def get_points(self, name: str) -> List[MetricPoint]:
        with self.lock:
            return list(self.points.get(name, []))

    def get_timing_stats(self, name: str) -> Dict[str, float]:
        """Get timing statistics."""
        with self.lock:
            timings = self.timings.get(name, [])
            if not timings:
                return {}

            return {
                "count": len(timings),
                "min": min(timings),
                "max": max(timings),
                "avg": sum(timings) / len(timings),
                "total": sum(timings)
            }

    def get_all_metrics(self) -> Dict[str, Any]:
        """Get all current metrics."""
        with self.lock:
            names = list(self.timings)
            counters = dict(self.counters)
        return {
            "counters": counters,
            "timings": {name: self.get_timing_stats(name) for name in names}
        }

    def export(self):
        """Write the collected metrics to the log."""
        logger.debug(f"Run metrics: {self.get_all_metrics()}")
