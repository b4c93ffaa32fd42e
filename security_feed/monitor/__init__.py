"""
Run monitoring for the security feed aggregator.
"""

from .metrics import MetricsCollector, MetricPoint

__all__ = ["MetricsCollector", "MetricPoint"]
