"""
Utility functions for the security feed aggregator.

This module provides:
- Date/time utilities
- JSON serialization
- Filesystem helpers
"""

import json
from typing import Any, Optional, Union
from datetime import datetime, timedelta, timezone
from pathlib import Path

from .models import LookbackWindow


def format_timestamp(moment: datetime) -> str:
    """
    Format a datetime as a UTC ISO-8601 string with millisecond precision.

    Args:
        moment: Timezone-aware or naive (assumed UTC) datetime

    Returns:
        String such as ``2026-10-19T12:00:00.000Z``
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Current instant formatted by ``format_timestamp``."""
    return format_timestamp(now or datetime.now(timezone.utc))


def get_date_range(days: int = 7, now: Optional[datetime] = None) -> LookbackWindow:
    """
    Get the lookback window for the incident query.

    Args:
        days: Length of the window in days
        now: Override for the current instant

    Returns:
        LookbackWindow ending now and starting ``days`` days earlier
    """
    end_time = now or datetime.now(timezone.utc)
    start_time = end_time - timedelta(days=days)
    return LookbackWindow(
        start_time=format_timestamp(start_time),
        end_time=format_timestamp(end_time)
    )


def _reject_constant(name: str):
    raise ValueError(f"Invalid JSON constant: {name}")


def strict_json_loads(text: str) -> Any:
    """Decode JSON, rejecting the NaN and Infinity tokens json.loads allows."""
    return json.loads(text, parse_constant=_reject_constant)


def to_pretty_json(data: Any) -> str:
    """Serialize with two-space indentation, preserving key order."""
    return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to directory

    Returns:
        Path object for the directory
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def format_duration(seconds: float) -> str:
    """
    Format duration in seconds to human-readable string.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string
    """
    if seconds < 0:
        return "0s"

    hours, seconds = divmod(seconds, 3600)
    minutes, seconds = divmod(seconds, 60)

    components = []
    if hours > 0:
        components.append(f"{int(hours)}h")
    if minutes > 0:
        components.append(f"{int(minutes)}m")
    if seconds > 0 or not components:
        components.append(f"{seconds:.1f}s")

    return " ".join(components)
