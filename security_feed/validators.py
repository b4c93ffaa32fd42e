"""
Shape checks for provider payloads.

Only the container types are checked. Field values are passed through
as the providers send them.
"""

import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from .monitor.metrics import MetricsCollector

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of payload validation."""
    valid: bool
    issues: List[str] = field(default_factory=list)
    records: List[Dict[str, Any]] = field(default_factory=list)


class PayloadValidator:
    """Checks that provider responses have the expected JSON shape."""

    def __init__(self, metrics: Optional[MetricsCollector] = None):
        self.metrics = metrics or MetricsCollector()

    def validate_incidents(self, payload: Any) -> ValidationResult:
        """
        Validate an incident feed response.

        A non-array payload yields an invalid result with no records.
        Array items that are not JSON objects are dropped.

        Args:
            payload: Decoded JSON body

        Returns:
            ValidationResult whose ``records`` are the usable incident objects
        """
        if not isinstance(payload, list):
            result = ValidationResult(
                valid=False,
                issues=[f"Expected a JSON array, got {type(payload).__name__}"]
            )
            self._record(result, "incidents")
            return result

        result = ValidationResult(valid=True)
        for index, item in enumerate(payload):
            if isinstance(item, dict):
                result.records.append(item)
            else:
                result.issues.append(f"Item {index} is not an object ({type(item).__name__})")

        self._record(result, "incidents")
        return result

    def validate_exchange(self, payload: Any) -> ValidationResult:
        """Validate an exchange detail response."""
        if not isinstance(payload, dict):
            result = ValidationResult(
                valid=False,
                issues=[f"Expected a JSON object, got {type(payload).__name__}"]
            )
        else:
            result = ValidationResult(valid=True, records=[payload])

        self._record(result, "exchange")
        return result

    def _record(self, result: ValidationResult, data_type: str):
        if result.issues:
            self.metrics.increment(
                "validation_issues",
                len(result.issues),
                tags={"data_type": data_type, "valid": str(result.valid)}
            )
