"""
Data model for the aggregated security snapshot.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class LookbackWindow:
    """Time range bounding the incident query."""
    start_time: str
    end_time: str


@dataclass
class TrustScoreRecord:
    """Trust data for one monitored exchange, taken at fetch time."""
    timestamp: str
    exchange: Optional[str]
    exchange_id: Optional[str]
    trust_score: Optional[float]
    trust_score_rank: Optional[int]
    trade_volume_24h_btc: Optional[float]
    year_established: Optional[int]
    country: Optional[str]
    url: Optional[str]
    source: str = "coingecko"
    category: str = "trust_score"

    @classmethod
    def from_payload(cls, payload: Dict[str, Any], timestamp: str) -> 'TrustScoreRecord':
        """Build a record from an exchange detail response."""
        return cls(
            timestamp=timestamp,
            exchange=payload.get("name"),
            exchange_id=payload.get("id"),
            trust_score=payload.get("trust_score"),
            trust_score_rank=payload.get("trust_score_rank"),
            trade_volume_24h_btc=payload.get("trade_volume_24h_btc"),
            year_established=payload.get("year_established"),
            country=payload.get("country"),
            url=payload.get("url")
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class SnapshotSummary:
    total_incidents: int
    exchanges_monitored: int
    time_range_days: int


@dataclass
class Snapshot:
    """
    One run's combined output.

    Use ``Snapshot.build`` so the summary counters are derived from the
    lists they describe.
    """
    last_updated: str
    summary: SnapshotSummary
    incidents: List[Dict[str, Any]] = field(default_factory=list)
    trust_scores: List[TrustScoreRecord] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        last_updated: str,
        incidents: List[Dict[str, Any]],
        trust_scores: List[TrustScoreRecord],
        time_range_days: int = 7
    ) -> 'Snapshot':
        return cls(
            last_updated=last_updated,
            summary=SnapshotSummary(
                total_incidents=len(incidents),
                exchanges_monitored=len(trust_scores),
                time_range_days=time_range_days
            ),
            incidents=list(incidents),
            trust_scores=list(trust_scores)
        )

    def incidents_document(self) -> List[Dict[str, Any]]:
        return [dict(incident) for incident in self.incidents]

    def trust_scores_document(self) -> List[Dict[str, Any]]:
        return [record.to_dict() for record in self.trust_scores]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "last_updated": self.last_updated,
            "summary": asdict(self.summary),
            "incidents": self.incidents_document(),
            "trust_scores": self.trust_scores_document()
        }
