from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List


def now_iso() -> str:
    """
    Return a current UTC timestamp in ISO-8601 format.
    """
    return datetime.now(timezone.utc).isoformat()


@dataclass
class SummaryStats:
    """
    Headline numbers shown on the analysis page. Only date_range and
    total_records depend on the input; the rest are display strings.
    """

    date_range: str
    total_records: int
    avg_glucose: str
    time_in_range: str
    time_above_range: str
    time_below_range: str
    total_insulin_delivered: str
    avg_daily_insulin: str


@dataclass
class AnalysisResult:
    """
    Output of an AnalysisEngine.

    - summary_stats: headline numbers
    - insights: observations about the data
    - recommendations: suggested therapy adjustments
    - dataset_ids: ids of the records that were analysed
    - created_at: ISO8601 timestamp (UTC)
    """

    summary_stats: SummaryStats
    insights: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    dataset_ids: List[str] = field(default_factory=list)
    created_at: str = field(default_factory=now_iso)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        return cls(
            summary_stats=SummaryStats(**data["summary_stats"]),
            insights=list(data.get("insights", [])),
            recommendations=list(data.get("recommendations", [])),
            dataset_ids=list(data.get("dataset_ids", [])),
            created_at=data.get("created_at", now_iso()),
        )
