from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Sequence

from tandem_analyzer.analysis.model import AnalysisResult, SummaryStats
from tandem_analyzer.core.dataset_record import DatasetRecord
from tandem_analyzer.validation.errors import ValidationError

logger = logging.getLogger(__name__)

MOCK_INSIGHTS = [
    "Your time in range of 68% is approaching the recommended target of 70%. Focus on reducing post-meal glucose spikes.",
    "Most high glucose events occur between 2-4 PM. Consider adjusting your lunch bolus timing or carb counting.",
    "Your overnight glucose control is excellent with 89% time in range during sleep hours.",
    "Basal insulin appears well-tuned with minimal adjustments needed by the pump's algorithm.",
    "Consider increasing pre-bolus time for larger meals to improve post-meal glucose control.",
]

MOCK_RECOMMENDATIONS = [
    "Increase meal bolus by 0.5-1 units for lunches containing >45g carbs",
    "Try pre-bolusing 15-20 minutes before large meals",
    "Monitor stress levels during afternoon hours as they may contribute to glucose spikes",
    "Continue current exercise routine as it's positively impacting overnight glucose stability",
]


class AnalysisEngine(ABC):
    """
    Contract for anything that turns selected datasets into an
    AnalysisResult. A real backend can replace the mock without the
    stores or the UI changing.
    """

    id: str = None
    label: str = None

    @abstractmethod
    def analyze(self, records: Sequence[DatasetRecord]) -> AnalysisResult:
        """
        :param records: the selected dataset records, in display order
        :return: the analysis result
        :raises ValidationError: if records is empty
        """
        raise NotImplementedError()

    @staticmethod
    def require_records(records: Sequence[DatasetRecord]) -> None:
        if not records:
            raise ValidationError.single(
                "NO_DATASET_SELECTED",
                "Please select at least one dataset to analyze.",
            )


def combined_date_range(records: Sequence[DatasetRecord]) -> str:
    if len(records) == 1:
        return records[0].date_range
    return f"Multiple datasets spanning {len(records)} files"


class MockAnalysisEngine(AnalysisEngine):
    """
    Returns the same placeholder result for any input; only the combined
    date range and the record total are derived from the records.
    """

    id = "mock"
    label = "Demo analysis"

    def analyze(self, records: Sequence[DatasetRecord]) -> AnalysisResult:
        self.require_records(records)

        total_records = sum(r.record_count for r in records)
        logger.info(
            "Running mock analysis",
            extra={"n_datasets": len(records), "total_records": total_records},
        )

        stats = SummaryStats(
            date_range=combined_date_range(records),
            total_records=total_records,
            avg_glucose="142 mg/dL",
            time_in_range="68%",
            time_above_range="28%",
            time_below_range="4%",
            total_insulin_delivered="487.3 units",
            avg_daily_insulin="16.2 units/day",
        )
        return AnalysisResult(
            summary_stats=stats,
            insights=list(MOCK_INSIGHTS),
            recommendations=list(MOCK_RECOMMENDATIONS),
            dataset_ids=[r.id for r in records],
        )
