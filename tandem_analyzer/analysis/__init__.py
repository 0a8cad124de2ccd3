from .engine import AnalysisEngine, MockAnalysisEngine, combined_date_range
from .model import AnalysisResult, SummaryStats
from .pipeline import PipelineSchedule, PipelineStage, StageProgress, run_pipeline

__all__ = [
    "AnalysisEngine",
    "MockAnalysisEngine",
    "combined_date_range",
    "AnalysisResult",
    "SummaryStats",
    "PipelineSchedule",
    "PipelineStage",
    "StageProgress",
    "run_pipeline",
]
