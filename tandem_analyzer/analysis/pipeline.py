"""
Simulated three-stage analysis pipeline.

The stages carry no logic of their own; they only provide determinate
progress for the UI while the engine result is being "prepared":

1. Data preparation
2. AI processing
3. Results parsing

The Dash UI samples `PipelineSchedule.progress_at` from a polling
interval. Non-UI callers use `run_pipeline`, which blocks between frames.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from tandem_analyzer.analysis.engine import AnalysisEngine
from tandem_analyzer.analysis.model import AnalysisResult
from tandem_analyzer.core.dataset_record import DatasetRecord

logger = logging.getLogger(__name__)

STATUS_READY = "Ready"
STATUS_WAITING = "Waiting"
STATUS_COMPLETE = "Complete"

DEFAULT_FRAME_MS = 16


@dataclass(frozen=True)
class PipelineStage:
    key: str
    label: str
    duration_ms: int
    active_status: str


@dataclass(frozen=True)
class StageProgress:
    stage: PipelineStage
    fraction: float
    status: str

    @property
    def percent(self) -> float:
        return round(self.fraction * 100, 1)


DEFAULT_STAGES = (
    PipelineStage("prep", "Data Preparation", 2000, "Processing..."),
    PipelineStage("ai", "AI Processing", 3000, "Analyzing..."),
    PipelineStage("parse", "Results Parsing", 1000, "Processing..."),
)


class PipelineSchedule:
    """
    Stages run back to back. time_scale stretches (>1) or shrinks (<1)
    every duration; 0 makes the whole pipeline instantaneous.
    """

    def __init__(self, stages: Sequence[PipelineStage] = DEFAULT_STAGES, time_scale: float = 1.0):
        if time_scale < 0:
            raise ValueError(f"time_scale must be >= 0, got {time_scale}")
        if not stages:
            raise ValueError("A pipeline needs at least one stage")
        self.stages = list(stages)
        self.time_scale = time_scale

    def duration_ms(self, stage: PipelineStage) -> float:
        return stage.duration_ms * self.time_scale

    @property
    def total_duration_ms(self) -> float:
        return sum(self.duration_ms(s) for s in self.stages)

    def is_complete(self, elapsed_ms: float) -> bool:
        return elapsed_ms >= self.total_duration_ms

    def progress_at(self, elapsed_ms: float) -> List[StageProgress]:
        """Progress of every stage `elapsed_ms` after the pipeline started."""
        progress: List[StageProgress] = []
        stage_start = 0.0
        for stage in self.stages:
            duration = self.duration_ms(stage)
            if elapsed_ms < stage_start:
                progress.append(StageProgress(stage, 0.0, STATUS_WAITING))
            elif duration <= 0 or elapsed_ms >= stage_start + duration:
                progress.append(StageProgress(stage, 1.0, STATUS_COMPLETE))
            else:
                fraction = (elapsed_ms - stage_start) / duration
                progress.append(StageProgress(stage, fraction, stage.active_status))
            stage_start += duration
        return progress

    def idle_progress(self) -> List[StageProgress]:
        """Reset state shown before a run starts."""
        return [
            StageProgress(stage, 0.0, STATUS_READY if i == 0 else STATUS_WAITING)
            for i, stage in enumerate(self.stages)
        ]


ProgressCallback = Callable[[StageProgress], None]


def run_pipeline(
        engine: AnalysisEngine,
        records: Sequence[DatasetRecord],
        schedule: Optional[PipelineSchedule] = None,
        *,
        on_progress: Optional[ProgressCallback] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        frame_ms: float = DEFAULT_FRAME_MS,
) -> AnalysisResult:
    """
    Animate every stage to completion, then run the engine.

    Input is validated before the first frame so an empty selection never
    starts the animation. There is no cancellation.
    """
    engine.require_records(records)
    schedule = schedule or PipelineSchedule()

    for stage in schedule.stages:
        duration = schedule.duration_ms(stage)
        started = clock()
        logger.debug("Pipeline stage started", extra={"stage": stage.key})

        while True:
            elapsed_ms = (clock() - started) * 1000
            fraction = 1.0 if duration <= 0 else min(elapsed_ms / duration, 1.0)
            status = STATUS_COMPLETE if fraction >= 1.0 else stage.active_status
            if on_progress is not None:
                on_progress(StageProgress(stage, fraction, status))
            if fraction >= 1.0:
                break
            sleep(frame_ms / 1000)

    return engine.analyze(records)
