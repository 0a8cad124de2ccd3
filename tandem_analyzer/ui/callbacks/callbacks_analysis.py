from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import date
from typing import TYPE_CHECKING, Any, Dict

import dash
from dash import Input, Output, State, dcc, no_update

from tandem_analyzer.analysis.model import AnalysisResult
from tandem_analyzer.core.dataset_record import record_from_dict, record_to_dict
from tandem_analyzer.ui.helpers import build_tir_figure, empty_figure, notice
from tandem_analyzer.ui.ids import IDs, stage_progress_id, stage_status_id
from tandem_analyzer.ui.layout.build_analysis_panel import HIDDEN, VISIBLE, build_item_list

if TYPE_CHECKING:
    from tandem_analyzer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _now_ms() -> float:
    return time.time() * 1000


def start_analysis_run(ctx: AppConfig) -> Dict[str, Any]:
    """
    Snapshot the current selection into the payload for the ANALYSIS_RUN store.
    The run analyses these records even if the selection changes meanwhile.

    Raises:
        ValidationError: if nothing is selected
    """
    records = ctx.dataset_store.selected()
    ctx.analysis_engine.require_records(records)
    return {
        "run_id": uuid.uuid4().hex,
        "started_at": _now_ms(),
        "records": [record_to_dict(r) for r in records],
    }


def register_analysis_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    schedule = ctx.schedule
    engine = ctx.analysis_engine

    progress_outputs = [Output(stage_progress_id(s.key), "value") for s in schedule.stages]
    status_outputs = [Output(stage_status_id(s.key), "children") for s in schedule.stages]

    # ---------------------------------------------------------
    # Progress animation + engine call when the last stage ends
    # ---------------------------------------------------------
    @app.callback(
        *progress_outputs,
        *status_outputs,
        Output(IDs.Control.ANALYSIS_INTERVAL, "disabled"),
        Output(IDs.Control.ANALYSIS_PLACEHOLDER, "children"),
        Output(IDs.Store.ANALYSIS_RESULT, "data", allow_duplicate=True),
        Output(IDs.Store.NOTICE, "data", allow_duplicate=True),
        Input(IDs.Store.ANALYSIS_RUN, "data"),
        Input(IDs.Control.ANALYSIS_INTERVAL, "n_intervals"),
        State(IDs.Store.ANALYSIS_RESULT, "data"),
        prevent_initial_call=True,
    )
    def advance_analysis(run, _n_intervals, current_result):
        if not run:
            raise dash.exceptions.PreventUpdate

        # Late interval ticks after this run already finished
        if current_result and current_result.get("run_id") == run.get("run_id"):
            raise dash.exceptions.PreventUpdate

        new_run = dash.ctx.triggered_id == IDs.Store.ANALYSIS_RUN
        elapsed_ms = _now_ms() - float(run.get("started_at", 0))
        progress = schedule.progress_at(elapsed_ms)
        values = [p.percent for p in progress]
        statuses = [p.status for p in progress]

        if not schedule.is_complete(elapsed_ms):
            result_out = None if new_run else no_update
            return (*values, *statuses, False, "Analysis in progress...", result_out, no_update)

        try:
            records = [record_from_dict(d) for d in run.get("records", [])]
            result = engine.analyze(records)
        except Exception:
            logger.exception("Analysis failed", extra={"run_id": run.get("run_id")})
            idle = schedule.idle_progress()
            return (
                *[p.percent for p in idle],
                *[p.status for p in idle],
                True,
                "Analysis failed.",
                None,
                notice("Analysis failed. Please try again.", level="danger"),
            )

        logger.info(
            "Analysis complete",
            extra={"run_id": run.get("run_id"), "n_datasets": len(records)},
        )

        done_notice = no_update
        if ctx.settings_store.settings.enable_notifications:
            done_notice = notice("Analysis complete.", level="success")

        payload = {"run_id": run.get("run_id"), "result": result.to_dict()}
        return (*values, *statuses, True, "", payload, done_notice)

    # ---------------------------------------------------------
    # Results section
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.RESULTS_SECTION, "style"),
        Output(IDs.Control.STAT_DATE_RANGE, "children"),
        Output(IDs.Control.STAT_AVG_GLUCOSE, "children"),
        Output(IDs.Control.STAT_TIME_IN_RANGE, "children"),
        Output(IDs.Control.STAT_TOTAL_INSULIN, "children"),
        Output(IDs.Control.STAT_DAILY_INSULIN, "children"),
        Output(IDs.Control.STAT_TOTAL_RECORDS, "children"),
        Output(IDs.Control.TIR_GRAPH, "figure"),
        Output(IDs.Control.INSIGHTS_LIST, "children"),
        Output(IDs.Control.RECOMMENDATIONS_LIST, "children"),
        Input(IDs.Store.ANALYSIS_RESULT, "data"),
    )
    def render_results(payload):
        if not payload or not payload.get("result"):
            return HIDDEN, "-", "-", "-", "-", "-", "-", empty_figure("No analysis yet"), [], []

        result = AnalysisResult.from_dict(payload["result"])
        stats = result.summary_stats
        return (
            VISIBLE,
            stats.date_range,
            stats.avg_glucose,
            stats.time_in_range,
            stats.total_insulin_delivered,
            stats.avg_daily_insulin,
            f"{stats.total_records:,}",
            build_tir_figure(stats),
            build_item_list(result.insights, "💡", "tpa-insight"),
            build_item_list(result.recommendations, "✅", "tpa-recommendation"),
        )

    # ---------------------------------------------------------
    # Export
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DOWNLOAD_RESULT, "data"),
        Input(IDs.Control.EXPORT_BTN, "n_clicks"),
        State(IDs.Store.ANALYSIS_RESULT, "data"),
        prevent_initial_call=True,
    )
    def export_results(n_clicks, payload):
        if not n_clicks or not payload or not payload.get("result"):
            raise dash.exceptions.PreventUpdate

        filename = f"tandem_analysis_{date.today().isoformat()}.json"
        logger.info("Exporting analysis result", extra={"filename": filename})
        return dcc.send_string(json.dumps(payload["result"], indent=2), filename)
