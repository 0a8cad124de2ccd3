from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

import dash
from dash import ALL, Input, Output, State, no_update

from tandem_analyzer.ui.callbacks.callbacks_analysis import start_analysis_run
from tandem_analyzer.ui.helpers import (
    notice_from_validation,
    selected_count_label,
    storage_badge_text,
    summary_text,
    uploaded_files,
)
from tandem_analyzer.ui.ids import IDs, Tab
from tandem_analyzer.ui.layout.build_datasets_panel import build_datasets_table, build_empty_datasets_message
from tandem_analyzer.validation.errors import ValidationError

if TYPE_CHECKING:
    from tandem_analyzer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def _triggered_pattern_value() -> tuple[Optional[str], Any]:
    """
    For a pattern-matching ALL input, return (index, value) of the component
    that fired, or (None, None) if the trigger was not a pattern id.
    """
    triggered = dash.ctx.triggered_id
    if not triggered or not isinstance(triggered, dict):
        return None, None

    for entry in dash.ctx.inputs_list[0]:
        if entry.get("id") == triggered:
            return triggered.get("index"), entry.get("value")
    return triggered.get("index"), None


def register_datasets_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    store = ctx.dataset_store

    # ---------------------------------------------------------
    # Render dataset list + summary whenever the store changes
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.DS_LIST, "children"),
        Output(IDs.Control.DS_SUMMARY_TEXT, "children"),
        Output(IDs.Control.DS_SELECT_ALL_BTN, "children"),
        Output(IDs.Control.DS_ANALYZE_BTN, "children"),
        Output(IDs.Control.NAVBAR_STORAGE_BADGE, "children"),
        Input(IDs.Store.DATASETS_REVISION, "data"),
    )
    def render_datasets(_revision):
        records = store.records
        badge = storage_badge_text(store.storage_type.value)
        select_label = "Deselect all" if store.all_selected() else "Select all"

        if not records:
            return build_empty_datasets_message(), summary_text(0, 0, 0), select_label, "Analyze selected", badge

        summary = summary_text(len(records), len(store.selected()), store.total_record_count())
        return build_datasets_table(records), summary, select_label, selected_count_label(records), badge

    # ---------------------------------------------------------
    # Upload -> add records (+ optional auto-analysis)
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATASETS_REVISION, "data", allow_duplicate=True),
        Output(IDs.Control.DS_UPLOAD_STATUS, "children"),
        Output(IDs.Store.ANALYSIS_RUN, "data", allow_duplicate=True),
        Output(IDs.Control.PAGE_TABS, "value", allow_duplicate=True),
        Output(IDs.Store.NOTICE, "data", allow_duplicate=True),
        Input(IDs.Control.DS_UPLOAD, "contents"),
        State(IDs.Control.DS_UPLOAD, "filename"),
        prevent_initial_call=True,
    )
    def upload_datasets(contents, filenames):
        if not contents:
            raise dash.exceptions.PreventUpdate

        try:
            added = store.add_many(uploaded_files(contents, filenames))
        except ValidationError as e:
            logger.warning("Rejected upload: %s", e)
            return no_update, "Upload failed.", no_update, no_update, notice_from_validation(e)
        except ValueError as e:
            logger.warning("Could not read upload: %s", e)
            return no_update, f"Upload failed: {e}", no_update, no_update, no_update

        status = f"Added {len(added)} file{'s' if len(added) != 1 else ''}."

        if not (ctx.settings_store.settings.auto_analysis and len(store) > 0):
            return store.revision, status, no_update, no_update, no_update

        try:
            run = start_analysis_run(ctx)
        except ValidationError as e:
            return store.revision, status, no_update, no_update, notice_from_validation(e)
        return store.revision, status, run, Tab.ANALYSIS, no_update

    # ---------------------------------------------------------
    # Per-row checkbox
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATASETS_REVISION, "data", allow_duplicate=True),
        Input({"type": IDs.Pattern.DATASET_CHECKBOX, "index": ALL}, "value"),
        prevent_initial_call=True,
    )
    def toggle_dataset(_values):
        dataset_id, value = _triggered_pattern_value()
        if not dataset_id or value is None:
            raise dash.exceptions.PreventUpdate

        record = store.get(dataset_id)
        # Re-rendered checkboxes fire with the value they already show
        if record is None or record.selected == bool(value):
            raise dash.exceptions.PreventUpdate

        store.set_selected(dataset_id, bool(value))
        return store.revision

    # ---------------------------------------------------------
    # Select all / deselect all
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATASETS_REVISION, "data", allow_duplicate=True),
        Input(IDs.Control.DS_SELECT_ALL_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def select_all(n_clicks):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        store.toggle_all_selected()
        return store.revision

    # ---------------------------------------------------------
    # Delete: ask first, then remove
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.PENDING_DELETE, "data"),
        Output(IDs.Control.DS_DELETE_CONFIRM, "displayed"),
        Output(IDs.Control.DS_DELETE_CONFIRM, "message"),
        Input({"type": IDs.Pattern.DATASET_DELETE, "index": ALL}, "n_clicks"),
        prevent_initial_call=True,
    )
    def request_delete(_n_clicks_list):
        dataset_id, n_clicks = _triggered_pattern_value()
        if not dataset_id or not n_clicks:
            raise dash.exceptions.PreventUpdate

        record = store.get(dataset_id)
        if record is None:
            raise dash.exceptions.PreventUpdate

        return dataset_id, True, f"Are you sure you want to delete “{record.name}”?"

    @app.callback(
        Output(IDs.Store.DATASETS_REVISION, "data", allow_duplicate=True),
        Output(IDs.Store.PENDING_DELETE, "data", allow_duplicate=True),
        Input(IDs.Control.DS_DELETE_CONFIRM, "submit_n_clicks"),
        State(IDs.Store.PENDING_DELETE, "data"),
        prevent_initial_call=True,
    )
    def confirm_delete(submit_n_clicks, dataset_id):
        if not submit_n_clicks or not dataset_id:
            raise dash.exceptions.PreventUpdate

        store.remove(dataset_id)
        return store.revision, None

    # ---------------------------------------------------------
    # Analyze selected
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.ANALYSIS_RUN, "data", allow_duplicate=True),
        Output(IDs.Control.PAGE_TABS, "value", allow_duplicate=True),
        Output(IDs.Store.NOTICE, "data", allow_duplicate=True),
        Input(IDs.Control.DS_ANALYZE_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def analyze_selected(n_clicks):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate

        try:
            run = start_analysis_run(ctx)
        except ValidationError as e:
            return no_update, no_update, notice_from_validation(e)

        logger.info("Analysis requested", extra={"n_datasets": len(run["records"])})
        return run, Tab.ANALYSIS, no_update
