from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State, no_update

from tandem_analyzer.ui.helpers import notice, notice_from_validation
from tandem_analyzer.ui.ids import IDs
from tandem_analyzer.ui.layout.build_settings_panel import token_placeholder
from tandem_analyzer.validation.errors import ValidationError

if TYPE_CHECKING:
    from tandem_analyzer.ui.config import AppConfig

logger = logging.getLogger(__name__)


def register_settings_callbacks(app: dash.Dash, ctx: AppConfig) -> None:
    settings_store = ctx.settings_store
    dataset_store = ctx.dataset_store

    # ---------------------------------------------------------
    # API token
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.NOTICE, "data", allow_duplicate=True),
        Output(IDs.Control.API_TOKEN_INPUT, "value"),
        Output(IDs.Control.API_TOKEN_INPUT, "placeholder"),
        Input(IDs.Control.SAVE_TOKEN_BTN, "n_clicks"),
        State(IDs.Control.API_TOKEN_INPUT, "value"),
        prevent_initial_call=True,
    )
    def save_token(n_clicks, token):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate

        try:
            settings_store.save_api_token(token)
        except ValidationError as e:
            return notice_from_validation(e), no_update, no_update

        logger.info("API token saved")
        return notice("API token saved successfully!", level="success"), "", token_placeholder(True)

    # ---------------------------------------------------------
    # Storage type: switch backend, then reload from it
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Store.DATASETS_REVISION, "data", allow_duplicate=True),
        Output(IDs.Control.SETTINGS_STATUS, "children", allow_duplicate=True),
        Input(IDs.Control.STORAGE_TYPE_RADIO, "value"),
        prevent_initial_call=True,
    )
    def change_storage_type(value):
        if not value or value == settings_store.storage_type.value:
            raise dash.exceptions.PreventUpdate

        try:
            settings_store.set_storage_type(value)
        except ValidationError as e:
            return no_update, e.user_message

        loaded = dataset_store.load()
        logger.info(
            "Storage type changed",
            extra={"storage_type": value, "n_datasets": len(dataset_store), "loaded": loaded},
        )
        if not loaded:
            return dataset_store.revision, "Storage preference saved. Stored datasets could not be read; starting empty."
        return dataset_store.revision, "Storage preference saved."

    # ---------------------------------------------------------
    # Preference switches
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.SETTINGS_STATUS, "children", allow_duplicate=True),
        Input(IDs.Control.NOTIFICATIONS_SWITCH, "value"),
        Input(IDs.Control.AUTO_ANALYSIS_SWITCH, "value"),
        prevent_initial_call=True,
    )
    def change_preferences(enable_notifications, auto_analysis):
        current = settings_store.settings
        if (
            bool(enable_notifications) == current.enable_notifications
            and bool(auto_analysis) == current.auto_analysis
        ):
            raise dash.exceptions.PreventUpdate

        settings_store.update(
            enable_notifications=bool(enable_notifications),
            auto_analysis=bool(auto_analysis),
        )
        return "Preferences saved."

    # ---------------------------------------------------------
    # Clear all data: ask first
    # ---------------------------------------------------------
    @app.callback(
        Output(IDs.Control.CLEAR_DATA_CONFIRM, "displayed"),
        Input(IDs.Control.CLEAR_DATA_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def request_clear(n_clicks):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        return True

    @app.callback(
        Output(IDs.Store.DATASETS_REVISION, "data", allow_duplicate=True),
        Output(IDs.Store.ANALYSIS_RESULT, "data", allow_duplicate=True),
        Output(IDs.Store.NOTICE, "data", allow_duplicate=True),
        Input(IDs.Control.CLEAR_DATA_CONFIRM, "submit_n_clicks"),
        prevent_initial_call=True,
    )
    def confirm_clear(submit_n_clicks):
        if not submit_n_clicks:
            raise dash.exceptions.PreventUpdate

        dataset_store.clear()
        return dataset_store.revision, None, notice("All data has been cleared.", level="info")
