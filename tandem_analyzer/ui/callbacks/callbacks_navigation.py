from __future__ import annotations

from typing import TYPE_CHECKING

import dash
from dash import Input, Output, State

from tandem_analyzer.ui.ids import IDs, Tab

if TYPE_CHECKING:
    from tandem_analyzer.ui.config import AppConfig


def register_navigation_callbacks(app: dash.Dash, ctx: AppConfig) -> None:

    @app.callback(
        Output(IDs.Control.PAGE_TABS, "value", allow_duplicate=True),
        Input(IDs.Control.GET_STARTED_BTN, "n_clicks"),
        prevent_initial_call=True,
    )
    def get_started(n_clicks):
        if not n_clicks:
            raise dash.exceptions.PreventUpdate
        return Tab.DATASETS

    # Blocking notification: opens on any new notice, closes on OK
    @app.callback(
        Output(IDs.Control.NOTICE_MODAL, "is_open"),
        Output(IDs.Control.NOTICE_BODY, "children"),
        Output(IDs.Control.NOTICE_BODY, "className"),
        Input(IDs.Store.NOTICE, "data"),
        Input(IDs.Control.NOTICE_CLOSE_BTN, "n_clicks"),
        State(IDs.Control.NOTICE_BODY, "children"),
        prevent_initial_call=True,
    )
    def toggle_notice(data, _close_clicks, current_body):
        if dash.ctx.triggered_id == IDs.Control.NOTICE_CLOSE_BTN:
            return False, current_body, dash.no_update

        if not data or not data.get("message"):
            raise dash.exceptions.PreventUpdate

        level = data.get("level", "info")
        return True, data["message"], f"text-{level}"
