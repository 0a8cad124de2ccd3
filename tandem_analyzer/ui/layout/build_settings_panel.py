from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import dcc, html

from tandem_analyzer.core.settings import Settings, StorageType
from tandem_analyzer.ui.ids import IDs


def token_placeholder(has_token: bool) -> str:
    return "Token saved" if has_token else "Enter your API token"


def build_settings_panel(settings: Settings) -> dbc.Container:
    """
    Settings page. Initial control values come from the Settings record at
    page-load time; every change is written through by callbacks.
    """
    api_card = dbc.Card(
        [
            dbc.CardHeader("API access"),
            dbc.CardBody(
                [
                    html.Label("API token", className="form-label"),
                    dbc.InputGroup(
                        [
                            dbc.Input(
                                id=IDs.Control.API_TOKEN_INPUT,
                                type="password",
                                placeholder=token_placeholder(bool(settings.api_token)),
                                value="",
                            ),
                            dbc.Button("Save", id=IDs.Control.SAVE_TOKEN_BTN, color="primary"),
                        ],
                        size="sm",
                    ),
                    html.Div(
                        "The token is stored as-is and not sent anywhere in this demo.",
                        className="small text-muted mt-2",
                    ),
                ]
            ),
        ],
        className="h-100 shadow-sm",
    )

    storage_card = dbc.Card(
        [
            dbc.CardHeader("Data storage"),
            dbc.CardBody(
                [
                    dbc.RadioItems(
                        id=IDs.Control.STORAGE_TYPE_RADIO,
                        options=[
                            {"label": "Persistent (kept across restarts)", "value": StorageType.PERSISTENT.value},
                            {"label": "Session only (cleared on restart)", "value": StorageType.SESSION.value},
                        ],
                        value=settings.storage_type.value,
                    ),
                    html.Div(
                        "Each option keeps its own dataset list; switching does not copy datasets.",
                        className="small text-muted mt-2",
                    ),
                    html.Hr(),
                    dbc.Button("Clear all data", id=IDs.Control.CLEAR_DATA_BTN, color="danger", outline=True, size="sm"),
                    dcc.ConfirmDialog(
                        id=IDs.Control.CLEAR_DATA_CONFIRM,
                        message="Are you sure you want to clear all data? This action cannot be undone.",
                    ),
                ]
            ),
        ],
        className="h-100 shadow-sm",
    )

    prefs_card = dbc.Card(
        [
            dbc.CardHeader("Preferences"),
            dbc.CardBody(
                [
                    dbc.Switch(
                        id=IDs.Control.NOTIFICATIONS_SWITCH,
                        label="Enable notifications",
                        value=settings.enable_notifications,
                    ),
                    dbc.Switch(
                        id=IDs.Control.AUTO_ANALYSIS_SWITCH,
                        label="Analyze automatically after upload",
                        value=settings.auto_analysis,
                    ),
                    html.Div(id=IDs.Control.SETTINGS_STATUS, className="small text-muted mt-2"),
                ]
            ),
        ],
        className="h-100 shadow-sm",
    )

    return dbc.Container(
        fluid=True,
        children=[
            dbc.Row(
                [
                    dbc.Col(api_card, md=4, className="mt-3"),
                    dbc.Col(storage_card, md=4, className="mt-3"),
                    dbc.Col(prefs_card, md=4, className="mt-3"),
                ],
                className="gx-3",
            ),
        ],
        className="tpa-settings-view",
    )
