from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from tandem_analyzer.config.model import GlobalConfig
from tandem_analyzer.ui.helpers import storage_badge_text
from tandem_analyzer.ui.ids import IDs


def build_navbar(global_config: GlobalConfig, storage_type_value: str) -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            fluid=True,
            children=[
                # Left: icon + title
                html.Div(
                    className="d-flex align-items-center",
                    children=[
                        html.Span("💉", className="tpa-logo me-3"),
                        html.Div(
                            [
                                html.H2(global_config.ui_title, className="mb-0"),
                                html.Small(
                                    global_config.subtitle,
                                    className="text-muted",
                                    id="navbar-subtitle",
                                ),
                            ],
                            className="d-flex flex-column justify-content-center",
                        ),
                    ],
                ),

                # Right: which backend the dataset list comes from
                html.Div(
                    dbc.Badge(
                        storage_badge_text(storage_type_value),
                        id=IDs.Control.NAVBAR_STORAGE_BADGE,
                        color="secondary",
                        pill=True,
                    ),
                    className="ms-auto",
                ),
            ],
        ),
        dark=False,
        className="shadow-sm tpa-navbar",
    )
