from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import html

from tandem_analyzer.ui.ids import IDs

FEATURES = [
    ("📁", "Upload exports", "Drop one or more pump export files (.csv, .zip) on the Datasets page."),
    ("☑️", "Pick datasets", "Select the exports you want to look at together."),
    ("📈", "Get insights", "Review glucose statistics, insights and recommendations."),
]


def build_home_panel(ui_title: str) -> dbc.Container:
    """
    Landing page: short intro + call to action.
    """
    feature_cards = [
        dbc.Col(
            dbc.Card(
                dbc.CardBody(
                    [
                        html.Div(icon, className="tpa-feature-icon"),
                        html.H5(title, className="mt-2"),
                        html.P(text, className="text-muted small mb-0"),
                    ]
                ),
                className="h-100 shadow-sm",
            ),
            md=4,
            className="mt-3",
        )
        for icon, title, text in FEATURES
    ]

    return dbc.Container(
        fluid=True,
        children=[
            html.Div(
                [
                    html.H1(ui_title, className="display-6"),
                    html.P(
                        "Analyze your Tandem insulin pump exports. "
                        "This is a demo: results are sample data, nothing is sent anywhere.",
                        className="lead text-muted",
                    ),
                    dbc.Button("Get started", id=IDs.Control.GET_STARTED_BTN, color="primary"),
                ],
                className="mt-4",
            ),
            dbc.Row(feature_cards, className="gx-3"),
        ],
        className="tpa-home-view",
    )
