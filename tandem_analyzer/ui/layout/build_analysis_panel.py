from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from tandem_analyzer.analysis.pipeline import StageProgress
from tandem_analyzer.ui.ids import IDs, stage_progress_id, stage_status_id

HIDDEN = {"display": "none"}
VISIBLE = {"display": "block"}


def _stat_card(label: str, value_id: str) -> dbc.Col:
    return dbc.Col(
        dbc.Card(
            dbc.CardBody(
                [
                    html.Div(label, className="text-muted small"),
                    html.Div("-", id=value_id, className="tpa-stat-value fw-semibold"),
                ]
            ),
            className="h-100 shadow-sm",
        ),
        md=2,
        sm=4,
        className="mt-2",
    )


def build_progress_rows(progress: List[StageProgress]) -> List[html.Div]:
    return [
        html.Div(
            [
                html.Div(
                    [
                        html.Span(p.stage.label, className="fw-semibold small"),
                        html.Span(p.status, id=stage_status_id(p.stage.key), className="ms-auto small text-muted"),
                    ],
                    className="d-flex",
                ),
                dbc.Progress(id=stage_progress_id(p.stage.key), value=p.percent, className="mt-1"),
            ],
            className="mb-3",
        )
        for p in progress
    ]


def build_analysis_panel(idle_progress: List[StageProgress], progress_interval_ms: int) -> dbc.Container:
    """
    Analysis page:
    - three progress bars (one per pipeline stage), driven by an interval
    - results section, hidden until a result is available
    """
    progress_card = dbc.Card(
        [
            dbc.CardHeader("Analysis progress"),
            dbc.CardBody(
                [
                    dcc.Interval(
                        id=IDs.Control.ANALYSIS_INTERVAL,
                        interval=progress_interval_ms,
                        disabled=True,
                    ),
                    *build_progress_rows(idle_progress),
                    html.Div(
                        "Select datasets on the Datasets page and click “Analyze selected”.",
                        id=IDs.Control.ANALYSIS_PLACEHOLDER,
                        className="text-muted small",
                    ),
                ]
            ),
        ],
        className="shadow-sm",
    )

    stats_row = dbc.Row(
        [
            _stat_card("Date range", IDs.Control.STAT_DATE_RANGE),
            _stat_card("Average glucose", IDs.Control.STAT_AVG_GLUCOSE),
            _stat_card("Time in range", IDs.Control.STAT_TIME_IN_RANGE),
            _stat_card("Total insulin", IDs.Control.STAT_TOTAL_INSULIN),
            _stat_card("Daily insulin", IDs.Control.STAT_DAILY_INSULIN),
            _stat_card("Total records", IDs.Control.STAT_TOTAL_RECORDS),
        ],
        className="gx-3",
    )

    results_section = html.Div(
        [
            html.H5("Summary statistics", className="mt-3"),
            stats_row,
            dbc.Card(
                dbc.CardBody(dcc.Graph(id=IDs.Control.TIR_GRAPH, config={"displayModeBar": False})),
                className="mt-3 shadow-sm",
            ),
            dbc.Row(
                [
                    dbc.Col(
                        dbc.Card(
                            [
                                dbc.CardHeader("AI insights"),
                                dbc.CardBody(html.Div(id=IDs.Control.INSIGHTS_LIST)),
                            ],
                            className="h-100 shadow-sm",
                        ),
                        md=6,
                        className="mt-3",
                    ),
                    dbc.Col(
                        dbc.Card(
                            [
                                dbc.CardHeader("Recommendations"),
                                dbc.CardBody(html.Div(id=IDs.Control.RECOMMENDATIONS_LIST)),
                            ],
                            className="h-100 shadow-sm",
                        ),
                        md=6,
                        className="mt-3",
                    ),
                ],
                className="gx-3",
            ),
            html.Div(
                [
                    dbc.Button("Export results (JSON)", id=IDs.Control.EXPORT_BTN, color="primary", size="sm"),
                    dcc.Download(id=IDs.Control.DOWNLOAD_RESULT),
                ],
                className="mt-3 d-flex justify-content-end",
            ),
        ],
        id=IDs.Control.RESULTS_SECTION,
        style=HIDDEN,
    )

    return dbc.Container(
        fluid=True,
        children=[
            dbc.Row(dbc.Col(progress_card, md=12, className="mt-3")),
            results_section,
        ],
        className="tpa-analysis-view",
    )


def build_item_list(items: List[str], icon: str, class_name: str) -> List[html.Div]:
    return [html.Div(f"{icon} {item}", className=f"{class_name} mb-2") for item in items]
