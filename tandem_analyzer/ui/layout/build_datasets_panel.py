from __future__ import annotations

from typing import List

import dash_bootstrap_components as dbc
from dash import dcc, html

from tandem_analyzer.core.dataset_record import DatasetRecord
from tandem_analyzer.ui.ids import IDs, dataset_checkbox_id, dataset_delete_id

FONT_FAMILY = 'system-ui, -apple-system, BlinkMacSystemFont, "SF Pro Text", "Segoe UI", sans-serif'

HEADER_STYLE = {
    "fontFamily": FONT_FAMILY,
    "fontSize": "12px",
    "fontWeight": "600",
    "backgroundColor": "#f3f4f6",
    "borderBottom": "1px solid #e5e7eb",
    "color": "#111827",
    "padding": "8px 12px",
    "whiteSpace": "nowrap",
}

CELL_STYLE = {
    "fontFamily": FONT_FAMILY,
    "fontSize": "12px",
    "padding": "6px 12px",
    "borderBottom": "1px solid #e5e7eb",
    "color": "#374151",
    "verticalAlign": "middle",
    "whiteSpace": "nowrap",
}


def build_datasets_panel() -> dbc.Container:
    """
    Datasets page:
    - Upload area (drag and drop, multiple files)
    - Dataset list with per-row checkbox + delete (populated via callbacks)
    - Select all / Analyze selected actions
    """
    upload_card = dbc.Card(
        [
            dbc.CardHeader("Upload pump data"),
            dbc.CardBody(
                [
                    dcc.Upload(
                        id=IDs.Control.DS_UPLOAD,
                        children=html.Div(
                            [
                                html.Div("📁", className="tpa-upload-icon"),
                                "Drag and drop or ",
                                html.A("select export files"),
                            ]
                        ),
                        multiple=True,
                        className="tpa-upload border rounded p-4 text-center",
                    ),
                    html.Div(
                        "Tandem t:connect exports (.csv, .zip). Files are not parsed in this demo.",
                        className="small text-muted mt-2",
                    ),
                    html.Div(id=IDs.Control.DS_UPLOAD_STATUS, className="small text-muted mt-2"),
                ]
            ),
        ],
        className="h-100 shadow-sm",
    )

    actions_div = html.Div(
        [
            dbc.Button(
                "Select all",
                id=IDs.Control.DS_SELECT_ALL_BTN,
                color="secondary",
                outline=True,
                size="sm",
                className="me-2",
            ),
            dbc.Button(
                "Analyze selected",
                id=IDs.Control.DS_ANALYZE_BTN,
                color="primary",
                size="sm",
            ),
        ],
        className="d-flex justify-content-end align-items-center",
    )

    list_card = dbc.Card(
        [
            dbc.CardHeader("Your datasets"),
            dbc.CardBody(
                [
                    dbc.Row(
                        [
                            dbc.Col(
                                html.Div(id=IDs.Control.DS_SUMMARY_TEXT, className="text-muted small"),
                                md=6,
                                className="d-flex flex-column justify-content-center",
                            ),
                            dbc.Col(actions_div, md=6),
                        ],
                        className="mb-3",
                    ),
                    html.Hr(),
                    html.Div(
                        id=IDs.Control.DS_LIST,
                        className="tpa-dataset-list mt-2",
                        style={"overflowX": "auto"},
                    ),
                ]
            ),
        ],
        className="h-100 shadow-sm",
    )

    return dbc.Container(
        fluid=True,
        children=[
            dcc.ConfirmDialog(
                id=IDs.Control.DS_DELETE_CONFIRM,
                message="Are you sure you want to delete this dataset?",
            ),
            dbc.Row(
                [
                    dbc.Col(upload_card, md=4, className="mt-3"),
                    dbc.Col(list_card, md=8, className="mt-3"),
                ],
                className="gx-3",
            ),
        ],
        className="tpa-datasets-view",
    )


def build_empty_datasets_message() -> html.Div:
    return html.Div(
        [
            html.Div("No datasets uploaded yet.", className="fw-semibold"),
            html.Div(
                "Upload your Tandem pump data files to get started.",
                className="text-muted small mt-1",
            ),
        ],
        className="mt-2 tpa-empty-state",
    )


def build_datasets_table(records: List[DatasetRecord]) -> dbc.Table:
    """
    One row per dataset: checkbox, name, upload date, record count, size,
    date range, delete button. Row order is the store order.
    """
    thead = html.Thead(
        html.Tr(
            [
                html.Th("", style=HEADER_STYLE),
                html.Th("Name", style=HEADER_STYLE),
                html.Th("Uploaded", style=HEADER_STYLE),
                html.Th("Records", style=HEADER_STYLE),
                html.Th("Size", style=HEADER_STYLE),
                html.Th("Date range", style=HEADER_STYLE),
                html.Th("Actions", style=HEADER_STYLE),
            ]
        )
    )

    rows = []
    for record in records:
        rows.append(
            html.Tr(
                [
                    html.Td(
                        dbc.Checkbox(id=dataset_checkbox_id(record.id), value=record.selected),
                        style=CELL_STYLE,
                    ),
                    html.Td(
                        record.name,
                        style={**CELL_STYLE, "whiteSpace": "normal", "maxWidth": "260px", "fontWeight": "600"},
                    ),
                    html.Td(record.upload_date, style=CELL_STYLE),
                    html.Td(f"{record.record_count:,}", style=CELL_STYLE),
                    html.Td(record.file_size, style=CELL_STYLE),
                    html.Td(record.date_range, style=CELL_STYLE),
                    html.Td(
                        dbc.Button(
                            "🗑️",
                            id=dataset_delete_id(record.id),
                            color="danger",
                            outline=True,
                            size="sm",
                            title="Delete dataset",
                            style={"fontSize": "11px", "padding": "2px 8px", "lineHeight": "1.2"},
                        ),
                        style=CELL_STYLE,
                    ),
                ],
                className="tpa-dataset-row selected" if record.selected else "tpa-dataset-row",
            )
        )

    return dbc.Table(
        [thead, html.Tbody(rows)],
        bordered=False,
        hover=True,
        responsive=True,
        className="mb-0",
        style={"border": "1px solid #e5e7eb", "borderRadius": "4px"},
    )
