from __future__ import annotations

from typing import TYPE_CHECKING

import dash_bootstrap_components as dbc
from dash import dcc, html

from tandem_analyzer.ui.ids import IDs, Tab
from tandem_analyzer.ui.layout.build_analysis_panel import build_analysis_panel
from tandem_analyzer.ui.layout.build_datasets_panel import build_datasets_panel
from tandem_analyzer.ui.layout.build_home_panel import build_home_panel
from tandem_analyzer.ui.layout.build_navbar import build_navbar
from tandem_analyzer.ui.layout.build_settings_panel import build_settings_panel

if TYPE_CHECKING:
    from tandem_analyzer.ui.config import AppConfig


def build_layout(ctx: AppConfig):
    """
    Built on every page load so the controls reflect the current stores.
    """
    settings = ctx.settings_store.settings

    notice_modal = dbc.Modal(
        [
            dbc.ModalHeader(dbc.ModalTitle(ctx.global_config.ui_title)),
            dbc.ModalBody(id=IDs.Control.NOTICE_BODY),
            dbc.ModalFooter(dbc.Button("OK", id=IDs.Control.NOTICE_CLOSE_BTN, color="primary", size="sm")),
        ],
        id=IDs.Control.NOTICE_MODAL,
        is_open=False,
        backdrop="static",
        centered=True,
    )

    return dbc.Container(
        fluid=True,
        className="tpa-root",
        children=[
            build_navbar(ctx.global_config, settings.storage_type.value),
            notice_modal,

            # App-level stores
            dcc.Store(id=IDs.Store.DATASETS_REVISION, data=ctx.dataset_store.revision),
            dcc.Store(id=IDs.Store.PENDING_DELETE),
            dcc.Store(id=IDs.Store.ANALYSIS_RUN),
            dcc.Store(id=IDs.Store.ANALYSIS_RESULT, storage_type="memory"),
            dcc.Store(id=IDs.Store.NOTICE),

            dcc.Tabs(
                id=IDs.Control.PAGE_TABS,
                value=Tab.HOME,
                children=[
                    dcc.Tab(label="Home", value=Tab.HOME, children=[build_home_panel(ctx.global_config.ui_title)]),
                    dcc.Tab(label="Datasets", value=Tab.DATASETS, children=[build_datasets_panel()]),
                    dcc.Tab(
                        label="Analysis",
                        value=Tab.ANALYSIS,
                        children=[
                            build_analysis_panel(
                                ctx.schedule.idle_progress(),
                                ctx.global_config.progress_interval_ms,
                            )
                        ],
                    ),
                    dcc.Tab(label="Settings", value=Tab.SETTINGS, children=[build_settings_panel(settings)]),
                ],
                className="mt-2",
            ),
            html.Footer(
                "Demo only. Not medical advice.",
                className="text-muted small text-center my-4",
            ),
        ],
    )
