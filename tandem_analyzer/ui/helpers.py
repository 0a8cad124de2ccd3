from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, List, Optional, Sequence, Tuple

import plotly.graph_objs as go

from tandem_analyzer.analysis.model import SummaryStats
from tandem_analyzer.validation.errors import ValidationError

TIR_COLOURS = {
    "Below range": "#e74c3c",
    "In range": "#18bc9c",
    "Above range": "#f39c12",
}


def decode_upload_size(contents: str) -> int:
    """
    Size in bytes of a dcc.Upload data URL ("data:<mime>;base64,<payload>").

    Raises:
        ValueError: if contents is not a base64 data URL
    """
    try:
        _header, b64data = contents.split(",", 1)
        return len(base64.b64decode(b64data, validate=True))
    except (ValueError, binascii.Error) as e:
        raise ValueError(f"Could not decode uploaded file: {e}") from e


def uploaded_files(contents: Any, filenames: Any) -> List[Tuple[str, int]]:
    """
    Normalise dcc.Upload(multiple=True) output into (name, size) pairs.
    Dash hands over a single string instead of a list when multiple=False.
    """
    if contents is None:
        return []
    if not isinstance(contents, list):
        contents = [contents]
    if not isinstance(filenames, list):
        filenames = [filenames]

    return [
        (name or "", decode_upload_size(data))
        for data, name in zip(contents, filenames)
    ]


def parse_percent(text: str) -> float:
    """'68%' -> 68.0"""
    return float(str(text).strip().rstrip("%"))


def build_tir_figure(stats: SummaryStats) -> go.Figure:
    """
    Single stacked horizontal bar: below / in / above range.
    """
    parts = [
        ("Below range", parse_percent(stats.time_below_range)),
        ("In range", parse_percent(stats.time_in_range)),
        ("Above range", parse_percent(stats.time_above_range)),
    ]

    fig = go.Figure()
    for label, value in parts:
        fig.add_trace(
            go.Bar(
                x=[value],
                y=["Time in range"],
                orientation="h",
                name=label,
                marker_color=TIR_COLOURS[label],
                text=[f"{value:g}%"],
                textposition="inside",
                hovertemplate=f"{label}: %{{x}}%<extra></extra>",
            )
        )

    fig.update_layout(
        barmode="stack",
        height=160,
        margin={"l": 10, "r": 10, "t": 10, "b": 10},
        xaxis={"range": [0, 100], "ticksuffix": "%"},
        yaxis={"visible": False},
        legend={"orientation": "h", "y": -0.4},
        plot_bgcolor="white",
    )
    return fig


def empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        title=message,
        xaxis={"visible": False},
        yaxis={"visible": False},
    )
    return fig


def notice(message: str, level: str = "info") -> Dict[str, str]:
    """Payload for the blocking notification store."""
    return {"message": message, "level": level}


def notice_from_validation(error: ValidationError) -> Dict[str, str]:
    return notice(error.user_message, level="warning")


def storage_badge_text(storage_type_value: Optional[str]) -> str:
    return "Session storage" if storage_type_value == "session" else "Persistent storage"


def summary_text(n_datasets: int, n_selected: int, total_records: int) -> str:
    if n_datasets == 0:
        return "No datasets uploaded yet."
    return (
        f"{n_datasets} dataset{'s' if n_datasets != 1 else ''} · "
        f"{n_selected} selected · {total_records:,} records"
    )


def selected_count_label(records: Sequence[Any]) -> str:
    n = sum(1 for r in records if getattr(r, "selected", False))
    return f"Analyze selected ({n})" if n else "Analyze selected"
