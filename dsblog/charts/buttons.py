"""Plotly figures whose data is swapped by update-menu buttons."""

from __future__ import annotations

import calendar
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

import pandas as pd
import plotly.graph_objects as go

MONTH_LABELS = [calendar.month_abbr[m] for m in range(1, 13)]


def monthly_sales(df: pd.DataFrame, flavour: Optional[str] = None) -> pd.DataFrame:
    """Total sales per (year, month), optionally for one flavour."""
    if flavour is not None:
        df = df[df["flavour"] == flavour]
    out = df.groupby(["year", "month"], as_index=False)["sales"].sum()
    out["month_name"] = out["month"].map(lambda m: MONTH_LABELS[m - 1])
    return out


def sales_by_year(df: pd.DataFrame, flavour: Optional[str] = None) -> Dict[str, pd.DataFrame]:
    """One monthly table per year, keyed by the year as a string."""
    monthly = monthly_sales(df, flavour=flavour)
    return {str(year): part.reset_index(drop=True) for year, part in monthly.groupby("year")}


def dataset_buttons(datasets: Mapping[str, pd.DataFrame], x: str, y: str, title: Optional[str] = None) -> List[dict]:
    """
    One `update` button per dataset, replacing the trace data and the title.

    Data args are wrapped in a list because `update` applies them per trace.
    """
    buttons = []
    for name, data in datasets.items():
        label = f"{title} - {name}" if title else name
        buttons.append(
            dict(
                label=name,
                method="update",
                args=[
                    {"x": [data[x].tolist()], "y": [data[y].tolist()]},
                    {"title": {"text": label}},
                ],
            )
        )
    return buttons


def chart_type_buttons() -> List[dict]:
    return [
        dict(label="Bar", method="restyle", args=[{"type": "bar"}]),
        dict(label="Line", method="restyle", args=[{"type": "scatter", "mode": "lines+markers"}]),
    ]


def dataset_switch_figure(
    datasets: Mapping[str, pd.DataFrame],
    x: str,
    y: str,
    title: Optional[str] = None,
) -> go.Figure:
    """
    Bar chart of the first dataset, with buttons to show any of the others
    and to switch between bar and line.
    """
    if not datasets:
        raise ValueError("datasets must contain at least one DataFrame")

    first_name, first = next(iter(datasets.items()))
    fig = go.Figure(go.Bar(x=first[x].tolist(), y=first[y].tolist(), name=y))
    fig.update_layout(
        title={"text": f"{title} - {first_name}" if title else first_name},
        xaxis_title=x,
        yaxis_title=y,
        template="plotly_white",
        updatemenus=[
            dict(
                type="buttons",
                direction="right",
                buttons=dataset_buttons(datasets, x, y, title=title),
                x=0.0,
                xanchor="left",
                y=1.15,
                yanchor="top",
                showactive=True,
                active=0,
            ),
            dict(
                type="dropdown",
                buttons=chart_type_buttons(),
                x=1.0,
                xanchor="right",
                y=1.15,
                yanchor="top",
            ),
        ],
    )
    return fig


def visibility_buttons(names: Sequence[str], title: Optional[str] = None) -> List[dict]:
    """
    "All" plus one button per trace, each toggling trace visibility.

    A trace's button titles the chart with the trace name; "All" restores
    `title` (or the list of names when no title is given).
    """
    all_title = title or ", ".join(names)
    buttons = [
        dict(
            label="All",
            method="update",
            args=[{"visible": [True] * len(names)}, {"title": {"text": all_title}}],
        )
    ]
    for i, name in enumerate(names):
        visible = [j == i for j in range(len(names))]
        buttons.append(
            dict(label=name, method="update", args=[{"visible": visible}, {"title": {"text": name}}])
        )
    return buttons


def flavour_figure(df: pd.DataFrame, year: Optional[int] = None) -> go.Figure:
    """
    One line per flavour over the months of `year` (default: latest year).
    """
    if year is None:
        year = int(df["year"].max())
    data = df[df["year"] == year]
    names = sorted(data["flavour"].unique())

    fig = go.Figure()
    for name in names:
        part = data[data["flavour"] == name].sort_values("month")
        fig.add_trace(
            go.Scatter(
                x=[MONTH_LABELS[m - 1] for m in part["month"]],
                y=part["sales"].tolist(),
                mode="lines+markers",
                name=name,
            )
        )
    title = f"Ice-cream sales {year}"
    fig.update_layout(
        title={"text": title},
        template="plotly_white",
        updatemenus=[dict(type="buttons", direction="down", buttons=visibility_buttons(names, title=title), active=0)],
    )
    return fig


def save_figure(fig: go.Figure, path) -> Path:
    """Write a standalone HTML file (plotly.js from the CDN)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(path, include_plotlyjs="cdn")
    return path
