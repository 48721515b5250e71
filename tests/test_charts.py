"""Tests for the plotly button figures."""

from pathlib import Path

import pandas as pd
import plotly.graph_objects as go
import pytest

from dsblog.charts.buttons import (
    chart_type_buttons,
    dataset_buttons,
    dataset_switch_figure,
    flavour_figure,
    monthly_sales,
    sales_by_year,
    save_figure,
    visibility_buttons,
)


def test_monthly_sales_totals(sales: pd.DataFrame) -> None:
    monthly = monthly_sales(sales)
    assert len(monthly) == 36
    jan_2021 = sales[(sales["year"] == 2021) & (sales["month"] == 1)]["sales"].sum()
    assert monthly.iloc[0]["sales"] == jan_2021
    assert monthly.iloc[0]["month_name"] == "Jan"


def test_sales_by_year_for_one_flavour(sales: pd.DataFrame) -> None:
    datasets = sales_by_year(sales, flavour="vanilla")
    assert list(datasets) == ["2021", "2022", "2023"]
    assert all(len(d) == 12 for d in datasets.values())
    expected = sales[(sales["flavour"] == "vanilla") & (sales["year"] == 2022)]["sales"].tolist()
    assert datasets["2022"]["sales"].tolist() == expected


def test_dataset_buttons_swap_data_per_trace() -> None:
    datasets = {
        "a": pd.DataFrame({"x": [1, 2], "y": [3, 4]}),
        "b": pd.DataFrame({"x": [5], "y": [6]}),
    }
    buttons = dataset_buttons(datasets, "x", "y", title="T")
    assert [b["label"] for b in buttons] == ["a", "b"]
    data_args, layout_args = buttons[1]["args"]
    assert data_args == {"x": [[5]], "y": [[6]]}
    assert layout_args == {"title": {"text": "T - b"}}
    assert all(b["method"] == "update" for b in buttons)


def test_chart_type_buttons() -> None:
    buttons = chart_type_buttons()
    assert [b["label"] for b in buttons] == ["Bar", "Line"]
    assert all(b["method"] == "restyle" for b in buttons)
    assert buttons[1]["args"][0]["type"] == "scatter"


def test_dataset_switch_figure(sales: pd.DataFrame) -> None:
    fig = dataset_switch_figure(sales_by_year(sales), "month_name", "sales", title="Ice-cream sales")
    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 1
    assert fig.data[0].type == "bar"
    assert list(fig.data[0].x)[:2] == ["Jan", "Feb"]
    assert fig.layout.title.text == "Ice-cream sales - 2021"
    menus = fig.layout.updatemenus
    assert len(menus) == 2
    assert [b.label for b in menus[0].buttons] == ["2021", "2022", "2023"]
    assert [b.method for b in menus[1].buttons] == ["restyle", "restyle"]


def test_dataset_switch_figure_requires_data() -> None:
    with pytest.raises(ValueError, match="at least one"):
        dataset_switch_figure({}, "x", "y")


def test_visibility_buttons() -> None:
    buttons = visibility_buttons(["a", "b"])
    assert [b["label"] for b in buttons] == ["All", "a", "b"]
    assert buttons[0]["args"][0]["visible"] == [True, True]
    assert buttons[2]["args"][0]["visible"] == [False, True]
    assert buttons[2]["args"][1] == {"title": {"text": "b"}}
    assert buttons[0]["args"][1] == {"title": {"text": "a, b"}}


def test_flavour_figure(sales: pd.DataFrame) -> None:
    fig = flavour_figure(sales)
    assert [t.name for t in fig.data] == ["chocolate", "strawberry", "vanilla"]
    assert fig.layout.title.text == "Ice-cream sales 2023"
    buttons = fig.layout.updatemenus[0].buttons
    assert len(buttons) == 4
    # "All" puts the year title back after a single flavour was shown
    assert buttons[0].args[1] == {"title": {"text": "Ice-cream sales 2023"}}
    assert buttons[1].args[1] == {"title": {"text": "chocolate"}}
    assert len(fig.data[0].y) == 12


def test_save_figure(sales: pd.DataFrame, tmp_path: Path) -> None:
    path = save_figure(flavour_figure(sales, year=2021), tmp_path / "out" / "sales.html")
    assert path.exists()
    html = path.read_text(encoding="utf-8")
    assert "Ice-cream sales 2021" in html
