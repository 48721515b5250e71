"""Tests for the missing-data cleaning recipe and nullity plots."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest

from dsblog.features.build_features import (
    drop_duplicate_columns,
    drop_duplicate_rows,
    drop_empty_columns,
    drop_low_variance_columns,
    low_variance_columns,
    nullity_correlation,
    nullity_summary,
    prune_columns,
)
from dsblog.features.plots import PLOTTERS, main, plot_nullity, save_nullity_report


@pytest.fixture
def small() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "a": [1.0, 2.0, np.nan, 4.0],
            "empty": [np.nan] * 4,
            "const": [7, 7, 7, 7],
            "tiny": [1.0, 1.0, 1.0, 1.01],
            "copy_of_a": [1.0, 2.0, np.nan, 4.0],
            "label": ["x", "y", "x", "x"],
        }
    )


class TestPruning:
    def test_drop_empty_columns(self, small: pd.DataFrame) -> None:
        assert "empty" not in drop_empty_columns(small).columns

    def test_drop_duplicate_rows(self) -> None:
        df = pd.DataFrame({"a": [1, 1, 2], "b": ["x", "x", "y"]})
        assert len(drop_duplicate_rows(df)) == 2

    def test_drop_duplicate_columns_keeps_first(self, small: pd.DataFrame) -> None:
        out = drop_duplicate_columns(small)
        assert "a" in out.columns
        assert "copy_of_a" not in out.columns

    def test_low_variance_default_threshold(self, small: pd.DataFrame) -> None:
        low = low_variance_columns(small.drop(columns=["empty"]))
        assert low == ["const"]

    def test_low_variance_custom_threshold(self, small: pd.DataFrame) -> None:
        out = drop_low_variance_columns(small.drop(columns=["empty"]), threshold=0.01)
        assert "tiny" not in out.columns
        assert "const" not in out.columns
        assert "a" in out.columns
        # non-numeric columns are never dropped by variance
        assert "label" in out.columns

    def test_all_numeric_columns_low_variance(self) -> None:
        df = pd.DataFrame({"c": [1, 1, 1], "label": ["a", "b", "c"]})
        assert list(drop_low_variance_columns(df).columns) == ["label"]

    def test_no_numeric_columns(self) -> None:
        df = pd.DataFrame({"label": ["a", "b"]})
        assert low_variance_columns(df) == []

    def test_prune_toy_listings(self, listings: pd.DataFrame) -> None:
        out = prune_columns(listings)
        assert len(out) == 200
        assert "license" not in out.columns
        assert "scrape_id" not in out.columns
        assert {"price", "bedrooms", "review_scores_rating", "room_type"} <= set(out.columns)


class TestNullity:
    def test_summary(self, listings: pd.DataFrame) -> None:
        summary = nullity_summary(listings)
        assert summary.index[0] == "license"
        assert summary.loc["license", "pct_missing"] == 100.0
        assert summary.loc["price", "n_missing"] == 0
        assert summary["n_missing"].is_monotonic_decreasing

    def test_summary_empty_frame(self) -> None:
        summary = nullity_summary(pd.DataFrame({"a": []}))
        assert summary.loc["a", "n_missing"] == 0

    def test_correlation_of_reviews(self, pruned_listings: pd.DataFrame) -> None:
        corr = nullity_correlation(pruned_listings)
        assert corr.loc["review_scores_rating", "reviews_per_month"] == pytest.approx(1.0)
        assert corr.loc["bedrooms", "beds"] == pytest.approx(1.0)
        assert "price" not in corr.columns


class TestPlots:
    @pytest.mark.parametrize("kind", list(PLOTTERS))
    def test_plot_nullity(self, kind: str, pruned_listings: pd.DataFrame, tmp_path: Path) -> None:
        path = tmp_path / f"{kind}.png"
        fig = plot_nullity(pruned_listings, kind, save_path=path)
        assert isinstance(fig, plt.Figure)
        assert path.exists()
        plt.close(fig)

    def test_unknown_kind(self, pruned_listings: pd.DataFrame) -> None:
        with pytest.raises(ValueError, match="Unknown nullity plot"):
            plot_nullity(pruned_listings, "pie")

    def test_save_report(self, pruned_listings: pd.DataFrame, tmp_path: Path) -> None:
        paths = save_nullity_report(pruned_listings, tmp_path / "figs")
        assert set(paths) == set(PLOTTERS)
        assert all(p.exists() for p in paths.values())

    def test_main_writes_toy_report(self, tmp_path: Path) -> None:
        paths = main(str(tmp_path))
        assert sorted(p.name for p in paths.values()) == sorted(f"nullity_{kind}.png" for kind in PLOTTERS)
        assert all(p.parent == tmp_path and p.exists() for p in paths.values())
