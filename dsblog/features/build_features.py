"""
Column pruning and nullity summaries for the missing-data walkthrough.

Before looking at nullity patterns it pays to remove columns that carry no
information at all: columns that are entirely empty, duplicated rows and
columns, and numeric columns with (near) zero variance. What is left is what
the missingno plots in `dsblog.features.plots` are drawn from.
"""

import logging
from typing import List

import numpy as np
import pandas as pd
from sklearn.feature_selection import VarianceThreshold

log = logging.getLogger(__name__)


def drop_empty_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Drop columns where every value is missing."""
    empty = df.columns[df.isna().all()].tolist()
    if empty:
        log.info("Dropping empty columns: %s", empty)
    return df.drop(columns=empty)


def drop_duplicate_rows(df: pd.DataFrame) -> pd.DataFrame:
    out = df.drop_duplicates()
    if len(out) < len(df):
        log.info("Dropping %d duplicated rows", len(df) - len(out))
    return out


def drop_duplicate_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Drop columns whose values repeat an earlier column, keeping the first."""
    if df.empty:
        return df
    dupes = df.columns[df.T.duplicated()].tolist()
    if dupes:
        log.info("Dropping duplicated columns: %s", dupes)
    return df.drop(columns=dupes)


def low_variance_columns(df: pd.DataFrame, threshold: float = 0.0) -> List[str]:
    """
    Numeric columns whose variance does not exceed `threshold`.

    Uses scikit-learn's VarianceThreshold, which ignores NaN when computing
    the variances.
    """
    numeric = df.select_dtypes(include="number").columns.tolist()
    if not numeric:
        return []
    selector = VarianceThreshold(threshold=threshold)
    try:
        selector.fit(df[numeric].to_numpy(dtype=float))
    except ValueError:
        # raised when no column passes the threshold
        return numeric
    keep = selector.get_support()
    return [c for c, k in zip(numeric, keep) if not k]


def drop_low_variance_columns(df: pd.DataFrame, threshold: float = 0.0) -> pd.DataFrame:
    """Drop numeric columns with variance at or below `threshold`; others are kept."""
    low = low_variance_columns(df, threshold=threshold)
    if low:
        log.info("Dropping low-variance columns: %s", low)
    return df.drop(columns=low)


def prune_columns(df: pd.DataFrame, threshold: float = 0.0) -> pd.DataFrame:
    """
    Apply the whole pruning recipe, in order:

    1. columns that are entirely missing
    2. duplicated rows
    3. duplicated columns
    4. numeric columns with variance <= threshold
    """
    df = drop_empty_columns(df)
    df = drop_duplicate_rows(df)
    df = drop_duplicate_columns(df)
    df = drop_low_variance_columns(df, threshold=threshold)
    return df


def nullity_summary(df: pd.DataFrame) -> pd.DataFrame:
    """
    Count and percentage of missing values per column, most-missing first.
    """
    n_missing = df.isna().sum()
    pct = (n_missing / len(df) * 100) if len(df) else n_missing.astype(float)
    summary = pd.DataFrame({"n_missing": n_missing.astype(int), "pct_missing": pct.astype(float).round(2)})
    summary.index.name = "column"
    return summary.sort_values("n_missing", ascending=False, kind="stable")


def nullity_correlation(df: pd.DataFrame) -> pd.DataFrame:
    """
    Pearson correlation of the missingness indicators.

    Only columns that are partially missing take part, the same selection
    `missingno.heatmap` makes: fully populated or fully empty columns have no
    nullity variance to correlate.
    """
    nulls = df.isna()
    partial = nulls.columns[(nulls.any()) & (~nulls.all())]
    return nulls[partial].astype(np.float64).corr()
