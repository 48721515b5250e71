"""
Preprocessing pipeline for the listings price model.

Every preprocessing step that learns from the data (imputation medians,
scaling statistics, one-hot categories) lives inside a single scikit-learn
Pipeline, so cross-validation and grid search refit it on each training fold
and nothing leaks from the validation folds.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.compose import ColumnTransformer, TransformedTargetRegressor
from sklearn.impute import SimpleImputer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler
from xgboost import XGBRegressor

from dsblog.config import RANDOM_SEED
from dsblog.exceptions import MissingColumnError

ID_COLUMNS = ("id", "scrape_id", "license")


def split_features(df: pd.DataFrame, target: str = "price") -> Tuple[List[str], List[str]]:
    """
    Infer numeric and categorical feature columns.

    The target and identifier columns are excluded. Boolean columns count as
    categorical.
    """
    if target not in df.columns:
        raise MissingColumnError(target, df.columns)
    features = [c for c in df.columns if c != target and c not in ID_COLUMNS]
    numeric = [
        c for c in features
        if pd.api.types.is_numeric_dtype(df[c]) and not pd.api.types.is_bool_dtype(df[c])
    ]
    categorical = [c for c in features if c not in numeric]
    return numeric, categorical


def build_preprocessor(numeric_cols: List[str], categorical_cols: List[str]) -> ColumnTransformer:
    """
    Create the ColumnTransformer: median-impute + scale numeric columns,
    mode-impute + one-hot encode categorical columns.
    """
    numeric_transformer = Pipeline(
        steps=[
            ("imputer", SimpleImputer(strategy="median")),
            ("scaler", StandardScaler()),
        ]
    )
    categorical_transformer = Pipeline(
        steps=[
            ("imputer", SimpleImputer(strategy="most_frequent")),
            ("onehot", OneHotEncoder(handle_unknown="ignore", sparse_output=False)),
        ]
    )
    return ColumnTransformer(
        transformers=[
            ("num", numeric_transformer, numeric_cols),
            ("cat", categorical_transformer, categorical_cols),
        ],
        remainder="drop",
    )


def make_regressor(random_state: int = RANDOM_SEED, **params) -> XGBRegressor:
    defaults = dict(
        n_estimators=300,
        learning_rate=0.05,
        max_depth=4,
        subsample=0.8,
        colsample_bytree=0.8,
        tree_method="hist",
        random_state=random_state,
        n_jobs=1,
        verbosity=0,
    )
    defaults.update(params)
    return XGBRegressor(**defaults)


def build_pipeline(
    numeric_cols: List[str],
    categorical_cols: List[str],
    regressor=None,
    log_target: bool = True,
):
    """
    Preprocessor + regressor, optionally trained on log1p(target).

    With `log_target` the pipeline is wrapped in a TransformedTargetRegressor,
    so grid-search parameters take the `regressor__model__` prefix instead of
    `model__`.
    """
    pipe = Pipeline(
        steps=[
            ("preprocessor", build_preprocessor(numeric_cols, categorical_cols)),
            ("model", regressor if regressor is not None else make_regressor()),
        ]
    )
    if not log_target:
        return pipe
    return TransformedTargetRegressor(regressor=pipe, func=np.log1p, inverse_func=np.expm1)


def param_prefix(log_target: bool) -> str:
    return "regressor__model__" if log_target else "model__"


def prefixed_grid(param_grid: Optional[dict], log_target: bool) -> dict:
    """Prefix bare estimator parameter names (e.g. `max_depth`) for the pipeline."""
    prefix = param_prefix(log_target)
    grid = param_grid if param_grid is not None else {"max_depth": [3, 5], "n_estimators": [200, 400]}
    return {k if "__" in k else prefix + k: v for k, v in grid.items()}
