"""
Cross-validation of the price pipeline and the data-leakage comparison.

Usage (from project root)
-------------------------
# Run k-fold CV and the leakage comparison on the toy listings:
python -m dsblog.models.evaluate

# Or import functions:
from dsblog.models.evaluate import cross_validate_pipeline, leakage_comparison
cross_validate_pipeline(df, n_splits=5)
leakage_comparison(df)
"""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.base import clone
from sklearn.metrics import mean_absolute_error, mean_squared_error
from sklearn.model_selection import KFold, cross_val_score

from dsblog.config import RANDOM_SEED, configure_logging
from dsblog.data.load_data import normalize_missing
from dsblog.exceptions import MissingColumnError
from dsblog.models.pipeline import build_pipeline, build_preprocessor, make_regressor, split_features

log = logging.getLogger(__name__)


def _xy(df: pd.DataFrame, target: str):
    if target not in df.columns:
        raise MissingColumnError(target, df.columns)
    df = normalize_missing(df).dropna(subset=[target])
    numeric, categorical = split_features(df, target=target)
    return df[numeric + categorical], df[target].astype(float), numeric, categorical


def cross_validate_pipeline(
    df: pd.DataFrame,
    target: str = "price",
    n_splits: int = 5,
    random_state: int = RANDOM_SEED,
    regressor=None,
    log_target: bool = True,
) -> Dict[str, Tuple[float, float]]:
    """
    Run K-fold cross-validation of the full pipeline.

    The pipeline is cloned and refitted on every training fold, so the
    imputation, scaling and encoding statistics never see the validation fold.

    Returns
    -------
    results : dict
        'MAE' and 'RMSE' as (mean, std) tuples.
    """
    X, y, numeric, categorical = _xy(df, target)
    model = build_pipeline(numeric, categorical, regressor=regressor, log_target=log_target)

    kf = KFold(n_splits=n_splits, shuffle=True, random_state=random_state)
    maes = []
    rmses = []

    for fold_idx, (train_idx, val_idx) in enumerate(kf.split(X), start=1):
        fold_model = clone(model)
        fold_model.fit(X.iloc[train_idx], y.iloc[train_idx])

        y_val = y.iloc[val_idx]
        y_pred = fold_model.predict(X.iloc[val_idx])

        mae = mean_absolute_error(y_val, y_pred)
        rmse = np.sqrt(mean_squared_error(y_val, y_pred))
        maes.append(mae)
        rmses.append(rmse)

        log.info("Fold %d/%d: MAE=%.2f, RMSE=%.2f", fold_idx, n_splits, mae, rmse)

    maes = np.array(maes)
    rmses = np.array(rmses)
    log.info("MAE  mean=%.2f, std=%.2f", maes.mean(), maes.std())
    log.info("RMSE mean=%.2f, std=%.2f", rmses.mean(), rmses.std())

    return {
        "MAE": (float(maes.mean()), float(maes.std())),
        "RMSE": (float(rmses.mean()), float(rmses.std())),
    }


def leakage_comparison(
    df: pd.DataFrame,
    target: str = "price",
    n_splits: int = 5,
    random_state: int = RANDOM_SEED,
    regressor=None,
) -> Dict[str, float]:
    """
    Compare CV error with and without preprocessing leakage.

    - "leaky": the preprocessor is fitted once on ALL rows, then only the
      model is cross-validated on the transformed matrix. Imputation medians
      and scaling statistics have seen the validation folds.
    - "pipeline": preprocessor and model are cross-validated together.

    Returns
    -------
    dict
        Mean MAE for both setups, and their difference (pipeline - leaky).
        A positive gap means the leaky estimate is optimistic.
    """
    X, y, numeric, categorical = _xy(df, target)
    cv = KFold(n_splits=n_splits, shuffle=True, random_state=random_state)
    base = regressor if regressor is not None else make_regressor(random_state=random_state)

    X_leaky = build_preprocessor(numeric, categorical).fit_transform(X)
    leaky = -cross_val_score(clone(base), X_leaky, y, cv=cv, scoring="neg_mean_absolute_error")

    pipe = build_pipeline(numeric, categorical, regressor=clone(base), log_target=False)
    proper = -cross_val_score(pipe, X, y, cv=cv, scoring="neg_mean_absolute_error")

    result = {
        "leaky_mae": float(leaky.mean()),
        "pipeline_mae": float(proper.mean()),
        "gap": float(proper.mean() - leaky.mean()),
    }
    log.info("Leaky CV MAE=%.2f, pipeline CV MAE=%.2f", result["leaky_mae"], result["pipeline_mae"])
    return result


def main(df: Optional[pd.DataFrame] = None, n_splits: int = 5) -> Dict[str, object]:
    if df is None:
        from dsblog.data.toy import airbnb_listings
        from dsblog.features.build_features import prune_columns

        df = prune_columns(airbnb_listings())
    return {
        "cv": cross_validate_pipeline(df, n_splits=n_splits),
        "leakage": leakage_comparison(df, n_splits=n_splits),
    }


if __name__ == "__main__":
    configure_logging()
    log.info("Results: %s", main())
