"""
Train the listings price pipeline with a grid search.

Usage (from project root)
-------------------------
python -m dsblog.models.train
"""

from __future__ import annotations

import json
import logging
import platform
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import joblib
import numpy as np
import pandas as pd
import sklearn
import xgboost
from sklearn.metrics import mean_absolute_error, mean_squared_error
from sklearn.model_selection import GridSearchCV, KFold, train_test_split

from dsblog.config import METADATA_FILE, MODEL_FILE, RANDOM_SEED, configure_logging
from dsblog.data.load_data import normalize_missing
from dsblog.exceptions import MissingColumnError
from dsblog.models.pipeline import build_pipeline, prefixed_grid, split_features
from dsblog.models.predict import clear_model_cache

log = logging.getLogger(__name__)


@dataclass
class TrainingResult:
    model: Any
    metrics: Dict[str, float]
    metadata: Dict[str, Any] = field(default_factory=dict)
    model_file: Optional[Path] = None
    metadata_file: Optional[Path] = None


def _prepare(df: pd.DataFrame, target: str) -> pd.DataFrame:
    if target not in df.columns:
        raise MissingColumnError(target, df.columns)
    df = normalize_missing(df)
    df[target] = pd.to_numeric(df[target], errors="coerce")
    return df.dropna(subset=[target])


def train_model(
    df: pd.DataFrame,
    target: str = "price",
    param_grid: Optional[dict] = None,
    regressor=None,
    log_target: bool = True,
    n_splits: int = 3,
    test_size: float = 0.2,
    seed: int = RANDOM_SEED,
    artifacts_dir=None,
) -> TrainingResult:
    """
    Split, grid-search and evaluate the price pipeline.

    The held-out split is taken before anything is fitted; the grid search
    then refits the whole pipeline (preprocessing included) on every fold.

    Parameters
    ----------
    df : pd.DataFrame
        Listings including the target column.
    param_grid : dict, optional
        Grid over the regressor's parameters. Bare names such as
        `max_depth` are prefixed for the pipeline automatically.
    regressor : estimator, optional
        Defaults to an XGBRegressor.
    artifacts_dir : str or Path, optional
        If given, the fitted model and its metadata JSON are written there.
        Pass `"default"` to use MODEL_FILE / METADATA_FILE.

    Returns
    -------
    TrainingResult
    """
    df = _prepare(df, target)
    numeric, categorical = split_features(df, target=target)
    X = df[numeric + categorical]
    y = df[target].astype(float)

    X_train, X_test, y_train, y_test = train_test_split(X, y, test_size=test_size, random_state=seed)

    model = build_pipeline(numeric, categorical, regressor=regressor, log_target=log_target)
    cv = KFold(n_splits=n_splits, shuffle=True, random_state=seed)
    search = GridSearchCV(
        estimator=model,
        param_grid=prefixed_grid(param_grid, log_target),
        scoring="neg_mean_absolute_error",
        cv=cv,
        n_jobs=1,
    )
    log.info("Grid search over %d training rows, %d features", len(X_train), X.shape[1])
    search.fit(X_train, y_train)
    best = search.best_estimator_

    y_pred = best.predict(X_test)
    baseline = np.full(len(y_test), float(y_train.median()))
    metrics = {
        "cv_mae_mean": float(-search.best_score_),
        "mae": float(mean_absolute_error(y_test, y_pred)),
        "rmse": float(np.sqrt(mean_squared_error(y_test, y_pred))),
        "baseline_mae": float(mean_absolute_error(y_test, baseline)),
    }
    log.info("Held-out MAE=%.2f (baseline %.2f)", metrics["mae"], metrics["baseline_mae"])

    metadata = {
        "model_name": type(best_regressor(best)).__name__ + " pipeline" + (" (log-target)" if log_target else ""),
        "saved_at": time.strftime("%Y-%m-%d %H:%M:%S"),
        "python": platform.python_version(),
        "pandas": pd.__version__,
        "sklearn": sklearn.__version__,
        "xgboost": xgboost.__version__,
        "target": target,
        "log_target": log_target,
        "train_rows": int(len(X_train)),
        "test_rows": int(len(X_test)),
        "numeric_features": numeric,
        "categorical_features": categorical,
        "features": numeric + categorical,
        "metrics": metrics,
        "best_params": {k: _jsonable(v) for k, v in search.best_params_.items()},
    }

    result = TrainingResult(model=best, metrics=metrics, metadata=metadata)
    if artifacts_dir is not None:
        save_artifacts(result, artifacts_dir)
    return result


def best_regressor(model):
    """The final estimator inside a (possibly target-transformed) pipeline."""
    if hasattr(model, "regressor_"):
        model = model.regressor_
    return model.named_steps["model"]


def _jsonable(value):
    if isinstance(value, np.generic):
        return value.item()
    return value


def save_artifacts(result: TrainingResult, artifacts_dir) -> TrainingResult:
    if artifacts_dir == "default":
        model_file, metadata_file = Path(MODEL_FILE), Path(METADATA_FILE)
    else:
        model_file = Path(artifacts_dir) / Path(MODEL_FILE).name
        metadata_file = Path(artifacts_dir) / Path(METADATA_FILE).name
    model_file.parent.mkdir(parents=True, exist_ok=True)

    result.metadata["model_file"] = model_file.name
    joblib.dump(result.model, model_file)
    metadata_file.write_text(json.dumps(result.metadata, indent=2), encoding="utf-8")
    result.model_file, result.metadata_file = model_file, metadata_file
    clear_model_cache()
    log.info("Saved %s and %s", model_file, metadata_file)
    return result


if __name__ == "__main__":
    from dsblog.data.toy import airbnb_listings
    from dsblog.features.build_features import prune_columns

    configure_logging()
    res = train_model(prune_columns(airbnb_listings()), artifacts_dir="default")
    log.info("Metrics: %s", json.dumps(res.metrics, indent=2))
