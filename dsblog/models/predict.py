"""
Listings price prediction helper.

Provides `predict_price(input_dict)` that:
- Loads the persisted pipeline and its metadata.
- Aligns input columns to the training features, filling missing ones with np.nan.
- Coerces numeric-like strings so the imputers see numbers.
- Returns a float nightly price prediction.
"""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

import joblib
import numpy as np
import pandas as pd

from dsblog.config import METADATA_FILE, MODEL_FILE
from dsblog.exceptions import ModelNotTrainedError


def load_model(model_file: str = MODEL_FILE, metadata_file: str = METADATA_FILE) -> Tuple[Any, Dict]:
    """
    Load a fitted pipeline and its metadata JSON.

    Loaded artifacts are cached per file and modification time, so a
    retrained model saved over the old one is picked up on the next call.

    Raises
    ------
    ModelNotTrainedError
        If the model file does not exist.
    """
    if not Path(model_file).exists():
        raise ModelNotTrainedError(
            f"Model file not found at {model_file}. Run `python -m dsblog.models.train` first."
        )
    meta_path = Path(metadata_file)
    meta_mtime = os.stat(meta_path).st_mtime_ns if meta_path.exists() else None
    return _load_artifacts(str(model_file), str(metadata_file), os.stat(model_file).st_mtime_ns, meta_mtime)


@lru_cache(maxsize=4)
def _load_artifacts(model_file: str, metadata_file: str, model_mtime: int, metadata_mtime) -> Tuple[Any, Dict]:
    model = joblib.load(model_file)
    metadata = json.loads(Path(metadata_file).read_text(encoding="utf-8")) if metadata_mtime is not None else {}
    return model, metadata


def clear_model_cache() -> None:
    _load_artifacts.cache_clear()


def _align_and_clean(input_df: pd.DataFrame, metadata: Dict) -> pd.DataFrame:
    """
    Aligns input to model features, fills missing columns with np.nan,
    and coerces numeric-like columns to float.
    """
    features = metadata.get("features")
    numeric = set(metadata.get("numeric_features") or [])
    if not isinstance(features, list):
        return input_df.replace({None: np.nan})

    for f in features:
        if f not in input_df.columns:
            input_df[f] = np.nan

    input_df = input_df[features].copy()

    for col in input_df.columns:
        if col in numeric:
            input_df[col] = pd.to_numeric(input_df[col], errors="coerce").astype(float)
        else:
            input_df[col] = input_df[col].astype(object).where(input_df[col].notna(), np.nan)

    return input_df


def predict_prices(input_df: pd.DataFrame, model_file: str = MODEL_FILE, metadata_file: str = METADATA_FILE) -> np.ndarray:
    model, metadata = load_model(str(model_file), str(metadata_file))
    return np.asarray(model.predict(_align_and_clean(input_df.copy(), metadata)), dtype=float)


def predict_price(input_dict: Dict[str, Any], model_file: str = MODEL_FILE, metadata_file: str = METADATA_FILE) -> float:
    """
    Predict nightly price for a single listing dictionary.

    Returns
    -------
    float
        Predicted nightly price.
    """
    preds = predict_prices(pd.DataFrame([input_dict]), model_file=model_file, metadata_file=metadata_file)
    return float(preds[0])


if __name__ == "__main__":
    from dsblog.config import configure_logging

    configure_logging()
    example = {
        "neighbourhood": "Louvre",
        "property_type": "Entire rental unit",
        "room_type": "Entire home/apt",
        "accommodates": 2,
        "bedrooms": 1,
        "beds": 1,
        "bathrooms": 1,
        "minimum_nights": 2,
    }
    print("Predicted price:", round(predict_price(example), 2))
