"""
Clean raw InsideAirbnb listings into the table used by the posts.
"""

import logging

import pandas as pd

from dsblog.exceptions import MissingColumnError

log = logging.getLogger(__name__)

KEEP_COLUMNS = [
    "id", "neighbourhood", "neighbourhood_cleansed", "latitude", "longitude",
    "property_type", "room_type", "accommodates", "bedrooms", "beds",
    "bathrooms", "price", "minimum_nights", "host_is_superhost",
    "review_scores_rating", "reviews_per_month",
]
NUMERIC_COLUMNS = [
    "latitude", "longitude", "accommodates", "bedrooms", "beds", "bathrooms",
    "minimum_nights", "review_scores_rating", "reviews_per_month",
]

# chosen in the missing-data post
PRICE_MIN = 10.0
PRICE_MAX = 2000.0
PPG_MAX = 500.0  # price per guest
MAX_MIN_NIGHTS = 27


def convert_price(series: pd.Series) -> pd.Series:
    """Turn prices formatted like "$1,200.00" into floats."""
    if pd.api.types.is_numeric_dtype(series):
        return series.astype(float)
    cleaned = series.astype(str).str.replace(r"[^\d.]", "", regex=True)
    return pd.to_numeric(cleaned.where(series.notna()), errors="coerce").astype(float)


def select_columns(df: pd.DataFrame) -> pd.DataFrame:
    for required in ("id", "price"):
        if required not in df.columns:
            raise MissingColumnError(required, df.columns)
    if "neighbourhood_cleansed" in df.columns:
        # InsideAirbnb's free-text neighbourhood is noisy, the cleansed one is not
        df = df.drop(columns=["neighbourhood"], errors="ignore")
        df = df.rename(columns={"neighbourhood_cleansed": "neighbourhood"})
    return df[[c for c in KEEP_COLUMNS if c in df.columns]].copy()


def convert_numeric(df: pd.DataFrame) -> pd.DataFrame:
    df["id"] = pd.to_numeric(df["id"], errors="coerce")
    df = df.dropna(subset=["id"]).copy()
    df["id"] = df["id"].astype("int64")
    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    df["price"] = convert_price(df["price"])
    return df


def handle_missing(df: pd.DataFrame) -> pd.DataFrame:
    df = df.dropna(subset=["price"]).copy()
    if "host_is_superhost" in df.columns:
        df["host_is_superhost"] = df["host_is_superhost"].map({"t": True, "f": False, True: True, False: False})
    return df


def apply_outlier_filters(df: pd.DataFrame) -> pd.DataFrame:
    mask = df["price"].between(PRICE_MIN, PRICE_MAX)
    if "accommodates" in df.columns:
        ppg = df["price"] / df["accommodates"].fillna(1).clip(lower=1)
        mask &= ppg <= PPG_MAX
    return df.loc[mask].copy()


def filter_short_stays(df: pd.DataFrame, max_min_nights: int = MAX_MIN_NIGHTS) -> pd.DataFrame:
    """Keep listings with minimum_nights <= max_min_nights (default: <28)."""
    if "minimum_nights" not in df.columns:
        return df
    return df[df["minimum_nights"] <= max_min_nights].copy()


def clean_listings(df: pd.DataFrame, max_min_nights: int = MAX_MIN_NIGHTS) -> pd.DataFrame:
    """
    Apply the full cleaning recipe to a raw listings table.

    Raises
    ------
    MissingColumnError
        If `id` or `price` is absent.
    """
    n_raw = len(df)
    df = select_columns(df)
    df = convert_numeric(df)
    df = handle_missing(df)
    df = apply_outlier_filters(df)
    df = filter_short_stays(df, max_min_nights=max_min_nights)
    log.info("Cleaned listings: kept %d of %d rows", len(df), n_raw)
    return df.reset_index(drop=True)
