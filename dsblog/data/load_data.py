"""
Load, store and cache the listings table.

`load_listings()` reads listings from a CSV file or from a SQL database
through SQLAlchemy, and caches the result as a parquet file on disk for
faster subsequent access. `save_listings()` writes a DataFrame back to the
database.

The cache records which source it was built from and is only reused for
that same source; loading a different CSV or URL rebuilds it.

Missing values are standardized to NaN and numeric columns are coerced to
floats to prevent NAType errors in the scikit-learn pipelines downstream.

The cache file path is defined by `CACHE_FILE` and defaults to
`data/processed/listings.parquet`.
"""

import logging
import os

import numpy as np
import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
from sqlalchemy import create_engine, inspect

from dsblog.config import ENGINE_URL, PROCESSED_DATA_DIR

log = logging.getLogger(__name__)

CACHE_FILE = os.path.join(PROCESSED_DATA_DIR, "listings.parquet")
TABLE = "listings"
SOURCE_KEY = b"dsblog.source"


def _resolve_source(source) -> str:
    if source is None:
        return ENGINE_URL
    source = os.fspath(source)
    if source.lower().endswith(".csv"):
        return os.path.abspath(source)
    return source


def _cached_source(cache_file):
    """Source recorded in the parquet cache, or None for a foreign file."""
    metadata = pq.read_schema(cache_file).metadata or {}
    value = metadata.get(SOURCE_KEY)
    return value.decode("utf-8") if value is not None else None


def _write_cache(df: pd.DataFrame, cache_file, source: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(cache_file)), exist_ok=True)
    table = pa.Table.from_pandas(df, preserve_index=False)
    metadata = dict(table.schema.metadata or {})
    metadata[SOURCE_KEY] = source.encode("utf-8")
    pq.write_table(table.replace_schema_metadata(metadata), cache_file)


def _read_source(source: str, table: str) -> pd.DataFrame:
    if source.lower().endswith(".csv"):
        log.info("Reading listings from %s", source)
        return pd.read_csv(source)

    log.info("Reading table %s from %s", table, source)
    engine = create_engine(source)
    try:
        if not inspect(engine).has_table(table):
            raise FileNotFoundError(f"Table '{table}' not found at {source}")
        return pd.read_sql_table(table, engine)
    finally:
        engine.dispose()


def normalize_missing(df: pd.DataFrame) -> pd.DataFrame:
    """
    Coerce numeric columns to float and replace None/pd.NA with NaN.
    """
    df = df.copy()
    for col in df.columns:
        if pd.api.types.is_bool_dtype(df[col]) or pd.api.types.is_datetime64_any_dtype(df[col]):
            continue
        if pd.api.types.is_numeric_dtype(df[col]):
            df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)
        else:
            df[col] = df[col].astype(object).where(df[col].notna(), np.nan)
    return df


def load_listings(source=None, use_cache=True, cache_file=CACHE_FILE, table=TABLE) -> pd.DataFrame:
    """
    Load listings from a CSV file, a SQL database or the parquet cache.

    Parameters
    ----------
    source : str or path-like, optional
        A `.csv` path or a SQLAlchemy URL. Defaults to `ENGINE_URL`.
    use_cache : bool
        If True and the parquet cache was built from the same source, load
        from it instead.
    cache_file : str
        Parquet cache location. Pass None to disable caching entirely.
    table : str
        Table name when reading from a database.

    Returns
    -------
    pd.DataFrame
        Listings with consistent numeric types and missing values.
    """
    source = _resolve_source(source)
    if use_cache and cache_file and os.path.exists(cache_file):
        cached_from = _cached_source(cache_file)
        if cached_from == source:
            log.info("Loading cached listings from %s", cache_file)
            return normalize_missing(pd.read_parquet(cache_file))
        log.info("Cache %s was built from %s, rebuilding", cache_file, cached_from)

    df = _read_source(source, table)
    if cache_file:
        _write_cache(df, cache_file, source)
    return normalize_missing(df)


def save_listings(df: pd.DataFrame, url: str = ENGINE_URL, table: str = TABLE) -> None:
    """Replace `table` at `url` with the contents of `df`."""
    log.info("Saving %d listings to table %s", len(df), table)
    engine = create_engine(url)
    try:
        df.to_sql(table, engine, if_exists="replace", index=False)
    finally:
        engine.dispose()
