"""
Central configuration for the project.

This module centralizes environment-independent constants and derived paths
used throughout the codebase (database connection string, data, post and
model paths) and the logging setup shared by the entry points.

Constants
---------
BASE_DIR : str
    Absolute path to the repository root (parent of the `dsblog` package).
DATA_DIR, RAW_DATA_DIR, PROCESSED_DATA_DIR : str
    Paths to data folders.
POSTS_DIR, FIGURES_DIR : str
    Paths to the Markdown posts and to generated figures.
ENGINE_URL : str
    SQLAlchemy connection URL for the listings database. Overridden by the
    `DSBLOG_DB_URL` environment variable.
DUCKDB_FILE : str
    duckdb database used by the data-quality checks.
MODELS_DIR, MODEL_FILE, METADATA_FILE : str
    Paths to model artifacts and metadata.
"""

import logging
import os

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_DIR = os.path.join(BASE_DIR, "data")
RAW_DATA_DIR = os.path.join(DATA_DIR, "raw")
PROCESSED_DATA_DIR = os.path.join(DATA_DIR, "processed")

POSTS_DIR = os.path.join(BASE_DIR, "posts")
FIGURES_DIR = os.path.join(BASE_DIR, "figures")

ENGINE_URL = os.getenv("DSBLOG_DB_URL", "sqlite:///" + os.path.join(DATA_DIR, "listings.db"))
DUCKDB_FILE = os.path.join(DATA_DIR, "quality.duckdb")

MODELS_DIR = os.path.join(BASE_DIR, "models")
MODEL_FILE = os.path.join(MODELS_DIR, "price_pipeline.joblib")
METADATA_FILE = os.path.join(MODELS_DIR, "price_pipeline.metadata.json")

RANDOM_SEED = 42

LOG_LEVEL = os.getenv("DSBLOG_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level=None) -> None:
    """
    Configure root logging for scripts and entry points.

    Calling it more than once has no further effect, so it is safe to call
    from every `__main__` block.
    """
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)
