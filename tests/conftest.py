"""Pytest fixtures for dsblog tests.

Key fixtures:
- listings: Toy Airbnb listings exactly as the missing-data post builds them
- pruned_listings: The same table after the column-pruning recipe
- sales: Toy ice-cream sales table
- raw_listings: A small InsideAirbnb-shaped frame with formatting noise
"""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from dsblog.data.toy import airbnb_listings, ice_cream_sales
from dsblog.features.build_features import prune_columns


@pytest.fixture
def listings() -> pd.DataFrame:
    return airbnb_listings()


@pytest.fixture
def pruned_listings(listings: pd.DataFrame) -> pd.DataFrame:
    return prune_columns(listings)


@pytest.fixture
def sales() -> pd.DataFrame:
    return ice_cream_sales()


@pytest.fixture
def raw_listings() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "id": ["1", "2", "3", "x", "5"],
            "neighbourhood": ["Paris, Ile-de-France", None, None, None, None],
            "neighbourhood_cleansed": ["Louvre", "Marais", "Louvre", "Louvre", "Bastille"],
            "room_type": ["Entire home/apt", "Private room", "Entire home/apt", "Shared room", "Hotel room"],
            "accommodates": [2, 4, 1, 2, 1],
            "price": ["$120.00", "$1,500.00", "$5.00", "$80.00", "$300.00"],
            "minimum_nights": [2, 3, 1, 2, 30],
            "host_is_superhost": ["t", "f", None, "t", "f"],
            "review_scores_rating": ["4.8", "", "4.1", "3.9", np.nan],
            "scrape_id": [1, 1, 1, 1, 1],
        }
    )
