"""
Toy datasets used throughout the posts.

Both tables are generated deterministically from a seed so that the figures
and numbers quoted in the posts can be reproduced exactly.
"""

import numpy as np
import pandas as pd

from dsblog.config import RANDOM_SEED

NEIGHBOURHOODS = {
    "Louvre": (48.8606, 2.3376, 1.5),
    "Marais": (48.8590, 2.3620, 1.4),
    "Bastille": (48.8532, 2.3691, 1.2),
    "Montmartre": (48.8867, 2.3431, 1.1),
    "Batignolles": (48.8834, 2.3170, 1.0),
}
ROOM_TYPES = {
    "Entire home/apt": 90.0,
    "Private room": 55.0,
    "Shared room": 30.0,
    "Hotel room": 110.0,
}
PROPERTY_TYPES = ["Entire rental unit", "Private room in rental unit", "Entire condo", "Room in hotel"]
FLAVOURS = {"vanilla": 120, "chocolate": 100, "strawberry": 70}
N_DUPLICATES = 3


def airbnb_listings(n: int = 200, seed: int = RANDOM_SEED) -> pd.DataFrame:
    """
    Toy Airbnb listings table with a realistic nullity pattern.

    - `review_scores_rating` and `reviews_per_month` are missing together
      (listings that were never reviewed).
    - `bedrooms` and `beds` are missing together.
    - `bathrooms` and `host_is_superhost` have a few random gaps.
    - `license` is entirely empty and `scrape_id` is constant.
    - The first three listings are duplicated at the end of the table.

    Returns
    -------
    pd.DataFrame
        `n` listings plus up to three duplicated rows.
    """
    rng = np.random.default_rng(seed)

    names = list(NEIGHBOURHOODS)
    neighbourhood = rng.choice(names, size=n)
    room_type = rng.choice(list(ROOM_TYPES), size=n, p=[0.7, 0.22, 0.04, 0.04])
    property_type = np.where(
        room_type == "Entire home/apt",
        rng.choice(PROPERTY_TYPES[::2], size=n),
        np.where(room_type == "Hotel room", PROPERTY_TYPES[3], PROPERTY_TYPES[1]),
    )

    accommodates = rng.integers(1, 7, size=n)
    bedrooms = np.maximum(1, np.round(accommodates / 2)).astype(float)
    beds = bedrooms + rng.integers(0, 2, size=n)
    bathrooms = rng.choice([1.0, 1.0, 1.0, 1.5, 2.0], size=n)
    minimum_nights = rng.choice([1, 2, 3, 5, 7, 30], size=n, p=[0.3, 0.25, 0.2, 0.1, 0.1, 0.05])
    rating = np.clip(rng.normal(4.6, 0.3, size=n), 1, 5).round(2)
    reviews_per_month = rng.gamma(2.0, 0.8, size=n).round(2)
    superhost = rng.choice(["t", "f"], size=n, p=[0.3, 0.7]).astype(object)

    lat = np.array([NEIGHBOURHOODS[x][0] for x in neighbourhood]) + rng.normal(0, 0.003, size=n)
    lon = np.array([NEIGHBOURHOODS[x][1] for x in neighbourhood]) + rng.normal(0, 0.003, size=n)

    base = np.array([ROOM_TYPES[r] for r in room_type])
    factor = np.array([NEIGHBOURHOODS[x][2] for x in neighbourhood])
    price = base * factor * (1 + 0.25 * (accommodates - 1)) * rng.lognormal(0, 0.15, size=n)

    never_reviewed = rng.random(n) < 0.2
    rating[never_reviewed] = np.nan
    reviews_per_month[never_reviewed] = np.nan

    no_bedroom_info = rng.random(n) < 0.1
    bedrooms[no_bedroom_info] = np.nan
    beds[no_bedroom_info] = np.nan

    bathrooms[rng.random(n) < 0.05] = np.nan
    superhost[rng.random(n) < 0.03] = np.nan

    df = pd.DataFrame(
        {
            "id": np.arange(1, n + 1),
            "neighbourhood": neighbourhood,
            "room_type": room_type,
            "property_type": property_type,
            "accommodates": accommodates,
            "bedrooms": bedrooms,
            "beds": beds,
            "bathrooms": bathrooms,
            "minimum_nights": minimum_nights,
            "review_scores_rating": rating,
            "reviews_per_month": reviews_per_month,
            "host_is_superhost": superhost,
            "latitude": lat.round(5),
            "longitude": lon.round(5),
            "license": np.full(n, np.nan),
            "scrape_id": np.full(n, 20230614000000),
            "price": price.round(2),
        }
    )
    dupes = df.head(min(N_DUPLICATES, n))
    return pd.concat([df, dupes], ignore_index=True)


def ice_cream_sales() -> pd.DataFrame:
    """
    Monthly ice-cream sales per flavour for 2021-2023, in long format.

    Sales peak in July and grow by 10% a year.
    """
    rows = []
    for year in (2021, 2022, 2023):
        growth = 1 + 0.1 * (year - 2021)
        for month in range(1, 13):
            season = 1 + 0.8 * np.cos(2 * np.pi * (month - 7) / 12)
            for flavour, base in FLAVOURS.items():
                rows.append(
                    {
                        "year": year,
                        "month": month,
                        "flavour": flavour,
                        "sales": int(round(base * season * growth)),
                    }
                )
    return pd.DataFrame(rows, columns=["year", "month", "flavour", "sales"])
