"""
Clean a raw InsideAirbnb listings.csv and store it for the posts.

Usage:
    python scripts/clean_listings.py data/raw/listings.csv
    python scripts/clean_listings.py data/raw/listings.csv --db-url sqlite:///data/listings.db
"""

import argparse
import logging

import pandas as pd

from dsblog.config import ENGINE_URL, configure_logging
from dsblog.data.clean import clean_listings
from dsblog.data.load_data import save_listings
from dsblog.quality.checks import load_checks, run_checks

log = logging.getLogger("clean_listings")


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("raw_csv", help="InsideAirbnb listings.csv (or .csv.gz)")
    parser.add_argument("--db-url", default=ENGINE_URL, help="SQLAlchemy URL to write to")
    parser.add_argument("--skip-checks", action="store_true", help="do not run the Soda checks")
    args = parser.parse_args(argv)

    log.info("Loading raw listings from %s", args.raw_csv)
    df = clean_listings(pd.read_csv(args.raw_csv, low_memory=False))

    if not args.skip_checks:
        result = run_checks(df, "listings", load_checks("listings"))
        if not result.passed:
            log.error("\n%s", result.to_markdown())
            return 1

    save_listings(df, url=args.db_url)
    log.info("Done.")
    return 0


if __name__ == "__main__":
    configure_logging()
    raise SystemExit(main())
