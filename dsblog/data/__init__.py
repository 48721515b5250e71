"""
Data package: toy datasets and loading/caching of the listings table.

This package exposes the deterministic toy tables used by the posts, the
cleaning recipe for raw InsideAirbnb listings, and functions to read/write
listings from CSV or a SQL database with a cached Parquet copy for fast
local reuse.
"""
