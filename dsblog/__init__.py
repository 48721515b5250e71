"""
dsblog package initializer.

This package contains the runnable companion code for the blog posts: post
parsing, toy datasets, the missing-data walkthrough, the preprocessing
pipeline, plotly button charts and duckdb + Soda Core data-quality checks.

Modules
-------
- config: Central configuration, path constants and logging setup.
- posts: Front-matter parsing and code-fence extraction for the posts.
- data: Toy datasets and listing loading/caching utilities.
- features: Missing-data cleaning and nullity plots.
- models: Preprocessing pipeline training, evaluation and prediction.
- charts: Plotly figures with update buttons.
- quality: Data-quality checks with duckdb and Soda Core.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dsblog")
except PackageNotFoundError:
    __version__ = "0.0.0"
