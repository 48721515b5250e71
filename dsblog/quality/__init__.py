"""
Data-quality checks with duckdb and Soda Core.

SodaCL check files for the toy tables live in `dsblog/quality/sodacl/`.
"""
