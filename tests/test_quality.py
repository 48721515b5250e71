"""Tests for the duckdb + Soda Core data-quality checks."""

import duckdb
import numpy as np
import pandas as pd
import pytest

pytest.importorskip("soda.scan")

from dsblog.features.build_features import drop_duplicate_rows  # noqa: E402
from dsblog.quality import checks  # noqa: E402
from dsblog.quality.checks import (  # noqa: E402
    QualityResult,
    assert_quality,
    load_checks,
    register_frame,
    run_checks,
)

pytestmark = pytest.mark.soda

SIMPLE_CHECKS = """
checks for sales:
  - row_count > 0
  - missing_count(sales) = 0
  - min(sales) >= 0
"""


def test_load_checks() -> None:
    assert "checks for listings:" in load_checks("listings")
    assert "checks for ice_cream_sales:" in load_checks("ice_cream_sales")


def test_load_unknown_checks() -> None:
    with pytest.raises(FileNotFoundError, match="listings"):
        load_checks("nope")


def test_register_frame_replaces_table() -> None:
    conn = duckdb.connect(":memory:")
    register_frame(conn, "t", pd.DataFrame({"a": [1, 2, 3]}))
    register_frame(conn, "t", pd.DataFrame({"a": [1]}))
    assert conn.execute('SELECT count(*) FROM "t"').fetchone()[0] == 1
    conn.close()


def test_register_frame_text_columns() -> None:
    conn = duckdb.connect(":memory:")
    df = pd.DataFrame(
        {
            "flavour": pd.array(["vanilla", None, "chocolate"], dtype="string"),
            "superhost": ["t", np.nan, "f"],
            "sales": pd.array([1, None, 3], dtype="Int64"),
        }
    )
    register_frame(conn, "t", df)
    rows = conn.execute(
        'SELECT count(flavour), count(superhost), count(sales), max(flavour) FROM "t"'
    ).fetchone()
    assert rows == (2, 2, 2, "vanilla")
    conn.close()


def test_ice_cream_checks_pass(sales: pd.DataFrame) -> None:
    result = run_checks(sales, "ice_cream_sales", load_checks("ice_cream_sales"))
    assert result.passed
    assert result.checks_failed == 0
    assert result.checks_passed == 5
    assert result.execution_time_ms > 0


def test_listings_checks_pass(listings: pd.DataFrame) -> None:
    result = run_checks(drop_duplicate_rows(listings), "listings", load_checks("listings"))
    assert result.passed, result.to_markdown()


def test_duplicated_listings_fail(listings: pd.DataFrame) -> None:
    result = run_checks(listings, "listings", load_checks("listings"))
    assert not result.passed
    assert result.checks_failed == 1
    assert result.failures[0]["outcome"] == "fail"
    assert "failed" in result.to_markdown()


def test_bad_values_fail() -> None:
    df = pd.DataFrame({"sales": pd.array([10, None, -1], dtype="Int64")})
    result = run_checks(df, "sales", SIMPLE_CHECKS)
    assert not result.passed
    assert result.checks_failed == 2
    assert result.checks_passed == 1


def test_existing_connection_is_left_open() -> None:
    conn = duckdb.connect(":memory:")
    run_checks(pd.DataFrame({"sales": [1, 2]}), "sales", SIMPLE_CHECKS, conn=conn)
    assert conn.execute("SELECT count(*) FROM sales").fetchone()[0] == 2
    conn.close()


def test_assert_quality_raises_assertion_error() -> None:
    with pytest.raises(AssertionError):
        assert_quality(pd.DataFrame({"sales": [-5]}), "sales", SIMPLE_CHECKS)


def test_assert_quality_passes() -> None:
    assert_quality(pd.DataFrame({"sales": [5]}), "sales", SIMPLE_CHECKS)


def test_result_markdown() -> None:
    result = QualityResult(
        passed=False,
        checks_passed=1,
        checks_failed=1,
        failures=[{"name": "min(sales) >= 0", "table": "sales", "outcome": "fail"}],
    )
    md = result.to_markdown()
    assert "1 passed, 1 failed" in md
    assert "| min(sales) >= 0 | sales | fail |" in md


def test_main_exit_codes(monkeypatch: pytest.MonkeyPatch) -> None:
    assert checks.main() == 0
    monkeypatch.setattr(checks, "load_checks", lambda name: f"checks for {name}:\n  - row_count = 0\n")
    assert checks.main() == 1
