"""Soda Core checks against DataFrames materialised in duckdb.

Each DataFrame is written to a duckdb table, and a Soda Core scan runs
SodaCL checks against that connection. Uses the soda-core v3 `Scan` API
(`pip install soda-core-duckdb`).

Usage (from project root)
-------------------------
# Check the toy listings, exit non-zero on failure:
python -m dsblog.quality.checks
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path

import duckdb
import pandas as pd
import pyarrow as pa
from soda.scan import Scan

from dsblog.config import configure_logging

log = logging.getLogger(__name__)

CHECKS_DIR = Path(__file__).parent / "sodacl"
DATA_SOURCE = "duckdb"


@dataclass
class QualityResult:
    """Result of a Soda scan.

    Attributes:
        passed: Whether no check failed (warnings do not fail a scan)
        checks_passed: Number of checks that passed
        checks_failed: Number of checks that failed
        checks_warned: Number of checks with warnings
        failures: Failing/warning checks as {name, table, outcome}
        execution_time_ms: Time taken to run the scan
        logs: Soda scan log text
    """

    passed: bool
    checks_passed: int = 0
    checks_failed: int = 0
    checks_warned: int = 0
    failures: list[dict] = field(default_factory=list)
    execution_time_ms: float = 0.0
    logs: str = ""

    def to_markdown(self) -> str:
        status = "passed" if self.passed else "failed"
        lines = [
            f"**Data quality {status}**: {self.checks_passed} passed, "
            f"{self.checks_failed} failed, {self.checks_warned} warned",
        ]
        if self.failures:
            lines += ["", "| Check | Table | Outcome |", "|-------|-------|---------|"]
            for f in self.failures:
                lines.append(f"| {f.get('name')} | {f.get('table')} | {f.get('outcome')} |")
        return "\n".join(lines)


def load_checks(name: str) -> str:
    """Bundled SodaCL YAML, e.g. `load_checks("listings")`."""
    path = CHECKS_DIR / f"{name}.yml"
    if not path.exists():
        available = sorted(p.stem for p in CHECKS_DIR.glob("*.yml"))
        raise FileNotFoundError(f"No checks named '{name}'. Available: {', '.join(available)}")
    return path.read_text(encoding="utf-8")


def register_frame(conn: duckdb.DuckDBPyConnection, table: str, df: pd.DataFrame) -> None:
    """Materialise `df` as duckdb table `table`, replacing any existing one.

    The frame goes through Arrow, so pandas string and nullable dtypes reach
    duckdb as plain VARCHAR/INTEGER columns with NULLs.
    """
    conn.register("_dsblog_frame", pa.Table.from_pandas(df, preserve_index=False))
    try:
        conn.execute(f'CREATE OR REPLACE TABLE "{table}" AS SELECT * FROM _dsblog_frame')
    finally:
        conn.unregister("_dsblog_frame")


def _build_scan(conn: duckdb.DuckDBPyConnection, table: str, checks_yaml: str) -> Scan:
    scan = Scan()
    scan.set_scan_definition_name(f"validate_{table}")
    scan.set_data_source_name(DATA_SOURCE)
    scan.add_duckdb_connection(conn, data_source_name=DATA_SOURCE)
    scan.add_sodacl_yaml_str(checks_yaml)
    return scan


def _summarize(scan: Scan, elapsed_ms: float) -> QualityResult:
    passed = failed = warned = 0
    failures = []
    for check in scan.get_scan_results().get("checks", []):
        outcome = str(check.get("outcome")).lower()
        if outcome == "pass":
            passed += 1
            continue
        if outcome == "warn":
            warned += 1
        else:
            failed += 1
        failures.append({"name": check.get("name"), "table": check.get("table"), "outcome": outcome})

    # errors in the scan itself (bad SodaCL, unknown table) count as failures
    if scan.has_error_logs() and failed == 0:
        failed = 1
        failures.append({"name": "scan error", "table": None, "outcome": "error"})

    return QualityResult(
        passed=failed == 0,
        checks_passed=passed,
        checks_failed=failed,
        checks_warned=warned,
        failures=failures,
        execution_time_ms=elapsed_ms,
        logs=scan.get_logs_text() or "",
    )


def run_checks(df: pd.DataFrame, table: str, checks_yaml: str, conn=None) -> QualityResult:
    """Run SodaCL checks against a DataFrame.

    Args:
        df: Data to validate
        table: duckdb table name the checks refer to
        checks_yaml: SodaCL YAML with `checks for <table>:` sections
        conn: Optional duckdb connection (in-memory by default)

    Returns:
        QualityResult with validation details
    """
    own_conn = conn is None
    conn = duckdb.connect(":memory:") if own_conn else conn
    try:
        register_frame(conn, table, df)
        start_time = time.perf_counter()
        scan = _build_scan(conn, table, checks_yaml)
        scan.execute()
        result = _summarize(scan, (time.perf_counter() - start_time) * 1000)
    finally:
        if own_conn:
            conn.close()

    if result.passed:
        log.info("Soda validation of %s passed: %d checks passed", table, result.checks_passed)
    else:
        log.warning("Soda validation of %s failed: %d checks failed", table, result.checks_failed)
    return result


def assert_quality(df: pd.DataFrame, table: str, checks_yaml: str, conn=None) -> None:
    """Run the checks and raise AssertionError if any of them fails."""
    own_conn = conn is None
    conn = duckdb.connect(":memory:") if own_conn else conn
    try:
        register_frame(conn, table, df)
        scan = _build_scan(conn, table, checks_yaml)
        scan.execute()
        scan.assert_no_error_logs()
        scan.assert_no_checks_fail()
    finally:
        if own_conn:
            conn.close()


def main() -> int:
    from dsblog.data.toy import airbnb_listings, ice_cream_sales
    from dsblog.features.build_features import drop_duplicate_rows

    results = [
        run_checks(drop_duplicate_rows(airbnb_listings()), "listings", load_checks("listings")),
        run_checks(ice_cream_sales(), "ice_cream_sales", load_checks("ice_cream_sales")),
    ]
    for res in results:
        log.info("\n%s", res.to_markdown())
    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    configure_logging()
    raise SystemExit(main())
