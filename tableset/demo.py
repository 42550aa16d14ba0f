from __future__ import annotations

from typing import Any, Dict, List

from tableset.core.data_cube import DataCube

DIMENSIONS = ["page", "country", "browser", "os"]
METRICS = ["impressions", "clicks", "signups"]

COUNTRIES = ["CHN", "IND", "USA", "IDN", "PAK", "BRA", "NGA", "BGD", "RUS", "MEX"]
PAGES = ["index.html", "signup.html", "about.html", "pricing.html"]
BROWSERS = ["Chrome", "Safari", "Edge", "Firefox"]
OPERATING_SYSTEMS = ["iOS", "Android", "Windows", "MacOS", "Linux"]


def create_rows_fixture(count: int = 100) -> List[Dict[str, Any]]:
    """Deterministic sample traffic rows, one per (synthetic) visit bucket."""
    rows = []
    for i in range(count):
        rows.append(
            {
                "page": PAGES[i * 3 % len(PAGES)],
                "country": COUNTRIES[i % len(COUNTRIES)],
                "browser": BROWSERS[i % len(BROWSERS)],
                "os": OPERATING_SYSTEMS[i % len(OPERATING_SYSTEMS)],
                "impressions": i * 123,
                "clicks": i * 11,
                "signups": i,
            }
        )
    return rows


def build_demo_cube(count: int = 100) -> DataCube:
    return DataCube(DIMENSIONS, METRICS, create_rows_fixture(count))


def add_click_through_rate(rows: List[Dict[str, Any]], cube: DataCube) -> List[Dict[str, Any]]:
    """
    render_fn which appends a derived 'ctr' metric (clicks / impressions) to each row.
    """
    out = []
    for row in rows:
        impressions = row.get("impressions") or 0
        clicks = row.get("clicks") or 0
        ctr = clicks / impressions if impressions else 0.0
        out.append({**row, "ctr": ctr})
    return out
