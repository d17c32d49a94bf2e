"""Retirement Recap — number of retirements per month, grouped by year.

Invariants:
    - One row per year that has at least one retirement date, sorted ascending
    - Every row carries all twelve Indonesian month keys, zero-filled
    - None / unparseable dates are skipped
"""

from collections.abc import Iterable
from typing import Any

from officer_records.core.retirement import coerce_date


MONTH_NAMES: tuple[str, ...] = (
    "januari", "februari", "maret", "april", "mei", "juni",
    "juli", "agustus", "september", "oktober", "november", "desember",
)


def build_retirement_recap(retirement_dates: Iterable[Any]) -> list[dict]:
    rows: dict[int, dict] = {}
    for value in retirement_dates:
        retirement = coerce_date(value)
        if retirement is None:
            continue
        row = rows.get(retirement.year)
        if row is None:
            row = {"year": retirement.year, "label": f"Tahun {retirement.year}"}
            row.update({month: 0 for month in MONTH_NAMES})
            rows[retirement.year] = row
        row[MONTH_NAMES[retirement.month - 1]] += 1
    return [rows[year] for year in sorted(rows)]
