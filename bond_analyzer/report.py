from __future__ import annotations

from typing import Optional

import pandas as pd

from .bonds import AnalysisResult, Bond
from .utils import format_decimal, round_to_3dp


def cashflow_table(bond: Bond) -> pd.DataFrame:
    """One row per coupon date: ISO date and the full-precision amount."""
    cf = bond.cashflows()
    return pd.DataFrame(
        {
            "Date": [d.strftime("%Y-%m-%d") for d in cf.index],
            "Coupon": [format_decimal(v) for v in cf.to_numpy(dtype=float)],
        }
    )


def analysis_table(bond: Bond, result: Optional[AnalysisResult] = None) -> pd.DataFrame:
    """YTM (percent) and durations, rounded to 3dp."""
    if result is None:
        result = bond.analyze()

    rows = [
        ("YTM", result.ytm * 100.0),
        ("Macaulay Duration", result.macaulay_duration),
        ("Modified Duration", result.modified_duration),
    ]
    return pd.DataFrame(
        [(name, format_decimal(round_to_3dp(value))) for name, value in rows],
        columns=["Metric", "Result"],
    )


def render_table(df: pd.DataFrame) -> str:
    return df.to_string(index=False)


def render_report(bond: Bond) -> str:
    return f"{render_table(cashflow_table(bond))}\n\n{render_table(analysis_table(bond))}"
