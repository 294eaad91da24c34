from __future__ import annotations

import numpy as np
import pandas as pd

from .valuation import discount_exponents


def macaulay_duration(
    cashflows: pd.Series,
    ytm: float,
    frequency: float,
    accrued_fraction: float,
    price: float,
) -> float:
    """
    PV-weighted average time to each cashflow, in years.

      D_mac = (1/price) * (1/freq) * sum_i CF_i * t_i / (1 + y/freq)^t_i,
      t_i = i + 1 - accrued_fraction
    """
    cfs = cashflows.to_numpy(dtype=float)
    t = discount_exponents(len(cfs), accrued_fraction)
    weighted = float(np.sum(cfs * t / (1.0 + ytm / frequency) ** t))
    return (weighted / price) / frequency


def modified_duration(macaulay: float, ytm: float, frequency: float) -> float:
    return macaulay / (1.0 + ytm / frequency)
