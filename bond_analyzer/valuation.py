from __future__ import annotations

import logging
from typing import Callable

import numpy as np
import pandas as pd

from . import config

logger = logging.getLogger(__name__)


def discount_exponents(n: int, accrued_fraction: float) -> np.ndarray:
    """Periods from settlement to each cashflow: i + (1 - accrued_fraction)."""
    return np.arange(n, dtype=float) + (1.0 - accrued_fraction)


def present_value(cashflows: pd.Series, rate: float, frequency: float, accrued_fraction: float) -> float:
    """
    PV of ascending cashflows at an annual yield compounded `frequency` times a year.

    The first cashflow is discounted over the unaccrued stub of the current period.
    """
    cfs = cashflows.to_numpy(dtype=float)
    t = discount_exponents(len(cfs), accrued_fraction)
    return float(np.sum(cfs / (1.0 + rate / frequency) ** t))


def bisection_solve(
    func: Callable[[float], float],
    target: float,
    low: float = config.YTM_LOWER_BOUND,
    high: float = config.YTM_UPPER_BOUND,
    tol: float = config.TOL,
    max_iter: int = config.MAX_ITER,
) -> float:
    """
    Solve func(x) = target for a function decreasing in x over [low, high].

    A value above target moves the lower bound up, otherwise the upper bound
    comes down. Returns the midpoint once the bracket is no wider than tol.
    The bracket is not checked: a root outside it gives a value next to the
    nearer end.
    """
    lo, hi = float(low), float(high)
    mid = (lo + hi) / 2.0

    for i in range(max_iter):
        mid = (lo + hi) / 2.0
        if abs(hi - lo) <= tol:
            logger.debug(f"Bisection converged after {i} steps: {mid}")
            break
        if func(mid) > target:
            lo = mid
        else:
            hi = mid
    else:
        logger.warning(f"Bisection hit max_iter={max_iter} with bracket width {hi - lo}; returning {mid}")

    if abs(mid - low) <= tol or abs(high - mid) <= tol:
        logger.warning(f"Solved value {mid} sits at the edge of the bracket [{low}, {high}]")

    return mid
