from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import pandas as pd

from . import config
from .risk import macaulay_duration, modified_duration
from .utils import DayCount, accrued_fraction, build_schedule, dirty_price
from .valuation import bisection_solve, present_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BondSpec:
    coupon: float                 # annual coupon, percent of par (1.375 = 1.375 per 100)
    price: float                  # quoted price, clean or dirty per `clean`
    maturity_date: pd.Timestamp
    settlement_date: pd.Timestamp
    day_count: str = config.DEFAULT_DAYCOUNT
    frequency: float = config.DEFAULT_FREQUENCY
    clean: bool = False


@dataclass(frozen=True)
class AnalysisResult:
    ytm: float                    # decimal, e.g. 0.01396
    macaulay_duration: float
    modified_duration: float


def build_cashflows(
    schedule: Sequence[pd.Timestamp],
    coupon: float,
    frequency: float,
    maturity: pd.Timestamp,
    face: float = config.FACE,
) -> pd.Series:
    """
    Coupon per period on every schedule date; face is redeemed on the maturity date.
    """
    maturity = pd.Timestamp(maturity)
    coupon_cf = coupon / frequency
    amounts = [coupon_cf + face if pd.Timestamp(d) == maturity else coupon_cf for d in schedule]
    return pd.Series(amounts, index=pd.DatetimeIndex(schedule, name="date"), name="cashflow", dtype=float)


class Bond:
    """
    A single fixed-coupon bond, valued off its own schedule.

    Construction parses the day count, builds the schedule and the accrual
    and converts a clean quote to dirty. Any failure raises a
    BondCalculatorError before valuation is possible. The YTM is solved on
    first use and cached for the lifetime of the instance.
    """

    def __init__(self, spec: BondSpec):
        self.spec = spec
        self.day_count = DayCount.from_tag(spec.day_count)
        self.coupon = float(spec.coupon)
        self.frequency = float(spec.frequency)
        self.settlement_date = pd.Timestamp(spec.settlement_date).normalize()
        self.maturity_date = pd.Timestamp(spec.maturity_date).normalize()

        self.schedule: Tuple[pd.Timestamp, ...] = tuple(
            build_schedule(self.maturity_date, self.settlement_date, self.frequency)
        )
        self.accrued_fraction = accrued_fraction(
            self.schedule, self.settlement_date, self.frequency, self.day_count
        )

        if spec.clean:
            self.price = dirty_price(spec.price, self.coupon, self.frequency, self.accrued_fraction)
        else:
            self.price = float(spec.price)

        self._ytm: Optional[float] = None

    def __repr__(self) -> str:
        return (
            f"Bond(coupon={self.coupon}, price={self.price}, day_count={self.day_count.value}, "
            f"frequency={self.frequency}, settlement={self.settlement_date.date()}, "
            f"maturity={self.maturity_date.date()})"
        )

    @property
    def unaccrued_fraction(self) -> float:
        return 1.0 - self.accrued_fraction

    @property
    def accrued_interest(self) -> float:
        """Accrued coupon per 100 par at settlement."""
        return (self.coupon / self.frequency) * self.accrued_fraction

    def cashflows(self) -> pd.Series:
        return build_cashflows(self.schedule, self.coupon, self.frequency, self.maturity_date)

    def present_value(self, rate: float) -> float:
        return present_value(self.cashflows(), rate, self.frequency, self.accrued_fraction)

    @property
    def ytm(self) -> float:
        if self._ytm is None:
            self._ytm = bisection_solve(
                self.present_value,
                self.price,
                low=config.YTM_LOWER_BOUND,
                high=config.YTM_UPPER_BOUND,
                tol=config.TOL,
                max_iter=config.MAX_ITER,
            )
            logger.info(f"Solved YTM {self._ytm:.9f} for dirty price {self.price}")
        return self._ytm

    def macaulay_duration(self) -> float:
        return macaulay_duration(self.cashflows(), self.ytm, self.frequency, self.accrued_fraction, self.price)

    def modified_duration(self) -> float:
        return modified_duration(self.macaulay_duration(), self.ytm, self.frequency)

    def analyze(self) -> AnalysisResult:
        return AnalysisResult(
            ytm=self.ytm,
            macaulay_duration=self.macaulay_duration(),
            modified_duration=self.modified_duration(),
        )
