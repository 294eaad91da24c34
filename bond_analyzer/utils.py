from __future__ import annotations

import calendar
import logging
import math
from enum import Enum
from typing import List, Sequence, Union

import numpy as np
import pandas as pd

from . import config
from .errors import EmptyScheduleError, InvalidDateError, InvalidDaycountError, InvalidFrequencyError

logger = logging.getLogger(__name__)


class DayCount(str, Enum):
    NASD_30_360 = "nasd30/360"
    ACT_ACT = "act/act"
    ACT_360 = "act360"
    ACT_365 = "act365"
    EUR_30_360 = "eur30/360"

    @classmethod
    def from_tag(cls, tag: Union[str, "DayCount"]) -> "DayCount":
        """Parse a convention tag case-insensitively; unknown tags raise InvalidDaycountError."""
        if isinstance(tag, cls):
            return tag
        try:
            return cls(str(tag).strip().lower())
        except ValueError:
            raise InvalidDaycountError(str(tag)) from None


def _is_last_day_of_month(d: pd.Timestamp) -> bool:
    return d.day == calendar.monthrange(d.year, d.month)[1]


def _feb29_between(start: pd.Timestamp, end: pd.Timestamp) -> bool:
    for year in range(start.year, end.year + 1):
        if calendar.isleap(year) and start <= pd.Timestamp(year=year, month=2, day=29) <= end:
            return True
    return False


def _within_one_year(start: pd.Timestamp, end: pd.Timestamp) -> bool:
    if start.year == end.year:
        return True
    return end.year == start.year + 1 and (start.month, start.day) >= (end.month, end.day)


def _thirty_360(y1: int, m1: int, d1: int, y2: int, m2: int, d2: int) -> float:
    return ((y2 - y1) * 360 + (m2 - m1) * 30 + (d2 - d1)) / 360.0


def yearfrac(start: pd.Timestamp, end: pd.Timestamp, convention: Union[str, DayCount]) -> float:
    """
    Year fraction between two dates under a day count convention.

    Supported:
    - nasd30/360 (US 30/360, spreadsheet basis 0)
    - act/act (spreadsheet basis 1)
    - act360, act365
    - eur30/360 (spreadsheet basis 4)
    """
    start = pd.Timestamp(start)
    end = pd.Timestamp(end)
    convention = DayCount.from_tag(convention)

    if end < start:
        raise ValueError(f"end < start: {start=} {end=}")

    days = (end - start).days

    if convention == DayCount.ACT_360:
        return days / 360.0

    if convention == DayCount.ACT_365:
        return days / 365.0

    if convention == DayCount.EUR_30_360:
        return _thirty_360(start.year, start.month, min(start.day, 30), end.year, end.month, min(end.day, 30))

    if convention == DayCount.NASD_30_360:
        d1, d2 = start.day, end.day
        start_feb_eom = start.month == 2 and _is_last_day_of_month(start)
        end_feb_eom = end.month == 2 and _is_last_day_of_month(end)

        if d1 == 31 and d2 == 31:
            d1, d2 = 30, 30
        elif d1 == 31:
            d1 = 30
        elif d1 == 30 and d2 == 31:
            d2 = 30
        elif start_feb_eom and end_feb_eom:
            d1, d2 = 30, 30
        elif start_feb_eom:
            d1 = 30

        return _thirty_360(start.year, start.month, d1, end.year, end.month, d2)

    # act/act
    if _within_one_year(start, end):
        if start.year == end.year and calendar.isleap(start.year):
            basis = 366.0
        elif _feb29_between(start, end):
            basis = 366.0
        else:
            basis = 365.0
        return days / basis

    n_years = end.year - start.year + 1
    span = (pd.Timestamp(year=end.year + 1, month=1, day=1) - pd.Timestamp(year=start.year, month=1, day=1)).days
    return days / (span / n_years)


def months_per_period(frequency: float) -> int:
    """
    Coupon period length in whole months.

    The frequency is truncated to an integer before dividing 12, so a frequency
    that does not divide 12 yields a truncated step.
    """
    if not math.isfinite(frequency):
        raise InvalidFrequencyError(frequency)
    whole = int(frequency)
    if whole <= 0 or whole > 12:
        raise InvalidFrequencyError(frequency)
    if whole != frequency or 12 % whole != 0:
        logger.warning(f"Frequency {frequency} does not evenly divide 12; using a {12 // whole}-month coupon period.")
    return 12 // whole


def step_back(d: pd.Timestamp, months: int) -> pd.Timestamp:
    """Subtract whole months, clamping the day to the last day of the target month."""
    try:
        return pd.Timestamp(d) - pd.DateOffset(months=months)
    except (OverflowError, ValueError):
        raise InvalidDateError(d.year, d.month, d.day) from None


def build_schedule(maturity: pd.Timestamp, settlement: pd.Timestamp, frequency: float) -> List[pd.Timestamp]:
    """
    Coupon dates strictly AFTER settlement, ending at maturity, ascending.

    Anchored at maturity and stepped backwards one period at a time from the
    previous stepped date, so a clamped month-end day carries forward.
    """
    maturity = pd.Timestamp(maturity).normalize()
    settlement = pd.Timestamp(settlement).normalize()
    months = months_per_period(frequency)

    if settlement >= maturity:
        return []

    dates: List[pd.Timestamp] = [maturity]
    d = maturity
    while True:
        d = step_back(d, months)
        if d <= settlement:
            break
        dates.append(d)

    dates.reverse()
    logger.debug(f"Built {len(dates)} coupon dates from {dates[0].date()} to {maturity.date()}")
    return dates


def previous_coupon_date(next_coupon: pd.Timestamp, frequency: float) -> pd.Timestamp:
    """Coupon date one period before next_coupon."""
    return step_back(pd.Timestamp(next_coupon), months_per_period(frequency))


def accrued_fraction(
    schedule: Sequence[pd.Timestamp],
    settlement: pd.Timestamp,
    frequency: float,
    day_count: Union[str, DayCount],
) -> float:
    """
    Elapsed share of the current coupon period at settlement (a full period is 1.0).
    """
    if len(schedule) == 0:
        raise EmptyScheduleError()

    prev_coupon = previous_coupon_date(schedule[0], frequency)
    fraction = yearfrac(prev_coupon, settlement, day_count) * frequency
    logger.debug(f"Previous coupon {prev_coupon.date()}, accrued fraction {fraction}")
    return fraction


def dirty_price(clean_price: float, coupon: float, frequency: float, accrued: float) -> float:
    """Clean price plus accrued coupon, per 100 par."""
    return clean_price + (coupon / frequency) * accrued


def round_to_3dp(x: float) -> float:
    """Round half away from zero at config.DECIMALS places."""
    factor = 10 ** config.DECIMALS
    scaled = abs(x) * factor
    whole = math.floor(scaled)
    if scaled - whole >= 0.5:
        whole += 1
    return (whole if x >= 0 else -whole) / factor


def format_decimal(x: float) -> str:
    """Shortest round-trip positional text for a float, without a trailing '.0'."""
    return np.format_float_positional(float(x), trim="-")
