from __future__ import annotations


class BondCalculatorError(ValueError):
    """Base class for failures while constructing a bond."""


class InvalidDaycountError(BondCalculatorError):
    def __init__(self, daycount: str):
        self.daycount = daycount
        super().__init__(
            f"invalid daycount value [ {daycount} ]. "
            "Has to be one of: nasd30/360, act/act, act360, act365, eur30/360."
        )


class InvalidDateError(BondCalculatorError):
    def __init__(self, year: int, month: int, day: int):
        self.year = year
        self.month = month
        self.day = day
        super().__init__(
            f"tried to create a bad date with year: {year} month: {month} day: {day}. Cannot continue."
        )


class EmptyScheduleError(BondCalculatorError):
    def __init__(self, message: str = "no coupon dates remain after settlement. Cannot continue."):
        super().__init__(message)


class InvalidFrequencyError(BondCalculatorError):
    def __init__(self, frequency: float):
        self.frequency = frequency
        super().__init__(
            f"invalid frequency [ {frequency} ]. Has to be a number of payments per year between 1 and 12."
        )
