"""
Bond Analyzer

Single-bond fixed income analytics:
- utils: day count conventions + coupon schedule + accrual helpers
- bonds: bond input record, cashflows, cached YTM and duration
- valuation: present value + bisection yield solver
- risk: Macaulay / modified duration
- report: cashflow and analysis tables
- cli: command line entry point
"""
from .bonds import AnalysisResult, Bond, BondSpec, build_cashflows
from .errors import (
    BondCalculatorError,
    EmptyScheduleError,
    InvalidDateError,
    InvalidDaycountError,
    InvalidFrequencyError,
)
from .utils import DayCount, yearfrac

__version__ = "0.1.0"
