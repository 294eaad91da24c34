import logging

import numpy as np
import pandas as pd
import pytest
from scipy.optimize import brentq

from bond_analyzer.bonds import Bond, BondSpec
from bond_analyzer.risk import macaulay_duration, modified_duration
from bond_analyzer.valuation import bisection_solve, present_value


@pytest.fixture(scope="module")
def bond():
    return Bond(
        BondSpec(
            coupon=1.375,
            price=99.974,
            maturity_date=pd.Timestamp("2025-01-31"),
            settlement_date=pd.Timestamp("2020-02-20"),
        )
    )


def test_present_value_at_zero_rate_is_sum_of_cashflows(bond):
    cf = bond.cashflows()
    assert present_value(cf, 0.0, 2.0, bond.accrued_fraction) == pytest.approx(cf.sum())


def test_present_value_single_cashflow_full_period():
    cf = pd.Series([105.0], index=pd.DatetimeIndex([pd.Timestamp("2021-01-01")]))
    assert present_value(cf, 0.10, 1.0, 0.0) == pytest.approx(105.0 / 1.1)


def test_present_value_stub_period_discounting():
    cf = pd.Series([102.0], index=pd.DatetimeIndex([pd.Timestamp("2021-01-01")]))
    # a quarter of the period accrued leaves 0.75 periods to discount over
    assert present_value(cf, 0.08, 2.0, 0.25) == pytest.approx(102.0 / 1.04 ** 0.75)


def test_present_value_strictly_decreasing_in_rate(bond):
    rates = np.linspace(0.0, 2.0, 201)
    pvs = np.array([bond.present_value(r) for r in rates])
    assert np.all(np.diff(pvs) < 0.0)


def test_bisection_solves_decreasing_function():
    root = bisection_solve(lambda x: 1.0 - x, 0.25, low=0.0, high=2.0, tol=1e-9)
    assert root == pytest.approx(0.75, abs=1e-9)


def test_bisection_respects_max_iter(caplog):
    with caplog.at_level(logging.WARNING, logger="bond_analyzer.valuation"):
        root = bisection_solve(lambda x: 1.0 - x, 0.25, low=0.0, high=2.0, tol=1e-9, max_iter=3)
    # 1.0 -> 0.5 -> 0.75
    assert root == pytest.approx(0.75)
    assert "max_iter=3" in caplog.text


def test_bisection_unbracketed_target_returns_edge_value(caplog):
    with caplog.at_level(logging.WARNING, logger="bond_analyzer.valuation"):
        root = bisection_solve(lambda x: 1.0 - x, -5.0, low=0.0, high=2.0, tol=1e-9)
    assert root == pytest.approx(2.0, abs=1e-8)
    assert "edge of the bracket" in caplog.text


def test_ytm_matches_brentq_reference(bond):
    ref = brentq(lambda r: bond.present_value(r) - bond.price, 0.0, 2.0, xtol=1e-14)
    assert bond.ytm == pytest.approx(ref, abs=1e-8)
    assert bond.present_value(bond.ytm) == pytest.approx(bond.price, abs=1e-6)


def test_zero_coupon_duration_is_time_to_maturity():
    cf = pd.Series([100.0], index=pd.DatetimeIndex([pd.Timestamp("2030-01-01")]))
    price = present_value(cf, 0.05, 2.0, 0.0)
    mac = macaulay_duration(cf, 0.05, 2.0, 0.0, price)
    assert mac == pytest.approx(0.5)
    assert modified_duration(mac, 0.05, 2.0) == pytest.approx(0.5 / 1.025)
