# cli.py
# Command line entry point: parse the bond inputs, print the cashflow and
# analysis tables, exit 0 on success and 1 on any input or construction error.

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from typing import List, Optional

import pandas as pd

from . import config
from .bonds import Bond, BondSpec
from .errors import BondCalculatorError
from .report import render_report

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _iso_date(value: str) -> pd.Timestamp:
    try:
        return pd.Timestamp(date.fromisoformat(value))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(prog="bond-analyzer", description="Bond cashflows, yield to maturity and duration")
    p.add_argument("-c", "--coupon", type=float, required=True, help="Annual coupon, percent of par (e.g. 1.375)")
    p.add_argument("-p", "--price", type=float, required=True, help="Quoted price per 100 par")
    p.add_argument("--clean", action="store_true", help="Treat --price as a clean price and add accrued interest")
    p.add_argument(
        "-d",
        "--daycount",
        default=config.DEFAULT_DAYCOUNT,
        help=f"One of nasd30/360, act/act, act360, act365, eur30/360 (default: {config.DEFAULT_DAYCOUNT})",
    )
    p.add_argument(
        "-f",
        "--frequency",
        type=float,
        default=config.DEFAULT_FREQUENCY,
        help=f"Coupon payments per year (default: {config.DEFAULT_FREQUENCY})",
    )
    p.add_argument(
        "-s",
        "--settlement-date",
        type=_iso_date,
        default=None,
        help="Settlement date YYYY-MM-DD (default: today)",
    )
    p.add_argument("-m", "--maturity-date", type=_iso_date, required=True, help="Maturity date YYYY-MM-DD")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    return p


def spec_from_args(args: argparse.Namespace) -> BondSpec:
    settlement = args.settlement_date
    if settlement is None:
        settlement = pd.Timestamp.today().normalize()

    return BondSpec(
        coupon=args.coupon,
        price=args.price,
        maturity_date=args.maturity_date,
        settlement_date=settlement,
        day_count=args.daycount,
        frequency=args.frequency,
        clean=args.clean,
    )


def run(spec: BondSpec) -> str:
    bond = Bond(spec)
    logger.debug(f"Constructed {bond!r}")
    return render_report(bond)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        output = run(spec_from_args(args))
    except BondCalculatorError as e:
        print(e, file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
