# config.py
# Defaults and numerical constants shared by the bond analytics modules.

from __future__ import annotations

import os

DEFAULT_DAYCOUNT = "act/act"
DEFAULT_FREQUENCY = 2.0

# Redemption amount per 100 par
FACE = 100.0

# YTM bisection bracket (annual yield, decimal) and stopping rules
YTM_LOWER_BOUND = 0.0
YTM_UPPER_BOUND = 2.0
TOL = 1e-9
MAX_ITER = 200

# Reported analytics precision
DECIMALS = 3

LOG_LEVEL = os.environ.get("BOND_ANALYZER_LOG_LEVEL", "WARNING").upper()
