"""Configuration for SpendWise.

Paths and display defaults live here, with environment variable overrides
for anything that differs between machines.
"""

from __future__ import annotations

import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()

DATA_DIR = Path(os.getenv("SPENDWISE_DATA_DIR", _PROJECT_ROOT / "data"))

# "lifetime" measures goals against the whole ledger, "month" against the current month only
BUDGET_SCOPE = os.getenv("SPENDWISE_BUDGET_SCOPE", "lifetime")

# Ring chart, in the units of a 400x400 canvas
CHART_SIZE = 400
OUTER_RADIUS = CHART_SIZE / 2 / 1.025
INNER_RATIO = 0.58
INNER_RADIUS = OUTER_RADIUS * INNER_RATIO
PAD_ANGLE = 0.02
LABEL_THRESHOLD = 8.0

LOG_LEVEL = os.getenv("SPENDWISE_LOG_LEVEL", "INFO")


def ensure_data_directory(path: Path | None = None) -> Path:
    target = Path(path or DATA_DIR)
    target.mkdir(parents=True, exist_ok=True)
    return target
