"""Prediction scoring.

Pure functions: no database access, no side effects.
"""
import math
import sys
from typing import Tuple

# (upper bound on error percent, payout multiplier), checked in order
MULTIPLIER_TIERS = (
    (2.0, 3.0),
    (5.0, 2.0),
    (10.0, 1.5),
)
BASE_MULTIPLIER = 1.0
# Above this error percent the whole bid is lost
TOTAL_LOSS_PERCENT = 25.0
# Stored in place of an error percent that overflows a float
MAX_ERROR_PERCENT = sys.float_info.max


def error_percent(predicted: float, actual: float) -> float:
    if actual == 0:
        return 0.0 if predicted == 0 else 100.0
    err = (abs(predicted - actual) / abs(actual)) * 100
    if not math.isfinite(err):
        return MAX_ERROR_PERCENT
    return err


def multiplier_for(err_percent: float) -> float:
    for bound, multiplier in MULTIPLIER_TIERS:
        if err_percent <= bound:
            return multiplier
    return BASE_MULTIPLIER


def score_prediction(predicted: float, actual: float, bid: float) -> Tuple[float, float]:
    """Return ``(error_percent, final_score)`` for one submission.

    The score replaces the bid on settlement, so a team's balance moves by
    ``final_score - bid``. A miss of more than 25% scores zero.
    """
    err = error_percent(predicted, actual)
    if err > TOTAL_LOSS_PERCENT:
        return err, 0.0
    base_score = bid * (1 / (1 + err))
    return err, base_score * multiplier_for(err)
