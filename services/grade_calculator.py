"""
services/grade_calculator.py

Derived grade fields computed from the four component scores
(prelim, midterm, semifinal, final):

- average: mean of the four scores, 2 decimal places
- remark:  "Failed" when ANY single component is >= 4.0, otherwise "Passed"

Scores follow the 1.0 (best) ~ 5.0 (worst) scale, so a high number is a bad
mark. Every function here is pure.
"""

import math
from typing import Any, NamedTuple

NOT_GRADED = "Not Graded"
PASSED = "Passed"
FAILED = "Failed"
REMARKS = (NOT_GRADED, PASSED, FAILED)

COMPONENTS = ("prelim", "midterm", "semifinal", "final")

# a single component at or above this mark fails the subject
FAILING_COMPONENT_SCORE = 4.0


class DerivedFields(NamedTuple):
    average: float
    remark: str


def parse_score(value: Any) -> float:
    """Parse one component score; anything that is not a finite number becomes 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(score):
        return 0.0
    return score


def _scores(prelim, midterm, semifinal, final):
    return [parse_score(v) for v in (prelim, midterm, semifinal, final)]


def compute_average(prelim: Any, midterm: Any, semifinal: Any, final: Any) -> float:
    return round(sum(_scores(prelim, midterm, semifinal, final)) / 4, 2)


def compute_remark(prelim: Any, midterm: Any, semifinal: Any, final: Any) -> str:
    scores = _scores(prelim, midterm, semifinal, final)
    if any(s >= FAILING_COMPONENT_SCORE for s in scores):
        return FAILED
    return PASSED


def compute_derived(prelim: Any, midterm: Any, semifinal: Any, final: Any) -> DerivedFields:
    return DerivedFields(
        average=compute_average(prelim, midterm, semifinal, final),
        remark=compute_remark(prelim, midterm, semifinal, final),
    )


def format_score(value: Any) -> str:
    # display form used by the printable / PDF table
    return f"{parse_score(value):.2f}"
