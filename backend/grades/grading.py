# grades/grading.py
"""
Grade tokens and the rules computed from them.

Display tokens are what professors type and students see ("1.75", "INC").
Storage codes are identifier-safe ("G1_75") because a choice value cannot
start with a digit in most schema tools; ``GradeValue`` maps one to the other.
"""
from __future__ import annotations

import calendar
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

from django.db import models


class GradeValue(models.TextChoices):
    G1_0 = "G1_0", "1.0"
    G1_25 = "G1_25", "1.25"
    G1_5 = "G1_5", "1.5"
    G1_75 = "G1_75", "1.75"
    G2_0 = "G2_0", "2.0"
    G2_25 = "G2_25", "2.25"
    G2_5 = "G2_5", "2.5"
    G2_75 = "G2_75", "2.75"
    G3_0 = "G3_0", "3.0"
    G4_0 = "G4_0", "4.0"
    G5_0 = "G5_0", "5.0"
    INC = "INC", "INC"
    DRP = "DRP", "DRP"


ALLOWED_GRADES: tuple[str, ...] = tuple(str(label) for label in GradeValue.labels)

_TOKEN_TO_STORAGE = {str(label): value for value, label in GradeValue.choices}
_STORAGE_TO_TOKEN = {value: str(label) for value, label in GradeValue.choices}

PASSING_GRADES = frozenset({"1.0", "1.25", "1.5", "1.75", "2.0", "2.25", "2.5", "2.75", "3.0"})
NUMERIC_GRADES = {token: float(token) for token in ALLOWED_GRADES if token not in ("INC", "DRP")}

FAILING_GRADE = "5.0"
INCOMPLETE = "INC"
DROPPED = "DRP"

# Months a student waits before retaking after a 5.0 or INC
MAJOR_REPEAT_MONTHS = 6
DEFAULT_REPEAT_MONTHS = 12


def normalize_token(token) -> str:
    if token is None:
        return ""
    return str(token).strip().upper()


def is_valid_grade_token(token) -> bool:
    return normalize_token(token) in _TOKEN_TO_STORAGE


def to_storage(token) -> Optional[str]:
    """Display token -> storage code, or None if the token is not a grade."""
    return _TOKEN_TO_STORAGE.get(normalize_token(token))


def to_display(value) -> Optional[str]:
    """Storage code -> display token. Unknown codes give None rather than a guess."""
    if value is None:
        return None
    return _STORAGE_TO_TOKEN.get(str(value))


def is_passing_grade(token) -> bool:
    return normalize_token(token) in PASSING_GRADES


def requires_repeat_wait(token) -> bool:
    """5.0 and INC put the subject behind a repeat-eligibility date; DRP does not."""
    return normalize_token(token) in (FAILING_GRADE, INCOMPLETE)


def compute_gpa(tokens: Iterable) -> Optional[float]:
    """
    Plain average of the numeric grades, rounded to 2 places.
    INC and DRP are left out of the average. None when there is nothing
    numeric to average.
    """
    numeric = [Decimal(t) for t in map(normalize_token, tokens) if t in NUMERIC_GRADES]
    if not numeric:
        return None
    # half-up, so a 1.125 average reads 1.13
    mean = sum(numeric) / len(numeric)
    return float(mean.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


DateLike = Union[date, datetime]


def add_months(value: DateLike, months: int) -> DateLike:
    """Calendar month shift; the day is clamped to the end of the target month."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def repeat_eligibility_date(subject_type, date_encoded: DateLike) -> DateLike:
    """
    Earliest date a subject may be retaken after a failing or incomplete grade.
    MAJOR subjects wait 6 months, everything else 12.
    """
    months = MAJOR_REPEAT_MONTHS if str(subject_type or "").upper() == "MAJOR" else DEFAULT_REPEAT_MONTHS
    return add_months(date_encoded, months)
