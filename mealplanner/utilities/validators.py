"""
Field validation for planner input (names, quantities, dates, weekdays, CSV rows).

Each require_* function returns a Validated result instead of raising, so both
the strict interactive paths (which unwrap) and the lenient CSV loader (which
inspects .ok) share the same rules.
"""
import csv
import math
from numbers import Real
from typing import Optional, Sequence

from mealplanner.utilities.constants import (
    DAYS_OF_THE_WEEK,
    EMPTY_PLACEHOLDER,
    FULL_ROW_LENGTH,
    SHORT_ROW_LENGTH,
    WEEKDAY_ALIASES,
)
from mealplanner.utilities.errors import ErrorCode, Validated


def is_blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def require_non_blank(value, field: str) -> Validated[str]:
    """Accept a string with at least one non-whitespace character; returns it trimmed."""
    if is_blank(value):
        return Validated.failure(field, ErrorCode.INVALID_STRING)
    return Validated.success(value.strip())


def require_name(value, field: str) -> Validated[str]:
    """Like require_non_blank, but also refuses the file placeholder token as a name."""
    result = require_non_blank(value, field)
    if result.ok and result.value == EMPTY_PLACEHOLDER:
        return Validated.failure(field, ErrorCode.INVALID_STRING)
    return result


def is_valid_double(value) -> bool:
    """Plain decimal grammar: optional leading '-', at most one '.', digits otherwise.

    Exponent notation, 'inf' and 'nan' are rejected, as is a string with no
    digits at all ('-', '.', '-.').
    """
    if is_blank(value):
        return False
    s = value.strip()
    if s.count(".") > 1:
        return False
    if "-" in s and (s.count("-") > 1 or not s.startswith("-")):
        return False
    residue = s.replace(".", "").replace("-", "")
    if not residue:
        return False
    return all(ch in "0123456789" for ch in residue)


def require_double(value, field: str) -> Validated[float]:
    if not is_valid_double(value):
        return Validated.failure(field, ErrorCode.INVALID_DOUBLE)
    number = float(value.strip())
    # very long digit strings overflow to inf
    if not math.isfinite(number):
        return Validated.failure(field, ErrorCode.INVALID_DOUBLE)
    return Validated.success(number)


def coerce_double(value, field: str) -> Validated[float]:
    """Accept either a real number or a string that passes require_double."""
    if value is None:
        return Validated.failure(field, ErrorCode.NULL_ARGUMENT)
    if isinstance(value, bool):
        return Validated.failure(field, ErrorCode.INVALID_DOUBLE)
    if isinstance(value, Real):
        number = float(value)
        if not math.isfinite(number):
            return Validated.failure(field, ErrorCode.INVALID_DOUBLE)
        return Validated.success(number)
    return require_double(value, field)


def days_in_month(year: int, month: int) -> int:
    if month == 2:
        leap = year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)
        return 29 if leap else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def is_valid_date(value) -> bool:
    """YYYY-MM-DD with a real Gregorian month/day and positive year."""
    if not isinstance(value, str):
        return False
    s = value.strip()
    if len(s) != 10 or s[4] != "-" or s[7] != "-":
        return False
    digits = s[:4] + s[5:7] + s[8:]
    if not all(ch in "0123456789" for ch in digits):
        return False
    year, month, day = int(s[:4]), int(s[5:7]), int(s[8:])
    if year <= 0 or month <= 0 or day <= 0 or month > 12:
        return False
    return day <= days_in_month(year, month)


def require_date(value, field: str) -> Validated[str]:
    if value is None:
        return Validated.failure(field, ErrorCode.NULL_ARGUMENT)
    if not is_valid_date(value):
        return Validated.failure(field, ErrorCode.INVALID_DATE)
    return Validated.success(value.strip())


def canonical_weekday_index(token) -> Optional[int]:
    """Index (0=Sunday) of a full weekday name, case-insensitive; None otherwise."""
    if not isinstance(token, str):
        return None
    wanted = token.strip().lower()
    for index, name in enumerate(DAYS_OF_THE_WEEK):
        if name.lower() == wanted:
            return index
    return None


def resolve_weekday(token) -> Optional[int]:
    """Resolve a full name, abbreviation or "0".."6" to a weekday index."""
    if isinstance(token, bool):
        return None
    if isinstance(token, int):
        return token if 0 <= token < len(DAYS_OF_THE_WEEK) else None
    index = canonical_weekday_index(token)
    if index is not None:
        return index
    if not isinstance(token, str):
        return None
    wanted = token.strip().lower()
    if wanted in WEEKDAY_ALIASES:
        return WEEKDAY_ALIASES[wanted]
    if len(wanted) == 1 and wanted in "0123456":
        return int(wanted)
    return None


def require_weekday(token, field: str = "Day of week") -> Validated[int]:
    index = resolve_weekday(token)
    if index is None:
        return Validated.failure(field, ErrorCode.INVALID_WEEKDAY)
    return Validated.success(index)


# --- CSV row classification ---------------------------------------------

def _placeholder(token: str) -> bool:
    return token == EMPTY_PLACEHOLDER


def classify_tokens(tokens: Sequence[str]) -> bool:
    """Per-token structural check of one persisted row; never raises."""
    if len(tokens) not in (SHORT_ROW_LENGTH, FULL_ROW_LENGTH):
        return False
    date, day, meal, ingredient, quantity = tokens[:SHORT_ROW_LENGTH]
    if not is_valid_date(date):
        return False
    if canonical_weekday_index(day) is None and not _placeholder(day):
        return False
    if is_blank(meal) and not _placeholder(meal):
        return False
    if is_blank(ingredient) and not _placeholder(ingredient):
        return False
    if _placeholder(quantity):
        if not _placeholder(ingredient):
            return False
    elif not is_valid_double(quantity):
        return False
    return all(is_valid_double(t) or _placeholder(t) for t in tokens[SHORT_ROW_LENGTH:])


def classify_row(raw_line) -> bool:
    """Accept/reject a raw comma-delimited line before it is parsed."""
    if is_blank(raw_line):
        return False
    try:
        tokens = next(csv.reader([raw_line.rstrip("\r\n")]))
    except (csv.Error, StopIteration):
        return False
    return classify_tokens(tokens)


__all__ = [
    "is_blank", "require_non_blank", "require_name", "is_valid_double", "require_double", "coerce_double",
    "days_in_month", "is_valid_date", "require_date", "canonical_weekday_index",
    "resolve_weekday", "require_weekday", "classify_tokens", "classify_row",
]
