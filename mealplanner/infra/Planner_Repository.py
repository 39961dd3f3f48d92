"""Planner persistence: flat CSV encoding of the Week > Day > Meal > Ingredient tree.

One row per ingredient. Placeholder-filled rows keep structurally empty
entities alive across a save/load cycle:

    2025-09-14,_EMPTY_,_EMPTY_,_EMPTY_,_EMPTY_          week without meals
    2025-09-14,Monday,Dinner,_EMPTY_,_EMPTY_            meal without ingredients
    2025-09-14,Monday,Dinner,Buns,150.0,50.0,4.5,9.0    ingredient with nutrition

Loading is lenient: rows that fail classification or domain validation are
skipped (and counted) so one corrupt line never aborts the rest of the file.
"""
import csv
import logging
import os
import tempfile
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from mealplanner.domain.Ingredient import Ingredient
from mealplanner.domain.Week import Week
from mealplanner.utilities.constants import (
    CSV_HEADER,
    EMPTY_PLACEHOLDER,
    FULL_ROW_LENGTH,
    SHORT_ROW_LENGTH,
)
from mealplanner.utilities.validators import canonical_weekday_index, classify_tokens

logger = logging.getLogger(__name__)


class RowKind(Enum):
    WEEK_ONLY = "week"
    MEAL_ONLY = "meal"
    FULL = "ingredient"


@dataclass(frozen=True)
class PlannerRow:
    kind: RowKind
    anchor_date: str
    day_index: Optional[int] = None
    meal_name: Optional[str] = None
    ingredient_name: Optional[str] = None
    quantity: Optional[float] = None
    nutrition: Optional[Tuple[float, float, float]] = None


@dataclass
class LoadReport:
    applied: int = 0
    skipped: int = 0


# --- encoding -------------------------------------------------------------

def format_number(value: float) -> str:
    """Plain decimal text for a float; never exponent notation (the loader rejects it)."""
    text = repr(float(value))
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def _placeholders(count: int) -> List[str]:
    return [EMPTY_PLACEHOLDER] * count


def encode_week(week: Week) -> Iterator[List[str]]:
    if week.is_empty():
        yield [week.anchor_date] + _placeholders(SHORT_ROW_LENGTH - 1)
        return
    for day_name, day in week.named_days():
        for meal in day.meals:
            ingredients = meal.ingredients
            if not ingredients:
                yield [week.anchor_date, day_name, meal.name] + _placeholders(2)
                continue
            for ing in ingredients:
                row = [week.anchor_date, day_name, meal.name, ing.name, format_number(ing.quantity)]
                if ing.has_nutrition:
                    row += [format_number(ing.carbs_per_100g),
                            format_number(ing.fat_per_100g),
                            format_number(ing.protein_per_100g)]
                yield row


def encode_rows(weeks: Iterable[Week]) -> Iterator[List[str]]:
    """Header row followed by every week's rows, weeks in ascending anchor order."""
    yield list(CSV_HEADER)
    for week in sorted(weeks):
        yield from encode_week(week)


# --- decoding -------------------------------------------------------------

def _is_placeholder(token: str) -> bool:
    return token == EMPTY_PLACEHOLDER


def parse_row(tokens: Sequence[str]) -> Optional[PlannerRow]:
    """Classify and tag one row; None when the row is structurally unacceptable."""
    if not classify_tokens(tokens):
        return None
    anchor, day, meal, ingredient, quantity = tokens[:SHORT_ROW_LENGTH]
    extra = list(tokens[SHORT_ROW_LENGTH:])
    anchor = anchor.strip()

    if _is_placeholder(day):
        if all(_is_placeholder(t) for t in tokens[1:]):
            return PlannerRow(RowKind.WEEK_ONLY, anchor)
        return None

    if _is_placeholder(meal):
        return None
    day_index = canonical_weekday_index(day)

    if _is_placeholder(ingredient):
        if _is_placeholder(quantity) and all(_is_placeholder(t) for t in extra):
            return PlannerRow(RowKind.MEAL_ONLY, anchor, day_index, meal.strip())
        return None

    if _is_placeholder(quantity):
        return None
    nutrition = None
    if len(tokens) == FULL_ROW_LENGTH:
        if all(_is_placeholder(t) for t in extra):
            nutrition = None
        elif any(_is_placeholder(t) for t in extra):
            return None
        else:
            nutrition = tuple(float(t.strip()) for t in extra)
    return PlannerRow(RowKind.FULL, anchor, day_index, meal.strip(), ingredient.strip(),
                      float(quantity.strip()), nutrition)


def apply_row(planner, row: PlannerRow) -> bool:
    """Attach one tagged row to the planner tree; False (and no mutation) if rejected."""
    ingredient = None
    if row.kind is RowKind.FULL:
        created = Ingredient.create(row.ingredient_name, row.quantity, *(row.nutrition or ()))
        if not created.ok:
            logger.debug("Skipping ingredient row for %s: %s", row.anchor_date, created.error)
            return False
        ingredient = created.value
        existing = planner.find_meal(row.anchor_date, row.day_index, row.meal_name)
        if existing is not None and existing.has_ingredient(ingredient.name):
            logger.debug("Skipping duplicate ingredient %r in meal %r", ingredient.name, existing.name)
            return False

    week = planner.ensure_week(row.anchor_date)
    if row.kind is RowKind.WEEK_ONLY:
        return True
    meal = planner.ensure_meal(week, row.day_index, row.meal_name)
    if ingredient is not None:
        meal.add_ingredient(ingredient)
    return True


def decode_rows(rows: Iterable[Sequence[str]], planner, skip_header: bool = True,
                report: Optional[LoadReport] = None) -> LoadReport:
    report = report if report is not None else LoadReport()
    iterator = iter(rows)
    if skip_header:
        next(iterator, None)
    for line_no, tokens in enumerate(iterator, start=2 if skip_header else 1):
        if not tokens:
            continue
        row = parse_row(tokens)
        if row is None:
            logger.debug("Skipping malformed row %d: %r", line_no, tokens)
            report.skipped += 1
            continue
        if apply_row(planner, row):
            report.applied += 1
        else:
            report.skipped += 1
    return report


# --- file I/O -------------------------------------------------------------

def read_planner_file(path: Union[str, Path], planner) -> LoadReport:
    """Load every row of a planner CSV into `planner`; a missing file loads nothing."""
    path = Path(path)
    if not path.exists():
        logger.warning(f"Planner file not found: {path}. Starting with an empty planner.")
        return LoadReport()
    with open(path, "r", encoding="utf-8", newline="") as f:
        report = LoadReport()
        try:
            decode_rows(csv.reader(f), planner, report=report)
        except csv.Error as e:
            # The reader cannot resynchronise after a broken record; keep what was loaded
            logger.error(f"Stopped reading {path}: {e}")
            report.skipped += 1
    if report.skipped:
        logger.info(f"Loaded {report.applied} rows from {path}, skipped {report.skipped} invalid rows")
    else:
        logger.info(f"Loaded {report.applied} rows from {path}")
    return report


def write_planner_file(path: Union[str, Path], weeks: Iterable[Week]) -> int:
    """Overwrite `path` with the encoded weeks (temp file + rename); returns data rows written."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=".planner_", suffix=".csv")
    count = -1
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            writer = csv.writer(tmp, lineterminator="\n")
            for row in encode_rows(weeks):
                writer.writerow(row)
                count += 1
        os.replace(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
    logger.info(f"Saved {count} rows to {path}")
    return count


__all__ = [
    "RowKind", "PlannerRow", "LoadReport", "format_number", "encode_week", "encode_rows",
    "parse_row", "apply_row", "decode_rows", "read_planner_file", "write_planner_file",
]
