"""Week domain entity: an anchor date (YYYY-MM-DD, meant to be the Sunday) plus seven Days."""
from functools import total_ordering
from typing import Dict, List, Optional, Tuple, Union

from mealplanner.domain.Day import Day
from mealplanner.domain.Ingredient import Ingredient
from mealplanner.utilities.constants import DAYS_OF_THE_WEEK, MONTH_NAMES
from mealplanner.utilities.errors import ErrorCode, Validated, ValidationError
from mealplanner.utilities.validators import require_date, resolve_weekday


@total_ordering
class Week:
    def __init__(self, anchor_date: str):
        self.anchor_date = require_date(anchor_date, "Week anchor date").unwrap()
        self._days: Tuple[Day, ...] = tuple(Day() for _ in DAYS_OF_THE_WEEK)

    @classmethod
    def create(cls, anchor_date) -> Validated["Week"]:
        result = require_date(anchor_date, "Week anchor date")
        if not result.ok:
            return Validated(error=result.error)
        return Validated.success(cls(result.value))

    @staticmethod
    def day_index(day_of_week) -> Optional[int]:
        """Index (0=Sunday) for a weekday name, abbreviation or "0".."6"; None if unknown."""
        return resolve_weekday(day_of_week)

    @property
    def days(self) -> Tuple[Day, ...]:
        return self._days

    def get_day(self, day: Union[int, str]) -> Day:
        '''Positional (0=Sunday) or by name; fails with INVALID_WEEKDAY when unresolved.'''
        index = resolve_weekday(day)
        if index is None:
            raise ValidationError("Day of week", ErrorCode.INVALID_WEEKDAY)
        return self._days[index]

    def named_days(self):
        return zip(DAYS_OF_THE_WEEK, self._days)

    def is_empty(self) -> bool:
        return all(day.is_empty() for day in self._days)

    def get_all_ingredients(self) -> List[Ingredient]:
        """All ingredients of the week merged by case-insensitive name.

        Quantities of repeated ingredients are summed; the first occurrence keeps
        its spelling and nutrition profile. Returned objects are clones, so the
        caller may mutate them freely.
        """
        merged: Dict[str, Ingredient] = {}
        for day in self._days:
            for meal in day.meals:
                for ing in meal.ingredients:
                    existing = merged.get(ing.key)
                    if existing is None:
                        merged[ing.key] = ing.clone()
                    else:
                        existing.set_quantity(existing.quantity + ing.quantity)
        return list(merged.values())

    # Averages always divide by seven, so days without meals pull them down
    def _avg(self, total) -> float:
        return sum(total(day) for day in self._days) / len(DAYS_OF_THE_WEEK)

    def avg_carbs_per_day(self) -> float:
        return self._avg(Day.carbs_total)

    def avg_fat_per_day(self) -> float:
        return self._avg(Day.fat_total)

    def avg_protein_per_day(self) -> float:
        return self._avg(Day.protein_total)

    def avg_calories_per_day(self) -> float:
        return self._avg(Day.calories)

    def month_header(self) -> str:
        year, month, day = self.anchor_date.split("-")
        return f"Week of {MONTH_NAMES[int(month) - 1]} {int(day)}, {int(year)}"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Week):
            return NotImplemented
        return self.anchor_date == other.anchor_date

    def __lt__(self, other) -> bool:
        if not isinstance(other, Week):
            return NotImplemented
        return self.anchor_date < other.anchor_date

    def __hash__(self) -> int:
        return hash(self.anchor_date)

    def __str__(self) -> str:
        output = f"--- {self.month_header()} ---"
        for name, day in self.named_days():
            meal_names = ", ".join(meal.name for meal in day.meals)
            output += f"\n{name}: {meal_names or 'No meals'}"
        return output

    def __repr__(self) -> str:
        return f"Week({self.anchor_date!r})"
