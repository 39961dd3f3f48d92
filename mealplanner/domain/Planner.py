"""Planner store: owns every Week and dispatches CRUD operations by path.

A path is (anchor date, [weekday], [meal name], [ingredient name]). Missing
elements fail with DOESNT_EXIST naming the level ("Week", "Meal",
"Ingredient"); constructor and mutator failures propagate with their own
codes. Every operation validates its arguments before touching the tree.
"""
import logging
from pathlib import Path
from typing import List, Optional, Union

from mealplanner.domain.Day import Day
from mealplanner.domain.Ingredient import Ingredient
from mealplanner.domain.Meal import Meal
from mealplanner.domain.Week import Week
from mealplanner.infra import Planner_Repository
from mealplanner.logic.shopping.list_builder import build_shopping_list
from mealplanner.utilities.constants import DAYS_OF_THE_WEEK
from mealplanner.utilities.errors import ErrorCode, ValidationError
from mealplanner.utilities.validators import require_date, require_non_blank, require_weekday

logger = logging.getLogger(__name__)


class Planner:
    def __init__(self):
        self._weeks: List[Week] = []

    # --- lookup helpers ---------------------------------------------------
    @property
    def weeks(self) -> List[Week]:
        '''All weeks in ascending anchor-date order.'''
        return sorted(self._weeks)

    def _find_week(self, anchor_date: str) -> Optional[Week]:
        for week in self._weeks:
            if week.anchor_date == anchor_date:
                return week
        return None

    def get_week(self, anchor_date: str) -> Week:
        anchor = require_date(anchor_date, "Week anchor date").unwrap()
        week = self._find_week(anchor)
        if week is None:
            raise ValidationError("Week", ErrorCode.DOESNT_EXIST)
        return week

    def get_day(self, anchor_date: str, day_of_week) -> Day:
        index = require_weekday(day_of_week).unwrap()
        return self.get_week(anchor_date).get_day(index)

    def get_meal(self, anchor_date: str, day_of_week, meal_name: str) -> Meal:
        probe = Meal(meal_name)
        meal = self.get_day(anchor_date, day_of_week).get_meal(probe)
        if meal is None:
            raise ValidationError("Meal", ErrorCode.DOESNT_EXIST)
        return meal

    def get_ingredient(self, anchor_date: str, day_of_week, meal_name: str, ingredient_name: str) -> Ingredient:
        name = require_non_blank(ingredient_name, "Ingredient name").unwrap()
        ingredient = self.get_meal(anchor_date, day_of_week, meal_name).get_ingredient(name)
        if ingredient is None:
            raise ValidationError("Ingredient", ErrorCode.DOESNT_EXIST)
        return ingredient

    # --- weeks -----------------------------------------------------------
    def add_week(self, anchor_date: str) -> Week:
        week = Week(anchor_date)
        if self._find_week(week.anchor_date) is not None:
            raise ValidationError("Week", ErrorCode.ALREADY_EXISTS)
        self._weeks.append(week)
        logger.debug("Added week %s", week.anchor_date)
        return week

    def remove_week(self, anchor_date: str) -> Week:
        week = self.get_week(anchor_date)
        self._weeks.remove(week)
        logger.debug("Removed week %s", week.anchor_date)
        return week

    # --- meals -----------------------------------------------------------
    def add_meal(self, anchor_date: str, day_of_week, meal_name: str) -> Meal:
        '''Adds a new empty meal; a second meal with the same name on the same day is refused.'''
        meal = Meal(meal_name)
        day = self.get_day(anchor_date, day_of_week)
        if day.get_meal(meal) is not None:
            raise ValidationError("Meal", ErrorCode.ALREADY_EXISTS)
        day.add_meal(meal)
        return meal

    def remove_meal(self, anchor_date: str, day_of_week, meal_name: str) -> Meal:
        probe = Meal(meal_name)
        return self.get_day(anchor_date, day_of_week).remove_meal(probe)

    # --- ingredients -----------------------------------------------------
    def add_ingredient(self, anchor_date: str, day_of_week, meal_name: str, ingredient_name: str,
                       quantity, carbs=None, fat=None, protein=None) -> Ingredient:
        ingredient = Ingredient(ingredient_name, quantity, carbs, fat, protein)
        self.get_meal(anchor_date, day_of_week, meal_name).add_ingredient(ingredient)
        return ingredient

    def remove_ingredient(self, anchor_date: str, day_of_week, meal_name: str, ingredient_name: str) -> Ingredient:
        name = require_non_blank(ingredient_name, "Ingredient name").unwrap()
        return self.get_meal(anchor_date, day_of_week, meal_name).remove_ingredient(name)

    def change_ingredient_quantity(self, anchor_date: str, day_of_week, meal_name: str,
                                   ingredient_name: str, quantity) -> Ingredient:
        ingredient = self.get_ingredient(anchor_date, day_of_week, meal_name, ingredient_name)
        ingredient.set_quantity(quantity)
        return ingredient

    # --- aggregation -----------------------------------------------------
    def get_shopping_list(self, anchor_date: str) -> List[Ingredient]:
        return build_shopping_list(self.get_week(anchor_date))

    # --- describe --------------------------------------------------------
    def describe_all_weeks(self) -> str:
        if not self._weeks:
            return "No weeks."
        return "\n".join(f"{week.anchor_date} ({week.month_header()})" for week in self.weeks)

    def describe_week(self, anchor_date: str) -> str:
        week = self.get_week(anchor_date)
        return (f"{week}\n"
                f"Average per day: {week.avg_calories_per_day():.2f} Calories, "
                f"{week.avg_carbs_per_day():.2f} g carbohydrates, "
                f"{week.avg_fat_per_day():.2f} g fat, "
                f"{week.avg_protein_per_day():.2f} g protein")

    def describe_day(self, anchor_date: str, day_of_week) -> str:
        index = require_weekday(day_of_week).unwrap()
        day = self.get_week(anchor_date).get_day(index)
        return (f"--- {DAYS_OF_THE_WEEK[index]} ({day.calories():.2f} Calories) ---\n"
                f"{day}")

    def describe_meal(self, anchor_date: str, day_of_week, meal_name: str) -> str:
        return str(self.get_meal(anchor_date, day_of_week, meal_name))

    def describe_ingredient(self, anchor_date: str, day_of_week, meal_name: str, ingredient_name: str) -> str:
        return str(self.get_ingredient(anchor_date, day_of_week, meal_name, ingredient_name))

    def describe_shopping_list(self, anchor_date: str) -> str:
        items = self.get_shopping_list(anchor_date)
        if not items:
            return "Shopping list is empty."
        lines = ["--- Shopping list ---"]
        lines += [f"- {ing.name} ({ing.quantity:.2f} g)" for ing in items]
        return "\n".join(lines)

    # --- loader hooks (used by the CSV decoder) --------------------------
    def ensure_week(self, anchor_date: str) -> Week:
        week = self._find_week(anchor_date)
        if week is None:
            week = Week(anchor_date)
            self._weeks.append(week)
        return week

    def ensure_meal(self, week: Week, day_index: int, meal_name: str) -> Meal:
        day = week.get_day(day_index)
        probe = Meal(meal_name)
        meal = day.get_meal(probe)
        if meal is None:
            day.add_meal(probe)
            meal = probe
        return meal

    def find_meal(self, anchor_date: str, day_index: int, meal_name: str) -> Optional[Meal]:
        week = self._find_week(anchor_date)
        if week is None:
            return None
        return week.get_day(day_index).get_meal(Meal(meal_name))

    # --- persistence -----------------------------------------------------
    def load(self, path: Union[str, Path]) -> Planner_Repository.LoadReport:
        '''Reads a planner CSV into this store; invalid rows are skipped, not fatal.'''
        return Planner_Repository.read_planner_file(path, self)

    def save(self, path: Union[str, Path]) -> int:
        '''Overwrites the CSV at `path` with the whole tree.'''
        return Planner_Repository.write_planner_file(path, self._weeks)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Planner":
        planner = cls()
        planner.load(path)
        return planner

    def __len__(self) -> int:
        return len(self._weeks)

    def __iter__(self):
        return iter(self.weeks)

    def __str__(self) -> str:
        return self.describe_all_weeks()

    __repr__ = __str__
