"""Day domain entity: ordered list of meals (duplicates by name are allowed here)."""
from typing import List, Optional

from mealplanner.domain.Meal import Meal
from mealplanner.utilities.errors import ErrorCode, ValidationError


class Day:
    def __init__(self):
        self._meals: List[Meal] = []

    @property
    def meals(self) -> List[Meal]:
        return list(self._meals)

    def add_meal(self, meal: Meal):
        if meal is None:
            raise ValidationError("Meal", ErrorCode.NULL_ARGUMENT)
        self._meals.append(meal)

    def remove_meal(self, meal: Meal) -> Meal:
        '''Removes the first meal equal to the given one; DOESNT_EXIST leaves the list untouched.'''
        stored = self.get_meal(meal)
        if stored is None:
            raise ValidationError("Meal", ErrorCode.DOESNT_EXIST)
        self._meals.remove(stored)
        return stored

    def get_meal(self, probe: Meal) -> Optional[Meal]:
        if probe is None:
            raise ValidationError("Meal", ErrorCode.NULL_ARGUMENT)
        for meal in self._meals:
            if meal == probe:
                return meal
        return None

    def is_empty(self) -> bool:
        return not self._meals

    def carbs_total(self) -> float:
        return sum(meal.carbs_total() for meal in self._meals)

    def fat_total(self) -> float:
        return sum(meal.fat_total() for meal in self._meals)

    def protein_total(self) -> float:
        return sum(meal.protein_total() for meal in self._meals)

    def calories(self) -> float:
        return sum(meal.calories() for meal in self._meals)

    def __str__(self) -> str:
        if not self._meals:
            return "No meals"
        return "\n".join(str(meal) for meal in self._meals)

    __repr__ = __str__
