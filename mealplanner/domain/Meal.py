"""Meal domain entity: a named collection of ingredients, unique by case-insensitive name."""
from typing import List, Optional

from mealplanner.domain.Ingredient import Ingredient
from mealplanner.utilities.errors import ErrorCode, Validated, ValidationError
from mealplanner.utilities.validators import require_name


class Meal:
    def __init__(self, name: str):
        self.name = require_name(name, "Meal name").unwrap()
        self._ingredients: List[Ingredient] = []

    @classmethod
    def create(cls, name) -> Validated["Meal"]:
        result = require_name(name, "Meal name")
        if not result.ok:
            return Validated(error=result.error)
        return Validated.success(cls(result.value))

    @property
    def key(self) -> str:
        return self.name.casefold()

    @property
    def ingredients(self) -> List[Ingredient]:
        '''Returns a copy of the ingredient list (insertion order).'''
        return list(self._ingredients)

    def get_ingredient(self, name: str) -> Optional[Ingredient]:
        if not isinstance(name, str):
            return None
        wanted = name.strip().casefold()
        for ingredient in self._ingredients:
            if ingredient.key == wanted:
                return ingredient
        return None

    def has_ingredient(self, name: str) -> bool:
        return self.get_ingredient(name) is not None

    def add_ingredient(self, ingredient: Ingredient):
        '''
        Adds an ingredient; fails with ALREADY_EXISTS on a name clash (case-insensitive).
        '''
        if ingredient is None:
            raise ValidationError("Ingredient", ErrorCode.NULL_ARGUMENT)
        if ingredient in self._ingredients:
            raise ValidationError("Ingredient", ErrorCode.ALREADY_EXISTS)
        self._ingredients.append(ingredient)

    def remove_ingredient(self, name: str) -> Ingredient:
        '''
        Removes and returns the ingredient with the given name; DOESNT_EXIST if absent.
        '''
        ingredient = self.get_ingredient(name)
        if ingredient is None:
            raise ValidationError("Ingredient", ErrorCode.DOESNT_EXIST)
        self._ingredients.remove(ingredient)
        return ingredient

    def _sum(self, nutrient) -> float:
        # Ingredients without a profile contribute nothing
        return sum(nutrient(ing) for ing in self._ingredients if ing.has_nutrition)

    def carbs_total(self) -> float:
        return self._sum(Ingredient.carbs_total)

    def fat_total(self) -> float:
        return self._sum(Ingredient.fat_total)

    def protein_total(self) -> float:
        return self._sum(Ingredient.protein_total)

    def calories(self) -> float:
        return self._sum(Ingredient.calories)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Meal):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __len__(self) -> int:
        return len(self._ingredients)

    def __str__(self) -> str:
        output = f"{self.name} ({self.calories():.2f} Calories)"
        if self._ingredients:
            output += "\n\tIngredients:"
            for ing in self._ingredients:
                output += f"\n\t- {ing.name} ({ing.quantity:.2f} g)"
        else:
            output += "\n\tNo ingredients."
        return output

    def __repr__(self) -> str:
        return f"Meal({self.name!r}, ingredients={len(self._ingredients)})"
