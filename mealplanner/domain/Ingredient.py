"""Ingredient domain entity: name, quantity in grams, optional nutrient-density profile."""
from __future__ import annotations
from dataclasses import dataclass
from functools import total_ordering

from mealplanner.utilities.constants import KCAL_PER_GRAM_CARB, KCAL_PER_GRAM_FAT, KCAL_PER_GRAM_PROTEIN
from mealplanner.utilities.errors import ErrorCode, NutritionUnavailableError, Validated
from mealplanner.utilities.validators import coerce_double, require_name


@dataclass(frozen=True)
class NutritionProfile:
    """Grams of each macronutrient per 100 g of ingredient."""
    carbs_per_100g: float
    fat_per_100g: float
    protein_per_100g: float

    @staticmethod
    def create(carbs, fat, protein) -> Validated["NutritionProfile"]:
        values = []
        for field, raw in (("Carbohydrates per 100 grams", carbs),
                           ("Fat per 100 grams", fat),
                           ("Protein per 100 grams", protein)):
            result = coerce_double(raw, field)
            if not result.ok:
                return Validated(error=result.error)
            if result.value < 0:
                return Validated.failure(field, ErrorCode.NEGATIVE_VALUE)
            values.append(result.value)
        return Validated.success(NutritionProfile(*values))


def _validate_quantity(quantity, field: str = "Quantity") -> Validated[float]:
    result = coerce_double(quantity, field)
    if result.ok and result.value <= 0:
        return Validated.failure(field, ErrorCode.NON_POSITIVE_VALUE)
    return result


@total_ordering
class Ingredient:
    def __init__(self, name: str, quantity, carbs=None, fat=None, protein=None):
        """Build an ingredient; with carbs/fat/protein (all three) it carries a nutrition profile.

        Raises ValidationError on a blank name, a non-positive quantity or a negative nutrient.
        """
        validated = Ingredient.validate(name, quantity, carbs, fat, protein)
        if validated.error is not None:
            raise validated.error
        self.name, self.quantity, self.nutrition = validated.value

    @staticmethod
    def validate(name, quantity, carbs=None, fat=None, protein=None) -> Validated[tuple]:
        '''Checks constructor arguments without raising; value is (name, quantity, profile).'''
        name_result = require_name(name, "Ingredient name")
        if not name_result.ok:
            return Validated(error=name_result.error)
        quantity_result = _validate_quantity(quantity)
        if not quantity_result.ok:
            return Validated(error=quantity_result.error)
        profile = None
        nutrients = (carbs, fat, protein)
        if any(n is not None for n in nutrients):
            profile_result = NutritionProfile.create(*nutrients)
            if not profile_result.ok:
                return Validated(error=profile_result.error)
            profile = profile_result.value
        return Validated.success((name_result.value, quantity_result.value, profile))

    @classmethod
    def create(cls, name, quantity, carbs=None, fat=None, protein=None) -> Validated["Ingredient"]:
        '''Fallible factory used by the CSV loader: returns the failure instead of raising.'''
        validated = cls.validate(name, quantity, carbs, fat, protein)
        if not validated.ok:
            return Validated(error=validated.error)
        ingredient = cls.__new__(cls)
        ingredient.name, ingredient.quantity, ingredient.nutrition = validated.value
        return Validated.success(ingredient)

    @property
    def key(self) -> str:
        return self.name.casefold()

    @property
    def has_nutrition(self) -> bool:
        return self.nutrition is not None

    def set_quantity(self, quantity):
        '''Replaces the quantity (grams); must stay positive.'''
        self.quantity = _validate_quantity(quantity).unwrap()

    def _profile(self) -> NutritionProfile:
        if self.nutrition is None:
            raise NutritionUnavailableError(self.name)
        return self.nutrition

    @property
    def carbs_per_100g(self) -> float:
        return self._profile().carbs_per_100g

    @property
    def fat_per_100g(self) -> float:
        return self._profile().fat_per_100g

    @property
    def protein_per_100g(self) -> float:
        return self._profile().protein_per_100g

    def carbs_total(self) -> float:
        return self._profile().carbs_per_100g / 100.0 * self.quantity

    def fat_total(self) -> float:
        return self._profile().fat_per_100g / 100.0 * self.quantity

    def protein_total(self) -> float:
        return self._profile().protein_per_100g / 100.0 * self.quantity

    def calories(self) -> float:
        '''Kilocalories for the stored quantity (Atwater 4/9/4).'''
        return (self.protein_total() * KCAL_PER_GRAM_PROTEIN
                + self.fat_total() * KCAL_PER_GRAM_FAT
                + self.carbs_total() * KCAL_PER_GRAM_CARB)

    def clone(self) -> "Ingredient":
        copy = Ingredient.__new__(Ingredient)
        copy.name, copy.quantity, copy.nutrition = self.name, self.quantity, self.nutrition
        return copy

    def matches(self, other: "Ingredient") -> bool:
        '''Structural comparison: same name (case-insensitive), quantity and profile.'''
        return (isinstance(other, Ingredient) and self == other
                and self.quantity == other.quantity and self.nutrition == other.nutrition)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other) -> bool:
        if not isinstance(other, Ingredient):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        lines = [f"{self.name} ({self.quantity:.2f} g)"]
        if self.has_nutrition:
            lines.append(f"\t{self.carbs_total():.2f} g carbohydrates")
            lines.append(f"\t{self.fat_total():.2f} g fat")
            lines.append(f"\t{self.protein_total():.2f} g protein")
            lines.append(f"\t{self.calories():.2f} Calories")
        else:
            lines.append("\tNo nutritional profile")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Ingredient({self.name!r}, {self.quantity!r}, nutrition={self.nutrition!r})"

    def to_dict(self):
        '''Converts the Ingredient to a JSON-friendly dictionary.'''
        data = {"name": self.name, "quantity": self.quantity, "nutrition": None}
        if self.has_nutrition:
            data["nutrition"] = {
                "carbs_per_100g": self.nutrition.carbs_per_100g,
                "fat_per_100g": self.nutrition.fat_per_100g,
                "protein_per_100g": self.nutrition.protein_per_100g,
                "carbs": self.carbs_total(),
                "fat": self.fat_total(),
                "protein": self.protein_total(),
                "calories": self.calories(),
            }
        return data


__all__ = ["Ingredient", "NutritionProfile"]
