"""Shopping list builder.

Provides build_shopping_list(week): the week's merged ingredients sorted by
case-insensitive name, and shopping_list_rows(week) for JSON/PDF output.
"""
from typing import Any, Dict, List

from mealplanner.domain.Ingredient import Ingredient
from mealplanner.domain.Week import Week


def build_shopping_list(week: Week) -> List[Ingredient]:
    """De-duplicated ingredients needed for the week, alphabetised.

    Args:
        week: Week whose meals are walked (all seven days).

    Returns:
        Independent Ingredient clones with quantities summed across occurrences.
    """
    if week is None:
        return []
    return sorted(week.get_all_ingredients(), key=lambda ing: ing.key)


def shopping_list_rows(week: Week) -> List[Dict[str, Any]]:
    return [{"name": ing.name, "quantity": ing.quantity} for ing in build_shopping_list(week)]


__all__ = ['build_shopping_list', 'shopping_list_rows']
