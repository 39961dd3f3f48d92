"""Nutrition aggregation logic for a planner week."""
from typing import Any, Dict

from mealplanner.domain.Week import Week


def _totals(entity) -> Dict[str, float]:
    return {
        'calories': entity.calories(),
        'carbs': entity.carbs_total(),
        'fat': entity.fat_total(),
        'protein': entity.protein_total(),
    }


def compute_week_nutrition(week: Week) -> Dict[str, Any]:
    """Aggregate nutrition stats for the given week.

    Returns structure:
    {
      'anchor_date': 'YYYY-MM-DD',
      'days': {
         'Sunday': {'calories': kcal, 'carbs': g, 'fat': g, 'protein': g,
                    'meals': {'Pancakes': {'calories': kcal, 'carbs': g, 'fat': g, 'protein': g}, ...}},
         ...
      },
      'week_totals': {'calories': kcal, 'carbs': g, 'fat': g, 'protein': g},
      'daily_averages': {...}   # week totals / 7, empty days included
    }
    """
    days_result = {}
    week_totals = {'calories': 0.0, 'carbs': 0.0, 'fat': 0.0, 'protein': 0.0}
    for name, day in week.named_days():
        entry = _totals(day)
        entry['meals'] = {meal.name: _totals(meal) for meal in day.meals}
        days_result[name] = entry
        for key in week_totals:
            week_totals[key] += entry[key]

    return {
        'anchor_date': week.anchor_date,
        'days': days_result,
        'week_totals': week_totals,
        'daily_averages': {
            'calories': week.avg_calories_per_day(),
            'carbs': week.avg_carbs_per_day(),
            'fat': week.avg_fat_per_day(),
            'protein': week.avg_protein_per_day(),
        },
    }


__all__ = ["compute_week_nutrition"]
