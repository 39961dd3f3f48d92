import unittest

from mealplanner.domain.Day import Day
from mealplanner.domain.Ingredient import Ingredient
from mealplanner.domain.Meal import Meal
from mealplanner.utilities.errors import ErrorCode, ValidationError


class TestMeal(unittest.TestCase):

    def test_blank_name(self):
        with self.assertRaises(ValidationError) as ctx:
            Meal("  ")
        self.assertEqual(ctx.exception.code, ErrorCode.INVALID_STRING)

    def test_add_and_duplicate(self):
        meal = Meal("Dinner")
        meal.add_ingredient(Ingredient("Egg", 50))
        with self.assertRaises(ValidationError) as ctx:
            meal.add_ingredient(Ingredient("EGG", 10))
        self.assertEqual(ctx.exception.code, ErrorCode.ALREADY_EXISTS)
        self.assertEqual(len(meal), 1)

    def test_add_none(self):
        with self.assertRaises(ValidationError) as ctx:
            Meal("Dinner").add_ingredient(None)
        self.assertEqual(ctx.exception.code, ErrorCode.NULL_ARGUMENT)

    def test_remove(self):
        meal = Meal("Dinner")
        meal.add_ingredient(Ingredient("Egg", 50))
        removed = meal.remove_ingredient("egg")
        self.assertEqual(removed.name, "Egg")
        with self.assertRaises(ValidationError) as ctx:
            meal.remove_ingredient("Egg")
        self.assertEqual(ctx.exception.code, ErrorCode.DOESNT_EXIST)

    def test_totals_skip_missing_profiles(self):
        meal = Meal("Lunch")
        meal.add_ingredient(Ingredient("Buns", 150, 50, 4.5, 9))
        meal.add_ingredient(Ingredient("Salt", 2))
        self.assertAlmostEqual(meal.calories(), 414.75)
        self.assertAlmostEqual(meal.carbs_total(), 75.0)

    def test_ingredients_is_a_copy(self):
        meal = Meal("Lunch")
        meal.ingredients.append(Ingredient("Egg", 1))
        self.assertEqual(meal.ingredients, [])


class TestDay(unittest.TestCase):

    def test_remove_missing_meal_leaves_list_unchanged(self):
        day = Day()
        day.add_meal(Meal("Breakfast"))
        with self.assertRaises(ValidationError) as ctx:
            day.remove_meal(Meal("Dinner"))
        self.assertEqual(ctx.exception.code, ErrorCode.DOESNT_EXIST)
        self.assertEqual([m.name for m in day.meals], ["Breakfast"])

    def test_remove_by_name_case_insensitive(self):
        day = Day()
        day.add_meal(Meal("Breakfast"))
        removed = day.remove_meal(Meal("breakfast"))
        self.assertEqual(removed.name, "Breakfast")
        self.assertTrue(day.is_empty())

    def test_totals_sum_meals(self):
        day = Day()
        lunch = Meal("Lunch")
        lunch.add_ingredient(Ingredient("Rice", 100, 80, 0, 0))
        dinner = Meal("Dinner")
        dinner.add_ingredient(Ingredient("Oil", 10, 0, 100, 0))
        day.add_meal(lunch)
        day.add_meal(dinner)
        self.assertAlmostEqual(day.calories(), 320.0 + 90.0)
        self.assertAlmostEqual(day.fat_total(), 10.0)

    def test_add_none(self):
        with self.assertRaises(ValidationError):
            Day().add_meal(None)


if __name__ == '__main__':
    unittest.main()
