import unittest

from mealplanner.domain.Planner import Planner
from mealplanner.utilities.errors import ErrorCode, ValidationError

ANCHOR = "2025-09-14"


class TestPlanner(unittest.TestCase):

    def setUp(self):
        self.planner = Planner()
        self.planner.add_week(ANCHOR)
        self.planner.add_meal(ANCHOR, "Monday", "Dinner")

    def assertCode(self, code, func, *args):
        with self.assertRaises(ValidationError) as ctx:
            func(*args)
        self.assertEqual(ctx.exception.code, code)
        return ctx.exception

    def test_duplicate_week(self):
        err = self.assertCode(ErrorCode.ALREADY_EXISTS, self.planner.add_week, ANCHOR)
        self.assertEqual(err.message, "Week already exists.")

    def test_missing_week(self):
        err = self.assertCode(ErrorCode.DOESNT_EXIST, self.planner.get_week, "2025-09-21")
        self.assertEqual(err.field, "Week")
        self.assertCode(ErrorCode.INVALID_DATE, self.planner.get_week, "2025-9-21")

    def test_weeks_sorted(self):
        self.planner.add_week("2025-09-07")
        self.assertEqual([w.anchor_date for w in self.planner.weeks], ["2025-09-07", ANCHOR])

    def test_duplicate_meal_same_day(self):
        self.assertCode(ErrorCode.ALREADY_EXISTS, self.planner.add_meal, ANCHOR, "Monday", "dinner")
        # other days are independent
        self.planner.add_meal(ANCHOR, "Tuesday", "Dinner")

    def test_invalid_weekday(self):
        self.assertCode(ErrorCode.INVALID_WEEKDAY, self.planner.add_meal, ANCHOR, "Someday", "Lunch")

    def test_ingredient_crud(self):
        added = self.planner.add_ingredient(ANCHOR, "Monday", "Dinner", "Buns", "150", "50", "4.5", "9")
        self.assertTrue(added.has_nutrition)
        self.assertCode(ErrorCode.ALREADY_EXISTS, self.planner.add_ingredient,
                        ANCHOR, "Monday", "Dinner", "buns", 10)

        changed = self.planner.change_ingredient_quantity(ANCHOR, "Monday", "Dinner", "BUNS", "200")
        self.assertEqual(changed.quantity, 200.0)
        self.assertCode(ErrorCode.NON_POSITIVE_VALUE, self.planner.change_ingredient_quantity,
                        ANCHOR, "Monday", "Dinner", "Buns", "0")

        self.planner.remove_ingredient(ANCHOR, "Monday", "Dinner", "Buns")
        err = self.assertCode(ErrorCode.DOESNT_EXIST, self.planner.get_ingredient,
                              ANCHOR, "Monday", "Dinner", "Buns")
        self.assertEqual(err.message, "Ingredient does not exist.")

    def test_missing_meal(self):
        err = self.assertCode(ErrorCode.DOESNT_EXIST, self.planner.add_ingredient,
                              ANCHOR, "Monday", "Lunch", "Egg", 50)
        self.assertEqual(err.field, "Meal")

    def test_remove_meal_and_week(self):
        self.planner.remove_meal(ANCHOR, "Monday", "DINNER")
        self.assertCode(ErrorCode.DOESNT_EXIST, self.planner.remove_meal, ANCHOR, "Monday", "Dinner")
        self.planner.remove_week(ANCHOR)
        self.assertEqual(len(self.planner), 0)
        self.assertEqual(self.planner.describe_all_weeks(), "No weeks.")

    def test_shopping_list(self):
        self.planner.add_meal(ANCHOR, "Friday", "Lunch")
        self.planner.add_ingredient(ANCHOR, "Monday", "Dinner", "Egg", 100)
        self.planner.add_ingredient(ANCHOR, "Friday", "Lunch", "egg", 50)
        self.planner.add_ingredient(ANCHOR, "Friday", "Lunch", "Bread", 80)
        items = self.planner.get_shopping_list(ANCHOR)
        self.assertEqual([(i.name, i.quantity) for i in items], [("Bread", 80.0), ("Egg", 150.0)])
        text = self.planner.describe_shopping_list(ANCHOR)
        self.assertIn("- Egg (150.00 g)", text)

    def test_hamburger_buns_scenario(self):
        self.planner.add_meal(ANCHOR, "Monday", "Hamburgers")
        self.planner.add_ingredient(ANCHOR, "Monday", "Hamburgers", "Buns", 150, 50, 4.5, 9)
        buns = self.planner.get_ingredient(ANCHOR, "Monday", "Hamburgers", "Buns")
        self.assertAlmostEqual(buns.calories(), 414.75)

    def test_describe(self):
        self.planner.add_ingredient(ANCHOR, "Monday", "Dinner", "Pasta", 250, 70, 0, 0)
        self.assertIn("Dinner (700.00 Calories)", self.planner.describe_meal(ANCHOR, "Monday", "Dinner"))
        self.assertIn("Average per day: 100.00 Calories", self.planner.describe_week(ANCHOR))
        self.assertTrue(self.planner.describe_day(ANCHOR, "mon").startswith("--- Monday"))
        self.assertIn("Week of September 14, 2025", self.planner.describe_all_weeks())


if __name__ == '__main__':
    unittest.main()
