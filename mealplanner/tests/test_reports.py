import unittest

from mealplanner.domain.Ingredient import Ingredient
from mealplanner.domain.Meal import Meal
from mealplanner.domain.Week import Week
from mealplanner.infra.pdf_utils import generate_pdf_for_week
from mealplanner.logic.reporting.nutrition import compute_week_nutrition
from mealplanner.logic.shopping.list_builder import build_shopping_list, shopping_list_rows


def _week():
    week = Week("2025-09-14")
    dinner = Meal("Dinner")
    dinner.add_ingredient(Ingredient("Buns", 150, 50, 4.5, 9))
    dinner.add_ingredient(Ingredient("Salt", 2))
    lunch = Meal("Lunch")
    lunch.add_ingredient(Ingredient("buns", 50, 50, 4.5, 9))
    lunch.add_ingredient(Ingredient("Apple", 120))
    week.get_day("Monday").add_meal(dinner)
    week.get_day("Wednesday").add_meal(lunch)
    return week


class TestShoppingList(unittest.TestCase):

    def test_sorted_and_merged(self):
        items = build_shopping_list(_week())
        self.assertEqual([i.name for i in items], ["Apple", "Buns", "Salt"])
        self.assertEqual(items[1].quantity, 200.0)

    def test_rows(self):
        rows = shopping_list_rows(_week())
        self.assertIn({"name": "Salt", "quantity": 2.0}, rows)

    def test_none_week(self):
        self.assertEqual(build_shopping_list(None), [])


class TestNutritionReport(unittest.TestCase):

    def test_structure(self):
        report = compute_week_nutrition(_week())
        self.assertEqual(report["anchor_date"], "2025-09-14")
        self.assertEqual(len(report["days"]), 7)
        self.assertAlmostEqual(report["days"]["Monday"]["calories"], 414.75)
        self.assertAlmostEqual(report["days"]["Monday"]["meals"]["Dinner"]["carbs"], 75.0)
        self.assertEqual(report["days"]["Sunday"]["calories"], 0)
        self.assertAlmostEqual(report["week_totals"]["calories"], 414.75 + 138.25)
        self.assertAlmostEqual(report["daily_averages"]["calories"], (414.75 + 138.25) / 7)


class TestPdfExport(unittest.TestCase):

    def test_generates_pdf_bytes(self):
        pdf = generate_pdf_for_week(_week())
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_empty_week(self):
        self.assertTrue(generate_pdf_for_week(Week("2025-09-07")).startswith(b"%PDF"))


if __name__ == '__main__':
    unittest.main()
