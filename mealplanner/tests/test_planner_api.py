import os
import tempfile
import unittest

from fastapi.testclient import TestClient

from mealplanner.api.api_run import create_app
from mealplanner.domain.Planner import Planner

WEEK = "/api/weeks/2025-09-14"
DINNER = WEEK + "/days/Monday/meals/Dinner"


class TestPlannerAPI(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "data.csv")
        self.app = create_app(self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_plan_a_week(self):
        with TestClient(self.app) as client:
            resp = client.post("/api/weeks", json={"anchor_date": "2025-09-14"})
            self.assertEqual(resp.status_code, 201)
            self.assertEqual(resp.json()["label"], "Week of September 14, 2025")

            resp = client.post(WEEK + "/days/Monday/meals", json={"name": "Dinner"})
            self.assertEqual(resp.status_code, 201)

            resp = client.post(DINNER + "/ingredients", json={
                "name": "Buns", "quantity": 150,
                "carbs_per_100g": 50, "fat_per_100g": 4.5, "protein_per_100g": 9,
            })
            self.assertEqual(resp.status_code, 201)
            self.assertAlmostEqual(resp.json()["nutrition"]["calories"], 414.75)

            resp = client.get(WEEK + "/days/mon")
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json()["day"], "Monday")
            self.assertEqual(resp.json()["meals"][0]["name"], "Dinner")

            data = client.get(WEEK + "/shopping-list").json()
            self.assertEqual(data["count"], 1)
            self.assertEqual(data["items"][0], {"name": "Buns", "quantity": 150.0})

            data = client.get(WEEK + "/nutrition").json()
            self.assertAlmostEqual(data["daily_averages"]["calories"], 414.75 / 7)

            resp = client.put(DINNER + "/ingredients/buns", json={"quantity": "200"})
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(resp.json()["quantity"], 200.0)

            resp = client.get(WEEK + "/pdf")
            self.assertEqual(resp.status_code, 200)
            self.assertTrue(resp.content.startswith(b"%PDF"))

        # shutdown writes the planner back to disk
        with open(self.path, encoding="utf-8") as f:
            self.assertIn("2025-09-14,Monday,Dinner,Buns,200.0,50.0,4.5,9.0", f.read())

    def test_error_statuses(self):
        with TestClient(self.app) as client:
            client.post("/api/weeks", json={"anchor_date": "2025-09-14"})

            resp = client.post("/api/weeks", json={"anchor_date": "2025-09-14"})
            self.assertEqual(resp.status_code, 409)
            self.assertEqual(resp.json()["code"], "ALREADY_EXISTS")

            resp = client.post("/api/weeks", json={"anchor_date": "2025-14-09"})
            self.assertEqual(resp.status_code, 400)
            self.assertEqual(resp.json()["code"], "INVALID_DATE")

            resp = client.get("/api/weeks/2025-09-21")
            self.assertEqual(resp.status_code, 404)
            self.assertEqual(resp.json()["error"], "Week does not exist.")

            resp = client.post(WEEK + "/days/Someday/meals", json={"name": "Dinner"})
            self.assertEqual(resp.status_code, 400)
            self.assertEqual(resp.json()["code"], "INVALID_WEEKDAY")

            client.post(WEEK + "/days/Monday/meals", json={"name": "Dinner"})
            resp = client.post(DINNER + "/ingredients", json={"name": "Buns", "quantity": "0"})
            self.assertEqual(resp.status_code, 400)
            self.assertEqual(resp.json()["code"], "NON_POSITIVE_VALUE")

            resp = client.delete(DINNER + "/ingredients/Buns")
            self.assertEqual(resp.status_code, 404)
            self.assertEqual(resp.json()["field"], "Ingredient")

    def test_uses_the_planner_it_is_given(self):
        mine = Planner()
        app = create_app(self.path, planner=mine)
        self.assertIs(app.state.planner, mine)
        with TestClient(app) as client:
            client.post("/api/weeks", json={"anchor_date": "2025-09-14"})
        self.assertEqual([w.anchor_date for w in mine.weeks], ["2025-09-14"])
        self.assertTrue(os.path.exists(self.path))

    def test_loads_existing_file(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("WeekAnchorDate,DayOfWeek,MealName,IngredientName,Quantity,CarbsPer100g,FatPer100g,ProteinPer100g\n")
            f.write("2025-09-07,_EMPTY_,_EMPTY_,_EMPTY_,_EMPTY_\n")
            f.write("2025-09-14,Sunday,Brunch,Egg,100\n")
        with TestClient(self.app) as client:
            data = client.get("/api/weeks").json()
            self.assertEqual(data["count"], 2)
            self.assertEqual([w["anchor_date"] for w in data["weeks"]], ["2025-09-07", "2025-09-14"])

            resp = client.delete(WEEK + "/days/Sunday/meals/brunch")
            self.assertEqual(resp.json()["removed"], "Brunch")

            resp = client.delete("/api/weeks/2025-09-07")
            self.assertEqual(resp.status_code, 200)
            self.assertEqual(client.get("/api/weeks").json()["count"], 1)


if __name__ == '__main__':
    unittest.main()
