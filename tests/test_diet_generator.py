# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import date

from app.models import Client
from app.services.diet_generator import DietPlanGenerator


def make_client(**fields) -> Client:
    values = {"client_id": 1, "user_id": 1, "name": "Ayşe Yılmaz", "email": "ayse@example.com"}
    values.update(fields)
    return Client(**values)


class TestDietPlanGenerator(unittest.TestCase):
    def setUp(self):
        self.generator = DietPlanGenerator(today=date(2025, 6, 1))

    def test_weight_loss_plan(self):
        plan = self.generator.generate(
            make_client(
                gender="male",
                height=180,
                starting_weight=80,
                target_weight=70,
                birth_date="1995-01-01",
                activity_level="moderate",
            )
        )
        # maintenance round(1780 * 1.55) = 2759, 15% deficit
        self.assertEqual(plan.daily_calories, 2345)
        self.assertEqual((plan.macro_protein, plan.macro_carbs, plan.macro_fat), (176, 264, 65))
        self.assertEqual(plan.name, "Kilo Verme Diyeti - Ayşe Yılmaz için")
        self.assertEqual(
            [m.name for m in plan.meals],
            ["Kahvaltı", "Öğle Yemeği", "Akşam Yemeği", "Ara Öğün 1", "Ara Öğün 2"],
        )
        self.assertIn("30 yaş", plan.description)
        self.assertIn("(30%)", plan.description)

    def test_defaults_without_profile(self):
        plan = self.generator.generate(make_client())
        # female constant, 70 kg, 170 cm, 30 years, sedentary
        self.assertEqual(plan.daily_calories, 1742)
        self.assertEqual(plan.name, "Dengeli Beslenme - Ayşe Yılmaz için")

    def test_weight_gain_and_maintenance(self):
        gain = self.generator.generate(make_client(starting_weight=50, target_weight=55, height=165))
        self.assertTrue(gain.name.startswith("Kilo Alma Diyeti"))

        keep = self.generator.generate(make_client(starting_weight=60, target_weight=60))
        self.assertTrue(keep.name.startswith("Kilo Koruma Diyeti"))

    def test_restrictions(self):
        plan = self.generator.generate(make_client(dietary_restrictions="Vegan, laktoz intoleransı"))
        self.assertEqual(plan.name, "Dengeli Beslenme (Vegan ve Laktozsuz) - Ayşe Yılmaz için")
        names = [m.name for m in plan.meals]
        self.assertEqual(names, ["Kahvaltı", "Ara Öğün", "Öğle Yemeği", "Akşam Yemeği"])
        self.assertEqual(plan.meals[0].foods[1].name, "Badem Sütü")
        self.assertIn("Diyet kısıtlamaları:", plan.description)

    def test_vegetarian_and_gluten(self):
        plan = self.generator.generate(make_client(dietary_restrictions="vejetaryen, gluten"))
        self.assertIn("(Vejetaryen ve Glutensiz)", plan.name)
        self.assertEqual(len(plan.meals), 5)

    def test_medical_history(self):
        diabetes = self.generator.generate(make_client(medical_history="Tip 2 diyabet"))
        self.assertIn("(Diyabete Özel)", diabetes.name)
        calories = diabetes.daily_calories
        self.assertEqual(diabetes.macro_protein, round(calories * 0.35 / 4))
        self.assertEqual(diabetes.macro_fat, round(calories * 0.30 / 9))
        self.assertIn("Düşük glisemik", diabetes.description)

        both = self.generator.generate(make_client(medical_history="diyabet ve hipertansiyon"))
        self.assertIn("(Hipertansiyon ve Diyabete Özel)", both.name)

        cholesterol = self.generator.generate(make_client(medical_history="Yüksek kolesterol"))
        self.assertIn("(Kolesterol Kontrollü)", cholesterol.name)

    def test_active_clients_get_more_protein(self):
        plan = self.generator.generate(make_client(activity_level="very_active"))
        self.assertIn("(35%)", plan.description)
        self.assertIn("(20%)", plan.description)


if __name__ == "__main__":
    unittest.main()
