# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from tests.base import ApiTestCase

MEALS = [
    {
        "name": "Kahvaltı",
        "foods": [
            {"name": "Yumurta", "amount": "2 adet", "calories": 160},
            {"name": "Tam Tahıllı Ekmek", "amount": "1 dilim", "calories": 80},
        ],
    }
]


class TestDietPlans(ApiTestCase):
    def setUp(self) -> None:
        self.headers, self.user = self.register()
        self.client_record = self.create_client(self.headers, name="Ahmet Yılmaz")
        self.cid = self.client_record["client_id"]

    def _create(self, **fields):
        payload = {"title": "Akdeniz Diyeti Planı", "start_date": "2025-01-01T00:00:00Z"}
        payload.update(fields)
        resp = self.client.post(f"/api/clients/{self.cid}/diet-plans", json=payload, headers=self.headers)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_create_requires_client_id(self) -> None:
        resp = self.client.post(
            "/api/diet-plans",
            json={"title": "Plan", "start_date": "2025-01-01T00:00:00Z"},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Danışan ID'si gereklidir")

    def test_create_with_client_id_in_body(self) -> None:
        resp = self.client.post(
            "/api/diet-plans",
            json={
                "client_id": self.cid,
                "title": "Plan",
                "start_date": "2025-01-01T00:00:00Z",
                "daily_calories": 1800,
                "macro_protein": 120,
                "meals": MEALS,
            },
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["created_by"], self.user["user_id"])
        self.assertEqual(body["content"], "")
        self.assertEqual(body["status"], "active")
        self.assertEqual(body["meals"][0]["foods"][1]["name"], "Tam Tahıllı Ekmek")

        feed = self.activities(self.headers, type="diet_plan")
        self.assertEqual(
            feed["activities"][0]["description"],
            'Yeni diyet planı oluşturuldu: Ahmet Yılmaz için "Plan"',
        )

    def test_validation(self) -> None:
        url = f"/api/clients/{self.cid}/diet-plans"
        bad = [
            {"title": "P", "start_date": "2025-01-01T00:00:00Z"},
            {"title": "Plan"},
            {"title": "Plan", "start_date": "2025-01-01T00:00:00Z", "daily_calories": -1},
            {
                "title": "Plan",
                "start_date": "2025-01-01T00:00:00Z",
                "meals": [{"name": "Öğle", "foods": [{"name": "x", "calories": -5}]}],
            },
        ]
        for payload in bad:
            self.assertEqual(self.client.post(url, json=payload, headers=self.headers).status_code, 400, payload)

    def test_lists_and_active_plan(self) -> None:
        resp = self.client.get(f"/api/clients/{self.cid}/diet-plans/active", headers=self.headers)
        self.assertEqual(resp.status_code, 404)

        older = self._create(title="Eski Plan", start_date="2025-01-01T00:00:00Z")
        newer = self._create(title="Yeni Plan", start_date="2025-05-01T00:00:00Z")
        self._create(title="Biten Plan", start_date="2025-09-01T00:00:00Z", status="completed")

        plans = self.client.get(f"/api/clients/{self.cid}/diet-plans", headers=self.headers).json()
        self.assertEqual([p["title"] for p in plans], ["Biten Plan", "Yeni Plan", "Eski Plan"])

        active = self.client.get(f"/api/clients/{self.cid}/diet-plans/active", headers=self.headers).json()
        self.assertEqual(active["diet_plan_id"], newer["diet_plan_id"])

        mine = self.client.get("/api/diet-plans", headers=self.headers).json()
        self.assertIn(older["diet_plan_id"], [p["diet_plan_id"] for p in mine])

    def test_update_and_delete(self) -> None:
        plan = self._create()
        url = f"/api/diet-plans/{plan['diet_plan_id']}"

        resp = self.client.put(url, json={"status": "completed", "meals": MEALS}, headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "completed")
        self.assertEqual(resp.json()["title"], plan["title"])
        self.assertEqual(len(resp.json()["meals"]), 1)

        for field in ("title", "start_date", "status", "daily_calories", "meals"):
            resp = self.client.put(url, json={field: None}, headers=self.headers)
            self.assertEqual(resp.status_code, 400, field)
        resp = self.client.put(url, json={"end_date": None}, headers=self.headers)
        self.assertEqual(resp.status_code, 200)

        resp = self.client.delete(url, headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Diyet planı başarıyla silindi")
        self.assertEqual(self.client.get(url, headers=self.headers).status_code, 404)

    def test_other_dietitian_is_forbidden(self) -> None:
        stranger, _ = self.register()
        plan = self._create()

        self.assertEqual(
            self.client.get(f"/api/diet-plans/{plan['diet_plan_id']}", headers=stranger).status_code, 403
        )
        self.assertEqual(
            self.client.delete(f"/api/diet-plans/{plan['diet_plan_id']}", headers=stranger).status_code, 403
        )
        resp = self.client.post(
            "/api/diet-plans",
            json={"client_id": self.cid, "title": "Plan", "start_date": "2025-01-01T00:00:00Z"},
            headers=stranger,
        )
        self.assertEqual(resp.status_code, 403)

    def test_generate(self) -> None:
        client = self.create_client(
            self.headers,
            name="Mehmet Demir",
            gender="male",
            height=180,
            starting_weight=95,
            target_weight=85,
            activity_level="light",
            medical_history="Hipertansiyon",
        )
        resp = self.client.post(f"/api/clients/{client['client_id']}/diet-plans/generate", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        plan = resp.json()
        self.assertTrue(plan["name"].startswith("Kilo Verme Diyeti (Hipertansiyona Özel)"))
        self.assertGreater(plan["daily_calories"], 0)
        self.assertEqual(len(plan["meals"]), 5)

        # nothing is stored
        plans = self.client.get(f"/api/clients/{client['client_id']}/diet-plans", headers=self.headers).json()
        self.assertEqual(plans, [])


if __name__ == "__main__":
    unittest.main()
