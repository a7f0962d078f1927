# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest

from tests.base import ApiTestCase


class TestMeasurements(ApiTestCase):
    def setUp(self) -> None:
        self.headers, _ = self.register()
        self.client_record = self.create_client(self.headers, name="Zeynep Kaya")
        self.base = f"/api/clients/{self.client_record['client_id']}/measurements"

    def test_create_defaults(self) -> None:
        resp = self.client.post(self.base, json={"weight": 72.5, "waist": 80}, headers=self.headers)
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["weight"], 72.5)
        self.assertEqual(body["images"], [])
        self.assertIsNotNone(body["date"])

        feed = self.activities(self.headers, type="measurement")
        self.assertEqual(feed["activities"][0]["description"], "Yeni ölçüm kaydedildi: Zeynep Kaya için")

    def test_list_newest_first_and_latest(self) -> None:
        resp = self.client.get(f"{self.base}/latest", headers=self.headers)
        self.assertEqual(resp.status_code, 404)

        for day, weight in (("2025-01-10", 80), ("2025-03-10", 76), ("2025-02-10", 78)):
            self.client.post(self.base, json={"date": f"{day}T08:00:00Z", "weight": weight}, headers=self.headers)

        resp = self.client.get(self.base, headers=self.headers)
        self.assertEqual([m["weight"] for m in resp.json()], [76, 78, 80])

        resp = self.client.get(f"{self.base}/latest", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["weight"], 76)

    def test_get_update_delete(self) -> None:
        created = self.client.post(self.base, json={"weight": 70, "notes": "sabah"}, headers=self.headers).json()
        url = f"/api/measurements/{created['measurement_id']}"

        self.assertEqual(self.client.get(url, headers=self.headers).json()["notes"], "sabah")

        resp = self.client.put(url, json={"weight": 69.4, "images": ["https://img/1.jpg"]}, headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["weight"], 69.4)
        self.assertEqual(resp.json()["notes"], "sabah")
        self.assertEqual(resp.json()["images"], ["https://img/1.jpg"])

        self.assertEqual(self.client.delete(url, headers=self.headers).status_code, 204)
        self.assertEqual(self.client.get(url, headers=self.headers).status_code, 404)

    def test_other_dietitian_is_forbidden(self) -> None:
        stranger, _ = self.register()
        created = self.client.post(self.base, json={"weight": 70}, headers=self.headers).json()

        self.assertEqual(self.client.get(self.base, headers=stranger).status_code, 403)
        self.assertEqual(self.client.post(self.base, json={"weight": 1}, headers=stranger).status_code, 403)
        resp = self.client.get(f"/api/measurements/{created['measurement_id']}", headers=stranger)
        self.assertEqual(resp.status_code, 403)

    def test_rejects_invalid_values(self) -> None:
        resp = self.client.post(self.base, json={"weight": -3}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)

        created = self.client.post(self.base, json={"weight": 70}, headers=self.headers).json()
        url = f"/api/measurements/{created['measurement_id']}"
        for payload in ({"date": None}, {"images": None}):
            self.assertEqual(self.client.put(url, json=payload, headers=self.headers).status_code, 400, payload)
        self.assertEqual(self.client.put(url, json={"weight": None}, headers=self.headers).status_code, 200)


if __name__ == "__main__":
    unittest.main()
