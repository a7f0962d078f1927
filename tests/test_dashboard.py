# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import datetime, time, timezone

from tests.base import ApiTestCase


class TestDashboard(ApiTestCase):
    def stats(self, headers):
        resp = self.client.get("/api/dashboard/stats", headers=headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    def test_empty_dashboard(self) -> None:
        headers, _ = self.register()
        self.assertEqual(
            self.stats(headers),
            {
                "active_clients": 0,
                "today_appointments": 0,
                "active_diet_plans": 0,
                "telegram_linked_clients": 0,
                "weight_goal_achieved": 0,
                "diet_compliance": 1,
                "exercise_compliance": 0,
                "water_intake_tracking": 1,
            },
        )

    def test_counts(self) -> None:
        headers, _ = self.register()
        reached = self.create_client(headers, starting_weight=90, target_weight=80)
        on_track = self.create_client(headers, starting_weight=90, target_weight=80)
        self.create_client(headers, status="inactive")

        base = "/api/clients/{}/measurements"
        self.client.post(base.format(reached["client_id"]), json={"weight": 79.5}, headers=headers)
        self.client.post(base.format(on_track["client_id"]), json={"weight": 85}, headers=headers)

        self.client.post(
            f"/api/clients/{reached['client_id']}/diet-plans",
            json={"title": "Plan", "start_date": "2025-01-01T00:00:00Z"},
            headers=headers,
        )
        noon = datetime.combine(datetime.now(timezone.utc).date(), time(12), tzinfo=timezone.utc)
        self.client.post(
            "/api/appointments",
            json={"client_id": reached["client_id"], "date": noon.isoformat(), "duration": 30},
            headers=headers,
        )
        self.client.post(
            "/api/appointments",
            json={"client_id": reached["client_id"], "date": "2031-01-01T10:00:00Z", "duration": 30},
            headers=headers,
        )

        stats = self.stats(headers)
        self.assertEqual(stats["active_clients"], 2)
        self.assertEqual(stats["today_appointments"], 1)
        self.assertEqual(stats["active_diet_plans"], 1)
        self.assertEqual(stats["weight_goal_achieved"], 1)
        self.assertEqual(stats["diet_compliance"], 1)
        self.assertEqual(stats["exercise_compliance"], 1)
        self.assertEqual(stats["water_intake_tracking"], 2)

    def test_requires_login(self) -> None:
        self.assertEqual(self.client.get("/api/dashboard/stats").status_code, 401)


if __name__ == "__main__":
    unittest.main()
