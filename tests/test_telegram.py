# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import time
import unittest
from typing import Any, Dict, List

import httpx

from tests.base import ApiTestCase  # isort: skip
from app.services.telegram_service import (INVALID_CODE_TEXT, LINKED_TEXT,
                                           RELAY_ONLY_TEXT, WELCOME_TEXT,
                                           TelegramService,
                                           get_telegram_service)

VALID_TOKEN = "123456:valid"


class FakeBotApi:
    """
    Stands in for api.telegram.org: getMe, getUpdates from a queue, sendMessage recorded.
    """

    def __init__(self):
        self.updates: List[Dict[str, Any]] = []
        self.sent: List[tuple] = []
        self.fail_chats: set = set()
        self._next_update_id = 1

    def push_text(self, chat_id: int, text: str) -> None:
        self.updates.append(
            {"update_id": self._next_update_id, "message": {"chat": {"id": chat_id}, "text": text}}
        )
        self._next_update_id += 1

    def texts_for(self, chat_id) -> List[str]:
        return [text for chat, text in self.sent if str(chat) == str(chat_id)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        token, method = request.url.path.strip("/").split("/")
        if token != f"bot{VALID_TOKEN}":
            return httpx.Response(401, json={"ok": False, "description": "Unauthorized"})

        params = json.loads(request.content or b"{}")
        if method == "getMe":
            return httpx.Response(200, json={"ok": True, "result": {"id": 1, "username": "diyetim_test_bot"}})
        if method == "getUpdates":
            pending = [u for u in self.updates if u["update_id"] >= params.get("offset", 0)]
            return httpx.Response(200, json={"ok": True, "result": pending})
        if method == "sendMessage":
            if params["chat_id"] in self.fail_chats:
                return httpx.Response(400, json={"ok": False, "description": "Bad Request: chat not found"})
            self.sent.append((params["chat_id"], params["text"]))
            return httpx.Response(200, json={"ok": True, "result": {"message_id": len(self.sent)}})
        return httpx.Response(404, json={"ok": False, "description": "Not Found"})


class TestTelegram(ApiTestCase):
    def setUp(self) -> None:
        self.api = FakeBotApi()
        self.service = TelegramService(
            transport=httpx.MockTransport(self.api), api_base="https://bot.test", idle_interval=0.01
        )
        self.app.dependency_overrides[get_telegram_service] = lambda: self.service
        self.headers, _ = self.register()

    def tearDown(self) -> None:
        self.client.post("/api/telegram/stop", headers=self.headers)
        self.app.dependency_overrides.pop(get_telegram_service, None)

    def _wait_for(self, predicate, timeout: float = 5.0) -> None:
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            if predicate():
                return
            time.sleep(0.02)
        self.fail("condition not met in time")

    def _initialize(self) -> None:
        resp = self.client.post("/api/telegram/initialize", json={"token": VALID_TOKEN}, headers=self.headers)
        self.assertEqual(resp.status_code, 200, resp.text)

    def _link(self, client: Dict[str, Any], chat_id: int) -> None:
        resp = self.client.post(f"/api/clients/{client['client_id']}/telegram-reference", headers=self.headers)
        code = resp.json()["reference_code"]
        self.api.push_text(chat_id, f"/start {code.lower()}")
        self._wait_for(lambda: LINKED_TEXT in self.api.texts_for(chat_id))

    def test_initialize_and_stop(self) -> None:
        resp = self.client.post("/api/telegram/initialize", json={}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Bot token'ı gereklidir")

        resp = self.client.post("/api/telegram/initialize", json={"token": "nope"}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Unauthorized", resp.json()["message"])
        self.assertFalse(self.service.is_running)

        self._initialize()
        status = self.client.get("/api/telegram/status", headers=self.headers).json()
        self.assertEqual(status, {"running": True, "bot_username": "diyetim_test_bot"})

        resp = self.client.post("/api/telegram/stop", headers=self.headers)
        self.assertEqual(resp.json()["success"], True)
        self.assertFalse(self.client.get("/api/telegram/status", headers=self.headers).json()["running"])

        feed = self.activities(self.headers, type="telegram")
        self.assertEqual(
            [a["description"] for a in feed["activities"]],
            ["Telegram botu durduruldu", "Telegram botu başlatıldı"],
        )

    def test_reference_code(self) -> None:
        client = self.create_client(self.headers)
        url = f"/api/clients/{client['client_id']}/telegram-reference"

        body = self.client.post(url, headers=self.headers).json()
        self.assertTrue(body["success"])
        self.assertRegex(body["reference_code"], r"^[A-Z0-9]{6}$")
        self.assertEqual(body["bot_name"], "Henüz bot oluşturulmadı")

        self._initialize()
        body = self.client.post(url, headers=self.headers).json()
        self.assertNotEqual(body["bot_name"], "Henüz bot oluşturulmadı")

        stranger, _ = self.register()
        self.assertEqual(self.client.post(url, headers=stranger).status_code, 403)

    def test_bot_conversation(self) -> None:
        self._initialize()
        client = self.create_client(self.headers)

        self.api.push_text(100, "/start")
        self.api.push_text(100, "merhaba")
        self.api.push_text(100, "/start ZZZZZZ")
        self._wait_for(lambda: len(self.api.texts_for(100)) == 3)
        self.assertEqual(self.api.texts_for(100), [WELCOME_TEXT, RELAY_ONLY_TEXT, INVALID_CODE_TEXT])

        self._link(client, 200)
        linked = self.client.get(f"/api/clients/{client['client_id']}", headers=self.headers).json()
        self.assertEqual(linked["telegram_chat_id"], "200")

        stats = self.client.get("/api/dashboard/stats", headers=self.headers).json()
        self.assertEqual(stats["telegram_linked_clients"], 1)

    def test_send_message(self) -> None:
        linked = self.create_client(self.headers)
        unlinked = self.create_client(self.headers)
        payload = {"client_ids": [linked["client_id"], unlinked["client_id"]], "message": "Su içmeyi unutmayın"}

        resp = self.client.post("/api/telegram/send-message", json=payload, headers=self.headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["failed"], payload["client_ids"])
        self.assertEqual(resp.json()["success"], [])

        self._initialize()
        self._link(linked, 300)

        for bad in ({"client_ids": [], "message": "x"}, {"client_ids": [linked["client_id"]]}):
            resp = self.client.post("/api/telegram/send-message", json=bad, headers=self.headers)
            self.assertEqual(resp.status_code, 400)
            self.assertTrue(resp.json()["error"])

        resp = self.client.post("/api/telegram/send-message", json=payload, headers=self.headers)
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["success"], [linked["client_id"]])
        self.assertEqual(resp.json()["failed"], [unlinked["client_id"]])
        self.assertIn("Su içmeyi unutmayın", self.api.texts_for(300))

    def test_send_failure_is_reported(self) -> None:
        self._initialize()
        client = self.create_client(self.headers)
        self._link(client, 400)
        self.api.fail_chats.add("400")

        resp = self.client.post(
            "/api/telegram/send-message",
            json={"client_ids": [client["client_id"]], "message": "selam"},
            headers=self.headers,
        )
        self.assertEqual(resp.json()["failed"], [client["client_id"]])


if __name__ == "__main__":
    unittest.main()
