# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
import uuid

from tests.base import ApiTestCase


class TestAuth(ApiTestCase):
    def test_register_returns_user_and_token(self) -> None:
        email = f"{uuid.uuid4().hex[:10]}@example.com"
        resp = self.client.post(
            "/api/auth/register",
            json={"name": "Elif", "email": email, "password": "secret123", "phone": "555"},
        )
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertTrue(body["token"])
        self.assertEqual(body["user"]["email"], email)
        self.assertEqual(body["user"]["phone"], "555")
        self.assertNotIn("password_hash", body["user"])
        self.assertNotIn("password", body["user"])

    def test_register_duplicate_email(self) -> None:
        email = f"{uuid.uuid4().hex[:10]}@example.com"
        payload = {"name": "Elif", "email": email, "password": "secret123"}
        self.assertEqual(self.client.post("/api/auth/register", json=payload).status_code, 201)

        resp = self.client.post("/api/auth/register", json=payload)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Bu e-posta adresi zaten kullanılıyor")

    def test_register_validation_errors_are_400(self) -> None:
        resp = self.client.post(
            "/api/auth/register", json={"name": "E", "email": "not-an-email", "password": "123"}
        )
        self.assertEqual(resp.status_code, 400)
        body = resp.json()
        self.assertIn("message", body)
        fields = {err["loc"][-1] for err in body["detail"]}
        self.assertEqual(fields, {"name", "email", "password"})

    def test_login(self) -> None:
        headers, user = self.register(password="pass1234")

        resp = self.client.post("/api/auth/login", json={"email": user["email"], "password": "pass1234"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["user"]["user_id"], user["user_id"])

        resp = self.client.post("/api/auth/login", json={"email": user["email"], "password": "wrong-pass"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Geçersiz e-posta veya şifre")

        resp = self.client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "x"})
        self.assertEqual(resp.status_code, 401)

    def test_me_requires_token(self) -> None:
        self.assertEqual(self.client.get("/api/auth/me").status_code, 401)

        resp = self.client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(resp.status_code, 401)

        headers, user = self.register()
        resp = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], user["email"])

    def test_update_profile(self) -> None:
        headers, _ = self.register()

        resp = self.client.put("/api/auth/profile", json={"bio": "Uzman diyetisyen"}, headers=headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["bio"], "Uzman diyetisyen")

        resp = self.client.put("/api/auth/profile", json={}, headers=headers)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["message"], "Güncellenecek veri bulunamadı")

    def test_update_profile_rejects_null_name(self) -> None:
        headers, user = self.register()

        for payload in ({"name": None}, {"email": None}):
            resp = self.client.put("/api/auth/profile", json=payload, headers=headers)
            self.assertEqual(resp.status_code, 400, payload)

        me = self.client.get("/api/auth/me", headers=headers).json()
        self.assertEqual(me["name"], user["name"])

    def test_update_profile_rejects_taken_email(self) -> None:
        headers, _ = self.register()
        _, other = self.register()

        resp = self.client.put("/api/auth/profile", json={"email": other["email"]}, headers=headers)
        self.assertEqual(resp.status_code, 400)

    def test_change_password(self) -> None:
        headers, user = self.register(password="old-pass")

        resp = self.client.put(
            "/api/auth/password",
            json={"current_password": "not-it", "new_password": "new-pass"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Mevcut şifre hatalı")

        resp = self.client.put(
            "/api/auth/password",
            json={"current_password": "old-pass", "new_password": "new-pass"},
            headers=headers,
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Şifre başarıyla değiştirildi")

        resp = self.client.post("/api/auth/login", json={"email": user["email"], "password": "new-pass"})
        self.assertEqual(resp.status_code, 200)


if __name__ == "__main__":
    unittest.main()
