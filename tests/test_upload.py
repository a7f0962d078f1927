# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from unittest.mock import patch

from tests.base import ApiTestCase  # isort: skip
from app.core.config import settings

CLOUDINARY_RESULT = {
    "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/dietcim/abc.png",
    "public_id": "dietcim/abc",
    "format": "png",
    "width": 10,
    "height": 10,
    "resource_type": "image",
    "bytes": 4,
}


class TestUpload(ApiTestCase):
    def setUp(self) -> None:
        self.headers, _ = self.register()

    @patch("cloudinary.uploader.upload", return_value=CLOUDINARY_RESULT)
    def test_upload(self, upload) -> None:
        resp = self.client.post(
            "/api/upload", files={"file": ("abc.png", b"\x89PNG", "image/png")}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(
            resp.json(),
            {"url": CLOUDINARY_RESULT["secure_url"], "public_id": "dietcim/abc", "success": True},
        )
        self.assertEqual(upload.call_args.kwargs["folder"], "dietcim")
        self.assertEqual(upload.call_args.kwargs["filename_override"], "abc.png")

    @patch("cloudinary.uploader.upload", return_value=CLOUDINARY_RESULT)
    def test_upload_to_folder(self, upload) -> None:
        resp = self.client.post(
            "/api/upload",
            files={"file": ("abc.png", b"\x89PNG", "image/png")},
            data={"folder": "measurements"},
            headers=self.headers,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(upload.call_args.kwargs["folder"], "measurements")

    @patch("cloudinary.uploader.upload")
    def test_missing_or_empty_file(self, upload) -> None:
        resp = self.client.post("/api/upload", data={"folder": "x"}, headers=self.headers)
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/upload", files={"file": ("empty.png", b"", "image/png")}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 400)
        upload.assert_not_called()

    @patch("cloudinary.uploader.upload")
    def test_too_large(self, upload) -> None:
        with patch.object(settings, "UPLOAD_MAX_BYTES", 3):
            resp = self.client.post(
                "/api/upload", files={"file": ("abc.png", b"\x89PNG", "image/png")}, headers=self.headers
            )
        self.assertEqual(resp.status_code, 413)
        upload.assert_not_called()

    @patch("cloudinary.uploader.upload", return_value=CLOUDINARY_RESULT)
    def test_size_limit_boundary(self, upload) -> None:
        with patch.object(settings, "UPLOAD_MAX_BYTES", 4):
            at_limit = self.client.post(
                "/api/upload", files={"file": ("abc.png", b"\x89PNG", "image/png")}, headers=self.headers
            )
            over_limit = self.client.post(
                "/api/upload", files={"file": ("abc.png", b"\x89PNG!" * 1000, "image/png")}, headers=self.headers
            )
        self.assertEqual(at_limit.status_code, 201)
        self.assertEqual(over_limit.status_code, 413)
        self.assertEqual(upload.call_count, 1)

    @patch("cloudinary.uploader.upload", side_effect=Exception("Invalid cloud_name"))
    def test_cloudinary_failure(self, upload) -> None:
        resp = self.client.post(
            "/api/upload", files={"file": ("abc.png", b"\x89PNG", "image/png")}, headers=self.headers
        )
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["message"], "Cloudinary'ye yükleme hatası: Invalid cloud_name")

    def test_requires_login(self) -> None:
        resp = self.client.post("/api/upload", files={"file": ("abc.png", b"\x89PNG", "image/png")})
        self.assertEqual(resp.status_code, 401)


class TestUploadService(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        from app.services.upload_service import UploadService

        self.service = UploadService()

    @patch("cloudinary.uploader.destroy", return_value={"result": "ok"})
    async def test_delete_file(self, destroy) -> None:
        self.assertTrue(await self.service.delete_file("dietcim/abc"))
        destroy.assert_called_once_with("dietcim/abc")

    @patch("cloudinary.uploader.destroy", return_value={"result": "not found"})
    async def test_delete_missing_file(self, destroy) -> None:
        self.assertFalse(await self.service.delete_file("dietcim/missing"))

    @patch("cloudinary.uploader.destroy", side_effect=Exception("network"))
    async def test_delete_error(self, destroy) -> None:
        self.assertFalse(await self.service.delete_file("dietcim/abc"))

    @patch("cloudinary.uploader.upload", return_value=CLOUDINARY_RESULT)
    async def test_upload_from_url(self, upload) -> None:
        uploaded = await self.service.upload_from_url("https://example.com/a.png")
        self.assertEqual(uploaded.public_id, "dietcim/abc")
        self.assertEqual(uploaded.width, 10)
        self.assertEqual(upload.call_args.args[0], "https://example.com/a.png")


if __name__ == "__main__":
    unittest.main()
