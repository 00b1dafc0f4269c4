"""Tests for HTML pages, template filters and QR codes."""

import pytest

from apkhub.routes.pages import first, format_size
from conftest import fake_apk


class TestFilters:
    @pytest.mark.parametrize("size,expected", [
        (0, "0 B"),
        (1023, "1023 B"),
        (1024, "1.00 KB"),
        (1536, "1.50 KB"),
        (5 * 1024 * 1024, "5.00 MB"),
        (3 * 1024 ** 3, "3.00 GB"),
    ])
    def test_format_size(self, size, expected):
        assert format_size(size) == expected

    def test_first(self):
        assert first("Example") == "E"
        assert first("应用") == "应"
        assert first("") == ""


class TestPages:
    async def test_index_lists_uploaded_app(self, client):
        await client.post(
            "/api/upload",
            data={"projectName": "Demo", "channel": "beta"},
            files={"file": ("a.apk", fake_apk("com.example.app", "1.0", name="Example"), "application/octet-stream")},
        )
        resp = await client.get("/?upload=success")
        assert resp.status_code == 200
        assert "Demo" in resp.text
        assert "Example" in resp.text
        assert "Upload successful" in resp.text

    async def test_empty_index(self, client):
        resp = await client.get("/")
        assert resp.status_code == 200
        assert "No builds yet" in resp.text

    async def test_detail_page(self, client):
        await client.post(
            "/api/upload",
            data={"projectName": "Demo", "channel": "beta", "releaseNotes": "Fixed crash"},
            files={"file": ("a.apk", fake_apk("com.example.app", "1.0"), "application/octet-stream")},
        )
        resp = await client.get("/app/com.example.app")
        assert resp.status_code == 200
        assert "Fixed crash" in resp.text
        assert "/qr?url=" in resp.text

    async def test_upload_form(self, client):
        resp = await client.get("/upload")
        assert resp.status_code == 200
        assert 'name="projectName"' in resp.text


class TestQr:
    async def test_png(self, client):
        resp = await client.get("/qr", params={"url": "http://test/downloads/a.apk"})
        assert resp.status_code == 200
        assert resp.headers["content-type"] == "image/png"
        assert resp.content.startswith(b"\x89PNG")

    async def test_missing_url(self, client):
        resp = await client.get("/qr")
        assert resp.status_code == 400
