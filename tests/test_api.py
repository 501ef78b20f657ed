"""
FastAPI endpoint tests for the zh-num API.

Uses httpx + FastAPI TestClient — no real server needed.
"""

from __future__ import annotations

import api
import pytest
from api import app
from fastapi.testclient import TestClient

from zh_numerals.config import Settings

client = TestClient(app)


@pytest.fixture(autouse=True)
def _settings() -> None:
    """Install default settings for every test (bypasses lifespan)."""
    api._settings = Settings()
    yield  # type: ignore[misc]
    api._settings = None


class TestHealthEndpoint:
    def test_health_returns_200(self) -> None:
        resp = client.get("/health")
        assert resp.status_code == 200

    def test_health_response_shape(self) -> None:
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert data["default_style"] == "standard"

    def test_uninitialised_returns_503(self) -> None:
        api._settings = None
        assert client.get("/health").status_code == 503


class TestParseEndpoint:
    def test_parses_with_rest(self) -> None:
        data = client.post("/parse", json={"text": "一万零十三章"}).json()
        assert data == {"ok": True, "value": 10013, "rest": "章", "error": None}

    def test_hard_mode(self) -> None:
        data = client.post("/parse", json={"text": "一零零十三", "hard": True}).json()
        assert data["value"] == 10013

    def test_large_value(self) -> None:
        data = client.post("/parse", json={"text": "一亿亿"}).json()
        assert data["value"] == 10**16

    def test_failure_is_reported_in_body(self) -> None:
        resp = client.post("/parse", json={"text": "hello"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["ok"] is False
        assert data["value"] is None
        assert data["rest"] == "hello"
        assert data["error"]["offset"] == 0
        assert "numeral unit" in data["error"]["expected"]

    def test_empty_text_returns_422(self) -> None:
        assert client.post("/parse", json={"text": ""}).status_code == 422

    def test_too_long_text_returns_413(self) -> None:
        api._settings = Settings(max_input=4)
        resp = client.post("/parse", json={"text": "一二三四五"})
        assert resp.status_code == 413


class TestFormatEndpoint:
    def test_default_style(self) -> None:
        data = client.post("/format", json={"value": 10086}).json()
        assert data == {"value": 10086, "style": "standard", "text": "一万零八十六"}

    def test_financial_style(self) -> None:
        data = client.post("/format", json={"value": 10086, "style": "financial"}).json()
        assert data["text"] == "壹万零捌拾陆"

    def test_server_default_style(self) -> None:
        api._settings = Settings(style="financial")
        data = client.post("/format", json={"value": 10}).json()
        assert data["style"] == "financial"
        assert data["text"] == "壹拾"

    def test_negative_returns_422(self) -> None:
        assert client.post("/format", json={"value": -1}).status_code == 422

    def test_unknown_style_returns_422(self) -> None:
        resp = client.post("/format", json={"value": 1, "style": "roman"})
        assert resp.status_code == 422


class TestConvertEndpoint:
    def test_converts_each_line(self) -> None:
        resp = client.post(
            "/convert",
            json={"text": "一万零十三章\nhello\n两千\r\n", "options": {"keep_rest": True}},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["output"] == "10013章\nhello\n2000\r\n"
        assert data["failed_lines"] == 1
        assert data["lines"][1]["issue"]["line_number"] == 2

    def test_format_mode(self) -> None:
        data = client.post(
            "/convert",
            json={"text": "7\n100000001", "options": {"mode": "format"}},
        ).json()
        assert data["output"] == "七\n一亿零一"
        assert data["failed_lines"] == 0

    def test_invalid_options_return_422(self) -> None:
        resp = client.post("/convert", json={"text": "一", "options": {"skip_chars": -2}})
        assert resp.status_code == 422

    def test_only_newline_ends_a_line(self) -> None:
        data = client.post("/convert", json={"text": "一\u2028二\n三\r四\x0c五\n"}).json()
        assert len(data["lines"]) == 2
        assert data["output"] == "1\n3\n"
        assert data["lines"][0]["rest"] == "\u2028二"
        assert data["lines"][1]["rest"] == "\r四\x0c五"

    def test_format_mode_uses_server_default_style(self) -> None:
        api._settings = Settings(style="financial")
        data = client.post(
            "/convert",
            json={"text": "10\n", "options": {"mode": "format"}},
        ).json()
        assert data["output"] == "壹拾\n"

    def test_explicit_style_overrides_server_default(self) -> None:
        api._settings = Settings(style="financial")
        data = client.post(
            "/convert",
            json={"text": "10\n", "options": {"mode": "format", "style": "standard"}},
        ).json()
        assert data["output"] == "十\n"
