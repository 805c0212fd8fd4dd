from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from api_client import (
    CHAT_TIMEOUT,
    CONNECTION_TIMEOUT,
    SEND_INSUFFICIENT_BALANCE,
    SEND_NETWORK_ERROR,
    SEND_NO_REPLY,
    SEND_OK,
    SEND_SERVER_ERROR,
    SESSION_FAILED,
    SESSION_MALFORMED,
    SESSION_OK,
    SESSION_TIMEOUT,
    SESSION_UNREACHABLE,
    BackendClient,
)


class DummyResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str | None = None) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload or {})


def _client() -> BackendClient:
    return BackendClient("https://api.example/", user_agent="RedVelvet-Android/1.0", platform="android")


def test_register_device_session_sends_device_headers(monkeypatch):
    captured: dict[str, Any] = {}

    def fake_get(url, *, headers=None, timeout=None):
        captured.update(url=url, headers=headers, timeout=timeout)
        return DummyResponse(payload={"messageDiamonds": 25, "hasReceivedWelcomeDiamonds": False})

    monkeypatch.setattr(requests, "get", fake_get)

    result = _client().register_device_session("ZmluZ2VycHJpbnQ=")

    assert captured["url"] == "https://api.example/api/mobile/device-session"
    assert captured["headers"] == {
        "User-Agent": "RedVelvet-Android/1.0",
        "X-Device-Fingerprint": "ZmluZ2VycHJpbnQ=",
        "X-Platform": "android",
    }
    assert captured["timeout"] == SESSION_TIMEOUT == (5, 5)
    assert result.status == SESSION_OK
    assert result.session.balance == 25
    assert result.session.welcome_already_granted is False


@pytest.mark.parametrize(
    ("response", "expected"),
    [
        (DummyResponse(500, {"error": "Failed to get device session"}), SESSION_FAILED),
        (DummyResponse(404, {}), SESSION_FAILED),
        (DummyResponse(200, {"messageDiamonds": "n/a"}), SESSION_MALFORMED),
    ],
)
def test_register_device_session_failures(monkeypatch, response, expected):
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: response)

    result = _client().register_device_session("fp")

    assert result.status == expected
    assert result.session is None


def test_register_device_session_timeout_is_unreachable(monkeypatch):
    def fake_get(url, **kwargs):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(requests, "get", fake_get)

    assert _client().register_device_session("fp").status == SESSION_UNREACHABLE


def test_fetch_guest_session_omits_device_headers(monkeypatch):
    captured: dict[str, Any] = {}

    def fake_get(url, *, headers=None, timeout=None):
        captured.update(url=url, headers=headers)
        return DummyResponse(payload={"sessionId": "guest-42"})

    monkeypatch.setattr(requests, "get", fake_get)

    session = _client().fetch_guest_session()

    assert session.session_id == "guest-42"
    assert captured["url"].endswith("/api/guest/session")
    assert captured["headers"] == {"User-Agent": "RedVelvet-Android/1.0"}


@pytest.mark.parametrize("status", [401, 500])
def test_fetch_guest_session_non_200_returns_none(monkeypatch, status):
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: DummyResponse(status, {"sessionId": "x"}))
    assert _client().fetch_guest_session() is None


def test_fetch_balance_uses_mobile_endpoint(monkeypatch):
    captured: dict[str, Any] = {}

    def fake_get(url, *, headers=None, timeout=None):
        captured.update(url=url, headers=headers)
        return DummyResponse(payload={"diamonds": 42})

    monkeypatch.setattr(requests, "get", fake_get)

    snapshot = _client().fetch_balance("fp")

    assert snapshot.diamonds_raw == "42"
    assert captured["url"].endswith("/api/mobile/diamonds")
    assert captured["headers"]["X-Device-Fingerprint"] == "fp"


def test_fetch_guest_balance_uses_guest_endpoint(monkeypatch):
    captured: dict[str, Any] = {}

    def fake_get(url, *, headers=None, timeout=None):
        captured.update(url=url, headers=headers)
        return DummyResponse(payload={"diamonds": 7})

    monkeypatch.setattr(requests, "get", fake_get)

    assert _client().fetch_guest_balance().diamonds_raw == "7"
    assert captured["url"].endswith("/api/guest/diamonds")
    assert "X-Device-Fingerprint" not in captured["headers"]


def test_fetch_balance_failures_return_none(monkeypatch):
    def raise_connection_error(url, **kwargs):
        raise requests.ConnectionError("dns failure")

    client = _client()
    monkeypatch.setattr(requests, "get", raise_connection_error)
    assert client.fetch_balance("fp") is None
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: DummyResponse(503))
    assert client.fetch_balance("fp") is None
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: DummyResponse(200, {"other": 1}))
    assert client.fetch_balance("fp") is None


def test_send_chat_message_posts_json_body(monkeypatch):
    captured: dict[str, Any] = {}

    def fake_post(url, *, json=None, headers=None, timeout=None):
        captured.update(url=url, json=json, headers=headers, timeout=timeout)
        return DummyResponse(payload={"success": True, "response": "hello!", "remainingDiamonds": 19})

    monkeypatch.setattr(requests, "post", fake_post)

    result = _client().send_chat_message("fp", 3, "hi")

    assert result.status == SEND_OK
    assert result.reply.reply_text == "hello!"
    assert result.reply.remaining_raw == "19"
    assert captured["url"] == "https://api.example/api/guest/chat"
    assert captured["json"] == {"companionId": 3, "message": "hi"}
    assert captured["headers"]["Content-Type"] == "application/json"
    assert captured["headers"]["X-Platform"] == "android"
    assert captured["timeout"] == CHAT_TIMEOUT == (10, 15)


def test_send_chat_message_body_escapes_backslashes_and_control_chars(monkeypatch):
    captured: dict[str, Any] = {}

    def fake_post(url, *, json=None, headers=None, timeout=None):
        captured["json"] = json
        return DummyResponse(payload={"response": "ok", "remainingDiamonds": 1})

    monkeypatch.setattr(requests, "post", fake_post)

    message = 'path C:\\temp "quoted"\nnext line'
    _client().send_chat_message("fp", 1, message)

    encoded = json.dumps(captured["json"])
    assert json.loads(encoded)["message"] == message
    assert "\\n" in encoded and "\\\\" in encoded


@pytest.mark.parametrize(
    ("status", "payload", "expected"),
    [
        (402, {"error": "Insufficient diamonds", "remainingDiamonds": 0}, SEND_INSUFFICIENT_BALANCE),
        (500, {"error": "AI service temporarily unavailable"}, SEND_SERVER_ERROR),
        (404, {"error": "Companion not found"}, SEND_SERVER_ERROR),
        (200, {"success": True}, SEND_NO_REPLY),
    ],
)
def test_send_chat_message_classifies_responses(monkeypatch, status, payload, expected):
    monkeypatch.setattr(requests, "post", lambda url, **kwargs: DummyResponse(status, payload))

    result = _client().send_chat_message("fp", 1, "hi")

    assert result.status == expected
    assert result.reply is None
    assert result.status_code == status


@pytest.mark.parametrize(
    "error",
    [requests.Timeout("slow"), requests.ConnectionError("reset"), requests.exceptions.InvalidURL("bad")],
)
def test_send_chat_message_network_errors(monkeypatch, error):
    def fake_post(url, **kwargs):
        raise error

    monkeypatch.setattr(requests, "post", fake_post)

    assert _client().send_chat_message("fp", 1, "hi").status == SEND_NETWORK_ERROR


def test_check_connection(monkeypatch):
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: DummyResponse(200, {"sessionId": "s"}))
    assert _client().check_connection("fp") is True
    monkeypatch.setattr(requests, "get", lambda url, **kwargs: DummyResponse(502))
    assert _client().check_connection("fp") is False


def test_send_chat_message_unexpected_error_is_network_error(monkeypatch):
    def fake_post(url, **kwargs):
        raise ValueError("cannot encode body")

    monkeypatch.setattr(requests, "post", fake_post)

    assert _client().send_chat_message("fp", 1, "hi").status == SEND_NETWORK_ERROR


def test_check_connection_uses_short_connect_timeout(monkeypatch):
    captured: dict[str, Any] = {}

    def fake_get(url, *, headers=None, timeout=None):
        captured.update(url=url, headers=headers, timeout=timeout)
        return DummyResponse(200, {"sessionId": "s"})

    monkeypatch.setattr(requests, "get", fake_get)

    assert _client().check_connection("fp") is True
    assert captured["url"] == "https://api.example/api/guest/session"
    assert captured["headers"]["X-Device-Fingerprint"] == "fp"
    assert captured["timeout"] == CONNECTION_TIMEOUT == (5, 10)
