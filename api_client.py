"""HTTP client for the companion chat backend."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from app_settings import DEFAULT_PLATFORM, DEFAULT_SERVER_URL, DEFAULT_USER_AGENT
from models import (
    BalanceSnapshot,
    ChatReply,
    DeviceSession,
    GuestSession,
    decode_balance,
    decode_chat_reply,
    decode_device_session,
    decode_guest_session,
)


logger = logging.getLogger(__name__)

# (connect, read) timeouts in seconds.
SESSION_TIMEOUT = (5, 5)
BALANCE_TIMEOUT = (5, 5)
CHAT_TIMEOUT = (10, 15)
GUEST_TIMEOUT = (10, 10)
CONNECTION_TIMEOUT = (5, 10)

STATUS_INSUFFICIENT_BALANCE = 402

# Device session outcomes.
SESSION_OK = "ok"
SESSION_MALFORMED = "malformed"
SESSION_FAILED = "failed"
SESSION_UNREACHABLE = "unreachable"

# Chat send outcomes.
SEND_OK = "ok"
SEND_NO_REPLY = "no_reply"
SEND_INSUFFICIENT_BALANCE = "insufficient_balance"
SEND_SERVER_ERROR = "server_error"
SEND_NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class DeviceSessionResult:
    """Outcome of registering the device; ``session`` is set only on success."""

    status: str
    session: DeviceSession | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.status == SESSION_OK


@dataclass(frozen=True)
class SendResult:
    """Outcome of one chat exchange; ``reply`` is set only on success."""

    status: str
    reply: ChatReply | None = None
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.status == SEND_OK


def _short(fingerprint: str) -> str:
    return f"{fingerprint[:8]}..."


@dataclass
class BackendClient:
    """REST client for the guest and mobile device endpoints.

    Calls are synchronous; run them through
    :class:`services.dispatcher.UiDispatcher` to keep them off the UI context.
    None of the public methods raise for network or HTTP failures: each one
    maps the failure to its documented fallback value and logs it.
    """

    base_url: str = DEFAULT_SERVER_URL
    user_agent: str = DEFAULT_USER_AGENT
    platform: str = DEFAULT_PLATFORM

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")

    # Internal helpers -----------------------------------------------------
    def _url(self, path: str) -> str:
        return f"{self.base_url}{path if path.startswith('/') else '/' + path}"

    def _headers(self, fingerprint: str | None = None) -> dict[str, str]:
        headers: dict[str, str] = {"User-Agent": self.user_agent}
        if fingerprint is not None:
            headers["X-Device-Fingerprint"] = fingerprint
            headers["X-Platform"] = self.platform
        return headers

    def _get(self, path: str, *, fingerprint: str | None, timeout: Any) -> requests.Response:
        return requests.get(
            self._url(path),
            headers=self._headers(fingerprint),
            timeout=timeout,
        )

    # Public API -----------------------------------------------------------
    def check_connection(self, fingerprint: str) -> bool:
        """Return ``True`` when the guest session endpoint answers with 200."""

        try:
            resp = self._get("/api/guest/session", fingerprint=fingerprint, timeout=CONNECTION_TIMEOUT)
        except requests.RequestException as exc:
            logger.error("Server connection error: %s", exc)
            return False
        if resp.status_code != 200:
            logger.warning("Server connection failed: %s", resp.status_code)
            return False
        return True

    def fetch_guest_session(self) -> GuestSession | None:
        """Request a fresh guest session id; ``None`` when unavailable."""

        try:
            resp = self._get("/api/guest/session", fingerprint=None, timeout=GUEST_TIMEOUT)
        except requests.RequestException as exc:
            logger.error("Error getting guest session: %s", exc)
            return None
        if resp.status_code != 200:
            logger.warning("Guest session request failed: %s", resp.status_code)
            return None
        decoded = decode_guest_session(resp.text)
        if not decoded.ok:
            logger.warning("Guest session response malformed: %s", decoded.error)
            return None
        logger.debug("Guest session ID: %s", decoded.value.session_id)
        return decoded.value

    def register_device_session(self, fingerprint: str) -> DeviceSessionResult:
        """Fetch or create the device session, including any welcome grant.

        The welcome grant is computed server-side; the returned balance is
        reported as-is.
        """

        try:
            resp = self._get("/api/mobile/device-session", fingerprint=fingerprint, timeout=SESSION_TIMEOUT)
        except requests.RequestException as exc:
            logger.error("Device session error: %s", exc)
            return DeviceSessionResult(status=SESSION_UNREACHABLE)
        if resp.status_code != 200:
            logger.error("Device session failed with code: %s", resp.status_code)
            return DeviceSessionResult(status=SESSION_FAILED, status_code=resp.status_code)
        decoded = decode_device_session(resp.text)
        if not decoded.ok:
            logger.error("Error parsing device session: %s", decoded.error)
            return DeviceSessionResult(status=SESSION_MALFORMED, status_code=resp.status_code)
        return DeviceSessionResult(status=SESSION_OK, session=decoded.value, status_code=resp.status_code)

    def fetch_balance(self, fingerprint: str) -> BalanceSnapshot | None:
        """Return the device balance snapshot or ``None`` on any failure."""

        return self._fetch_balance("/api/mobile/diamonds", fingerprint=fingerprint)

    def fetch_guest_balance(self) -> BalanceSnapshot | None:
        """Return the guest balance snapshot or ``None`` on any failure."""

        return self._fetch_balance("/api/guest/diamonds", fingerprint=None)

    def _fetch_balance(self, path: str, *, fingerprint: str | None) -> BalanceSnapshot | None:
        try:
            resp = self._get(path, fingerprint=fingerprint, timeout=BALANCE_TIMEOUT)
        except requests.RequestException as exc:
            logger.error("Error fetching diamond count: %s", exc)
            return None
        if resp.status_code != 200:
            logger.error("Failed to fetch diamonds from %s, response code: %s", path, resp.status_code)
            return None
        decoded = decode_balance(resp.text)
        if not decoded.ok:
            logger.error("Diamond response from %s malformed: %s", path, decoded.error)
            return None
        if fingerprint is not None:
            logger.debug("Diamond fetch for device %s: %s", _short(fingerprint), decoded.value.diamonds_raw)
        return decoded.value

    def send_chat_message(self, fingerprint: str, companion_id: int, text: str) -> SendResult:
        """Send ``text`` to the companion and classify the outcome.

        The body is serialized by ``requests`` so quotes, backslashes and
        control characters are escaped.
        """

        payload = {"companionId": int(companion_id), "message": text}
        headers = self._headers(fingerprint)
        headers["Content-Type"] = "application/json"
        try:
            resp = requests.post(
                self._url("/api/guest/chat"),
                json=payload,
                headers=headers,
                timeout=CHAT_TIMEOUT,
            )
        except requests.RequestException as exc:
            logger.error("Chat request for companion %s failed: %s", companion_id, exc)
            return SendResult(status=SEND_NETWORK_ERROR)
        except Exception:
            logger.exception("Unexpected error sending chat to companion %s", companion_id)
            return SendResult(status=SEND_NETWORK_ERROR)

        if resp.status_code == STATUS_INSUFFICIENT_BALANCE:
            logger.warning("Chat rejected for device %s: insufficient diamonds", _short(fingerprint))
            return SendResult(status=SEND_INSUFFICIENT_BALANCE, status_code=resp.status_code)
        if resp.status_code != 200:
            logger.error("Chat failed with code %s: %s", resp.status_code, resp.text)
            return SendResult(status=SEND_SERVER_ERROR, status_code=resp.status_code)

        decoded = decode_chat_reply(resp.text)
        if not decoded.ok:
            logger.error("No response field found in: %s", resp.text)
            return SendResult(status=SEND_NO_REPLY, status_code=resp.status_code)
        return SendResult(status=SEND_OK, reply=decoded.value, status_code=resp.status_code)


__all__ = [
    "BackendClient",
    "DeviceSessionResult",
    "SEND_INSUFFICIENT_BALANCE",
    "SEND_NETWORK_ERROR",
    "SEND_NO_REPLY",
    "SEND_OK",
    "SEND_SERVER_ERROR",
    "SESSION_FAILED",
    "SESSION_MALFORMED",
    "SESSION_OK",
    "SESSION_UNREACHABLE",
    "SendResult",
]
