"""Typed response records and decoders for the companion chat backend."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Mapping

from json_fields import extract_field


_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_balance(raw: Any) -> int | None:
    """Return ``raw`` as an integer balance or ``None`` when it is not numeric."""

    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not _INTEGER_PATTERN.fullmatch(text):
        return None
    return int(text)


@dataclass(frozen=True)
class Decoded:
    """Tagged decode result: exactly one of ``value`` or ``error`` is set."""

    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "Decoded":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "Decoded":
        return cls(error=error)


@dataclass(frozen=True)
class GuestSession:
    """Anonymous conversation context issued by ``/api/guest/session``."""

    session_id: str


@dataclass(frozen=True)
class DeviceSession:
    """Device-scoped account state returned by ``/api/mobile/device-session``."""

    balance: int
    welcome_already_granted: bool


@dataclass(frozen=True)
class BalanceSnapshot:
    """Raw ``diamonds`` field from one of the balance endpoints."""

    diamonds_raw: str


@dataclass(frozen=True)
class ChatReply:
    """Successful chat exchange as reported by ``/api/guest/chat``."""

    reply_text: str
    remaining_raw: str

    @property
    def remaining(self) -> int | None:
        return parse_balance(self.remaining_raw)


def _load_mapping(body: str) -> Mapping[str, Any] | None:
    try:
        parsed = json.loads(body)
    except (TypeError, ValueError):
        return None
    return parsed if isinstance(parsed, Mapping) else None


class _FieldReader:
    """Reads scalar fields from a decoded mapping, or scans the raw text."""

    def __init__(self, body: str | None) -> None:
        self._body = body or ""
        self._payload = _load_mapping(self._body)

    def has(self, key: str) -> bool:
        if self._payload is not None:
            return key in self._payload
        return f'"{key}"' in self._body

    def get(self, key: str) -> str:
        if self._payload is None:
            return extract_field(self._body, key)
        value = self._payload.get(key)
        if value is None:
            return ""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (Mapping, list)):
            return json.dumps(value)
        return str(value)


def decode_guest_session(body: str | None) -> Decoded:
    session_id = _FieldReader(body).get("sessionId")
    if not session_id:
        return Decoded.failure("sessionId missing")
    return Decoded.success(GuestSession(session_id=session_id))


def decode_device_session(body: str | None) -> Decoded:
    """Decode the device session, requiring a numeric ``messageDiamonds``."""

    reader = _FieldReader(body)
    raw_balance = reader.get("messageDiamonds")
    balance = parse_balance(raw_balance)
    if balance is None:
        return Decoded.failure(f"messageDiamonds not numeric: {raw_balance!r}")
    welcome = reader.get("hasReceivedWelcomeDiamonds").strip().lower() == "true"
    return Decoded.success(DeviceSession(balance=balance, welcome_already_granted=welcome))


def decode_balance(body: str | None) -> Decoded:
    raw = _FieldReader(body).get("diamonds")
    if not raw:
        return Decoded.failure("diamonds missing")
    return Decoded.success(BalanceSnapshot(diamonds_raw=raw))


def decode_chat_reply(body: str | None) -> Decoded:
    """Decode a chat reply; ``remainingDiamonds`` stays raw for the balance cell."""

    reader = _FieldReader(body)
    if not reader.has("response"):
        return Decoded.failure("response missing")
    return Decoded.success(
        ChatReply(
            reply_text=reader.get("response"),
            remaining_raw=reader.get("remainingDiamonds"),
        )
    )


__all__ = [
    "BalanceSnapshot",
    "ChatReply",
    "Decoded",
    "DeviceSession",
    "GuestSession",
    "decode_balance",
    "decode_chat_reply",
    "decode_device_session",
    "decode_guest_session",
    "parse_balance",
]
