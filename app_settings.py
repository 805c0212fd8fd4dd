"""Application configuration helpers for the companion chat client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

import streamlit as st


DEFAULT_SERVER_URL = "https://red-velvet-connection.replit.app"
DEFAULT_USER_AGENT = "RedVelvet-Android/1.0"
DEFAULT_PLATFORM = "android"
DEFAULT_DIAMONDS = 25
DEFAULT_WORKERS = 4


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration bundle for the chat client."""

    server_url: str
    user_agent: str
    platform: str
    default_diamonds: int
    workers: int
    debug: bool


def _safe_secret(key: str) -> Any:
    """Return a Streamlit secret when available."""

    try:
        return st.secrets.get(key)
    except Exception:
        return None


def _setting(key: str) -> Any:
    return _safe_secret(key) or os.getenv(key)


def _coerce_int(value: Any, default: int, *, minimum: int | None = None) -> int:
    """Parse integers from secrets or environment strings."""

    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if minimum is not None and parsed < minimum:
        return default
    return parsed


def _coerce_bool(value: Any, default: bool = False) -> bool:
    """Parse truthy/falsey strings and primitives into booleans."""

    if isinstance(value, bool):
        return value
    if value is None:
        return default
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value).strip().lower()
    if not text:
        return default
    if text in {"1", "true", "yes", "on", "enabled", "enable"}:
        return True
    if text in {"0", "false", "no", "off", "disabled", "disable"}:
        return False
    return default


def load_settings() -> AppSettings:
    """Collect runtime configuration from environment and secrets."""

    server_url = _setting("REDVELVET_SERVER_URL") or DEFAULT_SERVER_URL
    user_agent = _setting("REDVELVET_USER_AGENT") or DEFAULT_USER_AGENT
    platform = _setting("REDVELVET_PLATFORM") or DEFAULT_PLATFORM
    return AppSettings(
        server_url=str(server_url).rstrip("/"),
        user_agent=str(user_agent),
        platform=str(platform),
        default_diamonds=_coerce_int(_setting("REDVELVET_DEFAULT_DIAMONDS"), DEFAULT_DIAMONDS),
        workers=_coerce_int(_setting("REDVELVET_WORKERS"), DEFAULT_WORKERS, minimum=1),
        debug=_coerce_bool(_setting("REDVELVET_DEBUG"), default=False),
    )


__all__ = ["AppSettings", "DEFAULT_DIAMONDS", "DEFAULT_SERVER_URL", "load_settings"]
