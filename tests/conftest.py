"""Shared fakes for the client service tests."""

from __future__ import annotations

from concurrent.futures import Executor, Future
from typing import Any, Dict, List

import pytest

from api_client import SEND_OK, SESSION_OK, DeviceSessionResult, SendResult
from models import BalanceSnapshot, ChatReply, DeviceSession, GuestSession
from renderer import StateRenderer
from services.balance import BalanceStateManager
from services.dispatcher import UiDispatcher


class InlineExecutor(Executor):
    """Runs tasks on submit; completions still wait for ``drain``."""

    def submit(self, fn, /, *args, **kwargs):  # type: ignore[override]
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:
            future.set_exception(exc)
        return future


class FakeBackend:
    """Stand-in for :class:`api_client.BackendClient` recording every call."""

    def __init__(self) -> None:
        self.calls: List[tuple] = []
        self.connected = True
        self.guest_session: GuestSession | None = GuestSession("guest-1")
        self.device_session = DeviceSessionResult(
            status=SESSION_OK,
            session=DeviceSession(balance=25, welcome_already_granted=False),
        )
        self.balance: BalanceSnapshot | None = BalanceSnapshot("25")
        self.guest_balance: BalanceSnapshot | None = BalanceSnapshot("25")
        self.send_result = SendResult(status=SEND_OK, reply=ChatReply("hello!", "19"))

    def check_connection(self, fingerprint: str) -> bool:
        self.calls.append(("check_connection", fingerprint))
        return self.connected

    def fetch_guest_session(self) -> GuestSession | None:
        self.calls.append(("fetch_guest_session",))
        return self.guest_session

    def register_device_session(self, fingerprint: str) -> DeviceSessionResult:
        self.calls.append(("register_device_session", fingerprint))
        return self.device_session

    def fetch_balance(self, fingerprint: str) -> BalanceSnapshot | None:
        self.calls.append(("fetch_balance", fingerprint))
        return self.balance

    def fetch_guest_balance(self) -> BalanceSnapshot | None:
        self.calls.append(("fetch_guest_balance",))
        return self.guest_balance

    def send_chat_message(self, fingerprint: str, companion_id: int, text: str) -> SendResult:
        self.calls.append(("send_chat_message", fingerprint, companion_id, text))
        return self.send_result

    def names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def dispatcher() -> UiDispatcher:
    return UiDispatcher(executor=InlineExecutor())


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def state() -> Dict[str, Any]:
    return {}


@pytest.fixture
def renderer(state: Dict[str, Any]) -> StateRenderer:
    return StateRenderer(state)


@pytest.fixture
def balance(renderer: StateRenderer) -> BalanceStateManager:
    manager = BalanceStateManager(25)
    manager.subscribe(renderer.on_balance_changed)
    return manager
