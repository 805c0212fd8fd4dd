"""Launch, screen-switch and chat-entry balance synchronization."""

from __future__ import annotations

import logging

from api_client import (
    SESSION_FAILED,
    SESSION_MALFORMED,
    SESSION_UNREACHABLE,
    BackendClient,
    DeviceSessionResult,
)
from models import BalanceSnapshot
from renderer import Renderer
from services.balance import BalanceStateManager
from services.dispatcher import UiDispatcher


logger = logging.getLogger(__name__)

STATUS_CONNECTING = "🔄 Connecting to server..."
STATUS_CONNECTED = "✅ Connected to server"
STATUS_OFFLINE = "⚠️ Server unreachable, showing last known balance"
STATUS_WELCOME = "🎉 Welcome! You received 25 diamonds!"
STATUS_REGISTERED = "✅ Device registered! {balance} diamonds available"

_SESSION_FAILURE_STATUS = {
    SESSION_MALFORMED: "❌ Diamond tracking error",
    SESSION_FAILED: "❌ Device registration failed",
    SESSION_UNREACHABLE: "❌ Device session unreachable",
}


class BalanceSync:
    """Keeps :class:`BalanceStateManager` in step with the server.

    Every entry point issues an independent background request; whichever
    completes last decides the displayed balance. Failures leave the balance
    at its last known good value and are logged without a visible error,
    except for device registration which reports its status.
    """

    def __init__(
        self,
        client: BackendClient,
        fingerprint: str,
        balance: BalanceStateManager,
        dispatcher: UiDispatcher,
        renderer: Renderer,
    ) -> None:
        self._client = client
        self._fingerprint = fingerprint
        self._balance = balance
        self._dispatcher = dispatcher
        self._renderer = renderer

    def start(self) -> None:
        """Launch sequence: connection check, guest balance, device registration."""

        self._renderer.on_status_changed(STATUS_CONNECTING)
        self._renderer.on_balance_changed(self._balance.current())
        self._dispatcher.submit(
            lambda: self._client.check_connection(self._fingerprint),
            self._on_connection_checked,
        )
        self.register_device()

    def register_device(self) -> None:
        self._dispatcher.submit(
            lambda: self._client.register_device_session(self._fingerprint),
            self._on_device_session,
        )

    def refresh(self) -> None:
        """Re-fetch the device balance; failures keep the current value."""

        self._dispatcher.submit(
            lambda: self._client.fetch_balance(self._fingerprint),
            self._on_balance,
        )

    def refresh_guest(self) -> None:
        self._dispatcher.submit(self._client.fetch_guest_balance, self._on_balance)

    # Completion handlers (UI context) ----------------------------------
    def _on_connection_checked(self, connected: bool) -> None:
        if connected:
            logger.info("Server connection successful")
            self._renderer.on_status_changed(STATUS_CONNECTED)
            self.refresh_guest()
        else:
            self._renderer.on_status_changed(STATUS_OFFLINE)

    def _on_device_session(self, result: DeviceSessionResult) -> None:
        if not result.ok or result.session is None:
            self._renderer.on_status_changed(_SESSION_FAILURE_STATUS.get(result.status, "❌ Device registration failed"))
            return
        self._balance.apply(result.session.balance)
        if result.session.welcome_already_granted:
            self._renderer.on_status_changed(STATUS_REGISTERED.format(balance=self._balance.current()))
        else:
            self._renderer.on_status_changed(STATUS_WELCOME)

    def _on_balance(self, snapshot: BalanceSnapshot | None) -> None:
        if snapshot is None:
            return
        if self._balance.apply_from_field(snapshot.diamonds_raw):
            logger.debug("Synced diamond count from server: %s", self._balance.current())


__all__ = ["BalanceSync", "STATUS_REGISTERED", "STATUS_WELCOME"]
