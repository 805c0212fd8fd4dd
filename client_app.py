"""Composition root wiring the client core to a renderer."""

from __future__ import annotations

import logging

from api_client import BackendClient
from app_settings import AppSettings, load_settings
from catalog import Companion
from device_identity import DeviceIdentity
from renderer import Renderer
from services.balance import BalanceStateManager
from services.balance_sync import BalanceSync
from services.chat_session import ChatSessionController, GuestSessionCache
from services.dispatcher import UiDispatcher
from services.navigation import Navigator


logger = logging.getLogger(__name__)


class CompanionClient:
    """Owns the long-lived collaborators for one app process."""

    def __init__(
        self,
        renderer: Renderer,
        *,
        settings: AppSettings | None = None,
        identity: DeviceIdentity | None = None,
        client: BackendClient | None = None,
        dispatcher: UiDispatcher | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.renderer = renderer
        self.identity = identity or DeviceIdentity()
        self.fingerprint = self.identity.get_fingerprint()
        self.client = client or BackendClient(
            base_url=self.settings.server_url,
            user_agent=self.settings.user_agent,
            platform=self.settings.platform,
        )
        self.dispatcher = dispatcher or UiDispatcher(self.settings.workers)
        self.balance = BalanceStateManager(self.settings.default_diamonds)
        self.balance.subscribe(renderer.on_balance_changed)
        self.sessions = GuestSessionCache()
        self.sync = BalanceSync(self.client, self.fingerprint, self.balance, self.dispatcher, renderer)
        self.navigator = Navigator(self.sync, renderer, self._new_chat)
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        if not self.identity.stable:
            logger.warning("Using a temporary device fingerprint; balance may not persist across restarts")
        self.sync.start()

    def pump(self, *, wait: bool = False, timeout: float | None = None) -> int:
        """Deliver finished network results on the calling (UI) thread."""

        return self.dispatcher.drain(wait=wait, timeout=timeout)

    def _new_chat(self, companion: Companion) -> ChatSessionController:
        return ChatSessionController(
            companion,
            client=self.client,
            fingerprint=self.fingerprint,
            balance=self.balance,
            sync=self.sync,
            dispatcher=self.dispatcher,
            renderer=self.renderer,
            sessions=self.sessions,
        )

    def shutdown(self) -> None:
        self.dispatcher.shutdown(wait=False)


__all__ = ["CompanionClient"]
