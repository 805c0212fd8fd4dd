"""Screen switching for the home, chats, settings, premium and chat screens."""

from __future__ import annotations

import logging
from typing import Callable

from catalog import SETTINGS, Companion, find_companion
from renderer import Renderer
from services.balance_sync import BalanceSync
from services.chat_session import ChatSessionController


logger = logging.getLogger(__name__)

HOME = "home"
CHATS = "chats"
SETTINGS_SCREEN = "settings"
PREMIUM = "premium"
CHAT = "chat"

SCREENS = (HOME, CHATS, SETTINGS_SCREEN, PREMIUM)
_SYNC_ON_SHOW = {HOME, CHATS}


class Navigator:
    """Tracks the visible screen and owns the open chat controller, if any."""

    def __init__(
        self,
        sync: BalanceSync,
        renderer: Renderer,
        controller_factory: Callable[[Companion], ChatSessionController],
    ) -> None:
        self._sync = sync
        self._renderer = renderer
        self._controller_factory = controller_factory
        self.screen = HOME
        self.chat: ChatSessionController | None = None

    def show(self, screen: str) -> None:
        if screen not in SCREENS:
            raise ValueError(f"Unknown screen: {screen}")
        if self.chat is not None:
            self.close_chat()
        self.screen = screen
        logger.debug("Navigation updated for screen: %s", screen)
        if screen in _SYNC_ON_SHOW:
            self._sync.refresh()

    def open_chat(self, companion_id: int) -> ChatSessionController:
        companion = find_companion(companion_id)
        if companion is None:
            raise ValueError(f"Unknown companion: {companion_id}")
        if self.chat is not None:
            self.close_chat()
        logger.info("Companion selected: %s (ID: %s)", companion.display_name, companion.id)
        self._renderer.on_status_changed(f"Selected: {companion.display_name}")
        self.chat = self._controller_factory(companion)
        self.screen = CHAT
        self.chat.open()
        return self.chat

    def close_chat(self) -> None:
        """Leave the chat screen; the controller refreshes the balance on close."""

        if self.chat is None:
            return
        self.chat.close()
        self.chat = None
        self.screen = HOME

    def select_setting(self, key: str) -> None:
        entry = SETTINGS.get(key)
        message = entry[2] if entry else f"Settings option: {key}"
        self._renderer.on_status_changed(message)

    def purchase(self, title: str) -> None:
        """Purchases are not wired to a payment provider yet."""

        self._renderer.on_status_changed(f"Purchase initiated for {title}")

    def clear_history(self) -> None:
        self._renderer.on_status_changed("Chat history cleared!")


__all__ = ["CHAT", "CHATS", "HOME", "Navigator", "PREMIUM", "SCREENS", "SETTINGS_SCREEN"]
