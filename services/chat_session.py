"""Per chat screen orchestration: guest session, sends and balance updates."""

from __future__ import annotations

import logging

from api_client import (
    SEND_INSUFFICIENT_BALANCE,
    SEND_NETWORK_ERROR,
    SEND_NO_REPLY,
    SEND_SERVER_ERROR,
    BackendClient,
    SendResult,
)
from catalog import Companion
from models import GuestSession
from renderer import Renderer
from services.balance import BalanceStateManager
from services.balance_sync import BalanceSync
from services.dispatcher import UiDispatcher


logger = logging.getLogger(__name__)

IDLE = "idle"
SESSION_PENDING = "session_pending"
READY = "ready"
SENDING = "sending"
CLOSED = "closed"

MESSAGE_INSUFFICIENT_BALANCE = "❌ Not enough diamonds! Please purchase more diamonds to continue."
MESSAGE_SEND_FAILED = "❌ Failed to send message. Please try again."
MESSAGE_NETWORK_ERROR = "❌ Network error. Please check your connection."
MESSAGE_NO_REPLY = "❌ No response received from AI"

_FAILURE_MESSAGES = {
    SEND_INSUFFICIENT_BALANCE: MESSAGE_INSUFFICIENT_BALANCE,
    SEND_SERVER_ERROR: MESSAGE_SEND_FAILED,
    SEND_NETWORK_ERROR: MESSAGE_NETWORK_ERROR,
    SEND_NO_REPLY: MESSAGE_NO_REPLY,
}


class GuestSessionCache:
    """Process-wide guest session id; filled once, never refreshed."""

    def __init__(self) -> None:
        self.session: GuestSession | None = None
        self.pending = False

    @property
    def session_id(self) -> str:
        return self.session.session_id if self.session else ""

    def store(self, session: GuestSession | None) -> None:
        self.pending = False
        if session is not None and self.session is None:
            self.session = session


class ChatSessionController:
    """State machine for one open chat screen.

    The guest session is requested on the first send but the message does
    not wait for it; the chat endpoint is keyed by device fingerprint. Each
    send appends the user's text immediately and the reply (or one failure
    message) when the exchange completes. The balance only ever changes to
    the server's ``remainingDiamonds``.
    """

    def __init__(
        self,
        companion: Companion,
        *,
        client: BackendClient,
        fingerprint: str,
        balance: BalanceStateManager,
        sync: BalanceSync,
        dispatcher: UiDispatcher,
        renderer: Renderer,
        sessions: GuestSessionCache,
    ) -> None:
        self.companion = companion
        self._client = client
        self._fingerprint = fingerprint
        self._balance = balance
        self._sync = sync
        self._dispatcher = dispatcher
        self._renderer = renderer
        self._sessions = sessions
        self._in_flight = 0
        self.transcript: list[tuple[str, bool]] = []
        self.state = IDLE if sessions.session is None else READY

    @property
    def closed(self) -> bool:
        return self.state == CLOSED

    def open(self) -> None:
        """Show the greeting and reconcile the balance on chat entry."""

        logger.debug("Chat interface created for: %s", self.companion.display_name)
        self._append(self.companion.greeting(), False)
        self._sync.refresh()

    def send(self, text: str) -> bool:
        """Submit ``text``; returns ``False`` when nothing was sent."""

        message = (text or "").strip()
        if not message or self.closed:
            return False

        if self._sessions.session is None:
            self._request_session()

        logger.debug(
            "Chat send to companion %s: %s...",
            self.companion.id,
            message[:20],
        )
        self._append(message, True)
        self._renderer.on_typing_indicator_shown()
        self._in_flight += 1
        self.state = SENDING
        companion_id = self.companion.id
        self._dispatcher.submit(
            lambda: self._client.send_chat_message(self._fingerprint, companion_id, message),
            self._on_send_complete,
            self._on_send_failed,
        )
        return True

    def close(self) -> None:
        """Discard the transcript and reconcile the balance before leaving."""

        if self.closed:
            return
        self.state = CLOSED
        self.transcript = []
        self._renderer.on_transcript_cleared()
        self._sync.refresh()

    # Internal helpers -----------------------------------------------------
    def _append(self, text: str, is_from_user: bool) -> None:
        self.transcript.append((text, is_from_user))
        self._renderer.on_message_appended(text, is_from_user)

    def _request_session(self) -> None:
        if self._sessions.pending:
            return
        self._sessions.pending = True
        if self.state == IDLE:
            self.state = SESSION_PENDING
        logger.debug("Getting guest session first...")
        self._dispatcher.submit(
            self._client.fetch_guest_session,
            self._on_session,
            lambda exc: self._on_session(None),
        )

    def _on_session(self, session: GuestSession | None) -> None:
        self._sessions.store(session)
        if self.state == SESSION_PENDING:
            self.state = READY

    def _on_send_failed(self, exc: BaseException) -> None:
        logger.error("Chat send to companion %s raised: %s", self.companion.id, exc)
        self._on_send_complete(SendResult(status=SEND_NETWORK_ERROR))

    def _on_send_complete(self, result: SendResult) -> None:
        self._in_flight = max(0, self._in_flight - 1)
        if not self.closed:
            if self._in_flight == 0:
                self._renderer.on_typing_indicator_hidden()
            if result.ok and result.reply is not None:
                self._append(result.reply.reply_text, False)
            else:
                self._append(_FAILURE_MESSAGES.get(result.status, MESSAGE_SEND_FAILED), False)
            if self._in_flight == 0:
                self.state = READY

        if result.ok and result.reply is not None:
            if not self._balance.apply_from_field(result.reply.remaining_raw):
                self._sync.refresh()
            else:
                logger.debug("Updated diamond count after message: %s", self._balance.current())


__all__ = [
    "CLOSED",
    "ChatSessionController",
    "GuestSessionCache",
    "IDLE",
    "MESSAGE_INSUFFICIENT_BALANCE",
    "MESSAGE_NETWORK_ERROR",
    "MESSAGE_NO_REPLY",
    "MESSAGE_SEND_FAILED",
    "READY",
    "SENDING",
    "SESSION_PENDING",
]
