"""Display callbacks the client core invokes on the UI layer."""

from __future__ import annotations

from typing import Any, List, MutableMapping, Tuple


class Renderer:
    """No-op base; UI layers override the hooks they can display."""

    def on_status_changed(self, text: str) -> None:
        pass

    def on_balance_changed(self, balance: int) -> None:
        pass

    def on_message_appended(self, text: str, is_from_user: bool) -> None:
        pass

    def on_typing_indicator_shown(self) -> None:
        pass

    def on_typing_indicator_hidden(self) -> None:
        pass

    def on_transcript_cleared(self) -> None:
        pass


class StateRenderer(Renderer):
    """Keeps the displayed state in a mutable mapping.

    The Streamlit surface passes ``st.session_state`` so the view survives
    reruns; tests pass a plain ``dict``.
    """

    STATUS_KEY = "rv_status"
    BALANCE_KEY = "rv_balance"
    TRANSCRIPT_KEY = "rv_transcript"
    TYPING_KEY = "rv_typing"

    def __init__(self, state: MutableMapping[str, Any] | None = None) -> None:
        self._state: MutableMapping[str, Any] = state if state is not None else {}
        self._state.setdefault(self.STATUS_KEY, "")
        self._state.setdefault(self.BALANCE_KEY, None)
        self._state.setdefault(self.TRANSCRIPT_KEY, [])
        self._state.setdefault(self.TYPING_KEY, False)

    @property
    def status(self) -> str:
        return self._state[self.STATUS_KEY]

    @property
    def balance(self) -> int | None:
        return self._state[self.BALANCE_KEY]

    @property
    def transcript(self) -> List[Tuple[str, bool]]:
        return self._state[self.TRANSCRIPT_KEY]

    @property
    def typing(self) -> bool:
        return self._state[self.TYPING_KEY]

    def on_status_changed(self, text: str) -> None:
        self._state[self.STATUS_KEY] = text

    def on_balance_changed(self, balance: int) -> None:
        self._state[self.BALANCE_KEY] = balance

    def on_message_appended(self, text: str, is_from_user: bool) -> None:
        self._state[self.TRANSCRIPT_KEY].append((text, is_from_user))

    def on_typing_indicator_shown(self) -> None:
        self._state[self.TYPING_KEY] = True

    def on_typing_indicator_hidden(self) -> None:
        self._state[self.TYPING_KEY] = False

    def on_transcript_cleared(self) -> None:
        self._state[self.TRANSCRIPT_KEY] = []
        self._state[self.TYPING_KEY] = False


__all__ = ["Renderer", "StateRenderer"]
