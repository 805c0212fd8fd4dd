"""Single owner of the in-memory diamond balance."""

from __future__ import annotations

import logging
from typing import Callable, List

from app_settings import DEFAULT_DIAMONDS
from models import parse_balance


logger = logging.getLogger(__name__)

BalanceListener = Callable[[int], None]


class BalanceStateManager:
    """Observable cell holding the diamond balance.

    Only server-reported values are applied; callers never add or subtract
    locally. Updates are applied in the order they arrive, so the most
    recently applied value wins even if it came from an older request.
    Call from the UI context only.
    """

    def __init__(self, initial: int = DEFAULT_DIAMONDS) -> None:
        self._value = int(initial)
        self._listeners: List[BalanceListener] = []

    def current(self) -> int:
        return self._value

    def subscribe(self, listener: BalanceListener) -> Callable[[], None]:
        """Register ``listener`` for every applied value; returns an unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def apply(self, value: int) -> None:
        self._value = int(value)
        logger.debug("Updating diamond display to: %s", self._value)
        for listener in list(self._listeners):
            listener(self._value)

    def apply_from_field(self, raw: str | None) -> bool:
        """Apply a raw response field; returns ``False`` and keeps state if not numeric."""

        value = parse_balance(raw)
        if value is None:
            logger.error("Error parsing diamond count: %r", raw)
            return False
        self.apply(value)
        return True


__all__ = ["BalanceListener", "BalanceStateManager"]
