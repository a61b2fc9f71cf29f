# app/jobs/state.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from app.schemas.market import MarketRecord

logger = logging.getLogger("crypto_board.store")


@dataclass(frozen=True)
class RefreshState:
    display_list: Tuple[MarketRecord, ...] = ()
    last_updated: str = ""
    last_updated_at: Optional[datetime] = None


Subscriber = Callable[[RefreshState], None]


class RefreshStore:
    """
    Holds the current RefreshState.

    The refresh controller is the only writer (via publish); readers take the
    `state` snapshot or subscribe to be called after every publish.
    """

    def __init__(self) -> None:
        self._state = RefreshState()
        self._subscribers: List[Subscriber] = []

    @property
    def state(self) -> RefreshState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def publish(self, state: RefreshState) -> None:
        self._state = state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("board subscriber failed | %r", callback)
