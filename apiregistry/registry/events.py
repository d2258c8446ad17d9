# -*- coding: utf-8 -*-
"""In-process publish/subscribe bus for registry change events."""

from __future__ import annotations

import itertools
import logging
from typing import Callable, List, Tuple

from .models import ChangeAction, ChangeEvent

logger = logging.getLogger(__name__)

Listener = Callable[[ChangeEvent], None]
Unsubscribe = Callable[[], None]


class ChangeBus:
    """Ordered observer list broadcasting :class:`ChangeEvent` s.

    Listeners run synchronously, in subscription order. A listener
    raising never prevents delivery to the remaining listeners.
    Events are not persisted, deduplicated or replayed.
    """

    def __init__(self) -> None:
        self._listeners: List[Tuple[int, Listener]] = []
        self._tokens = itertools.count(1)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register *listener*; return a callable that removes it again."""
        token = next(self._tokens)
        self._listeners.append((token, listener))

        def unsubscribe() -> None:
            self._listeners = [
                item for item in self._listeners if item[0] != token
            ]

        return unsubscribe

    def publish(self, event: ChangeEvent) -> None:
        # Iterate a copy: listeners may (un)subscribe while being
        # notified. One removed earlier in this publish is skipped.
        snapshot = list(self._listeners)
        for token, listener in snapshot:
            if not self._is_subscribed(token):
                continue
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "change listener failed: api_id=%s action=%s",
                    event.api_id,
                    event.action,
                )

    def _is_subscribed(self, token: int) -> bool:
        return any(item[0] == token for item in self._listeners)

    def broadcast(self, api_id: str, action: ChangeAction) -> ChangeEvent:
        """Build and publish an event; return it."""
        event = ChangeEvent(api_id=api_id, action=action)
        self.publish(event)
        return event
