# -*- coding: utf-8 -*-
"""Reactive read-only projection of the registry for UI surfaces."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from .events import Unsubscribe
from .models import ApiEntryInfo, ChangeEvent
from .registry import ApiRegistry

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[List[ApiEntryInfo]], None]


class RegistryView:
    """Keeps a redacted registry snapshot in sync with the change bus.

    Any change event triggers a full reload; the event payload itself
    is not used. Use as a context manager or call :meth:`activate` /
    :meth:`deactivate` explicitly.
    """

    def __init__(
        self,
        registry: ApiRegistry,
        on_snapshot: Optional[SnapshotCallback] = None,
    ) -> None:
        self._registry = registry
        self._on_snapshot = on_snapshot
        self._unsubscribe: Optional[Unsubscribe] = None
        self.entries: List[ApiEntryInfo] = []
        self.loading = True
        self.error: Optional[str] = None

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def activate(self) -> "RegistryView":
        if self.active:
            return self
        self.reload()
        self._unsubscribe = self._registry.bus.subscribe(self._on_change)
        return self

    def deactivate(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def reload(self) -> List[ApiEntryInfo]:
        self.loading = True
        try:
            self.entries = self._registry.list_info()
            self.error = self._registry.last_load_error
        finally:
            self.loading = False
        if self._on_snapshot is not None:
            self._on_snapshot(list(self.entries))
        return self.entries

    def _on_change(self, event: ChangeEvent) -> None:
        if not self.active:
            return
        logger.debug(
            "registry changed (%s %s), reloading view",
            event.action,
            event.api_id,
        )
        self.reload()

    def __enter__(self) -> "RegistryView":
        return self.activate()

    def __exit__(self, *exc_info) -> None:
        self.deactivate()
