# -*- coding: utf-8 -*-
"""The API registry: validated CRUD over the key-value store.

Every successful mutation performs exactly one store write and then
exactly one broadcast on the :class:`ChangeBus`. Validation happens
before anything is written, so a rejected call leaves no trace.

Usage::

    bus = ChangeBus()
    registry = ApiRegistry(JsonFileStore(), bus)

    entry = registry.add("OpenAI Prod", "sk-123", provider="openai")
    registry.update(entry.id, name="OpenAI Prod v2")
    registry.remove(entry.id)
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, List, Optional

from ..constant import API_KEY_PREFIX, DEFAULT_DESCRIPTION
from .errors import NotFoundError, StorageError, ValidationError
from .events import ChangeBus
from .models import ApiEntry, ApiEntryInfo
from .store import KeyValueStore, mask_api_key

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset(
    {"name", "credential", "provider", "description", "is_active"},
)


def _storage_key(api_id: str) -> str:
    return f"{API_KEY_PREFIX}{api_id}"


def _require_text(field: str, value: Any) -> str:
    """Return *value* stripped, or raise if it is empty."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} must not be empty")
    return value.strip()


def to_entry_info(entry: ApiEntry) -> ApiEntryInfo:
    """Project an entry into its redacted, UI-safe form."""
    return ApiEntryInfo(
        id=entry.id,
        name=entry.name,
        provider=entry.provider,
        description=entry.description,
        is_active=entry.is_active,
        is_configured=entry.is_configured,
        masked_credential=mask_api_key(entry.credential),
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


class ApiRegistry:
    """Authoritative catalog of configured API entries."""

    def __init__(self, store: KeyValueStore, bus: ChangeBus) -> None:
        self._store = store
        self._bus = bus
        # Text of the last failed load_all(), None after a clean load.
        self.last_load_error: Optional[str] = None

    @property
    def bus(self) -> ChangeBus:
        return self._bus

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load_all(self) -> List[ApiEntry]:
        """Read every entry from the store.

        Fails soft: any read or decode error is logged and an empty list
        is returned, since having no configuration is a valid state.
        """
        try:
            entries = [
                ApiEntry.model_validate(self._store.get(key))
                for key in self._store.list_keys()
                if key.startswith(API_KEY_PREFIX)
            ]
        except Exception as exc:
            logger.warning("Failed to load API integrations: %s", exc)
            self.last_load_error = str(exc) or type(exc).__name__
            return []
        self.last_load_error = None
        return sorted(entries, key=lambda e: (e.created_at, e.id))

    def list_info(self) -> List[ApiEntryInfo]:
        """Redacted snapshot of :meth:`load_all`."""
        return [to_entry_info(e) for e in self.load_all()]

    def get(self, api_id: str) -> ApiEntry:
        try:
            raw = self._store.get(_storage_key(api_id))
        except Exception as exc:
            raise StorageError(f"Failed to read API '{api_id}': {exc}") from exc
        if raw is None:
            raise NotFoundError(f"API '{api_id}' not found")
        return ApiEntry.model_validate(raw)

    def find_credential(self, provider: str) -> Optional[str]:
        """Credential of the first active entry for *provider*, if any."""
        for entry in self.load_all():
            if entry.provider == provider and entry.is_active:
                if entry.credential:
                    return entry.credential
        return None

    # ------------------------------------------------------------------
    # Mutators (validate → write → broadcast)
    # ------------------------------------------------------------------

    def add(
        self,
        name: str,
        credential: str,
        *,
        provider: str = "",
        description: str = "",
        is_active: bool = True,
    ) -> ApiEntry:
        """Create a new entry. Raises :class:`ValidationError`."""
        name = _require_text("name", name)
        credential = _require_text("credential", credential)

        try:
            existing = set(self._store.list_keys())
        except Exception as exc:
            raise StorageError(f"Failed to read API keys: {exc}") from exc
        api_id = uuid.uuid4().hex
        while _storage_key(api_id) in existing:
            api_id = uuid.uuid4().hex

        entry = ApiEntry(
            id=api_id,
            name=name,
            credential=credential,
            provider=(provider or "").strip().lower(),
            description=(description or "").strip() or DEFAULT_DESCRIPTION,
            is_active=is_active,
        )
        self._write(entry)
        logger.info("Added API integration: id=%s name=%s", api_id, name)
        self._bus.broadcast(api_id, "add")
        return entry

    def update(self, api_id: str, **fields: Any) -> ApiEntry:
        """Merge *fields* into an existing entry, keeping its id.

        Raises :class:`NotFoundError` or :class:`ValidationError`.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Unknown field(s): {', '.join(sorted(unknown))}",
            )
        changes: dict[str, Any] = {}
        for key, value in fields.items():
            if key in ("name", "credential"):
                changes[key] = _require_text(key, value)
            elif key == "is_active":
                changes[key] = bool(value)
            elif key == "provider":
                changes[key] = (value or "").strip().lower()
            else:
                changes[key] = (value or "").strip() or DEFAULT_DESCRIPTION

        current = self.get(api_id)
        entry = current.model_copy(
            update={**changes, "updated_at": datetime.now(timezone.utc)},
        )
        self._write(entry)
        logger.info("Updated API integration: id=%s", api_id)
        self._bus.broadcast(api_id, "update")
        return entry

    def remove(self, api_id: str) -> None:
        """Delete an entry. Raises :class:`NotFoundError`."""
        self.get(api_id)
        try:
            self._store.delete(_storage_key(api_id))
        except OSError as exc:
            raise StorageError(f"Failed to remove API '{api_id}': {exc}") from exc
        logger.info("Removed API integration: id=%s", api_id)
        self._bus.broadcast(api_id, "remove")

    def _write(self, entry: ApiEntry) -> None:
        try:
            self._store.set(
                _storage_key(entry.id),
                entry.model_dump(mode="json"),
            )
        except OSError as exc:
            raise StorageError(
                f"Failed to save API '{entry.id}': {exc}",
            ) from exc
