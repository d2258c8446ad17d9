# -*- coding: utf-8 -*-
"""Key-value store adapters backing the registry."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from ..constant import STORE_FILE, WORKING_DIR


def get_store_path() -> Path:
    """Return the default store file path."""
    return WORKING_DIR / STORE_FILE


class KeyValueStore(Protocol):
    """Minimal synchronous storage interface consumed by the registry."""

    def get(self, key: str) -> Optional[Any]:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def delete(self, key: str) -> None:
        ...

    def list_keys(self) -> List[str]:
        ...


class MemoryStore:
    """In-process dict-backed store."""

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, Any] = dict(data or {})

    def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def list_keys(self) -> List[str]:
        return list(self._data)


class JsonFileStore:
    """Store persisted as a single JSON document on disk.

    The whole document is re-read on every access, so several processes
    (e.g. CLI and server) see each other's writes. Read errors
    (``OSError``, ``json.JSONDecodeError``) propagate to the caller.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else get_store_path()

    def _read(self) -> Dict[str, Any]:
        if not self.path.is_file():
            return {}
        with open(self.path, "r", encoding="utf-8") as fh:
            raw = json.load(fh)
        if not isinstance(raw, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return raw

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)

    def get(self, key: str) -> Optional[Any]:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def list_keys(self) -> List[str]:
        return list(self._read())


def mask_api_key(api_key: str, visible_chars: int = 4) -> str:
    """Redact a credential for display, keeping its first three and
    last *visible_chars* characters (``"sk-abcdefghijk"`` →
    ``"sk-*******hijk"``). At least four mask characters are shown;
    keys no longer than *visible_chars* are masked entirely.
    """
    if len(api_key or "") <= visible_chars:
        return "*" * len(api_key or "")
    head, tail = api_key[:3], api_key[-visible_chars:]
    masked = max(len(api_key) - len(head) - len(tail), 4)
    return head + "*" * masked + tail
