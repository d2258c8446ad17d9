# -*- coding: utf-8 -*-
"""API registry — models, persistent store, change bus and view."""

from .errors import (
    NotFoundError,
    ProviderCallError,
    RegistryError,
    StorageError,
    ValidationError,
)
from .events import ChangeBus
from .models import (
    ApiEntry,
    ApiEntryInfo,
    ChangeEvent,
    ModelTestState,
)
from .registry import ApiRegistry, to_entry_info
from .store import (
    JsonFileStore,
    KeyValueStore,
    MemoryStore,
    get_store_path,
    mask_api_key,
)
from .view import RegistryView

__all__ = [
    # errors
    "NotFoundError",
    "ProviderCallError",
    "RegistryError",
    "StorageError",
    "ValidationError",
    # models
    "ApiEntry",
    "ApiEntryInfo",
    "ChangeEvent",
    "ModelTestState",
    # registry
    "ApiRegistry",
    "ChangeBus",
    "RegistryView",
    "to_entry_info",
    # store
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "get_store_path",
    "mask_api_key",
]
