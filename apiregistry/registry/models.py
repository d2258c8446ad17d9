# -*- coding: utf-8 -*-
"""Pydantic data models for API entries, change events and test state."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from ..constant import DEFAULT_DESCRIPTION

ChangeAction = Literal["add", "update", "remove"]

TestStatus = Literal["idle", "loading", "success", "error"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApiEntry(BaseModel):
    """One configured external API, as persisted in the store."""

    id: str = Field(..., description="Opaque unique identifier")
    name: str = Field(..., description="Human-readable label")
    credential: str = Field(..., description="Secret API key / token")
    provider: str = Field(
        default="",
        description="Kind of API (openai, gemini, dataforseo, ...)",
    )
    description: str = Field(default=DEFAULT_DESCRIPTION)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_configured(self) -> bool:
        return bool(self.credential)


class ApiEntryInfo(BaseModel):
    """Redacted entry handed to UI surfaces (no raw credential)."""

    id: str
    name: str
    provider: str = ""
    description: str = ""
    is_active: bool = True
    is_configured: bool = False
    masked_credential: str = Field(
        default="",
        description="Configured credential (masked)",
    )
    created_at: datetime
    updated_at: datetime


class ChangeEvent(BaseModel):
    """Notification that the registry changed."""

    model_config = ConfigDict(frozen=True)

    api_id: str
    action: ChangeAction


class ModelTestState(BaseModel):
    """Observable state of the current model test session."""

    model_config = ConfigDict(protected_namespaces=())

    status: TestStatus = "idle"
    provider: str = ""
    model_id: str = ""
    response: str = ""
    session: int = 0
