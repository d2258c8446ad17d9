# -*- coding: utf-8 -*-
"""Connectivity checks for configured APIs and overall health rollup."""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Dict, Literal, Mapping, Optional

import httpx
from pydantic import BaseModel, Field

from ..config import Config
from ..registry.models import ApiEntry, TestStatus

logger = logging.getLogger(__name__)

OverallHealth = Literal["healthy", "degraded", "critical"]


class ApiHealth(BaseModel):
    """Result of one connectivity check."""

    status: TestStatus = "idle"
    message: str = ""
    details: Dict[str, Any] = Field(default_factory=dict)
    response_time_ms: Optional[float] = None


async def _check_openai(
    client: httpx.AsyncClient,
    entry: ApiEntry,
    config: Config,
) -> ApiHealth:
    base_url = config.base_url_for("openai", "https://api.openai.com/v1")
    resp = await client.get(
        f"{base_url}/models",
        headers={"Authorization": f"Bearer {entry.credential}"},
    )
    if resp.status_code != 200:
        return ApiHealth(
            status="error",
            message=f"OpenAI API returned {resp.status_code}",
        )
    models = [
        m["id"]
        for m in resp.json().get("data", [])
        if "gpt-" in m.get("id", "") or "embedding" in m.get("id", "")
    ]
    return ApiHealth(status="success", details={"available_models": models})


async def _check_dataforseo(
    client: httpx.AsyncClient,
    entry: ApiEntry,
    config: Config,
) -> ApiHealth:
    login, sep, password = entry.credential.partition(":")
    if not sep or not login or not password:
        return ApiHealth(
            status="error",
            message="Invalid format. Use: username:password",
        )
    base_url = config.base_url_for("dataforseo", "https://api.dataforseo.com")
    resp = await client.get(
        f"{base_url}/v3/merchant/google/locations",
        auth=(login, password),
    )
    if resp.status_code != 200:
        try:
            detail = resp.json().get("message") or "Unknown error"
        except ValueError:
            detail = "Unknown error"
        return ApiHealth(
            status="error",
            message=f"DataForSEO API returned {resp.status_code}: {detail}",
        )
    return ApiHealth(
        status="success",
        message="API connection verified",
        details={"username": login},
    )


_CHECKS = {
    "openai": _check_openai,
    "dataforseo": _check_dataforseo,
}


async def check_api_health(
    client: httpx.AsyncClient,
    entry: ApiEntry,
    config: Optional[Config] = None,
) -> ApiHealth:
    """Probe one API entry. Never raises for network or HTTP errors."""
    if not entry.is_active:
        return ApiHealth(status="idle", message="API is disabled")
    check = _CHECKS.get(entry.provider)
    if check is None:
        return ApiHealth(status="idle", message="No health check available")

    start = time.perf_counter()
    try:
        health = await check(client, entry, config or Config())
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning(
            "health check failed for %s (%s): %s",
            entry.id,
            entry.provider,
            exc,
        )
        health = ApiHealth(status="error", message=str(exc) or "Unknown error")
    health.response_time_ms = (time.perf_counter() - start) * 1000
    return health


def calculate_overall_health(states: Mapping[str, ApiHealth]) -> OverallHealth:
    """Roll per-API health up into one indicator.

    *states* should only contain enabled APIs.
    """
    if not states:
        return "critical"
    statuses = [s.status for s in states.values()]
    if "loading" in statuses:
        return "degraded"
    if all(s == "success" for s in statuses):
        return "healthy"
    if statuses.count("error") >= math.ceil(len(statuses) / 2):
        return "critical"
    return "degraded"
