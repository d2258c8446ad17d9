# -*- coding: utf-8 -*-
"""API routes for the API integration registry."""

from __future__ import annotations

import asyncio
from typing import Dict, List, Optional

import httpx
from fastapi import APIRouter, Body, Depends, HTTPException, Path
from pydantic import BaseModel, Field

from ...config import Config
from ...probe import ApiHealth, calculate_overall_health, check_api_health
from ...probe.health import OverallHealth
from ...registry import (
    ApiEntryInfo,
    ApiRegistry,
    NotFoundError,
    StorageError,
    ValidationError,
    to_entry_info,
)
from .deps import get_config, get_http_client, get_registry

router = APIRouter(prefix="/apis", tags=["apis"])


# ---------------------------------------------------------------------------
# Request / response schemas
# ---------------------------------------------------------------------------


class ApiCreateRequest(BaseModel):
    """Request body for adding an API integration."""

    name: str = Field(..., description="Human-readable label")
    credential: str = Field(..., description="API key / token")
    provider: str = Field(default="", description="Kind of API")
    description: str = Field(default="")
    is_active: bool = Field(default=True)


class ApiUpdateRequest(BaseModel):
    """Request body for updating an API integration (partial)."""

    name: Optional[str] = None
    credential: Optional[str] = None
    provider: Optional[str] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None


class HealthReport(BaseModel):
    overall: OverallHealth
    apis: Dict[str, ApiHealth] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=400, detail=str(exc))
    return HTTPException(status_code=500, detail=str(exc))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=List[ApiEntryInfo],
    summary="List API integrations",
    description="Return every configured API with its credential masked.",
)
async def list_apis(
    registry: ApiRegistry = Depends(get_registry),
) -> List[ApiEntryInfo]:
    return registry.list_info()


@router.post(
    "",
    response_model=ApiEntryInfo,
    status_code=201,
    summary="Add an API integration",
)
async def add_api(
    body: ApiCreateRequest = Body(...),
    registry: ApiRegistry = Depends(get_registry),
) -> ApiEntryInfo:
    try:
        entry = registry.add(
            body.name,
            body.credential,
            provider=body.provider,
            description=body.description,
            is_active=body.is_active,
        )
    except (ValidationError, StorageError) as exc:
        raise _http_error(exc) from exc
    return to_entry_info(entry)


@router.get(
    "/health",
    response_model=HealthReport,
    summary="Check connectivity of all active APIs",
)
async def api_health(
    registry: ApiRegistry = Depends(get_registry),
    config: Config = Depends(get_config),
    client: Optional[httpx.AsyncClient] = Depends(get_http_client),
) -> HealthReport:
    entries = [e for e in registry.load_all() if e.is_active]

    async def _run(c: httpx.AsyncClient) -> List[ApiHealth]:
        return await asyncio.gather(
            *[check_api_health(c, e, config) for e in entries],
        )

    if client is not None:
        results = await _run(client)
    else:
        async with httpx.AsyncClient(timeout=config.request_timeout) as c:
            results = await _run(c)

    states = {e.id: h for e, h in zip(entries, results)}
    return HealthReport(overall=calculate_overall_health(states), apis=states)


@router.get(
    "/{api_id}",
    response_model=ApiEntryInfo,
    summary="Get one API integration",
)
async def get_api(
    api_id: str = Path(..., description="API identifier"),
    registry: ApiRegistry = Depends(get_registry),
) -> ApiEntryInfo:
    try:
        return to_entry_info(registry.get(api_id))
    except (NotFoundError, StorageError) as exc:
        raise _http_error(exc) from exc


@router.put(
    "/{api_id}",
    response_model=ApiEntryInfo,
    summary="Update an API integration",
    description="Only the fields present in the body are changed.",
)
async def update_api(
    api_id: str = Path(..., description="API identifier"),
    body: ApiUpdateRequest = Body(...),
    registry: ApiRegistry = Depends(get_registry),
) -> ApiEntryInfo:
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    try:
        entry = registry.update(api_id, **fields)
    except (NotFoundError, ValidationError, StorageError) as exc:
        raise _http_error(exc) from exc
    return to_entry_info(entry)


@router.delete(
    "/{api_id}",
    status_code=204,
    summary="Remove an API integration",
)
async def remove_api(
    api_id: str = Path(..., description="API identifier"),
    registry: ApiRegistry = Depends(get_registry),
) -> None:
    try:
        registry.remove(api_id)
    except (NotFoundError, StorageError) as exc:
        raise _http_error(exc) from exc
