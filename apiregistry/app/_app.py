# -*- coding: utf-8 -*-
"""FastAPI application factory.

Run with ``uvicorn --factory apiregistry.app:create_app``.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import FastAPI

from ..config import Config, load_config
from ..probe import ModelTestOrchestrator, ProviderCallFactory
from ..probe.orchestrator import CallFactory
from ..registry import ApiRegistry, ChangeBus, JsonFileStore, KeyValueStore
from .routers import router as api_router

logger = logging.getLogger(__name__)


def create_app(
    config: Optional[Config] = None,
    store: Optional[KeyValueStore] = None,
    call_factory: Optional[CallFactory] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> FastAPI:
    """Build the app with one bus, registry and orchestrator.

    The services live on ``app.state`` for the lifetime of the app.
    *http_client*, when given, is shared by provider calls and health
    checks; otherwise a short-lived client is opened per request.
    """
    config = config or load_config()
    bus = ChangeBus()
    registry = ApiRegistry(store if store is not None else JsonFileStore(), bus)
    orchestrator = ModelTestOrchestrator(
        call_factory or ProviderCallFactory(registry, config, http_client),
    )

    app = FastAPI(title="API Integration Registry")
    app.state.config = config
    app.state.bus = bus
    app.state.registry = registry
    app.state.orchestrator = orchestrator
    app.state.http_client = http_client
    app.include_router(api_router)
    logger.info("app created (%d API entries)", len(registry.load_all()))
    return app
