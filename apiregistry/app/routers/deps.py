# -*- coding: utf-8 -*-
from typing import Optional

import httpx
from fastapi import Request

from ...config import Config
from ...probe import ModelTestOrchestrator
from ...registry import ApiRegistry


def get_registry(request: Request) -> ApiRegistry:
    return request.app.state.registry


def get_orchestrator(request: Request) -> ModelTestOrchestrator:
    return request.app.state.orchestrator


def get_config(request: Request) -> Config:
    return request.app.state.config


def get_http_client(request: Request) -> Optional[httpx.AsyncClient]:
    return request.app.state.http_client
