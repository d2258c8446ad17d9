# -*- coding: utf-8 -*-
"""API routes for model providers and model tests."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from ...config import Config
from ...probe import (
    ModelTestOrchestrator,
    ProviderDefinition,
    get_provider,
    list_providers,
)
from ...registry import ModelTestState, ProviderCallError, ValidationError
from .deps import get_config, get_orchestrator

router = APIRouter(prefix="/models", tags=["models"])


class ModelTestRequest(BaseModel):
    """Request body for testing a model."""

    model_config = ConfigDict(protected_namespaces=())

    provider: str = Field(..., description="Provider to use")
    model_id: str = Field(..., description="Model identifier")
    prompt: str = Field(
        default="",
        description="Prompt to send (config test_prompt when empty)",
    )


@router.get(
    "",
    response_model=List[ProviderDefinition],
    summary="List testable providers and their models",
)
async def list_all_providers() -> List[ProviderDefinition]:
    return list_providers()


@router.get(
    "/test",
    response_model=ModelTestState,
    summary="Current model test state",
)
async def get_test_state(
    orchestrator: ModelTestOrchestrator = Depends(get_orchestrator),
) -> ModelTestState:
    return orchestrator.state


@router.post(
    "/test",
    response_model=ModelTestState,
    summary="Test a model",
    description="Send a prompt to the model. Failures are returned as "
    "502 and also recorded in the test state.",
)
async def test_model(
    body: ModelTestRequest = Body(...),
    orchestrator: ModelTestOrchestrator = Depends(get_orchestrator),
    config: Config = Depends(get_config),
) -> ModelTestState:
    if get_provider(body.provider) is None:
        raise HTTPException(
            status_code=404,
            detail=f"Provider '{body.provider}' not found",
        )
    prompt = body.prompt.strip() or config.test_prompt
    try:
        await orchestrator.start_test(body.provider, body.model_id, prompt)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ProviderCallError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return orchestrator.state
