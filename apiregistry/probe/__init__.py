# -*- coding: utf-8 -*-
"""Model tests and connectivity checks against external providers."""

from .health import ApiHealth, calculate_overall_health, check_api_health
from .orchestrator import ModelTestOrchestrator, ProviderCall, error_message
from .providers import (
    PROVIDERS,
    GeminiCall,
    ModelInfo,
    OpenAICompatibleCall,
    ProviderCallFactory,
    ProviderDefinition,
    get_provider,
    list_providers,
)

__all__ = [
    "ApiHealth",
    "GeminiCall",
    "ModelInfo",
    "ModelTestOrchestrator",
    "OpenAICompatibleCall",
    "PROVIDERS",
    "ProviderCall",
    "ProviderCallFactory",
    "ProviderDefinition",
    "calculate_overall_health",
    "check_api_health",
    "error_message",
    "get_provider",
    "list_providers",
]
