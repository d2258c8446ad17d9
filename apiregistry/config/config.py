# -*- coding: utf-8 -*-
from typing import Dict

from pydantic import BaseModel, Field

from ..constant import DEFAULT_REQUEST_TIMEOUT


class ProviderEndpointConfig(BaseModel):
    """Base URL override for one provider."""

    base_url: str = ""


def _default_endpoints() -> Dict[str, ProviderEndpointConfig]:
    return {
        "openai": ProviderEndpointConfig(
            base_url="https://api.openai.com/v1",
        ),
        "gemini": ProviderEndpointConfig(
            base_url="https://generativelanguage.googleapis.com/v1beta",
        ),
        "dataforseo": ProviderEndpointConfig(
            base_url="https://api.dataforseo.com",
        ),
    }


class Config(BaseModel):
    """Root config (config.json)."""

    providers: Dict[str, ProviderEndpointConfig] = Field(
        default_factory=_default_endpoints,
    )
    request_timeout: float = Field(
        default=DEFAULT_REQUEST_TIMEOUT,
        description="Timeout in seconds for provider HTTP calls",
    )
    test_prompt: str = Field(
        default="Say hello in one short sentence.",
        description="Prompt used when a model test gives none",
    )

    def base_url_for(self, provider: str, default: str = "") -> str:
        endpoint = self.providers.get(provider)
        url = endpoint.base_url if endpoint and endpoint.base_url else default
        return url.rstrip("/")
