# -*- coding: utf-8 -*-
"""Built-in model providers and the HTTP calls used to test them."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from ..config import Config
from ..registry.errors import NotFoundError, ProviderCallError
from ..registry.registry import ApiRegistry
from .orchestrator import ProviderCall

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that provides brief, accurate responses."
)


class ModelInfo(BaseModel):
    """A single model offered by a provider."""

    id: str = Field(..., description="Model identifier used in API calls")
    name: str = Field(..., description="Human-readable model name")


class ProviderDefinition(BaseModel):
    """Static definition of a testable model provider."""

    id: str = Field(..., description="Provider identifier")
    name: str = Field(..., description="Human-readable provider name")
    default_base_url: str = Field(default="", description="API base URL")
    models: List[ModelInfo] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Provider definitions
# ---------------------------------------------------------------------------

PROVIDER_OPENAI = ProviderDefinition(
    id="openai",
    name="OpenAI",
    default_base_url="https://api.openai.com/v1",
    models=[
        ModelInfo(id="gpt-4o-mini", name="GPT-4o mini"),
        ModelInfo(id="gpt-4o", name="GPT-4o"),
        ModelInfo(id="gpt-4", name="GPT-4"),
        ModelInfo(
            id="text-embedding-3-small",
            name="Text Embedding 3 Small",
        ),
    ],
)

PROVIDER_GEMINI = ProviderDefinition(
    id="gemini",
    name="Gemini AI",
    default_base_url="https://generativelanguage.googleapis.com/v1beta",
    models=[
        ModelInfo(id="gemini-1.5-flash", name="Gemini 1.5 Flash"),
        ModelInfo(id="gemini-1.5-pro", name="Gemini 1.5 Pro"),
    ],
)

# Registry: provider_id -> ProviderDefinition
PROVIDERS: dict[str, ProviderDefinition] = {
    PROVIDER_OPENAI.id: PROVIDER_OPENAI,
    PROVIDER_GEMINI.id: PROVIDER_GEMINI,
}


def get_provider(provider_id: str) -> Optional[ProviderDefinition]:
    """Return a provider definition by id, or None if not found."""
    return PROVIDERS.get(provider_id)


def list_providers() -> List[ProviderDefinition]:
    """Return all registered provider definitions."""
    return list(PROVIDERS.values())


# ---------------------------------------------------------------------------
# HTTP calls
# ---------------------------------------------------------------------------


class _HttpCall:
    def __init__(
        self,
        api_key: str,
        base_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._client = client
        self._timeout = timeout

    async def _post(
        self,
        model_id: str,
        path: str,
        payload: Dict[str, Any],
        **kwargs: Any,
    ) -> Dict[str, Any]:
        url = f"{self._base_url}{path}"
        logger.debug("POST %s (model=%s)", url, model_id)
        try:
            if self._client is not None:
                resp = await self._client.post(url, json=payload, **kwargs)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as c:
                    resp = await c.post(url, json=payload, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            r = exc.response
            raise ProviderCallError(
                f"Error with model {model_id}: "
                f"{r.status_code} {r.reason_phrase}",
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderCallError(
                f"Error with model {model_id}: {exc}",
            ) from exc
        return resp.json()


class OpenAICompatibleCall(_HttpCall):
    """Chat completion (or embedding) call on an OpenAI-style API."""

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    async def __call__(self, model_id: str, prompt: str) -> str:
        if "embedding" in model_id:
            data = await self._post(
                model_id,
                "/embeddings",
                {"model": model_id, "input": prompt},
                headers=self._headers(),
            )
            try:
                dimensions = len(data["data"][0]["embedding"])
            except (KeyError, IndexError, TypeError) as exc:
                raise ProviderCallError(
                    f"Unexpected embedding response from {model_id}",
                ) from exc
            return (
                f"Success! Generated {dimensions}-dimensional "
                "embedding vector."
            )

        data = await self._post(
            model_id,
            "/chat/completions",
            {
                "model": model_id,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "temperature": 0.7,
                "max_tokens": 150,
            },
            headers=self._headers(),
        )
        try:
            return data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderCallError(
                f"Unexpected completion response from {model_id}",
            ) from exc


class GeminiCall(_HttpCall):
    """``generateContent`` call on the Gemini API."""

    async def __call__(self, model_id: str, prompt: str) -> str:
        data = await self._post(
            model_id,
            f"/models/{model_id}:generateContent",
            {"contents": [{"parts": [{"text": prompt}]}]},
            params={"key": self._api_key},
        )
        try:
            parts = data["candidates"][0]["content"]["parts"]
            return "".join(p.get("text", "") for p in parts)
        except (KeyError, IndexError, TypeError) as exc:
            raise ProviderCallError(
                f"Unexpected Gemini response from {model_id}",
            ) from exc


_CALL_CLASSES: dict[str, type[_HttpCall]] = {
    PROVIDER_OPENAI.id: OpenAICompatibleCall,
    PROVIDER_GEMINI.id: GeminiCall,
}


class ProviderCallFactory:
    """Builds provider calls using credentials from the registry."""

    def __init__(
        self,
        registry: ApiRegistry,
        config: Optional[Config] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._registry = registry
        self._config = config or Config()
        self._client = client

    def __call__(self, provider: str) -> ProviderCall:
        defn = get_provider(provider)
        if defn is None:
            raise NotFoundError(f"Provider '{provider}' not found")
        api_key = self._registry.find_credential(provider)
        if not api_key:
            raise ProviderCallError(f"{defn.name} API key is not configured")
        base_url = self._config.base_url_for(provider, defn.default_base_url)
        return _CALL_CLASSES[provider](
            api_key,
            base_url,
            client=self._client,
            timeout=self._config.request_timeout,
        )
