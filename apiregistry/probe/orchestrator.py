# -*- coding: utf-8 -*-
"""Model test orchestration: one observable test session at a time."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from ..constant import CANCELLED_TEST_MESSAGE, UNKNOWN_ERROR_MESSAGE
from ..registry.errors import ProviderCallError, ValidationError
from ..registry.models import ModelTestState

logger = logging.getLogger(__name__)

# (model_id, prompt) -> response text
ProviderCall = Callable[[str, str], Awaitable[str]]
# provider id -> ProviderCall
CallFactory = Callable[[str], ProviderCall]


def error_message(exc: BaseException) -> str:
    """Human-readable text for a failed provider call."""
    return str(exc).strip() or UNKNOWN_ERROR_MESSAGE


class ModelTestOrchestrator:
    """Drives model tests as an ``idle → loading → success|error`` machine.

    Starting a new test supersedes the observable state of any test
    still in flight. Each :meth:`start_test` gets a fresh session token
    and a completing call only touches the state if its token is still
    current; stale results are dropped. The superseded call itself is
    not cancelled.
    """

    def __init__(self, call_factory: CallFactory) -> None:
        self._call_factory = call_factory
        self._session = 0
        self._state = ModelTestState()

    @property
    def state(self) -> ModelTestState:
        return self._state.model_copy()

    @property
    def session(self) -> int:
        return self._session

    def reset(self) -> None:
        """Return to ``idle``; results of in-flight tests are dropped."""
        self._session += 1
        self._state = ModelTestState(session=self._session)

    async def start_test(
        self,
        provider: str,
        model_id: str,
        prompt: str,
    ) -> str:
        """Run one test and return the model's response text.

        Raises :class:`ProviderCallError` (after the state has moved to
        ``error``) when the provider call fails. Cancellation also ends
        the session in ``error`` before propagating.
        """
        if not model_id or not model_id.strip():
            raise ValidationError("model_id must not be empty")

        self._session += 1
        token = self._session
        self._state = ModelTestState(
            status="loading",
            provider=provider,
            model_id=model_id,
            session=token,
        )
        logger.info(
            "model test started: session=%d provider=%s model=%s",
            token,
            provider,
            model_id,
        )

        try:
            call = self._call_factory(provider)
            response = await call(model_id, prompt)
        except asyncio.CancelledError:
            if self._apply(token, "error", CANCELLED_TEST_MESSAGE):
                logger.info(
                    "model test cancelled: session=%d provider=%s model=%s",
                    token,
                    provider,
                    model_id,
                )
            raise
        except Exception as exc:
            message = error_message(exc)
            if self._apply(token, "error", message):
                logger.warning(
                    "model test failed: session=%d provider=%s model=%s: %s",
                    token,
                    provider,
                    model_id,
                    message,
                )
            raise ProviderCallError(message) from exc

        self._apply(token, "success", response)
        return response

    def _apply(self, token: int, status: str, response: str) -> bool:
        if token != self._session:
            logger.debug(
                "dropping %s result of stale session %d (current %d)",
                status,
                token,
                self._session,
            )
            return False
        self._state = self._state.model_copy(
            update={"status": status, "response": response},
        )
        return True
