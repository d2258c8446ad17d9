# -*- coding: utf-8 -*-
"""CLI commands for listing and testing AI models."""
from __future__ import annotations

import asyncio
from typing import Optional

import click

from ..config import load_config
from ..probe import (
    PROVIDERS,
    ModelTestOrchestrator,
    ProviderCallFactory,
    list_providers,
)
from ..registry import ProviderCallError, ValidationError
from .utils import build_registry, fail


@click.group("models")
def models_group() -> None:
    """List providers and test their models."""


@models_group.command("list")
def list_cmd() -> None:
    """Show the built-in providers and their models."""
    for defn in list_providers():
        click.echo(f"\n{defn.name} ({defn.id})")
        for model in defn.models:
            click.echo(f"  {model.id:28s} {model.name}")
    click.echo()


@models_group.command("test")
@click.argument("provider")
@click.argument("model_id")
@click.option("--prompt", default=None, help="Prompt to send")
@click.pass_context
def test_cmd(
    ctx: click.Context,
    provider: str,
    model_id: str,
    prompt: Optional[str],
) -> None:
    """Send a prompt to MODEL_ID of PROVIDER and print the answer."""
    if provider not in PROVIDERS:
        fail(f"Unknown provider: {provider}")
    config = load_config()
    registry = build_registry(ctx)
    orchestrator = ModelTestOrchestrator(ProviderCallFactory(registry, config))
    try:
        response = asyncio.run(
            orchestrator.start_test(
                provider,
                model_id,
                prompt or config.test_prompt,
            ),
        )
    except (ProviderCallError, ValidationError) as exc:
        fail(str(exc))
    click.echo(click.style("✓ success", fg="green"))
    click.echo(response)
