# -*- coding: utf-8 -*-
"""CLI commands for managing API integrations."""
from __future__ import annotations

import asyncio
from typing import Optional

import click
import httpx

from ..config import load_config
from ..probe import calculate_overall_health, check_api_health
from ..registry import (
    RegistryError,
    mask_api_key,
)
from .utils import build_registry, fail


@click.group("apis")
def apis_group() -> None:
    """Manage configured API integrations."""


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


@apis_group.command("list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Show all API integrations (credentials masked)."""
    registry = build_registry(ctx)
    entries = registry.load_all()
    if registry.last_load_error:
        fail(f"could not read the API store: {registry.last_load_error}")
    if not entries:
        click.echo("No API integrations configured.")
        return

    click.echo("\n=== API Integrations ===")
    for entry in entries:
        state = "active" if entry.is_active else "inactive"
        click.echo(f"\n{'─' * 44}")
        click.echo(f"  {entry.name} ({entry.id})")
        click.echo(f"{'─' * 44}")
        click.echo(f"  {'provider':16s}: {entry.provider or '(custom)'}")
        click.echo(f"  {'description':16s}: {entry.description}")
        click.echo(f"  {'credential':16s}: {mask_api_key(entry.credential)}")
        click.echo(f"  {'status':16s}: {state}")
    click.echo()


# ---------------------------------------------------------------------------
# add / update / remove
# ---------------------------------------------------------------------------


@apis_group.command("add")
@click.argument("name")
@click.option(
    "--credential",
    prompt="API key",
    hide_input=True,
    help="API key / token (prompted when omitted)",
)
@click.option("--provider", default="", help="Kind of API, e.g. openai")
@click.option("--description", default="", help="Free-form description")
@click.pass_context
def add_cmd(
    ctx: click.Context,
    name: str,
    credential: str,
    provider: str,
    description: str,
) -> None:
    """Add a new API integration."""
    registry = build_registry(ctx)
    try:
        entry = registry.add(
            name,
            credential,
            provider=provider,
            description=description,
        )
    except RegistryError as exc:
        fail(str(exc))
    click.echo(
        f"✓ Added {entry.name} ({entry.id}) — "
        f"API Key: {mask_api_key(entry.credential)}",
    )


@apis_group.command("update")
@click.argument("api_id")
@click.option("--name", default=None, help="New label")
@click.option("--credential", default=None, help="New API key / token")
@click.option("--provider", default=None, help="New kind of API")
@click.option("--description", default=None, help="New description")
@click.option("--enable", is_flag=True, help="Mark the API active")
@click.option("--disable", is_flag=True, help="Mark the API inactive")
@click.pass_context
def update_cmd(
    ctx: click.Context,
    api_id: str,
    name: Optional[str],
    credential: Optional[str],
    provider: Optional[str],
    description: Optional[str],
    enable: bool,
    disable: bool,
) -> None:
    """Update fields of an existing API integration."""
    if enable and disable:
        fail("--enable and --disable are mutually exclusive")
    is_active = True if enable else False if disable else None
    fields = {
        key: value
        for key, value in {
            "name": name,
            "credential": credential,
            "provider": provider,
            "description": description,
            "is_active": is_active,
        }.items()
        if value is not None
    }
    if not fields:
        fail("nothing to update")
    registry = build_registry(ctx)
    try:
        entry = registry.update(api_id, **fields)
    except RegistryError as exc:
        fail(str(exc))
    click.echo(f"✓ Updated {entry.name} ({entry.id})")


@apis_group.command("remove")
@click.argument("api_id")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def remove_cmd(ctx: click.Context, api_id: str, yes: bool) -> None:
    """Remove an API integration."""
    registry = build_registry(ctx)
    try:
        entry = registry.get(api_id)
    except RegistryError as exc:
        fail(str(exc))
    if not yes and not click.confirm(f"Remove {entry.name}?", default=False):
        return
    try:
        registry.remove(api_id)
    except RegistryError as exc:
        fail(str(exc))
    click.echo(f"✓ Removed {entry.name} ({api_id})")


# ---------------------------------------------------------------------------
# health
# ---------------------------------------------------------------------------


@apis_group.command("health")
@click.pass_context
def health_cmd(ctx: click.Context) -> None:
    """Check connectivity of every active API."""
    registry = build_registry(ctx)
    config = load_config()
    entries = [e for e in registry.load_all() if e.is_active]

    async def _run():
        async with httpx.AsyncClient(timeout=config.request_timeout) as c:
            return await asyncio.gather(
                *[check_api_health(c, e, config) for e in entries],
            )

    results = asyncio.run(_run()) if entries else []
    colors = {"success": "green", "error": "red"}
    for entry, health in zip(entries, results):
        label = click.style(health.status, fg=colors.get(health.status))
        click.echo(f"  {entry.name:24s} {label} {health.message}")
    overall = calculate_overall_health(
        {e.id: h for e, h in zip(entries, results)},
    )
    click.echo(f"Overall: {overall}")
