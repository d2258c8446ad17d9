# -*- coding: utf-8 -*-
from __future__ import annotations

import click

from ..registry import ApiRegistry, ChangeBus, JsonFileStore


def build_registry(ctx: click.Context) -> ApiRegistry:
    """Registry over the store selected by the global ``--store`` option."""
    store_path = (ctx.obj or {}).get("store_path")
    return ApiRegistry(JsonFileStore(store_path), ChangeBus())


def fail(message: str) -> None:
    """Print *message* in red and exit with status 1."""
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)
    raise SystemExit(1)
