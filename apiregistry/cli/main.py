# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import click
from dotenv import load_dotenv

from ..constant import LOG_LEVEL_ENV
from .apis_cmd import apis_group
from .models_cmd import models_group


@click.group()
@click.option(
    "--store",
    "store_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path of the API store file (default: ~/.apiregistry/apis.json)",
)
@click.option(
    "--log-level",
    default=None,
    help=f"Log level (default: ${LOG_LEVEL_ENV} or WARNING)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    store_path: Optional[Path],
    log_level: Optional[str],
) -> None:
    """Manage API integrations and test AI models."""
    load_dotenv()
    level = (log_level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["store_path"] = store_path


cli.add_command(apis_group)
cli.add_command(models_group)


if __name__ == "__main__":
    cli()  # pylint: disable=no-value-for-parameter
