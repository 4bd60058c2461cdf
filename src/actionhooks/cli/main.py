"""actionhooks CLI entry point."""

import logging
import os
from pathlib import Path

import click

from actionhooks.config.loader import ConfigProvider


@click.group()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Config file (defaults to $ACTIONHOOKS_CONFIG or ~/.config/actionhooks/config.yml).",
)
@click.option(
    "--log-level",
    default=lambda: os.environ.get("ACTIONHOOKS_LOG_LEVEL", "WARNING"),
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging verbosity.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, log_level: str):
    """actionhooks: run shell hooks before and after user actions."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = ConfigProvider(config_path)


# Register subcommand groups
from actionhooks.cli.config_cmd import config  # noqa: E402
from actionhooks.cli.hooks_cmd import hooks  # noqa: E402
from actionhooks.cli.run_cmd import run  # noqa: E402

cli.add_command(config)
cli.add_command(hooks)
cli.add_command(run)
