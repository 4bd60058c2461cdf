"""Config CLI commands: validate."""

import click

from actionhooks.config.loader import ConfigProvider, default_config_path
from actionhooks.config.validator import validate_config_file


@click.group()
def config():
    """Config commands."""
    pass


@config.command()
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.pass_obj
def validate(provider: ConfigProvider, strict: bool):
    """Validate the config file against its JSON Schema."""
    config_path = provider.path or default_config_path()

    if not config_path.exists():
        click.echo(f"Error: Config file not found at {config_path}", err=True)
        raise SystemExit(1)

    issues = validate_config_file(config_path, strict=strict)
    errors = [i for i in issues if i.severity == "error"]
    warnings = [i for i in issues if i.severity == "warning"]

    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(
            click.style(f"{len(warnings)} warning(s) found.", fg="yellow")
        )

    click.echo(click.style("\nConfig is valid.", fg="green", bold=True))
