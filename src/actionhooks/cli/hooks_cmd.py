"""Hook inspection CLI commands: list and match."""

import click

from actionhooks.config.loader import ActionHooksConfig, ConfigProvider
from actionhooks.errors import ConfigError
from actionhooks.manager import HookManager
from actionhooks.types import HookDefinition


def _load_config(provider: ConfigProvider) -> ActionHooksConfig:
    try:
        return provider()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


def _describe(hook: HookDefinition) -> str:
    context = hook.context.strip() or "*"
    parts = [f"{context}/{hook.key.strip()}"]
    if hook.before.strip():
        parts.append(f"before: {hook.before.strip()}")
    if hook.after.strip():
        parts.append(f"after: {hook.after.strip()}")
    if hook.abort_on_success:
        parts.append(f"aborts: {hook.abort_message.strip() or 'default message'}")
    return "  ".join(parts)


@click.group()
def hooks():
    """Hook inspection commands."""
    pass


@hooks.command("list")
@click.pass_obj
def list_cmd(provider: ConfigProvider):
    """List configured action hooks in configuration order."""
    config = _load_config(provider)

    if not config.action_hooks:
        click.echo("No action hooks configured.")
        return

    click.echo(f"{len(config.action_hooks)} action hook(s):\n")
    for i, hook in enumerate(config.action_hooks, 1):
        if not hook.key.strip() or hook.is_inert:
            click.echo(click.style(f"  {i}. {_describe(hook)}  (never matches)", fg="yellow"))
        else:
            click.echo(f"  {i}. {_describe(hook)}")

    if config.shell_functions_file:
        click.echo(f"\nShell functions file: {config.shell_functions_file}")


@hooks.command("match")
@click.option("--context", "-c", default="", help="Context the action runs in.")
@click.argument("key")
@click.pass_obj
def match_cmd(provider: ConfigProvider, context: str, key: str):
    """Show the hooks that would run for KEY (dry-run, nothing is executed)."""
    _load_config(provider)
    matches = HookManager(provider).match_hooks(context, key)

    if not matches:
        click.echo("No matching hooks.")
        return

    click.echo(f"{len(matches)} matching hook(s):\n")
    for hook in matches:
        click.echo(f"  ✓ {_describe(hook)}")
