"""Run CLI command: wrap a program as a hooked action."""

import click

from actionhooks.config.loader import ConfigProvider
from actionhooks.coordinator import CompletionCoordinator
from actionhooks.dispatch import ActionDispatcher
from actionhooks.errors import ConfigError, HookAbortError, HookFailedError
from actionhooks.manager import HookManager

EXIT_HOOK_FAILED = 1
EXIT_HOOK_ABORTED = 2


@click.command(context_settings={"ignore_unknown_options": True})
@click.option("--context", "-c", default="", help="Context the action runs in.")
@click.option("--key", "-k", required=True, help="Key label identifying the action.")
@click.argument("command", nargs=-1, required=True, type=click.UNPROCESSED)
@click.pass_obj
def run(provider: ConfigProvider, context: str, key: str, command: tuple[str, ...]):
    """Run COMMAND as the action for KEY, between its before- and after-hooks.

    Exits with the command's own status unless a hook fails (1) or aborts (2).

        actionhooks run --context files --key c -- git commit -m "message"
    """
    dispatcher = ActionDispatcher(HookManager(provider), CompletionCoordinator())

    try:
        status = dispatcher.dispatch(
            context, key, lambda: dispatcher.run_subprocess(command)
        )
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except HookAbortError as e:
        click.echo(click.style(str(e), fg="yellow"), err=True)
        raise SystemExit(EXIT_HOOK_ABORTED)
    except HookFailedError as e:
        click.echo(click.style(str(e), fg="red"), err=True)
        raise SystemExit(EXIT_HOOK_FAILED)
    except OSError as e:
        click.echo(f"Error: cannot run {command[0]}: {e}", err=True)
        raise SystemExit(127)

    raise SystemExit(status)
