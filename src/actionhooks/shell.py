"""Shell command execution for action hooks.

A ShellCommand is built by CommandBuilder from a raw command string and
handed to a CommandRunner, which spawns it synchronously and captures the
combined stdout/stderr. The runner is pluggable so callers (and tests) can
substitute their own execution strategy.

Usage:
    from actionhooks.shell import CommandBuilder

    builder = CommandBuilder()
    cmd = builder.new_shell("make lint", "~/.config/actionhooks/functions.sh")
    cmd.add_env_vars("FOO=bar").dont_log()
    output = cmd.run_with_output()
"""

import logging
import os
import shlex
import subprocess
import sys
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A shell command could not be spawned or exited non-zero.

    Attributes:
        output: Combined stdout/stderr captured before the failure
        returncode: Process exit status, or None if the process never started
    """

    def __init__(self, message: str, output: str = "", returncode: int | None = None):
        self.output = output
        self.returncode = returncode
        super().__init__(message)


@dataclass
class ShellCommand:
    """A prepared shell invocation."""

    args: list[str]
    runner: "CommandRunner"
    env: list[str] = field(default_factory=list)
    should_log: bool = True

    def dont_log(self) -> "ShellCommand":
        """Keep this command out of the user-visible command log."""
        self.should_log = False
        return self

    def add_env_vars(self, *envs: str) -> "ShellCommand":
        """Attach ``KEY=VALUE`` environment assignments."""
        self.env.extend(envs)
        return self

    def get_env_vars(self) -> list[str]:
        return list(self.env)

    def to_string(self) -> str:
        return shlex.join(self.args)

    def run_with_output(self) -> str:
        """Run synchronously and return combined output.

        Raises:
            CommandError: If the command fails; carries any captured output
        """
        return self.runner.run_with_output(self)


class CommandRunner:
    """Runs ShellCommands as child processes via subprocess."""

    def run_with_output(self, cmd: ShellCommand) -> str:
        if cmd.should_log:
            logger.info("Running command: %s", cmd.to_string())
        else:
            logger.debug("Running command: %s", cmd.to_string())

        env = os.environ.copy()
        for entry in cmd.env:
            name, _, value = entry.partition("=")
            env[name] = value

        try:
            proc = subprocess.run(
                cmd.args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                stdin=subprocess.DEVNULL,
                env=env,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as e:
            raise CommandError(f"failed to start {cmd.args[0]}: {e}") from e

        if proc.returncode != 0:
            raise CommandError(
                f"exit status {proc.returncode}",
                output=proc.stdout or "",
                returncode=proc.returncode,
            )
        return proc.stdout or ""


class CommandBuilder:
    """Builds shell invocations bound to a runner.

    Args:
        runner: Executes built commands; defaults to a subprocess CommandRunner
        platform: Overrides ``sys.platform`` when choosing the shell
    """

    def __init__(self, runner: CommandRunner | None = None, platform: str | None = None):
        self.runner = runner or CommandRunner()
        self.platform = platform or sys.platform

    def new(self, args: list[str]) -> ShellCommand:
        return ShellCommand(args=list(args), runner=self.runner)

    def new_shell(self, command: str, shell_functions_file: str = "") -> ShellCommand:
        """Wrap *command* in the user's shell.

        When *shell_functions_file* is set (POSIX only), it is sourced first so
        hook commands can call helper functions defined there.
        """
        if self.platform.startswith("win"):
            return self.new(["cmd", "/c", command])

        script = command
        if shell_functions_file:
            path = os.path.expanduser(shell_functions_file)
            script = f". {shlex.quote(path)}\n{command}"

        shell = os.environ.get("SHELL") or "bash"
        return self.new([shell, "-c", script])
