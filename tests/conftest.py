"""Shared fixtures for actionhooks tests."""

import threading
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass

import pytest

from actionhooks.config.loader import ActionHooksConfig
from actionhooks.manager import HookManager
from actionhooks.shell import CommandBuilder, CommandError, CommandRunner, ShellCommand
from actionhooks.types import HookDefinition


@dataclass
class Expectation:
    description: str
    predicate: Callable[[ShellCommand], bool]
    output: str = ""
    error: str | None = None


class FakeCommandRunner(CommandRunner):
    """Scripted runner: commands must arrive in the expected order."""

    def __init__(self):
        self.expectations: deque[Expectation] = deque()
        self.calls: list[ShellCommand] = []

    def expect(
        self,
        description: str,
        predicate: Callable[[ShellCommand], bool],
        output: str = "",
        error: str | None = None,
    ) -> "FakeCommandRunner":
        self.expectations.append(Expectation(description, predicate, output, error))
        return self

    def expect_command(self, text: str, output: str = "", error: str | None = None) -> "FakeCommandRunner":
        return self.expect(text, lambda cmd: text in cmd.to_string(), output, error)

    def run_with_output(self, cmd: ShellCommand) -> str:
        self.calls.append(cmd)
        assert self.expectations, f"unexpected command: {cmd.to_string()}"
        expectation = self.expectations.popleft()
        assert expectation.predicate(cmd), (
            f"{expectation.description}: unexpected command {cmd.to_string()}"
        )
        if expectation.error is not None:
            raise CommandError(expectation.error, output=expectation.output, returncode=1)
        return expectation.output

    def check_for_missing_calls(self) -> None:
        missing = [e.description for e in self.expectations]
        assert not missing, f"expected commands were not run: {missing}"

    def commands(self) -> list[str]:
        return [cmd.to_string() for cmd in self.calls]


class CountingCommandRunner(CommandRunner):
    """Thread-safe runner that records every command and always succeeds."""

    def __init__(self):
        self._lock = threading.Lock()
        self.calls: list[ShellCommand] = []

    def run_with_output(self, cmd: ShellCommand) -> str:
        with self._lock:
            self.calls.append(cmd)
        return ""

    def count(self, text: str) -> int:
        with self._lock:
            return sum(1 for cmd in self.calls if text in cmd.to_string())


def make_manager(
    hooks: list[HookDefinition],
    runner: CommandRunner,
    shell_functions_file: str = "",
) -> HookManager:
    config = ActionHooksConfig(
        action_hooks=tuple(hooks), shell_functions_file=shell_functions_file
    )
    builder = CommandBuilder(runner=runner, platform="linux")
    return HookManager(lambda: config, builder=builder)


def env_of(cmd: ShellCommand) -> dict[str, str]:
    return dict(entry.partition("=")[::2] for entry in cmd.get_env_vars())


@pytest.fixture
def runner():
    fake = FakeCommandRunner()
    yield fake


@pytest.fixture
def commit_hook():
    return HookDefinition(context="files", key="c", before="echo before", after="echo after")
