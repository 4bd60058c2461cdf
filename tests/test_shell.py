"""Tests for shell command construction and execution."""

import sys

import pytest

from actionhooks.shell import CommandBuilder, CommandError, CommandRunner

posix_only = pytest.mark.skipif(sys.platform.startswith("win"), reason="requires a POSIX shell")


class TestCommandBuilder:
    def test_posix_uses_shell_env(self, monkeypatch):
        monkeypatch.setenv("SHELL", "/bin/zsh")
        cmd = CommandBuilder(platform="linux").new_shell("echo hi")
        assert cmd.args == ["/bin/zsh", "-c", "echo hi"]

    def test_posix_defaults_to_bash(self, monkeypatch):
        monkeypatch.delenv("SHELL", raising=False)
        cmd = CommandBuilder(platform="darwin").new_shell("echo hi")
        assert cmd.args == ["bash", "-c", "echo hi"]

    def test_functions_file_is_sourced(self, monkeypatch):
        monkeypatch.setenv("SHELL", "/bin/sh")
        cmd = CommandBuilder(platform="linux").new_shell("my_func", "/tmp/with space.sh")
        assert cmd.args[-1] == ". '/tmp/with space.sh'\nmy_func"

    @posix_only
    def test_functions_file_expands_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        cmd = CommandBuilder(platform="linux").new_shell("f", "~/fns.sh")
        assert str(tmp_path / "fns.sh") in cmd.args[-1]

    def test_windows_uses_cmd(self):
        cmd = CommandBuilder(platform="win32").new_shell("echo hi", "ignored.sh")
        assert cmd.args == ["cmd", "/c", "echo hi"]

    def test_command_defaults(self):
        cmd = CommandBuilder(platform="linux").new_shell("echo hi")
        assert cmd.should_log
        assert cmd.get_env_vars() == []
        assert "echo hi" in cmd.to_string()

    def test_dont_log_and_env_chain(self):
        cmd = CommandBuilder(platform="linux").new_shell("echo hi")
        assert cmd.dont_log().add_env_vars("A=1", "B=2") is cmd
        assert not cmd.should_log
        assert cmd.get_env_vars() == ["A=1", "B=2"]


@posix_only
class TestCommandRunner:
    @pytest.fixture
    def builder(self, monkeypatch):
        monkeypatch.setenv("SHELL", "/bin/sh")
        return CommandBuilder(runner=CommandRunner(), platform=sys.platform)

    def test_captures_output(self, builder):
        assert builder.new_shell("echo hello").run_with_output() == "hello\n"

    def test_captures_stderr(self, builder):
        assert builder.new_shell("echo oops >&2").run_with_output() == "oops\n"

    def test_env_vars_are_visible(self, builder):
        cmd = builder.new_shell('printf "%s" "$HOOK_TEST_VAR"').add_env_vars("HOOK_TEST_VAR=a=b")
        assert cmd.run_with_output() == "a=b"

    def test_failure_raises_with_output(self, builder):
        with pytest.raises(CommandError) as exc_info:
            builder.new_shell("echo broken; exit 4").run_with_output()
        assert exc_info.value.returncode == 4
        assert exc_info.value.output == "broken\n"

    def test_undecodable_output_is_replaced(self, builder):
        assert builder.new_shell("printf 'a\\377b'").run_with_output() == "a�b"

    def test_undecodable_output_on_failure(self, builder):
        with pytest.raises(CommandError) as exc_info:
            builder.new_shell("printf '\\377'; exit 3").run_with_output()
        assert exc_info.value.returncode == 3
        assert exc_info.value.output == "�"

    def test_missing_shell_raises(self):
        builder = CommandBuilder(runner=CommandRunner(), platform="linux")
        cmd = builder.new(["/nonexistent/shell", "-c", "true"])
        with pytest.raises(CommandError) as exc_info:
            cmd.run_with_output()
        assert exc_info.value.returncode is None

    def test_functions_file(self, builder, tmp_path):
        functions = tmp_path / "functions.sh"
        functions.write_text('greet() { echo "hi $1"; }\n')
        assert builder.new_shell("greet there", str(functions)).run_with_output() == "hi there\n"
