"""Tests for ProcessRunner against real child processes."""

import signal
import sys

import pytest

from dart_dev.integrations.process import (
    ProcessDeclaration,
    ProcessMode,
    ProcessRunner,
    ToolError,
)

pytestmark = pytest.mark.integration


def _python(code: str, mode: ProcessMode = ProcessMode.CAPTURED) -> ProcessDeclaration:
    return ProcessDeclaration(sys.executable, ["-c", code], mode=mode)


def test_exit_status_is_propagated():
    result = ProcessRunner().run(_python("import sys; sys.exit(3)"))
    assert result.code == 3
    assert result.argv == [sys.executable, "-c", "import sys; sys.exit(3)"]


def test_captured_output():
    result = ProcessRunner().run(_python("print('formatted 3 files')"))
    assert result.code == 0
    assert result.stdout.strip() == "formatted 3 files"
    assert result.duration_s >= 0


def test_inherited_stdio_is_not_captured(capfd):
    result = ProcessRunner().run(_python("print('to the terminal')", ProcessMode.INHERIT_STDIO))
    assert result.code == 0
    assert result.stdout == ""
    assert "to the terminal" in capfd.readouterr().out


def test_env_is_merged_over_os_environ(monkeypatch):
    monkeypatch.setenv("DART_DEV_OUTER", "outer")
    code = "import os; print(os.environ['DART_DEV_OUTER'], os.environ['DART_DEV_INNER'])"
    result = ProcessRunner().run(_python(code), env={"DART_DEV_INNER": "inner"})
    assert result.stdout.split() == ["outer", "inner"]


def test_cwd(tmp_path):
    result = ProcessRunner().run(_python("import os; print(os.getcwd())"), cwd=str(tmp_path))
    assert result.stdout.strip() == str(tmp_path.resolve())


def test_missing_executable_raises_tool_error():
    with pytest.raises(ToolError, match="Command not found: definitely-not-dartfmt"):
        ProcessRunner().run(ProcessDeclaration("definitely-not-dartfmt", ["-w", "."]))


def test_declaration_is_immutable():
    declaration = ProcessDeclaration("dartfmt", ["-w"])
    with pytest.raises(AttributeError):
        declaration.executable = "dart"
    assert declaration.args == ("-w",)
    assert str(ProcessDeclaration("dartfmt", ["--line-length", "100", "my file.dart"])) == (
        "dartfmt --line-length 100 'my file.dart'"
    )


def test_start_failure_other_than_missing_raises_tool_error(tmp_path):
    junk = tmp_path / "not-a-program"
    junk.write_bytes(b"\x00\x01\x02\x03 not an executable format")
    junk.chmod(0o755)

    with pytest.raises(ToolError, match="Cannot start"):
        ProcessRunner().run(ProcessDeclaration(str(junk)))


posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")


@posix_only
def test_interrupted_child_status_is_returned_unchanged():
    code = (
        "import os, signal, sys; "
        "signal.signal(signal.SIGINT, signal.SIG_IGN); "
        "os.kill(os.getppid(), signal.SIGINT); "
        "sys.exit(5)"
    )
    previous = signal.getsignal(signal.SIGINT)

    result = ProcessRunner().run(_python(code, ProcessMode.INHERIT_STDIO))

    assert result.code == 5
    assert signal.getsignal(signal.SIGINT) is previous


@posix_only
def test_child_keeps_default_sigint_handling():
    code = "import signal, sys; sys.exit(3 if signal.getsignal(signal.SIGINT) is signal.SIG_IGN else 0)"
    assert ProcessRunner().run(_python(code, ProcessMode.INHERIT_STDIO)).code == 0
