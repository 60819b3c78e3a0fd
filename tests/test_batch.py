"""Tests for batch.py — concurrent launch, reporting, exit codes."""

from execa.batch import run_batch
from execa.config import CommandConfig
from execa.errors import DecodingError, LaunchError
from execa.result import CommandError, Result
from execa.stdio import StreamMode


def _commands():
    return [
        CommandConfig(name="greet", path="/bin/echo", args=["hi"]),
        CommandConfig(
            name="build",
            path="/usr/bin/make",
            stderr=StreamMode.INHERIT,
            cwd="/srv",
            env={"A": "1"},
        ),
    ]


def test_all_succeed(mock_process, capsys):
    mock_process.responses.extend([
        Result(cmd="/bin/echo hi", code=0, stdout_data=b"hi\n"),
        Result(cmd="/usr/bin/make", code=0),
    ])
    assert run_batch(_commands()) == 0
    out = capsys.readouterr().out
    assert "▸ greet: /bin/echo hi" in out
    assert "    hi" in out
    assert "✓ greet exited 0" in out
    assert "✓ build exited 0" in out
    assert "── complete" in out


def test_launch_arguments(mock_process):
    run_batch(_commands())
    assert mock_process.calls == [
        ("run", "/bin/echo", ["hi"], {
            "stdout": StreamMode.PIPE, "stderr": StreamMode.PIPE, "cwd": None, "env": None,
        }),
        ("run", "/usr/bin/make", [], {
            "stdout": StreamMode.PIPE, "stderr": StreamMode.INHERIT, "cwd": "/srv", "env": {"A": "1"},
        }),
    ]


def test_failure_reports_output(mock_process, capsys):
    mock_process.responses.extend([
        CommandError("/bin/echo hi", 3, b"partial\n", b"boom\n"),
        None,
    ])
    assert run_batch(_commands()) == 1
    out = capsys.readouterr().out
    assert "✗ greet exited 3" in out
    assert "    boom" in out
    assert "    partial" in out
    assert "✓ build exited 0" in out
    assert "FAILED (1 of 2" in out


def test_failure_with_undecodable_output(mock_process, capsys):
    mock_process.responses.append(CommandError("/bin/echo hi", 1, b"\xff\n", b""))
    assert run_batch(_commands()[:1]) == 1
    assert "    �" in capsys.readouterr().out


def test_launch_error(mock_process, capsys):
    mock_process.responses.append(
        LaunchError("/bin/echo", "/bin/echo hi", FileNotFoundError(2, "No such file or directory"))
    )
    assert run_batch(_commands()[:1]) == 1
    assert "✗ greet: Failed to launch /bin/echo: No such file or directory" in capsys.readouterr().out


def test_decoding_error_on_success(mock_process, capsys):
    mock_process.responses.append(Result(cmd="/bin/echo hi", code=0, stdout_data=b"\xff"))
    assert run_batch(_commands()[:1]) == 1
    out = capsys.readouterr().out
    assert "✗ greet: stdout of '/bin/echo hi' is not valid UTF-8" in out


def test_only_filters(mock_process):
    assert run_batch(_commands(), only=["build"]) == 0
    assert [c[1] for c in mock_process.calls] == ["/usr/bin/make"]


def test_only_unknown_name(mock_process, capsys):
    assert run_batch(_commands(), only=["deploy"]) == 1
    assert "Unknown command(s): deploy" in capsys.readouterr().err
    assert mock_process.calls == []


def test_no_commands(mock_process, capsys):
    assert run_batch([]) == 1
    assert "No commands to run" in capsys.readouterr().err


def test_real_processes(fixtures, capsys):
    commands = [
        CommandConfig(name="a", path=str(fixtures / "noop"), args=["first"]),
        CommandConfig(name="b", path=str(fixtures / "exit"), args=["5"]),
        CommandConfig(name="c", path=str(fixtures / "noop"), args=["third"]),
    ]
    assert run_batch(commands) == 1
    out = capsys.readouterr().out
    assert "    first" in out
    assert "✗ b exited 5" in out
    assert "    third" in out
