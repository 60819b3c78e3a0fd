"""Launch an executable and settle a future with its outcome.

The single mock seam for the CLI and batch tests.
"""

import asyncio
import os
import subprocess
import threading
from collections.abc import Sequence
from concurrent.futures import Future

from execa import result as result_mod
from execa.errors import LaunchError
from execa.result import Result
from execa.stdio import Stream, StreamMode, open_stream


def joined_command(path: str, arguments: Sequence[str]) -> str:
    """Display-only command line. No quoting."""
    if not arguments:
        return path
    return f"{path} {' '.join(arguments)}"


def _resolve_modes(
    stdout: StreamMode | str | None,
    stderr: StreamMode | str | None,
    stdio: StreamMode | str | None,
) -> tuple[StreamMode, StreamMode]:
    if stdio is not None:
        if stdout is not None or stderr is not None:
            raise ValueError("stdio cannot be combined with stdout/stderr")
        mode = StreamMode.parse(stdio)
        return mode, mode
    return (
        StreamMode.parse(stdout if stdout is not None else StreamMode.PIPE),
        StreamMode.parse(stderr if stderr is not None else StreamMode.PIPE),
    )


def run(
    path: str | os.PathLike,
    arguments: Sequence[str] = (),
    *,
    stdout: StreamMode | str | None = None,
    stderr: StreamMode | str | None = None,
    stdio: StreamMode | str | None = None,
    cwd: str | os.PathLike | None = None,
    env: dict[str, str] | None = None,
) -> "Future[Result]":
    """Start a command and return a future for its outcome.

    Resolves with Result on exit 0. Rejects with CommandError on any other exit
    code, or with LaunchError when the executable could not be started.
    Both streams default to PIPE; stdio applies one mode to both.
    """
    if isinstance(arguments, (str, bytes)):
        raise TypeError("arguments must be a sequence of strings, not a single string")
    stdout_mode, stderr_mode = _resolve_modes(stdout, stderr, stdio)
    file = os.path.abspath(os.fspath(path))
    args = [str(a) for a in arguments]
    cmd = joined_command(file, args)

    merged_env = None
    if env is not None:
        merged_env = {**os.environ, **env}

    future: Future[Result] = Future()
    # No cancellation: once running, cancel() is a no-op.
    future.set_running_or_notify_cancel()

    out = open_stream(stdout_mode)
    try:
        err = open_stream(stderr_mode)
    except BaseException:
        out.close()
        raise
    try:
        proc = subprocess.Popen(
            [file, *args],
            executable=file,
            stdin=None,
            stdout=out.target,
            stderr=err.target,
            cwd=cwd,
            env=merged_env,
        )
    except (OSError, ValueError) as e:
        # ValueError: embedded NUL byte in path, arguments or env.
        out.close()
        err.close()
        future.set_exception(LaunchError(file, cmd, e))
        return future
    except BaseException:
        out.close()
        err.close()
        raise

    for stream in (out, err):
        stream.spawned()
        stream.start()

    waiter = threading.Thread(
        target=_wait,
        args=(proc, cmd, out, err, future),
        name=f"execa-wait-{proc.pid}",
        daemon=True,
    )
    waiter.start()
    return future


def _wait(
    proc: subprocess.Popen,
    cmd: str,
    out: Stream,
    err: Stream,
    future: "Future[Result]",
) -> None:
    """Runs once per child, on its own thread, after spawn."""
    try:
        code = proc.wait()
        stdout_data = out.drain()
        stderr_data = err.drain()
        outcome = result_mod.build(cmd, code, stdout_data, stderr_data)
    except Exception as e:
        future.set_exception(e)
    else:
        future.set_result(outcome)


async def run_async(path: str | os.PathLike, arguments: Sequence[str] = (), **kwargs) -> Result:
    """Awaitable form of run(). Same arguments, same errors."""
    return await asyncio.wrap_future(run(path, arguments, **kwargs))
