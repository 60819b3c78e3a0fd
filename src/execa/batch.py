"""Run a batch of commands concurrently and report each outcome."""

import time

from execa import config, log, process
from execa.errors import DecodingError, ExecaError
from execa.result import CommandError


def run_batch(commands: list[config.CommandConfig], only: list[str] | None = None) -> int:
    """Launch every selected command at once. Returns exit code (0=all succeeded, 1=otherwise)."""
    if only:
        unknown = sorted(set(only) - {c.name for c in commands})
        if unknown:
            log.error(f"Unknown command(s): {', '.join(unknown)}")
            return 1
        commands = [c for c in commands if c.name in only]

    if not commands:
        log.error("No commands to run")
        return 1

    log.header("batch")
    log.info(f"commands: {', '.join(c.name for c in commands)}")
    log.info("")

    start_time = time.time()
    futures = [
        process.run(
            c.path,
            c.args,
            stdout=c.stdout,
            stderr=c.stderr,
            cwd=c.cwd,
            env=c.env,
        )
        for c in commands
    ]

    failed = 0
    for cmd_config, future in zip(commands, futures):
        if not _report(cmd_config, future):
            failed += 1

    elapsed = time.time() - start_time
    log.info("")
    if failed:
        log.footer(f"FAILED ({failed} of {len(commands)}, {elapsed:.1f}s)")
        return 1
    log.footer(f"complete ({elapsed:.1f}s)")
    return 0


def _report(cmd_config: config.CommandConfig, future) -> bool:
    """Wait for one command and log its outcome. Returns True on success."""
    cmd = process.joined_command(cmd_config.path, cmd_config.args)
    log.group_start(cmd_config.name, cmd)
    try:
        result = future.result()
        log.output("stdout", result.stdout)
        log.output("stderr", result.stderr)
        log.success(f"{cmd_config.name} exited 0")
        return True
    except CommandError as e:
        log.failure(f"{cmd_config.name} exited {e.code}")
        log.output("stderr", _text(e, "stderr"))
        log.output("stdout", _text(e, "stdout"))
        return False
    except ExecaError as e:
        log.failure(f"{cmd_config.name}: {e}")
        return False
    finally:
        log.group_end()


def _text(err: CommandError, stream: str) -> str:
    try:
        return getattr(err, stream)
    except DecodingError:
        data = err.stdout_data if stream == "stdout" else err.stderr_data
        return data.decode("utf-8", errors="replace")
