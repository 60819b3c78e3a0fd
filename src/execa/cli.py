"""Click entry point — all commands."""

import sys

import click

from execa import __version__, batch, config, log, process
from execa.errors import ConfigError, LaunchError
from execa.result import CommandError
from execa.stdio import StreamMode

MODE_CHOICE = click.Choice([m.value for m in StreamMode], case_sensitive=False)


def exit_status(code: int) -> int:
    """Map a child exit code to our own: negative (signal) codes become 128 + signal."""
    if code < 0:
        return 128 - code
    return code


def _parse_env(pairs: tuple[str, ...]) -> dict[str, str] | None:
    env = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {pair!r}", param_hint="--env")
        env[key] = value
    return env or None


@click.group()
@click.version_option(version=__version__, prog_name="execa")
def main():
    """Run executables and report their captured output."""


@main.command(context_settings={"ignore_unknown_options": True})
@click.option("--stdout", "stdout_mode", type=MODE_CHOICE, default=None, help="stdout mode (default: pipe)")
@click.option("--stderr", "stderr_mode", type=MODE_CHOICE, default=None, help="stderr mode (default: pipe)")
@click.option("--stdio", "stdio_mode", type=MODE_CHOICE, default=None, help="Mode for both streams")
@click.option("--cwd", default=None, type=click.Path(file_okay=False), help="Working directory")
@click.option("--env", "env_pairs", multiple=True, help="Extra environment variable (KEY=VALUE)")
@click.argument("path")
@click.argument("arguments", nargs=-1, type=click.UNPROCESSED)
def run(stdout_mode, stderr_mode, stdio_mode, cwd, env_pairs, path, arguments):
    """Run PATH with ARGUMENTS and print its captured output."""
    env = _parse_env(env_pairs)
    try:
        future = process.run(
            path,
            list(arguments),
            stdout=stdout_mode,
            stderr=stderr_mode,
            stdio=stdio_mode,
            cwd=cwd,
            env=env,
        )
    except ValueError as e:
        raise click.UsageError(str(e))

    try:
        result = future.result()
        # Raw bytes, exactly as the child wrote them.
        if result.stdout_data:
            click.echo(result.stdout_data, nl=False)
        if result.stderr_data:
            click.echo(result.stderr_data, nl=False, err=True)
    except CommandError as e:
        log.error(str(e))
        sys.exit(exit_status(e.code))
    except LaunchError as e:
        log.error(str(e))
        sys.exit(127 if e.not_found else 126)


@main.command(name="batch")
@click.argument("file", required=False, type=click.Path(dir_okay=False))
@click.option("--only", multiple=True, help="Run only the named command(s)")
def batch_cmd(file, only):
    """Run every command in a batch file concurrently."""
    path = file or config.default_path()
    try:
        commands = config.parse_commands(config.load(path))
    except ConfigError as e:
        log.error(str(e))
        sys.exit(1)
    code = batch.run_batch(commands, only=list(only) if only else None)
    sys.exit(code)


if __name__ == "__main__":
    main()
