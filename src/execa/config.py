"""Parse batch files into CommandConfig objects."""

import os
from dataclasses import dataclass, field

import yaml

from execa.errors import ConfigError
from execa.stdio import StreamMode

BATCH_FILE = "execa.yml"


@dataclass
class CommandConfig:
    name: str
    path: str
    args: list[str] = field(default_factory=list)
    stdout: StreamMode = StreamMode.PIPE
    stderr: StreamMode = StreamMode.PIPE
    cwd: str | None = None
    env: dict[str, str] | None = None


def default_path() -> str:
    """EXECA_BATCH_FILE env → execa.yml."""
    return os.environ.get("EXECA_BATCH_FILE") or BATCH_FILE


def load(path: str) -> dict:
    """Read a YAML batch file."""
    try:
        with open(path) as f:
            doc = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(doc, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    return doc


def _parse_x_execa(doc: dict) -> dict:
    """Extract x-execa top-level defaults."""
    defaults = doc.get("x-execa") or {}
    if not isinstance(defaults, dict):
        raise ConfigError("x-execa must be a mapping")
    return defaults


def _modes(name: str, settings: dict) -> dict[str, StreamMode]:
    """stdio → both streams; stdout/stderr override individually."""
    modes = {}
    try:
        if settings.get("stdio") is not None:
            modes["stdout"] = modes["stderr"] = StreamMode.parse(settings["stdio"])
        for key in ("stdout", "stderr"):
            if settings.get(key) is not None:
                modes[key] = StreamMode.parse(settings[key])
    except ValueError as e:
        raise ConfigError(f"{name}: {e}") from None
    return modes


def _env(name: str, value) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name}: env must be a mapping")
    return {str(k): str(v) for k, v in value.items()}


def parse_commands(doc: dict) -> list[CommandConfig]:
    """Parse a batch document into CommandConfig list, in file order.

    Per-command keys override x-execa defaults; env maps merge, command wins.
    """
    defaults = _parse_x_execa(doc)
    commands_dict = doc.get("commands")
    if not commands_dict:
        raise ConfigError("no commands defined")
    if not isinstance(commands_dict, dict):
        raise ConfigError("commands must be a mapping of name → command")

    default_modes = _modes("x-execa", defaults)
    default_env = _env("x-execa", defaults.get("env"))
    configs = []

    for name, entry in commands_dict.items():
        name = str(name)
        if not isinstance(entry, dict):
            raise ConfigError(f"{name}: expected a mapping")

        path = entry.get("path")
        if not path:
            raise ConfigError(f"{name}: missing path")

        args = entry.get("args", [])
        if not isinstance(args, list):
            raise ConfigError(f"{name}: args must be a list")

        modes = {**default_modes, **_modes(name, entry)}
        env = {**default_env, **_env(name, entry.get("env"))}

        configs.append(
            CommandConfig(
                name=name,
                path=str(path),
                args=[str(a) for a in args],
                stdout=modes.get("stdout", StreamMode.PIPE),
                stderr=modes.get("stderr", StreamMode.PIPE),
                cwd=entry.get("cwd") or defaults.get("cwd"),
                env=env or None,
            )
        )

    return configs
