try:
    from importlib.metadata import version

    __version__ = version("execa")
except Exception:
    __version__ = "0.0.0"

from execa.errors import ConfigError, DecodingError, ExecaError, LaunchError
from execa.process import run, run_async
from execa.result import CommandError, Result
from execa.stdio import StreamMode

__all__ = [
    "CommandError",
    "ConfigError",
    "DecodingError",
    "ExecaError",
    "LaunchError",
    "Result",
    "StreamMode",
    "run",
    "run_async",
]
