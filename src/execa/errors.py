"""Error types raised through execa futures and helpers."""


class ExecaError(Exception):
    """Base class for every error execa raises."""


class LaunchError(ExecaError):
    """The executable could not be started. No exit code, no output."""

    def __init__(self, path: str, cmd: str, reason: Exception):
        self.path = path
        self.cmd = cmd
        self.reason = reason
        super().__init__(f"Failed to launch {path}: {getattr(reason, 'strerror', None) or reason}")

    def __reduce__(self):
        return type(self), (self.path, self.cmd, self.reason)

    @property
    def not_found(self) -> bool:
        return isinstance(self.reason, FileNotFoundError)


class DecodingError(ExecaError):
    """Captured bytes are not valid UTF-8."""

    def __init__(self, stream: str, cmd: str):
        self.stream = stream
        self.cmd = cmd
        super().__init__(f"{stream} of {cmd!r} is not valid UTF-8")

    def __reduce__(self):
        return type(self), (self.stream, self.cmd)


class ConfigError(ExecaError):
    """Invalid batch file."""
