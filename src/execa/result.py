"""Process outcomes: Result on exit 0, CommandError otherwise."""

from dataclasses import dataclass

from execa.errors import DecodingError, ExecaError


def strip_eof(text: str) -> str:
    """Strip exactly one trailing CRLF, LF or CR."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n") or text.endswith("\r"):
        return text[:-1]
    return text


def _decode(data: bytes, stream: str, cmd: str) -> str:
    try:
        return strip_eof(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise DecodingError(stream, cmd) from e


class _Outcome:
    """Fields shared by both outcome variants. Text is computed from the raw bytes."""

    cmd: str
    code: int
    stdout_data: bytes
    stderr_data: bytes

    @property
    def failed(self) -> bool:
        return self.code != 0

    @property
    def stdout(self) -> str:
        return _decode(self.stdout_data, "stdout", self.cmd)

    @property
    def stderr(self) -> str:
        return _decode(self.stderr_data, "stderr", self.cmd)


@dataclass(frozen=True)
class Result(_Outcome):
    cmd: str
    code: int
    stdout_data: bytes = b""
    stderr_data: bytes = b""


class CommandError(_Outcome, ExecaError):
    """The command ran and exited non-zero. Carries the same fields as Result."""

    def __init__(self, cmd: str, code: int, stdout_data: bytes = b"", stderr_data: bytes = b""):
        self.cmd = cmd
        self.code = code
        self.stdout_data = stdout_data
        self.stderr_data = stderr_data
        super().__init__(describe(cmd, stdout_data, stderr_data))

    def __reduce__(self):
        return type(self), (self.cmd, self.code, self.stdout_data, self.stderr_data)

    def __repr__(self) -> str:
        return f"CommandError(cmd={self.cmd!r}, code={self.code})"


def describe(cmd: str, stdout_data: bytes, stderr_data: bytes) -> str:
    """Human-readable failure text: command, then stderr, then stdout.

    Undecodable bytes are replaced rather than raised so an error can always be printed.
    """
    message = f"Command failed: {cmd}"
    stderr = strip_eof(stderr_data.decode("utf-8", errors="replace"))
    stdout = strip_eof(stdout_data.decode("utf-8", errors="replace"))
    if stderr:
        message += f"\n{stderr}"
    if stdout:
        message += f"\n{stdout}"
    return message


def build(cmd: str, code: int, stdout_data: bytes, stderr_data: bytes) -> Result:
    """Classify by exit code: return Result for 0, raise CommandError otherwise."""
    if code != 0:
        raise CommandError(cmd, code, stdout_data, stderr_data)
    return Result(cmd=cmd, code=code, stdout_data=stdout_data, stderr_data=stderr_data)
