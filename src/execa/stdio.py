"""Stream modes + per-stream handles and drains for a child process."""

import os
import subprocess
import threading
from enum import Enum


class StreamMode(str, Enum):
    IGNORE = "ignore"
    INHERIT = "inherit"
    PIPE = "pipe"

    @classmethod
    def parse(cls, value: "StreamMode | str") -> "StreamMode":
        """Accept a StreamMode or its (case-insensitive) string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown stream mode: {value!r} (expected one of {choices})") from None


class Stream:
    """One child stream: what to hand to the child, and how to collect it afterwards.

    For PIPE the parent owns a fresh OS pipe. start() begins reading the read end
    on its own thread once the child holds the write end; drain() waits for EOF
    and returns everything that was written. The read happens exactly once.
    """

    def __init__(self, mode: StreamMode):
        self.mode = mode
        self._read_fd: int | None = None
        self._write_fd: int | None = None
        self._reader: threading.Thread | None = None
        self._chunks: list[bytes] = []
        self._error: OSError | None = None
        self._data: bytes | None = None

        if mode is StreamMode.PIPE:
            self._read_fd, self._write_fd = os.pipe()

    @property
    def target(self) -> int | None:
        if self.mode is StreamMode.IGNORE:
            return subprocess.DEVNULL
        if self.mode is StreamMode.INHERIT:
            return None
        return self._write_fd

    def spawned(self) -> None:
        """Drop the parent's copy of the write end so EOF arrives when the child exits."""
        if self._write_fd is not None:
            os.close(self._write_fd)
            self._write_fd = None

    def start(self) -> None:
        if self._read_fd is None or self._reader is not None:
            return
        self._reader = threading.Thread(target=self._read_all, name="execa-drain", daemon=True)
        self._reader.start()

    def _read_all(self) -> None:
        try:
            with open(self._read_fd, "rb", closefd=True) as f:
                self._read_fd = None
                while chunk := f.read1(65536):
                    self._chunks.append(chunk)
        except OSError as e:
            self._error = e

    def drain(self) -> bytes:
        """Return all captured bytes. Empty for IGNORE/INHERIT."""
        if self._data is not None:
            return self._data
        if self.mode is not StreamMode.PIPE:
            self._data = b""
            return self._data

        self.start()
        self._reader.join()
        if self._error is not None:
            raise self._error
        self._data = b"".join(self._chunks)
        self._chunks = []
        return self._data

    def close(self) -> None:
        """Release any descriptors still held. Used when the child never started."""
        self.spawned()
        if self._read_fd is not None and self._reader is None:
            os.close(self._read_fd)
            self._read_fd = None


def open_stream(mode: "StreamMode | str") -> Stream:
    return Stream(StreamMode.parse(mode))
