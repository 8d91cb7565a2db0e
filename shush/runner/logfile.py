from __future__ import annotations
import threading
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Optional

from ..errors import LogWriteError


class LogSink:
    """Line-oriented log file shared by the stdout and stderr reader threads.

    Writes are serialised with a lock. The first write error is remembered and
    every later write is dropped, so the readers keep draining the child; the
    error is raised from close().
    """

    def __init__(
        self,
        path: Path,
        append: bool = False,
        timestamps: bool = False,
        timestamp_format: str = "%Y-%m-%d %H:%M:%S",
    ):
        self.path = Path(path)
        self.append = append
        self.timestamps = timestamps
        self.timestamp_format = timestamp_format
        self.lines_written = 0
        self._fh: Optional[BinaryIO] = None
        self._lock = threading.Lock()
        self._error: Optional[OSError] = None

    def open(self) -> "LogSink":
        mode = "ab" if self.append else "wb"
        try:
            self._fh = open(self.path, mode)
        except OSError as e:
            raise LogWriteError(self.path, e.strerror or str(e)) from e
        return self

    def _prefix(self) -> bytes:
        if not self.timestamps:
            return b""
        return f"[{datetime.now().strftime(self.timestamp_format)}] ".encode()

    def write(self, data: bytes) -> None:
        with self._lock:
            if self._fh is None or self._error is not None:
                return
            try:
                self._fh.write(self._prefix() + data)
                self._fh.flush()
                self.lines_written += data.count(b"\n")
            except OSError as e:
                self._error = e

    def close(self) -> None:
        with self._lock:
            fh, self._fh = self._fh, None
            error = self._error
            if fh is not None:
                try:
                    fh.close()
                except OSError as e:
                    error = error or e
        if error is not None:
            raise LogWriteError(self.path, error.strerror or str(error)) from error

    def __enter__(self) -> "LogSink":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
            return
        # don't mask the in-flight exception with a log error
        try:
            self.close()
        except LogWriteError:
            pass
