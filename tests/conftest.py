import errno
import os

import pytest

from shush.runner import process
from shush.runner.logfile import LogSink


class _FullDisk:
    """File wrapper whose writes fail with ENOSPC."""

    def __init__(self, fh):
        self._fh = fh
        self.attempts = 0

    def write(self, data):
        self.attempts += 1
        raise OSError(errno.ENOSPC, os.strerror(errno.ENOSPC))

    def flush(self):
        pass

    def close(self):
        self._fh.close()


class FullDiskSink(LogSink):
    instances = []

    def open(self):
        super().open()
        self._fh = _FullDisk(self._fh)
        FullDiskSink.instances.append(self)
        return self


@pytest.fixture
def full_disk_log(monkeypatch):
    FullDiskSink.instances = []
    monkeypatch.setattr(process, "LogSink", FullDiskSink)
    return FullDiskSink
