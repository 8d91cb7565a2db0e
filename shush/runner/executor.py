from __future__ import annotations
import subprocess
import sys
import threading
import time
from dataclasses import dataclass
from functools import partial
from typing import BinaryIO, List, Optional, Sequence

from ..constants import ExitCode, Suppress
from ..errors import SpawnError
from ..util.status import normalize_returncode, signal_of
from .logfile import LogSink

# Reader threads only block on pipes the child (or its children) still hold;
# after a kill we give them this long to see EOF.
_JOIN_GRACE_SECONDS = 2.0
_CHUNK_SIZE = 65536


@dataclass
class ExecResult:
    returncode: int
    timed_out: bool = False
    duration: float = 0.0
    signal: Optional[int] = None


def _binary(stream) -> BinaryIO:
    return getattr(stream, "buffer", stream)


def _drain(pipe: BinaryIO, echo: Optional[BinaryIO], sink: Optional[LogSink]) -> None:
    # timestamps are per line; otherwise take whatever is available
    if sink is not None and sink.timestamps:
        read = partial(pipe.readline, _CHUNK_SIZE)
    else:
        read = partial(pipe.read1, _CHUNK_SIZE)
    with pipe:
        for data in iter(read, b""):
            if sink is not None:
                sink.write(data)
            if echo is not None:
                echo.write(data)
                echo.flush()


def _target(stream: str, suppress: Suppress, sink: Optional[LogSink]):
    if sink is not None:
        return subprocess.PIPE
    if suppress.hides(stream):
        return subprocess.DEVNULL
    return None  # inherit


def _spawn(argv: List[str], stdout, stderr) -> subprocess.Popen:
    try:
        return subprocess.Popen(argv, stdout=stdout, stderr=stderr)
    except FileNotFoundError as e:
        raise SpawnError(argv[0], "command not found", ExitCode.NOT_FOUND) from e
    except PermissionError as e:
        raise SpawnError(argv[0], "permission denied", ExitCode.NOT_EXECUTABLE) from e
    except OSError as e:
        raise SpawnError(argv[0], e.strerror or str(e), ExitCode.NOT_EXECUTABLE) from e


def run_command(
    argv: Sequence[str],
    suppress: Suppress = Suppress.BOTH,
    sink: Optional[LogSink] = None,
    timeout: Optional[float] = None,
) -> ExecResult:
    """Run argv to completion with its output routed per `suppress` and `sink`.

    Streams that are neither shown nor logged go to /dev/null; streams that are
    shown but not logged are inherited. Logged streams are piped and drained by
    one thread each, echoing to our own stdout/stderr when not suppressed.
    """
    argv = list(argv)
    started = time.monotonic()
    proc = _spawn(argv, _target("stdout", suppress, sink), _target("stderr", suppress, sink))

    readers: List[threading.Thread] = []
    for pipe, name, ours in (
        (proc.stdout, "stdout", sys.stdout),
        (proc.stderr, "stderr", sys.stderr),
    ):
        if pipe is None:
            continue
        echo = None if suppress.hides(name) else _binary(ours)
        t = threading.Thread(target=_drain, args=(pipe, echo, sink), name=f"shush-{name}", daemon=True)
        t.start()
        readers.append(t)

    timed_out = killed = False
    try:
        proc.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        timed_out = killed = True
        proc.kill()
        proc.wait()
    except KeyboardInterrupt:
        killed = True
        proc.kill()
        proc.wait()
        raise
    finally:
        for t in readers:
            t.join(_JOIN_GRACE_SECONDS if killed else None)

    return ExecResult(
        returncode=normalize_returncode(proc.returncode),
        timed_out=timed_out,
        duration=time.monotonic() - started,
        signal=signal_of(proc.returncode),
    )
