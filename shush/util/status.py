import signal
from typing import Optional

from ..constants import ExitCode


def normalize_returncode(returncode: int) -> int:
    """Map a Popen return code onto a shell-style exit status.

    Popen reports death-by-signal N as -N; shells report it as 128+N.
    """
    if returncode < 0:
        return ExitCode.SIGNAL_BASE + (-returncode)
    return returncode


def signal_of(returncode: int) -> Optional[int]:
    """Signal number from a raw Popen return code, None for a normal exit."""
    return -returncode if returncode < 0 else None


def describe_status(status: int, signum: Optional[int] = None) -> str:
    if signum is not None:
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = f"signal {signum}"
        return f"killed by {name}"
    return f"exited with status {status}"
