from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .constants import DEFAULTS, ExitCode, Suppress


@dataclass
class Invocation:
    command: List[str]
    suppress: Suppress = Suppress.BOTH
    propagate: bool = False
    log_path: Optional[Path] = None
    append: bool = False
    timestamps: bool = False
    timeout: Optional[float] = None
    timestamp_format: str = DEFAULTS["timestamp_format"]

    def __post_init__(self):
        if not self.command:
            raise ValueError("Invocation needs a command to run")
        self.command = list(self.command)
        # a zero duration means no timeout, as with timeout(1)
        if not self.timeout:
            self.timeout = None


@dataclass
class RunOutcome:
    returncode: int
    exit_code: int = ExitCode.OK
    timed_out: bool = False
    duration: float = 0.0
    signal: Optional[int] = None
