from __future__ import annotations
from contextlib import ExitStack
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..constants import ExitCode
from ..models import Invocation, RunOutcome
from ..util.status import describe_status
from .executor import ExecResult, run_command
from .logfile import LogSink

console = Console(stderr=True)


def _exit_code(inv: Invocation, result: ExecResult) -> int:
    if result.timed_out:
        return ExitCode.TIMEOUT
    if inv.propagate:
        return result.returncode
    return ExitCode.OK


def run_invocation(inv: Invocation, verbose: bool = False) -> RunOutcome:
    """Run one wrapped command end to end.

    The log is opened before the child starts, so an unwritable log path means
    the command never runs. Raises SpawnError / LogWriteError.
    """
    sink: Optional[LogSink] = None
    with ExitStack() as stack:
        if inv.log_path is not None:
            sink = stack.enter_context(
                LogSink(inv.log_path, append=inv.append, timestamps=inv.timestamps, timestamp_format=inv.timestamp_format)
            )
            if verbose:
                console.log(f"logging to {escape(str(inv.log_path))} ({'append' if inv.append else 'truncate'})")

        if verbose:
            console.log(f"running: {escape(' '.join(inv.command))} (suppress={inv.suppress.value})")

        result = run_command(inv.command, suppress=inv.suppress, sink=sink, timeout=inv.timeout)

    outcome = RunOutcome(
        returncode=result.returncode,
        exit_code=_exit_code(inv, result),
        timed_out=result.timed_out,
        duration=result.duration,
        signal=result.signal,
    )

    if verbose:
        if outcome.timed_out:
            console.log(f"[yellow]timed out after {inv.timeout}s, child {describe_status(outcome.returncode, outcome.signal)}[/]")
        else:
            console.log(f"child {describe_status(outcome.returncode, outcome.signal)} in {outcome.duration:.2f}s")
        if sink is not None:
            console.log(f"wrote {sink.lines_written} line(s) to {escape(str(inv.log_path))}")
        console.log(f"exit code {outcome.exit_code}")

    return outcome
