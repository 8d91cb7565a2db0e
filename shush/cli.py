from __future__ import annotations
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import env_name, get_all, get_value
from .constants import VERSION, ExitCode, Suppress
from .errors import ShushError
from .models import Invocation

app = typer.Typer(add_completion=False, help="shush — suppress and manage output from commands and scripts")
console = Console()
err_console = Console(stderr=True)


# ---------------------------
# eager flags
# ---------------------------
def _version_callback(value: bool) -> None:
    if value:
        console.print(f"shush {VERSION}", highlight=False)
        raise typer.Exit()


def _show_config_callback(value: bool) -> None:
    if not value:
        return
    table = Table(title="shush config")
    table.add_column("key")
    table.add_column("env")
    table.add_column("value")
    for k, v in get_all().items():
        table.add_row(k, env_name(k), escape(v or ""))
    console.print(table)
    raise typer.Exit()


# ---------------------------
# main command
# ---------------------------
@app.command(
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"], "allow_interspersed_args": False},
)
def main(
    command: Optional[List[str]] = typer.Argument(
        None, metavar="COMMAND...", show_default=False, help="Command to run, given after --"
    ),
    return_code: bool = typer.Option(
        False, "--return-code", "-r", envvar=env_name("return_code"), help="Exit with the command's exit code"
    ),
    log: Optional[Path] = typer.Option(
        None, "--log", "-l", envvar=env_name("log"), dir_okay=False, help="Write the command's output to this file"
    ),
    append: bool = typer.Option(
        False, "--append", "-a", envvar=env_name("append"), help="Append to the log instead of truncating it"
    ),
    timestamps: bool = typer.Option(
        False, "--timestamps", "-t", envvar=env_name("timestamps"), help="Prefix each logged line with a timestamp"
    ),
    suppress: Suppress = typer.Option(
        Suppress.BOTH, "--suppress", "-s", envvar=env_name("suppress"), case_sensitive=False,
        help="Which streams to keep off the terminal",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.0, envvar=env_name("timeout"), help="Kill the command after this many seconds"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", envvar=env_name("verbose"), help="Trace what shush does on stderr"
    ),
    show_config: bool = typer.Option(
        False, "--show-config", is_eager=True, callback=_show_config_callback, help="Show effective config and exit"
    ),
    version: bool = typer.Option(
        False, "--version", is_eager=True, callback=_version_callback, help="Show version and exit"
    ),
):
    """Run COMMAND with its output suppressed.

    Example: shush -r -l build.log -- make all
    """
    if not command:
        raise typer.BadParameter("no command given (usage: shush [OPTIONS] -- COMMAND...)", param_hint="COMMAND")

    from .runner.process import run_invocation

    inv = Invocation(
        command=command,
        suppress=suppress,
        propagate=return_code,
        log_path=log,
        append=append,
        timestamps=timestamps,
        timeout=timeout,
        timestamp_format=get_value("timestamp_format"),
    )

    try:
        outcome = run_invocation(inv, verbose=verbose)
    except ShushError as e:
        err_console.print(f"[red]shush: error:[/] {escape(e.message)}", highlight=False, soft_wrap=True)
        raise typer.Exit(code=int(e.exit_code))
    except KeyboardInterrupt:
        err_console.print("[yellow]shush: interrupted[/]")
        raise typer.Exit(code=int(ExitCode.INTERRUPTED))

    if outcome.timed_out:
        err_console.print(
            f"[yellow]shush:[/] {escape(inv.command[0])} timed out after {inv.timeout:g}s and was killed",
            highlight=False,
            soft_wrap=True,
        )
    raise typer.Exit(code=int(outcome.exit_code))


if __name__ == "__main__":
    app()
