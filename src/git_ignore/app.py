"""Typer application and CLI entry point for git-ignore.

Registers the built-in commands (``update``, ``list``, ``get``, ``alias``,
``template``, ``init``) and installs the global options handled in
:func:`main_callback`.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. Unhandled exceptions are written to a crash log under
the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from git_ignore import __version__
from git_ignore.commands.alias import alias_app
from git_ignore.commands.catalog import get_command, list_command, update_command
from git_ignore.commands.init import init_command
from git_ignore.commands.template import template_app
from git_ignore.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="git-ignore",
    help="Quickly and easily add templates to .gitignore.",
    no_args_is_help=True,
    add_completion=True,
    rich_markup_mode="rich",
)

app.command("update")(update_command)
app.command("list")(list_command)
app.command("get")(get_command)
app.command("init")(init_command)
app.add_typer(alias_app, name="alias", help="Manage local aliases.")
app.add_typer(template_app, name="template", help="Manage local templates.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"git-ignore {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    server: Optional[str] = typer.Option(
        None, "--server", help="Template catalog API URL."
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Request timeout in seconds."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~git_ignore.output.OutputManager` and
    stores the client options in ``ctx.obj`` for the sub-commands.
    """
    from git_ignore.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))

    ctx.ensure_object(dict)
    ctx.obj["server"] = server
    ctx.obj["timeout"] = timeout


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from git_ignore.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``git-ignore`` console script.

    :class:`~git_ignore.exceptions.GitIgnoreError` instances that escape a
    command cause a clean exit with the error's ``exit_code``. All other
    exceptions produce a crash log and a generic failure exit.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from git_ignore.exceptions import GitIgnoreError
        from git_ignore.output import error

        if isinstance(exc, GitIgnoreError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
