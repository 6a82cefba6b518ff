"""Typer application and CLI entry point for openrpc-model.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``show``, ``check``, ``inspect``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`openrpc_model.output`: Output formatting initialised in
    :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from openrpc_model import __version__
from openrpc_model.commands.document import check_command, show_command
from openrpc_model.commands.inspect import inspect_app
from openrpc_model.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="openrpc-model",
    help="Decode and inspect OpenRPC API description documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("show")(show_command)
app.command("check")(check_command)
app.add_typer(inspect_app, name="inspect", help="Inspect document contents.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"openrpc-model {__version__}")
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
    output_file: Optional[str] = typer.Option(
        None, "-o", "--output", help="Output file path."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~openrpc_model.output.OutputManager` from
    CLI flags and, with ``--verbose``, routes library debug logging to
    stderr. Shared options are stored in ``ctx.obj``.
    """
    from openrpc_model.exceptions import InvalidUsageError
    from openrpc_model.output import OutputFormat, OutputManager, set_output

    if json_output and plain_output:
        raise InvalidUsageError("--json and --plain cannot be used together")

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    output = OutputManager(
        format=fmt,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
        output_file=output_file,
    )
    set_output(output)

    if verbose:
        _enable_debug_logging(no_color)

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["output_file"] = output_file


def _enable_debug_logging(no_color: bool) -> None:
    """Send ``openrpc_model`` log records at DEBUG level to stderr."""
    from rich.console import Console
    from rich.logging import RichHandler

    logger = logging.getLogger("openrpc_model")
    logger.setLevel(logging.DEBUG)
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return
    logger.addHandler(
        RichHandler(
            console=Console(file=sys.stderr, no_color=no_color, stderr=True),
            show_time=False,
            show_path=False,
        )
    )


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from openrpc_model.config import get_logs_dir

    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = get_logs_dir() / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``openrpc-model`` console script.

    :class:`~openrpc_model.exceptions.OpenRpcModelError` instances that
    escape a command cause a clean exit with the error's ``exit_code``. All
    other exceptions produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
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
        from openrpc_model.exceptions import OpenRpcModelError
        from openrpc_model.output import error

        if isinstance(exc, OpenRpcModelError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
