"""Typer application and CLI entry point for ocidist.

This module wires together the top-level Typer application and registers
the built-in commands (``check``, ``header``, ``ping``, ``config``).

:func:`main` is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler and invokes the Typer app.
Unhandled :class:`~ocidist.exceptions.OcidistError` instances exit with
their ``exit_code``; anything else is written to a crash log under the data
directory.

See Also:
    :mod:`ocidist.config`: Configuration resolution.
    :mod:`ocidist.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from ocidist import __version__
from ocidist.commands.check import check_command, header_command, ping_command
from ocidist.commands.config import config_app
from ocidist.exit_codes import EXIT_GENERIC_FAILURE

app = typer.Typer(
    name="ocidist",
    help="Validate OCI registry credentials and inspect the auth they produce.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("check")(check_command)
app.command("header")(header_command)
app.command("ping")(ping_command)
app.add_typer(config_app, name="config", help="Configuration management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"ocidist {__version__}")
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
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~ocidist.output.OutputManager` from the
    output flags. ``--verbose`` also routes library debug logging to stderr.
    """
    from ocidist.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="[debug] %(name)s: %(message)s",
        )

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback to the data directory and return its path."""
    from ocidist.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """Console-script entry point.

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
        from ocidist.exceptions import OcidistError
        from ocidist.output import error

        if isinstance(exc, OcidistError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
