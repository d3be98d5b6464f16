"""Typer application and CLI entry point for lightning-mcp.

This module wires together the top-level Typer application and registers the
built-in sub-commands (``generate``, ``types``, ``inspect``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a signal handler, invokes the Typer app, and
maps any :class:`~lightning_mcp.exceptions.LightningMCPError` that escapes a
command to its exit code.

See Also:
    :mod:`lightning_mcp.config`: Generator configuration resolution.
    :mod:`lightning_mcp.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from typing import Any

import typer

from lightning_mcp import __version__
from lightning_mcp.commands.generate import generate_command
from lightning_mcp.commands.inspect import inspect_app
from lightning_mcp.commands.types import types_command
from lightning_mcp.exit_codes import EXIT_GENERIC_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="lightning-mcp",
    help="Generate MCP servers from OpenAPI 3.x documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("generate")(generate_command)
app.command("types")(types_command)
app.add_typer(inspect_app, name="inspect", help="Inspect a description document.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"lightning-mcp {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~lightning_mcp.output.OutputManager` from
    CLI flags and routes library log records to it.
    """
    from lightning_mcp.output import (
        OutputFormat,
        OutputManager,
        install_log_handler,
        set_output,
    )

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(
        OutputManager(
            format=fmt,
            no_color=no_color,
            quiet=quiet,
            verbose=verbose,
        )
    )
    install_log_handler(verbose=verbose)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``lightning-mcp`` console script.

    Unhandled :class:`~lightning_mcp.exceptions.LightningMCPError`
    instances cause a clean exit with the error's ``exit_code``. Any other
    exception exits with a generic failure; its traceback is printed when
    ``--verbose`` is on the command line.

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
        sys.exit(EXIT_INTERRUPTED)
    except Exception as exc:
        from lightning_mcp.exceptions import LightningMCPError
        from lightning_mcp.output import error

        if isinstance(exc, LightningMCPError):
            error(str(exc))
            sys.exit(exc.exit_code)

        error(f"Unexpected error: {exc}")
        if "--verbose" in sys.argv or "-v" in sys.argv:
            sys.stderr.write(traceback.format_exc())
        sys.exit(EXIT_GENERIC_FAILURE)
