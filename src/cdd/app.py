"""Typer application and CLI entry point for cdd.

Registers the built-in commands (``init``, ``sync``, ``inspect``) on the root
application. :func:`main` is the console-script entry point declared in
``pyproject.toml``: it installs a SIGINT handler, invokes the app, maps
:class:`~cdd.exceptions.CddError` to its exit code, and writes a crash log
for anything unexpected.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from cdd import __version__
from cdd.commands.init import init_command
from cdd.commands.inspect import inspect_app
from cdd.commands.sync import sync_command
from cdd.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="cdd",
    help="Compiler driven development: keep client projects in sync with an OpenAPI spec.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("init")(init_command)
app.command("sync")(sync_command)
app.add_typer(inspect_app, name="inspect", help="Inspect the IR translated from the spec.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"cdd {__version__}")
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
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Verbose mode (-v, -vv, ...)."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Config file location (default ./config.yml)."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Installs the global :class:`~cdd.output.OutputManager` and stores
    ``config`` in ``ctx.obj`` for the workspace commands.
    """
    from cdd.output import OutputFormat, OutputManager, set_output

    set_output(
        OutputManager(
            format=OutputFormat.JSON if json_output else OutputFormat.AUTO,
            no_color=no_color,
            quiet=quiet,
            verbosity=verbose,
        )
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback under the data directory and return its path."""
    from cdd.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"crash-{datetime.now().strftime('%Y%m%d-%H%M%S')}.log"
    log_path.write_text(f"{type(exc).__name__}: {exc}\n\n{traceback.format_exc()}")
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``cdd`` console script.

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
        from cdd.exceptions import CddError
        from cdd.output import error

        if isinstance(exc, CddError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
