"""Typer application and CLI entry point for apidocgen.

The application exposes a single command. The document URL and base path
can be passed as flags, read from the environment or ``./apidocgen.json``,
or typed at a prompt.

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`apidocgen.config`: Precedence resolution and scratch state.
    :mod:`apidocgen.pipeline`: The generation sequence itself.
"""

from __future__ import annotations

import logging
import signal
import sys
import traceback
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from apidocgen import __version__
from apidocgen.exit_codes import EXIT_GENERIC_FAILURE
from apidocgen.models import GenerationReport

app = typer.Typer(
    name="apidocgen",
    help="Generate TypeScript URL helpers from a Swagger/OpenAPI document.",
    add_completion=False,
    rich_markup_mode="rich",
)

_URL_PROMPT = (
    "Copy the correct path to download the swagger.json file, "
    "e.g.: http://localhost:5033/swagger/v1/swagger.json"
)
_BASE_PATH_PROMPT = (
    "Enter the basepath, e.g.: /api/ to turn /api/Users/{id} into "
    "export const Users_id = (id: any) => `Users/${id}`"
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"apidocgen {__version__}")
        raise typer.Exit()


def _can_prompt() -> bool:
    """Whether missing values may be asked for interactively."""
    return sys.stdin.isatty()


def _prompt_required(text: str) -> str:
    """Prompt until a non-blank answer is given."""
    while True:
        value = typer.prompt(text, default="", show_default=False).strip()
        if value:
            return value


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
    )
    logging.getLogger("apidocgen").setLevel(level)


@app.command()
def generate(
    swagger: Optional[str] = typer.Option(
        None,
        "--swagger",
        "-s",
        help="URL (or file path) of the swagger.json document.",
        show_default=False,
    ),
    base_path: Optional[str] = typer.Option(
        None,
        "--bp",
        help="Base path removed from every endpoint, e.g. /api/.",
        show_default=False,
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Directory that receives the api_docs tree.",
        show_default=False,
    ),
    skip_folder: bool = typer.Option(
        False, "--skip-folder", help="Write one file per group without per-group folders."
    ),
    lowercase: bool = typer.Option(
        False, "--lowercase", help="Lower-case group files and constant names."
    ),
    no_format: bool = typer.Option(
        False, "--no-format", help="Do not run prettier on generated files."
    ),
    no_open: bool = typer.Option(
        False, "--no-open", help="Do not open the result in a file manager."
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Fetch a Swagger/OpenAPI document and generate one TypeScript file per path group.

    Each endpoint becomes an exported arrow function that rebuilds its URL
    from the path parameters, e.g. ``/api/Users/{id}`` with base path
    ``/api/`` becomes ``export const Users_id = (id: any) => `Users/${id}```.

    Example::

        apidocgen -s http://localhost:5033/swagger/v1/swagger.json --bp /api/
        apidocgen -s ./swagger.json --bp /api/ -o ../web/src/ --skip-folder
    """
    from apidocgen.config import resolve_settings
    from apidocgen.exceptions import ApidocgenError, InvalidUsageError
    from apidocgen.formatter import create_formatter
    from apidocgen.models import GenerationConfig
    from apidocgen.output import OutputManager, error, info, set_output, success, warning
    from apidocgen.pipeline import run_generation
    from apidocgen.relocator import NullRevealer, PlatformFileRevealer

    set_output(OutputManager(no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose)

    try:
        settings = resolve_settings(
            cli_swagger=swagger,
            cli_base_path=base_path,
            cli_output=output,
            cli_skip_folder=skip_folder,
            cli_lowercase=lowercase,
        )
        if settings["swagger"] is None or settings["base_path"] is None:
            if not _can_prompt():
                raise InvalidUsageError(
                    "Missing --swagger and/or --bp (no terminal available to prompt)."
                )
            success(
                "TO CONFIGURE THE SCRIPT CORRECTLY, YOU MUST ENSURE THAT "
                "THE BACKEND IS RUNNING AND YOU CAN VIEW THE SWAGGER PAGE."
            )
            info(
                "Have the PATH of the swagger.json and the BASEPATH which "
                "will determine how the endpoints will be returned."
            )
            if settings["swagger"] is None:
                settings["swagger"] = _prompt_required(_URL_PROMPT)
            if settings["base_path"] is None:
                settings["base_path"] = _prompt_required(_BASE_PATH_PROMPT)

        config = GenerationConfig(
            source_url=settings["swagger"],
            base_path=settings["base_path"],
            output_directory=settings["output"],
            flatten_folders=settings["skip_folder"],
            lowercase_names=settings["lowercase"],
            format_output=not no_format,
            reveal_output=not no_open,
        )
        info(f"PATH: {config.source_url}")
        info(f"BASEPATH: {config.base_path}")

        formatter, formatter_warning = create_formatter(config.format_output)
        if formatter_warning:
            warning(formatter_warning)
        revealer = PlatformFileRevealer() if config.reveal_output else NullRevealer()

        report = run_generation(config, formatter=formatter, revealer=revealer)
    except ApidocgenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    _print_summary(report)
    if not report.ok:
        error(f"{len(report.failed)} of {len(report.results)} endpoints failed.")
        raise typer.Exit(code=EXIT_GENERIC_FAILURE)


def _print_summary(report: GenerationReport) -> None:
    """Print one row per generated file with its endpoint count."""
    from apidocgen.output import print_table, success

    counts = Counter(r.file_path for r in report.succeeded)
    if not counts:
        return
    root = Path(report.output_root or ".")
    rows = []
    for file_path, count in counts.items():
        path = Path(file_path)
        label = str(path.relative_to(root)) if path.is_relative_to(root) else str(path)
        rows.append([label, str(count)])
    print_table(["File", "Endpoints"], rows, title="Generated files")
    success(f"Generated {len(report.succeeded)} endpoints in {len(counts)} files.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from apidocgen.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``apidocgen`` console script.

    :class:`~apidocgen.exceptions.ApidocgenError` instances that escape the
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
        from apidocgen.exceptions import ApidocgenError
        from apidocgen.output import error

        if isinstance(exc, ApidocgenError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)


