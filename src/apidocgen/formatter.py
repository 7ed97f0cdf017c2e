"""Source formatting for generated TypeScript files.

:class:`PrettierFormatter` re-reads a whole file, pipes it through the
``prettier`` CLI (TypeScript parser, single quotes, trailing commas,
semicolons) and writes the result back. The file is only rewritten when
prettier exits cleanly, so a formatting failure never loses content that was
already appended.

:class:`NullFormatter` leaves files untouched. It is used with
``--no-format`` and when no ``prettier`` binary is installed.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from apidocgen.exceptions import WriteError

logger = logging.getLogger(__name__)

PRETTIER_OPTIONS = (
    "--parser",
    "typescript",
    "--single-quote",
    "--trailing-comma",
    "all",
)


class Formatter(ABC):
    """Rewrites a generated file in place."""

    @abstractmethod
    def format_file(self, path: Path) -> None:
        """Format *path*.

        Raises:
            WriteError: If the file could not be formatted. The file keeps
                its previous content.
        """
        ...


class NullFormatter(Formatter):
    """Formatter that does nothing."""

    def format_file(self, path: Path) -> None:
        return None


class PrettierFormatter(Formatter):
    """Format files with the ``prettier`` command-line tool.

    Args:
        command: The prettier invocation, e.g. ``["prettier"]`` or
            ``["npx", "prettier"]``.
        timeout: Seconds to wait for each prettier run.
    """

    def __init__(self, command: list[str], timeout: float = 60.0) -> None:
        self._command = list(command)
        self._timeout = timeout

    @property
    def command(self) -> list[str]:
        return list(self._command)

    def format_file(self, path: Path) -> None:
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise WriteError(f"Cannot read {path} for formatting: {exc}", str(path)) from exc

        args = [*self._command, *PRETTIER_OPTIONS, "--stdin-filepath", str(path)]
        try:
            result = subprocess.run(
                args,
                input=content,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise WriteError(f"prettier timed out formatting {path}", str(path)) from exc
        except FileNotFoundError as exc:
            raise WriteError(f"prettier binary not found: {self._command[0]}", str(path)) from exc

        if result.returncode != 0:
            detail = result.stderr.strip().splitlines()
            message = detail[-1] if detail else f"exit code {result.returncode}"
            raise WriteError(f"prettier failed on {path}: {message}", str(path))

        try:
            path.write_text(result.stdout, encoding="utf-8")
        except OSError as exc:
            raise WriteError(f"Cannot write formatted {path}: {exc}", str(path)) from exc
        logger.debug("Formatted %s", path)


def find_prettier() -> Optional[list[str]]:
    """Return the command that runs prettier, or ``None`` when it is not installed."""
    binary = shutil.which("prettier")
    if binary:
        return [binary]
    return None


def create_formatter(enabled: bool = True) -> tuple[Formatter, Optional[str]]:
    """Pick the formatter for a run.

    Returns:
        A ``(formatter, warning)`` tuple. ``warning`` is set when formatting
        was requested but prettier is unavailable.
    """
    if not enabled:
        return NullFormatter(), None
    command = find_prettier()
    if command is None:
        return NullFormatter(), "prettier not found on PATH; generated files are left unformatted."
    return PrettierFormatter(command), None
