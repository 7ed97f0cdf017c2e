"""Write grouped declarations into the ``api_docs`` tree.

Layout, for a group ``Users``::

    api_docs/Users/Users.ts      # default
    api_docs/Users.ts            # flatten_folders=True

:class:`OutputWriter` creates every directory and file before the first
append, then processes records one at a time: render, append, format. A
failure on one record is captured as a failed
:class:`~apidocgen.models.RecordResult` and the batch moves on. A
declaration that prettier rejects is cut from the file again, and a name
already declared in the same file is refused.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from apidocgen.exceptions import WriteError
from apidocgen.formatter import Formatter, NullFormatter
from apidocgen.generator.emitter import render_declaration
from apidocgen.generator.naming import constant_name
from apidocgen.models import EndpointRecord, GenerationReport, Group, RecordResult
from apidocgen.output import error, success

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".ts"


def group_file_path(root: Path, key: str, flatten: bool = False) -> Path:
    """Return the file that holds group *key* under *root*."""
    if flatten:
        return root / f"{key}{FILE_SUFFIX}"
    return root / key / f"{key}{FILE_SUFFIX}"


class OutputWriter:
    """Appends rendered declarations to per-group files.

    Args:
        root: The ``api_docs`` directory.
        flatten: Write one file per group directly under *root*.
        lowercase: Lower-case constant names.
        formatter: Run after every append; defaults to :class:`NullFormatter`.
    """

    def __init__(
        self,
        root: Path,
        flatten: bool = False,
        lowercase: bool = False,
        formatter: Formatter | None = None,
    ) -> None:
        self.root = root
        self.flatten = flatten
        self.lowercase = lowercase
        self.formatter = formatter or NullFormatter()

    def reset(self) -> None:
        """Remove a tree left over from a previous run."""
        shutil.rmtree(self.root, ignore_errors=True)

    def prepare(self, groups: list[Group]) -> None:
        """Create the directory tree and an empty file for every group."""
        self.root.mkdir(parents=True, exist_ok=True)
        for group in groups:
            path = group_file_path(self.root, group.key, self.flatten)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch(exist_ok=True)

    def write(self, groups: list[Group]) -> GenerationReport:
        """Generate every record of every group, in order.

        Returns:
            A report with one result per record.
        """
        self.prepare(groups)
        report = GenerationReport(output_root=str(self.root))
        for group in groups:
            path = group_file_path(self.root, group.key, self.flatten)
            declared: set[str] = set()
            for record in group.records:
                report.results.append(self._write_record(record, path, declared))
        return report

    def _write_record(self, record: EndpointRecord, path: Path, declared: set[str]) -> RecordResult:
        name = constant_name(record.relative_path, self.lowercase) or record.api_path
        try:
            name, source = render_declaration(record, self.lowercase)
            if name in declared:
                raise WriteError(f"{name} is already declared in {path.name}", str(path))
            size = self._append(path, source)
            try:
                self.formatter.format_file(path)
            except WriteError:
                self._truncate(path, size)
                raise
            declared.add(name)
        except WriteError as exc:
            logger.debug("Failed to generate %s", record.api_path, exc_info=True)
            error(f"✘ {name}: {exc}")
            return RecordResult(
                name=name,
                api_path=record.api_path,
                file_path=str(path),
                ok=False,
                error=str(exc),
            )
        success(f"✔ Generated: {name}")
        return RecordResult(name=name, api_path=record.api_path, file_path=str(path))

    def _append(self, path: Path, source: str) -> int:
        """Append *source* to *path* and return the file size before the append."""
        try:
            size = path.stat().st_size if path.is_file() else 0
            with open(path, "a", encoding="utf-8") as f:
                if size:
                    f.write("\n")
                f.write(source)
        except OSError as exc:
            raise WriteError(f"Cannot write to {path}: {exc}", str(path)) from exc
        return size

    def _truncate(self, path: Path, size: int) -> None:
        """Drop everything appended to *path* after *size* bytes."""
        try:
            with open(path, "r+b") as f:
                f.truncate(size)
        except OSError as exc:
            raise WriteError(f"Cannot roll back {path}: {exc}", str(path)) from exc
