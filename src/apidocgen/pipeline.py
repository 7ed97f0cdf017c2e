"""The generation pipeline: fetch, extract, group, emit, place, clean up.

:func:`run_generation` is the single orchestration point. It takes an
immutable :class:`~apidocgen.models.GenerationConfig` plus the collaborators
that touch the outside world (document loader, formatter, file revealer) so
tests can replace each of them.

Scratch files are written before the fetch and removed in a ``finally``
block, whether the run succeeds, fails to fetch, or hits an unexpected error.
The document URL and base path of a run are the ones read back from the
scratch ``config.json``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

from apidocgen.config import (
    clean_scratch,
    get_work_root,
    load_run_config,
    save_raw_document,
    save_run_config,
)
from apidocgen.formatter import Formatter
from apidocgen.generator.grouping import group_records
from apidocgen.models import GenerationConfig, GenerationReport
from apidocgen.output import debug, info, print_data, warning
from apidocgen.parser.extractor import extract_endpoints, find_skipped_paths
from apidocgen.parser.loader import load_document, validate_document
from apidocgen.relocator import FileRevealer, NullRevealer, relocate_output
from apidocgen.writer import OutputWriter

DocumentLoader = Callable[[str], dict[str, Any]]


def run_generation(
    config: GenerationConfig,
    formatter: Optional[Formatter] = None,
    revealer: Optional[FileRevealer] = None,
    loader: DocumentLoader = load_document,
    work_root: Optional[Path] = None,
) -> GenerationReport:
    """Run one generation pass.

    Args:
        config: Effective run configuration.
        formatter: Applied after every append. ``None`` leaves files as
            rendered.
        revealer: Shows the final tree. ``None`` only prints the path.
        loader: Fetches and decodes the document.
        work_root: Where ``api_docs`` is built; defaults to
            :func:`~apidocgen.config.get_work_root`.

    Returns:
        The per-record report, with ``output_root`` pointing at the final
        location of the tree.

    Raises:
        ConnectionError_: If the source is unreachable.
        SpecParseError: If the document is malformed.
        ConfigError: If the scratch run configuration cannot be read back.
    """
    root = work_root or get_work_root()
    writer = OutputWriter(
        root,
        flatten=config.flatten_folders,
        lowercase=config.lowercase_names,
        formatter=formatter,
    )
    writer.reset()

    try:
        scratch = save_run_config(config)
        debug(f"Run configuration saved to {scratch}")
        run = load_run_config()
        source_url, base_path = run["PATH"], run["BASEPATH"]

        info(f"Fetching document from {source_url}")
        document = loader(source_url)
        debug(f"Raw document saved to {save_raw_document(document)}")

        version = validate_document(document)
        info(f"Parsing {version} document")

        for raw_path in find_skipped_paths(document, base_path):
            warning(f"Skipping {raw_path}: nothing left after removing {base_path}")

        records = extract_endpoints(document, base_path)
        if not records:
            warning("The document declares no endpoints; nothing to generate.")

        groups = group_records(records, config.lowercase_names)
        info(f"Found {len(records)} endpoints in {len(groups)} groups")

        report = writer.write(groups)
        final = place_output(root, config, revealer or NullRevealer())
        if final != root:
            for result in report.results:
                result.file_path = str(final / Path(result.file_path).relative_to(root))
        report.output_root = str(final)
        return report
    finally:
        for path in clean_scratch():
            debug(f"Removed {path}")
        info("🧹 Cleaned.")


def place_output(root: Path, config: GenerationConfig, revealer: FileRevealer) -> Path:
    """Move the tree to ``config.output_directory`` if set, then reveal it.

    Returns:
        The final location of the tree.
    """
    final = root
    if config.output_directory:
        final = relocate_output(root, config.output_directory)
    if config.reveal_output:
        revealer.reveal(final)
    print_data(f"💾 Output: {final}")
    return final
