"""Scratch state, working directories, and configuration precedence.

This module handles everything apidocgen keeps on disk outside the generated
tree:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.apidocgen/`` on macOS and Windows. See :func:`get_cache_dir` (scratch
  files) and :func:`get_data_dir` (working ``api_docs`` tree, crash logs).
* **Scratch state** -- the run configuration (``config.json``) and the raw
  fetched document (``paths.json``). Both live only for the duration of one
  run and are removed by :func:`clean_scratch`, which the pipeline calls in a
  ``finally`` block. A process killed with SIGKILL can leave them behind;
  the next run overwrites them.
* **Precedence resolution** -- :func:`resolve_settings` merges CLI flags,
  environment variables and a project-local ``apidocgen.json``.

All file writes use an atomic temp-file-then-rename strategy
(:func:`_atomic_write`).
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Any, Optional

from apidocgen.exceptions import ConfigError
from apidocgen.models import GenerationConfig

_APP_NAME = "apidocgen"
_PROJECT_CONFIG_FILENAME = "apidocgen.json"

RUN_CONFIG_FILENAME = "config.json"
"""Scratch file holding ``{"PATH": <url>, "BASEPATH": <prefix>}``."""

RAW_DOCUMENT_FILENAME = "paths.json"
"""Scratch file holding the fetched document, pretty-printed."""

OUTPUT_FOLDER_NAME = "api_docs"
"""Name of the generated root directory."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_cache_dir() -> Path:
    """Return the scratch directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CACHE_HOME/apidocgen/`` (default ``~/.cache/apidocgen/``).
    On macOS/Windows: ``~/.apidocgen/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (working output tree, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/apidocgen/`` (default ``~/.local/share/apidocgen/``).
    On macOS/Windows: ``~/.apidocgen/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_work_root() -> Path:
    """Return the default location of the generated ``api_docs`` tree.

    The directory itself is not created; the writer owns its lifecycle.
    """
    return get_data_dir() / OUTPUT_FOLDER_NAME


# --- Atomic file writes ---


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. On any failure the
    temp file is removed and the exception re-raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- Scratch state ---


def run_config_path() -> Path:
    """Path to the scratch run configuration file."""
    return get_cache_dir() / RUN_CONFIG_FILENAME


def raw_document_path() -> Path:
    """Path to the scratch copy of the fetched document."""
    return get_cache_dir() / RAW_DOCUMENT_FILENAME


def save_run_config(config: GenerationConfig) -> Path:
    """Persist the source URL and base path as ``{"PATH": ..., "BASEPATH": ...}``.

    Returns:
        The path of the written scratch file.
    """
    path = run_config_path()
    data = {"PATH": config.source_url, "BASEPATH": config.base_path}
    _atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


def load_run_config() -> dict[str, str]:
    """Read the scratch run configuration back.

    Raises:
        ConfigError: If the file is missing, is not valid JSON, or lacks the
            ``PATH``/``BASEPATH`` keys.
    """
    path = run_config_path()
    if not path.is_file():
        raise ConfigError(f"No run configuration at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid run configuration at {path}: {exc}") from exc
    if not isinstance(data, dict) or "PATH" not in data or "BASEPATH" not in data:
        raise ConfigError(f"Run configuration at {path} must define PATH and BASEPATH")
    return {"PATH": str(data["PATH"]), "BASEPATH": str(data["BASEPATH"])}


def save_raw_document(document: dict[str, Any]) -> Path:
    """Persist the fetched document to the scratch directory."""
    path = raw_document_path()
    _atomic_write(path, json.dumps(document, indent=2, ensure_ascii=False) + "\n")
    return path


def clean_scratch() -> list[Path]:
    """Delete both scratch files, ignoring the ones that do not exist.

    Returns:
        The paths that were actually removed.
    """
    removed: list[Path] = []
    for path in (raw_document_path(), run_config_path()):
        try:
            path.unlink()
        except FileNotFoundError:
            continue
        removed.append(path)
    return removed


# --- Project-local config ---


def load_project_config() -> Optional[dict[str, Any]]:
    """Load project-local defaults from ``./apidocgen.json``.

    Recognised keys: ``swagger``, ``base_path``, ``output``, ``skip_folder``,
    ``lowercase``. Unknown keys are ignored.

    Returns:
        The parsed JSON as a dict, or ``None`` if the file does not exist.

    Raises:
        ConfigError: If the file exists but is not a JSON object.
    """
    path = Path.cwd() / _PROJECT_CONFIG_FILENAME
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid project config at {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Project config at {path} must be a JSON object")
    return data


# --- Precedence resolution ---


def resolve_settings(
    cli_swagger: Optional[str] = None,
    cli_base_path: Optional[str] = None,
    cli_output: Optional[str] = None,
    cli_skip_folder: bool = False,
    cli_lowercase: bool = False,
) -> dict[str, Any]:
    """Resolve run settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags
        2. Environment variables (``APIDOCGEN_SWAGGER``,
           ``APIDOCGEN_BASE_PATH``, ``APIDOCGEN_OUTPUT``)
        3. Project config (``./apidocgen.json``)

    Boolean flags can only be switched on from the command line; when they
    are off the project config decides.

    Returns:
        A dict with keys ``swagger``, ``base_path``, ``output``,
        ``skip_folder`` and ``lowercase``. String values that no layer
        provides are ``None`` so the caller can prompt for them.
    """
    project = load_project_config() or {}

    def _pick(cli_value: Optional[str], env_var: str, key: str) -> Optional[str]:
        if cli_value:
            return cli_value
        env_value = os.environ.get(env_var)
        if env_value:
            return env_value
        value = project.get(key)
        return str(value) if value else None

    return {
        "swagger": _pick(cli_swagger, "APIDOCGEN_SWAGGER", "swagger"),
        "base_path": _pick(cli_base_path, "APIDOCGEN_BASE_PATH", "base_path"),
        "output": _pick(cli_output, "APIDOCGEN_OUTPUT", "output"),
        "skip_folder": cli_skip_folder or bool(project.get("skip_folder", False)),
        "lowercase": cli_lowercase or bool(project.get("lowercase", False)),
    }
