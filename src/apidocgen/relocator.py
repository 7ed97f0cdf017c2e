"""Place the generated tree and show it to the user.

:func:`relocate_output` moves ``api_docs`` into the directory given with
``--output``, replacing any tree already there. Revealing the result in a
file manager goes through :class:`FileRevealer` so the platform side effect
can be swapped for :class:`NullRevealer` in tests and with ``--no-open``.
"""

from __future__ import annotations

import logging
import platform
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from apidocgen.exceptions import WriteError

logger = logging.getLogger(__name__)

_OPEN_COMMANDS = {
    "Windows": "explorer",
    "Darwin": "open",
    "Linux": "xdg-open",
}


def relocate_output(source: Path, destination_dir: str | Path) -> Path:
    """Move the *source* tree to ``destination_dir/<source.name>``.

    An existing tree at the target is removed first. When the target is
    *source* itself nothing moves.

    Returns:
        The absolute path of the moved tree.

    Raises:
        WriteError: If the target lies inside *source*, contains *source*,
            or the tree cannot be moved.
    """
    origin = source.resolve()
    target = (Path(destination_dir).expanduser() / source.name).resolve()
    if target == origin:
        logger.debug("%s is already in place", origin)
        return target
    if target.is_relative_to(origin) or origin.is_relative_to(target):
        raise WriteError(f"Cannot move {origin} to {target}: paths overlap", str(target))
    try:
        if target.exists():
            shutil.rmtree(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(source), str(target))
    except OSError as exc:
        raise WriteError(f"Cannot move {source} to {target}: {exc}", str(target)) from exc
    logger.debug("Moved %s to %s", source, target)
    return target


class FileRevealer(ABC):
    """Shows a directory to the user."""

    @abstractmethod
    def reveal(self, path: Path) -> bool:
        """Reveal *path*; return ``True`` if a viewer was launched."""
        ...


class NullRevealer(FileRevealer):
    """Records revealed paths without launching anything."""

    def __init__(self) -> None:
        self.revealed: list[Path] = []

    def reveal(self, path: Path) -> bool:
        self.revealed.append(path)
        return False


class PlatformFileRevealer(FileRevealer):
    """Open a directory with the platform file manager.

    Uses ``explorer`` on Windows, ``open`` on macOS and ``xdg-open`` on
    Linux. The viewer is started in the background and never awaited.
    """

    def __init__(self, system: str | None = None) -> None:
        self._system = system or platform.system()

    def reveal(self, path: Path) -> bool:
        command = _OPEN_COMMANDS.get(self._system)
        if command is None:
            logger.debug("No file manager command for platform %s", self._system)
            return False
        try:
            subprocess.Popen(
                [command, str(path)],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            logger.debug("Could not launch %s: %s", command, exc)
            return False
        return True
