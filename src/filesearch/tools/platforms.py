"""
Host platform capabilities for filesearch.

Everything that differs between operating systems lives here: which
top-level roots make up "the whole machine" and how to show a file in the
native file manager.
"""

import os
import subprocess
import sys
import threading
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from ..errors import RevealError


logger = logging.getLogger(__name__)


class Platform:
    """
    Base capability interface, also the generic POSIX implementation.

    Subclasses override ``search_roots`` and ``reveal_command``.
    """

    name = "posix"

    def search_roots(self) -> List[Path]:
        """Top-level roots that together cover the whole machine."""
        return [Path("/")]

    def reveal_command(self, path: Path) -> List[str]:
        """Command that opens the file manager on ``path``."""
        target = path.parent if path.parent != path else path
        return ["xdg-open", str(target)]

    def reveal(self, path: Path) -> threading.Thread:
        """
        Launch the file manager for an existing, resolved path.

        The launcher exits on its own; a daemon thread waits for it so no
        zombie process is left behind.

        Returns:
            The thread reaping the launched process

        Raises:
            RevealError: If the file manager cannot be launched
        """
        command = self.reveal_command(path)
        logger.info(f"Revealing {path} with {command[0]}")
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            raise RevealError(f"cannot run {command[0]}: {e}") from e

        reaper = threading.Thread(target=process.wait, name="filesearch-reveal", daemon=True)
        reaper.start()
        return reaper


class MacPlatform(Platform):
    """macOS: single root, Finder selects the file."""

    name = "macos"

    def reveal_command(self, path: Path) -> List[str]:
        return ["open", "-R", str(path)]


class WindowsPlatform(Platform):
    """Windows: one root per existing drive letter, Explorer selects the file."""

    name = "windows"
    DRIVE_LETTERS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

    def search_roots(self) -> List[Path]:
        roots = []
        for letter in self.DRIVE_LETTERS:
            drive = f"{letter}:\\"
            if os.path.exists(drive):
                roots.append(Path(drive))
        return roots

    def reveal_command(self, path: Path) -> List[str]:
        normalized = str(path)
        if normalized.startswith("\\\\?\\"):
            normalized = normalized[4:]
        return ["explorer.exe", "/select,", normalized]


def platform_for(system: str) -> Platform:
    """Pick the capability implementation for a ``sys.platform`` value."""
    if system.startswith("win"):
        return WindowsPlatform()
    if system == "darwin":
        return MacPlatform()
    return Platform()


def current_platform() -> Platform:
    return platform_for(sys.platform)


def reveal_in_file_manager(path: str, platform: Optional[Platform] = None) -> Path:
    """
    Show a path in the native file manager.

    Args:
        path: Absolute or relative path of the entry to reveal
        platform: Capability implementation (defaults to the host platform)

    Returns:
        The resolved path that was revealed

    Raises:
        RevealError: If the path does not exist or the file manager cannot be launched
    """
    candidate = Path(path)
    if not candidate.exists():
        raise RevealError("Selected path does not exist")

    try:
        resolved = candidate.resolve()
    except OSError:
        resolved = candidate

    (platform or current_platform()).reveal(resolved)
    return resolved


def describe_roots(roots: Sequence[Path]) -> str:
    return ", ".join(str(root) for root in roots) or "(none)"
