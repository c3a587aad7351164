"""
manpath.py — Locating Erlang man pages on disk

The OTP man pages are installed next to the runtime, under
``<erlang root>/man/man{1..8}``. The root is found by walking up from the
``erl`` executable until a directory holding ``man/man3/ets.3`` shows up.
"""

from __future__ import annotations
import logging
import re
import shutil
from pathlib import Path
from typing import List, Optional

from .errors import ManPathNotFoundError

logger = logging.getLogger(__name__)

# Every OTP install ships the ets page, so finding it confirms a man root.
PROBE_PAGE = Path("man") / "man3" / "ets.3"

_MANDIR_RE = re.compile(r"^man[1-8]")


def find_erl(name: str = "erl") -> Optional[Path]:
    """Return the path of the ``erl`` executable, or None if not on PATH."""
    found = shutil.which(name)
    if found is None:
        return None
    return Path(found)


def _candidates(path: Path) -> List[Path]:
    prefixes: List[Path] = []
    current = Path(path.parts[0])
    prefixes.append(current)
    for part in path.parts[1:]:
        current = current / part
        prefixes.append(current)
    return prefixes


def discover_manpath(erl_path: Path) -> Path:
    """Return the ``man`` directory belonging to the given ``erl`` binary.

    Both the path as given and its symlink-resolved form are searched,
    since ``/usr/bin/erl`` is usually a link into the real install. The
    deepest matching prefix wins.

    Raises:
        ManPathNotFoundError: If no prefix contains ``man/man3/ets.3``.
    """
    erl_path = Path(erl_path)
    searched = [erl_path]
    resolved = erl_path.resolve()
    if resolved != erl_path:
        searched.append(resolved)

    for candidate in searched:
        matches = [p for p in _candidates(candidate) if (p / PROBE_PAGE).is_file()]
        if matches:
            root = matches[-1] / "man"
            logger.debug("man pages for %s found under %s", erl_path, root)
            return root

    raise ManPathNotFoundError(f"no {PROBE_PAGE.as_posix()} above {erl_path}")


def mandirs(root: Path) -> List[Path]:
    """Return the ``man1``..``man8`` style sub-directories of ``root``."""
    root = Path(root)
    return [
        root / entry
        for entry in sorted(p.name for p in root.iterdir())
        if _MANDIR_RE.match(entry) and (root / entry).is_dir()
    ]


def convert_reference(ref: str) -> List[str]:
    """Split an Elixir-style Erlang reference into its parts.

    ``":crypto.hash"`` becomes ``["crypto", "hash"]``.
    """
    return ref.lstrip(":").split(".")


class ManPageSource:
    """Finds and reads man pages below a man root directory."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def page(self, directory: Path, target: str) -> Path:
        # man3/crypto.3, man6/common_test.6, ...
        return directory / f"{target}.{directory.name[-1]}"

    def find(self, ref: str) -> Optional[Path]:
        """Return the page for the module part of ``ref``, or None."""
        target = convert_reference(ref)[0]
        if not target or not self.root.is_dir():
            return None
        for directory in mandirs(self.root):
            candidate = self.page(directory, target)
            if candidate.is_file():
                return candidate
        logger.debug("no man page for %r under %s", target, self.root)
        return None

    def read(self, ref: str) -> Optional[str]:
        """Return the page text for ``ref``, or None when there is no page."""
        path = self.find(ref)
        if path is None:
            return None
        return path.read_text(encoding="utf-8", errors="replace")
