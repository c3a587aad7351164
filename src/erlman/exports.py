"""
exports.py — Export lists for Erlang modules

The extractor needs to know which names a module exports. The live
provider asks an ``erl`` node for ``Module:module_info(exports)``; the
static provider serves pre-recorded lists from a JSON file, which is what
tests and machines without Erlang use.

JSON file layout:

    {"crypto": [["hash", 2], ["hash_init", 1]], "lists": {"map": 2}}
"""

from __future__ import annotations
import json
import logging
import re
import subprocess
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol

from .errors import ModuleNotLoadedError
from .model import ExportSet

logger = logging.getLogger(__name__)

_MODULE_RE = re.compile(r"^[a-z][A-Za-z0-9_@]*$")
_EXPORT_RE = re.compile(r"\{\s*('(?:[^'\\]|\\.)*'|[a-z][A-Za-z0-9_@]*)\s*,\s*(\d+)\s*\}")


class ExportProvider(Protocol):
    def exports(self, module: str) -> ExportSet:
        """Return the export set of ``module``.

        Raises:
            ModuleNotLoadedError: If the module cannot be inspected.
        """
        ...


def parse_exports_term(text: str) -> ExportSet:
    """Parse a printed ``[{Name,Arity},...]`` term into an ExportSet."""
    pairs = []
    for atom, arity in _EXPORT_RE.findall(text):
        if atom.startswith("'"):
            atom = re.sub(r"\\(.)", r"\1", atom[1:-1])
        pairs.append((atom, int(arity)))
    return ExportSet(pairs)


class ErlExportProvider:
    """Reads export lists from a throwaway ``erl`` node."""

    def __init__(self, erl: str = "erl", timeout: float = 10.0):
        self.erl = erl
        self.timeout = timeout

    def command(self, module: str) -> list[str]:
        expr = f"io:format(\"~w~n\", [{module}:module_info(exports)]), halt()."
        return [self.erl, "-noshell", "-eval", expr]

    def exports(self, module: str) -> ExportSet:
        module = module.lstrip(":")
        if not _MODULE_RE.match(module):
            raise ModuleNotLoadedError(f"{module!r} is not a plain module atom")

        try:
            proc = subprocess.run(
                self.command(module),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as exc:
            raise ModuleNotLoadedError(f"cannot run {self.erl}: {exc}") from exc
        except subprocess.TimeoutExpired as exc:
            raise ModuleNotLoadedError(f"{self.erl} timed out after {self.timeout}s") from exc

        if proc.returncode != 0:
            detail = (proc.stderr or proc.stdout).strip().splitlines()
            raise ModuleNotLoadedError(f"{module}: {detail[0] if detail else 'erl exited ' + str(proc.returncode)}")

        export_set = parse_exports_term(proc.stdout)
        if not len(export_set):
            raise ModuleNotLoadedError(f"{module}: unexpected output {proc.stdout.strip()[:80]!r}")
        logger.debug("%s exports %d functions", module, len(export_set))
        return export_set


class StaticExportProvider:
    """Serves export sets from a mapping of module name to exports."""

    def __init__(self, modules: Mapping[str, Any]):
        self._modules: Dict[str, ExportSet] = {
            name: value if isinstance(value, ExportSet) else ExportSet(value)
            for name, value in modules.items()
        }

    @classmethod
    def from_file(cls, path: Path) -> "StaticExportProvider":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object of module -> exports")
        return cls(data)

    def exports(self, module: str) -> ExportSet:
        module = module.lstrip(":")
        found: Optional[ExportSet] = self._modules.get(module)
        if found is None:
            raise ModuleNotLoadedError(f"{module} is not in the export table")
        return found
