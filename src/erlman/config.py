"""
config.py — Environment configuration and context construction

Settings are read once from the environment:

    ERLMAN_MANPATH            man root to use instead of discovering it
    ERLMAN_ERL                erl executable name or path (default: erl)
    ERLMAN_EXPORTS_FILE       JSON export table; skips the live erl node
    ERLMAN_LEGACY_SIGNATURE   "true"/"false", arity + 1 placeholders (default: true)
    ERLMAN_ERL_TIMEOUT        seconds to wait for erl (default: 10)
    ERLMAN_LOG_LEVEL          logging level name (default: WARNING)

``build_context`` does all discovery up front and returns a DocContext
that the lookup functions take explicitly.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .errors import ManPathNotFoundError
from .exports import ErlExportProvider, ExportProvider, StaticExportProvider
from .manpath import ManPageSource, discover_manpath, find_erl

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErlmanConfig:
    manpath: Optional[Path] = None
    erl: str = "erl"
    exports_file: Optional[Path] = None
    legacy_signature: bool = True
    erl_timeout: float = 10.0
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ErlmanConfig":
        env = os.environ if environ is None else environ
        manpath = env.get("ERLMAN_MANPATH", "")
        exports_file = env.get("ERLMAN_EXPORTS_FILE", "")
        timeout = env.get("ERLMAN_ERL_TIMEOUT", "")
        try:
            erl_timeout = float(timeout) if timeout else 10.0
        except ValueError:
            raise ValueError(f"ERLMAN_ERL_TIMEOUT must be a number of seconds, got {timeout!r}") from None
        return cls(
            manpath=Path(manpath) if manpath else None,
            erl=env.get("ERLMAN_ERL", "") or "erl",
            exports_file=Path(exports_file) if exports_file else None,
            legacy_signature=env.get("ERLMAN_LEGACY_SIGNATURE", "true").lower() == "true",
            erl_timeout=erl_timeout,
            log_level=(env.get("ERLMAN_LOG_LEVEL", "") or "WARNING").upper(),
        )

    def with_overrides(self, **changes) -> "ErlmanConfig":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass(frozen=True)
class DocContext:
    """Everything the lookup layer needs from the host."""
    pages: ManPageSource
    exports: ExportProvider
    legacy_signature: bool = True


def resolve_manpath(config: ErlmanConfig) -> Path:
    """Return the configured man root, discovering it from ``erl`` if unset.

    Raises:
        ManPathNotFoundError: If ``erl`` is missing or has no man pages.
    """
    if config.manpath is not None:
        return config.manpath
    erl_path = find_erl(config.erl)
    if erl_path is None:
        raise ManPathNotFoundError(f"{config.erl} is not on PATH; set ERLMAN_MANPATH")
    return discover_manpath(erl_path)


def build_context(config: Optional[ErlmanConfig] = None) -> DocContext:
    config = config or ErlmanConfig.from_env()
    root = resolve_manpath(config)
    if config.exports_file is not None:
        exports: ExportProvider = StaticExportProvider.from_file(config.exports_file)
    else:
        exports = ErlExportProvider(config.erl, timeout=config.erl_timeout)
    logger.debug("using man root %s", root)
    return DocContext(
        pages=ManPageSource(root),
        exports=exports,
        legacy_signature=config.legacy_signature,
    )
