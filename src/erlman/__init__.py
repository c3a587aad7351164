"""erlman public API.

Converts the Erlang/OTP nroff man pages into markdown and extracts one
documentation record per exported function, shaped like the records
``Code.get_docs`` returns for Elixir modules.

Example:
    from erlman import ErlangDocs

    docs = ErlangDocs.from_env()
    docs.h(":crypto.hash")
    records = docs.get_docs(":crypto", "docs")
"""

from pathlib import Path
from typing import Optional

from .arity import build_signature, scan_arity
from .config import DocContext, ErlmanConfig, build_context
from .errors import (
    DocsSchemaError,
    DocumentationFileMissingError,
    ErlmanError,
    FunctionNotMatchedError,
    ManPathNotFoundError,
    ModuleNotLoadedError,
    SegmentMarkerMissingError,
)
from .exports import ErlExportProvider, StaticExportProvider, parse_exports_term
from .extract import (
    get_function_docs,
    get_moduledoc,
    list_functions,
    match_function,
    parse_docs,
    parse_function,
    split,
)
from .lookup import find_arity, get_docs, h, load_module_docs
from .manpath import ManPageSource, convert_reference, discover_manpath, find_erl
from .model import ExportSet, FunctionDoc, ModuleDoc
from .nroff import to_markdown
from .render import AnsiSink, CaptureSink, PlainSink, Sink, default_sink
from .serialize import docs_to_dict, dumps_docs, validate_docs

__version__ = "0.3.0"


class ErlangDocs:
    """High-level facade bound to one DocContext."""

    def __init__(self, ctx: DocContext):
        self.ctx = ctx

    @classmethod
    def from_env(cls, **overrides) -> "ErlangDocs":
        """Build from ``ERLMAN_*`` environment settings.

        Keyword overrides are applied on top of the environment, e.g.
        ``ErlangDocs.from_env(manpath=Path("/opt/erlang/man"))``.

        Raises:
            ManPathNotFoundError: If no man root is configured or found.
        """
        config = ErlmanConfig.from_env().with_overrides(**overrides)
        return cls(build_context(config))

    @classmethod
    def from_paths(
        cls,
        manpath: Path,
        exports_file: Optional[Path] = None,
        legacy_signature: bool = True,
    ) -> "ErlangDocs":
        config = ErlmanConfig(
            manpath=Path(manpath),
            exports_file=Path(exports_file) if exports_file else None,
            legacy_signature=legacy_signature,
        )
        return cls(build_context(config))

    def get_docs(self, module: str, kind: str = "docs"):
        """Return docs of ``kind`` for ``module``, or None without a man page."""
        return get_docs(module, kind, self.ctx)

    def h(self, ref: str, sink: Optional[Sink] = None) -> bool:
        """Write docs for ``ref`` to ``sink`` (stdout by default)."""
        return h(ref, self.ctx, sink or default_sink())

    def to_json(self, module: str, validate: bool = True) -> Optional[str]:
        """Return the canonical JSON document for ``module``, or None."""
        loaded = load_module_docs(module, self.ctx)
        if loaded is None:
            return None
        moduledoc, docs = loaded
        return dumps_docs(moduledoc.module, moduledoc, docs, validate=validate)


__all__ = [
    "ErlangDocs",
    "DocContext",
    "ErlmanConfig",
    "build_context",
    "to_markdown",
    "scan_arity",
    "build_signature",
    "split",
    "list_functions",
    "match_function",
    "parse_function",
    "get_function_docs",
    "get_moduledoc",
    "parse_docs",
    "get_docs",
    "load_module_docs",
    "find_arity",
    "h",
    "ExportSet",
    "FunctionDoc",
    "ModuleDoc",
    "ManPageSource",
    "convert_reference",
    "discover_manpath",
    "find_erl",
    "ErlExportProvider",
    "StaticExportProvider",
    "parse_exports_term",
    "Sink",
    "PlainSink",
    "AnsiSink",
    "CaptureSink",
    "default_sink",
    "docs_to_dict",
    "dumps_docs",
    "validate_docs",
    "ErlmanError",
    "SegmentMarkerMissingError",
    "FunctionNotMatchedError",
    "DocumentationFileMissingError",
    "ManPathNotFoundError",
    "ModuleNotLoadedError",
    "DocsSchemaError",
]
