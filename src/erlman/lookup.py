"""
lookup.py — Documentation lookup by Erlang reference

Mirrors what ``Code.get_docs`` returns for Elixir modules, built from the
man pages instead. References use the Elixir spelling of Erlang names:
``":crypto"`` for a module, ``":crypto.hash"`` for a function.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from .config import DocContext
from .extract import DOC_KINDS, get_function_docs, get_moduledoc, parse_docs, split
from .manpath import convert_reference
from .model import FunctionDoc, ModuleDoc
from .render import Sink

logger = logging.getLogger(__name__)


def _module_name(ref: str) -> str:
    return convert_reference(ref)[0]


def get_docs(module_ref: str, kind: str, ctx: DocContext):
    """Return docs of ``kind`` for a module, or None if it has no man page.

    ``kind`` is ``"docs"``, ``"moduledoc"`` or ``"all"``; see
    ``extract.parse_docs`` for the shapes returned. Exports are only
    fetched when function docs are requested.

    Raises:
        ModuleNotLoadedError: If the export list cannot be retrieved.
        SegmentMarkerMissingError: If the page has no exports section.
    """
    if kind not in DOC_KINDS:
        raise ValueError(f"kind must be one of {', '.join(DOC_KINDS)}, got {kind!r}")
    page = ctx.pages.read(module_ref)
    if page is None:
        logger.info("no man page for %s", module_ref)
        return None
    if kind == "moduledoc":
        return get_moduledoc(split(page)[0])
    export_set = ctx.exports.exports(_module_name(module_ref))
    return parse_docs(export_set, page, kind, ctx.legacy_signature)


def load_module_docs(
    module_ref: str, ctx: DocContext
) -> Optional[Tuple[ModuleDoc, List[FunctionDoc]]]:
    """Return the module doc and all function docs, or None without a page."""
    page = ctx.pages.read(module_ref)
    if page is None:
        return None
    module = _module_name(module_ref)
    export_set = ctx.exports.exports(module)
    module_segment, exports_segment = split(page)
    _, body = get_moduledoc(module_segment)
    docs = get_function_docs(exports_segment, export_set, ctx.legacy_signature)
    return ModuleDoc(module=module, body=body), docs


def find_arity(module: str, fname: str, ctx: DocContext) -> List[int]:
    """Return every exported arity of ``module:fname``."""
    return ctx.exports.exports(module.lstrip(":")).arities(fname)


def find_doc(docs: List[FunctionDoc], fname: str, arity: int) -> Optional[FunctionDoc]:
    for doc in docs:
        if doc.key == (fname, arity):
            return doc
    return None


def h(ref: str, ctx: DocContext, sink: Sink) -> bool:
    """Write the documentation for ``ref`` to ``sink``.

    Returns False (after writing a not-found note) when the module has no
    man page or the function is not exported.
    """
    search = convert_reference(ref)
    if len(search) == 1:
        docs = get_docs(ref, "moduledoc", ctx)
        if docs is None:
            sink.write(ref, f"{ref} not found\n")
            return False
        sink.write(ref, docs[1])
        return True

    if len(search) != 2:
        sink.write(ref, f"{ref} not found\n")
        return False

    module, fname = search
    page = ctx.pages.read(":" + module)
    if page is None:
        sink.write(ref, f"{ref} not found\n")
        return False
    export_set = ctx.exports.exports(module)
    arities = export_set.arities(fname)
    if not arities:
        sink.write(ref, f"{ref} not found\n")
        return False

    docs = get_function_docs(split(page)[1], export_set, ctx.legacy_signature)

    heading = f"def :{module}.{fname}"
    for arity in arities:
        doc = find_doc(docs, fname, arity)
        if doc is None:
            sink.write(heading, f"No documentation for {fname}/{arity}.\n")
        else:
            sink.write(heading, doc.body)
    return True
