"""
extract.py — Page splitting and per-function extraction

An OTP man page is laid out as

    .TH crypto 3 ...
    .SH NAME
    ...
    .SH EXPORTS
    .LP
    .B
    hash(Type, Data) -> Digest
    ...
    .B
    hash_init(Type) -> State
    ...

Everything before ``.SH EXPORTS`` is the module description. After it,
each function is introduced by a ``.B`` macro on a line of its own.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional, Tuple, Union

from .arity import build_signature, scan_arity
from .errors import FunctionNotMatchedError, SegmentMarkerMissingError
from .model import ExportSet, FunctionDoc
from .nroff import to_markdown

logger = logging.getLogger(__name__)

EXPORTS_MARKER = ".SH EXPORTS"
BLOCK_MARKER = ".B"

DOC_KINDS = ("docs", "moduledoc", "all")


def split(page: str) -> Tuple[str, str]:
    """Split a page into ``(module_segment, exports_segment)``.

    Raises:
        SegmentMarkerMissingError: If the page has no exports section.
    """
    parts = page.split(EXPORTS_MARKER, 1)
    if len(parts) != 2:
        first = page.lstrip().split("\n", 1)[0]
        raise SegmentMarkerMissingError(first[:80] or "empty page")
    return parts[0], parts[1]


def list_functions(exports_segment: str) -> List[str]:
    """Split the exports segment into raw function blocks.

    A separator is a line holding nothing but ``.B``; adjacent separators
    yield an empty block between them. The first element is whatever
    precedes the first ``.B`` and is never a function.
    """
    blocks: List[str] = []
    current: List[str] = []
    for line in exports_segment.split("\n"):
        if line == BLOCK_MARKER:
            blocks.append("\n".join(current))
            current = []
        else:
            current.append(line)
    blocks.append("\n".join(current))
    return blocks


def match_function(block: str, export_set: ExportSet) -> Optional[str]:
    """Return the exported name the block starts with, if any.

    Longer names are tried first so that ``send_after`` is not mistaken
    for ``send``.
    """
    for name in sorted(export_set.names(), key=len, reverse=True):
        if block.startswith(name):
            return name
    return None


def parse_function(
    block: str,
    export_set: ExportSet,
    legacy_signature: bool = True,
) -> FunctionDoc:
    """Build the documentation record for one function block.

    Raises:
        FunctionNotMatchedError: If the block does not start with an
            exported name.
    """
    name = match_function(block, export_set)
    if name is None:
        raise FunctionNotMatchedError(block.split("\n", 1)[0][:80])
    arity = scan_arity(block)
    return FunctionDoc(
        name=name,
        arity=arity,
        signature=build_signature(arity, legacy=legacy_signature),
        body=to_markdown(block),
    )


def get_function_docs(
    exports_segment: str,
    export_set: ExportSet,
    legacy_signature: bool = True,
) -> List[FunctionDoc]:
    """Return one record per block that names an exported function.

    Blocks that match no export (including the leading boilerplate) are
    skipped.
    """
    docs: List[FunctionDoc] = []
    for block in list_functions(exports_segment)[1:]:
        if match_function(block, export_set) is None:
            logger.debug("skipping unmatched block: %r", block.split("\n", 1)[0][:60])
            continue
        docs.append(parse_function(block, export_set, legacy_signature))
    return docs


def get_moduledoc(module_segment: str) -> Tuple[int, str]:
    return (1, to_markdown(module_segment))


def parse_docs(
    export_set: ExportSet,
    page: str,
    kind: str,
    legacy_signature: bool = True,
) -> Union[List[FunctionDoc], Tuple[int, str], Dict[str, object]]:
    """Extract docs of the requested ``kind`` from a full page.

    ``docs`` returns the function records, ``moduledoc`` the ``(line,
    markdown)`` pair, and ``all`` a dict holding both.
    """
    if kind not in DOC_KINDS:
        raise ValueError(f"kind must be one of {', '.join(DOC_KINDS)}, got {kind!r}")
    module_segment, exports_segment = split(page)
    if kind == "moduledoc":
        return get_moduledoc(module_segment)
    docs = get_function_docs(exports_segment, export_set, legacy_signature)
    if kind == "docs":
        return docs
    return {"docs": docs, "moduledoc": get_moduledoc(module_segment)}
