"""
serialize.py — Deterministic JSON export of extracted documentation

Output follows canonical JSON rules so that the same page always yields
the same bytes:
- Object keys sorted lexicographically
- No insignificant whitespace (unless ``indent`` is requested)
- UTF-8, non-ASCII kept as-is
- No NaN/Infinity (raises ValueError)

``validate_docs`` checks a document against DOCS_SCHEMA (JSON Schema
Draft 7) before it is handed to other tools.
"""

from __future__ import annotations
import json
from typing import Any, Dict, Iterable, Optional

import jsonschema

from .errors import DocsSchemaError
from .model import FunctionDoc, ModuleDoc

DOCS_FORMAT_VERSION = "1.0"

DOCS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "erlman module documentation",
    "type": "object",
    "required": ["format_version", "module", "docs"],
    "additionalProperties": False,
    "properties": {
        "format_version": {"const": DOCS_FORMAT_VERSION},
        "module": {"type": "string", "minLength": 1},
        "moduledoc": {
            "type": ["object", "null"],
            "required": ["module", "line", "body"],
            "additionalProperties": False,
            "properties": {
                "module": {"type": "string"},
                "line": {"type": "integer", "minimum": 1},
                "body": {"type": "string"},
            },
        },
        "docs": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["name", "arity", "line", "kind", "signature", "body"],
                "additionalProperties": False,
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "arity": {"type": "integer", "minimum": 0},
                    "line": {"type": "integer", "minimum": 1},
                    "kind": {"enum": ["definition"]},
                    "signature": {
                        "type": "array",
                        "items": {"type": "string", "pattern": "^arg[0-9]+$"},
                    },
                    "body": {"type": "string"},
                },
            },
        },
    },
}


def canonical_dumps(obj: Any, indent: Optional[int] = None) -> str:
    """Return JSON with sorted keys; compact unless ``indent`` is given."""
    return json.dumps(
        obj,
        sort_keys=True,
        indent=indent,
        separators=(",", ":") if indent is None else (",", ": "),
        ensure_ascii=False,
        allow_nan=False,
    )


def docs_to_dict(
    module: str,
    moduledoc: Optional[ModuleDoc],
    docs: Iterable[FunctionDoc],
) -> Dict[str, Any]:
    return {
        "format_version": DOCS_FORMAT_VERSION,
        "module": module,
        "moduledoc": moduledoc.to_dict() if moduledoc is not None else None,
        "docs": [doc.to_dict() for doc in docs],
    }


def validate_docs(obj: Dict[str, Any]) -> None:
    """Validate an exported docs document.

    Raises:
        DocsSchemaError: With the path and message of the first violation.
    """
    validator = jsonschema.Draft7Validator(DOCS_SCHEMA)
    errors = sorted(validator.iter_errors(obj), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        first = errors[0]
        where = "/".join(str(p) for p in first.absolute_path) or "<root>"
        raise DocsSchemaError(f"{where}: {first.message}")


def dumps_docs(
    module: str,
    moduledoc: Optional[ModuleDoc],
    docs: Iterable[FunctionDoc],
    indent: Optional[int] = None,
    validate: bool = False,
) -> str:
    obj = docs_to_dict(module, moduledoc, docs)
    if validate:
        validate_docs(obj)
    return canonical_dumps(obj, indent=indent)
