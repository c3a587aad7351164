"""
model.py — Value types shared by the extractor, lookup and serializer.
"""

from __future__ import annotations
from dataclasses import dataclass
from collections.abc import Mapping
from typing import Any, Dict, Iterable, Iterator, List, Tuple, Union

ExportPairs = Iterable[Tuple[str, int]]
ExportMapping = Mapping[str, Union[int, Iterable[int]]]


class ExportSet:
    """Ordered ``(name, arity)`` pairs exported by one module.

    Erlang exports each arity separately, so a name can appear more than
    once. Accepts a mapping of name to arity (or to several arities) or an
    iterable of pairs.
    """

    def __init__(self, exports: Union[ExportMapping, ExportPairs, None] = None):
        pairs: List[Tuple[str, int]] = []
        if exports is None:
            exports = ()
        if isinstance(exports, Mapping):
            for name, arity in exports.items():
                if isinstance(arity, int):
                    pairs.append((str(name), arity))
                else:
                    pairs.extend((str(name), int(a)) for a in arity)
        else:
            pairs.extend((str(name), int(arity)) for name, arity in exports)
        self._pairs: Tuple[Tuple[str, int], ...] = tuple(pairs)

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __contains__(self, name: object) -> bool:
        return any(n == name for n, _ in self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExportSet):
            return NotImplemented
        return self._pairs == other._pairs

    def __repr__(self) -> str:
        return f"ExportSet({list(self._pairs)!r})"

    def names(self) -> List[str]:
        """Unique export names in first-seen order."""
        seen: Dict[str, None] = {}
        for name, _ in self._pairs:
            seen.setdefault(name, None)
        return list(seen)

    def arities(self, name: str) -> List[int]:
        return [a for n, a in self._pairs if n == name]


@dataclass(frozen=True)
class FunctionDoc:
    name: str
    arity: int
    signature: Tuple[str, ...]
    body: str
    line: int = 1
    kind: str = "definition"

    @property
    def key(self) -> Tuple[str, int]:
        return (self.name, self.arity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "arity": self.arity,
            "line": self.line,
            "kind": self.kind,
            "signature": list(self.signature),
            "body": self.body,
        }


@dataclass(frozen=True)
class ModuleDoc:
    module: str
    body: str
    line: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "module": self.module,
            "line": self.line,
            "body": self.body,
        }
