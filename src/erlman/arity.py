"""
arity.py — Arity inference and placeholder signatures

OTP man pages open every function block with its signature line, e.g.

    hash(Type, Data) -> Digest

The arity is read straight off that text: the argument list is the span
between the first ``(`` and its matching ``)``, and every comma at the top
level of that span separates two arguments. Commas inside nested
parentheses (``fun((A, B) -> C)``) or brackets/braces (``{Key, Value}``,
``[A, B]``) belong to a single argument and are not counted.
"""

from __future__ import annotations
from typing import Tuple

_OPENERS = "([{"
_CLOSERS = ")]}"


def scan_arity(signature: str) -> int:
    """Return the number of arguments in the first parenthesised list.

    Returns 0 when there is no ``(`` at all or when the list is empty or
    blank. Text after the matching ``)`` (the return type) is ignored. An
    unterminated list is scanned to the end of the input.
    """
    start = signature.find("(")
    if start < 0:
        return 0

    depth = 0
    commas = 0
    blank = True
    for ch in signature[start + 1:]:
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            if depth > 0:
                depth -= 1
            elif ch == ")":
                break
        elif ch == "," and depth == 0:
            commas += 1
        if not ch.isspace():
            blank = False

    if blank:
        return 0
    return commas + 1


def build_signature(arity: int, legacy: bool = True) -> Tuple[str, ...]:
    """Return placeholder argument names for a function of ``arity``.

    With ``legacy`` on (the default) one extra placeholder is produced,
    ``arg0`` through ``arg{arity}``, which is what existing consumers of
    these signatures expect. Pass ``legacy=False`` for exactly ``arity``
    names.
    """
    if arity < 0:
        raise ValueError(f"arity must be non-negative, got {arity}")
    count = arity + 1 if legacy else arity
    return tuple(f"arg{i}" for i in range(count))
