"""
nroff.py — nroff to markdown line transducer

Parses just enough nroff to turn the Erlang/OTP man pages into markdown.
The OTP pages are generated from XML, so a small, fixed set of macros
covers nearly everything that appears in them:

    .TH .SH .SS .TP .LP .RS .RE .nf .fi .br .B

Each line is handled on its own. The only state carried between lines is
a ``carry`` prefix that a macro can ask to be put in front of the next
line (``.nf`` uses it to start an indented code block). Lines that do not
start with a known macro are plain text and only get the inline font
escapes rewritten. Nothing in here raises on odd input; unknown macros
fall through to the plain text path.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

__all__ = [
    "Emit",
    "Suppress",
    "MACRO_RULES",
    "CODE_INDENT",
    "split_macro",
    "swap_inline",
    "swap_macro",
    "translate",
    "to_markdown",
]

CODE_INDENT = "    "

# \fI \fB \fR font shifts become backticks, \& (zero width) is dropped.
_INLINE_ESCAPE = re.compile(r"\\f[IBR]|\\&")


@dataclass(frozen=True)
class Emit:
    """Write ``line`` to the output and hand ``carry`` to the next line."""
    line: str
    carry: str = ""


@dataclass(frozen=True)
class Suppress:
    """Write nothing for this line."""
    carry: str = ""


Outcome = Union[Emit, Suppress]
MacroRule = Callable[[str], Outcome]


# Headings keep a trailing newline, so once lines are joined every heading
# is followed by a blank line: ".TH crypto 3" -> "# crypto 3\n".
def _heading(level: int) -> MacroRule:
    marker = "#" * level + " "
    return lambda rest: Emit(marker + rest + "\n")


def _passthrough(rest: str) -> Outcome:
    return Emit(rest)


def _drop(rest: str) -> Outcome:
    # .RS takes an indent count; markdown has no way to express it without
    # knowing whether the region is a list, so regions are flattened.
    return Suppress()


def _fill_off(rest: str) -> Outcome:
    return Emit(rest, CODE_INDENT)


def _line_break(rest: str) -> Outcome:
    return Emit("\n" + rest)


MACRO_RULES: Dict[str, MacroRule] = {
    ".TH": _heading(1),
    ".SH": _heading(2),
    ".SS": _heading(3),
    ".TP": _passthrough,
    ".LP": _passthrough,
    ".RS": _drop,
    ".RE": _drop,
    ".nf": _fill_off,
    ".fi": _passthrough,
    ".br": _line_break,
    # Function blocks are split on a lone .B, so this only fires for a
    # .B that carries text or one that survived the split.
    ".B": _passthrough,
}


def split_macro(line: str) -> Tuple[str, str]:
    """Split ``line`` into its leading token and the remainder.

    Only the first whitespace character is consumed, so any further
    spacing stays part of the remainder.
    """
    parts = re.split(r"\s", line, maxsplit=1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def swap_inline(line: str) -> str:
    """Rewrite inline font escapes.

    The substitution is repeated until the line stops changing, so that
    removing ``\\&`` can never leave a fresh escape behind.
    """
    while True:
        swapped = _INLINE_ESCAPE.sub(
            lambda m: "" if m.group(0) == "\\&" else "`", line
        )
        if swapped == line:
            return swapped
        line = swapped


def swap_macro(line: str) -> Optional[Outcome]:
    """Apply the macro rule for ``line``, or ``None`` if it is not a macro."""
    token, rest = split_macro(line)
    rule = MACRO_RULES.get(token)
    if rule is None:
        return None
    return rule(rest)


def translate(line: str, carry: str = "") -> Outcome:
    """Translate one line given the carry produced by the previous one."""
    outcome = swap_macro(line)
    if outcome is not None:
        return outcome
    return Emit(carry + swap_inline(line))


def to_markdown(text: str) -> str:
    """Convert an nroff fragment into a markdown string.

    Example:
        >>> to_markdown(".SH DESCRIPTION\\nHash \\\\fIData\\\\fR.")
        '## DESCRIPTION\\n\\nHash `Data`.\\n'
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    out: List[str] = []
    carry = ""
    for line in lines:
        outcome = translate(line, carry)
        if isinstance(outcome, Emit):
            out.append(outcome.line)
        carry = outcome.carry
    if not out:
        return ""
    return "\n".join(out) + "\n"
