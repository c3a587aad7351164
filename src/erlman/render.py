"""
render.py — Output sinks for rendered documentation

A sink receives a heading and a markdown body. The pipeline never prints
on its own; callers pick a sink.
"""

from __future__ import annotations
import re
import sys
from typing import List, Optional, Protocol, TextIO, Tuple

_BOLD = "\x1b[1m"
_CYAN = "\x1b[36m"
_RESET = "\x1b[0m"

_CODE_SPAN = re.compile(r"`([^`\n]*)`")


class Sink(Protocol):
    def write(self, heading: str, body: str) -> None:
        ...


class PlainSink:
    """Plain text: ``* heading`` followed by the raw markdown."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def write(self, heading: str, body: str) -> None:
        self.stream.write(f"* {heading}\n\n")
        self.stream.write(body or "")
        if body and not body.endswith("\n"):
            self.stream.write("\n")


class AnsiSink(PlainSink):
    """Terminal output with a bold heading and highlighted code spans."""

    def write(self, heading: str, body: str) -> None:
        self.stream.write(f"{_BOLD}* {heading}{_RESET}\n\n")
        lines = []
        for line in (body or "").split("\n"):
            if line.startswith("#"):
                lines.append(f"{_BOLD}{line}{_RESET}")
            else:
                lines.append(_CODE_SPAN.sub(f"{_CYAN}\\1{_RESET}", line))
        self.stream.write("\n".join(lines))
        if body and not body.endswith("\n"):
            self.stream.write("\n")


class CaptureSink:
    """Keeps every ``(heading, body)`` pair in ``entries``."""

    def __init__(self) -> None:
        self.entries: List[Tuple[str, str]] = []

    def write(self, heading: str, body: str) -> None:
        self.entries.append((heading, body or ""))

    @property
    def text(self) -> str:
        return "".join(f"* {h}\n\n{b}" for h, b in self.entries)


def default_sink(stream: Optional[TextIO] = None) -> Sink:
    """Pick ANSI output for terminals and plain output otherwise."""
    stream = stream if stream is not None else sys.stdout
    if hasattr(stream, "isatty") and stream.isatty():
        return AnsiSink(stream)
    return PlainSink(stream)
