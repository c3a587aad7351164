#!/usr/bin/env python3
"""
erlman — Erlang man pages as markdown

Commands:
  h         Show docs for :module or :module.function
  docs      Extract a module's docs (markdown or JSON)
  convert   Convert any nroff file to markdown
  manpath   Print the discovered man page root
"""

from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path

from .config import DocContext, ErlmanConfig, build_context, resolve_manpath
from .errors import DocumentationFileMissingError, ErlmanError
from .lookup import load_module_docs, h
from .nroff import to_markdown
from .render import default_sink
from .serialize import dumps_docs


def _fail_with_error(err: ErlmanError) -> None:
    """Print a structured error message from an ``ErlmanError`` and exit.

    Args:
        err: Structured lookup/conversion error.

    Returns:
        None: This function terminates the process.
    """
    context = f" Context: {err.context}." if err.context else ""
    print(
        f"ERROR: {err.code}. {err.message}{context} "
        f"Fix: check the reference and your Erlang install, then retry. "
        f"(See: {err.doc_url})"
    )
    sys.exit(1)


def _cli_error(what: str, why: str, fix: str, see: str) -> None:
    """Print a teaching-style CLI error and exit.

    Args:
        what: What failed.
        why: Why it failed.
        fix: Recommended remediation.
        see: Command reference.

    Returns:
        None: This function terminates the process.
    """
    print(f"ERROR: {what}. {why}. Fix: {fix}. (See: {see})")
    sys.exit(1)


def _config_from_args(args: argparse.Namespace) -> ErlmanConfig:
    config = ErlmanConfig.from_env().with_overrides(
        manpath=Path(args.manpath) if args.manpath else None,
        exports_file=Path(args.exports_file) if args.exports_file else None,
    )
    if args.no_legacy_signature:
        config = config.with_overrides(legacy_signature=False)
    return config


def _setup_logging(args: argparse.Namespace, config: ErlmanConfig) -> None:
    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _build_context(args: argparse.Namespace) -> DocContext:
    try:
        return build_context(args.config)
    except ErlmanError as err:
        _fail_with_error(err)
    except (OSError, ValueError) as exc:
        _cli_error(
            "Export table could not be loaded",
            str(exc),
            "point --exports-file at a JSON object of module -> [[name, arity], ...]",
            "erlman --help",
        )


def cmd_h(args: argparse.Namespace) -> None:
    """Handle ``erlman h``.

    Args:
        args: Parsed CLI arguments holding the reference to look up.
    """
    try:
        ctx = _build_context(args)
        found = h(args.ref, ctx, default_sink())
    except ErlmanError as err:
        _fail_with_error(err)
    if not found:
        sys.exit(1)


def cmd_docs(args: argparse.Namespace) -> None:
    """Handle ``erlman docs`` extraction.

    Args:
        args: Parsed CLI arguments with module, kind and output format.
    """
    try:
        ctx = _build_context(args)
        loaded = load_module_docs(args.module, ctx)
        if loaded is None:
            raise DocumentationFileMissingError(args.module)
        moduledoc, docs = loaded

        if args.json:
            print(dumps_docs(
                moduledoc.module,
                moduledoc if args.kind in ("moduledoc", "all") else None,
                docs if args.kind in ("docs", "all") else [],
                indent=2,
                validate=args.validate,
            ))
            return
    except ErlmanError as err:
        _fail_with_error(err)

    sink = default_sink()
    if args.kind in ("moduledoc", "all"):
        sink.write(f":{moduledoc.module}", moduledoc.body)
    if args.kind in ("docs", "all"):
        for doc in docs:
            sink.write(f"def :{moduledoc.module}.{doc.name}/{doc.arity}", doc.body)


def cmd_convert(args: argparse.Namespace) -> None:
    """Handle ``erlman convert``: nroff file in, markdown on stdout."""
    source = Path(args.file)
    if not source.is_file():
        _cli_error(
            "Input file not found",
            f"{source} does not exist or is not a file",
            "pass the path of an nroff page such as man3/lists.3",
            "erlman convert --help",
        )
    sys.stdout.write(to_markdown(source.read_text(encoding="utf-8", errors="replace")))


def cmd_manpath(args: argparse.Namespace) -> None:
    """Handle ``erlman manpath``."""
    try:
        print(resolve_manpath(args.config))
    except ErlmanError as err:
        _fail_with_error(err)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="erlman: Erlang man pages as markdown documentation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--manpath", help="Man page root (skips discovery via erl)")
    parser.add_argument("--exports-file", help="JSON export table used instead of a live erl node")
    parser.add_argument("--no-legacy-signature", action="store_true",
                        help="Emit exactly arity placeholders instead of arity + 1")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    # h
    p_h = sub.add_parser("h", help="Show docs for :module or :module.function")
    p_h.add_argument("ref", help="Reference such as :crypto or :crypto.hash")

    # docs
    p_docs = sub.add_parser("docs", help="Extract module docs")
    p_docs.add_argument("module", help="Module name, e.g. crypto")
    p_docs.add_argument("--kind", default="all", choices=["docs", "moduledoc", "all"])
    p_docs.add_argument("--json", action="store_true", help="Print canonical JSON")
    p_docs.add_argument("--validate", action="store_true", help="Validate JSON against the docs schema")

    # convert
    p_conv = sub.add_parser("convert", help="Convert an nroff file to markdown")
    p_conv.add_argument("file", help="Path to nroff page")

    # manpath
    sub.add_parser("manpath", help="Print the man page root")

    args = parser.parse_args()
    try:
        args.config = _config_from_args(args)
    except ValueError as exc:
        _cli_error("Invalid configuration", str(exc), "fix the ERLMAN_* environment variables", "erlman --help")
    _setup_logging(args, args.config)

    if args.command == "h": cmd_h(args)
    elif args.command == "docs": cmd_docs(args)
    elif args.command == "convert": cmd_convert(args)
    elif args.command == "manpath": cmd_manpath(args)

if __name__ == "__main__":
    main()
