#!/usr/bin/env python3
"""
stabilized_intrinsics/main.py
=============================

Command-line driver: run the stabilized-intrinsics checker over AST dumps.

Usage
-----
    python -m stabilized_intrinsics [options] DUMP [DUMP ...]
    python -m stabilized_intrinsics --list-intrinsics
    python -m stabilized_intrinsics --explain

Exit codes
----------
    0   no findings, or findings without ``--error-exitcode``
    N   at least one finding and ``--error-exitcode N`` was given
    2   a dump file is missing or malformed, or the output cannot be written
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO

from stabilized_intrinsics import __version__
from stabilized_intrinsics.checkers import CheckerRunner, CheckerRunResults
from stabilized_intrinsics.dump import load_dumps
from stabilized_intrinsics.errors import DumpError
from stabilized_intrinsics.matcher import EXPLANATION, StabilizedIntrinsicsChecker
from stabilized_intrinsics.table import entries

_log = logging.getLogger("stabilized_intrinsics")
_handler: Optional[logging.Handler] = None

# Exit codes ----------------------------------------------------------------

EXIT_OK: int = 0
EXIT_INFRA: int = 2


# ===========================================================================
# Utility helpers
# ===========================================================================

def _configure_logging(verbosity: int) -> None:
    """Set up the ``stabilized_intrinsics`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    global _handler
    root = logging.getLogger("stabilized_intrinsics")
    root.setLevel(level)
    # one handler per process, bound to the current stderr
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(_handler)


def _open_output(dest: Optional[str]) -> TextIO:
    """``None`` or ``"-"`` → ``sys.stdout``; otherwise open *dest* for writing."""
    if dest is None or dest == "-":
        return sys.stdout
    p = Path(dest).expanduser().resolve()
    p.parent.mkdir(parents=True, exist_ok=True)
    return open(p, "w", encoding="utf-8")


def _format_results(results: CheckerRunResults, output: str) -> str:
    if output == "gcc":
        return results.to_gcc_format()
    if output == "summary":
        return results.summary()
    return results.to_json_lines()


def _list_intrinsics(out: TextIO) -> None:
    rows = entries()
    width = max(len(row.intrinsic_name) for row in rows)
    for row in rows:
        out.write(f"  {row.intrinsic_name:{width}s}  {row.guidance}\n")


# ===========================================================================
# Driver
# ===========================================================================

def run_addon(
    dump_files: Sequence[str],
    output: str = "json",
    output_file: Optional[str] = None,
    error_exitcode: int = 0,
) -> int:
    """
    Run the checker over each dump and write the diagnostics.

    Parameters
    ----------
    dump_files     : paths of JSON AST dumps
    output         : "json" (one object per line), "gcc" or "summary"
    output_file    : where to write; None or "-" for stdout
    error_exitcode : exit code to return when anything was reported

    Returns
    -------
    Exit code.
    """
    options: Dict[str, Any] = {"output": output, "error_exitcode": error_exitcode}
    runner = CheckerRunner([StabilizedIntrinsicsChecker], options=options)

    try:
        crates = load_dumps(dump_files)
    except DumpError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA

    results = runner.run_many(crates)
    _log.info("%d dump(s) checked, %d finding(s)",
              len(crates), results.total_count)

    text = _format_results(results, output)
    try:
        out = _open_output(output_file)
    except OSError as exc:
        _log.error("cannot open output %s: %s", output_file, exc.strerror or exc)
        return EXIT_INFRA
    try:
        if text:
            out.write(text + "\n")
    finally:
        if out is not sys.stdout:
            out.close()

    if results.total_count and error_exitcode:
        return error_exitcode
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stabilized-intrinsics",
        description="Report calls to intrinsics that have stabilized replacements.",
    )
    parser.add_argument("dump_files", nargs="*", metavar="DUMP",
                        help="JSON AST dump(s) to check")
    parser.add_argument(
        "--output", choices=["json", "gcc", "summary"], default="json",
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--output-file", default=None, metavar="PATH",
        help="Write diagnostics to PATH instead of stdout",
    )
    parser.add_argument(
        "--error-exitcode", type=int, default=0, metavar="N",
        help="Exit with N when at least one diagnostic is reported",
    )
    parser.add_argument(
        "--list-intrinsics", action="store_true",
        help="List flagged intrinsics and their replacements, then exit",
    )
    parser.add_argument(
        "--explain", action="store_true",
        help="Describe the check, then exit",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (repeatable)")
    parser.add_argument("--version", action="version",
                        version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI.  ``argv`` of None means ``sys.argv[1:]``."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)

    if args.explain:
        sys.stdout.write(EXPLANATION)
        return EXIT_OK
    if args.list_intrinsics:
        _list_intrinsics(sys.stdout)
        return EXIT_OK
    if not args.dump_files:
        parser.print_usage(sys.stderr)
        _log.error("no dump files given")
        return EXIT_INFRA

    try:
        return run_addon(
            args.dump_files,
            output=args.output,
            output_file=args.output_file,
            error_exitcode=args.error_exitcode,
        )
    except KeyboardInterrupt:
        _log.info("Interrupted by user.")
        return 130


__all__: List[str] = ["main", "run_addon"]
