"""
stabilized_intrinsics — lint for intrinsics with stabilized replacements
========================================================================

Reports every call whose resolved target is ``intrinsics::<name>`` for a
``<name>`` that has a safer, stable standard-library counterpart, with one
style diagnostic per call site naming that counterpart.

Core modules
------------
table
    The read-only replacement table and ``lookup()``.
matcher
    ``CallSiteMatcher.examine()`` and the ``StabilizedIntrinsicsChecker``.
checkers
    Diagnostic model, checker base class and runner.
ast_helper
    Duck-typed accessors and traversal for call-expression nodes.
nodes
    Concrete syntax tree node classes.
paths
    PEG grammar splitting textual resolved paths into segments.
dump
    JSON AST dump loader.
main
    Command-line driver (``python -m stabilized_intrinsics``).

Quick start
-----------
>>> from stabilized_intrinsics import CallExpr, PathExpr, Span, examine
>>> call = CallExpr(
...     callee=PathExpr("intrinsics::size_of", ("intrinsics", "size_of"), True),
...     span=Span("src/lib.rs", 3, 13),
... )
>>> examine(call).message
'`size_of` is stabilized as `std::mem::size_of`'
"""

from __future__ import annotations

import logging
from typing import List

# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

__version__ = "0.1.0"
__license__ = "MIT"

_log = logging.getLogger(__name__)
_log.addHandler(logging.NullHandler())

from stabilized_intrinsics.errors import (  # noqa: E402
    DumpError,
    IntrinsicsLintError,
    PathSyntaxError,
    TableDefinitionError,
)
from stabilized_intrinsics.table import (  # noqa: E402
    STABILIZED_INTRINSICS,
    ReplacementEntry,
    entries,
    lookup,
)
from stabilized_intrinsics.nodes import (  # noqa: E402
    CallExpr,
    Crate,
    OpaqueExpr,
    PathExpr,
    SourceFile,
    Span,
)
from stabilized_intrinsics.ast_helper import (  # noqa: E402
    CallTarget,
    iter_call_expressions,
    resolved_call_target,
)
from stabilized_intrinsics.checkers import (  # noqa: E402
    Checker,
    CheckerContext,
    CheckerRunner,
    CheckerRunResults,
    Diagnostic,
    DiagnosticSeverity,
    SourceLocation,
)
from stabilized_intrinsics.matcher import (  # noqa: E402
    INTRINSICS_NAMESPACE,
    CallSiteMatcher,
    StabilizedIntrinsicsChecker,
    examine,
)
from stabilized_intrinsics.paths import parse_path, try_parse_path  # noqa: E402
from stabilized_intrinsics.dump import load_dump, load_dumps, loads_dump  # noqa: E402

__all__: List[str] = [
    "__version__",
    # errors
    "IntrinsicsLintError",
    "TableDefinitionError",
    "PathSyntaxError",
    "DumpError",
    # table
    "STABILIZED_INTRINSICS",
    "ReplacementEntry",
    "entries",
    "lookup",
    # nodes
    "CallExpr",
    "Crate",
    "OpaqueExpr",
    "PathExpr",
    "SourceFile",
    "Span",
    # traversal
    "CallTarget",
    "iter_call_expressions",
    "resolved_call_target",
    # checker framework
    "Checker",
    "CheckerContext",
    "CheckerRunner",
    "CheckerRunResults",
    "Diagnostic",
    "DiagnosticSeverity",
    "SourceLocation",
    # matcher
    "INTRINSICS_NAMESPACE",
    "CallSiteMatcher",
    "StabilizedIntrinsicsChecker",
    "examine",
    # paths / dumps
    "parse_path",
    "try_parse_path",
    "load_dump",
    "load_dumps",
    "loads_dump",
]
