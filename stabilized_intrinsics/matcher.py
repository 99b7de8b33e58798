#!/usr/bin/env python3
"""
matcher.py — flag calls to intrinsics that have stabilized counterparts.

Detects calls whose resolved target is ``intrinsics::<name>`` where
``<name>`` is listed in the replacement table, e.g.

    // Bad
    let s = intrinsics::size_of::<String>();

    // Good
    let s = std::mem::size_of::<String>();

Each matching call site produces one style diagnostic:

    `size_of` is stabilized as `std::mem::size_of`
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, FrozenSet, List, Mapping, Optional, Tuple

from stabilized_intrinsics.ast_helper import (
    call_span,
    iter_call_expressions,
    resolved_call_target,
)
from stabilized_intrinsics.checkers import (
    Checker,
    CheckerContext,
    Diagnostic,
    DiagnosticSeverity,
)
from stabilized_intrinsics.table import STABILIZED_INTRINSICS

_log = logging.getLogger(__name__)

INTRINSICS_NAMESPACE = "intrinsics"
ERROR_ID = "stabilizedIntrinsics"
CHECKER_NAME = "stabilized-intrinsics"

MESSAGE_TEMPLATE = "`{name}` is stabilized as {guidance}"

EXPLANATION = """\
What it does: Checks for calls to intrinsics that have stable counterparts.

Why is this bad? The stabilized variants often avoid raw pointer types and
similar and often embed the provided functionality into a safer abstraction.

Known problems: None.

Example:
    // Bad
    let s = intrinsics::size_of::<String>();

    // Good
    let s = std::mem::size_of::<String>();
"""


# ─────────────────────────────────────────────────────────────────────────
#  Call-site matcher
# ─────────────────────────────────────────────────────────────────────────

class CallSiteMatcher:
    """
    Classifies a single call expression against the replacement table.

    The matcher holds nothing but a reference to the (read-only) table, so
    one instance can be shared between threads.
    """

    def __init__(self, table: Optional[Mapping[str, str]] = None) -> None:
        self._table = STABILIZED_INTRINSICS if table is None else table

    def match_target(self, target: Any) -> Optional[str]:
        """
        Return the intrinsic name if *target* is ``("intrinsics", name)``
        with ``name`` in the table, else None.
        """
        if not isinstance(target, tuple) or len(target) != 2:
            return None
        namespace, name = target
        if namespace != INTRINSICS_NAMESPACE or not isinstance(name, str):
            return None
        if name not in self._table:
            return None
        return name

    def message_for(self, name: str) -> str:
        return MESSAGE_TEMPLATE.format(name=name, guidance=self._table[name])

    def examine(self, call_expr: Any) -> Optional[Diagnostic]:
        """
        Return a diagnostic for *call_expr*, or None if it does not match.

        Only statically resolved callee paths are considered; anything else
        (function values, closures, unresolved paths) is skipped.
        """
        name = self.match_target(resolved_call_target(call_expr))
        if name is None:
            return None
        span = call_span(call_expr)
        _log.debug("intrinsic %s called at %s", name, span)
        return Diagnostic(
            error_id=ERROR_ID,
            message=self.message_for(name),
            severity=DiagnosticSeverity.STYLE,
            span=span,
            checker_name=CHECKER_NAME,
        )


_DEFAULT_MATCHER = CallSiteMatcher()


def examine(call_expr: Any) -> Optional[Diagnostic]:
    """Module-level shortcut using the built-in table."""
    return _DEFAULT_MATCHER.examine(call_expr)


# ─────────────────────────────────────────────────────────────────────────
#  Checker
# ─────────────────────────────────────────────────────────────────────────

class StabilizedIntrinsicsChecker(Checker):
    """
    Checks for calls to intrinsics with stable counterparts.

    One diagnostic per matching call expression; two calls to the same
    intrinsic give two diagnostics.
    """

    name: ClassVar[str] = CHECKER_NAME
    description: ClassVar[str] = (
        "checks for calls to intrinsics with stable counterparts")
    error_ids: ClassVar[FrozenSet[str]] = frozenset({ERROR_ID})
    default_severity: ClassVar[DiagnosticSeverity] = DiagnosticSeverity.STYLE

    def __init__(self, matcher: Optional[CallSiteMatcher] = None) -> None:
        super().__init__()
        self._matcher = matcher or _DEFAULT_MATCHER
        # (call expression, intrinsic name)
        self._sites: List[Tuple[Any, str]] = []

    def collect_evidence(self, ctx: CheckerContext) -> None:
        examined = 0
        for call in iter_call_expressions(ctx.tree):
            examined += 1
            name = self._matcher.match_target(resolved_call_target(call))
            if name is not None:
                self._sites.append((call, name))
        ctx.stats[f"{self.name}_calls_examined"] = (
            ctx.stats.get(f"{self.name}_calls_examined", 0) + examined)

    def diagnose(self, ctx: CheckerContext) -> None:
        for call, name in self._sites:
            span = call_span(call)
            _log.debug("intrinsic %s called at %s", name, span)
            self._emit(ERROR_ID, self._matcher.message_for(name), span)


__all__ = [
    "INTRINSICS_NAMESPACE",
    "ERROR_ID",
    "CHECKER_NAME",
    "MESSAGE_TEMPLATE",
    "EXPLANATION",
    "CallSiteMatcher",
    "examine",
    "StabilizedIntrinsicsChecker",
]
