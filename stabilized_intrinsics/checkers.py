"""
stabilized_intrinsics/checkers.py
═════════════════════════════════

Checker framework: diagnostic model, checker base class and runner.

Architecture
────────────

  ┌─────────────────────────────────────────────────────────┐
  │                   CheckerRunner                         │
  │  ┌─────────────────────────────────────────────────┐    │
  │  │        StabilizedIntrinsicsChecker (matcher.py) │    │
  │  └──────────────────────┬──────────────────────────┘    │
  │                         │                               │
  │  ┌──────────────────────▼──────────────────────────┐    │
  │  │     Call-expression traversal (ast_helper.py)   │    │
  │  └──────────────────────┬──────────────────────────┘    │
  │                         │                               │
  │  ┌──────────────────────▼──────────────────────────┐    │
  │  │     Diagnostic Formatter (JSON / gcc / summary) │    │
  │  └─────────────────────────────────────────────────┘    │
  └─────────────────────────────────────────────────────────┘

Each Checker follows a four-phase lifecycle:

  1. **configure()**        — read options
  2. **collect_evidence()** — walk the tree, gather matching sites
  3. **diagnose()**         — turn evidence into diagnostics
  4. **report()**           — return the diagnostics

License: MIT
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    ClassVar,
    Dict,
    FrozenSet,
    List,
    Optional,
    Sequence,
    Type,
)

_log = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 — DIAGNOSTIC MODEL
# ═════════════════════════════════════════════════════════════════════════

class DiagnosticSeverity(Enum):
    """cppcheck-compatible severity levels."""
    ERROR = "error"
    WARNING = "warning"
    STYLE = "style"
    PERFORMANCE = "performance"
    PORTABILITY = "portability"
    INFORMATION = "information"


@dataclass(frozen=True)
class SourceLocation:
    """A specific point in source code."""
    file: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        if self.column:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}:{self.line}"


def _span_loc(span: Any) -> SourceLocation:
    """Read file/line/column off an opaque span, defaulting to empty."""
    file = getattr(span, "file", "")
    line = getattr(span, "line", 0)
    column = getattr(span, "column", 0)
    return SourceLocation(
        file=file if isinstance(file, str) else "",
        line=line if isinstance(line, int) else 0,
        column=column if isinstance(column, int) else 0,
    )


@dataclass(frozen=True)
class Diagnostic:
    """
    A single diagnostic finding.

    Attributes
    ----------
    error_id     : Unique identifier (e.g., "stabilizedIntrinsics")
    message      : Human-readable description
    severity     : DiagnosticSeverity
    span         : Source span of the offending expression, passed through
                   from the syntax tree untouched
    checker_name : Name of the checker that produced this
    addon        : Addon name for the JSON output protocol
    extra        : Additional context string
    """
    error_id: str
    message: str
    severity: DiagnosticSeverity
    span: Any = None
    checker_name: str = ""
    addon: str = "stabilized-intrinsics"
    extra: str = ""

    @property
    def location(self) -> SourceLocation:
        return _span_loc(self.span)

    def to_cppcheck_json(self) -> Dict[str, Any]:
        """Serialize to cppcheck's JSON addon output format."""
        loc = self.location
        return {
            "file": loc.file,
            "linenr": loc.line,
            "column": loc.column,
            "severity": self.severity.value,
            "message": self.message,
            "addon": self.addon,
            "errorId": self.error_id,
            "extra": self.extra,
        }

    def to_json_str(self) -> str:
        """Single-line JSON string."""
        return json.dumps(self.to_cppcheck_json())

    def to_gcc_format(self) -> str:
        """GCC-style diagnostic string: file:line:col: severity: message."""
        sev = self.severity.value
        return f"{self.location}: {sev}: {self.message} [{self.error_id}]"


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 — CHECKER BASE CLASS
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class CheckerContext:
    """
    Shared context passed to every checker during execution.

    Attributes
    ----------
    tree    : crate, source file, or iterable of expressions to check
    options : user-provided options dict
    stats   : mutable dict for timing / counting statistics
    """
    tree: Any
    options: Dict[str, Any] = field(default_factory=dict)
    stats: Dict[str, Any] = field(default_factory=dict)


class Checker(ABC):
    """
    Abstract base class for all checkers.

    Subclass Contract
    ─────────────────
      - Override ``name``, ``description``, ``error_ids``
      - Implement ``collect_evidence()`` and ``diagnose()``
      - Optionally override ``configure()`` for custom setup
    """

    name: ClassVar[str] = "base-checker"
    description: ClassVar[str] = ""
    error_ids: ClassVar[FrozenSet[str]] = frozenset()
    default_severity: ClassVar[DiagnosticSeverity] = DiagnosticSeverity.WARNING

    def __init__(self) -> None:
        self._diagnostics: List[Diagnostic] = []

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def configure(self, ctx: CheckerContext) -> None:
        """Called before evidence collection.  Default does nothing."""
        pass

    @abstractmethod
    def collect_evidence(self, ctx: CheckerContext) -> None:
        ...

    @abstractmethod
    def diagnose(self, ctx: CheckerContext) -> None:
        """Append diagnostics to ``self._diagnostics``."""
        ...

    def report(self, ctx: CheckerContext) -> List[Diagnostic]:
        return list(self._diagnostics)

    def _emit(
        self,
        error_id: str,
        message: str,
        span: Any,
        severity: Optional[DiagnosticSeverity] = None,
        extra: str = "",
    ) -> None:
        """Helper to create and store a diagnostic."""
        self._diagnostics.append(Diagnostic(
            error_id=error_id,
            message=message,
            severity=severity or self.default_severity,
            span=span,
            checker_name=self.name,
            extra=extra,
        ))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.name}'>"


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 — CHECKER RUNNER
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class CheckerRunResults:
    """
    Aggregate results from running a suite of checkers.

    Attributes
    ----------
    diagnostics            : All diagnostics from all checkers
    diagnostics_by_checker : Diagnostics grouped by checker name
    stats                  : Timing and counting statistics
    checker_names          : Names of checkers that were run
    """
    diagnostics: List[Diagnostic] = field(default_factory=list)
    diagnostics_by_checker: Dict[str, List[Diagnostic]] = field(
        default_factory=lambda: defaultdict(list)
    )
    stats: Dict[str, Any] = field(default_factory=dict)
    checker_names: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.by_severity(DiagnosticSeverity.ERROR))

    @property
    def style_count(self) -> int:
        return len(self.by_severity(DiagnosticSeverity.STYLE))

    @property
    def total_count(self) -> int:
        return len(self.diagnostics)

    def by_severity(self, severity: DiagnosticSeverity) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]

    def by_file(self, file: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.location.file == file]

    def merge(self, other: "CheckerRunResults") -> None:
        """Fold the results of another run into this one."""
        self.diagnostics.extend(other.diagnostics)
        for name, diags in other.diagnostics_by_checker.items():
            self.diagnostics_by_checker[name].extend(diags)
        for key, val in other.stats.items():
            self.stats[key] = self.stats.get(key, 0) + val
        for name in other.checker_names:
            if name not in self.checker_names:
                self.checker_names.append(name)

    def to_json_lines(self) -> str:
        return "\n".join(d.to_json_str() for d in self.diagnostics)

    def to_gcc_format(self) -> str:
        return "\n".join(d.to_gcc_format() for d in self.diagnostics)

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Checker run complete: {self.total_count} diagnostics "
            f"({self.error_count} errors, {self.style_count} style)",
        ]
        for name in self.checker_names:
            count = len(self.diagnostics_by_checker.get(name, []))
            elapsed = self.stats.get(f"{name}_elapsed_ms", 0)
            lines.append(f"  {name}: {count} findings ({elapsed:.1f}ms)")
        return "\n".join(lines)


class CheckerRunner:
    """
    Runs a suite of checkers against a syntax tree.

    Usage
    -----
    >>> runner = CheckerRunner([StabilizedIntrinsicsChecker])
    >>> results = runner.run(crate)
    >>> print(results.summary())
    """

    def __init__(
        self,
        checkers: Sequence[Type[Checker]],
        options: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.checkers = list(checkers)
        self.options = options or {}

    def run(self, tree: Any) -> CheckerRunResults:
        results = CheckerRunResults()
        ctx = CheckerContext(tree=tree, options=self.options)

        for cls in self.checkers:
            checker = cls()
            checker_name = cls.name
            results.checker_names.append(checker_name)

            t0 = time.monotonic()
            try:
                checker.configure(ctx)
                checker.collect_evidence(ctx)
                checker.diagnose(ctx)
                diags = checker.report(ctx)
            except Exception as exc:
                # Graceful degradation: report the failure, don't crash
                _log.exception("checker %s failed", checker_name)
                diags = [Diagnostic(
                    error_id="checkerInternalError",
                    message=f"Checker '{checker_name}' failed: {exc}",
                    severity=DiagnosticSeverity.INFORMATION,
                    checker_name=checker_name,
                )]
            elapsed_ms = (time.monotonic() - t0) * 1000.0

            results.diagnostics.extend(diags)
            results.diagnostics_by_checker[checker_name] = diags
            results.stats[f"{checker_name}_elapsed_ms"] = elapsed_ms

        results.stats.update(ctx.stats)
        return results

    def run_many(self, trees: Sequence[Any]) -> CheckerRunResults:
        """Run the checkers over several trees and combine the results."""
        combined = CheckerRunResults()
        for tree in trees:
            combined.merge(self.run(tree))
        return combined


__all__ = [
    # Diagnostic model
    "Diagnostic",
    "DiagnosticSeverity",
    "SourceLocation",
    # Checker framework
    "Checker",
    "CheckerContext",
    # Runner
    "CheckerRunner",
    "CheckerRunResults",
]
