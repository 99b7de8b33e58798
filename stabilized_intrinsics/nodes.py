# stabilized_intrinsics/nodes.py
"""
Syntax tree nodes consumed by the lint.

Parsing and name resolution happen in the host front-end; these classes only
hold what it hands over.  Every node carries a source span for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


# ── Source Span ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Span:
    """Source range of an expression."""
    file: str = "<unknown>"
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self):
        if self.column:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}:{self.line}"


# ── Expressions ─────────────────────────────────────────────────

@dataclass
class PathExpr:
    """
    A path used as an expression, e.g. the callee of ``intrinsics::size_of()``.

    ``segments`` is filled in only when the resolver produced a fully
    qualified path; ``resolved`` is False for type-relative or ambiguous
    paths.
    """
    text: str
    segments: Optional[Tuple[str, ...]] = None
    resolved: bool = False
    span: Span = field(default_factory=Span)


@dataclass
class OpaqueExpr:
    """
    Any expression the lint does not classify (locals, closures, blocks,
    method calls, ...).  ``children`` holds its sub-expressions so calls
    nested inside it are still visited.
    """
    kind: str
    text: str = ""
    span: Span = field(default_factory=Span)
    children: List["Expr"] = field(default_factory=list)


@dataclass
class CallExpr:
    """A call expression: ``callee(args...)``."""
    callee: "Expr"
    args: List["Expr"] = field(default_factory=list)
    span: Span = field(default_factory=Span)


Expr = Union[CallExpr, PathExpr, OpaqueExpr]


# ── Containers ──────────────────────────────────────────────────

@dataclass
class SourceFile:
    path: str
    exprs: List[Expr] = field(default_factory=list)


@dataclass
class Crate:
    name: str = ""
    files: List[SourceFile] = field(default_factory=list)
