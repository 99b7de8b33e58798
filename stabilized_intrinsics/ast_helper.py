#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
stabilized_intrinsics/ast_helper.py
═══════════════════════════════════

Read-only accessors and traversal for call-expression nodes.

The lint works on whatever tree the host front-end hands over.  Rather than
requiring the classes from ``stabilized_intrinsics.nodes``, every accessor
here reads attributes with ``getattr`` and falls back to a neutral value, so
any object with the same attribute names (including test doubles) works:

    ┌─────────────────────────────────────────────────────────────────┐
    │  Call expression                                                │
    │    • span      source range of the whole call                   │
    │    • callee    expression being called                          │
    │    • args      argument expressions                             │
    ├─────────────────────────────────────────────────────────────────┤
    │  Callee (path expression)                                       │
    │    • resolved  True when name resolution succeeded statically   │
    │    • segments  fully-qualified path, e.g. ("intrinsics", "x")   │
    └─────────────────────────────────────────────────────────────────┘

Design Principles
─────────────────
1. **Non-invasive**: nodes are never modified.

2. **Defensive**: malformed or partial nodes yield None / empty iterators
   instead of raising.

3. **Resolved only**: a callee counts as a path only when the resolver said
   so.  Textual names are never used to guess a target.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Iterator, Optional, Tuple

CallTarget = Tuple[str, ...]


# ═════════════════════════════════════════════════════════════════════════
#  NODE ACCESSORS
# ═════════════════════════════════════════════════════════════════════════

def call_span(node: Any) -> Any:
    """Span of a call expression, or None."""
    return getattr(node, "span", None)


def callee_of(node: Any) -> Any:
    """The callee expression of a call, or None."""
    return getattr(node, "callee", None)


def _expr_seq(node: Any, attr: str) -> Tuple[Any, ...]:
    items = getattr(node, attr, None)
    if not items or isinstance(items, (str, bytes)):
        return ()
    try:
        return tuple(items)
    except TypeError:
        return ()


def call_args(node: Any) -> Tuple[Any, ...]:
    return _expr_seq(node, "args")


def is_call_expression(node: Any) -> bool:
    """True if *node* looks like a call expression (it has a callee)."""
    return node is not None and callee_of(node) is not None


def resolved_call_target(node: Any) -> Optional[CallTarget]:
    """
    Return the resolved path of a call's callee as a tuple of segments.

    Returns None unless the callee is a statically resolved path whose
    segments are all strings.  Function-pointer values, closures, method
    calls and unresolved or ambiguous paths all yield None.
    """
    callee = callee_of(node)
    if callee is None:
        return None
    if getattr(callee, "resolved", False) is not True:
        return None
    segments = getattr(callee, "segments", None)
    if segments is None or isinstance(segments, (str, bytes)):
        return None
    try:
        target = tuple(segments)
    except TypeError:
        return None
    if not all(isinstance(seg, str) for seg in target):
        return None
    return target


# ═════════════════════════════════════════════════════════════════════════
#  TRAVERSAL
# ═════════════════════════════════════════════════════════════════════════

def _children(node: Any) -> Tuple[Any, ...]:
    """
    Direct sub-expressions of *node* that may contain calls: the callee and
    arguments of a call, and the ``children`` of any other expression.
    """
    out = []
    callee = callee_of(node)
    if callee is not None:
        out.append(callee)
    out.extend(call_args(node))
    out.extend(_expr_seq(node, "children"))
    return tuple(out)


def iter_expr_preorder(root: Any) -> Iterator[Any]:
    """Pre-order iteration over an expression and its sub-expressions."""
    if root is None:
        return
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(_children(node)))


def iter_roots(tree: Any) -> Iterator[Any]:
    """
    Top-level expressions of *tree*.

    Accepts a crate (``.files``), a source file (``.exprs``), a plain
    iterable of expressions, or a single expression.
    """
    if tree is None:
        return
    queue = deque([tree])
    while queue:
        item = queue.popleft()
        files = getattr(item, "files", None)
        exprs = getattr(item, "exprs", None)
        if files is not None:
            queue.extend(files)
        elif exprs is not None:
            queue.extend(exprs)
        elif isinstance(item, (list, tuple)):
            queue.extend(item)
        else:
            yield item


def iter_call_expressions(tree: Any) -> Iterator[Any]:
    """
    Every call expression in *tree*, including calls nested in arguments
    and inside non-call expressions (blocks, method calls, closures, ...).
    """
    for root in iter_roots(tree):
        for node in iter_expr_preorder(root):
            if is_call_expression(node):
                yield node


__all__ = [
    "CallTarget",
    "call_span",
    "callee_of",
    "call_args",
    "is_call_expression",
    "resolved_call_target",
    "iter_expr_preorder",
    "iter_roots",
    "iter_call_expressions",
]
