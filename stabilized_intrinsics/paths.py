# stabilized_intrinsics/paths.py
"""
Parsing of textual resolved paths.

Front-ends usually print a resolved callee as text, for example
``intrinsics::size_of::<String>`` or ``::core::intrinsics::transmute``.
This module splits such text into its segments.  Generic arguments are
dropped and raw identifiers lose their ``r#`` prefix, so both of the
examples above yield plain name tuples.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from parsimonious.exceptions import ParseError
from parsimonious.grammar import Grammar
from parsimonious.nodes import NodeVisitor

from stabilized_intrinsics.errors import PathSyntaxError

_log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  PATH GRAMMAR (Parsimonious PEG)
# ═══════════════════════════════════════════════════════════════════

PATH_GRAMMAR = Grammar(r'''
    path            = _ leading_sep? segment (sep segment)* _

    leading_sep     = "::" _
    sep             = _ "::" _
    segment         = identifier generic_args?

    # turbofish or plain generic arguments, possibly nested
    generic_args    = _ "::"? _ "<" generic_body ">"
    generic_body    = (generic_text / nested_generic)*
    nested_generic  = "<" generic_body ">"
    generic_text    = ~r"[^<>]+"

    identifier      = ~r"(r#)?[A-Za-z_][A-Za-z0-9_]*"
    _               = ~r"\s*"
''')


class _Segment(str):
    """Marker type for visited identifiers."""


class _PathBuilder(NodeVisitor):
    """Collects identifier segments, skipping generic arguments."""

    def generic_visit(self, node, visited_children):
        return visited_children

    def visit_path(self, node, visited_children):
        return tuple(str(seg) for seg in _flatten(visited_children))

    def visit_generic_args(self, node, visited_children):
        return []

    def visit_identifier(self, node, visited_children):
        text = node.text
        if text.startswith("r#"):
            text = text[2:]
        return _Segment(text)


def _flatten(items) -> List[_Segment]:
    out: List[_Segment] = []
    stack = [items]
    while stack:
        item = stack.pop()
        if isinstance(item, _Segment):
            out.append(item)
        elif isinstance(item, list):
            stack.extend(reversed(item))
    return out


def parse_path(text: str) -> Tuple[str, ...]:
    """
    Split a textual path into segments.

    >>> parse_path("intrinsics::size_of::<String>")
    ('intrinsics', 'size_of')

    Raises PathSyntaxError if *text* is not a path.
    """
    try:
        tree = PATH_GRAMMAR.parse(text)
    except ParseError as exc:
        raise PathSyntaxError(text, exc.pos) from exc
    return _PathBuilder().visit(tree)


def try_parse_path(text: str) -> Optional[Tuple[str, ...]]:
    """Like parse_path(), but returns None for unparseable text."""
    if not isinstance(text, str):
        return None
    try:
        return parse_path(text)
    except PathSyntaxError as exc:
        _log.debug("%s", exc)
        return None


def format_path(segments: Tuple[str, ...]) -> str:
    return "::".join(segments)


__all__ = [
    "PATH_GRAMMAR",
    "parse_path",
    "try_parse_path",
    "format_path",
]
