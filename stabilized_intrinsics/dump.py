# stabilized_intrinsics/dump.py
"""
Loader for AST dumps written by a host front-end.

A dump is a JSON document::

    {
      "version": 1,
      "crate": "demo",
      "files": [
        {
          "path": "src/lib.rs",
          "exprs": [
            {
              "kind": "call",
              "span": {"line": 3, "column": 13, "end_line": 3, "end_column": 45},
              "callee": {"kind": "path", "path": "intrinsics::size_of::<String>"},
              "args": []
            }
          ]
        }
      ]
    }

Callees of kind ``path`` carry either ``"path"`` text or a ``"segments"``
list, plus ``"resolved"`` (default true).  Every other expression kind is
kept as an opaque node whose sub-expressions are read from the keys in
``CHILD_KEYS`` (each an expression object or a list of them), so calls
nested in blocks, method calls, closures or operators are still checked::

    {"kind": "method_call", "text": "v.push",
     "receiver": {"kind": "local", "text": "v"},
     "args": [{"kind": "call", ...}]}

Spans inherit the file path of their source file.  Span positions must be
integers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from stabilized_intrinsics.errors import DumpError
from stabilized_intrinsics.nodes import (
    CallExpr,
    Crate,
    Expr,
    OpaqueExpr,
    PathExpr,
    SourceFile,
    Span,
)
from stabilized_intrinsics.paths import format_path, try_parse_path

_log = logging.getLogger(__name__)

DUMP_VERSION = 1

# Keys holding the sub-expressions of a non-call expression, in source order.
CHILD_KEYS = (
    "receiver", "lhs", "init", "cond", "expr", "args", "exprs", "rhs",
    "then", "else", "body",
)

_SPAN_FIELDS = ("line", "column", "end_line", "end_column")


class _DumpReader:
    """Builds nodes from decoded JSON, tracking where errors occur."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.skipped_paths = 0

    def fail(self, message: str) -> DumpError:
        return DumpError(message, source=self.source)

    # ── top level ───────────────────────────────────────────────────

    def crate(self, data: Any) -> Crate:
        if not isinstance(data, dict):
            raise self.fail("top-level value must be an object")
        version = data.get("version", DUMP_VERSION)
        if version != DUMP_VERSION:
            raise self.fail(f"unsupported dump version {version!r}")
        files = data.get("files", [])
        if not isinstance(files, list):
            raise self.fail("'files' must be a list")
        crate = Crate(name=str(data.get("crate", "")))
        for index, entry in enumerate(files):
            crate.files.append(self.source_file(entry, index))
        return crate

    def source_file(self, data: Any, index: int) -> SourceFile:
        if not isinstance(data, dict):
            raise self.fail(f"files[{index}] must be an object")
        path = data.get("path")
        if not isinstance(path, str):
            raise self.fail(f"files[{index}] has no 'path'")
        exprs = data.get("exprs", [])
        if not isinstance(exprs, list):
            raise self.fail(f"{path}: 'exprs' must be a list")
        return SourceFile(path=path, exprs=[self.expr(e, path) for e in exprs])

    # ── expressions ─────────────────────────────────────────────────

    def span(self, data: Any, file: str) -> Span:
        if data is None:
            return Span(file=file)
        if not isinstance(data, dict):
            raise self.fail(f"{file}: span must be an object")
        positions: Dict[str, int] = {}
        for key in _SPAN_FIELDS:
            value = data.get(key, 0)
            # bool is an int subclass
            if isinstance(value, bool) or not isinstance(value, int):
                raise self.fail(f"{file}: bad span {data!r}")
            positions[key] = value
        return Span(file=str(data.get("file", file)), **positions)

    def expr(self, data: Any, file: str) -> Expr:
        if not isinstance(data, dict) or not isinstance(data.get("kind"), str):
            raise self.fail(f"{file}: expression must be an object with a 'kind'")
        kind = data["kind"]
        span = self.span(data.get("span"), file)
        if kind == "call":
            if "callee" not in data:
                raise self.fail(f"{file}:{span.line}: call without 'callee'")
            args = data.get("args", [])
            if not isinstance(args, list):
                raise self.fail(f"{file}:{span.line}: 'args' must be a list")
            return CallExpr(
                callee=self.expr(data["callee"], file),
                args=[self.expr(a, file) for a in args],
                span=span,
            )
        if kind == "path":
            return self.path(data, span)
        return OpaqueExpr(
            kind=kind,
            text=str(data.get("text", "")),
            span=span,
            children=self.children(data, file, span),
        )

    def children(self, data: Dict[str, Any], file: str, span: Span) -> List[Expr]:
        out: List[Expr] = []
        for key in CHILD_KEYS:
            value = data.get(key)
            if value is None:
                continue
            if isinstance(value, dict):
                out.append(self.expr(value, file))
            elif isinstance(value, list):
                out.extend(self.expr(v, file) for v in value)
            else:
                raise self.fail(
                    f"{file}:{span.line}: '{key}' must be an expression or a list")
        return out

    def path(self, data: Dict[str, Any], span: Span) -> PathExpr:
        resolved = data.get("resolved", True) is True
        raw_segments = data.get("segments")
        text = data.get("path")

        segments: Optional[Tuple[str, ...]] = None
        if isinstance(raw_segments, list) and all(
                isinstance(s, str) for s in raw_segments):
            segments = tuple(raw_segments)
        elif isinstance(text, str):
            segments = try_parse_path(text)
            if segments is None and resolved:
                # Without segments the callee cannot be matched; treat it
                # as unresolved rather than guessing from the text.
                _log.warning("%s: skipping unparsable path %r", span, text)
                self.skipped_paths += 1
        if segments is None:
            resolved = False
        if not isinstance(text, str):
            text = format_path(segments) if segments else ""
        return PathExpr(text=text, segments=segments, resolved=resolved, span=span)


def load_dump_data(data: Any, source: str = "<dump>") -> Crate:
    """Build a Crate from an already-decoded JSON value."""
    reader = _DumpReader(source)
    crate = reader.crate(data)
    _log.debug("%s: loaded %d files (%d unparsable paths)",
               source, len(crate.files), reader.skipped_paths)
    return crate


def loads_dump(text: str, source: str = "<dump>") -> Crate:
    """Parse a dump from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DumpError(f"invalid JSON: {exc}", source=source) from exc
    return load_dump_data(data, source=source)


def load_dump(path: Union[str, Path]) -> Crate:
    """Read and parse a dump file."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise DumpError(f"cannot read dump: {exc.strerror}", source=str(p)) from exc
    return loads_dump(text, source=str(p))


def load_dumps(paths: Sequence[Union[str, Path]]) -> List[Crate]:
    """Read several dump files, stopping at the first bad one."""
    return [load_dump(p) for p in paths]


__all__ = [
    "DUMP_VERSION",
    "CHILD_KEYS",
    "load_dump_data",
    "loads_dump",
    "load_dump",
    "load_dumps",
]
