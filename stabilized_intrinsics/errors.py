# stabilized_intrinsics/errors.py
"""
Error types for the stabilized-intrinsics lint.

Classification itself never fails: a call that does not match is simply
not reported.  The errors below cover the layers around it.

Error Hierarchy:
────────────────
  IntrinsicsLintError (base)
  ├── TableDefinitionError  - replacement table authored with a duplicate key
  ├── PathSyntaxError       - resolved path text that the path grammar rejects
  └── DumpError             - structurally malformed AST dump
"""

from __future__ import annotations

from typing import Optional


class IntrinsicsLintError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


class TableDefinitionError(IntrinsicsLintError):
    """The replacement table contains the same intrinsic name twice."""

    def __init__(self, name: str, first: str, second: str) -> None:
        super().__init__(
            f"duplicate intrinsic {name!r} in replacement table",
            hint=f"first guidance {first!r}, second guidance {second!r}",
        )
        self.name = name


class PathSyntaxError(IntrinsicsLintError):
    """A textual path could not be split into segments."""

    def __init__(self, text: str, offset: int = 0) -> None:
        super().__init__(f"cannot parse path {text!r} at offset {offset}")
        self.text = text
        self.offset = offset


class DumpError(IntrinsicsLintError):
    """An AST dump does not have the expected structure."""

    def __init__(self, message: str, source: str = "<dump>") -> None:
        super().__init__(f"{source}: {message}")
        self.source = source


__all__ = [
    "IntrinsicsLintError",
    "TableDefinitionError",
    "PathSyntaxError",
    "DumpError",
]
