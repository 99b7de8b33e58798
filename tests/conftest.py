# tests/conftest.py
"""
Shared fixtures and mock syntax-tree nodes.

The mocks only carry the attributes the lint reads, the way a host
front-end's own node classes would.
"""

import json
import logging

import pytest


class MockSpan:
    def __init__(self, file="src/lib.rs", line=1, column=1):
        self.file = file
        self.line = line
        self.column = column

    def __repr__(self):
        return f"MockSpan({self.file}:{self.line}:{self.column})"


class MockPath:
    def __init__(self, segments=None, resolved=True):
        self.segments = segments
        self.resolved = resolved


class MockLocal:
    """A callee that is a local variable holding a function value."""

    def __init__(self, name):
        self.name = name


class MockCall:
    def __init__(self, callee, args=(), span=None):
        self.callee = callee
        self.args = list(args)
        self.span = span if span is not None else MockSpan()


def make_call(segments, line=1, column=1, resolved=True, file="src/lib.rs",
              args=()):
    """Call expression whose callee resolves to *segments*."""
    return MockCall(
        MockPath(list(segments) if segments is not None else None, resolved),
        args=args,
        span=MockSpan(file, line, column),
    )


# ── Dump fixtures ────────────────────────────────────────────────

SAMPLE_DUMP = {
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
                    "args": [],
                },
                {
                    "kind": "call",
                    "span": {"line": 4, "column": 5},
                    "callee": {"kind": "path", "path": "std::mem::size_of::<u8>"},
                    "args": [
                        {
                            "kind": "call",
                            "span": {"line": 4, "column": 20},
                            "callee": {"kind": "path",
                                       "segments": ["intrinsics", "transmute"]},
                            "args": [{"kind": "local", "text": "x"}],
                        }
                    ],
                },
                {
                    "kind": "call",
                    "span": {"line": 7, "column": 5},
                    "callee": {"kind": "local", "text": "f"},
                    "args": [],
                },
            ],
        },
        {
            "path": "src/other.rs",
            "exprs": [
                {
                    "kind": "call",
                    "span": {"line": 1, "column": 1},
                    "callee": {"kind": "path", "path": "intrinsics::frobnicate"},
                },
                {
                    "kind": "call",
                    "span": {"line": 2, "column": 1},
                    "callee": {"kind": "path", "path": "intrinsics::atomic_load",
                               "resolved": False},
                },
            ],
        },
    ],
}


@pytest.fixture
def sample_dump():
    return json.loads(json.dumps(SAMPLE_DUMP))


@pytest.fixture
def sample_dump_file(tmp_path):
    path = tmp_path / "demo.json"
    path.write_text(json.dumps(SAMPLE_DUMP), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_cli_logging():
    """Drop the stderr handler the CLI installs so it can't outlive capsys."""
    yield
    from stabilized_intrinsics import main as cli

    root = logging.getLogger("stabilized_intrinsics")
    if cli._handler is not None:
        root.removeHandler(cli._handler)
        cli._handler = None
    root.setLevel(logging.NOTSET)
