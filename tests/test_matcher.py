# tests/test_matcher.py
"""
Tests for the call-site matcher: path shape, table lookup, message text,
and the behaviour on calls it must ignore.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from stabilized_intrinsics.checkers import Diagnostic, DiagnosticSeverity
from stabilized_intrinsics.matcher import (
    ERROR_ID,
    CallSiteMatcher,
    examine,
)
from stabilized_intrinsics.table import entries, lookup
from tests.conftest import MockCall, MockLocal, MockPath, MockSpan, make_call

ALL_NAMES = [row.intrinsic_name for row in entries()]


class TestScenarios:

    def test_atomic_load(self):
        diag = examine(make_call(["intrinsics", "atomic_load"]))
        assert diag is not None
        assert diag.message == (
            "`atomic_load` is stabilized as `load` on std::sync::atomic types")

    def test_size_of(self):
        diag = examine(make_call(["intrinsics", "size_of"]))
        assert diag.message == "`size_of` is stabilized as `std::mem::size_of`"

    def test_unlisted_intrinsic(self):
        assert examine(make_call(["intrinsics", "frobnicate"])) is None

    def test_call_through_local_variable(self):
        # `let f = intrinsics::transmute; f(x)`: the callee is a value.
        call = MockCall(MockLocal("f"), args=[MockLocal("x")])
        assert examine(call) is None

    def test_two_call_sites_same_intrinsic(self):
        first = make_call(["intrinsics", "transmute"], line=3)
        second = make_call(["intrinsics", "transmute"], line=9)
        d1, d2 = examine(first), examine(second)
        assert d1.message == d2.message
        assert d1.span is first.span
        assert d2.span is second.span
        assert d1.span is not d2.span


class TestMatchProperties:

    @pytest.mark.parametrize("name", ALL_NAMES)
    def test_every_entry_matches(self, name):
        diag = examine(make_call(["intrinsics", name]))
        assert diag is not None
        assert diag.message == f"`{name}` is stabilized as {lookup(name)}"

    @pytest.mark.parametrize("name", ["size_of", "atomic_load", "transmute"])
    def test_wrong_namespace(self, name):
        assert examine(make_call(["not_intrinsics", name])) is None
        assert examine(make_call(["mem", name])) is None

    @pytest.mark.parametrize("segments", [
        ["size_of"],
        ["core", "intrinsics", "size_of"],
        ["std", "intrinsics", "size_of"],
        ["intrinsics", "size_of", "extra"],
        ["intrinsics"],
        [],
    ])
    def test_wrong_arity(self, segments):
        assert examine(make_call(segments)) is None

    def test_unresolved_path(self):
        call = make_call(["intrinsics", "size_of"], resolved=False)
        assert examine(call) is None

    def test_resolved_flag_must_be_true(self):
        call = make_call(["intrinsics", "size_of"], resolved="yes")
        assert examine(call) is None

    def test_missing_segments(self):
        assert examine(make_call(None)) is None


class TestDiagnosticShape:

    def test_fields(self):
        call = make_call(["intrinsics", "size_of"], line=12, column=7,
                         file="src/main.rs")
        diag = examine(call)
        assert diag.severity is DiagnosticSeverity.STYLE
        assert diag.error_id == ERROR_ID
        assert diag.checker_name == "stabilized-intrinsics"
        assert diag.span is call.span
        assert str(diag.location) == "src/main.rs:12:7"

    def test_guidance_not_reformatted(self):
        table = {"odd": "`a`  <b> & \"c\"\n"}
        diag = CallSiteMatcher(table).examine(make_call(["intrinsics", "odd"]))
        assert diag.message == "`odd` is stabilized as `a`  <b> & \"c\"\n"

    def test_idempotent(self):
        call = make_call(["intrinsics", "transmute"], line=5)
        d1, d2 = examine(call), examine(call)
        assert d1 == d2
        assert d1.message == d2.message
        assert d1.span is d2.span


class TestMalformedInput:

    @pytest.mark.parametrize("node", [
        None,
        42,
        "intrinsics::size_of",
        object(),
        MockCall(None),
        MockCall(MockPath("intrinsics::size_of")),
        MockCall(MockPath(["intrinsics", 7])),
        MockCall(MockPath([["intrinsics"], ["size_of"]])),
        MockCall(MockPath(12345)),
    ])
    def test_never_raises(self, node):
        assert examine(node) is None

    def test_missing_span_still_reports(self):
        class NoSpan:
            callee = MockPath(["intrinsics", "size_of"])

        diag = examine(NoSpan())
        assert diag is not None
        assert diag.span is None
        assert diag.location.file == ""

    def test_match_target_rejects_non_tuples(self):
        matcher = CallSiteMatcher()
        assert matcher.match_target(["intrinsics", "size_of"]) is None
        assert matcher.match_target(("intrinsics", ["size_of"])) is None
        assert matcher.match_target(("intrinsics", "size_of")) == "size_of"


class TestConcurrency:

    def test_parallel_examine(self):
        calls = [
            make_call(["intrinsics", ALL_NAMES[i % len(ALL_NAMES)]], line=i)
            for i in range(500)
        ]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(examine, calls))
        assert all(isinstance(d, Diagnostic) for d in results)
        assert [d.span.line for d in results] == list(range(500))
