#!/usr/bin/env python3
"""
Programs that fail: each fault stops the run and is reported with the line
that was being dispatched when it happened.
"""

import pytest
from blocklyvm import ErrorKind, OutcomeKind
from blocklyvm.shared.types import Array
from blocklyvm.utils.config import MAX_ARRAY_LENGTH


pytestmark = pytest.mark.integration


class TestFaultKinds:
    """One program per fault kind."""

    @pytest.mark.parametrize("source,kind,last_action", [
        ("int x = y;", ErrorKind.MALFORMED_LITERAL, "int x = y;"),
        ("int x = b[0];", ErrorKind.UNDEFINED_VARIABLE, "int x = b[0];"),
        ("int n = b.length;", ErrorKind.UNDEFINED_VARIABLE, "int n = b.length;"),
        ("int x = 1;\nx[0] = 2;", ErrorKind.TYPE_MISMATCH, "x[0] = 2;"),
        ("int[] a = new int[2];\nint a = 3;", ErrorKind.TYPE_MISMATCH, "int a = 3;"),
        ("int[] a = new int[2];\nint y = a;", ErrorKind.TYPE_MISMATCH, "int y = a;"),
        ("int[] a = new int[2];\na[2] = 1;", ErrorKind.INDEX_OUT_OF_BOUNDS, "a[2] = 1;"),
        ("int[] a = new int[2];\na[-1] = 1;", ErrorKind.INDEX_OUT_OF_BOUNDS, "a[-1] = 1;"),
        ("int x = 4 / 0;", ErrorKind.DIVISION_BY_ZERO, "int x = 4 / 0;"),
        ("falls (y > 0) {", ErrorKind.INVALID_CONDITION, "falls (y > 0) {"),
        ("solange (1 +) {", ErrorKind.INVALID_CONDITION, "solange (1 +) {"),
        ("wiederhole k Mal {", ErrorKind.MALFORMED_LITERAL, "wiederhole k Mal {"),
        ("} sonst {", ErrorKind.UNBALANCED_SCOPE, "} sonst {"),
        ("lauf();", ErrorKind.UNDEFINED_FUNCTION, "lauf();"),
        ("int[] a = new int[99999999999];", ErrorKind.MALFORMED_LITERAL, "int[] a = new int[99999999999];"),
        ("int[] a = new int[2147483648];", ErrorKind.MALFORMED_LITERAL, "int[] a = new int[2147483648];"),
        ("int[] a = new int[1000001];", ErrorKind.ARRAY_TOO_LARGE, "int[] a = new int[1000001];"),
        ("int z = 10 / i - 1;", ErrorKind.MALFORMED_LITERAL, "int z = 10 / i - 1;"),
        ("int n = 2;\nint[] a = new int[n];", ErrorKind.MALFORMED_LITERAL, "int[] a = new int[n];"),
        ("int[] a = new int[2];\na[i] = 1;", ErrorKind.MALFORMED_LITERAL, "a[i] = 1;"),
    ])
    def test_kind(self, run, source, kind, last_action):
        outcome = run(source)
        assert outcome.kind is OutcomeKind.FAILED
        assert outcome.error is kind
        assert outcome.last_action == last_action

    def test_else_inside_loop_without_if(self, run):
        outcome = run("""
            wiederhole 2 Mal {
            sonst {
            }
        """)
        assert outcome.error is ErrorKind.UNBALANCED_SCOPE


class TestFaultEffects:
    """What a fault leaves behind."""

    def test_target_is_unmodified(self, run, interpreter):
        outcome = run("""
            int x = 3;
            int x = x / 0;
        """)
        assert outcome.error is ErrorKind.DIVISION_BY_ZERO
        assert interpreter.variables["x"] == 3

    def test_later_lines_do_not_run(self, run, world):
        outcome = run("""
            int x = a;
            oben();
        """)
        assert outcome.is_failed
        assert world.performed == []

    def test_innermost_line_is_reported(self, run, interpreter):
        outcome = run("""
            int x = 6;
            wiederhole 3 Mal {
            int x = x - 3;
            int y = 6 / x;
            }
        """)
        assert outcome.error is ErrorKind.DIVISION_BY_ZERO
        assert outcome.last_action == "int y = 6 / x;"
        assert outcome.line_number == 5
        assert interpreter.variables == {"x": 0, "y": 2}

    def test_fault_inside_function(self, run):
        outcome = run("""
            public void kaputt() {
            int z = 1 / 0;
            }
            oben();
            kaputt();
        """)
        assert outcome.error is ErrorKind.DIVISION_BY_ZERO
        assert outcome.last_action == "int z = 1 / 0;"
        assert outcome.line_number == 5

    def test_fault_in_dead_branch_is_not_raised(self, run):
        outcome = run("""
            falls (falsch) {
            int x = 1 / 0;
            lauf();
            }
        """)
        assert outcome.success

    def test_message_and_fault(self, run):
        outcome = run("int x = 1 / 0;")
        assert outcome.message == "Division by zero is not allowed."
        assert outcome.fault.code == "E0080"
        assert outcome.line_number == 1


class TestArrayLimits:
    """Array lengths are bounded before any memory is requested."""

    def test_huge_array_stops_the_run(self, run, world, interpreter):
        outcome = run("""
            int[] a = new int[99999999999];
            oben();
        """)
        assert outcome.is_failed
        assert outcome.line_number == 1
        assert world.performed == []
        assert "a" not in interpreter.variables

    def test_largest_array_is_allowed(self, run, interpreter):
        outcome = run(f"int[] a = new int[{MAX_ARRAY_LENGTH}];\nint n = a.length;")
        assert outcome.success
        assert interpreter.variables["n"] == MAX_ARRAY_LENGTH

    def test_allocation_failure_is_a_fault(self, run, monkeypatch):
        def _no_memory(cls, length):
            raise MemoryError()

        monkeypatch.setattr(Array, "zeros", classmethod(_no_memory))
        outcome = run("int[] a = new int[4];")
        assert outcome.error is ErrorKind.ARRAY_TOO_LARGE
        assert outcome.last_action == "int[] a = new int[4];"


class TestUnrecognisedStatements:
    """Assignment-shaped lines that match no statement form."""

    def test_longer_expression_is_reported(self, run, interpreter):
        outcome = run("""
            int i = 2;
            int z = 10 / i - 1;
            oben();
        """)
        assert outcome.error is ErrorKind.MALFORMED_LITERAL
        assert outcome.line_number == 2
        assert "10 / i - 1" in outcome.message

    def test_not_reported_in_dead_branch(self, run, world):
        outcome = run("""
            falls (falsch) {
            int z = 10 / i - 1;
            }
            oben();
        """)
        assert outcome.success
        assert len(world.performed) == 1

    def test_reported_when_function_runs(self, run):
        outcome = run("""
            public void rechne() {
            int z = 1 + 2 + 3;
            }
            rechne();
        """)
        assert outcome.error is ErrorKind.MALFORMED_LITERAL
        assert outcome.last_action == "int z = 1 + 2 + 3;"
