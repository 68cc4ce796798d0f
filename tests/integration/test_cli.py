#!/usr/bin/env python3
"""
Tests for the command line entry point.
"""

import sys
import pytest
from blocklyvm.__main__ import main


pytestmark = pytest.mark.integration


@pytest.fixture
def run_cli(monkeypatch, tmp_path):
    monkeypatch.setenv("NO_COLOR", "1")

    def _run(source: str, *flags: str) -> int:
        path = tmp_path / "programm.txt"
        path.write_text(source, encoding="utf-8")
        monkeypatch.setattr(sys, "argv", ["blocklyvm", str(path), *flags])
        return main()

    return _run


class TestCli:
    def test_success(self, run_cli, capsys):
        code = run_cli("int x = 3;\nwiederhole 2 Mal {\noben();\n}\n")
        out = capsys.readouterr().out
        assert code == 0
        assert out.splitlines() == ["oben();", "oben();", "x = 3"]

    def test_failure(self, run_cli, capsys):
        code = run_cli("oben();\nint x = 1 / 0;\n")
        captured = capsys.readouterr()
        assert code == 1
        assert "oben();" in captured.out
        assert "error[E0080]: Division by zero is not allowed." in captured.err
        assert " --> line 2" in captured.err

    def test_missing_file(self, monkeypatch, tmp_path, capsys):
        monkeypatch.setattr(sys, "argv", ["blocklyvm", str(tmp_path / "fehlt.txt")])
        assert main() == 1
        assert "file not found" in capsys.readouterr().err
