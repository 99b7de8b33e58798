# tests/test_cli.py
"""Tests for the command-line driver."""

import json

import pytest

from stabilized_intrinsics import __version__
from stabilized_intrinsics.main import EXIT_INFRA, EXIT_OK, main, run_addon


class TestRun:

    def test_json_output(self, sample_dump_file, capsys):
        assert main([str(sample_dump_file)]) == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        records = [json.loads(line) for line in lines]
        assert [(r["file"], r["linenr"], r["column"]) for r in records] == [
            ("src/lib.rs", 3, 13),
            ("src/lib.rs", 4, 20),
        ]
        assert all(r["severity"] == "style" for r in records)
        assert records[1]["message"] == (
            "`transmute` is stabilized as `std::mem::transmute`")

    def test_gcc_output(self, sample_dump_file, capsys):
        main(["--output", "gcc", str(sample_dump_file)])
        out = capsys.readouterr().out
        assert out.startswith("src/lib.rs:3:13: style: `size_of` is stabilized")

    def test_summary_output(self, sample_dump_file, capsys):
        main(["--output", "summary", str(sample_dump_file)])
        assert "2 diagnostics" in capsys.readouterr().out

    def test_error_exitcode(self, sample_dump_file):
        assert main(["--error-exitcode", "7", str(sample_dump_file)]) == 7

    def test_error_exitcode_without_findings(self, tmp_path):
        clean = tmp_path / "clean.json"
        clean.write_text(json.dumps({"files": []}), encoding="utf-8")
        assert main(["--error-exitcode", "7", str(clean)]) == EXIT_OK

    def test_output_file(self, sample_dump_file, tmp_path, capsys):
        dest = tmp_path / "out" / "report.txt"
        run_addon([str(sample_dump_file)], output="gcc", output_file=str(dest))
        assert capsys.readouterr().out == ""
        assert len(dest.read_text(encoding="utf-8").splitlines()) == 2

    def test_multiple_dumps(self, sample_dump_file, capsys):
        main([str(sample_dump_file), str(sample_dump_file)])
        assert len(capsys.readouterr().out.splitlines()) == 4


class TestInfraErrors:

    def test_missing_dump(self, tmp_path, caplog):
        assert main([str(tmp_path / "nope.json")]) == EXIT_INFRA
        assert "cannot read dump" in caplog.text

    def test_malformed_dump(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("[1, 2", encoding="utf-8")
        assert main([str(bad)]) == EXIT_INFRA

    def test_unwritable_output(self, sample_dump_file, tmp_path, caplog):
        code = main(["--output-file", str(tmp_path), str(sample_dump_file)])
        assert code == EXIT_INFRA
        assert "cannot open output" in caplog.text

    def test_no_arguments(self, capsys):
        assert main([]) == EXIT_INFRA
        assert "usage" in capsys.readouterr().err


class TestInfo:

    def test_list_intrinsics(self, capsys):
        assert main(["--list-intrinsics"]) == EXIT_OK
        out = capsys.readouterr().out
        assert len(out.splitlines()) == 71
        assert "add_with_oveflow" in out
        assert "`std::mem::transmute`" in out

    def test_explain(self, capsys):
        assert main(["--explain"]) == EXIT_OK
        out = capsys.readouterr().out
        assert "stable counterparts" in out
        assert "let s = intrinsics::size_of::<String>();" in out
        assert "core::intrinsics" not in out

    def test_version(self, capsys):
        with pytest.raises(SystemExit):
            main(["--version"])
        assert __version__ in capsys.readouterr().out
