from __future__ import annotations

import os
import stat

import pytest

from andersen_cli.cli import main


def test_writes_dot_report(write_input, tmp_path):
    source = write_input("a = &b; c = a;")
    output = tmp_path / "out.dot"
    assert main([str(source), str(output)]) == 0
    text = output.read_text(encoding="utf-8")
    assert text.startswith("digraph {\n")
    assert '"c" [label="c\\n{b}"];' in text
    assert '"a" -> "c";' in text
    # The temporary file used while writing has been moved into place.
    assert {p.name for p in tmp_path.iterdir()} == {"input.txt", "out.dot"}


def test_writes_text_report(write_input, tmp_path):
    source = write_input("p = &x\nq = p\n")
    output = tmp_path / "report.txt"
    assert main([str(source), str(output), "--format", "text"]) == 0
    assert "  q -> {x}" in output.read_text(encoding="utf-8")


def test_empty_input_gives_empty_graph(write_input, tmp_path):
    source = write_input("  \n\n")
    output = tmp_path / "out.dot"
    assert main([str(source), str(output)]) == 0
    assert output.read_text(encoding="utf-8") == "digraph {\n}\n"


def test_parse_failure_writes_nothing(write_input, tmp_path, caplog):
    source = write_input("a == b")
    output = tmp_path / "out.dot"
    assert main([str(source), str(output)]) == 1
    assert not output.exists()
    assert "parse failed" in caplog.text


def test_missing_input_file(tmp_path, caplog):
    output = tmp_path / "out.dot"
    assert main([str(tmp_path / "nope.txt"), str(output)]) == 1
    assert not output.exists()
    assert "read failed" in caplog.text
    assert "nope.txt" in caplog.text


def test_unwritable_output(write_input, tmp_path, caplog):
    source = write_input("a = &b")
    output = tmp_path / "missing-dir" / "out.dot"
    assert main([str(source), str(output)]) == 1
    assert "write failed" in caplog.text
    assert list(tmp_path.iterdir()) == [source]


def test_requires_two_positionals(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["only-one.txt"])
    assert excinfo.value.code == 2


def test_report_mode_follows_umask(write_input, tmp_path):
    source = write_input("a = &b")
    output = tmp_path / "out.dot"
    previous = os.umask(0o022)
    try:
        assert main([str(source), str(output)]) == 0
    finally:
        os.umask(previous)
    assert stat.S_IMODE(output.stat().st_mode) == 0o644
