"""Tests for the command-line tool."""

import json

import pytest

from plainyaml.cli import build_parser, main, options_from_args


@pytest.fixture
def config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("name: web\nports:\n  - 80\n  - 443\ndebug: false\n", encoding="utf-8")
    return path


def test_check_ok(config, capsys):
    assert main(["check", str(config)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("OK")
    assert "(VMap)" in out

def test_check_reports_parse_error(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("a: 1\n- b\n", encoding="utf-8")
    assert main(["check", str(path)]) == 1
    err = capsys.readouterr().err
    assert err.startswith("Error: mixed mapping and sequence entries")
    assert 'in file "bad.yaml" on line 2' in err

def test_check_missing_file(tmp_path, capsys):
    assert main(["check", str(tmp_path / "gone.yaml")]) == 1
    assert "does not exist" in capsys.readouterr().err

def test_to_json(config, capsys):
    assert main(["to-json", str(config)]) == 0
    assert json.loads(capsys.readouterr().out) == {
        "name": "web", "ports": [80, 443], "debug": False,
    }

def test_to_json_no_bool(config, capsys):
    assert main(["to-json", "--no-bool", str(config)]) == 0
    assert json.loads(capsys.readouterr().out)["debug"] == "false"

def test_from_json_to_stdout(tmp_path, capsys):
    source = tmp_path / "in.json"
    source.write_text(json.dumps({"a": {"b": [1, 2]}, "c": "x"}), encoding="utf-8")
    assert main(["from-json", str(source)]) == 0
    out = capsys.readouterr().out
    assert out.endswith("a:\n  b:\n    - 1\n    - 2\n\nc: x\n")

def test_from_json_to_file(tmp_path, capsys):
    source = tmp_path / "in.json"
    source.write_text(json.dumps({"a": 1}), encoding="utf-8")
    target = tmp_path / "out.yaml"
    assert main(["from-json", "--indent", "4", str(source), "-o", str(target)]) == 0
    assert "wrote" in capsys.readouterr().out
    assert target.read_text(encoding="utf-8").endswith("a: 1\n")

def test_from_json_bad_indent(tmp_path, capsys):
    source = tmp_path / "in.json"
    source.write_text("{}", encoding="utf-8")
    assert main(["from-json", "--indent", "1", str(source)]) == 1
    assert "between 2 and 8" in capsys.readouterr().err

def test_from_json_invalid_json(tmp_path, capsys):
    source = tmp_path / "in.json"
    source.write_text("{not json", encoding="utf-8")
    assert main(["from-json", str(source)]) == 1
    assert capsys.readouterr().err.startswith("Error:")

def test_command_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])

def test_options_from_args():
    args = build_parser().parse_args(["check", "--eol", "crlf", "--no-null", "x.yaml"])
    opts = options_from_args(args)
    assert opts.eol == "\r\n"
    assert not opts.evaluate_nulls
    assert opts.evaluate_booleans
