"""Tests for the mapping check CLI."""

from __future__ import annotations

import json

import pytest

from mapping_control.validation import run_check_cli


def _write_json(path, payload) -> str:
    """Write one JSON document and return its path."""

    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_check_cli_accepts_conforming_input(tmp_path, capsys) -> None:
    """CLI should exit 0 and report success for a conforming mapping."""

    schema = _write_json(tmp_path / "schema.json", {"rules": [{"require": ["id"]}, {"only": True}]})
    data = _write_json(tmp_path / "data.json", {"id": 1})

    code = run_check_cli(["--input", data, "--schema", schema])

    assert code == 0
    assert "OK:" in capsys.readouterr().out


def test_check_cli_reports_violation(tmp_path, capsys) -> None:
    """CLI should exit 1 and print the violation message to stderr."""

    schema = _write_json(tmp_path / "schema.json", {"rules": [{"require": ["id"]}, {"only": True}]})
    data = _write_json(tmp_path / "data.json", {"id": 1, "extra": 2})

    code = run_check_cli(["--input", data, "--schema", schema, "--term", "field"])

    assert code == 1
    assert "extra fields ['extra']" in capsys.readouterr().err


def test_check_cli_runs_builtin_recipe(tmp_path, capsys) -> None:
    """CLI should validate against a registered recipe."""

    data = tmp_path / "request.yaml"
    data.write_text("post: /a\nbody:\n  text: hi\n", encoding="utf-8")

    assert run_check_cli(["--input", str(data), "--recipe", "post_request"]) == 0
    assert run_check_cli(["--input", str(data), "--recipe", "get_request"]) == 1
    assert "extra params ['body']" in capsys.readouterr().err


def test_check_cli_requires_schema_or_recipe(tmp_path) -> None:
    """CLI should reject invocations without a rule source."""

    data = _write_json(tmp_path / "data.json", {})

    with pytest.raises(SystemExit):
        run_check_cli(["--input", data])
