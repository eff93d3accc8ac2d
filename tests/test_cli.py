"""Tests for the command line interface."""

import json

import pytest

from nestscan import cli
from nestscan.models import BoundaryNode, Cancelled, Completed


def _completed(root):
    return Completed(root, [BoundaryNode(f"{root}/libA", "svn://host/libA", "svn://host")])


def test_json_output(monkeypatch, capsys, tmp_path):
    seen = {}

    def fake_find(path, config, cancelled=None):
        seen["path"] = path
        seen["config"] = config
        return _completed(path)

    monkeypatch.setattr(cli, "find_working_copies", fake_find)
    cli.main(["--json", "--exclude", "generated", "--timeout", "7", str(tmp_path)])

    data = json.loads(capsys.readouterr().out)
    assert data["status"] == "completed"
    assert data["working_copies"][0]["url"] == "svn://host/libA"
    assert seen["path"] == str(tmp_path)
    assert seen["config"].timeout == 7
    assert "generated" in seen["config"].exclude_names


def test_markdown_output(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(cli, "find_working_copies", lambda path, config, cancelled=None: _completed(path))
    cli.main(["--markdown", str(tmp_path)])
    assert "| `libA` | svn://host/libA | svn://host | ok |" in capsys.readouterr().out


def test_summary_output(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(cli, "find_working_copies", lambda path, config, cancelled=None: _completed(path))
    cli.main(["--summary", str(tmp_path)])
    assert "1 working copies" in capsys.readouterr().out


def test_cancelled_scan_exits_130(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(cli, "find_working_copies", lambda path, config, cancelled=None: Cancelled(path))
    with pytest.raises(SystemExit) as exc:
        cli.main(["--json", str(tmp_path)])
    assert exc.value.code == cli.EXIT_CANCELLED
    captured = capsys.readouterr()
    assert json.loads(captured.out)["status"] == "cancelled"
    assert "Scan cancelled" in captured.err


def test_scan_receives_cancellation_token(monkeypatch, tmp_path):
    tokens = []

    def fake_find(path, config, cancelled=None):
        tokens.append(cancelled)
        return Completed(path, [])

    monkeypatch.setattr(cli, "find_working_copies", fake_find)
    cli.main(["--json", str(tmp_path)])
    assert tokens[0] is not None
    assert tokens[0]() is False


def test_bad_timeout_is_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--json", "--timeout", "0", "."])
    assert exc.value.code == 2
    assert "timeout must be positive" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit):
        cli.main(["--version"])
    assert "nestscan 0.1.0" in capsys.readouterr().out
