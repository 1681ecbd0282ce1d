from __future__ import annotations

import types

import pytest

from quizgen import cli


def test_no_arguments_prints_usage(capsys):
    assert cli.main([]) == 2
    out = capsys.readouterr().out
    assert "Usage: quizgen <command>" in out
    assert "quiz" in out


def test_help_flag_and_list(capsys):
    assert cli.main(["--help"]) == 0
    assert cli.main(["list"]) == 0
    out = capsys.readouterr().out
    assert "Available commands:" in out
    assert "(interactive)" in out


def test_help_for_command(capsys):
    assert cli.main(["help", "export"]) == 0
    assert "quizgen export --help" in capsys.readouterr().out


def test_help_for_unknown_command(capsys):
    assert cli.main(["help", "bogus"]) == 2
    assert "Unknown command 'bogus'" in capsys.readouterr().err


def test_unknown_command(capsys):
    assert cli.main(["bogus"]) == 2
    assert "Unknown command 'bogus'" in capsys.readouterr().err


def test_version_falls_back_when_not_installed(monkeypatch, capsys):
    def _missing(name):
        raise cli.metadata.PackageNotFoundError(name)

    monkeypatch.setattr(cli.metadata, "version", _missing)

    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.strip() == "unknown"


def test_dispatch_passes_arguments(monkeypatch):
    seen = {}

    def _main(argv):
        seen["argv"] = argv
        return 5

    monkeypatch.setattr(
        cli, "import_module", lambda name: types.SimpleNamespace(main=_main)
    )

    assert cli.main(["export", "notes.md", "--format", "pdf"]) == 5
    assert seen["argv"] == ["notes.md", "--format", "pdf"]


@pytest.mark.parametrize(
    ("code", "expected"),
    [(None, 0), (3, 3), ("boom", 1)],
)
def test_system_exit_is_normalized(monkeypatch, capsys, code, expected):
    def _main(argv):
        raise SystemExit(code)

    monkeypatch.setattr(
        cli, "import_module", lambda name: types.SimpleNamespace(main=_main)
    )

    assert cli.main(["init"]) == expected


def test_subcommand_help_exits_cleanly(capsys):
    assert cli.main(["export", "--help"]) == 0
    assert "quizgen export" in capsys.readouterr().out
