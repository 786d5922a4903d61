from __future__ import annotations

"""
Unit tests for the CLI application controller.

Logging bootstrap is patched out so that no handler outlives a test's
captured streams; the compilation engine is patched where only the exit
code mapping is under test.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from compendium.domain.pipeline_models import create_error_result
from compendium.interface.cli.app import main


@pytest.fixture(autouse=True)
def no_logging_bootstrap():
    with patch("compendium.interface.cli.app.configure_logging"):
        yield


@pytest.fixture
def project(tmp_path: Path):
    source = tmp_path / "book"
    source.mkdir()
    (source / "1 Start.txt").write_text("# Start\nHello.", encoding="utf-8")
    target = tmp_path / "site"
    target.mkdir()
    return source, target


def test_rejected_arguments_exit_with_2(tmp_path: Path, capsys) -> None:
    code = main([str(tmp_path / "missing"), str(tmp_path / "out")])

    assert code == 2
    err = capsys.readouterr().err
    assert err.startswith("Error: <source> path not found")
    assert "Usage: > compendium <source> <target> [<options file>]" in err


def test_dump_options_prints_effective_options(project, tmp_path: Path, capsys) -> None:
    source, target = project
    options_file = tmp_path / "options.json"
    options_file.write_text('{"customAcronyms": ["api"]} // extra', encoding="utf-8")

    code = main([str(source), str(target), str(options_file), "--dump-options"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["customAcronyms"] == ["api"]
    assert data["htmlSettings"]["passThroughAssets"] is False
    assert not any(target.iterdir())


def test_batch_compilation_human_output(project, capsys) -> None:
    source, target = project

    code = main([str(source), str(target)])

    assert code == 0
    out = capsys.readouterr().out
    assert "Finished batch processing 1 file(s)" in out
    assert "Process completed normally." in out
    assert (target / "1 Start.html").exists()


def test_json_output(project, capsys) -> None:
    source, target = project

    code = main([str(source), str(target), "--json"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["ok"] is True
    assert data["batch_mode"] is True
    assert data["processed"] == 1
    assert data["operations"][0]["destination_file"] == str(target / "1 Start.html")


def test_single_file_output(project, tmp_path: Path, capsys) -> None:
    source, _ = project
    target_file = tmp_path / "start.html"

    code = main([str(source / "1 Start.txt"), str(target_file)])

    assert code == 0
    assert f'saved as "{target_file}"' in capsys.readouterr().out
    assert target_file.exists()


def test_failed_compilation_exits_with_1(project, capsys) -> None:
    source, target = project
    failure = create_error_result("custom HTML template not found: x.html", str(source), str(target))

    with patch("compendium.interface.cli.app.run_compilation", return_value=failure):
        code = main([str(source), str(target)])

    assert code == 1
    assert "ERROR: custom HTML template not found" in capsys.readouterr().err


def test_unexpected_exception_exits_with_1(project, capsys) -> None:
    source, target = project
    with patch("compendium.interface.cli.app.run_compilation", side_effect=RuntimeError("boom")):
        code = main([str(source), str(target)])

    assert code == 1
    assert "ERROR: boom" in capsys.readouterr().err


def test_interrupt_exits_with_130(project) -> None:
    source, target = project
    with patch("compendium.interface.cli.app.run_compilation", side_effect=KeyboardInterrupt):
        assert main([str(source), str(target)]) == 130
