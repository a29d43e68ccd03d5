"""Tests for the package-radar command line."""

from __future__ import annotations

import json

import pytest

from conftest import write
from package_radar import cli
from package_radar.services.analyze_packages import AnalyzePackagesUseCase
from package_radar.services.metadata_fetcher import MetadataFetcher


@pytest.fixture(autouse=True)
def _offline(monkeypatch, fake_registry):
    monkeypatch.setattr(
        cli,
        "build_use_case",
        lambda client, settings: AnalyzePackagesUseCase(MetadataFetcher(fake_registry)),
    )


def test_directory_markdown_report(lodash_project, capsys):
    assert cli.main([str(lodash_project)]) == cli.EXIT_OK

    out = capsys.readouterr().out
    assert "Analyzed **2** files containing **1** unique npm packages." in out
    assert "## lodash `v4.17.21`" in out


def test_single_file_json(tmp_path, capsys):
    path = write(tmp_path, "app.js", 'require("react");')

    assert cli.main([str(path), "--json"]) == cli.EXIT_OK

    body = json.loads(capsys.readouterr().out)
    assert body["packages"][0]["name"] == "react"
    assert body["suggested_analysis"] == [str(path)]


def test_several_files(tmp_path, capsys):
    a = write(tmp_path, "a.js", 'require("react");')
    b = write(tmp_path, "b.js", 'require("react");')

    assert cli.main([str(a), str(b), "--json"]) == cli.EXIT_OK

    body = json.loads(capsys.readouterr().out)
    assert body["packages"][0]["count"] == 2


def test_no_packages_exits_cleanly(tmp_path, capsys):
    write(tmp_path, "node_modules/foo.js", 'require("left-pad");')

    assert cli.main([str(tmp_path)]) == cli.EXIT_OK
    assert "No npm packages found in the project" in capsys.readouterr().out


def test_invalid_input_exit_code(tmp_path, capsys):
    path = write(tmp_path, "notes.txt", "")

    assert cli.main([str(path)]) == cli.EXIT_INVALID_INPUT
    assert "error:" in capsys.readouterr().err


def test_requires_a_path():
    with pytest.raises(SystemExit):
        cli.main([])
