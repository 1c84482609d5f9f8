"""Integration tests for the docnav command-line entrypoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from bs4 import BeautifulSoup
from structlog.testing import capture_logs

from docnav import cli

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

MARKDOWN = """\
# Guide

Intro text.

## Install

## Usage

### Options
"""


@pytest.fixture(autouse=True)
def captured_logs(monkeypatch: pytest.MonkeyPatch) -> Iterator[list[dict]]:
    # structlog configuration is process-global: never reconfigure it from tests,
    # and keep log lines off stdout, which carries the CLI output.
    monkeypatch.setattr(cli, "_setup_logging", lambda settings: None)
    with capture_logs() as logs:
        yield logs


@pytest.fixture()
def markdown_file(tmp_path: Path) -> Path:
    path = tmp_path / "guide.md"
    path.write_text(MARKDOWN, encoding="utf-8")
    return path


class TestOutlineOutput:
    def test_markdown_file(self, markdown_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert cli.main([str(markdown_file)]) == 0

        soup = BeautifulSoup(capsys.readouterr().out, "html.parser")
        assert [a["href"] for a in soup.select("a.toc-link")] == [
            "#guide",
            "#install",
            "#usage",
            "#options",
        ]

    def test_html_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "page.html"
        path.write_text("<h2>One</h2><h2>Two</h2>", encoding="utf-8")

        assert cli.main([str(path)]) == 0
        assert 'data-id="two"' in capsys.readouterr().out

    def test_numbered_and_depth_flags(
        self, markdown_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert cli.main([str(markdown_file), "--numbered", "--max-depth", "2"]) == 0

        out = capsys.readouterr().out
        assert "1. Install" in out
        assert "2. Usage" in out
        assert "Options" not in out

    def test_no_numbered_overrides_configured_numbering(
        self,
        markdown_file: Path,
        capsys: pytest.CaptureFixture[str],
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("DOCNAV__OUTLINE__NUMBERED", "true")

        assert cli.main([str(markdown_file)]) == 0
        assert "1. Guide" in capsys.readouterr().out

        assert cli.main([str(markdown_file), "--no-numbered"]) == 0
        out = capsys.readouterr().out
        assert "Install" in out
        assert "1. " not in out

    def test_annotate_prints_document_with_ids(
        self, markdown_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert cli.main([str(markdown_file), "--annotate"]) == 0

        soup = BeautifulSoup(capsys.readouterr().out, "html.parser")
        assert [h["id"] for h in soup.find_all(["h1", "h2", "h3"])] == [
            "guide",
            "install",
            "usage",
            "options",
        ]
        assert soup.find("p").get_text() == "Intro text."


class TestErrors:
    def test_missing_file_exits_1(
        self,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
        captured_logs: list[dict],
    ) -> None:
        assert cli.main([str(tmp_path / "missing.md")]) == 1
        assert capsys.readouterr().out == ""
        errors = [entry for entry in captured_logs if entry["event"] == "cli_error"]
        assert errors[0]["code"] == "DOCUMENT_UNREADABLE"

    def test_invalid_depth_rejected_by_parser(self, markdown_file: Path) -> None:
        with pytest.raises(SystemExit):
            cli.main([str(markdown_file), "--max-depth", "9"])

    def test_load_html_raises_docnav_error(self, tmp_path: Path) -> None:
        with pytest.raises(cli.DocNavError) as excinfo:
            cli.load_html(tmp_path / "missing.html")
        assert excinfo.value.code == cli.ErrorCode.DOCUMENT_UNREADABLE
