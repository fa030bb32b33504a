#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests for the adoc2html command line, run as a subprocess."""

import subprocess
import sys

import pytest


def run_cli(*args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "adoc2html", *args],
        input=stdin,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=60,
    )


@pytest.mark.integration
@pytest.mark.cli
class TestCLIIntegration:
    """Run the installed module end to end."""

    def test_page_to_stdout(self, adoc_file):
        result = run_cli(str(adoc_file))
        assert result.returncode == 0
        assert result.stdout.startswith("<!DOCTYPE html>")
        assert '<div class="admonition note">' in result.stdout

    def test_fragment_to_file(self, adoc_file, tmp_path):
        target = tmp_path / "page.html"
        result = run_cli(str(adoc_file), "--no-page", "-o", str(target))
        assert result.returncode == 0
        assert result.stdout == ""
        assert target.read_text(encoding="utf-8").endswith("<ol><li>First</li><li>Second</li></ol></div>")

    def test_stdin(self):
        result = run_cli("-", "--no-page", stdin="== Only\n\nText.")
        assert result.returncode == 0
        assert result.stdout == "<div><h2>Only</h2><p>Text.</p></div>\n"

    def test_html5_backend(self, adoc_file):
        result = run_cli(str(adoc_file), "--backend", "html5", "--no-page")
        assert result.returncode == 0
        assert '<div class="sect1">' in result.stdout

    def test_unhandled_quote_warning_on_stderr(self, tmp_path):
        source = tmp_path / "quoted.adoc"
        source.write_text("_soft_", encoding="utf-8")
        result = run_cli(str(source), "--no-page")
        assert result.returncode == 0
        assert result.stdout == "<p>soft</p>\n"
        assert "Unhandled inline_quoted type 'emphasis'" in result.stderr

    def test_missing_file(self, tmp_path):
        result = run_cli(str(tmp_path / "absent.adoc"))
        assert result.returncode == 1
        assert "Input file not found" in result.stderr

    def test_unknown_backend(self, adoc_file):
        result = run_cli(str(adoc_file), "-b", "docbook")
        assert result.returncode == 2
