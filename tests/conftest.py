"""Pytest configuration and shared fixtures for the adoc2html test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

from pathlib import Path
from typing import Callable

import pytest

from adoc2html.ast import Document
from adoc2html.options.asciidoc import AsciiDocParserOptions
from adoc2html.parsers.asciidoc import AsciiDocParser
from adoc2html.renderers.franklin import FranklinRenderer
from adoc2html.renderers.html5 import Html5Renderer


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def parse() -> Callable[..., Document]:
    """Provide a function parsing AsciiDoc text into a Document."""

    def _parse(text: str, **options) -> Document:
        return AsciiDocParser(AsciiDocParserOptions(**options) if options else None).parse(text)

    return _parse


@pytest.fixture
def franklin() -> FranklinRenderer:
    """Provide a Franklin renderer with the built-in rules."""
    return FranklinRenderer()


@pytest.fixture
def html5() -> Html5Renderer:
    """Provide a default HTML5 renderer."""
    return Html5Renderer()


@pytest.fixture
def sample_document() -> str:
    """Provide the sample AsciiDoc source."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def adoc_file(tmp_path: Path) -> Path:
    """Provide a small AsciiDoc document on disk."""
    path = tmp_path / "page.adoc"
    path.write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    return path


SAMPLE_DOCUMENT = """= Sample Page
:icons: font

Welcome to the *sample* page.

== Getting Started

NOTE: Read link:setup.html[the setup guide] first.

* One
* Two with https://example.com/docs

== Reference

'''

. First
. Second
"""
