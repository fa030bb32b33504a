#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/options/html.py
"""Configuration options for the HTML5 renderer."""

from __future__ import annotations

from dataclasses import dataclass

from adoc2html.constants import (
    DEFAULT_HTML_INCLUDE_FOOTNOTES,
    DEFAULT_HTML_LANGUAGE,
    DEFAULT_HTML_SECTION_IDS,
    DEFAULT_HTML_SHOW_TITLE,
)
from adoc2html.options.base import BaseRendererOptions


@dataclass(frozen=True)
class HtmlRendererOptions(BaseRendererOptions):
    """Configuration options for the HTML5 (default) renderer.

    The same fields may be overridden per call through the pass-through
    ``opts`` mapping forwarded by the Franklin renderer.

    Parameters
    ----------
    section_ids : bool, default True
        Emit ``id`` attributes on section headings.
    include_footnotes : bool, default True
        Append the footnotes block after the document body.
    show_title : bool, default False
        Render the document title in embedded output (the ``showtitle``
        document attribute has the same effect).
    language : str, default "en"
        Value of ``<html lang>`` for standalone documents; the ``lang``
        document attribute takes precedence.
    stylesheet : str or None, default None
        Stylesheet linked from standalone documents.

    """

    section_ids: bool = DEFAULT_HTML_SECTION_IDS
    include_footnotes: bool = DEFAULT_HTML_INCLUDE_FOOTNOTES
    show_title: bool = DEFAULT_HTML_SHOW_TITLE
    language: str = DEFAULT_HTML_LANGUAGE
    stylesheet: str | None = None
