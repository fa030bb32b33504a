#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Options dataclasses for parsing, rendering and conversion."""

from adoc2html.options.asciidoc import AsciiDocParserOptions
from adoc2html.options.base import BaseParserOptions, BaseRendererOptions, CloneFrozenMixin
from adoc2html.options.convert import ConvertOptions
from adoc2html.options.franklin import FranklinRendererOptions
from adoc2html.options.html import HtmlRendererOptions

__all__ = [
    "AsciiDocParserOptions",
    "BaseParserOptions",
    "BaseRendererOptions",
    "CloneFrozenMixin",
    "ConvertOptions",
    "FranklinRendererOptions",
    "HtmlRendererOptions",
]
