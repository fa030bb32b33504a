#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Parsers turning source documents into the document tree."""

from adoc2html.parsers.asciidoc import AsciiDocLexer, AsciiDocParser, Token, TokenType
from adoc2html.parsers.base import BaseParser, ParserInput

__all__ = [
    "AsciiDocLexer",
    "AsciiDocParser",
    "BaseParser",
    "ParserInput",
    "Token",
    "TokenType",
]
