#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/parsers/base.py
"""Base classes for document parsers.

This module defines the abstract base class that parsers inherit from. A
parser turns source text into the :class:`~adoc2html.ast.Document` tree the
renderers consume.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union

from adoc2html.ast import Document
from adoc2html.exceptions import InvalidOptionsError
from adoc2html.options.base import BaseParserOptions
from adoc2html.utils.encoding import normalize_stream_to_text, read_text_with_encoding_detection

logger = logging.getLogger(__name__)

ParserInput = Union[str, Path, IO[bytes], IO[str], bytes]


class BaseParser(ABC):
    """Abstract base class for all document parsers.

    Parameters
    ----------
    options : BaseParserOptions or None, default = None
        Format-specific parsing options

    Notes
    -----
    The parse() method should handle all supported input types:
    - str: AsciiDoc source, or the path of a file to read
    - Path: File path to read
    - IO[bytes] or IO[str]: File-like object
    - bytes: Raw document bytes, decoded with encoding detection

    """

    def __init__(self, options: BaseParserOptions | None = None):
        """Initialize the parser with optional configuration."""
        self.options: BaseParserOptions | None = options

    @staticmethod
    def _validate_options_type(options: BaseParserOptions | None, expected_type: type, parser_name: str) -> None:
        """Validate that options are of the correct type for this parser.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=parser_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @abstractmethod
    def parse(self, input_data: ParserInput) -> Document:
        """Parse the input document into a tree.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            The input document to parse

        Returns
        -------
        Document
            Root of the parsed tree

        Raises
        ------
        ParsingError
            If parsing fails

        """
        raise NotImplementedError

    @staticmethod
    def _load_text_content(input_data: ParserInput) -> str:
        """Load content from various input types with encoding detection.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            Input data to load

        Returns
        -------
        str
            Source text

        """
        if isinstance(input_data, bytes):
            return read_text_with_encoding_detection(input_data)
        elif isinstance(input_data, Path):
            with open(input_data, "rb") as f:
                return read_text_with_encoding_detection(f.read())
        elif isinstance(input_data, str):
            # Could be file path or content
            # Linux has a 255 char limit for path components, and calling
            # path.exists() on very long strings raises OSError
            if len(input_data) <= 260 and "\n" not in input_data:
                try:
                    path = Path(input_data)
                    if path.suffix and path.is_file():
                        logger.debug(f"Reading AsciiDoc source from {path}")
                        with open(path, "rb") as f:
                            return read_text_with_encoding_detection(f.read())
                except OSError:
                    pass
            return input_data
        else:
            if input_data.seekable():
                input_data.seek(0)
            return normalize_stream_to_text(input_data)
