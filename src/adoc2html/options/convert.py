#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/options/convert.py
"""The configuration bag accepted by :func:`adoc2html.api.convert`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from adoc2html.constants import DEFAULT_BACKEND
from adoc2html.exceptions import ValidationError
from adoc2html.options.asciidoc import AsciiDocParserOptions
from adoc2html.options.base import BaseRendererOptions, CloneFrozenMixin


@dataclass(frozen=True)
class ConvertOptions(CloneFrozenMixin):
    """Options for a complete AsciiDoc to HTML conversion.

    Parameters
    ----------
    backend : str, default "franklin"
        Name of the registered renderer used for the conversion.
    standalone : bool, default False
        Render the document with the ``document`` transform (a full HTML
        document from the HTML5 renderer) instead of ``embedded``.
    wrap_page : bool, default True
        Wrap the markup in the page shell; only honored by :func:`adoc2html`.
    page_template : str or None, default None
        Path of a Jinja2 template replacing the built-in page shell.
    attributes : dict, default empty
        Document attributes applied before parsing (``None`` unsets).
    base_options : dict, default empty
        Options forwarded verbatim to the default renderer for node types
        without a custom rule.
    parser_options : AsciiDocParserOptions or None
        Parser configuration; ``attributes`` above are merged into it.
    renderer_options : BaseRendererOptions or None
        Options for the selected backend's renderer.

    """

    backend: str = DEFAULT_BACKEND
    standalone: bool = False
    wrap_page: bool = True
    page_template: Optional[str] = None
    attributes: dict[str, Any] = field(default_factory=dict)
    base_options: dict[str, Any] = field(default_factory=dict)
    parser_options: Optional[AsciiDocParserOptions] = None
    renderer_options: Optional[BaseRendererOptions] = None

    def __post_init__(self) -> None:
        if not self.backend or not isinstance(self.backend, str):
            raise ValidationError("backend must be a non-empty string", "backend", self.backend)

    def resolved_parser_options(self) -> AsciiDocParserOptions:
        """Return parser options with ``attributes`` merged over their own."""
        parser_options = self.parser_options or AsciiDocParserOptions()
        if not self.attributes:
            return parser_options
        merged = {**parser_options.attributes, **self.attributes}
        return parser_options.create_updated(attributes=merged)
