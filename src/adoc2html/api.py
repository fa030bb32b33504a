"""The major exported API functions for AsciiDoc conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/adoc2html/api.py
import logging
from typing import Any, Optional, TypeVar

from adoc2html.ast.nodes import Document, NodeKind
from adoc2html.exceptions import Adoc2HtmlError, RenderingError
from adoc2html.options.asciidoc import AsciiDocParserOptions
from adoc2html.options.base import BaseParserOptions, BaseRendererOptions
from adoc2html.options.convert import ConvertOptions
from adoc2html.page import render_page
from adoc2html.parsers.asciidoc import AsciiDocParser
from adoc2html.parsers.base import ParserInput
from adoc2html.renderers.registry import registry

logger = logging.getLogger(__name__)

# TypeVar for generic options updates
OptionsT = TypeVar("OptionsT", BaseParserOptions, BaseRendererOptions, ConvertOptions)


def _update_options(options: OptionsT, kwargs: dict[str, Any]) -> OptionsT:
    """Return ``options`` with matching keyword arguments applied.

    Matching keys are removed from ``kwargs`` so the caller can pass the
    rest on.
    """
    names = options.field_names()
    matching = {key: kwargs.pop(key) for key in list(kwargs) if key in names}
    if not matching:
        return options
    return options.create_updated(**matching)


def _resolve_convert_options(options: Optional[ConvertOptions], kwargs: dict[str, Any]) -> ConvertOptions:
    """Fold keyword arguments into the conversion options.

    Keyword arguments are matched, in order, against the fields of
    :class:`ConvertOptions`, of :class:`AsciiDocParserOptions` and of the
    selected backend's renderer options. Unknown names are logged and
    skipped.
    """
    options = _update_options(options or ConvertOptions(), kwargs)
    if not kwargs:
        return options

    base_parser_options = options.parser_options or AsciiDocParserOptions()
    parser_options = _update_options(base_parser_options, kwargs)
    if parser_options is not base_parser_options:
        options = options.create_updated(parser_options=parser_options)

    options_class = registry.get_metadata(options.backend).options_class
    if kwargs and options_class is not None:
        base_renderer_options = options.renderer_options
        if not isinstance(base_renderer_options, options_class):
            base_renderer_options = options_class()
        renderer_options = _update_options(base_renderer_options, kwargs)
        if renderer_options is not base_renderer_options:
            options = options.create_updated(renderer_options=renderer_options)

    if kwargs:
        logger.debug(f"Skipping unknown conversion options: {sorted(kwargs)}")
    return options


def parse(source: ParserInput, options: Optional[AsciiDocParserOptions] = None, **kwargs: Any) -> Document:
    """Parse AsciiDoc into a document tree.

    Parameters
    ----------
    source : str, Path, IO or bytes
        AsciiDoc source text, a path to a file, a file-like object or bytes
    options : AsciiDocParserOptions or None, default = None
        Parser options
    **kwargs
        Individual parser option overrides

    Returns
    -------
    Document
        Root of the parsed tree

    Raises
    ------
    ParsingError
        If the source cannot be parsed

    """
    parser_options = _update_options(options or AsciiDocParserOptions(), kwargs)
    if kwargs:
        logger.debug(f"Skipping unknown parser options: {sorted(kwargs)}")
    return AsciiDocParser(parser_options).parse(source)


def convert(source: ParserInput, options: Optional[ConvertOptions] = None, **kwargs: Any) -> str:
    """Convert AsciiDoc to HTML with the selected backend.

    The source is parsed, then rendered with the ``embedded`` transform, or
    with ``document`` when ``standalone`` is set. ``base_options`` are passed
    through to the renderer that handles node types without a custom rule.

    Parameters
    ----------
    source : str, Path, IO or bytes
        AsciiDoc source text, a path to a file, a file-like object or bytes
    options : ConvertOptions or None, default = None
        Conversion options; defaults to the Franklin backend
    **kwargs
        Individual overrides of conversion, parser or renderer options
        (``backend="html5"``, ``attributes={...}``, ``document_suffix=""``)

    Returns
    -------
    str
        Rendered HTML fragment

    Raises
    ------
    FormatError
        If the backend is not registered
    ParsingError
        If the source cannot be parsed
    RenderingError
        If any rule fails; no partial output is returned

    Examples
    --------
    >>> convert("Hello *world*")
    '<p>Hello <strong>world</strong></p>'

    """
    options = _resolve_convert_options(options, dict(kwargs))
    renderer = registry.get_renderer(options.backend, options.renderer_options)

    parser = AsciiDocParser(options.resolved_parser_options())
    document = parser.parse(source)

    transform = NodeKind.DOCUMENT if options.standalone else NodeKind.EMBEDDED
    logger.debug(f"Rendering with backend '{options.backend}' as '{transform}'")
    try:
        return renderer.convert(document, transform, options.base_options or None)
    except Adoc2HtmlError:
        raise
    except Exception as e:
        raise RenderingError(
            f"Failed to render document with backend '{options.backend}': {e}",
            rendering_stage="render",
            original_error=e,
        ) from e


def adoc2html(source: ParserInput, options: Optional[ConvertOptions] = None, **kwargs: Any) -> str:
    """Convert AsciiDoc to a complete HTML page.

    Same as :func:`convert`, with the result wrapped in the page shell unless
    ``wrap_page`` is False.

    Parameters
    ----------
    source : str, Path, IO or bytes
        AsciiDoc source
    options : ConvertOptions or None, default = None
        Conversion options
    **kwargs
        Individual option overrides, as for :func:`convert`

    Returns
    -------
    str
        HTML page

    """
    options = _resolve_convert_options(options, dict(kwargs))
    html = convert(source, options)
    if not options.wrap_page:
        return html
    return render_page(html, options.page_template)
