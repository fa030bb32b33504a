"""adoc2html - AsciiDoc to HTML conversion for page-based sites.

adoc2html parses AsciiDoc into a document tree and renders it with a
pluggable backend. The default ``franklin`` backend emits lean page markup:
a small catalogue of custom rules (flattened sections, admonitions, lists,
links with the page suffix stripped) with every other node type rendered by
the complete ``html5`` backend. The result is wrapped in a page shell with
the site script and stylesheet.

Examples
--------
Convert a document to a full page:

    >>> from adoc2html import adoc2html
    >>> page = adoc2html("= Title\\n\\n== Intro\\n\\nHello.")

Render a fragment only:

    >>> from adoc2html import convert
    >>> convert("* link:other.html[Other]")
    '<ul><li><a href="other">Other</a></li></ul>'

Add a custom Franklin rule:

    >>> from adoc2html import FranklinRenderer
    >>> renderer = FranklinRenderer()
    >>> @renderer.rules.register("listing")
    ... def render_listing(node, ctx):
    ...     return f"<pre>{ctx.content(node)}</pre>"

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/adoc2html/__init__.py
__version__ = "1.0.0"

from adoc2html.api import adoc2html, convert, parse
from adoc2html.ast import Document, Node, NodeKind
from adoc2html.exceptions import (
    Adoc2HtmlError,
    FormatError,
    InvalidOptionsError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from adoc2html.options import (
    AsciiDocParserOptions,
    ConvertOptions,
    FranklinRendererOptions,
    HtmlRendererOptions,
)
from adoc2html.page import render_page
from adoc2html.parsers import AsciiDocParser
from adoc2html.renderers import (
    BackendMetadata,
    BaseRenderer,
    FranklinRenderer,
    Html5Renderer,
    RenderContext,
    RuleRegistry,
    get_renderer,
    list_backends,
    register_backend,
)

__all__ = [
    "__version__",
    "adoc2html",
    "convert",
    "parse",
    "render_page",
    # Tree
    "Document",
    "Node",
    "NodeKind",
    # Parsing
    "AsciiDocParser",
    # Rendering
    "BackendMetadata",
    "BaseRenderer",
    "FranklinRenderer",
    "Html5Renderer",
    "RenderContext",
    "RuleRegistry",
    "get_renderer",
    "list_backends",
    "register_backend",
    # Options
    "AsciiDocParserOptions",
    "ConvertOptions",
    "FranklinRendererOptions",
    "HtmlRendererOptions",
    # Exceptions
    "Adoc2HtmlError",
    "FormatError",
    "InvalidOptionsError",
    "ParsingError",
    "RenderingError",
    "ValidationError",
]
