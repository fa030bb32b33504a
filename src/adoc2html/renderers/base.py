#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/renderers/base.py
"""Base classes for tree renderers.

This module defines the abstract base class every renderer inherits from and
the :class:`RenderContext` threaded through one conversion.

A renderer instance holds configuration only. Everything that changes while a
document is traversed (the current document, the section nesting depth, the
pass-through options) lives on the context, which is created once per
top-level ``convert`` call and handed down to every recursive call. One
renderer instance can therefore serve any number of conversions, including
concurrent ones.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from adoc2html.ast.nodes import RAW_KINDS, VERBATIM_KINDS, Document, ListItem, Node, NodeKind, Text
from adoc2html.constants import SECTION_CLOSE_TAG
from adoc2html.exceptions import InvalidOptionsError
from adoc2html.options.base import BaseRendererOptions
from adoc2html.utils.html import escape_html

logger = logging.getLogger(__name__)


class RenderContext:
    """Traversal state of a single conversion.

    Parameters
    ----------
    renderer : BaseRenderer
        Renderer that receives recursive ``convert`` calls. Default renderers
        called as a fallback route child content back through it, so custom
        rules apply at every depth.
    document : Document or None, default = None
        Document currently being rendered
    opts : Mapping or None, default = None
        Options forwarded verbatim to the default renderer

    Attributes
    ----------
    section_depth : int
        Number of enclosing section containers left open; only the section
        rule reads or changes it, through :meth:`section_scope`

    """

    def __init__(
        self,
        renderer: BaseRenderer,
        document: Optional[Document] = None,
        opts: Optional[Mapping[str, Any]] = None,
    ):
        self.renderer = renderer
        self.document = document
        self.opts: Mapping[str, Any] = dict(opts or {})
        self.section_depth = 0

    def convert(self, node: Node, transform: str | NodeKind | None = None) -> str:
        """Render ``node`` through the active renderer within this context."""
        return self.renderer.convert(node, transform, ctx=self)

    def convert_all(self, nodes: list[Node]) -> str:
        """Render nodes in order and concatenate the results."""
        return "".join(self.convert(node) for node in nodes)

    def content(self, node: Node) -> str:
        """Return the rendered inner content of ``node``.

        Verbatim blocks yield their escaped source and raw blocks their source
        as-is. List items yield only their attached blocks, never their
        principal text. Other nodes yield their rendered blocks when they have
        any, otherwise their rendered inline content.
        """
        if node.kind in VERBATIM_KINDS:
            return escape_html(getattr(node, "source", ""))
        if node.kind in RAW_KINDS:
            return getattr(node, "source", "")
        if node.blocks:
            return self.convert_all(node.blocks)
        if isinstance(node, ListItem):
            return ""
        return self.convert_all(node.inlines)

    def text(self, node: Node) -> str:
        """Return the rendered text of ``node`` (its inline children)."""
        if isinstance(node, Text):
            return escape_html(node.text, enabled=not node.raw)
        return self.convert_all(node.inlines)

    def title(self, node: Node) -> str:
        """Return the rendered title of ``node``, or an empty string."""
        if node.title_inlines:
            return self.convert_all(node.title_inlines)
        return escape_html(node.title or "")

    def close_sections(self) -> str:
        """Return one closing container tag per currently open section."""
        return SECTION_CLOSE_TAG * self.section_depth

    @contextmanager
    def section_scope(self) -> Iterator[None]:
        """Count one more open section for the duration of the block."""
        self.section_depth += 1
        try:
            yield
        finally:
            self.section_depth -= 1

    def icons_enabled(self) -> bool:
        """Return True when the current document enables admonition icons."""
        return bool(self.document and self.document.icons_enabled())


class BaseRenderer(ABC):
    """Abstract base class for all tree renderers.

    Subclasses implement :meth:`convert`, which renders a single node (and,
    through the context, its children) into a markup fragment.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Backend-specific rendering options

    Examples
    --------
    Creating a custom renderer:

        >>> class UpperRenderer(BaseRenderer):
        ...     def convert(self, node, transform=None, opts=None, *, ctx=None):
        ...         ctx = self.begin(node, opts, ctx)
        ...         return node.plain_text().upper()

    """

    #: Name under which the renderer is registered as a backend
    backend_name: str = ""

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def convert(
        self,
        node: Node,
        transform: str | NodeKind | None = None,
        opts: Optional[Mapping[str, Any]] = None,
        *,
        ctx: Optional[RenderContext] = None,
    ) -> str:
        """Render ``node`` and return the markup.

        Parameters
        ----------
        node : Node
            Node to render
        transform : str, NodeKind or None, default = None
            Name to render the node as, instead of its own kind
        opts : Mapping or None, default = None
            Options for the default renderer
        ctx : RenderContext or None, default = None
            Traversal context; a fresh one is created for top-level calls

        Returns
        -------
        str
            Rendered markup

        """

    def begin(
        self,
        node: Node,
        opts: Optional[Mapping[str, Any]],
        ctx: Optional[RenderContext],
    ) -> RenderContext:
        """Return the context for this call, creating one for top-level calls.

        The context's document reference follows the node, so nodes from
        different documents can be rendered through one traversal.
        """
        if ctx is None:
            ctx = RenderContext(self, opts=opts)
        document = node if isinstance(node, Document) else node.document
        if document is not None:
            ctx.document = document
        return ctx

    @staticmethod
    def resolve_name(node: Node, transform: str | NodeKind | None) -> str:
        """Return the dispatch name: the transform if given, else the node kind."""
        if transform:
            return str(transform)
        return node.node_name

    @staticmethod
    def _validate_options_type(options: BaseRendererOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                converter_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )
