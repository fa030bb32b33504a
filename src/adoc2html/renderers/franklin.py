#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/renderers/franklin.py
"""Franklin rendering: a few custom rules over the HTML5 renderer.

The Franklin renderer produces lean markup for a page-based site. A small
catalogue of node types has a custom rule; every other node type is handed
to the default :class:`Html5Renderer` unchanged, so the output degrades to
plain HTML5 rather than losing content.

Sections are flattened instead of nested: each section closes the containers
of every section still open above it before opening its own, so a tree of
sections becomes a sequence of sibling ``<div>`` containers.

Examples
--------
Adding a rule for another node type:

    >>> from adoc2html.renderers.franklin import FranklinRenderer
    >>> renderer = FranklinRenderer()
    >>> @renderer.rules.register("image")
    ... def render_image(node, ctx):
    ...     return f'<img src="{node.target}">'

"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, Mapping, Optional

from adoc2html.ast.nodes import Inline, ListNode, Node, NodeKind, Section
from adoc2html.constants import (
    BACKEND_FRANKLIN,
    LIST_WRAPPER_PREFIXES,
    SECTION_CLOSE_TAG,
    SECTION_OPEN_TAG,
    THEMATIC_BREAK_MARKUP,
)
from adoc2html.options.franklin import FranklinRendererOptions
from adoc2html.renderers.base import BaseRenderer, RenderContext
from adoc2html.renderers.html5 import Html5Renderer
from adoc2html.utils.html import escape_attribute, escape_html, linkify, strip_document_suffix

logger = logging.getLogger(__name__)

Rule = Callable[[Node, RenderContext], str]


class RuleRegistry:
    """Mapping from node kind to the rule that renders it.

    Absence of a rule is a normal state: the renderer falls back to its
    default renderer for such node types.
    """

    def __init__(self, rules: Optional[Mapping[NodeKind | str, Rule]] = None):
        self._rules: dict[NodeKind, Rule] = {}
        for kind, rule in (rules or {}).items():
            self.add(kind, rule)

    def add(self, kind: NodeKind | str, rule: Rule) -> None:
        """Register ``rule`` for ``kind``, replacing any existing rule."""
        kind = NodeKind.coerce(kind)
        if kind in self._rules:
            logger.debug(f"Replacing rule for node kind '{kind}'")
        self._rules[kind] = rule

    def register(self, *kinds: NodeKind | str) -> Callable[[Rule], Rule]:
        """Return a decorator registering the decorated rule for ``kinds``."""

        def decorator(rule: Rule) -> Rule:
            for kind in kinds:
                self.add(kind, rule)
            return rule

        return decorator

    def get(self, name: NodeKind | str) -> Optional[Rule]:
        """Return the rule for ``name``, or None when there is none.

        Names that are not node kinds at all (custom transform names) also
        yield None.
        """
        try:
            kind = NodeKind.coerce(name)
        except ValueError:
            return None
        return self._rules.get(kind)

    def remove(self, kind: NodeKind | str) -> bool:
        """Remove the rule for ``kind``; return True if one was registered."""
        return self._rules.pop(NodeKind.coerce(kind), None) is not None

    def kinds(self) -> frozenset[NodeKind]:
        return frozenset(self._rules)

    def copy(self) -> RuleRegistry:
        return RuleRegistry(self._rules)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __iter__(self) -> Iterator[NodeKind]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


#: Built-in Franklin rules; every FranklinRenderer starts from a copy
FRANKLIN_RULES = RuleRegistry()


def _options(ctx: RenderContext) -> FranklinRendererOptions:
    options = getattr(ctx.renderer, "options", None)
    if isinstance(options, FranklinRendererOptions):
        return options
    return FranklinRendererOptions()


@FRANKLIN_RULES.register(NodeKind.DOCUMENT, NodeKind.EMBEDDED)
def render_passthrough(node: Node, ctx: RenderContext) -> str:
    return ctx.content(node)


@FRANKLIN_RULES.register(NodeKind.SECTION)
def render_section(node: Section, ctx: RenderContext) -> str:
    """Render a section as a flat ``<div>`` container.

    The fragment starts by closing every section container still open above
    this one. Only a section with no open ancestors closes its own container;
    a nested section leaves it to the closer of whatever follows, so the last
    nested section of a document stays unclosed.
    """
    tag = f"h{node.level + 1}"
    closer = ctx.close_sections()
    with ctx.section_scope():
        logger.debug(f"Section '{node.plain_title()}' at level {node.level}, depth {ctx.section_depth}")
        content = f"<{tag}>{ctx.title(node)}</{tag}>" + ctx.convert_all(node.blocks)
        return f"{closer}{SECTION_OPEN_TAG}{content}{'' if closer else SECTION_CLOSE_TAG}"


@FRANKLIN_RULES.register(NodeKind.PARAGRAPH)
def render_paragraph(node: Node, ctx: RenderContext) -> str:
    return f"<p>{ctx.content(node)}</p>"


@FRANKLIN_RULES.register(NodeKind.THEMATIC_BREAK)
def render_thematic_break(node: Node, ctx: RenderContext) -> str:
    return THEMATIC_BREAK_MARKUP


@FRANKLIN_RULES.register(NodeKind.ADMONITION)
def render_admonition(node: Node, ctx: RenderContext) -> str:
    """Render an admonition as a classed container.

    The title becomes an ``<h6>`` only when it is non-empty after trimming.
    """
    style = (node.style or "").lower()
    title = ctx.title(node).strip()
    heading = f"<h6>{title}</h6>" if title else ""
    return f'<div class="admonition {escape_attribute(style)}"><div>{heading}{ctx.content(node)}</div></div>'


@FRANKLIN_RULES.register(NodeKind.INLINE_QUOTED)
def render_inline_quoted(node: Inline, ctx: RenderContext) -> str:
    text = ctx.text(node)
    if node.quote_type == "strong":
        return f"<strong>{text}</strong>"
    logger.warning(f"Unhandled inline_quoted type '{node.quote_type}', rendering bare text")
    return text


def _render_list(tag: str, node: ListNode, ctx: RenderContext) -> str:
    content = ctx.convert_all(node.blocks)
    return f"<{tag}>{content}</{tag}>" if content else ""


@FRANKLIN_RULES.register(NodeKind.ULIST)
def render_ulist(node: ListNode, ctx: RenderContext) -> str:
    return _render_list("ul", node, ctx)


@FRANKLIN_RULES.register(NodeKind.OLIST)
def render_olist(node: ListNode, ctx: RenderContext) -> str:
    return _render_list("ol", node, ctx)


@FRANKLIN_RULES.register(NodeKind.LIST_ITEM)
def render_list_item(node: Node, ctx: RenderContext) -> str:
    """Render a list item, preferring its attached blocks over its text.

    When the attached content is itself a list it replaces the item
    entirely, so the principal text of such an item is not emitted.
    """
    linkify_urls = _options(ctx).linkify_list_items
    content = ctx.content(node)
    if linkify_urls:
        content = linkify(content)
    if content:
        return content if content.startswith(LIST_WRAPPER_PREFIXES) else f"<li>{content}</li>"
    text = ctx.text(node)
    if not text:
        return ""
    return f"<li>{linkify(text) if linkify_urls else text}</li>"


@FRANKLIN_RULES.register(NodeKind.INLINE_ANCHOR)
def render_inline_anchor(node: Inline, ctx: RenderContext) -> str:
    href = strip_document_suffix(node.target or "", _options(ctx).document_suffix)
    text = ctx.text(node) or escape_html(node.target or "")
    return f'<a href="{escape_attribute(href)}">{text}</a>'


class FranklinRenderer(BaseRenderer):
    """Dispatch nodes to custom rules, falling back to a default renderer.

    Parameters
    ----------
    options : FranklinRendererOptions or None, default = None
        Franklin rendering options
    base_renderer : BaseRenderer or None, default = None
        Renderer for node types without a rule; a new :class:`Html5Renderer`
        when omitted
    rules : RuleRegistry or None, default = None
        Rule catalogue; a copy of the built-in rules when omitted

    Notes
    -----
    The renderer holds no per-conversion state. The section depth and the
    current document live on the :class:`RenderContext` created for each
    top-level ``convert`` call, so one instance may be shared.

    """

    backend_name = BACKEND_FRANKLIN

    def __init__(
        self,
        options: FranklinRendererOptions | None = None,
        base_renderer: BaseRenderer | None = None,
        rules: RuleRegistry | None = None,
    ):
        """Initialize the Franklin renderer with options and collaborators."""
        BaseRenderer._validate_options_type(options, FranklinRendererOptions, BACKEND_FRANKLIN)
        options = options or FranklinRendererOptions()
        super().__init__(options)
        self.options: FranklinRendererOptions = options
        self.base_renderer = base_renderer or Html5Renderer()
        self.rules = rules if rules is not None else FRANKLIN_RULES.copy()

    def convert(
        self,
        node: Node,
        transform: str | NodeKind | None = None,
        opts: Optional[Mapping[str, Any]] = None,
        *,
        ctx: Optional[RenderContext] = None,
    ) -> str:
        """Render ``node`` with its rule, or with the base renderer.

        Parameters
        ----------
        node : Node
            Node to render
        transform : str, NodeKind or None, default = None
            Name to render the node as, instead of its own kind
        opts : Mapping or None, default = None
            Options forwarded to the base renderer; defaults to the options
            the conversion was started with
        ctx : RenderContext or None, default = None
            Traversal context; created for top-level calls

        Returns
        -------
        str
            Markup produced by the rule or by the base renderer, unchanged

        """
        ctx = self.begin(node, opts, ctx)
        name = self.resolve_name(node, transform)
        rule = self.rules.get(name)
        if rule is not None:
            return rule(node, ctx)

        logger.debug(f"No Franklin rule for '{name}', using {type(self.base_renderer).__name__}")
        return self.base_renderer.convert(node, transform, opts if opts is not None else ctx.opts, ctx=ctx)
