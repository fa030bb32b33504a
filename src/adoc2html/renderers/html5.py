#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/renderers/html5.py
"""HTML5 rendering of the document tree.

This module provides the Html5Renderer class, the baseline renderer with a
handler for every node kind. It produces the class vocabulary of the
Asciidoctor HTML5 backend (``paragraph``, ``admonitionblock``, ``sect1``,
``listingblock`` ...). It is registered as the ``html5`` backend and is the
fallback of the Franklin renderer for node types without a custom rule.

Child content is always obtained through the :class:`RenderContext`, so when
the renderer runs as a fallback the children of a block it renders are still
dispatched through the calling renderer.

"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from adoc2html.ast.nodes import (
    Block,
    Document,
    Inline,
    ListItem,
    ListNode,
    Node,
    NodeKind,
    Section,
    Table,
    TableCell,
    TableRow,
)
from adoc2html.constants import ADMONITION_CAPTIONS, BACKEND_HTML5, ORDERED_LIST_TYPES, QUOTE_TAGS
from adoc2html.exceptions import InvalidOptionsError, RenderingError
from adoc2html.options.html import HtmlRendererOptions
from adoc2html.renderers.base import BaseRenderer, RenderContext
from adoc2html.utils.html import escape_attribute, escape_html, sanitize_url

logger = logging.getLogger(__name__)


class Html5Renderer(BaseRenderer):
    """Render tree nodes to HTML5.

    Handlers are looked up by name as ``visit_<name>``; a name without a
    handler raises :class:`RenderingError`, so no node is dropped silently.

    Parameters
    ----------
    options : HtmlRendererOptions or None, default = None
        HTML rendering options

    Examples
    --------
        >>> from adoc2html.parsers.asciidoc import AsciiDocParser
        >>> doc = AsciiDocParser().parse("Hello *world*")
        >>> Html5Renderer().convert(doc, "embedded")
        '<div class="paragraph"><p>Hello <strong>world</strong></p></div>'

    """

    backend_name = BACKEND_HTML5

    def __init__(self, options: HtmlRendererOptions | None = None):
        """Initialize the HTML5 renderer with options."""
        BaseRenderer._validate_options_type(options, HtmlRendererOptions, BACKEND_HTML5)
        options = options or HtmlRendererOptions()
        super().__init__(options)
        self.options: HtmlRendererOptions = options

    def convert(
        self,
        node: Node,
        transform: str | NodeKind | None = None,
        opts: Optional[Mapping[str, Any]] = None,
        *,
        ctx: Optional[RenderContext] = None,
    ) -> str:
        """Render ``node`` as HTML5, optionally under another transform name.

        Raises
        ------
        RenderingError
            If no handler exists for the resolved name
        InvalidOptionsError
            If ``opts`` names a field HtmlRendererOptions does not define

        """
        ctx = self.begin(node, opts, ctx)
        name = self.resolve_name(node, transform).replace("-", "_")
        handler = getattr(self, f"visit_{name}", None)
        if handler is None:
            raise RenderingError(f"No HTML5 handler for node '{name}'", rendering_stage=name)
        options = self._resolve_options(opts if opts is not None else ctx.opts)
        return handler(node, ctx, options)

    def _resolve_options(self, overrides: Mapping[str, Any]) -> HtmlRendererOptions:
        """Apply per-call overrides on top of the configured options."""
        if not overrides:
            return self.options
        unknown = set(overrides) - HtmlRendererOptions.field_names()
        if unknown:
            raise InvalidOptionsError(
                converter_name=BACKEND_HTML5,
                message=f"Unknown HTML5 renderer option(s): {', '.join(sorted(unknown))}",
            )
        return self.options.create_updated(**overrides)

    # ------------------------------------------------------------------
    # Shared fragments
    # ------------------------------------------------------------------

    @staticmethod
    def _id_attr(node: Node) -> str:
        return f' id="{escape_attribute(node.id)}"' if node.id else ""

    @staticmethod
    def _role(node: Node) -> str:
        return f" {escape_attribute(node.role)}" if node.role else ""

    @staticmethod
    def _title_div(node: Node, ctx: RenderContext) -> str:
        title = ctx.title(node)
        return f'<div class="title">{title}</div>' if title else ""

    def _footnotes(self, doc: Document, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        if not options.include_footnotes or not doc.footnotes:
            return ""
        parts = ['<div id="footnotes"><hr>']
        for footnote in doc.footnotes:
            text = ctx.convert_all(footnote.inlines)
            parts.append(
                f'<div class="footnote" id="_footnotedef_{footnote.index}">'
                f'<a href="#_footnoteref_{footnote.index}">{footnote.index}</a>. {text}</div>'
            )
        parts.append("</div>")
        return "".join(parts)

    # ------------------------------------------------------------------
    # Document structure
    # ------------------------------------------------------------------

    def visit_document(self, node: Document, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        """Render a complete standalone HTML document."""
        title = ctx.title(node)
        language = node.attr("lang", options.language)
        parts = [
            "<!DOCTYPE html>",
            f'<html lang="{escape_attribute(str(language))}">',
            "<head>",
            '<meta charset="UTF-8">',
            '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
            f"<title>{title or 'Untitled'}</title>",
        ]
        if options.stylesheet:
            parts.append(f'<link rel="stylesheet" href="{escape_attribute(options.stylesheet)}">')
        parts.append("</head>")
        parts.append('<body class="article">')
        if title:
            parts.append(f'<div id="header"><h1>{title}</h1></div>')
        parts.append(f'<div id="content">{ctx.content(node)}</div>')
        footnotes = self._footnotes(node, ctx, options)
        if footnotes:
            parts.append(footnotes)
        parts.append("</body>")
        parts.append("</html>")
        return "\n".join(parts)

    def visit_embedded(self, node: Document, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        """Render the document body without the outer HTML shell."""
        parts = []
        show_title = options.show_title or node.has_attr("showtitle")
        if show_title and (node.title or node.title_inlines):
            parts.append(f"<h1>{ctx.title(node)}</h1>")
        parts.append(ctx.content(node))
        if isinstance(node, Document):
            parts.append(self._footnotes(node, ctx, options))
        return "".join(parts)

    def visit_preamble(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return f'<div id="preamble"><div class="sectionbody">{ctx.content(node)}</div></div>'

    def visit_section(self, node: Section, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        """Render a section as nested ``sectN`` containers."""
        level = node.level
        tag = f"h{level + 1}"
        id_attr = self._id_attr(node) if options.section_ids else ""
        heading = f"<{tag}{id_attr}>{ctx.title(node)}</{tag}>"
        content = ctx.content(node)
        if level == 1:
            return f'<div class="sect1{self._role(node)}">{heading}<div class="sectionbody">{content}</div></div>'
        return f'<div class="sect{level}{self._role(node)}">{heading}{content}</div>'

    def visit_floating_title(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        tag = f"h{node.level + 1}"
        return f'<{tag}{self._id_attr(node)} class="discrete{self._role(node)}">{ctx.title(node)}</{tag}>'

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def visit_paragraph(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return (
            f'<div{self._id_attr(node)} class="paragraph{self._role(node)}">'
            f"{self._title_div(node, ctx)}<p>{ctx.content(node)}</p></div>"
        )

    def visit_admonition(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        """Render an admonition as an icon/content table.

        With the ``icons`` document attribute set the icon cell holds a font
        icon, otherwise the caption text.
        """
        name = (node.style or "note").lower()
        caption = node.attributes.get("caption") or ADMONITION_CAPTIONS.get(name, name.title())
        if ctx.icons_enabled():
            icon = f'<i class="fa icon-{escape_attribute(name)}" title="{escape_attribute(caption)}"></i>'
        else:
            icon = f'<div class="title">{escape_html(caption)}</div>'
        return (
            f'<div{self._id_attr(node)} class="admonitionblock {escape_attribute(name)}{self._role(node)}">'
            f'<table><tr><td class="icon">{icon}</td>'
            f'<td class="content">{self._title_div(node, ctx)}{ctx.content(node)}</td></tr></table></div>'
        )

    def visit_listing(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        language = node.attributes.get("language")
        content = ctx.content(node)
        if node.style == "source" and language:
            lang = escape_attribute(language)
            pre = f'<pre class="highlight"><code class="language-{lang}" data-lang="{lang}">{content}</code></pre>'
        elif node.style == "source":
            pre = f'<pre class="highlight"><code>{content}</code></pre>'
        else:
            pre = f"<pre>{content}</pre>"
        return (
            f'<div{self._id_attr(node)} class="listingblock{self._role(node)}">'
            f'{self._title_div(node, ctx)}<div class="content">{pre}</div></div>'
        )

    def visit_literal(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return (
            f'<div{self._id_attr(node)} class="literalblock{self._role(node)}">'
            f'{self._title_div(node, ctx)}<div class="content"><pre>{ctx.content(node)}</pre></div></div>'
        )

    def visit_quote(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        parts = [
            f'<div{self._id_attr(node)} class="quoteblock{self._role(node)}">',
            self._title_div(node, ctx),
            f"<blockquote>{ctx.content(node)}</blockquote>",
        ]
        attribution = node.attributes.get("attribution")
        citetitle = node.attributes.get("citetitle")
        if attribution or citetitle:
            parts.append('<div class="attribution">')
            if attribution:
                parts.append(f"&#8212; {escape_html(attribution)}")
            if citetitle:
                parts.append(f"<br><cite>{escape_html(citetitle)}</cite>")
            parts.append("</div>")
        parts.append("</div>")
        return "".join(parts)

    def visit_sidebar(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return (
            f'<div{self._id_attr(node)} class="sidebarblock{self._role(node)}">'
            f'<div class="content">{self._title_div(node, ctx)}{ctx.content(node)}</div></div>'
        )

    def visit_example(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return (
            f'<div{self._id_attr(node)} class="exampleblock{self._role(node)}">'
            f'{self._title_div(node, ctx)}<div class="content">{ctx.content(node)}</div></div>'
        )

    def visit_open(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return (
            f'<div{self._id_attr(node)} class="openblock{self._role(node)}">'
            f'{self._title_div(node, ctx)}<div class="content">{ctx.content(node)}</div></div>'
        )

    def visit_pass(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return ctx.content(node)

    def visit_stem(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return (
            f'<div{self._id_attr(node)} class="stemblock{self._role(node)}">'
            f'{self._title_div(node, ctx)}<div class="content">\\[{escape_html(node.source)}\\]</div></div>'
        )

    def visit_thematic_break(self, node: Node, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return "<hr>"

    def visit_page_break(self, node: Node, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return '<div style="page-break-after: always;"></div>'

    def visit_image(self, node: Block, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        alt = node.attributes.get("alt") or ""
        size = "".join(
            f' {dim}="{escape_attribute(str(node.attributes[dim]))}"'
            for dim in ("width", "height")
            if node.attributes.get(dim)
        )
        img = f'<img src="{escape_attribute(sanitize_url(node.target or ""))}" alt="{escape_attribute(alt)}"{size}>'
        return (
            f'<div{self._id_attr(node)} class="imageblock{self._role(node)}">'
            f'<div class="content">{img}</div>{self._title_div(node, ctx)}</div>'
        )

    def visit_table(self, node: Table, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        """Render a table with optional caption, header and body sections."""
        parts = [f'<table{self._id_attr(node)} class="tableblock frame-all grid-all stretch{self._role(node)}">']
        title = ctx.title(node)
        if title:
            parts.append(f'<caption class="title">{title}</caption>')
        if node.header_rows:
            parts.append("<thead>")
            parts.extend(self._table_row(row, ctx, header=True) for row in node.header_rows)
            parts.append("</thead>")
        if node.body_rows:
            parts.append("<tbody>")
            parts.extend(self._table_row(row, ctx, header=False) for row in node.body_rows)
            parts.append("</tbody>")
        parts.append("</table>")
        return "".join(parts)

    def _table_row(self, row: TableRow, ctx: RenderContext, header: bool) -> str:
        return "<tr>" + "".join(self._table_cell(cell, ctx, header) for cell in row.cells) + "</tr>"

    @staticmethod
    def _table_cell(cell: TableCell, ctx: RenderContext, header: bool) -> str:
        spans = ""
        if cell.colspan > 1:
            spans += f' colspan="{cell.colspan}"'
        if cell.rowspan > 1:
            spans += f' rowspan="{cell.rowspan}"'
        text = ctx.convert_all(cell.inlines)
        if header:
            return f'<th class="tableblock halign-left valign-top"{spans}>{text}</th>'
        return f'<td class="tableblock halign-left valign-top"{spans}><p class="tableblock">{text}</p></td>'

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def visit_ulist(self, node: ListNode, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        checklist = any(isinstance(item, ListItem) and item.checked is not None for item in node.blocks)
        css = "ulist checklist" if checklist else "ulist"
        ul_class = ' class="checklist"' if checklist else ""
        return (
            f'<div{self._id_attr(node)} class="{css}{self._role(node)}">{self._title_div(node, ctx)}'
            f"<ul{ul_class}>{ctx.convert_all(node.blocks)}</ul></div>"
        )

    def visit_olist(self, node: ListNode, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        style = escape_attribute(node.style or "arabic")
        start = f' start="{node.start}"' if node.start is not None and node.start != 1 else ""
        list_type = ORDERED_LIST_TYPES.get(node.style or "")
        if list_type:
            start = f' type="{list_type}"{start}'
        return (
            f'<div{self._id_attr(node)} class="olist {style}{self._role(node)}">{self._title_div(node, ctx)}'
            f'<ol class="{style}"{start}>{ctx.convert_all(node.blocks)}</ol></div>'
        )

    def visit_dlist(self, node: ListNode, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        """Render a description list; entries are rendered in place."""
        parts = [f'<div{self._id_attr(node)} class="dlist{self._role(node)}">', self._title_div(node, ctx), "<dl>"]
        for item in node.blocks:
            terms = item.terms if isinstance(item, ListItem) else []
            for term in terms:
                parts.append(f'<dt class="hdlist1">{ctx.convert_all(term)}</dt>')
            text = ctx.text(item)
            content = ctx.content(item)
            if text or content:
                parts.append("<dd>")
                if text:
                    parts.append(f"<p>{text}</p>")
                parts.append(content)
                parts.append("</dd>")
        parts.append("</dl></div>")
        return "".join(parts)

    def visit_list_item(self, node: ListItem, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        checkbox = ""
        if getattr(node, "checked", None) is not None:
            checkbox = "&#10003; " if node.checked else "&#10063; "
        text = ctx.text(node)
        paragraph = f"<p>{checkbox}{text}</p>" if text or checkbox else ""
        return f"<li>{paragraph}{ctx.content(node)}</li>"

    # ------------------------------------------------------------------
    # Inline nodes
    # ------------------------------------------------------------------

    def visit_inline_anchor(self, node: Inline, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        target = sanitize_url(node.target or "")
        text = ctx.text(node)
        window = node.attributes.get("window")
        extra = f' target="{escape_attribute(window)}"' if window else ""
        if window == "_blank":
            extra += ' rel="noopener"'
        if node.anchor_type == "bare":
            return f'<a href="{escape_attribute(target)}" class="bare"{extra}>{text or escape_html(target)}</a>'
        if node.anchor_type == "xref" and not text and target.startswith("#"):
            text = f"[{escape_html(target[1:])}]"
        role = f' class="{escape_attribute(node.role)}"' if node.role else ""
        return f'<a href="{escape_attribute(target)}"{role}{extra}>{text or escape_html(target)}</a>'

    def visit_inline_quoted(self, node: Inline, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        text = ctx.text(node)
        tags = QUOTE_TAGS.get(node.quote_type or "")
        if tags is None:
            if node.role:
                return f'<span class="{escape_attribute(node.role)}">{text}</span>'
            return text
        open_tag, close_tag = tags
        if node.role and open_tag.startswith("<"):
            open_tag = f'{open_tag[:-1]} class="{escape_attribute(node.role)}">'
        return f"{open_tag}{text}{close_tag}"

    def visit_inline_break(self, node: Inline, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return "<br>"

    def visit_inline_image(self, node: Inline, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return (
            f'<span class="image"><img src="{escape_attribute(sanitize_url(node.target or ""))}" '
            f'alt="{escape_attribute(node.alt or "")}"></span>'
        )

    def visit_inline_footnote(self, node: Inline, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        index = node.index
        return (
            f'<sup class="footnote">[<a id="_footnoteref_{index}" class="footnote" '
            f'href="#_footnotedef_{index}" title="View footnote.">{index}</a>]</sup>'
        )

    def visit_text(self, node: Node, ctx: RenderContext, options: HtmlRendererOptions) -> str:
        return ctx.text(node)
