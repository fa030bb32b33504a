#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/ast/nodes.py
"""Node classes for the parsed AsciiDoc document tree.

This module defines the tree handed from the parser to the renderers. Every
node carries a :class:`NodeKind` identifying which rendering rule applies to
it, an ordered list of block children and an ordered list of inline children.

Node Hierarchy
--------------
Block-level nodes:
    - Document (root, owns document attributes and footnotes)
    - Section (hierarchical container with a level)
    - Block (paragraphs, admonitions, delimited blocks, breaks, images)
    - ListNode and ListItem
    - Table, with plain TableRow/TableCell records

Inline nodes:
    - Inline (anchors, quoted spans, breaks, images, footnotes)
    - Text (a run of literal text)

Every node except the Document holds a non-owning back reference to the
Document it belongs to. The reference is assigned when the Document is
created (see :meth:`Document.adopt`), so trees can be assembled bottom-up.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional


class NodeKind(str, Enum):
    """Identifier of every node type the renderers know about.

    The value doubles as the transform name passed to ``convert``. ``EMBEDDED``
    is never the kind of a node; it is the transform used to render a
    :class:`Document` without its outer document shell.
    """

    DOCUMENT = "document"
    EMBEDDED = "embedded"
    PREAMBLE = "preamble"
    SECTION = "section"
    PARAGRAPH = "paragraph"
    ADMONITION = "admonition"
    LISTING = "listing"
    LITERAL = "literal"
    QUOTE = "quote"
    SIDEBAR = "sidebar"
    EXAMPLE = "example"
    OPEN = "open"
    PASS = "pass"
    STEM = "stem"
    THEMATIC_BREAK = "thematic_break"
    PAGE_BREAK = "page_break"
    FLOATING_TITLE = "floating_title"
    IMAGE = "image"
    TABLE = "table"
    ULIST = "ulist"
    OLIST = "olist"
    DLIST = "dlist"
    LIST_ITEM = "list_item"
    INLINE_ANCHOR = "inline_anchor"
    INLINE_QUOTED = "inline_quoted"
    INLINE_BREAK = "inline_break"
    INLINE_IMAGE = "inline_image"
    INLINE_FOOTNOTE = "inline_footnote"
    TEXT = "text"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: "NodeKind | str") -> "NodeKind":
        """Return the member for ``value``, accepting members and plain strings.

        Hyphenated spellings (``"list-item"``) are accepted as aliases of the
        underscored names.

        Raises
        ------
        ValueError
            If ``value`` does not name a node kind

        """
        if isinstance(value, cls):
            return value
        return cls(str(value).replace("-", "_"))


# Kinds whose content is the verbatim source, escaped on output
VERBATIM_KINDS = frozenset({NodeKind.LISTING, NodeKind.LITERAL})
# Kinds whose source is emitted without any escaping
RAW_KINDS = frozenset({NodeKind.PASS, NodeKind.STEM})


@dataclass(eq=False)
class Node:
    """Base class for all tree nodes.

    Parameters
    ----------
    kind : NodeKind
        Type identifier used for rule lookup
    id : str or None, default = None
        Element identifier (section ids, block anchors)
    title : str or None, default = None
        Human title as plain source text
    title_inlines : list of Node, default = empty list
        Parsed inline nodes of the title; rendered in preference to ``title``
    style : str or None, default = None
        Style/variant tag (admonition kind, ``source`` for listings, ...)
    role : str or None, default = None
        Extra CSS-like role from ``[.role]``
    level : int, default = 0
        Nesting level; meaningful for sections and floating titles
    blocks : list of Node, default = empty list
        Ordered block children
    inlines : list of Node, default = empty list
        Ordered inline children
    attributes : dict, default = empty dict
        Block attributes collected by the parser
    document : Document or None
        Owning document, assigned by :meth:`Document.adopt`

    """

    kind: NodeKind = NodeKind.PARAGRAPH
    id: Optional[str] = None
    title: Optional[str] = None
    title_inlines: list[Node] = field(default_factory=list)
    style: Optional[str] = None
    role: Optional[str] = None
    level: int = 0
    blocks: list[Node] = field(default_factory=list)
    inlines: list[Node] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)
    document: Optional[Document] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.kind = NodeKind.coerce(self.kind)

    @property
    def node_name(self) -> str:
        """Return the type identifier used for dispatch."""
        return self.kind.value

    def children(self) -> Iterator[Node]:
        """Yield every direct child node, titles and inlines included."""
        yield from self.title_inlines
        yield from self.inlines
        yield from self.blocks

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.children():
            yield from child.walk()

    def plain_text(self) -> str:
        """Return the unrendered text of the inline children."""
        return "".join(child.plain_text() for child in self.inlines)

    def plain_title(self) -> str:
        """Return the title as plain text."""
        if self.title_inlines:
            return "".join(child.plain_text() for child in self.title_inlines)
        return self.title or ""


@dataclass(eq=False)
class Text(Node):
    """A run of literal text inside inline content.

    ``raw`` text comes from an inline passthrough and is emitted without
    escaping.
    """

    kind: NodeKind = NodeKind.TEXT
    text: str = ""
    raw: bool = False

    def plain_text(self) -> str:
        return self.text


@dataclass(eq=False)
class Inline(Node):
    """Inline node such as a link, a quoted span or an inline image.

    Parameters
    ----------
    target : str or None
        Link or image target
    anchor_type : str or None
        For ``inline_anchor``: ``"link"``, ``"xref"`` or ``"bare"``
    quote_type : str or None
        For ``inline_quoted``: ``"strong"``, ``"emphasis"``, ``"monospaced"``,
        ``"superscript"``, ``"subscript"``, ``"mark"`` or ``"unquoted"``
    alt : str or None
        Alternate text for inline images
    index : int or None
        Footnote number for ``inline_footnote``

    """

    kind: NodeKind = NodeKind.INLINE_QUOTED
    target: Optional[str] = None
    anchor_type: Optional[str] = None
    quote_type: Optional[str] = None
    alt: Optional[str] = None
    index: Optional[int] = None

    def plain_text(self) -> str:
        if self.kind == NodeKind.INLINE_BREAK:
            return "\n"
        if self.kind == NodeKind.INLINE_IMAGE:
            return self.alt or ""
        if self.kind == NodeKind.INLINE_FOOTNOTE:
            return ""
        text = super().plain_text()
        if not text and self.kind == NodeKind.INLINE_ANCHOR:
            return self.target or ""
        return text


@dataclass(eq=False)
class Block(Node):
    """Generic block: paragraph, admonition, delimited block, break or image.

    Parameters
    ----------
    source : str, default = ""
        Verbatim source for listing, literal, pass and stem blocks
    target : str or None
        Image target for block images

    """

    source: str = ""
    target: Optional[str] = None


@dataclass(eq=False)
class Section(Node):
    """Hierarchical container opened by a ``==`` heading.

    ``level`` is 1 for ``==``, 2 for ``===`` and so on; the document title
    (``=``) is not a section.
    """

    kind: NodeKind = NodeKind.SECTION
    level: int = 1


@dataclass(eq=False)
class ListItem(Node):
    """Item of an unordered, ordered or description list.

    The principal text lives in ``inlines``; nested lists and blocks attached
    with ``+`` continuations live in ``blocks``.

    Parameters
    ----------
    terms : list of list of Node
        Parsed terms of a description list entry
    checked : bool or None
        Checklist state, ``None`` for ordinary items

    """

    kind: NodeKind = NodeKind.LIST_ITEM
    terms: list[list[Node]] = field(default_factory=list)
    checked: Optional[bool] = None

    def children(self) -> Iterator[Node]:
        for term in self.terms:
            yield from term
        yield from super().children()


@dataclass(eq=False)
class ListNode(Node):
    """Unordered, ordered or description list; ``blocks`` holds the items."""

    kind: NodeKind = NodeKind.ULIST
    start: Optional[int] = None

    @property
    def items(self) -> list[Node]:
        return self.blocks


@dataclass(eq=False)
class TableCell:
    """A single table cell holding inline content."""

    inlines: list[Node] = field(default_factory=list)
    colspan: int = 1
    rowspan: int = 1


@dataclass(eq=False)
class TableRow:
    """An ordered row of cells."""

    cells: list[TableCell] = field(default_factory=list)


@dataclass(eq=False)
class Table(Node):
    """Table with optional header rows."""

    kind: NodeKind = NodeKind.TABLE
    header_rows: list[TableRow] = field(default_factory=list)
    body_rows: list[TableRow] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        rows = self.header_rows + self.body_rows
        return max((sum(cell.colspan for cell in row.cells) for row in rows), default=0)

    def children(self) -> Iterator[Node]:
        yield from super().children()
        for row in self.header_rows + self.body_rows:
            for cell in row.cells:
                yield from cell.inlines


@dataclass(eq=False)
class Footnote:
    """Footnote collected by the parser, numbered in order of appearance."""

    index: int
    id: Optional[str]
    inlines: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class Document(Node):
    """Root of the tree; one per conversion.

    Parameters
    ----------
    attributes : dict
        Document attributes (``:name: value`` entries plus API overrides)
    footnotes : list of Footnote
        Footnotes in order of appearance

    """

    kind: NodeKind = NodeKind.DOCUMENT
    footnotes: list[Footnote] = field(default_factory=list)

    def __post_init__(self) -> None:
        super().__post_init__()
        self.adopt()

    def adopt(self) -> None:
        """Point every descendant's ``document`` reference at this document."""
        for node in self.walk():
            if node is not self:
                node.document = self
        for footnote in self.footnotes:
            for inline in footnote.inlines:
                for node in inline.walk():
                    node.document = self

    def attr(self, name: str, default: Any = None) -> Any:
        """Look up a document attribute."""
        return self.attributes.get(name, default)

    def has_attr(self, name: str) -> bool:
        """Return True when the attribute is set (an empty value counts as set)."""
        return name in self.attributes

    def icons_enabled(self) -> bool:
        """Return True when the ``icons`` document attribute is set."""
        return self.has_attr("icons")

    @property
    def doctitle(self) -> str:
        return self.plain_title()

    def sections(self) -> Iterator[Section]:
        """Yield all sections in document order."""
        for node in self.walk():
            if isinstance(node, Section):
                yield node
