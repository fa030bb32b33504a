#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2html/parsers/asciidoc.py
"""AsciiDoc to document tree parser.

This module turns AsciiDoc source into the node tree consumed by the
renderers. It uses a two-stage process: a line lexer classifies every source
line, then a recursive-descent parser assembles blocks, nests sections and
parses inline markup.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import PurePosixPath
from typing import Any, Callable, Optional

from adoc2html.ast.nodes import (
    Block,
    Document,
    Footnote,
    Inline,
    ListItem,
    ListNode,
    Node,
    NodeKind,
    Section,
    Table,
    TableCell,
    TableRow,
    Text,
)
from adoc2html.constants import (
    ADMONITION_STYLES,
    DEFAULT_DOCUMENT_ATTRIBUTES,
    DEFAULT_OUTFILESUFFIX,
    INTRINSIC_ATTRIBUTES,
    MAX_SECTION_LEVEL,
    ORDERED_LIST_STYLES,
    SOURCE_DOCUMENT_SUFFIX,
    STEM_STYLES,
)
from adoc2html.exceptions import Adoc2HtmlError, ParsingError
from adoc2html.options.asciidoc import AsciiDocParserOptions
from adoc2html.parsers.base import BaseParser, ParserInput
from adoc2html.utils.html import is_url_safe
from adoc2html.utils.text import make_unique_id, section_id

logger = logging.getLogger(__name__)


class TokenType(Enum):
    """Token types for AsciiDoc lexer."""

    # Structure
    HEADING = auto()
    DELIMITER = auto()
    THEMATIC_BREAK = auto()
    PAGE_BREAK = auto()
    BLOCK_IMAGE = auto()

    # List markers
    UNORDERED_LIST = auto()
    ORDERED_LIST = auto()
    CHECKLIST_ITEM = auto()
    DESCRIPTION_TERM = auto()
    LIST_CONTINUATION = auto()

    # Attributes and metadata
    ATTRIBUTE = auto()
    BLOCK_ATTRIBUTE = auto()
    BLOCK_TITLE = auto()
    ANCHOR = auto()

    # Text
    ADMONITION_PARAGRAPH = auto()
    COMMENT = auto()
    BLANK_LINE = auto()
    TEXT_LINE = auto()
    EOF = auto()


LIST_ITEM_TYPES = frozenset({TokenType.UNORDERED_LIST, TokenType.ORDERED_LIST, TokenType.CHECKLIST_ITEM})
LIST_TOKEN_TYPES = LIST_ITEM_TYPES | {TokenType.DESCRIPTION_TERM}


@dataclass
class Token:
    """Represents a token from the lexer.

    Parameters
    ----------
    type : TokenType
        Type of the token
    content : str
        Token content/value
    line_num : int
        Line number in source (zero based)
    indent : int
        Indentation level
    raw : str
        The source line as written
    metadata : dict
        Additional token metadata

    """

    type: TokenType
    content: str
    line_num: int
    indent: int = 0
    raw: str = ""
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        """Initialize metadata if not provided."""
        if self.metadata is None:
            self.metadata = {}

    @property
    def marker(self) -> Optional[str]:
        return self.metadata.get("marker") if self.metadata else None


# Delimiter character -> kind of delimited block (lines of four or more)
_DELIMITER_KINDS = {
    "-": NodeKind.LISTING,
    ".": NodeKind.LITERAL,
    "_": NodeKind.QUOTE,
    "*": NodeKind.SIDEBAR,
    "=": NodeKind.EXAMPLE,
    "+": NodeKind.PASS,
    "/": "comment",
}


class AsciiDocLexer:
    """Tokenizer for AsciiDoc content.

    This lexer performs line-by-line tokenization of AsciiDoc content,
    identifying block delimiters, list markers, attributes, and text.

    Parameters
    ----------
    content : str
        AsciiDoc content to tokenize

    """

    heading_pattern = re.compile(rf"^(={{1,{MAX_SECTION_LEVEL + 1}}})\s+(\S.*?)(?:\s+=+)?$")
    table_pattern = re.compile(r"^\|={3,}$")
    thematic_pattern = re.compile(r"^(?:'{3,}|-{3}|\*{3}|- - -|\* \* \*)$")
    checklist_pattern = re.compile(r"^(\*{1,5}|-)\s+\[([ xX*])\]\s+(.*)$")
    ul_pattern = re.compile(r"^(\*{1,5}|-)\s+(.*)$")
    ol_pattern = re.compile(r"^(\.{1,5})\s+(.*)$")
    ol_number_pattern = re.compile(r"^(\d+)\.\s+(.*)$")
    desc_pattern = re.compile(r"^(?!\s)(.*?\S)(:{2,4}|;;)(?:\s+(.*))?$")
    attribute_pattern = re.compile(r"^:(!?)(\w[\w-]*)(!?):(?:\s+(.*?))?\s*$")
    anchor_pattern = re.compile(r"^\[\[([\w:][\w:.-]*)(?:,\s*(.+?))?\]\]$")
    block_attr_pattern = re.compile(r"^\[([^\[].*)?\]$")
    block_title_pattern = re.compile(r"^\.([^.\s].*)$")
    block_image_pattern = re.compile(r"^image::(\S+?)\[(.*)\]$")
    admonition_pattern = re.compile(rf"^({'|'.join(ADMONITION_STYLES)}):\s+(.*)$")

    def __init__(self, content: str):
        """Initialize the lexer with content."""
        self.lines = content.splitlines()
        self.current_line = 0
        self.tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the content into a list of tokens.

        Returns
        -------
        list[Token]
            List of tokens, terminated by an EOF token

        """
        while self.current_line < len(self.lines):
            line = self.lines[self.current_line]
            token = self._tokenize_line(line, self.current_line)
            self.tokens.append(token)
            self.current_line += 1

        self.tokens.append(Token(type=TokenType.EOF, content="", line_num=self.current_line))
        return self.tokens

    def _tokenize_line(self, line: str, line_num: int) -> Token:
        """Tokenize a single line."""
        indent = len(line) - len(line.lstrip())
        stripped = line.strip()

        def make(token_type: TokenType, content: str, **metadata: Any) -> Token:
            return Token(token_type, content, line_num, indent, line, metadata)

        if not stripped:
            return make(TokenType.BLANK_LINE, "")

        # Delimited blocks: four or more of the same character, "--" and "|==="
        if stripped == "--":
            return make(TokenType.DELIMITER, stripped, kind=NodeKind.OPEN)
        if self.table_pattern.match(stripped):
            return make(TokenType.DELIMITER, stripped, kind="table")
        if len(stripped) >= 4 and stripped[0] in _DELIMITER_KINDS and stripped == stripped[0] * len(stripped):
            return make(TokenType.DELIMITER, stripped, kind=_DELIMITER_KINDS[stripped[0]])

        if stripped.startswith("//"):
            return make(TokenType.COMMENT, stripped[2:].strip())

        if self.thematic_pattern.match(stripped):
            return make(TokenType.THEMATIC_BREAK, stripped)
        if stripped == "<<<":
            return make(TokenType.PAGE_BREAK, stripped)
        if stripped == "+":
            return make(TokenType.LIST_CONTINUATION, stripped)

        heading_match = self.heading_pattern.match(stripped)
        if heading_match and indent == 0:
            return make(TokenType.HEADING, heading_match.group(2), level=len(heading_match.group(1)))

        anchor_match = self.anchor_pattern.match(stripped)
        if anchor_match:
            return make(TokenType.ANCHOR, anchor_match.group(1), reftext=anchor_match.group(2))

        image_match = self.block_image_pattern.match(stripped)
        if image_match:
            return make(TokenType.BLOCK_IMAGE, image_match.group(1), attrlist=image_match.group(2))

        block_attr_match = self.block_attr_pattern.match(stripped)
        if block_attr_match:
            return make(TokenType.BLOCK_ATTRIBUTE, block_attr_match.group(1) or "")

        attr_match = self.attribute_pattern.match(stripped)
        if attr_match:
            is_unset = bool(attr_match.group(1) or attr_match.group(3))
            attr_value = attr_match.group(4) or ""
            # A value ending with " \" continues on the next line
            while attr_value.endswith(" \\") and self.current_line + 1 < len(self.lines):
                self.current_line += 1
                attr_value = attr_value[:-2] + " " + self.lines[self.current_line].strip()
            return make(TokenType.ATTRIBUTE, attr_match.group(2), value=attr_value, unset=is_unset)

        title_match = self.block_title_pattern.match(stripped)
        if title_match:
            return make(TokenType.BLOCK_TITLE, title_match.group(1))

        checklist_match = self.checklist_pattern.match(stripped)
        if checklist_match:
            checked = checklist_match.group(2) in ("x", "X", "*")
            return make(
                TokenType.CHECKLIST_ITEM, checklist_match.group(3), marker=checklist_match.group(1), checked=checked
            )

        ul_match = self.ul_pattern.match(stripped)
        if ul_match:
            return make(TokenType.UNORDERED_LIST, ul_match.group(2), marker=ul_match.group(1))

        ol_match = self.ol_pattern.match(stripped)
        if ol_match:
            return make(TokenType.ORDERED_LIST, ol_match.group(2), marker=ol_match.group(1))

        ol_number_match = self.ol_number_pattern.match(stripped)
        if ol_number_match:
            return make(
                TokenType.ORDERED_LIST, ol_number_match.group(2), marker="1.", number=int(ol_number_match.group(1))
            )

        admonition_match = self.admonition_pattern.match(stripped)
        if admonition_match:
            return make(TokenType.ADMONITION_PARAGRAPH, admonition_match.group(2), style=admonition_match.group(1))

        desc_match = self.desc_pattern.match(stripped)
        if desc_match and indent == 0:
            return make(
                TokenType.DESCRIPTION_TERM,
                desc_match.group(1),
                marker=desc_match.group(2),
                description=desc_match.group(3) or "",
            )

        return make(TokenType.TEXT_LINE, stripped)


# Placeholders used while parsing inline markup
_ESCAPE_MARK = "\x00E{}\x00"
_PASS_MARK = "\x00P{}\x00"
_BREAK_MARK = "\x00B\x00"
_ESCAPE_PLACEHOLDER = re.compile(r"\x00E(\d+)\x00")

_ESCAPED_CHAR = re.compile(r"\\([*_`~^#{}\[\]\\+!:<>])")
_PASSTHROUGH = re.compile(
    r"(?<!\\)\+\+\+(.+?)\+\+\+"
    r"|(?<!\\)pass:[a-z,]*\[(.*?)\]"
    r"|(?<!\\)\+\+(.+?)\+\+"
    r"|(?<![\w+\\])\+(\S|\S.*?\S)\+(?![\w+])",
    re.DOTALL,
)
_ATTRIBUTE_REF = re.compile(r"\{(\w[\w-]*)\}")
_ATTRLIST_ITEM = re.compile(r'(?:"[^"]*"|\'[^\']*\'|[^,])+')
_NAMED_ATTRIBUTE = re.compile(r"^\s*([\w-]+)\s*=(.*)$", re.DOTALL)
_SHORTHAND = re.compile(r"([#.%])([^#.%]+)")
_LINK_ATTRIBUTES = re.compile(r",\s*[\w-]+\s*=")

# Separator of table cells, optionally preceded by a span specifier such as 2+ or .3+
_CELL_SEPARATOR = re.compile(r"(?:(?:^|(?<=\s))(?P<spec>(?:\d+(?:\.\d+)?|\.\d+)[+*])[ademhlsv]?)?(?<!\\)\|")
_CELL_SPEC = re.compile(r"^(\d+)?(?:\.(\d+))?([+*])$")

_STYLE_KINDS = {
    "source": NodeKind.LISTING,
    "listing": NodeKind.LISTING,
    "literal": NodeKind.LITERAL,
    "pass": NodeKind.PASS,
    "quote": NodeKind.QUOTE,
    "verse": NodeKind.QUOTE,
    "sidebar": NodeKind.SIDEBAR,
    "example": NodeKind.EXAMPLE,
    **{style: NodeKind.STEM for style in STEM_STYLES},
}
_VERBATIM_STYLE_KINDS = frozenset({NodeKind.LISTING, NodeKind.LITERAL, NodeKind.PASS, NodeKind.STEM})

# Block attribute keys consumed by the parser itself
_STRUCTURAL_KEYS = frozenset({"id", "role", "title", "style", "options", "reftext", "1", "2", "3"})

InlineBuilder = Callable[[re.Match], Optional[list[Node]]]


class AsciiDocParser(BaseParser):
    r"""Convert AsciiDoc to a document tree.

    Supported Features
    ------------------
    - Document header: ``= Title``, author and revision lines, attribute entries
    - Document attributes (``:name: value``, ``:name!:``), attribute references
    - Nested sections (``==`` through ``======``), automatic unique section ids,
      preamble, discrete headings
    - Block titles (``.Title``), anchors (``[[id]]``) and block attribute lists
      (``[NOTE]``, ``[source,python]``, ``[#id.role%option]``, ``[quote, who]``)
    - Paragraphs, literal paragraphs, admonition paragraphs (``NOTE: text``)
    - Delimited blocks: listing, literal, quote, sidebar, example, open, pass,
      comment; admonition and stem styles
    - Thematic and page breaks, block images, tables
    - Unordered, ordered, checklist and description lists with nesting and
      ``+`` list continuation
    - Inline: strong, emphasis, monospace, mark, superscript, subscript,
      curved quotes, roles, links, bare URLs, cross references, inline images,
      footnotes, passthroughs, hard line breaks, backslash escapes

    Limitations
    -----------
    - No support for: includes, conditionals, callouts, text replacements
    - Table cells are inline only (no ``a|`` AsciiDoc cells)

    Parameters
    ----------
    options : AsciiDocParserOptions or None, default = None
        Parser configuration options

    Examples
    --------
    Basic parsing:

        >>> parser = AsciiDocParser()
        >>> doc = parser.parse("= Title\n\nThis is *bold*.")
        >>> doc.doctitle
        'Title'

    """

    def __init__(self, options: AsciiDocParserOptions | None = None):
        """Initialize the AsciiDoc parser."""
        BaseParser._validate_options_type(options, AsciiDocParserOptions, "asciidoc")
        options = options or AsciiDocParserOptions()
        super().__init__(options)
        self.options: AsciiDocParserOptions = options

        self._setup_inline_patterns()
        self._reset()

    def _reset(self) -> None:
        """Reset per-document parser state."""
        self.tokens: list[Token] = []
        self.current_token_index = 0
        self.attributes: dict[str, Any] = dict(DEFAULT_DOCUMENT_ATTRIBUTES)
        self._locked_attributes: set[str] = set()
        self.pending_block_attrs: dict[str, Any] = {}
        self._escapes: list[str] = []
        self._passthroughs: list[Node] = []
        self._footnotes: list[Footnote] = []
        self._footnote_ids: dict[str, int] = {}
        self._seen_ids: dict[str, int] = {}
        self._refs: dict[str, Node] = {}

        for name, value in self.options.attributes.items():
            soft = isinstance(value, str) and value.endswith("@")
            if soft:
                value = value[:-1]
            if value is None or value is False:
                self.attributes.pop(name, None)
            else:
                self.attributes[name] = "" if value is True else str(value)
            if not soft:
                self._locked_attributes.add(name)

    def _setup_inline_patterns(self) -> None:
        """Set up the ordered inline rules.

        Each rule is a pattern matched at the current position plus a builder
        producing nodes from the match. Earlier rules win when several match
        at the same position.
        """
        rules: list[tuple[str, InlineBuilder]] = [
            (re.escape(_BREAK_MARK), lambda m: [Inline(kind=NodeKind.INLINE_BREAK)]),
            (r"\x00P(\d+)\x00", lambda m: [self._passthroughs[int(m.group(1))]]),
            (r"image:(?!:)([^\s\[]+)\[([^\]]*)\]", self._build_inline_image),
            (r"footnote:([\w-]*)\[([^\]]*)\]", self._build_footnote),
            (r"footnoteref:\[([^\],]+)(?:,([^\]]*))?\]", self._build_footnoteref),
            (r"link:([^\s\[]+)\[([^\]]*)\]", self._build_link_macro),
            (r"xref:([^\s\[]+)\[([^\]]*)\]", self._build_xref),
            (r"<<([^\s,>][^,>]*?)(?:,\s*([^>]+?))?>>", self._build_xref),
            (r"(?<![\w/=\"'])((?:https?|ftp|irc)://[^\s\[\]<>\"]+)\[([^\]]*)\]", self._build_url_macro),
        ]
        if self.options.autolink_urls:
            rules.append(
                (r"(?<![\w/=\"'])((?:https?|ftp|irc)://[^\s\[\]<>\"]*[^\s\[\]<>\".,;:!?)'])", self._build_bare_url)
            )
        rules.extend(
            [
                (r"\[\.?([\w][\w.-]*)\]##(.+?)##", self._build_role_span),
                (r"\[\.?([\w][\w.-]*)\]#([^#]+?)#", self._build_role_span),
            ]
        )
        if self.options.support_unconstrained_formatting:
            rules.extend(
                [
                    (r"\*\*(.+?)\*\*", self._quoted("strong")),
                    (r"__(.+?)__", self._quoted("emphasis")),
                    (r"``(.+?)``", self._quoted("monospaced")),
                    (r"##(.+?)##", self._quoted("mark")),
                ]
            )
        rules.extend(
            [
                (r"\"`(.+?)`\"", self._quoted("double")),
                (r"'`(.+?)`'", self._quoted("single")),
                (r"(?<![\w*])\*(\S|\S.*?\S)\*(?![\w*])", self._quoted("strong")),
                (r"(?<![\w_])_(\S|\S.*?\S)_(?![\w_])", self._quoted("emphasis")),
                (r"(?<![\w`])`(\S|\S.*?\S)`(?![\w`])", self._quoted("monospaced")),
                (r"(?<![\w#])#(\S|\S.*?\S)#(?![\w#])", self._quoted("mark")),
                (r"\^(\S+?)\^", self._quoted("superscript")),
                (r"~(\S+?)~", self._quoted("subscript")),
            ]
        )

        self._inline_rules = [(re.compile(pattern, re.DOTALL), builder) for pattern, builder in rules]
        # A single pattern finding the start of the next construct of any kind
        self._combined_inline_pattern = re.compile("|".join(f"(?:{p})" for p, _ in rules), re.DOTALL)

    # ------------------------------------------------------------------
    # Entry point and token navigation
    # ------------------------------------------------------------------

    def parse(self, input_data: ParserInput) -> Document:
        """Parse AsciiDoc input into a Document tree.

        Parameters
        ----------
        input_data : str, Path, IO, or bytes
            AsciiDoc input to parse: source text, a file path, a file-like
            object or raw bytes

        Returns
        -------
        Document
            Root of the parsed tree

        Raises
        ------
        ParsingError
            If parsing fails

        """
        content = self._load_text_content(input_data)
        self._reset()

        try:
            self.tokens = AsciiDocLexer(content).tokenize()
            logger.debug(f"Tokenized {len(self.tokens) - 1} lines")
            title, title_inlines = self._parse_header()
            blocks = self._parse_body()
        except Adoc2HtmlError:
            raise
        except Exception as e:
            line = self._current_token().line_num + 1 if self.tokens else 0
            raise ParsingError(
                f"Failed to parse AsciiDoc near line {line}: {e}", parsing_stage="block", original_error=e
            ) from e

        if title is not None and any(isinstance(node, Section) for node in blocks):
            blocks = self._wrap_preamble(blocks)

        self._resolve_xref_text(blocks)
        return Document(
            title=title,
            title_inlines=title_inlines,
            blocks=blocks,
            attributes=dict(self.attributes),
            footnotes=list(self._footnotes),
        )

    def _current_token(self) -> Token:
        if self.current_token_index < len(self.tokens):
            return self.tokens[self.current_token_index]
        return self.tokens[-1]  # EOF

    def _peek_token(self, offset: int = 1) -> Token:
        index = self.current_token_index + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return self.tokens[-1]

    def _advance(self) -> Token:
        """Advance to the next token and return the previous one."""
        token = self._current_token()
        if token.type != TokenType.EOF:
            self.current_token_index += 1
        return token

    def _skip_blank_lines(self) -> None:
        while self._current_token().type in (TokenType.BLANK_LINE, TokenType.COMMENT):
            self._advance()

    def _at_blank_then(self, predicate: Callable[[Token], bool]) -> bool:
        """Return True if the next non-blank token satisfies ``predicate``."""
        offset = 0
        while self._peek_token(offset).type in (TokenType.BLANK_LINE, TokenType.COMMENT):
            offset += 1
        return predicate(self._peek_token(offset))

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def _apply_attribute_entry(self, token: Token) -> None:
        """Set or unset a document attribute from an attribute entry."""
        if not self.options.parse_attributes:
            return
        name = token.content
        if name in self._locked_attributes:
            logger.debug(f"Attribute '{name}' is locked by the API, ignoring entry on line {token.line_num + 1}")
            return
        if token.metadata and token.metadata.get("unset"):
            self.attributes.pop(name, None)
        else:
            value = token.metadata.get("value", "") if token.metadata else ""
            self.attributes[name] = self._substitute_attributes(value)

    def _substitute_attributes(self, text: str) -> str:
        """Replace ``{name}`` references with attribute values."""
        if not self.options.resolve_attribute_refs or "{" not in text:
            return text

        def replace(match: re.Match) -> str:
            name = match.group(1)
            if name in self.attributes:
                return str(self.attributes[name])
            if name in INTRINSIC_ATTRIBUTES:
                return INTRINSIC_ATTRIBUTES[name]
            policy = self.options.attribute_missing_policy
            if policy == "blank":
                return ""
            if policy == "warn":
                logger.warning(f"Undefined attribute reference: {{{name}}}")
            return match.group(0)

        return _ATTRIBUTE_REF.sub(replace, text)

    def _parse_block_attribute(self, attr_content: str) -> None:
        """Parse a block attribute list into the pending attributes.

        Handles the first positional attribute as the block style with
        ``#id``, ``.role`` and ``%option`` shorthands (``[source#main.lead]``),
        further positional attributes by position and ``name=value`` pairs by
        name. Successive attribute lines accumulate.
        """
        attrs = self.pending_block_attrs
        content = self._substitute_attributes(attr_content.strip())
        positional = 0
        for item in _ATTRLIST_ITEM.findall(content):
            named = _NAMED_ATTRIBUTE.match(item)
            if named:
                key, value = named.group(1), _unquote(named.group(2))
                if key in ("options", "opts"):
                    attrs.setdefault("options", set()).update(v.strip() for v in value.split(",") if v.strip())
                elif key == "role":
                    attrs["role"] = value
                else:
                    attrs[key] = value
                continue

            positional += 1
            value = _unquote(item)
            if positional > 1:
                attrs[str(positional)] = value
                continue

            split = re.match(r"^([^#.%]*)(.*)$", value, re.DOTALL)
            style = split.group(1).strip() if split else value
            if style:
                attrs["style"] = style
            for sigil, shorthand in _SHORTHAND.findall(split.group(2) if split else ""):
                shorthand = shorthand.strip()
                if sigil == "#":
                    attrs["id"] = shorthand
                elif sigil == ".":
                    attrs["role"] = f"{attrs['role']} {shorthand}" if attrs.get("role") else shorthand
                else:
                    attrs.setdefault("options", set()).add(shorthand)

    def _consume_pending_attrs(self) -> dict[str, Any]:
        """Consume and clear pending block attributes."""
        attrs = self.pending_block_attrs
        self.pending_block_attrs = {}
        return attrs

    def _register_id(self, node_id: str, node: Node) -> str:
        if node_id in self._refs:
            logger.warning(f"Duplicate id '{node_id}'")
        self._seen_ids.setdefault(node_id, 1)
        self._refs[node_id] = node
        return node_id

    def _finish_block(self, node: Node, attrs: dict[str, Any]) -> Node:
        """Apply common block attributes (id, role, title, extras) to ``node``."""
        if attrs.get("id"):
            node.id = self._register_id(attrs["id"], node)
        if attrs.get("role"):
            node.role = attrs["role"]
        if attrs.get("title"):
            node.title = attrs["title"]
            node.title_inlines = self._parse_inline(attrs["title"])
        if attrs.get("reftext"):
            node.attributes["reftext"] = attrs["reftext"]
        if attrs.get("options"):
            node.attributes["options"] = sorted(attrs["options"])
        for key, value in attrs.items():
            if key not in _STRUCTURAL_KEYS:
                node.attributes.setdefault(key, value)
        return node

    # ------------------------------------------------------------------
    # Document structure
    # ------------------------------------------------------------------

    def _parse_header(self) -> tuple[Optional[str], list[Node]]:
        """Parse the document header and return the document title.

        The header is a level-0 title, optionally followed by an author line,
        a revision line and attribute entries, ending at the first blank line.
        """
        while self._current_token().type in (TokenType.BLANK_LINE, TokenType.COMMENT, TokenType.ATTRIBUTE):
            token = self._advance()
            if token.type == TokenType.ATTRIBUTE:
                self._apply_attribute_entry(token)

        token = self._current_token()
        if token.type != TokenType.HEADING or token.metadata.get("level") != 1:
            return None, []

        self._advance()
        title = token.content
        title_inlines = self._parse_inline(title)
        self.attributes.setdefault("doctitle", "".join(node.plain_text() for node in title_inlines))

        if self._current_token().type == TokenType.TEXT_LINE:
            self._parse_author_line(self._advance().content)
            if self._current_token().type == TokenType.TEXT_LINE:
                self._parse_revision_line(self._advance().content)

        while self._current_token().type in (TokenType.ATTRIBUTE, TokenType.COMMENT):
            token = self._advance()
            if token.type == TokenType.ATTRIBUTE:
                self._apply_attribute_entry(token)

        return title, title_inlines

    def _parse_author_line(self, line: str) -> None:
        match = re.match(r"^(.*?)\s*(?:<([^>]+)>)?$", line)
        author = match.group(1).strip() if match else line
        if author:
            self.attributes.setdefault("author", author)
        if match and match.group(2):
            self.attributes.setdefault("email", match.group(2))

    def _parse_revision_line(self, line: str) -> None:
        number, _, rest = line.partition(",")
        number = number.strip()
        if number[:1].lower() == "v" or number[:1].isdigit():
            self.attributes.setdefault("revnumber", number.lstrip("vV"))
        else:
            rest = line
        date, _, remark = rest.partition(":")
        if date.strip():
            self.attributes.setdefault("revdate", date.strip())
        if remark.strip():
            self.attributes.setdefault("revremark", remark.strip())

    def _parse_body(self) -> list[Node]:
        """Parse the document body, nesting sections by level."""
        body: list[Node] = []
        stack: list[Section] = []

        while self._current_token().type != TokenType.EOF:
            token = self._current_token()
            if token.type == TokenType.HEADING and self.pending_block_attrs.get("style") not in ("discrete", "float"):
                section = self._parse_section_heading()
                if stack and section.level > stack[-1].level + 1:
                    logger.warning(
                        f"Section title out of sequence on line {token.line_num + 1}: "
                        f"expected level {stack[-1].level + 1}, got {section.level}"
                    )
                while stack and stack[-1].level >= section.level:
                    stack.pop()
                (stack[-1].blocks if stack else body).append(section)
                stack.append(section)
                continue

            node = self._parse_block()
            if node is not None:
                (stack[-1].blocks if stack else body).append(node)

        return body

    def _parse_section_heading(self) -> Section:
        attrs = self._consume_pending_attrs()
        token = self._advance()
        section = Section(level=token.metadata["level"] - 1, title=token.content)
        section.title_inlines = self._parse_inline(token.content)
        explicit_id = attrs.pop("id", None)
        attrs.pop("title", None)
        self._finish_block(section, attrs)
        if explicit_id:
            section.id = self._register_id(explicit_id, section)
        elif "sectids" in self.attributes:
            section.id = self._auto_id(section.plain_title())
            self._refs[section.id] = section
        return section

    def _auto_id(self, title: str) -> str:
        """Return a unique automatic id for a section title."""
        separator = str(self.attributes.get("idseparator", ""))
        candidate = section_id(title, prefix=str(self.attributes.get("idprefix", "")), separator=separator)
        return make_unique_id(candidate, self._seen_ids, separator or "_")

    def _wrap_preamble(self, blocks: list[Node]) -> list[Node]:
        """Move blocks preceding the first section into a preamble block."""
        first_section = next(i for i, node in enumerate(blocks) if isinstance(node, Section))
        if first_section == 0:
            return blocks
        preamble = Block(kind=NodeKind.PREAMBLE, blocks=blocks[:first_section])
        return [preamble] + blocks[first_section:]

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _parse_block(self) -> Optional[Node]:
        """Parse a single block-level element.

        Returns None for lines that only contribute metadata to the next
        block (attribute lists, titles, anchors) or that produce no output.
        """
        token = self._current_token()
        token_type = token.type

        if token_type in (TokenType.BLANK_LINE, TokenType.COMMENT, TokenType.LIST_CONTINUATION):
            self._advance()
            return None

        if token_type == TokenType.ATTRIBUTE:
            self._apply_attribute_entry(self._advance())
            return None

        if token_type == TokenType.BLOCK_ATTRIBUTE:
            self._parse_block_attribute(self._advance().content)
            return None

        if token_type == TokenType.ANCHOR:
            self._advance()
            self.pending_block_attrs["id"] = token.content
            if token.metadata.get("reftext"):
                self.pending_block_attrs["reftext"] = token.metadata["reftext"]
            return None

        if token_type == TokenType.BLOCK_TITLE:
            self.pending_block_attrs["title"] = self._advance().content
            return None

        if token_type == TokenType.HEADING:
            return self._parse_floating_title()

        if token_type == TokenType.DELIMITER:
            return self._parse_delimited_block()

        if token_type in LIST_ITEM_TYPES:
            return self._parse_list(())

        if token_type == TokenType.DESCRIPTION_TERM:
            return self._parse_description_list(())

        if token_type == TokenType.THEMATIC_BREAK:
            self._advance()
            return self._finish_block(Block(kind=NodeKind.THEMATIC_BREAK), self._consume_pending_attrs())

        if token_type == TokenType.PAGE_BREAK:
            self._advance()
            return self._finish_block(Block(kind=NodeKind.PAGE_BREAK), self._consume_pending_attrs())

        if token_type == TokenType.BLOCK_IMAGE:
            return self._parse_block_image()

        if token_type == TokenType.TEXT_LINE and token.indent > 0 and "style" not in self.pending_block_attrs:
            return self._parse_literal_paragraph()

        if token_type in (TokenType.TEXT_LINE, TokenType.ADMONITION_PARAGRAPH):
            return self._parse_paragraph()

        self._advance()
        return None

    def _parse_attached_block(self) -> Optional[Node]:
        """Parse the block attached to a list item by a ``+`` continuation."""
        while self._current_token().type not in (TokenType.EOF, TokenType.BLANK_LINE):
            node = self._parse_block()
            if node is not None:
                return node
        return None

    def _parse_floating_title(self) -> Block:
        attrs = self._consume_pending_attrs()
        token = self._advance()
        node = Block(kind=NodeKind.FLOATING_TITLE, level=token.metadata["level"] - 1, title=token.content)
        node.title_inlines = self._parse_inline(token.content)
        explicit_id = attrs.pop("id", None)
        attrs.pop("title", None)
        self._finish_block(node, attrs)
        if explicit_id:
            node.id = self._register_id(explicit_id, node)
        elif "sectids" in self.attributes:
            node.id = self._auto_id(node.plain_title())
        return node

    def _paragraph_inlines(self, lines: list[str], attrs: dict[str, Any]) -> list[Node]:
        """Parse paragraph lines, turning trailing `` +`` into line breaks."""
        hardbreaks = "hardbreaks" in attrs.get("options", ()) or "hardbreaks-option" in self.attributes
        parts = []
        for i, line in enumerate(lines):
            if self.options.honor_hard_breaks and line.endswith(" +"):
                line = line[:-2].rstrip() + _BREAK_MARK
            elif hardbreaks and i < len(lines) - 1:
                line += _BREAK_MARK
            parts.append(line)
        return self._parse_inline("\n".join(parts))

    def _parse_paragraph(self) -> Node:
        """Parse a paragraph (consecutive text lines).

        The block style decides what the paragraph becomes: an admonition
        (``NOTE: text`` or ``[NOTE]``), a verbatim block (``[source]``,
        ``[literal]``, ``[pass]``, ``[stem]``), a quote, sidebar or example
        block, or a plain paragraph.
        """
        attrs = self._consume_pending_attrs()
        first = self._advance()
        style = attrs.get("style")

        if first.type == TokenType.ADMONITION_PARAGRAPH and self.options.parse_admonitions:
            style = first.metadata["style"]
            lines = [first.content]
        else:
            lines = [first.raw.strip()]
        raw_lines = [first.raw]

        while self._current_token().type == TokenType.TEXT_LINE:
            token = self._advance()
            lines.append(token.content)
            raw_lines.append(token.raw)

        if style and style.upper() in ADMONITION_STYLES and self.options.parse_admonitions:
            node = Block(kind=NodeKind.ADMONITION, style=style.upper(), inlines=self._paragraph_inlines(lines, attrs))
            return self._finish_block(node, attrs)

        kind = _STYLE_KINDS.get(style or "")
        if kind in _VERBATIM_STYLE_KINDS:
            return self._make_verbatim(kind, style, raw_lines, attrs)
        if kind in (NodeKind.QUOTE, NodeKind.SIDEBAR, NodeKind.EXAMPLE):
            node = Block(kind=kind, style=style, inlines=self._paragraph_inlines(lines, attrs))
            self._apply_attribution(node, attrs)
            return self._finish_block(node, attrs)

        node = Block(kind=NodeKind.PARAGRAPH, inlines=self._paragraph_inlines(lines, attrs))
        return self._finish_block(node, attrs)

    def _parse_literal_paragraph(self) -> Block:
        """Parse an indented paragraph as a literal block."""
        attrs = self._consume_pending_attrs()
        raw_lines = []
        while self._current_token().type not in (TokenType.BLANK_LINE, TokenType.EOF):
            raw_lines.append(self._advance().raw)
        indent = min(len(line) - len(line.lstrip()) for line in raw_lines if line.strip())
        source = "\n".join(line[indent:] for line in raw_lines)
        return self._finish_block(Block(kind=NodeKind.LITERAL, source=source), attrs)

    def _make_verbatim(self, kind: NodeKind, style: Optional[str], lines: list[str], attrs: dict[str, Any]) -> Block:
        """Build a listing, literal, pass or stem block from source lines."""
        node = Block(kind=kind, source="\n".join(lines))
        if kind == NodeKind.LISTING:
            language = attrs.pop("2", None) or attrs.pop("language", None)
            if style == "source" or language:
                node.style = "source"
                language = language or self.attributes.get("source-language")
                if language:
                    node.attributes["language"] = language
            else:
                node.style = "listing"
        elif kind == NodeKind.STEM:
            node.style = style if style in STEM_STYLES else "stem"
        else:
            node.style = style
        return self._finish_block(node, attrs)

    @staticmethod
    def _apply_attribution(node: Node, attrs: dict[str, Any]) -> None:
        if node.kind != NodeKind.QUOTE:
            return
        for position, name in (("2", "attribution"), ("3", "citetitle")):
            value = attrs.pop(position, None) or attrs.pop(name, None)
            if value:
                node.attributes[name] = value

    def _collect_verbatim(self, delimiter: str) -> list[str]:
        """Collect raw lines up to the closing ``delimiter``."""
        lines = []
        while True:
            token = self._current_token()
            if token.type == TokenType.EOF:
                logger.warning(f"Unterminated delimited block '{delimiter}'")
                break
            self._advance()
            if token.type == TokenType.DELIMITER and token.content == delimiter:
                break
            lines.append(token.raw)
        return lines

    def _collect_blocks(self, delimiter: str) -> list[Node]:
        """Parse blocks up to the closing ``delimiter``."""
        blocks: list[Node] = []
        while True:
            token = self._current_token()
            if token.type == TokenType.EOF:
                logger.warning(f"Unterminated delimited block '{delimiter}'")
                break
            if token.type == TokenType.DELIMITER and token.content == delimiter:
                self._advance()
                break
            node = self._parse_block()
            if node is not None:
                blocks.append(node)
        return blocks

    def _parse_delimited_block(self) -> Optional[Node]:
        """Parse a delimited block; its style may change the block kind."""
        attrs = self._consume_pending_attrs()
        token = self._advance()
        delimiter = token.content
        kind = token.metadata["kind"]
        style = attrs.get("style")

        if kind == "comment":
            self._collect_verbatim(delimiter)
            return None
        if kind == "table":
            return self._parse_table(delimiter, attrs)

        if style and style.upper() in ADMONITION_STYLES and kind in (NodeKind.EXAMPLE, NodeKind.OPEN):
            node = Block(kind=NodeKind.ADMONITION, style=style.upper(), blocks=self._collect_blocks(delimiter))
            return self._finish_block(node, attrs)

        if kind == NodeKind.OPEN and style in _STYLE_KINDS:
            kind = _STYLE_KINDS[style]
        elif kind == NodeKind.PASS and style in STEM_STYLES:
            kind = NodeKind.STEM
        elif kind == NodeKind.LITERAL and style == "source":
            kind = NodeKind.LISTING

        if kind in _VERBATIM_STYLE_KINDS:
            return self._make_verbatim(kind, style, self._collect_verbatim(delimiter), attrs)

        node = Block(kind=kind, style=style, blocks=self._collect_blocks(delimiter))
        self._apply_attribution(node, attrs)
        return self._finish_block(node, attrs)

    def _parse_block_image(self) -> Block:
        attrs = self._consume_pending_attrs()
        token = self._advance()
        target = self._substitute_attributes(token.content)
        node = Block(kind=NodeKind.IMAGE, target=target if is_url_safe(target) else "")
        node.attributes.update(self._image_attributes(target, token.metadata.get("attrlist", "")))
        return self._finish_block(node, attrs)

    def _image_attributes(self, target: str, attrlist: str) -> dict[str, str]:
        """Parse an image macro attribute list (alt, width, height)."""
        result: dict[str, str] = {}
        positional = ("alt", "width", "height")
        index = 0
        for item in _ATTRLIST_ITEM.findall(self._substitute_attributes(attrlist)):
            named = _NAMED_ATTRIBUTE.match(item)
            if named:
                result[named.group(1)] = _unquote(named.group(2))
            elif index < len(positional):
                value = _unquote(item)
                if value:
                    result[positional[index]] = value
                index += 1
        if not result.get("alt"):
            result["alt"] = re.sub(r"[-_]", " ", PurePosixPath(target).stem)
        return result

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _is_nested_list_start(self, token: Token, markers: tuple[str, ...]) -> bool:
        """Return True if ``token`` starts a list nested under the current item."""
        return token.type in LIST_TOKEN_TYPES and token.marker not in markers

    def _parse_list_item_body(self, item: ListItem, markers: tuple[str, ...]) -> None:
        """Attach continuation blocks and nested lists to ``item``.

        ``markers`` holds the markers of the current list and all enclosing
        lists; a list item with one of those markers ends the item.
        """
        while True:
            token = self._current_token()
            if token.type == TokenType.LIST_CONTINUATION:
                self._advance()
                block = self._parse_attached_block()
                if block is not None:
                    item.blocks.append(block)
                continue
            if self._is_nested_list_start(token, markers):
                item.blocks.append(self._parse_any_list(markers))
                continue
            if token.type == TokenType.BLANK_LINE and self._at_blank_then(
                lambda t: self._is_nested_list_start(t, markers)
            ):
                self._skip_blank_lines()
                continue
            break

    def _parse_any_list(self, markers: tuple[str, ...]) -> ListNode:
        if self._current_token().type == TokenType.DESCRIPTION_TERM:
            return self._parse_description_list(markers)
        return self._parse_list(markers)

    def _parse_list(self, markers: tuple[str, ...]) -> ListNode:
        """Parse an unordered or ordered list with nesting support."""
        attrs = self._consume_pending_attrs()
        first = self._current_token()
        marker = first.marker or ""
        ordered = first.type == TokenType.ORDERED_LIST
        chain = markers + (marker,)

        node = ListNode(kind=NodeKind.OLIST if ordered else NodeKind.ULIST)
        if ordered:
            depth = len(marker) if marker.startswith(".") else 1
            node.style = attrs.get("style") or ORDERED_LIST_STYLES[(depth - 1) % len(ORDERED_LIST_STYLES)]
            start = attrs.get("start") or (first.metadata or {}).get("number")
            if start is not None:
                try:
                    node.start = int(start)
                except ValueError:
                    logger.warning(f"Invalid ordered list start '{start}'")
        else:
            node.style = attrs.get("style")
        attrs.pop("style", None)
        attrs.pop("start", None)

        while self._current_token().type in LIST_ITEM_TYPES and self._current_token().marker == marker:
            token = self._advance()
            item = ListItem(checked=(token.metadata or {}).get("checked"))
            lines = [token.content]
            while self._current_token().type == TokenType.TEXT_LINE:
                lines.append(self._advance().content)
            item.inlines = self._paragraph_inlines(lines, {})
            node.blocks.append(item)

            self._parse_list_item_body(item, chain)

            if not self._at_blank_then(lambda t: t.type in LIST_ITEM_TYPES and t.marker == marker):
                break
            self._skip_blank_lines()

        return self._finish_block(node, attrs)

    def _parse_description_list(self, markers: tuple[str, ...]) -> ListNode:
        """Parse a description list; consecutive terms share one description."""
        attrs = self._consume_pending_attrs()
        marker = self._current_token().marker or "::"
        chain = markers + (marker,)
        node = ListNode(kind=NodeKind.DLIST, style=attrs.pop("style", None))

        def is_term(token: Token) -> bool:
            return token.type == TokenType.DESCRIPTION_TERM and token.marker == marker

        while is_term(self._current_token()):
            item = ListItem()
            description = ""
            while is_term(self._current_token()):
                token = self._advance()
                item.terms.append(self._parse_inline(token.content))
                description = (token.metadata or {}).get("description", "")
                if description:
                    break

            lines = [description] if description else []
            if not lines and self._at_blank_then(lambda t: t.type == TokenType.TEXT_LINE and t.indent > 0):
                self._skip_blank_lines()
            while self._current_token().type == TokenType.TEXT_LINE:
                lines.append(self._advance().content)
            if lines:
                item.inlines = self._paragraph_inlines(lines, {})
            node.blocks.append(item)

            self._parse_list_item_body(item, chain)

            if not self._at_blank_then(is_term):
                break
            self._skip_blank_lines()

        return self._finish_block(node, attrs)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _parse_table(self, delimiter: str, attrs: dict[str, Any]) -> Table:
        """Parse a ``|===`` table.

        The column count comes from the ``cols`` attribute or from the number
        of cells on the first line. The first row is a header when the
        ``header`` option is set, or when the first line holds exactly one row
        and is followed by a blank line (unless ``noheader`` is set).
        """
        lines: list[Token] = []
        while True:
            token = self._current_token()
            if token.type == TokenType.EOF:
                logger.warning("Unterminated table")
                break
            self._advance()
            if token.type == TokenType.DELIMITER and token.content == delimiter:
                break
            lines.append(token)

        cells: list[tuple[str, int, int]] = []
        first_line_cells = 0
        first_line_blank_after = False
        seen_first = False
        for index, token in enumerate(lines):
            if token.type == TokenType.BLANK_LINE:
                continue
            parsed = self._split_cells(token.raw.strip())
            if parsed is None:
                # No separator: the line continues the previous cell
                if cells:
                    text, colspan, rowspan = cells[-1]
                    cells[-1] = (f"{text}\n{token.raw.strip()}", colspan, rowspan)
                continue
            leading, row_cells = parsed
            if leading and cells:
                text, colspan, rowspan = cells[-1]
                cells[-1] = (f"{text}\n{leading}", colspan, rowspan)
            cells.extend(row_cells)
            if not seen_first:
                seen_first = True
                first_line_cells = len(row_cells)
                first_line_blank_after = index + 1 < len(lines) and lines[index + 1].type == TokenType.BLANK_LINE

        column_count = self._column_count(attrs.get("cols")) or first_line_cells
        rows = self._group_rows(cells, column_count)

        options = attrs.get("options", set())
        implicit_header = first_line_blank_after and first_line_cells == column_count
        has_header = "header" in options or (implicit_header and "noheader" not in options)

        node = Table()
        if has_header and rows:
            node.header_rows = rows[:1]
            node.body_rows = rows[1:]
        else:
            node.body_rows = rows
        attrs.pop("cols", None)
        return self._finish_block(node, attrs)  # type: ignore[return-value]

    @staticmethod
    def _split_cells(line: str) -> Optional[tuple[str, list[tuple[str, int, int]]]]:
        """Split a table line into text before the first cell and its cells."""
        separators = list(_CELL_SEPARATOR.finditer(line))
        if not separators:
            return None
        leading = line[: separators[0].start()].strip()
        cells = []
        for i, separator in enumerate(separators):
            end = separators[i + 1].start() if i + 1 < len(separators) else len(line)
            text = line[separator.end() : end].strip().replace("\\|", "|")
            colspan, rowspan = 1, 1
            spec = _CELL_SPEC.match(separator.group("spec") or "")
            if spec and spec.group(3) == "+":
                colspan = int(spec.group(1) or 1)
                rowspan = int(spec.group(2) or 1)
            elif spec and spec.group(1):
                # Duplication (3*) repeats the cell
                cells.extend([(text, 1, 1)] * (int(spec.group(1)) - 1))
            cells.append((text, colspan, rowspan))
        return leading, cells

    @staticmethod
    def _column_count(cols: Any) -> int:
        """Return the number of columns described by a ``cols`` attribute."""
        if not cols:
            return 0
        cols = str(cols).strip()
        if cols.isdigit():
            return int(cols)
        count = 0
        for spec in cols.replace(";", ",").split(","):
            multiplier = re.match(r"^\s*(\d+)\*", spec)
            count += int(multiplier.group(1)) if multiplier else 1
        return count

    def _group_rows(self, cells: list[tuple[str, int, int]], column_count: int) -> list[TableRow]:
        """Group cells into rows, accounting for column and row spans."""
        rows: list[TableRow] = []
        if column_count <= 0:
            return rows
        # Columns still occupied by row spans: list of [rows remaining, colspan]
        carried: list[list[int]] = []
        current = TableRow()
        filled = sum(span for _, span in carried)
        for text, colspan, rowspan in cells:
            current.cells.append(TableCell(inlines=self._parse_inline(text), colspan=colspan, rowspan=rowspan))
            filled += colspan
            if rowspan > 1:
                carried.append([rowspan, colspan])
            if filled >= column_count:
                rows.append(current)
                current = TableRow()
                for entry in carried:
                    entry[0] -= 1
                carried = [entry for entry in carried if entry[0] > 0]
                filled = sum(span for _, span in carried)
        if current.cells:
            logger.warning("Table has an incomplete last row")
            rows.append(current)
        return rows

    # ------------------------------------------------------------------
    # Inline content
    # ------------------------------------------------------------------

    def _parse_inline(self, text: str) -> list[Node]:
        """Parse inline formatting in text.

        Passthroughs are set aside first, then backslash escapes, then
        attribute references are replaced; the remaining text is scanned for
        inline constructs.
        """
        if not text:
            return []
        text = _PASSTHROUGH.sub(self._stash_passthrough, text)
        text = _ESCAPED_CHAR.sub(self._stash_escape, text)
        text = self._substitute_attributes(text)
        return self._parse_inline_recursive(text)

    def _stash_passthrough(self, match: re.Match) -> str:
        raw_text = match.group(1) if match.group(1) is not None else match.group(2)
        if raw_text is not None:
            node = Text(text=raw_text, raw=True)
        else:
            node = Text(text=match.group(3) if match.group(3) is not None else match.group(4))
        self._passthroughs.append(node)
        return _PASS_MARK.format(len(self._passthroughs) - 1)

    def _stash_escape(self, match: re.Match) -> str:
        self._escapes.append(match.group(1))
        return _ESCAPE_MARK.format(len(self._escapes) - 1)

    def _restore(self, text: str) -> str:
        """Restore escaped characters set aside by :meth:`_parse_inline`."""
        if "\x00" not in text:
            return text
        text = _ESCAPE_PLACEHOLDER.sub(lambda m: self._escapes[int(m.group(1))], text)
        return text.replace(_BREAK_MARK, "")

    def _parse_inline_recursive(self, text: str) -> list[Node]:
        """Scan ``text`` for inline constructs, producing inline nodes."""
        nodes: list[Node] = []
        pos = 0
        while pos < len(text):
            for pattern, builder in self._inline_rules:
                match = pattern.match(text, pos)
                if match is None:
                    continue
                parsed = builder(match)
                if parsed is not None:
                    for node in parsed:
                        self._append_inline(nodes, node)
                    pos = match.end()
                    break
            else:
                # Plain text up to the next possible construct
                next_match = self._combined_inline_pattern.search(text, pos + 1)
                end = next_match.start() if next_match else len(text)
                self._append_inline(nodes, Text(text=self._restore(text[pos:end])))
                pos = end
        return nodes

    @staticmethod
    def _append_inline(nodes: list[Node], node: Node) -> None:
        """Append ``node``, merging adjacent plain text runs."""
        if isinstance(node, Text) and not node.raw:
            if not node.text:
                return
            last = nodes[-1] if nodes else None
            if isinstance(last, Text) and not last.raw and last.kind == NodeKind.TEXT:
                nodes[-1] = Text(text=last.text + node.text)
                return
        nodes.append(node)

    def _quoted(self, quote_type: str) -> InlineBuilder:
        def build(match: re.Match) -> list[Node]:
            return [
                Inline(
                    kind=NodeKind.INLINE_QUOTED,
                    quote_type=quote_type,
                    inlines=self._parse_inline_recursive(match.group(1)),
                )
            ]

        return build

    def _build_role_span(self, match: re.Match) -> list[Node]:
        role = " ".join(part for part in match.group(1).split(".") if part)
        return [
            Inline(
                kind=NodeKind.INLINE_QUOTED,
                quote_type="unquoted",
                role=role,
                inlines=self._parse_inline_recursive(match.group(2)),
            )
        ]

    def _build_inline_image(self, match: re.Match) -> list[Node]:
        target = self._restore(match.group(1))
        attributes = self._image_attributes(target, self._restore(match.group(2)))
        return [
            Inline(
                kind=NodeKind.INLINE_IMAGE,
                target=target if is_url_safe(target) else "",
                alt=attributes.pop("alt", ""),
                attributes=attributes,
            )
        ]

    def _link_text(self, raw_text: str) -> tuple[list[Node], dict[str, str]]:
        """Split link macro text into parsed text and named attributes."""
        attributes: dict[str, str] = {}
        named = _LINK_ATTRIBUTES.search(raw_text)
        if named:
            for item in _ATTRLIST_ITEM.findall(raw_text[named.start() + 1 :]):
                pair = _NAMED_ATTRIBUTE.match(item)
                if pair:
                    attributes[pair.group(1)] = _unquote(pair.group(2))
            raw_text = raw_text[: named.start()]
        raw_text = _unquote(raw_text)
        if raw_text.endswith("^"):
            raw_text = raw_text[:-1]
            attributes["window"] = "_blank"
        return self._parse_inline_recursive(raw_text) if raw_text else [], attributes

    def _make_link(self, target: str, raw_text: str, source: str) -> list[Node]:
        if not is_url_safe(target):
            logger.warning(f"Dropping link with unsafe target: {target}")
            return [Text(text=self._restore(source))]
        inlines, attributes = self._link_text(raw_text)
        anchor_type = "link" if inlines else "bare"
        return [
            Inline(
                kind=NodeKind.INLINE_ANCHOR,
                anchor_type=anchor_type,
                target=target,
                inlines=inlines,
                attributes=attributes,
            )
        ]

    def _build_link_macro(self, match: re.Match) -> list[Node]:
        return self._make_link(self._restore(match.group(1)), match.group(2), match.group(0))

    def _build_url_macro(self, match: re.Match) -> list[Node]:
        return self._make_link(self._restore(match.group(1)), match.group(2), match.group(0))

    def _build_bare_url(self, match: re.Match) -> list[Node]:
        return self._make_link(self._restore(match.group(1)), "", match.group(0))

    def _build_xref(self, match: re.Match) -> list[Node]:
        """Build a cross reference to an id or another document."""
        target = self._restore(match.group(1)).strip()
        label = match.group(2)
        href, refid = self._xref_href(target)
        inlines = self._parse_inline_recursive(_unquote(label)) if label else []
        return [
            Inline(
                kind=NodeKind.INLINE_ANCHOR,
                anchor_type="xref",
                target=href,
                inlines=inlines,
                attributes={"refid": refid},
            )
        ]

    def _xref_href(self, target: str) -> tuple[str, str]:
        """Return the href and reference id for an xref target.

        References to ``.adoc`` documents (or any path followed by ``#``)
        point at the rendered document, using the ``outfilesuffix``
        attribute; bare ids point into the current document.
        """
        path, hashmark, fragment = target.partition("#")
        if not hashmark and not path.endswith(SOURCE_DOCUMENT_SUFFIX):
            return f"#{path}", path
        if not path:
            return f"#{fragment}", fragment
        if path.endswith(SOURCE_DOCUMENT_SUFFIX):
            path = path[: -len(SOURCE_DOCUMENT_SUFFIX)]
        suffix = str(self.attributes.get("outfilesuffix", DEFAULT_OUTFILESUFFIX))
        href = f"{path}{suffix}"
        if fragment:
            href = f"{href}#{fragment}"
        return href, target

    def _build_footnote(self, match: re.Match) -> list[Node]:
        footnote_id = match.group(1) or None
        text = match.group(2)
        if footnote_id and footnote_id in self._footnote_ids and not text.strip():
            index = self._footnote_ids[footnote_id]
        else:
            index = self._add_footnote(footnote_id, text)
        return [Inline(kind=NodeKind.INLINE_FOOTNOTE, index=index, target=footnote_id)]

    def _build_footnoteref(self, match: re.Match) -> list[Node]:
        footnote_id = match.group(1).strip()
        text = match.group(2)
        if footnote_id in self._footnote_ids:
            index = self._footnote_ids[footnote_id]
        elif text:
            index = self._add_footnote(footnote_id, text)
        else:
            logger.warning(f"Reference to undefined footnote '{footnote_id}'")
            return [Text(text=self._restore(match.group(0)))]
        return [Inline(kind=NodeKind.INLINE_FOOTNOTE, index=index, target=footnote_id)]

    def _add_footnote(self, footnote_id: Optional[str], text: str) -> int:
        index = len(self._footnotes) + 1
        self._footnotes.append(Footnote(index=index, id=footnote_id, inlines=self._parse_inline_recursive(text)))
        if footnote_id:
            self._footnote_ids[footnote_id] = index
        return index

    def _resolve_xref_text(self, blocks: list[Node]) -> None:
        """Give internal cross references without text the target's title."""
        roots = list(blocks) + [node for footnote in self._footnotes for node in footnote.inlines]
        for root in roots:
            for node in root.walk():
                if node.kind != NodeKind.INLINE_ANCHOR or node.anchor_type != "xref" or node.inlines:
                    continue
                if not (node.target or "").startswith("#"):
                    continue
                refid = node.target[1:]
                referenced = self._refs.get(refid)
                if referenced is None:
                    logger.warning(f"Possible invalid reference: {refid}")
                    continue
                label = referenced.attributes.get("reftext") or referenced.plain_title()
                if label:
                    node.inlines = [Text(text=label)]


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
