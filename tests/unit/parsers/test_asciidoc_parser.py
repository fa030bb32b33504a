#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the AsciiDoc lexer and parser."""

import io
import logging

import pytest

from adoc2html.ast import Block, Inline, ListNode, NodeKind, Section, Table, Text
from adoc2html.exceptions import InvalidOptionsError, ParsingError, ValidationError
from adoc2html.options.asciidoc import AsciiDocParserOptions
from adoc2html.options.html import HtmlRendererOptions
from adoc2html.parsers.asciidoc import AsciiDocLexer, AsciiDocParser, TokenType


def kinds(nodes) -> list:
    return [node.kind for node in nodes]


@pytest.mark.unit
class TestAsciiDocLexer:
    """Tests for line classification."""

    @pytest.mark.parametrize(
        "line,token_type",
        [
            ("== Title", TokenType.HEADING),
            ("----", TokenType.DELIMITER),
            ("|===", TokenType.DELIMITER),
            ("--", TokenType.DELIMITER),
            ("* item", TokenType.UNORDERED_LIST),
            (". step", TokenType.ORDERED_LIST),
            ("1. step", TokenType.ORDERED_LIST),
            ("* [x] done", TokenType.CHECKLIST_ITEM),
            ("CPU:: brain", TokenType.DESCRIPTION_TERM),
            (":toc: left", TokenType.ATTRIBUTE),
            ("[source,python]", TokenType.BLOCK_ATTRIBUTE),
            ("[[anchor]]", TokenType.ANCHOR),
            (".Block title", TokenType.BLOCK_TITLE),
            ("NOTE: careful", TokenType.ADMONITION_PARAGRAPH),
            ("'''", TokenType.THEMATIC_BREAK),
            ("<<<", TokenType.PAGE_BREAK),
            ("image::cat.png[]", TokenType.BLOCK_IMAGE),
            ("+", TokenType.LIST_CONTINUATION),
            ("// note to self", TokenType.COMMENT),
            ("", TokenType.BLANK_LINE),
            ("Just text.", TokenType.TEXT_LINE),
        ],
    )
    def test_line_types(self, line, token_type) -> None:
        """Test that each kind of line gets the right token type."""
        tokens = AsciiDocLexer(line or "\n").tokenize()
        assert tokens[0].type == token_type

    def test_eof_terminates_stream(self) -> None:
        """Test that the token stream ends with EOF."""
        tokens = AsciiDocLexer("a\nb").tokenize()
        assert [t.type for t in tokens] == [TokenType.TEXT_LINE, TokenType.TEXT_LINE, TokenType.EOF]

    def test_token_metadata(self) -> None:
        """Test markers, levels and descriptions recorded on tokens."""
        heading, item, term, attribute = AsciiDocLexer("=== Sub\n** nested\nCPU:: brain\n:name!:").tokenize()[:4]
        assert heading.metadata["level"] == 3
        assert item.marker == "**"
        assert term.content == "CPU"
        assert term.metadata["description"] == "brain"
        assert attribute.metadata["unset"] is True

    def test_attribute_value_continuation(self) -> None:
        """Test that a trailing backslash continues an attribute value."""
        tokens = AsciiDocLexer(":desc: first \\\n  second").tokenize()
        assert tokens[0].metadata["value"] == "first second"
        assert tokens[1].type == TokenType.EOF


@pytest.mark.unit
class TestHeaderAndAttributes:
    """Tests for the document header and attribute handling."""

    def test_full_header(self, parse) -> None:
        """Test title, author, revision and attribute entries."""
        doc = parse("= My Doc\nJane Doe <jane@example.com>\nv1.2, 2024-01-01: Draft\n:toc: left\n\nBody.")
        assert doc.doctitle == "My Doc"
        assert doc.attr("author") == "Jane Doe"
        assert doc.attr("email") == "jane@example.com"
        assert doc.attr("revnumber") == "1.2"
        assert doc.attr("revdate") == "2024-01-01"
        assert doc.attr("revremark") == "Draft"
        assert doc.attr("toc") == "left"
        assert kinds(doc.blocks) == [NodeKind.PARAGRAPH]

    def test_no_title(self, parse) -> None:
        """Test that a document without a level-0 heading has no title."""
        doc = parse("Just a paragraph.")
        assert doc.title is None
        assert doc.doctitle == ""

    def test_attribute_reference(self, parse) -> None:
        """Test that attribute references are replaced in body text."""
        doc = parse(":product: Widget\n\nUse {product} now.")
        assert doc.blocks[0].plain_text() == "Use Widget now."

    def test_intrinsic_attribute(self, parse) -> None:
        """Test that intrinsic attributes resolve without being defined."""
        doc = parse("a{sp}b{vbar}c")
        assert doc.blocks[0].plain_text() == "a b|c"

    def test_missing_attribute_kept_by_default(self, parse) -> None:
        """Test the default policy for undefined references."""
        assert parse("Value: {nope}").blocks[0].plain_text() == "Value: {nope}"

    def test_missing_attribute_blank_policy(self, parse) -> None:
        """Test that the blank policy drops undefined references."""
        doc = parse("Value: {nope}", attribute_missing_policy="blank")
        assert doc.blocks[0].plain_text() == "Value: "

    def test_missing_attribute_warn_policy(self, parse, caplog) -> None:
        """Test that the warn policy logs undefined references."""
        with caplog.at_level(logging.WARNING, logger="adoc2html.parsers.asciidoc"):
            doc = parse("Value: {nope}", attribute_missing_policy="warn")
        assert doc.blocks[0].plain_text() == "Value: {nope}"
        assert "Undefined attribute reference: {nope}" in caplog.text

    def test_invalid_missing_policy(self) -> None:
        """Test that an unknown policy is rejected."""
        with pytest.raises(ValidationError):
            AsciiDocParserOptions(attribute_missing_policy="explode")  # type: ignore[arg-type]

    def test_references_left_alone_when_disabled(self, parse) -> None:
        """Test resolve_attribute_refs=False."""
        doc = parse(":product: Widget\n\n{product}", resolve_attribute_refs=False)
        assert doc.blocks[0].plain_text() == "{product}"

    def test_api_attribute_overrides_document(self, parse) -> None:
        """Test that API attributes win over document entries."""
        doc = parse("= T\n:product: Doc\n\n{product}", attributes={"product": "API"})
        assert doc.blocks[0].plain_text() == "API"

    def test_soft_api_attribute_yields_to_document(self, parse) -> None:
        """Test that a trailing @ makes an API attribute overridable."""
        doc = parse("= T\n:product: Doc\n\n{product}", attributes={"product": "API@"})
        assert doc.blocks[0].plain_text() == "Doc"

    def test_unset_attribute_entry(self, parse) -> None:
        """Test that :name!: unsets an attribute."""
        doc = parse(":sectids!:\n\n== Intro")
        assert doc.blocks[0].id is None
        assert not doc.has_attr("sectids")


@pytest.mark.unit
class TestSections:
    """Tests for section nesting and identifiers."""

    def test_nesting_by_level(self, parse) -> None:
        """Test that deeper headings nest in the preceding section."""
        doc = parse("== A\n\n=== B\n\n== C")
        a, c = doc.blocks
        assert isinstance(a, Section) and isinstance(c, Section)
        assert (a.level, c.level) == (1, 1)
        assert a.blocks[0].plain_title() == "B"
        assert a.blocks[0].level == 2

    def test_automatic_ids(self, parse) -> None:
        """Test Asciidoctor-style automatic ids."""
        doc = parse("== Getting Started\n\n== Getting Started")
        assert [s.id for s in doc.blocks] == ["_getting_started", "_getting_started_2"]

    def test_custom_idprefix_and_separator(self, parse) -> None:
        """Test ids shaped by idprefix and idseparator."""
        doc = parse(":idprefix:\n:idseparator: -\n\n== Getting Started")
        assert doc.blocks[0].id == "getting-started"

    def test_explicit_ids(self, parse) -> None:
        """Test [[id]] anchors and [#id] shorthands on sections."""
        doc = parse("[[custom]]\n== One\n\n[#other.wide]\n== Two")
        assert doc.blocks[0].id == "custom"
        assert doc.blocks[1].id == "other"
        assert doc.blocks[1].role == "wide"

    def test_block_title_does_not_replace_heading(self, parse) -> None:
        """Test that a pending .Title is not applied to a section."""
        doc = parse(".Stray\n== Heading")
        assert doc.blocks[0].title == "Heading"

    def test_preamble(self, parse) -> None:
        """Test that content before the first section becomes the preamble."""
        doc = parse("= T\n\nIntro.\n\n== S\n\nBody.")
        assert kinds(doc.blocks) == [NodeKind.PREAMBLE, NodeKind.SECTION]
        assert doc.blocks[0].blocks[0].plain_text() == "Intro."

    def test_no_preamble_without_sections(self, parse) -> None:
        """Test that a sectionless document keeps its blocks at top level."""
        doc = parse("= T\n\nIntro.")
        assert kinds(doc.blocks) == [NodeKind.PARAGRAPH]

    def test_out_of_sequence_warning(self, parse, caplog) -> None:
        """Test that skipping a level is reported."""
        with caplog.at_level(logging.WARNING, logger="adoc2html.parsers.asciidoc"):
            parse("== A\n\n==== D")
        assert "out of sequence" in caplog.text

    def test_discrete_heading(self, parse) -> None:
        """Test that [discrete] headings are floating titles, not sections."""
        doc = parse("[discrete]\n== Aside\n\nText.")
        assert kinds(doc.blocks) == [NodeKind.FLOATING_TITLE, NodeKind.PARAGRAPH]
        assert doc.blocks[0].id == "_aside"
        assert doc.blocks[0].level == 1

    def test_inline_markup_in_titles(self, parse) -> None:
        """Test that section titles are parsed for inline markup."""
        section = parse("== The *big* one").blocks[0]
        assert kinds(section.title_inlines) == [NodeKind.TEXT, NodeKind.INLINE_QUOTED, NodeKind.TEXT]
        assert section.id == "_the_big_one"


@pytest.mark.unit
class TestBlocks:
    """Tests for block-level constructs."""

    def test_paragraph_lines_joined(self, parse) -> None:
        """Test that consecutive lines form one paragraph."""
        doc = parse("line one\nline two\n\nnext")
        assert len(doc.blocks) == 2
        assert doc.blocks[0].plain_text() == "line one\nline two"

    def test_hard_line_break(self, parse) -> None:
        """Test that a trailing + produces an inline break."""
        para = parse("one +\ntwo").blocks[0]
        assert kinds(para.inlines) == [NodeKind.TEXT, NodeKind.INLINE_BREAK, NodeKind.TEXT]

    def test_hardbreaks_option(self, parse) -> None:
        """Test [%hardbreaks] on a paragraph."""
        para = parse("[%hardbreaks]\nline one\nline two").blocks[0]
        assert kinds(para.inlines) == [NodeKind.TEXT, NodeKind.INLINE_BREAK, NodeKind.TEXT]

    def test_admonition_paragraph(self, parse) -> None:
        """Test NOTE: style paragraphs."""
        node = parse("TIP: Use it.").blocks[0]
        assert node.kind == NodeKind.ADMONITION
        assert node.style == "TIP"
        assert node.plain_text() == "Use it."

    def test_admonition_style_on_paragraph(self, parse) -> None:
        """Test [WARNING] on a plain paragraph."""
        node = parse("[WARNING]\nHot surface.").blocks[0]
        assert (node.kind, node.style) == (NodeKind.ADMONITION, "WARNING")

    def test_admonitions_disabled(self, parse) -> None:
        """Test parse_admonitions=False."""
        node = parse("NOTE: text", parse_admonitions=False).blocks[0]
        assert node.kind == NodeKind.PARAGRAPH

    def test_admonition_block(self, parse) -> None:
        """Test an admonition style on an example block."""
        node = parse("[NOTE]\n====\nInside.\n====").blocks[0]
        assert node.kind == NodeKind.ADMONITION
        assert kinds(node.blocks) == [NodeKind.PARAGRAPH]

    def test_source_listing(self, parse) -> None:
        """Test a source block with a language."""
        node = parse("[source,python]\n----\nprint(1)\n----").blocks[0]
        assert node.kind == NodeKind.LISTING
        assert node.style == "source"
        assert node.attributes["language"] == "python"
        assert node.source == "print(1)"

    def test_default_source_language(self, parse) -> None:
        """Test the source-language document attribute."""
        node = parse(":source-language: ruby\n\n[source]\n----\nputs 1\n----").blocks[0]
        assert node.attributes["language"] == "ruby"

    def test_plain_listing_keeps_whitespace(self, parse) -> None:
        """Test that listing content is verbatim."""
        node = parse("----\n  indented *not bold*\n----").blocks[0]
        assert node.style == "listing"
        assert node.source == "  indented *not bold*"

    def test_literal_paragraph(self, parse) -> None:
        """Test that indented lines form a literal block."""
        node = parse("  indented\n    more").blocks[0]
        assert node.kind == NodeKind.LITERAL
        assert node.source == "indented\n  more"

    def test_quote_with_attribution(self, parse) -> None:
        """Test positional attribution and citation title on quotes."""
        node = parse("[quote, Someone, Book]\n____\nWords.\n____").blocks[0]
        assert node.kind == NodeKind.QUOTE
        assert node.attributes["attribution"] == "Someone"
        assert node.attributes["citetitle"] == "Book"

    @pytest.mark.parametrize(
        "source,kind",
        [
            ("****\nSide.\n****", NodeKind.SIDEBAR),
            ("====\nExample.\n====", NodeKind.EXAMPLE),
            ("--\nOpen.\n--", NodeKind.OPEN),
        ],
    )
    def test_compound_blocks(self, parse, source, kind) -> None:
        """Test delimited blocks holding other blocks."""
        node = parse(source).blocks[0]
        assert node.kind == kind
        assert kinds(node.blocks) == [NodeKind.PARAGRAPH]

    def test_comment_block_is_dropped(self, parse) -> None:
        """Test that comment blocks and lines produce nothing."""
        doc = parse("////\nhidden\n////\n// also hidden\nVisible.")
        assert kinds(doc.blocks) == [NodeKind.PARAGRAPH]
        assert doc.blocks[0].plain_text() == "Visible."

    def test_pass_and_stem_blocks(self, parse) -> None:
        """Test raw passthrough and stem blocks."""
        passthrough, stem = parse("++++\n<b>hi</b>\n++++\n\n[stem]\n++++\nx^2\n++++").blocks
        assert (passthrough.kind, passthrough.source) == (NodeKind.PASS, "<b>hi</b>")
        assert (stem.kind, stem.source) == (NodeKind.STEM, "x^2")

    def test_unterminated_block(self, parse, caplog) -> None:
        """Test that an unterminated block runs to the end with a warning."""
        with caplog.at_level(logging.WARNING, logger="adoc2html.parsers.asciidoc"):
            node = parse("----\ncode").blocks[0]
        assert node.source == "code"
        assert "Unterminated delimited block" in caplog.text

    def test_block_title_id_and_role(self, parse) -> None:
        """Test .Title, [[id]] and [.role#id] metadata on blocks."""
        first, second = parse(".Caption\n[[p1]]\nText.\n\n[.lead#intro]\nHello.").blocks
        assert first.title == "Caption"
        assert first.id == "p1"
        assert (second.id, second.role) == ("intro", "lead")

    def test_duplicate_id_warning(self, parse, caplog) -> None:
        """Test that reusing an explicit id is reported."""
        with caplog.at_level(logging.WARNING, logger="adoc2html.parsers.asciidoc"):
            parse("[[a]]\nOne.\n\n[[a]]\nTwo.")
        assert "Duplicate id 'a'" in caplog.text

    def test_breaks(self, parse) -> None:
        """Test thematic and page breaks."""
        assert kinds(parse("'''\n\n<<<").blocks) == [NodeKind.THEMATIC_BREAK, NodeKind.PAGE_BREAK]

    def test_block_image(self, parse) -> None:
        """Test image target, alt text and width."""
        node = parse("image::diagrams/flow-chart.png[Flow, 300]").blocks[0]
        assert node.kind == NodeKind.IMAGE
        assert node.target == "diagrams/flow-chart.png"
        assert node.attributes["alt"] == "Flow"
        assert node.attributes["width"] == "300"

    def test_block_image_default_alt(self, parse) -> None:
        """Test that alt text defaults to the file stem."""
        assert parse("image::my-pic.png[]").blocks[0].attributes["alt"] == "my pic"


@pytest.mark.unit
class TestLists:
    """Tests for list parsing."""

    def test_unordered_list(self, parse) -> None:
        """Test a simple bulleted list."""
        node = parse("* a\n* b").blocks[0]
        assert isinstance(node, ListNode)
        assert node.kind == NodeKind.ULIST
        assert [item.plain_text() for item in node.items] == ["a", "b"]

    def test_blank_lines_between_items(self, parse) -> None:
        """Test that blank lines do not split a list."""
        assert len(parse("* a\n\n* b").blocks[0].items) == 2

    def test_nested_list(self, parse) -> None:
        """Test that a deeper marker nests under the current item."""
        node = parse("* a\n** b\n* c").blocks[0]
        first, second = node.items
        assert first.blocks[0].kind == NodeKind.ULIST
        assert first.blocks[0].items[0].plain_text() == "b"
        assert second.plain_text() == "c"

    def test_ordered_list_start(self, parse) -> None:
        """Test the start attribute on ordered lists."""
        node = parse("[start=3]\n. a\n. b").blocks[0]
        assert node.kind == NodeKind.OLIST
        assert node.start == 3
        assert node.style == "arabic"

    def test_numbered_markers(self, parse) -> None:
        """Test explicit numbers as ordered list markers."""
        node = parse("1. a\n2. b").blocks[0]
        assert node.kind == NodeKind.OLIST
        assert len(node.items) == 2

    def test_nested_ordered_style(self, parse) -> None:
        """Test that nested ordered lists change numbering style."""
        node = parse(". a\n.. b").blocks[0]
        assert node.items[0].blocks[0].style == "loweralpha"

    def test_checklist(self, parse) -> None:
        """Test checked and unchecked items."""
        node = parse("* [x] done\n* [ ] todo").blocks[0]
        assert [item.checked for item in node.items] == [True, False]
        assert node.items[0].plain_text() == "done"

    def test_list_continuation(self, parse) -> None:
        """Test that + attaches a block to the item."""
        item = parse("* item\n+\n----\ncode\n----").blocks[0].items[0]
        assert kinds(item.blocks) == [NodeKind.LISTING]

    def test_description_list(self, parse) -> None:
        """Test terms and descriptions."""
        node = parse("CPU:: The brain\nRAM:: Memory").blocks[0]
        assert node.kind == NodeKind.DLIST
        first = node.items[0]
        assert first.terms[0][0].text == "CPU"
        assert first.plain_text() == "The brain"

    def test_description_on_next_line(self, parse) -> None:
        """Test an indented description below the term."""
        item = parse("CPU::\n  The brain").blocks[0].items[0]
        assert item.plain_text() == "The brain"


@pytest.mark.unit
class TestTables:
    """Tests for table parsing."""

    def test_implicit_header(self, parse) -> None:
        """Test that a first row followed by a blank line is the header."""
        table = parse("|===\n|Name |Role\n\n|Ada |Math\n|===").blocks[0]
        assert isinstance(table, Table)
        assert [c.inlines[0].text for c in table.header_rows[0].cells] == ["Name", "Role"]
        assert [c.inlines[0].text for c in table.body_rows[0].cells] == ["Ada", "Math"]

    def test_no_header(self, parse) -> None:
        """Test a table without a header row."""
        table = parse("|===\n|a |b\n|c |d\n|===").blocks[0]
        assert table.header_rows == []
        assert len(table.body_rows) == 2

    def test_cols_attribute(self, parse) -> None:
        """Test the column count taken from cols."""
        table = parse('[cols="3"]\n|===\n|a\n|b\n|c\n|===').blocks[0]
        assert len(table.body_rows) == 1
        assert table.column_count == 3

    def test_column_span(self, parse) -> None:
        """Test a cell spanning two columns."""
        table = parse('[cols="2"]\n|===\n2+|wide\n|a |b\n|===').blocks[0]
        assert table.body_rows[0].cells[0].colspan == 2
        assert len(table.body_rows) == 2

    def test_noheader_option(self, parse) -> None:
        """Test %noheader suppressing the implicit header."""
        table = parse("[%noheader]\n|===\n|a |b\n\n|c |d\n|===").blocks[0]
        assert table.header_rows == []


@pytest.mark.unit
class TestInline:
    """Tests for inline markup."""

    def test_constrained_formatting(self, parse) -> None:
        """Test strong, emphasis and monospace."""
        inlines = parse("*bold* and _it_ and `code`").blocks[0].inlines
        quoted = [node.quote_type for node in inlines if node.kind == NodeKind.INLINE_QUOTED]
        assert quoted == ["strong", "emphasis", "monospaced"]

    def test_unconstrained_formatting(self, parse) -> None:
        """Test ** inside a word."""
        inlines = parse("a**b**c").blocks[0].inlines
        assert kinds(inlines) == [NodeKind.TEXT, NodeKind.INLINE_QUOTED, NodeKind.TEXT]

    def test_nested_formatting(self, parse) -> None:
        """Test emphasis inside strong text."""
        strong = parse("*very _nested_ text*").blocks[0].inlines[0]
        assert strong.quote_type == "strong"
        assert strong.inlines[1].quote_type == "emphasis"

    @pytest.mark.parametrize(
        "source,quote_type",
        [
            ("#hi#", "mark"),
            ("^2^", "superscript"),
            ("~2~", "subscript"),
            ('"`quoted`"', "double"),
            ("'`quoted`'", "single"),
        ],
    )
    def test_other_quotes(self, parse, source, quote_type) -> None:
        """Test the remaining quoted text forms."""
        assert parse(source).blocks[0].inlines[0].quote_type == quote_type

    def test_role_span(self, parse) -> None:
        """Test [.role]#text#."""
        node = parse("[.big]#Large#").blocks[0].inlines[0]
        assert (node.quote_type, node.role) == ("unquoted", "big")

    def test_backslash_escape(self, parse) -> None:
        """Test that an escaped marker is literal text."""
        inlines = parse(r"\*not bold*").blocks[0].inlines
        assert len(inlines) == 1
        assert inlines[0].text == "*not bold*"

    def test_passthroughs(self, parse) -> None:
        """Test raw and constrained passthroughs."""
        raw = parse("+++<b>raw</b>+++").blocks[0].inlines[0]
        plain = parse("+*x*+").blocks[0].inlines[0]
        assert (raw.text, raw.raw) == ("<b>raw</b>", True)
        assert (plain.text, plain.raw) == ("*x*", False)

    def test_link_macro(self, parse) -> None:
        """Test link:target[text]."""
        node = parse("link:https://example.com[Example]").blocks[0].inlines[0]
        assert node.kind == NodeKind.INLINE_ANCHOR
        assert (node.anchor_type, node.target) == ("link", "https://example.com")
        assert node.plain_text() == "Example"

    def test_url_macro_new_window(self, parse) -> None:
        """Test that a trailing caret opens the link in a new window."""
        node = parse("https://example.com[Docs^]").blocks[0].inlines[0]
        assert node.attributes["window"] == "_blank"
        assert node.plain_text() == "Docs"

    def test_bare_url(self, parse) -> None:
        """Test that trailing punctuation is not part of a bare URL."""
        inlines = parse("See https://example.com.").blocks[0].inlines
        assert kinds(inlines) == [NodeKind.TEXT, NodeKind.INLINE_ANCHOR, NodeKind.TEXT]
        assert (inlines[1].anchor_type, inlines[1].target) == ("bare", "https://example.com")

    def test_bare_url_autolink_disabled(self, parse) -> None:
        """Test autolink_urls=False."""
        inlines = parse("See https://example.com", autolink_urls=False).blocks[0].inlines
        assert kinds(inlines) == [NodeKind.TEXT]

    def test_unsafe_link_is_text(self, parse, caplog) -> None:
        """Test that script URLs do not become links."""
        with caplog.at_level(logging.WARNING, logger="adoc2html.parsers.asciidoc"):
            inlines = parse("link:javascript:alert(1)[x]").blocks[0].inlines
        assert kinds(inlines) == [NodeKind.TEXT]
        assert inlines[0].text == "link:javascript:alert(1)[x]"
        assert "unsafe target" in caplog.text

    def test_inline_image(self, parse) -> None:
        """Test image:target[alt]."""
        node = parse("image:icon.png[Icon]").blocks[0].inlines[0]
        assert (node.kind, node.target, node.alt) == (NodeKind.INLINE_IMAGE, "icon.png", "Icon")


@pytest.mark.unit
class TestCrossReferences:
    """Tests for xrefs between sections and documents."""

    def test_internal_xref_takes_section_title(self, parse) -> None:
        """Test that an xref without text uses the target's title."""
        doc = parse("== Install\n\nSee <<_install>>.")
        xref = doc.blocks[0].blocks[0].inlines[1]
        assert xref.target == "#_install"
        assert xref.plain_text() == "Install"

    def test_xref_with_label(self, parse) -> None:
        """Test <<id,label>>."""
        xref = parse("== Install\n\n<<_install,Setup>>").blocks[0].blocks[0].inlines[0]
        assert xref.plain_text() == "Setup"

    def test_reftext_used_as_label(self, parse) -> None:
        """Test that an anchor's reftext labels references to it."""
        doc = parse("[[setup,Setup Guide]]\n== Setting Up\n\nSee <<setup>>.")
        assert doc.blocks[0].blocks[0].inlines[1].plain_text() == "Setup Guide"

    def test_unresolved_xref_warning(self, parse, caplog) -> None:
        """Test that references to unknown ids are reported."""
        with caplog.at_level(logging.WARNING, logger="adoc2html.parsers.asciidoc"):
            parse("See <<missing>>.")
        assert "Possible invalid reference: missing" in caplog.text

    @pytest.mark.parametrize(
        "source,href",
        [
            ("xref:other.adoc[Other]", "other.html"),
            ("xref:guide.adoc#setup[Setup]", "guide.html#setup"),
            ("<<other.adoc#,Other>>", "other.html"),
        ],
    )
    def test_document_xrefs(self, parse, source, href) -> None:
        """Test references to other documents."""
        assert parse(source).blocks[0].inlines[0].target == href

    def test_outfilesuffix(self, parse) -> None:
        """Test that the outfilesuffix attribute shapes document xrefs."""
        doc = parse("xref:other.adoc[Other]", attributes={"outfilesuffix": ""})
        assert doc.blocks[0].inlines[0].target == "other"


@pytest.mark.unit
class TestFootnotes:
    """Tests for footnote collection."""

    def test_numbering_and_reuse(self, parse) -> None:
        """Test that footnotes are numbered and named ones can be reused."""
        doc = parse("A.footnote:[First] B.footnote:disc[Second] C.footnote:disc[]")
        assert [f.index for f in doc.footnotes] == [1, 2]
        assert doc.footnotes[1].id == "disc"
        refs = [node.index for node in doc.blocks[0].inlines if node.kind == NodeKind.INLINE_FOOTNOTE]
        assert refs == [1, 2, 2]

    def test_undefined_footnoteref(self, parse, caplog) -> None:
        """Test that a reference to an unknown footnote stays text."""
        with caplog.at_level(logging.WARNING, logger="adoc2html.parsers.asciidoc"):
            doc = parse("x footnoteref:[nope]")
        assert doc.footnotes == []
        assert "undefined footnote 'nope'" in caplog.text


@pytest.mark.unit
class TestParserInputAndErrors:
    """Tests for input handling and failures."""

    def test_bytes_input(self) -> None:
        """Test decoding raw bytes."""
        doc = AsciiDocParser().parse(b"= Title\n\nText.")
        assert doc.doctitle == "Title"

    def test_path_and_stream_input(self, adoc_file) -> None:
        """Test file paths and binary streams."""
        from_path = AsciiDocParser().parse(adoc_file)
        from_stream = AsciiDocParser().parse(io.BytesIO(adoc_file.read_bytes()))
        assert from_path.doctitle == from_stream.doctitle == "Sample Page"

    def test_tree_is_adopted(self, parse) -> None:
        """Test that every node points at its document."""
        doc = parse("== A\n\n* item with *bold*")
        assert all(node.document is doc for node in doc.walk() if node is not doc)

    def test_wrong_options_type(self) -> None:
        """Test that renderer options are rejected."""
        with pytest.raises(InvalidOptionsError):
            AsciiDocParser(HtmlRendererOptions())  # type: ignore[arg-type]

    def test_unexpected_failure_becomes_parsing_error(self, monkeypatch) -> None:
        """Test that internal errors are wrapped."""

        def explode(self):
            raise ValueError("boom")

        monkeypatch.setattr(AsciiDocLexer, "tokenize", explode)
        with pytest.raises(ParsingError, match="boom"):
            AsciiDocParser().parse("text")

    def test_parser_is_reusable(self) -> None:
        """Test that state does not leak between parses."""
        parser = AsciiDocParser()
        parser.parse("== Intro\n\nA.footnote:[x]")
        doc = parser.parse("== Intro")
        assert doc.blocks[0].id == "_intro"
        assert doc.footnotes == []


def test_block_and_inline_types() -> None:
    """Test the node classes the parser produces."""
    doc = AsciiDocParser().parse("Some *text*")
    assert isinstance(doc.blocks[0], Block)
    assert isinstance(doc.blocks[0].inlines[0], Text)
    assert isinstance(doc.blocks[0].inlines[1], Inline)
