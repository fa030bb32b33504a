#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the Franklin renderer: custom rules over the HTML5 fallback."""

import logging
import threading
from unittest.mock import ANY, Mock

import pytest

from adoc2html.ast import Block, Document, Inline, ListItem, ListNode, NodeKind, Section, Text
from adoc2html.exceptions import RenderingError
from adoc2html.options.franklin import FranklinRendererOptions
from adoc2html.renderers.base import BaseRenderer, RenderContext
from adoc2html.renderers.franklin import FRANKLIN_RULES, FranklinRenderer, RuleRegistry
from adoc2html.renderers.html5 import Html5Renderer


def paragraph(text: str) -> Block:
    return Block(kind=NodeKind.PARAGRAPH, inlines=[Text(text=text)])


def item(text: str = "", blocks=None) -> ListItem:
    return ListItem(inlines=[Text(text=text)] if text else [], blocks=blocks or [])


def section(title: str, level: int = 1, blocks=None) -> Section:
    return Section(level=level, title=title, blocks=blocks or [])


def embedded(*blocks) -> Document:
    return Document(blocks=list(blocks))


@pytest.mark.unit
class TestFranklinExamples:
    """The worked examples of the Franklin rule catalogue."""

    def test_paragraph(self, franklin):
        assert franklin.convert(paragraph("hello")) == "<p>hello</p>"

    def test_link_strips_document_suffix(self, franklin):
        link = Inline(kind=NodeKind.INLINE_ANCHOR, target="page.html", inlines=[Text(text="Page")])
        assert franklin.convert(link) == '<a href="page">Page</a>'

    def test_thematic_break_ignores_content(self, franklin):
        node = Block(kind=NodeKind.THEMATIC_BREAK, inlines=[Text(text="ignored")])
        assert franklin.convert(node) == "<hr>"

    def test_unordered_list(self, franklin):
        node = ListNode(kind=NodeKind.ULIST, blocks=[item("a"), item("b")])
        assert franklin.convert(node) == "<ul><li>a</li><li>b</li></ul>"

    def test_admonition_without_title(self, franklin):
        node = Block(kind=NodeKind.ADMONITION, style="Warning", title="   ", inlines=[Text(text="careful")])
        result = franklin.convert(node)
        assert result == '<div class="admonition warning"><div>careful</div></div>'
        assert "<h6>" not in result


@pytest.mark.unit
class TestFranklinBlockRules:
    """Tests for the block-level rules."""

    def test_admonition_with_title(self, franklin):
        node = Block(kind=NodeKind.ADMONITION, style="TIP", title="Hint", blocks=[paragraph("x")])
        assert franklin.convert(node) == '<div class="admonition tip"><div><h6>Hint</h6><p>x</p></div></div>'

    def test_ordered_list(self, franklin):
        node = ListNode(kind=NodeKind.OLIST, blocks=[item("one")])
        assert franklin.convert(node) == "<ol><li>one</li></ol>"

    @pytest.mark.parametrize("kind", [NodeKind.ULIST, NodeKind.OLIST])
    def test_list_with_empty_items_renders_nothing(self, franklin, kind):
        node = ListNode(kind=kind, blocks=[item(), item()])
        assert franklin.convert(node) == ""

    def test_list_without_items_renders_nothing(self, franklin):
        assert franklin.convert(ListNode(kind=NodeKind.ULIST)) == ""

    def test_list_item_prefers_attached_content(self, franklin):
        node = item("principal", blocks=[paragraph("attached")])
        assert franklin.convert(node) == "<li><p>attached</p></li>"

    def test_list_item_with_nested_list_is_not_wrapped(self, franklin):
        nested = ListNode(kind=NodeKind.ULIST, blocks=[item("child")])
        node = item("parent", blocks=[nested])
        assert franklin.convert(node) == "<ul><li>child</li></ul>"

    def test_list_item_linkifies_text(self, franklin):
        node = item("see https://example.com/docs")
        assert franklin.convert(node) == (
            '<li>see <a href="https://example.com/docs">https://example.com/docs</a></li>'
        )

    def test_list_item_link_in_attached_listing_keeps_markup(self, franklin):
        listing = Block(kind=NodeKind.LISTING, style="listing", source="curl https://example.com")
        result = franklin.convert(item("item", blocks=[listing]))
        assert '<pre>curl <a href="https://example.com">https://example.com</a></pre>' in result
        assert result.endswith("</pre></div></div></li>")

    def test_list_item_linkify_can_be_disabled(self):
        renderer = FranklinRenderer(FranklinRendererOptions(linkify_list_items=False))
        assert renderer.convert(item("https://example.com")) == "<li>https://example.com</li>"

    def test_empty_list_item_renders_nothing(self, franklin):
        assert franklin.convert(item()) == ""

    def test_document_and_embedded_pass_content_through(self, franklin):
        doc = embedded(paragraph("a"), paragraph("b"))
        assert franklin.convert(doc, "embedded") == "<p>a</p><p>b</p>"
        assert franklin.convert(doc) == "<p>a</p><p>b</p>"


@pytest.mark.unit
class TestFranklinInlineRules:
    """Tests for the inline rules."""

    def test_strong(self, franklin):
        node = Inline(kind=NodeKind.INLINE_QUOTED, quote_type="strong", inlines=[Text(text="bold")])
        assert franklin.convert(node) == "<strong>bold</strong>"

    def test_other_quote_types_render_bare_text_with_warning(self, franklin, caplog):
        node = Inline(kind=NodeKind.INLINE_QUOTED, quote_type="emphasis", inlines=[Text(text="soft")])
        with caplog.at_level(logging.WARNING, logger="adoc2html.renderers.franklin"):
            assert franklin.convert(node) == "soft"
        assert "emphasis" in caplog.text

    def test_link_suffix_removed_once(self, franklin):
        link = Inline(kind=NodeKind.INLINE_ANCHOR, target="a.html.html", inlines=[Text(text="A")])
        assert franklin.convert(link) == '<a href="a.html">A</a>'

    @pytest.mark.parametrize("target", ["page.HTML", "page.htm", "https://example.com/", "page.html#top"])
    def test_link_without_exact_suffix_unchanged(self, franklin, target):
        link = Inline(kind=NodeKind.INLINE_ANCHOR, target=target, inlines=[Text(text="x")])
        assert franklin.convert(link) == f'<a href="{target}">x</a>'

    def test_link_without_text_shows_target(self, franklin):
        link = Inline(kind=NodeKind.INLINE_ANCHOR, anchor_type="bare", target="https://example.com/?a=1&b=2")
        assert franklin.convert(link) == (
            '<a href="https://example.com/?a=1&amp;b=2">https://example.com/?a=1&amp;b=2</a>'
        )

    def test_custom_document_suffix(self):
        renderer = FranklinRenderer(FranklinRendererOptions(document_suffix=".htm"))
        link = Inline(kind=NodeKind.INLINE_ANCHOR, target="page.htm", inlines=[Text(text="P")])
        assert renderer.convert(link) == '<a href="page">P</a>'

    def test_text_is_escaped(self, franklin):
        assert franklin.convert(paragraph("a < b & c")) == "<p>a &lt; b &amp; c</p>"


@pytest.mark.unit
class TestSectionNesting:
    """Tests pinning the flattened section markup."""

    def test_single_section_is_closed(self, franklin):
        doc = embedded(section("Intro", blocks=[paragraph("x")]))
        assert franklin.convert(doc, "embedded") == "<div><h2>Intro</h2><p>x</p></div>"

    def test_sibling_sections_are_balanced(self, franklin):
        doc = embedded(section("A"), section("B"), section("C"))
        result = franklin.convert(doc, "embedded")
        assert result == "<div><h2>A</h2></div><div><h2>B</h2></div><div><h2>C</h2></div>"
        assert result.count("<div>") == result.count("</div>")

    def test_nested_sections_are_flattened(self, franklin):
        parent = section("P", blocks=[section("S1", 2), section("S2", 2), section("S3", 2)])
        result = franklin.convert(embedded(parent), "embedded")
        assert result == (
            "<div><h2>P</h2></div><div><h3>S1</h3></div><div><h3>S2</h3></div><div><h3>S3</h3></div>"
        )

    def test_three_levels_close_more_containers_than_they_open(self, franklin):
        grandchild = section("G", 3)
        parent = section("P", blocks=[section("C", 2, blocks=[grandchild])])
        result = franklin.convert(embedded(parent), "embedded")
        assert result == "<div><h2>P</h2></div><div><h3>C</h3></div></div><div><h4>G</h4></div>"

    def test_nested_section_leaves_its_container_open(self, franklin):
        ctx = RenderContext(franklin)
        with ctx.section_scope():
            result = franklin.convert(section("Child", 2), ctx=ctx)
        # Closes the enclosing container, then opens its own without closing it
        assert result == "</div><div><h3>Child</h3>"

    def test_depth_restored_after_conversion(self, franklin):
        doc = embedded(section("P", blocks=[section("C", 2)]))
        ctx = RenderContext(franklin)
        first = franklin.convert(doc, "embedded", ctx=ctx)
        assert ctx.section_depth == 0
        assert franklin.convert(doc, "embedded") == first

    def test_depth_restored_when_rule_raises(self):
        renderer = FranklinRenderer()

        @renderer.rules.register(NodeKind.PARAGRAPH)
        def failing(node, ctx):
            raise ValueError("boom")

        ctx = RenderContext(renderer)
        with pytest.raises(ValueError):
            renderer.convert(section("S", blocks=[paragraph("x")]), ctx=ctx)
        assert ctx.section_depth == 0

    def test_shared_renderer_across_threads(self, franklin):
        """Concurrent conversions on one instance do not share section depth."""
        grandchild = section("G", 3, blocks=[paragraph("g")])
        doc = embedded(
            section("P", blocks=[section("C", 2, blocks=[grandchild]), section("D", 2)]),
            section("Q", blocks=[paragraph("q")]),
        )
        expected = franklin.convert(doc, "embedded")
        results: list[str] = []
        lock = threading.Lock()

        def worker():
            for _ in range(50):
                html = franklin.convert(doc, "embedded")
                with lock:
                    results.append(html)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 400
        assert all(html == expected for html in results)

    def test_section_titles_render_inline_markup(self, franklin):
        title = [Text(text="Use "), Inline(kind=NodeKind.INLINE_QUOTED, quote_type="strong", inlines=[Text(text="it")])]
        node = Section(level=1, title="Use *it*", title_inlines=title)
        assert franklin.convert(node) == "<div><h2>Use <strong>it</strong></h2></div>"


@pytest.mark.unit
class TestFallback:
    """Tests for delegation to the default renderer."""

    @pytest.mark.parametrize(
        "node",
        [
            Block(kind=NodeKind.LISTING, source="a < b", style="source", attributes={"language": "py"}),
            Block(kind=NodeKind.IMAGE, target="cat.png", attributes={"alt": "cat"}),
            Block(kind=NodeKind.PAGE_BREAK),
            Inline(kind=NodeKind.INLINE_BREAK),
            Text(text="x & y"),
        ],
    )
    def test_fallback_output_matches_default_renderer(self, franklin, node):
        assert franklin.convert(node) == Html5Renderer().convert(node)

    def test_fallback_children_use_franklin_rules(self, franklin):
        node = Block(kind=NodeKind.EXAMPLE, blocks=[paragraph("x")])
        assert franklin.convert(node) == '<div class="exampleblock"><div class="content"><p>x</p></div></div>'

    def test_fallback_receives_node_transform_and_options(self):
        base = Mock(spec=BaseRenderer)
        base.convert.return_value = "<default>"
        renderer = FranklinRenderer(base_renderer=base)
        node = Block(kind=NodeKind.SIDEBAR)

        assert renderer.convert(node, opts={"section_ids": False}) == "<default>"
        base.convert.assert_called_once_with(node, None, {"section_ids": False}, ctx=ANY)

    def test_fallback_receives_explicit_transform(self):
        base = Mock(spec=BaseRenderer)
        base.convert.return_value = "custom"
        renderer = FranklinRenderer(base_renderer=base)
        node = paragraph("x")

        assert renderer.convert(node, "outline") == "custom"
        base.convert.assert_called_once_with(node, "outline", {}, ctx=ANY)

    def test_fallback_options_apply_to_default_renderer(self, franklin):
        doc = Document(blocks=[Block(kind=NodeKind.SIDEBAR, blocks=[paragraph("x")])])
        assert franklin.convert(doc, "embedded", {"include_footnotes": False}) == (
            '<div class="sidebarblock"><div class="content"><p>x</p></div></div>'
        )

    def test_unknown_name_raises(self, franklin):
        with pytest.raises(RenderingError):
            franklin.convert(paragraph("x"), "no_such_thing")


@pytest.mark.unit
class TestRuleRegistry:
    """Tests for rule registration and lookup."""

    def test_builtin_catalogue(self):
        assert FRANKLIN_RULES.kinds() == frozenset(
            {
                NodeKind.DOCUMENT,
                NodeKind.EMBEDDED,
                NodeKind.SECTION,
                NodeKind.PARAGRAPH,
                NodeKind.THEMATIC_BREAK,
                NodeKind.ADMONITION,
                NodeKind.INLINE_QUOTED,
                NodeKind.ULIST,
                NodeKind.OLIST,
                NodeKind.LIST_ITEM,
                NodeKind.INLINE_ANCHOR,
            }
        )

    def test_string_and_hyphenated_names(self):
        assert FRANKLIN_RULES.get("list-item") is FRANKLIN_RULES.get(NodeKind.LIST_ITEM)
        assert "paragraph" in FRANKLIN_RULES
        assert "image" not in FRANKLIN_RULES
        assert FRANKLIN_RULES.get("not-a-kind") is None

    def test_register_decorator_adds_rule(self, franklin):
        @franklin.rules.register("image")
        def render_image(node, ctx):
            return f'<img src="{node.target}">'

        assert franklin.convert(Block(kind=NodeKind.IMAGE, target="a.png")) == '<img src="a.png">'

    def test_renderer_rules_are_a_copy(self, franklin):
        franklin.rules.remove(NodeKind.PARAGRAPH)
        assert NodeKind.PARAGRAPH in FRANKLIN_RULES.kinds()
        assert franklin.convert(paragraph("x")) == '<div class="paragraph"><p>x</p></div>'

    def test_remove_reports_presence(self):
        rules = RuleRegistry()
        rules.add("text", lambda node, ctx: "")
        assert len(rules) == 1
        assert rules.remove("text") is True
        assert rules.remove("text") is False

    def test_custom_registry(self):
        rules = RuleRegistry({"paragraph": lambda node, ctx: "P"})
        renderer = FranklinRenderer(rules=rules)
        assert renderer.convert(paragraph("x")) == "P"
        assert list(rules) == [NodeKind.PARAGRAPH]
