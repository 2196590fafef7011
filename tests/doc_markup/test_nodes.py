"""Tests for the markup tree conversion and renderer."""

import pytest

from src.doc_markup.nodes import (
    MarkupNode,
    NodeType,
    SourcePosition,
    document,
    paragraph,
    render,
    text,
)
from src.doc_markup.parser import MarkupParser


def parse(markup: str) -> MarkupNode:
    return MarkupParser().parse_text(markup)


class TestConversion:
    """Test conversion from markdown-it-py syntax trees."""

    def test_paragraph_children_are_inlines(self):
        """Test that the inline wrapper is flattened away."""
        root = parse("Plain *em* and **strong**.")

        para = root.children[0]
        assert para.type == NodeType.PARAGRAPH
        assert [child.type for child in para.children] == [
            NodeType.TEXT,
            NodeType.EM,
            NodeType.TEXT,
            NodeType.STRONG,
            NodeType.TEXT,
        ]

    def test_list_structure(self):
        """Test bullet lists, items and tightness."""
        root = parse("- one\n- two")

        bullets = root.children[0]
        assert bullets.type == NodeType.BULLET_LIST
        assert bullets.meta["tight"] is True
        assert [item.type for item in bullets.children] == [NodeType.LIST_ITEM] * 2

    def test_loose_list(self):
        """Test that blank lines between items make a loose list."""
        root = parse("- one\n\n- two")

        assert root.children[0].meta["tight"] is False

    def test_block_ranges(self):
        """Test 1-based source ranges on blocks."""
        root = parse("First.\n\n  Second line\ncontinues.")

        second = root.children[1]
        assert second.range.start == SourcePosition(line=3, column=3)
        assert second.range.end.line == 4

    def test_paragraph_column_inside_list(self):
        """Test that paragraph columns skip the list marker."""
        root = parse("- Parameter x: d")

        para = root.children[0].children[0].children[0]
        assert para.range.start == SourcePosition(line=1, column=3)

    def test_escapes_are_kept_as_written(self):
        """Test that backslash escapes stay separate nodes with their markup."""
        root = parse("a \\* b")

        escape = root.children[0].children[1]
        assert escape.type == NodeType.TEXT_SPECIAL
        assert escape.content == "*"
        assert escape.markup == "\\*"
        assert escape.info == "escape"

    def test_list_without_item_paragraphs_is_tight(self):
        """Test that items starting with code or a nested list do not make a loose list."""
        fences = parse("- ```\n  a\n  ```\n- ```\n  b\n  ```")
        nested = parse("- - a\n- - b")

        assert fences.children[0].meta["tight"] is True
        assert nested.children[0].meta["tight"] is True

    def test_nodes_are_immutable(self):
        """Test that converted nodes cannot be changed in place."""
        root = parse("Text.")

        with pytest.raises(AttributeError):
            root.children[0].type = NodeType.HEADING


class TestRender:
    """Test rendering subtrees to normalized text."""

    @pytest.mark.parametrize(
        "markup,expected",
        [
            ("Plain text.", "Plain text."),
            ("Some _emphasis_ here.", "Some *emphasis* here."),
            ("Some __strong__ here.", "Some **strong** here."),
            ("Call `run()` now.", "Call `run()` now."),
            ("A [link](https://example.com).", "A [link](https://example.com)."),
            ('A [link](https://example.com "Title").', 'A [link](https://example.com "Title").'),
            ("An ![image](pic.png).", "An ![image](pic.png)."),
            ("Line one\nline two", "Line one\nline two"),
            ("Visit <https://example.com>.", "Visit <https://example.com>."),
            ("Use a literal \\*star\\*.", "Use a literal \\*star\\*."),
            ("Not html: \\<b\\>", "Not html: \\<b\\>"),
            ("Fish &amp; chips", "Fish &amp; chips"),
        ],
    )
    def test_inline_rendering(self, markup, expected):
        """Test inline formatting normalization."""
        assert render(parse(markup).children[0]) == expected

    def test_heading(self):
        """Test heading rendering."""
        assert render(parse("## Overview").children[0]) == "## Overview"

    def test_nested_list(self):
        """Test nested bullet list indentation."""
        root = parse("* outer\n  * inner\n* next")

        assert render(root.children[0]) == "- outer\n  - inner\n- next"

    def test_ordered_list(self):
        """Test ordered list numbering from its start."""
        root = parse("3. three\n4. four")

        assert render(root.children[0]) == "3. three\n4. four"

    def test_loose_list(self):
        """Test loose lists keep blank lines between items."""
        root = parse("- one\n\n- two")

        assert render(root.children[0]) == "- one\n\n- two"

    def test_tight_list_of_code_items(self):
        """Test that code-only items are not separated by blank lines."""
        root = parse("- ```\n  a\n  ```\n- ```\n  b\n  ```")

        assert render(root.children[0]) == "- ```\n  a\n  ```\n- ```\n  b\n  ```"

    def test_tight_list_of_nested_lists(self):
        """Test items that hold only a nested list."""
        root = parse("- - a\n- - b")

        assert render(root.children[0]) == "- - a\n- - b"

    def test_blockquote(self):
        """Test blockquote prefixes."""
        root = parse("> quoted\n>\n> more")

        assert render(root.children[0]) == "> quoted\n>\n> more"

    def test_code(self):
        """Test fenced and indented code."""
        root = parse("```python\nprint(1)\n```\n\n    indented\n")

        assert render(root.children[0]) == "```python\nprint(1)\n```"
        assert render(root.children[1]) == "    indented"

    def test_html_block(self):
        """Test raw HTML blocks."""
        assert render(parse("<!-- comment -->").children[0]) == "<!-- comment -->"

    def test_thematic_break(self):
        """Test thematic break rendering."""
        assert render(parse("***").children[0]) == "---"

    def test_document(self):
        """Test a whole document joins blocks with blank lines."""
        root = document([paragraph([text("One.")]), paragraph([text("Two.")])])

        assert render(root) == "One.\n\nTwo."

    def test_directive(self):
        """Test directive rendering with and without a body."""
        root = parse("@Available(iOS, introduced: \"14.0\")\n\n@Comment {\n    Hidden.\n}")

        assert render(root.children[0]) == '@Available(iOS, introduced: "14.0")'
        assert render(root.children[1]) == "@Comment {\n    Hidden.\n}"

    def test_doxygen_commands(self):
        """Test syntax-native parameter and return rendering."""
        root = parse("\\param x The x.\n\\returns The y.")

        assert render(root.children[0]) == "\\param x The x."
        assert render(root.children[1]) == "\\returns The y."
