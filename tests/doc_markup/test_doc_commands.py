"""Tests for the doxygen-command and directive markdown-it plugin."""

from src.doc_markup.nodes import NodeType, render
from src.doc_markup.parser import MarkupParser


def parse(markup: str):
    return MarkupParser().parse_text(markup)


class TestDoxygenCommands:
    """Test \\param and \\returns blocks."""

    def test_param(self):
        """Test a parameter command."""
        root = parse("\\param count The number of items.")

        node = root.children[0]
        assert node.type == NodeType.DOXYGEN_PARAM
        assert node.meta["name"] == "count"
        assert [render(child) for child in node.children] == ["The number of items."]

    def test_returns_spellings(self):
        """Test every accepted spelling of the returns command."""
        for command in ("\\returns", "\\return", "\\result"):
            node = parse(f"{command} A value.").children[0]
            assert node.type == NodeType.DOXYGEN_RETURNS
            assert render(node.children[0]) == "A value."

    def test_description_continues_until_blank_line(self):
        """Test multi-line descriptions."""
        root = parse("\\param x First line\nsecond line.\n\nA paragraph.")

        assert render(root.children[0].children[0]) == "First line\nsecond line."
        assert root.children[1].type == NodeType.PARAGRAPH

    def test_command_interrupts_paragraph(self):
        """Test that a command line ends the preceding paragraph."""
        root = parse("Summary.\n\\param x The x.")

        assert [child.type for child in root.children] == [
            NodeType.PARAGRAPH,
            NodeType.DOXYGEN_PARAM,
        ]

    def test_command_without_description(self):
        """Test a command with nothing after it."""
        node = parse("\\returns").children[0]

        assert node.type == NodeType.DOXYGEN_RETURNS
        assert node.children == ()

    def test_param_requires_name(self):
        """Test that a bare \\param is ordinary text."""
        assert parse("\\param").children[0].type == NodeType.PARAGRAPH

    def test_indented_command_is_code(self):
        """Test that indented commands stay code blocks."""
        assert parse("    \\param x y").children[0].type == NodeType.CODE_BLOCK

    def test_plugin_disabled(self):
        """Test parsing without the plugin."""
        root = MarkupParser(enable_doc_commands=False).parse_text("\\param x y")

        assert root.children[0].type == NodeType.PARAGRAPH


class TestBlockDirectives:
    """Test @Directive blocks."""

    def test_directive_without_body(self):
        """Test a single-line directive."""
        node = parse("@Available(macOS, introduced: \"13.0\")").children[0]

        assert node.type == NodeType.DIRECTIVE
        assert node.meta == {"name": "Available", "arguments": 'macOS, introduced: "13.0"'}
        assert node.children == ()

    def test_directive_without_arguments(self):
        """Test a directive name alone."""
        node = parse("@Snippet").children[0]

        assert node.meta["name"] == "Snippet"
        assert node.meta["arguments"] is None

    def test_directive_body(self):
        """Test block content nested inside a directive."""
        root = parse("@Comment {\n    Hidden *text*.\n\n    - item\n}\n\nAfter.")

        directive = root.children[0]
        assert directive.type == NodeType.DIRECTIVE
        assert [child.type for child in directive.children] == [
            NodeType.PARAGRAPH,
            NodeType.BULLET_LIST,
        ]
        assert render(root.children[1]) == "After."

    def test_nested_directives(self):
        """Test directives nested inside directive bodies."""
        root = parse("@Metadata {\n    @Options {\n        Inner.\n    }\n}\nOuter.")

        metadata = root.children[0]
        options = metadata.children[0]
        assert options.meta["name"] == "Options"
        assert render(options.children[0]) == "Inner."
        assert render(root.children[1]) == "Outer."

    def test_unclosed_directive_runs_to_end(self):
        """Test that a missing closing brace closes the directive at the end."""
        root = parse("@Comment {\n    Never closed.")

        assert len(root.children) == 1
        assert render(root.children[0].children[0]) == "Never closed."

    def test_email_like_text_is_not_a_directive(self):
        """Test that only whole-line directives are recognized."""
        root = parse("@someone said hello")

        assert root.children[0].type == NodeType.PARAGRAPH
