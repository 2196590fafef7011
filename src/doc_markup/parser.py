"""Markup parser turning documentation text into a MarkupNode tree."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from .comment import strip_comment_markers
from .doc_commands import doc_commands_plugin
from .nodes import MarkupNode, from_syntax_tree

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """Result of parsing a documentation file."""

    success: bool
    document: Optional[MarkupNode] = None
    content: str = None
    error: str = None


class MarkupParser:
    """Parses documentation markup with markdown-it-py."""

    def __init__(self, enable_doc_commands: bool = True):
        """
        Initialize the parser.

        Args:
            enable_doc_commands: Recognize ``\\param``, ``\\returns`` and ``@Directive`` blocks
        """
        self.md = MarkdownIt("commonmark")
        # Escapes and entities stay separate text_special tokens carrying their source spelling
        self.md.disable("text_join")
        if enable_doc_commands:
            self.md.use(doc_commands_plugin)

    def parse_text(self, text: str) -> MarkupNode:
        """
        Parse markup text into a document tree.

        Args:
            text: Markdown text, already stripped of comment decoration

        Returns:
            The ``root`` MarkupNode
        """
        tokens = self.md.parse(text)
        return from_syntax_tree(SyntaxTreeNode(tokens), text)

    def parse_comment(self, raw: str) -> MarkupNode:
        """Parse a raw ``///`` or ``/** */`` documentation comment."""
        return self.parse_text(strip_comment_markers(raw))

    def parse_file(
        self, file_path: Union[str, Path], strip_comments: bool = False
    ) -> ParseResult:
        """
        Parse a documentation file.

        Args:
            file_path: Path to the file
            strip_comments: Remove ``///`` or ``/** */`` decoration before parsing

        Returns:
            ParseResult with the document tree, or error information
        """
        file_path = Path(file_path)

        if not file_path.exists():
            return ParseResult(success=False, error=f"File not found: {file_path}")

        if not file_path.is_file():
            return ParseResult(success=False, error=f"Path is not a file: {file_path}")

        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            return ParseResult(success=False, error=f"Unable to read file as UTF-8: {e}")

        if strip_comments:
            content = strip_comment_markers(content)

        logger.debug(f"Parsing {len(content)} characters from {file_path}")
        return ParseResult(success=True, document=self.parse_text(content), content=content)
