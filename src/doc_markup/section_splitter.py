"""Section splitter separating a documentation abstract from its discussion."""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Sequence

from .components import AbstractSection
from .nodes import MarkupNode, NodeType

logger = logging.getLogger(__name__)


class ParseSection(IntEnum):
    """Sections in the order they are expected to appear in documentation markup."""

    ABSTRACT = 0
    DISCUSSION = 1
    END = 2

    @classmethod
    def from_name(cls, name: str) -> Optional["ParseSection"]:
        """Look up a section by case-insensitive name, e.g. ``"discussion"``."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            return None


@dataclass
class SplitResult:
    """Output of a section split over a document's top-level blocks."""

    abstract: Optional[AbstractSection] = None
    discussion_range: Optional[range] = None  # indexes of the discussion blocks


class SectionSplitter:
    """Partitions top-level blocks into an abstract and a discussion zone."""

    def split(
        self,
        children: Sequence[MarkupNode],
        up_to_section: ParseSection = ParseSection.END,
    ) -> SplitResult:
        """
        Split top-level blocks in a single forward pass.

        The first paragraph, preceded only by HTML blocks, is the abstract.
        HTML blocks directly after the abstract are skipped; the first other
        block starts the discussion, which runs to the last block.

        Args:
            children: The document root's top-level blocks, in order
            up_to_section: Blocks past this section are not examined

        Returns:
            SplitResult with the abstract and the discussion block range
        """
        result = SplitResult()
        current = ParseSection.ABSTRACT
        discussion_start = None
        last_index = len(children) - 1

        for index, child in enumerate(children):
            if current == ParseSection.END or current > up_to_section:
                continue

            if current == ParseSection.ABSTRACT:
                if result.abstract is None and child.type == NodeType.PARAGRAPH:
                    result.abstract = AbstractSection.from_paragraph(child)
                    continue
                if child.type == NodeType.HTML_BLOCK:
                    continue
                current = ParseSection.DISCUSSION
                if current > up_to_section:
                    continue

            if current == ParseSection.DISCUSSION:
                if discussion_start is None:
                    discussion_start = index
                if index == last_index:
                    result.discussion_range = range(discussion_start, last_index + 1)

        logger.debug(
            f"Split {len(children)} blocks: abstract={result.abstract is not None}, "
            f"discussion={result.discussion_range}"
        )
        return result
