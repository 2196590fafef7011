"""Structured documentation model assembled from parsed markup."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .components import AbstractSection, DiscussionSection, TaggedComponents
from .nodes import MarkupNode
from .parser import MarkupParser
from .section_splitter import ParseSection, SectionSplitter
from .tag_rewriter import TagRewriter

logger = logging.getLogger(__name__)


@dataclass
class DocumentationMarkup:
    """
    A structured documentation markup data model.

    The abstract is the first leading paragraph of the markup (skipping HTML
    comments). If the markup doesn't start with a paragraph, it's considered
    to not have an abstract.

    The discussion runs from the end of the abstract to the end of the
    document. List items written as ``- Parameter x:``, ``- Returns:`` and the
    other known tags are pulled out of the discussion into ``tags``.
    """

    abstract_section: Optional[AbstractSection] = None
    discussion_section: Optional[DiscussionSection] = None
    tags: Optional[TaggedComponents] = None

    @classmethod
    def from_markup(
        cls, markup: MarkupNode, up_to_section: ParseSection = ParseSection.END
    ) -> "DocumentationMarkup":
        """
        Build the model from an already parsed document tree.

        Args:
            markup: The ``root`` node of a parsed document
            up_to_section: Documentation past this section is ignored
        """
        return DocumentationMarkupParser().parse(markup, up_to_section)

    @classmethod
    def from_text(
        cls,
        text: str,
        up_to_section: ParseSection = ParseSection.END,
        parser: Optional[MarkupParser] = None,
    ) -> "DocumentationMarkup":
        """Parse documentation markup from a string."""
        parser = parser or MarkupParser()
        return cls.from_markup(parser.parse_text(text), up_to_section)

    @classmethod
    def from_comment(
        cls,
        raw: str,
        up_to_section: ParseSection = ParseSection.END,
        parser: Optional[MarkupParser] = None,
    ) -> "DocumentationMarkup":
        """Parse a ``///`` or ``/** */`` documentation comment."""
        parser = parser or MarkupParser()
        return cls.from_markup(parser.parse_comment(raw), up_to_section)

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to a JSON-compatible dictionary.

        Absent sections and empty tag collections are omitted rather than
        emitted as empty containers.
        """
        result = {}
        if self.abstract_section is not None and self.abstract_section.content:
            result["abstract"] = self.abstract_section.to_dict()
        if self.discussion_section is not None and self.discussion_section.content:
            result["discussion"] = self.discussion_section.to_dict()
        if self.tags is not None:
            result.update(self.tags.to_dict())
        return result


class DocumentationMarkupParser:
    """Runs the section splitter and the tag rewriter over one document."""

    def __init__(self):
        self.section_splitter = SectionSplitter()
        self.tag_rewriter = TagRewriter()

    def parse(
        self, markup: MarkupNode, up_to_section: ParseSection = ParseSection.END
    ) -> DocumentationMarkup:
        children = markup.children
        split = self.section_splitter.split(children, up_to_section)

        if up_to_section < ParseSection.DISCUSSION:
            return DocumentationMarkup(abstract_section=split.abstract)

        discussion_range = split.discussion_range or range(0)
        rewrite = self.tag_rewriter.rewrite([children[i] for i in discussion_range])
        if rewrite.tags.is_empty:
            logger.debug("No documentation tags found")

        return DocumentationMarkup(
            abstract_section=split.abstract,
            discussion_section=rewrite.discussion,
            tags=rewrite.tags,
        )
