"""Tag extraction from individual list items."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .nodes import MarkupNode, NodeType, SourceRange
from .tag_grammar import KnownTag, classify, split_name_and_content

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractedTag:
    """A list item recognized as ``name: content``, before it becomes a typed record."""

    raw_name: str
    tag_kind: Optional[KnownTag]
    contents: Tuple[MarkupNode, ...]
    name_range: Optional[SourceRange] = None
    range: Optional[SourceRange] = None


def extract_tag(list_item: MarkupNode) -> Optional[ExtractedTag]:
    """
    Extract a tag from a list item whose first line reads ``name: content``.

    Args:
        list_item: A ``list_item`` node

    Returns:
        ExtractedTag whose contents are the rest of the first line followed by
        the item's remaining blocks, or None when the item is not tag-shaped
    """
    if list_item.type != NodeType.LIST_ITEM or not list_item.children:
        return None

    first_block = list_item.children[0]
    if first_block.type != NodeType.PARAGRAPH:
        return None

    split = split_name_and_content(first_block)
    if split is None:
        return None

    return ExtractedTag(
        raw_name=split.name,
        tag_kind=classify(split.name),
        contents=(split.content,) + tuple(list_item.children[1:]),
        name_range=split.name_range,
        range=list_item.range,
    )


def extract_outline(list_item: MarkupNode) -> List[ExtractedTag]:
    """
    Extract the entries nested under an outline tag such as ``- Parameters:``.

    Each nested bullet item's own name (e.g. a parameter name or a status
    code) is the entry name. Nested items that are not tag-shaped are skipped.

    Args:
        list_item: The list item carrying the outline tag

    Returns:
        One ExtractedTag per parsable nested item, in document order
    """
    entries = []
    for block in list_item.children:
        if block.type != NodeType.BULLET_LIST:
            continue
        for nested_item in block.children:
            entry = extract_tag(nested_item)
            if entry is None:
                logger.debug("Skipping outline entry without a 'name:' prefix")
                continue
            entries.append(entry)
    return entries
