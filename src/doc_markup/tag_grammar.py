"""Tag grammar for documentation list items such as ``- Parameter name: text``."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .nodes import TEXT_TYPES, MarkupNode, NodeType, SourcePosition, SourceRange, paragraph, text

# Passthrough tags carried over from Swift documentation comments. They have no
# structure beyond name and content.
SIMPLE_LIST_ITEM_TAGS = frozenset(
    {
        "attention",
        "author",
        "authors",
        "bug",
        "complexity",
        "copyright",
        "date",
        "experiment",
        # asides (note, important, warning, tip, seealso) are regular discussion content
        "invariant",
        "localizationkey",
        "mutatingvariant",
        "nonmutatingvariant",
        "postcondition",
        "precondition",
        "remark",
        "remarks",
        "returns",
        "throws",
        "requires",
        "since",
        "tag",
        "todo",
        "version",
        "keyword",
        "recommended",
        "recommendedover",
    }
)


class TagKind(Enum):
    """Tags with a dedicated place in TaggedComponents, keyed by lowercase keyword."""

    RETURNS = "returns"
    THROWS = "throws"
    PARAMETER = "parameter"
    PARAMETERS = "parameters"
    HTTP_BODY = "httpbody"
    HTTP_RESPONSE = "httpresponse"
    HTTP_RESPONSES = "httpresponses"
    HTTP_PARAMETER = "httpparameter"
    HTTP_PARAMETERS = "httpparameters"
    HTTP_BODY_PARAMETER = "httpbodyparameter"
    HTTP_BODY_PARAMETERS = "httpbodyparameters"

    @property
    def requires_argument(self) -> bool:
        return self in _ARGUMENT_KINDS

    @property
    def is_outline(self) -> bool:
        return self in _OUTLINE_KINDS


_ARGUMENT_KINDS = frozenset(
    {
        TagKind.PARAMETER,
        TagKind.HTTP_RESPONSE,
        TagKind.HTTP_PARAMETER,
        TagKind.HTTP_BODY_PARAMETER,
    }
)

_OUTLINE_KINDS = frozenset(
    {
        TagKind.PARAMETERS,
        TagKind.HTTP_RESPONSES,
        TagKind.HTTP_PARAMETERS,
        TagKind.HTTP_BODY_PARAMETERS,
    }
)


@dataclass(frozen=True)
class KnownTag:
    """A classified tag keyword with its argument, e.g. ``Parameter(name)``."""

    kind: TagKind
    argument: Optional[str] = None


@dataclass(frozen=True)
class NameAndContent:
    """A list item's first line split at its first colon."""

    name: str
    name_range: Optional[SourceRange]
    content: MarkupNode  # the rest of the first line, rewrapped as a paragraph


def classify(name: str) -> Optional[KnownTag]:
    """
    Classify a tag name against the known tag grammar.

    The first whitespace-delimited word is matched case-insensitively; the
    remainder, if any, is the tag argument and keeps its original case.

    Args:
        name: Tag name as written before the colon, e.g. ``"Parameter count"``

    Returns:
        KnownTag, or None when the keyword is unknown or a required argument is missing
    """
    words = name.strip().split(None, 1)
    if not words:
        return None

    try:
        kind = TagKind(words[0].lower())
    except ValueError:
        return None

    if not kind.requires_argument:
        return KnownTag(kind)

    argument = words[1].strip() if len(words) == 2 else ""
    if not argument:
        return None
    return KnownTag(kind, argument)


def is_simple_tag(name: str) -> bool:
    return name.strip().lower() in SIMPLE_LIST_ITEM_TAGS


def split_name_and_content(first_paragraph: MarkupNode) -> Optional[NameAndContent]:
    """
    Split a tag line such as ``Parameter x: Some text`` into name and content.

    The colon is searched for in the leading run of plain text, which may mix
    text with backslash escapes and entities. An escaped colon is not a
    separator. Inline formatting after the colon is kept in the content
    paragraph.

    Args:
        first_paragraph: The paragraph starting a list item

    Returns:
        NameAndContent, or None when the paragraph is not a tag line
    """
    inlines = first_paragraph.children
    prefix = ""
    source_offset = 0  # markup characters consumed before the current node

    for index, node in enumerate(inlines):
        if node.type not in TEXT_TYPES:
            return None
        if node.type == NodeType.TEXT_SPECIAL:
            prefix += node.content
            source_offset += len(node.markup or node.content)
            continue
        colon = node.content.find(":")
        if colon < 0:
            prefix += node.content
            source_offset += len(node.content)
            continue
        break
    else:
        return None

    name_text = prefix + node.content[:colon]
    name = name_text.strip()
    if not name:
        return None

    after_colon = node.content[colon + 1 :]
    remainder = after_colon.lstrip(" ")
    content_inlines = ([text(remainder)] if remainder else []) + list(inlines[index + 1 :])
    if not remainder:
        # "Parameters:" followed by a line break has no inline content of its own
        while content_inlines and content_inlines[0].is_a(
            NodeType.SOFTBREAK, NodeType.HARDBREAK
        ):
            content_inlines.pop(0)

    leading = len(name_text) - len(name_text.lstrip())
    trailing = len(name_text) - len(name_text.rstrip())
    colon_offset = source_offset + colon
    name_range, content_range = _split_ranges(
        first_paragraph.range,
        leading,
        colon_offset - trailing,
        colon_offset + 1 + len(after_colon) - len(remainder),
    )
    return NameAndContent(
        name=name,
        name_range=name_range,
        content=paragraph(content_inlines, content_range),
    )


def _split_ranges(
    source_range: Optional[SourceRange], name_start: int, name_end: int, content_offset: int
) -> Tuple[Optional[SourceRange], Optional[SourceRange]]:
    if source_range is None:
        return None, None
    start = source_range.start
    name_range = SourceRange(
        SourcePosition(start.line, start.column + name_start),
        SourcePosition(start.line, start.column + name_end),
    )
    content_start = SourcePosition(start.line, start.column + content_offset)
    return name_range, SourceRange(content_start, source_range.end)
