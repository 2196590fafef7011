"""Data model for parsed documentation: sections and tagged components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .nodes import TEXT_TYPES, MarkupNode, render


def render_contents(nodes: Sequence[MarkupNode]) -> List[str]:
    """Render each content block to its own string."""
    return [render(node) for node in nodes]


@dataclass
class AbstractSection:
    """A one-paragraph section that represents a symbol's abstract description."""

    content: List[str] = field(default_factory=list)

    @classmethod
    def from_paragraph(cls, paragraph: MarkupNode) -> "AbstractSection":
        # One entry per inline child, not one joined string. Text split by
        # escapes or entities is still one child.
        content = []
        in_text = False
        for node in paragraph.children:
            rendered = render(node)
            if in_text and node.type in TEXT_TYPES:
                content[-1] += rendered
            else:
                content.append(rendered)
            in_text = node.type in TEXT_TYPES
        return cls(content=content)

    def to_dict(self) -> List[str]:
        return list(self.content)


@dataclass
class DiscussionSection:
    """Documentation content following the abstract, minus extracted tags."""

    content: List[str] = field(default_factory=list)

    @classmethod
    def from_blocks(cls, blocks: Sequence[MarkupNode]) -> "DiscussionSection":
        return cls(content=render_contents(blocks))

    def format(self) -> str:
        return "\n\n".join(self.content)

    def to_dict(self) -> List[str]:
        return list(self.content)


@dataclass
class Parameter:
    """Documentation about a parameter for a symbol."""

    name: str
    contents: List[str] = field(default_factory=list)
    # True for a "- Parameter name:" line, False for an entry under "- Parameters:"
    is_standalone: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "contents": list(self.contents)}


@dataclass
class Return:
    """Documentation about a symbol's return value."""

    contents: List[str] = field(default_factory=list)

    def to_dict(self) -> List[str]:
        return list(self.contents)


@dataclass
class Throw:
    """Documentation about a symbol's potential errors."""

    contents: List[str] = field(default_factory=list)

    def to_dict(self) -> List[str]:
        return list(self.contents)


@dataclass
class HTTPResponse:
    """Documentation about one response of an HTTP endpoint."""

    status_code: int = 0  # 0 when the written code is not a number
    reason: Optional[str] = None
    media_type: Optional[str] = None
    contents: List[str] = field(default_factory=list)
    symbol: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"statusCode": self.status_code}
        if self.reason is not None:
            result["reason"] = self.reason
        if self.media_type is not None:
            result["mediaType"] = self.media_type
        result["contents"] = list(self.contents)
        return result


@dataclass
class HTTPParameter:
    """Documentation about a parameter of an HTTP endpoint or its request body."""

    name: str
    source: Optional[str] = None
    contents: List[str] = field(default_factory=list)
    required: bool = True
    symbol: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"name": self.name}
        if self.source is not None:
            result["source"] = self.source
        result["contents"] = list(self.contents)
        result["required"] = self.required
        return result


@dataclass
class HTTPBody:
    """
    Documentation about the request body of an HTTP endpoint.

    Body contents and body parameters may be declared by separate tags; a
    later ``HttpBody`` tag replaces the contents while parameters accumulate.
    """

    media_type: Optional[str] = None
    contents: List[str] = field(default_factory=list)
    parameters: List[HTTPParameter] = field(default_factory=list)
    symbol: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        if self.media_type is not None:
            result["mediaType"] = self.media_type
        result["contents"] = list(self.contents)
        if self.parameters:
            result["parameters"] = [p.to_dict() for p in self.parameters]
        return result


@dataclass
class SimpleTag:
    """A passthrough tag such as ``- Author: Jane``."""

    tag: str
    contents: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"tag": self.tag, "contents": list(self.contents)}


@dataclass
class TaggedComponents:
    """All tag occurrences extracted from a documentation discussion."""

    parameters: List[Parameter] = field(default_factory=list)
    http_responses: List[HTTPResponse] = field(default_factory=list)
    http_parameters: List[HTTPParameter] = field(default_factory=list)
    http_body: Optional[HTTPBody] = None
    returns: List[Return] = field(default_factory=list)
    throws: List[Throw] = field(default_factory=list)
    other_tags: List[SimpleTag] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.parameters
            or self.http_responses
            or self.http_parameters
            or self.http_body is not None
            or self.returns
            or self.throws
            or self.other_tags
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, omitting every empty collection and an absent body."""
        result = {}
        if self.parameters:
            result["parameters"] = [p.to_dict() for p in self.parameters]
        if self.http_responses:
            result["httpResponses"] = [r.to_dict() for r in self.http_responses]
        if self.http_parameters:
            result["httpParameters"] = [p.to_dict() for p in self.http_parameters]
        if self.http_body is not None:
            result["httpBody"] = self.http_body.to_dict()
        if self.returns:
            result["returns"] = [r.to_dict() for r in self.returns]
        if self.throws:
            result["throws"] = [t.to_dict() for t in self.throws]
        if self.other_tags:
            result["otherTags"] = [t.to_dict() for t in self.other_tags]
        return result
