"""Tag rewriter extracting tagged list items from a documentation discussion."""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .components import (
    DiscussionSection,
    HTTPBody,
    HTTPParameter,
    HTTPResponse,
    Parameter,
    Return,
    SimpleTag,
    TaggedComponents,
    Throw,
    render_contents,
)
from .nodes import INLINE_CONTAINERS, LIST_TYPES, MarkupNode, NodeType
from .tag_extractor import ExtractedTag, extract_outline, extract_tag
from .tag_grammar import TagKind, is_simple_tag

logger = logging.getLogger(__name__)

RE_STATUS_CODE = re.compile(r"^[0-9]+$")


def parse_status_code(code: str) -> int:
    """Parse an HTTP status code, returning 0 when it is not a plain number."""
    code = code.strip()
    return int(code) if RE_STATUS_CODE.match(code) else 0


class TaggedComponentsBuilder:
    """Accumulates tag occurrences for exactly one rewrite."""

    def __init__(self):
        self.components = TaggedComponents()
        self.consumed: List[MarkupNode] = []

    def consume(self, node: MarkupNode):
        self.consumed.append(node)

    def add_parameter(self, parameter: Parameter):
        self.components.parameters.append(parameter)

    def add_return(self, returns: Return):
        self.components.returns.append(returns)

    def add_throw(self, throw: Throw):
        self.components.throws.append(throw)

    def add_http_response(self, response: HTTPResponse):
        self.components.http_responses.append(response)

    def add_http_parameter(self, parameter: HTTPParameter):
        self.components.http_parameters.append(parameter)

    def set_http_body_contents(self, contents: List[str]):
        # A repeated body tag replaces the contents but keeps collected parameters
        self.ensure_http_body().contents = contents

    def ensure_http_body(self) -> HTTPBody:
        if self.components.http_body is None:
            self.components.http_body = HTTPBody()
        return self.components.http_body

    def add_http_body_parameter(self, parameter: HTTPParameter):
        self.ensure_http_body().parameters.append(parameter)

    def add_simple_tag(self, tag: SimpleTag):
        self.components.other_tags.append(tag)

    def build(self) -> TaggedComponents:
        return self.components


@dataclass
class RewriteResult:
    """Discussion blocks left after tag extraction, and the extracted tags."""

    blocks: List[MarkupNode] = field(default_factory=list)
    tags: TaggedComponents = field(default_factory=TaggedComponents)
    consumed: List[MarkupNode] = field(default_factory=list)

    @property
    def discussion(self) -> Optional[DiscussionSection]:
        if not self.blocks:
            return None
        return DiscussionSection.from_blocks(self.blocks)


class TagRewriter:
    """
    Rewrites discussion blocks, removing every list item recognized as a tag.

    Only items of bullet lists that are themselves top-level discussion blocks
    are candidates. Items nested deeper are reached solely as outline entries
    of a tag such as ``- Parameters:``. Doxygen ``\\param`` and ``\\returns``
    blocks are converted wherever they appear.
    """

    def __init__(self):
        self._tag_handlers = {
            TagKind.RETURNS: self._handle_returns,
            TagKind.THROWS: self._handle_throws,
            TagKind.PARAMETER: self._handle_parameter,
            TagKind.PARAMETERS: self._handle_parameters,
            TagKind.HTTP_BODY: self._handle_http_body,
            TagKind.HTTP_RESPONSE: self._handle_http_response,
            TagKind.HTTP_RESPONSES: self._handle_http_responses,
            TagKind.HTTP_PARAMETER: self._handle_http_parameter,
            TagKind.HTTP_PARAMETERS: self._handle_http_parameters,
            TagKind.HTTP_BODY_PARAMETER: self._handle_http_body_parameter,
            TagKind.HTTP_BODY_PARAMETERS: self._handle_http_body_parameters,
        }

    def rewrite(self, blocks: Sequence[MarkupNode]) -> RewriteResult:
        """
        Extract tags from discussion blocks in a single walk.

        Args:
            blocks: Top-level discussion blocks, in document order

        Returns:
            RewriteResult with the surviving blocks and the collected tags
        """
        builder = TaggedComponentsBuilder()
        reduced = []

        for block in blocks:
            rewritten = self._rewrite_node(block, builder, top_level=True)
            if rewritten is not None:
                reduced.append(rewritten)

        logger.debug(
            f"Rewrote {len(blocks)} discussion blocks: {len(reduced)} kept, "
            f"{len(builder.consumed)} tag blocks consumed"
        )
        return RewriteResult(blocks=reduced, tags=builder.build(), consumed=builder.consumed)

    # ── Tree walk ──────────────────────────────────────────────────────────

    def _rewrite_node(
        self, node: MarkupNode, builder: TaggedComponentsBuilder, top_level: bool
    ) -> Optional[MarkupNode]:
        """Return the rewritten node, the same node if unchanged, or None if consumed."""
        if node.type == NodeType.DOXYGEN_PARAM:
            builder.add_parameter(
                Parameter(
                    name=node.meta.get("name", ""),
                    contents=render_contents(node.children),
                    is_standalone=True,
                )
            )
            builder.consume(node)
            return None

        if node.type == NodeType.DOXYGEN_RETURNS:
            builder.add_return(Return(contents=render_contents(node.children)))
            builder.consume(node)
            return None

        if top_level and node.type == NodeType.BULLET_LIST:
            return self._rewrite_tag_list(node, builder)

        if node.type in INLINE_CONTAINERS or not node.children:
            return node

        return self._rewrite_children(node, builder)

    def _rewrite_children(
        self, node: MarkupNode, builder: TaggedComponentsBuilder
    ) -> Optional[MarkupNode]:
        children = []
        changed = False
        for child in node.children:
            rewritten = self._rewrite_node(child, builder, top_level=False)
            if rewritten is not child:
                changed = True
            if rewritten is not None:
                children.append(rewritten)

        if not changed:
            return node
        if node.type in LIST_TYPES and not children:
            return None
        return node.with_children(children)

    def _rewrite_tag_list(
        self, list_node: MarkupNode, builder: TaggedComponentsBuilder
    ) -> Optional[MarkupNode]:
        survivors = []
        changed = False
        for item in list_node.children:
            if self._consume_tag_item(item, builder):
                changed = True
                continue
            rewritten = self._rewrite_node(item, builder, top_level=False)
            if rewritten is not item:
                changed = True
            if rewritten is not None:
                survivors.append(rewritten)

        if not changed:
            return list_node
        if not survivors:
            return None
        return list_node.with_children(survivors)

    # ── Tag classification ─────────────────────────────────────────────────

    def _consume_tag_item(self, item: MarkupNode, builder: TaggedComponentsBuilder) -> bool:
        tag = extract_tag(item)
        if tag is None:
            return False

        if tag.tag_kind is not None:
            self._tag_handlers[tag.tag_kind.kind](tag, item, builder)
        elif is_simple_tag(tag.raw_name):
            builder.add_simple_tag(
                SimpleTag(tag=tag.raw_name, contents=render_contents(tag.contents))
            )
        else:
            logger.debug(f"'{tag.raw_name}' is not a known tag, keeping it as discussion")
            return False

        builder.consume(item)
        return True

    def _handle_returns(self, tag: ExtractedTag, item: MarkupNode, builder):
        builder.add_return(Return(contents=render_contents(tag.contents)))

    def _handle_throws(self, tag: ExtractedTag, item: MarkupNode, builder):
        builder.add_throw(Throw(contents=render_contents(tag.contents)))

    def _handle_parameter(self, tag: ExtractedTag, item: MarkupNode, builder):
        builder.add_parameter(
            Parameter(
                name=tag.tag_kind.argument,
                contents=render_contents(tag.contents),
                is_standalone=True,
            )
        )

    def _handle_parameters(self, tag: ExtractedTag, item: MarkupNode, builder):
        for entry in extract_outline(item):
            builder.add_parameter(
                Parameter(
                    name=entry.raw_name,
                    contents=render_contents(entry.contents),
                    is_standalone=False,
                )
            )

    def _handle_http_body(self, tag: ExtractedTag, item: MarkupNode, builder):
        builder.set_http_body_contents(render_contents(tag.contents))

    def _handle_http_response(self, tag: ExtractedTag, item: MarkupNode, builder):
        builder.add_http_response(
            HTTPResponse(
                status_code=parse_status_code(tag.tag_kind.argument),
                contents=render_contents(tag.contents),
            )
        )

    def _handle_http_responses(self, tag: ExtractedTag, item: MarkupNode, builder):
        for entry in extract_outline(item):
            builder.add_http_response(
                HTTPResponse(
                    status_code=parse_status_code(entry.raw_name),
                    contents=render_contents(entry.contents),
                )
            )

    def _handle_http_parameter(self, tag: ExtractedTag, item: MarkupNode, builder):
        builder.add_http_parameter(
            HTTPParameter(name=tag.tag_kind.argument, contents=render_contents(tag.contents))
        )

    def _handle_http_parameters(self, tag: ExtractedTag, item: MarkupNode, builder):
        for entry in extract_outline(item):
            builder.add_http_parameter(
                HTTPParameter(name=entry.raw_name, contents=render_contents(entry.contents))
            )

    def _handle_http_body_parameter(self, tag: ExtractedTag, item: MarkupNode, builder):
        builder.add_http_body_parameter(
            HTTPParameter(name=tag.tag_kind.argument, contents=render_contents(tag.contents))
        )

    def _handle_http_body_parameters(self, tag: ExtractedTag, item: MarkupNode, builder):
        # The outline tag declares a body even when it has no parsable entries
        builder.ensure_http_body()
        for entry in extract_outline(item):
            builder.add_http_body_parameter(
                HTTPParameter(name=entry.raw_name, contents=render_contents(entry.contents))
            )
