"""Immutable markup tree consumed by the documentation parser, and its text renderer."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from markdown_it.tree import SyntaxTreeNode


class NodeType:
    """Node kinds produced by the markdown-it conversion and the doc-command plugin."""

    ROOT = "root"

    # Blocks
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET_LIST = "bullet_list"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    FENCE = "fence"
    CODE_BLOCK = "code_block"
    HTML_BLOCK = "html_block"
    HR = "hr"
    DIRECTIVE = "directive"
    DOXYGEN_PARAM = "doxygen_param"
    DOXYGEN_RETURNS = "doxygen_returns"

    # Inlines
    TEXT = "text"
    TEXT_SPECIAL = "text_special"
    SOFTBREAK = "softbreak"
    HARDBREAK = "hardbreak"
    CODE_INLINE = "code_inline"
    EM = "em"
    STRONG = "strong"
    LINK = "link"
    IMAGE = "image"
    HTML_INLINE = "html_inline"


# Blocks whose children are inline nodes rather than further blocks
INLINE_CONTAINERS = frozenset({NodeType.PARAGRAPH, NodeType.HEADING})
LIST_TYPES = frozenset({NodeType.BULLET_LIST, NodeType.ORDERED_LIST})
# Inline kinds that together spell one run of plain text
TEXT_TYPES = frozenset({NodeType.TEXT, NodeType.TEXT_SPECIAL})


@dataclass(frozen=True)
class SourcePosition:
    """A 1-based line/column position in the parsed markup."""

    line: int
    column: int


@dataclass(frozen=True)
class SourceRange:
    """A span of markup; the end column is exclusive."""

    start: SourcePosition
    end: SourcePosition


@dataclass(frozen=True)
class MarkupNode:
    """One node of a parsed markup tree.

    Nodes are never mutated. Rewriting a tree produces new nodes for the
    changed path and shares every untouched subtree with the original.
    """

    type: str
    children: Tuple["MarkupNode", ...] = ()
    content: str = ""
    markup: str = ""
    info: str = ""
    attrs: Dict[str, Any] = field(default_factory=dict, hash=False)
    meta: Dict[str, Any] = field(default_factory=dict, hash=False)
    range: Optional[SourceRange] = None

    def is_a(self, *types: str) -> bool:
        return self.type in types

    def with_children(self, children: Iterable["MarkupNode"]) -> "MarkupNode":
        return replace(self, children=tuple(children))


def text(content: str) -> MarkupNode:
    return MarkupNode(type=NodeType.TEXT, content=content)


def paragraph(
    inlines: Iterable[MarkupNode], source_range: Optional[SourceRange] = None
) -> MarkupNode:
    return MarkupNode(type=NodeType.PARAGRAPH, children=tuple(inlines), range=source_range)


def document(blocks: Iterable[MarkupNode]) -> MarkupNode:
    return MarkupNode(type=NodeType.ROOT, children=tuple(blocks))


# ── Conversion from markdown-it-py ─────────────────────────────────────────


def from_syntax_tree(root: SyntaxTreeNode, source: str = "") -> MarkupNode:
    """
    Convert a markdown-it-py syntax tree into a MarkupNode document.

    Args:
        root: Root SyntaxTreeNode built from ``MarkdownIt.parse`` tokens
        source: The markup the tokens were parsed from, used for column offsets

    Returns:
        A ``root`` MarkupNode with converted block children
    """
    lines = source.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    return document(_convert_block(child, lines) for child in root.children)


def _convert_block(node: SyntaxTreeNode, lines: List[str]) -> MarkupNode:
    if node.type in INLINE_CONTAINERS:
        inline = node.children[0] if node.children else None
        inlines = tuple(_convert_inline(c) for c in inline.children) if inline else ()
        meta = {}
        if node.type == NodeType.HEADING:
            meta["level"] = int(node.tag[1:]) if node.tag[1:].isdigit() else 1
        return MarkupNode(
            type=node.type,
            children=inlines,
            markup=node.markup,
            meta=meta,
            range=_block_range(node, lines, inline),
        )

    if node.type in LIST_TYPES:
        # markdown-it hides the item paragraphs of tight lists. A list with no
        # item paragraphs renders the same either way and counts as tight.
        tight = all(
            grandchild.hidden
            for item in node.children
            for grandchild in item.children
            if grandchild.type == NodeType.PARAGRAPH
        )
        attrs = {}
        if node.type == NodeType.ORDERED_LIST:
            attrs["start"] = int(node.attrs.get("start", 1))
        return MarkupNode(
            type=node.type,
            children=tuple(_convert_block(c, lines) for c in node.children),
            markup=node.markup,
            attrs=attrs,
            meta={"tight": tight},
            range=_block_range(node, lines),
        )

    if node.type in (NodeType.FENCE, NodeType.CODE_BLOCK, NodeType.HTML_BLOCK, NodeType.HR):
        return MarkupNode(
            type=node.type,
            content=node.content,
            markup=node.markup,
            info=node.info,
            range=_block_range(node, lines),
        )

    # list_item, blockquote, directive, doxygen commands and anything a plugin adds
    return MarkupNode(
        type=node.type,
        children=tuple(_convert_block(c, lines) for c in node.children),
        content=node.content,
        markup=node.markup,
        info=node.info,
        meta=dict(node.meta or {}),
        range=_block_range(node, lines),
    )


def _convert_inline(node: SyntaxTreeNode) -> MarkupNode:
    attrs = {}
    if node.type == NodeType.LINK:
        attrs = {"href": node.attrs.get("href", ""), "title": node.attrs.get("title")}
    elif node.type == NodeType.IMAGE:
        attrs = {"src": node.attrs.get("src", ""), "title": node.attrs.get("title")}
    return MarkupNode(
        type=node.type,
        children=tuple(_convert_inline(c) for c in node.children),
        content=node.content,
        markup=node.markup,
        info=node.info,
        attrs=attrs,
    )


def _block_range(
    node: SyntaxTreeNode, lines: List[str], inline: Optional[SyntaxTreeNode] = None
) -> Optional[SourceRange]:
    if not node.map:
        return None
    first, last = node.map[0], max(node.map[1] - 1, node.map[0])
    if first >= len(lines):
        return None
    start_line = lines[first]
    column = len(start_line) - len(start_line.lstrip()) + 1
    if inline is not None and inline.content:
        # The inline content starts after any list or quote markers on its line
        offset = start_line.find(inline.content.split("\n")[0])
        if offset >= 0:
            column = offset + 1
    end_line = lines[last] if last < len(lines) else ""
    return SourceRange(
        start=SourcePosition(line=first + 1, column=column),
        end=SourcePosition(line=last + 1, column=len(end_line) + 1),
    )


# ── Rendering ──────────────────────────────────────────────────────────────


def render(node: MarkupNode) -> str:
    """
    Render a subtree to normalized markdown text.

    Emphasis, strong text, code spans and links keep a single canonical
    spelling; soft and hard line breaks both become a newline.

    Args:
        node: Any block or inline node

    Returns:
        The rendered text without a trailing newline
    """
    renderer = _BLOCK_RENDERERS.get(node.type) or _INLINE_RENDERERS.get(node.type)
    if renderer is not None:
        return renderer(node)
    if node.children:
        return render_blocks(node.children)
    return node.content


def render_inlines(nodes: Iterable[MarkupNode]) -> str:
    return "".join(render(n) for n in nodes)


def render_blocks(nodes: Iterable[MarkupNode], separator: str = "\n\n") -> str:
    return separator.join(render(n) for n in nodes)


def _indent(text_block: str, prefix: str, first_prefix: Optional[str] = None) -> str:
    result = []
    for index, line in enumerate(text_block.split("\n")):
        lead = first_prefix if index == 0 and first_prefix is not None else prefix
        result.append(lead + line if line else lead.rstrip())
    return "\n".join(result)


def _render_heading(node: MarkupNode) -> str:
    return "#" * node.meta.get("level", 1) + " " + render_inlines(node.children)


def _render_list(node: MarkupNode) -> str:
    tight = node.meta.get("tight", True)
    start = node.attrs.get("start", 1)
    items = []
    for index, item in enumerate(node.children):
        if node.type == NodeType.ORDERED_LIST:
            marker = f"{start + index}{item.markup or '.'} "
        else:
            marker = "- "
        body = render_blocks(item.children, "\n" if tight else "\n\n")
        items.append(_indent(body, " " * len(marker), marker))
    return ("\n" if tight else "\n\n").join(items)


def _render_blockquote(node: MarkupNode) -> str:
    return _indent(render_blocks(node.children), "> ")


def _render_fence(node: MarkupNode) -> str:
    fence = node.markup or "```"
    code = node.content.rstrip("\n")
    return f"{fence}{node.info}\n{code}\n{fence}"


def _render_code_block(node: MarkupNode) -> str:
    return _indent(node.content.rstrip("\n"), "    ")


def _render_directive(node: MarkupNode) -> str:
    header = "@" + node.meta.get("name", "")
    arguments = node.meta.get("arguments")
    if arguments is not None:
        header += f"({arguments})"
    if not node.children:
        return header
    return header + " {\n" + _indent(render_blocks(node.children), "    ") + "\n}"


def _render_doxygen_param(node: MarkupNode) -> str:
    return f"\\param {node.meta.get('name', '')} {render_blocks(node.children)}".rstrip()


def _render_doxygen_returns(node: MarkupNode) -> str:
    return f"\\returns {render_blocks(node.children)}".rstrip()


def _render_link(node: MarkupNode) -> str:
    label = render_inlines(node.children)
    if node.markup == "autolink":
        return f"<{label}>"
    title = node.attrs.get("title")
    target = node.attrs.get("href", "")
    if title:
        target += f' "{title}"'
    return f"[{label}]({target})"


def _render_image(node: MarkupNode) -> str:
    title = node.attrs.get("title")
    target = node.attrs.get("src", "")
    if title:
        target += f' "{title}"'
    return f"![{node.content}]({target})"


_BLOCK_RENDERERS = {
    NodeType.ROOT: lambda n: render_blocks(n.children),
    NodeType.PARAGRAPH: lambda n: render_inlines(n.children),
    NodeType.HEADING: _render_heading,
    NodeType.BULLET_LIST: _render_list,
    NodeType.ORDERED_LIST: _render_list,
    NodeType.LIST_ITEM: lambda n: render_blocks(n.children),
    NodeType.BLOCKQUOTE: _render_blockquote,
    NodeType.FENCE: _render_fence,
    NodeType.CODE_BLOCK: _render_code_block,
    NodeType.HTML_BLOCK: lambda n: n.content.rstrip("\n"),
    NodeType.HR: lambda n: "---",
    NodeType.DIRECTIVE: _render_directive,
    NodeType.DOXYGEN_PARAM: _render_doxygen_param,
    NodeType.DOXYGEN_RETURNS: _render_doxygen_returns,
}

_INLINE_RENDERERS = {
    NodeType.TEXT: lambda n: n.content,
    # Backslash escapes and entities render as written so the output parses back the same
    NodeType.TEXT_SPECIAL: lambda n: n.markup or n.content,
    NodeType.SOFTBREAK: lambda n: "\n",
    NodeType.HARDBREAK: lambda n: "\n",
    NodeType.CODE_INLINE: lambda n: f"{n.markup or '`'}{n.content}{n.markup or '`'}",
    NodeType.EM: lambda n: f"*{render_inlines(n.children)}*",
    NodeType.STRONG: lambda n: f"**{render_inlines(n.children)}**",
    NodeType.LINK: _render_link,
    NodeType.IMAGE: _render_image,
    NodeType.HTML_INLINE: lambda n: n.content,
}
