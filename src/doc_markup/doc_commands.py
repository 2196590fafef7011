"""markdown-it-py plugin for documentation commands that have no markdown syntax.

Recognized block forms::

    \\param name Description of the parameter.
    \\returns Description of the result.

    @Directive(arguments) {
        Nested markup.
    }

Doxygen commands become ``doxygen_param`` / ``doxygen_returns`` blocks wrapping
a single paragraph. Directives become ``directive`` blocks whose body is parsed
as ordinary block markup.
"""

import re

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock

RE_DOXYGEN_PARAM = re.compile(r"^\\param\s+(\S+)(?:\s+(.*))?$")
RE_DOXYGEN_RETURNS = re.compile(r"^\\(?:returns|return|result)(?:\s+(.*))?$")
RE_DIRECTIVE = re.compile(r"^@([A-Za-z][\w-]*)(?:\((.*)\))?\s*(\{)?\s*$")


def doc_commands_plugin(md: MarkdownIt) -> None:
    """Register the doxygen-command and block-directive rules on ``md``."""
    terminates = {"alt": ["paragraph", "reference", "blockquote", "list"]}
    md.block.ruler.before("paragraph", "doxygen_command", _doxygen_command, terminates)
    md.block.ruler.before("paragraph", "block_directive", _block_directive, terminates)


def _line_text(state: StateBlock, line: int) -> str:
    return state.src[state.bMarks[line] + state.tShift[line] : state.eMarks[line]]


def _is_indented_code(state: StateBlock, line: int) -> bool:
    return state.sCount[line] - state.blkIndent >= 4


def _match_doxygen(line_text: str):
    match = RE_DOXYGEN_PARAM.match(line_text)
    if match:
        return "doxygen_param", match.group(1), match.group(2) or ""
    match = RE_DOXYGEN_RETURNS.match(line_text)
    if match:
        return "doxygen_returns", None, match.group(1) or ""
    return None


def _starts_command(line_text: str) -> bool:
    return _match_doxygen(line_text) is not None or RE_DIRECTIVE.match(line_text) is not None


def _doxygen_command(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
    if _is_indented_code(state, startLine):
        return False

    matched = _match_doxygen(_line_text(state, startLine))
    if matched is None:
        return False
    if silent:
        return True

    kind, name, first_line = matched
    parts = [first_line.strip()]

    # The description continues until a blank line, a dedent or another command
    nextLine = startLine + 1
    while nextLine < endLine:
        if state.isEmpty(nextLine) or state.sCount[nextLine] < state.blkIndent:
            break
        line_text = _line_text(state, nextLine)
        if _starts_command(line_text):
            break
        parts.append(line_text.strip())
        nextLine += 1

    token = state.push(f"{kind}_open", "", 1)
    token.map = [startLine, nextLine]
    token.markup = "\\"
    token.meta = {"name": name} if name else {}

    description = "\n".join(parts).strip()
    if description:
        token = state.push("paragraph_open", "p", 1)
        token.map = [startLine, nextLine]
        token = state.push("inline", "", 0)
        token.content = description
        token.map = [startLine, nextLine]
        token.children = []
        state.push("paragraph_close", "p", -1)

    state.push(f"{kind}_close", "", -1)
    state.line = nextLine
    return True


def _block_directive(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
    if _is_indented_code(state, startLine):
        return False

    match = RE_DIRECTIVE.match(_line_text(state, startLine))
    if match is None:
        return False
    if silent:
        return True

    name, arguments, has_body = match.group(1), match.group(2), match.group(3)

    token = state.push("directive_open", "", 1)
    token.markup = "@"
    token.meta = {"name": name, "arguments": arguments}

    if not has_body:
        token.map = [startLine, startLine + 1]
        state.push("directive_close", "", -1)
        state.line = startLine + 1
        return True

    # Find the matching closing brace, allowing nested directive bodies
    depth = 1
    closeLine = startLine + 1
    while closeLine < endLine:
        line_text = _line_text(state, closeLine)
        if line_text.strip() == "}":
            depth -= 1
            if depth == 0:
                break
        elif RE_DIRECTIVE.match(line_text) and line_text.rstrip().endswith("{"):
            depth += 1
        closeLine += 1
    closed = closeLine < endLine
    token.map = [startLine, closeLine + 1 if closed else closeLine]

    # Directive bodies are conventionally indented; parse them at that indent
    body_indents = [
        state.sCount[line]
        for line in range(startLine + 1, closeLine)
        if not state.isEmpty(line)
    ]
    old_parent = state.parentType
    old_line_max = state.lineMax
    old_indent = state.blkIndent
    state.parentType = "directive"
    state.lineMax = closeLine
    if body_indents:
        state.blkIndent = max(old_indent, min(body_indents))

    state.md.block.tokenize(state, startLine + 1, closeLine)

    state.parentType = old_parent
    state.lineMax = old_line_max
    state.blkIndent = old_indent

    state.push("directive_close", "", -1)
    state.line = closeLine + 1 if closed else closeLine
    return True
