"""Strip documentation-comment decoration from raw comment text."""

from typing import Iterable


def strip_comment_markers(raw: str) -> str:
    """
    Turn a ``///`` or ``/** ... */`` documentation comment into plain markup.

    Text that is not written in either comment form is only trimmed.

    Args:
        raw: The comment as it appears in source code

    Returns:
        Markup text ready for parsing
    """
    working = raw.strip()

    if working.startswith("///"):
        return "\n".join(_strip_line_comment(line) for line in working.split("\n"))

    if working.startswith("/**"):
        working = working[3:]
        if working.endswith("*/"):
            working = working[:-2]
        lines = [_strip_block_comment_line(line) for line in working.split("\n")]
        return "\n".join(lines).strip()

    return working


def join_comment_pieces(pieces: Iterable[str]) -> str:
    """Join consecutive doc comments (one per source line or block) into one text."""
    return "\n".join(strip_comment_markers(piece) for piece in pieces if piece.strip())


def _strip_line_comment(line: str) -> str:
    stripped = line.lstrip()
    if not stripped.startswith("///"):
        return line
    stripped = stripped[3:]
    if stripped[:1] in (" ", "\t"):
        stripped = stripped[1:]
    return stripped


def _strip_block_comment_line(line: str) -> str:
    stripped = line.lstrip()
    if stripped.startswith("*"):
        stripped = stripped[1:]
        if stripped[:1] in (" ", "\t"):
            stripped = stripped[1:]
    return stripped
