"""Tests for documentation comment normalization."""

from src.doc_markup.comment import join_comment_pieces, strip_comment_markers


class TestStripCommentMarkers:
    """Test removing comment decoration."""

    def test_line_comment(self):
        """Test a single /// line."""
        assert strip_comment_markers("/// Lorem ipsum dolor sit amet.") == "Lorem ipsum dolor sit amet."

    def test_line_comment_without_space(self):
        """Test /// markers directly followed by text or a tab."""
        assert strip_comment_markers("///Tight\n///\tTabbed") == "Tight\nTabbed"

    def test_line_comment_keeps_extra_indentation(self):
        """Test that only one space after the marker is removed."""
        raw = "/// - Parameters:\n///     - foo: A"

        assert strip_comment_markers(raw) == "- Parameters:\n    - foo: A"

    def test_indented_line_comments(self):
        """Test comments indented inside source code."""
        raw = "    /// First.\n    /// Second."

        assert strip_comment_markers(raw) == "First.\nSecond."

    def test_block_comment_single_line(self):
        """Test a one-line /** */ comment."""
        assert strip_comment_markers("/**Lorem ipsum dolor sit amet.*/") == "Lorem ipsum dolor sit amet."

    def test_block_comment_with_stars(self):
        """Test a multi-line block comment with leading stars."""
        raw = "/**\n * Summary.\n *\n * - Returns: A value.\n */"

        assert strip_comment_markers(raw) == "Summary.\n\n- Returns: A value."

    def test_block_comment_without_stars(self):
        """Test a multi-line block comment without leading stars."""
        raw = "/** \nLorem ipsum dolor sit amet.\n*/"

        assert strip_comment_markers(raw) == "Lorem ipsum dolor sit amet."

    def test_plain_text_passes_through(self):
        """Test text that is not a comment."""
        assert strip_comment_markers("  Plain markup.\n") == "Plain markup."

    def test_join_pieces(self):
        """Test joining several comment pieces."""
        pieces = ["/// Summary.", "", "/// - Returns: A value."]

        assert join_comment_pieces(pieces) == "Summary.\n- Returns: A value."
