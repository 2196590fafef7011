"""Tests for the doc-markup command line."""

import io
import json
from pathlib import Path

import pytest

from src.cli.main import main

CONFIG_VARIABLES = [
    "DOC_MARKUP_SOURCE_DIR",
    "DOC_MARKUP_FILE_EXTENSIONS",
    "DOC_MARKUP_SKIP_HIDDEN_FILES",
    "DOC_MARKUP_PARSE_UP_TO",
    "DOC_MARKUP_DOC_COMMANDS",
    "DOC_MARKUP_STRIP_COMMENTS",
    "DOC_MARKUP_JSON_INDENT",
]

COMMENT = (
    "/// Adds two numbers.\n"
    "///\n"
    "/// Overflow traps.\n"
    "///\n"
    "/// - Parameters:\n"
    "///   - lhs: The left side.\n"
    "///   - rhs: The right side.\n"
    "/// - Returns: The sum.\n"
)


@pytest.fixture
def env_file(monkeypatch, tmp_path):
    """Isolated, empty configuration for each CLI run."""
    for name in CONFIG_VARIABLES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    path = tmp_path / "test.env"
    path.write_text("")
    return str(path)


class TestParseCommand:
    """Test the parse subcommand."""

    def test_parse_file(self, env_file, tmp_path, capsys):
        """Test printing the documentation of one file."""
        source = tmp_path / "add.swift.txt"
        source.write_text(COMMENT, encoding="utf-8")

        main(["parse", str(source), "--config", env_file])

        result = json.loads(capsys.readouterr().out)
        assert result == {
            "abstract": ["Adds two numbers."],
            "discussion": ["Overflow traps."],
            "parameters": [
                {"name": "lhs", "contents": ["The left side."]},
                {"name": "rhs", "contents": ["The right side."]},
            ],
            "returns": [["The sum."]],
        }

    def test_parse_up_to_abstract(self, env_file, tmp_path, capsys):
        """Test the --up-to option."""
        source = tmp_path / "add.txt"
        source.write_text(COMMENT, encoding="utf-8")

        main(["parse", str(source), "--up-to", "abstract", "--config", env_file])

        assert json.loads(capsys.readouterr().out) == {"abstract": ["Adds two numbers."]}

    def test_parse_stdin(self, env_file, monkeypatch, capsys):
        """Test reading documentation from standard input."""
        monkeypatch.setattr("sys.stdin", io.StringIO("Summary.\n\n- Throws: An error."))

        main(["parse", "-", "--config", env_file])

        assert json.loads(capsys.readouterr().out) == {
            "abstract": ["Summary."],
            "throws": [["An error."]],
        }

    def test_parse_without_doc_commands(self, env_file, monkeypatch, capsys):
        """Test the --no-doc-commands option."""
        monkeypatch.setattr("sys.stdin", io.StringIO("Summary.\n\n\\returns The sum."))

        main(["parse", "--no-doc-commands", "--config", env_file])

        result = json.loads(capsys.readouterr().out)
        assert "returns" not in result
        assert result["discussion"] == ["\\returns The sum."]

    def test_parse_missing_file(self, env_file):
        """Test that an unreadable file exits with an error status."""
        with pytest.raises(SystemExit) as exc_info:
            main(["parse", "/nonexistent/doc.md", "--config", env_file])

        assert exc_info.value.code == 1


class TestScanCommand:
    """Test the scan subcommand."""

    def test_scan_to_output_file(self, env_file, tmp_path):
        """Test writing the records of a directory to a file."""
        docs = tmp_path / "docs"
        docs.mkdir()
        (docs / "a.md").write_text("First.\n\n- Since: 1.0", encoding="utf-8")
        (docs / "b.md").write_text("Second.", encoding="utf-8")
        output = tmp_path / "out.json"

        main(["scan", str(docs), "--output", str(output), "--config", env_file])

        result = json.loads(output.read_text(encoding="utf-8"))
        assert result == {
            "a.md": {"abstract": ["First."], "otherTags": [{"tag": "Since", "contents": ["1.0"]}]},
            "b.md": {"abstract": ["Second."]},
        }

    def test_scan_to_stdout(self, env_file, tmp_path, capsys):
        """Test printing the records of a directory."""
        docs = tmp_path / "docs"
        docs.mkdir()
        (docs / "only.md").write_text("Only.", encoding="utf-8")

        main(["scan", str(docs), "--config", env_file])

        assert json.loads(capsys.readouterr().out) == {"only.md": {"abstract": ["Only."]}}

    def test_scan_missing_directory(self, env_file, tmp_path):
        """Test that a missing directory exits with an error status."""
        with pytest.raises(SystemExit) as exc_info:
            main(["scan", str(Path(tmp_path) / "missing"), "--config", env_file])

        assert exc_info.value.code == 1


class TestMain:
    """Test the top-level entry point."""

    def test_no_command_prints_help(self, capsys):
        """Test running without a subcommand."""
        main([])

        assert "usage: doc-markup" in capsys.readouterr().out
