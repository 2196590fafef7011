"""Configuration management for the doc-markup CLI."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from src.doc_markup.section_splitter import ParseSection

logger = logging.getLogger(__name__)


class Config:
    """Configuration loaded from .env file."""

    def __init__(self, env_file: Optional[str] = None):
        """Load configuration from .env file."""
        if env_file:
            load_dotenv(env_file)
        else:
            # Load from project root .env
            project_root = Path(__file__).parent.parent.parent
            env_path = project_root / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        # File selection
        self.source_dir = os.getenv("DOC_MARKUP_SOURCE_DIR", "./docs")
        self.file_extensions = os.getenv("DOC_MARKUP_FILE_EXTENSIONS", ".md,.markdown,.txt").split(",")
        self.skip_hidden_files = os.getenv("DOC_MARKUP_SKIP_HIDDEN_FILES", "true").lower() == "true"

        # Parsing
        self.parse_up_to = self._parse_section(os.getenv("DOC_MARKUP_PARSE_UP_TO", "end"))
        self.enable_doc_commands = os.getenv("DOC_MARKUP_DOC_COMMANDS", "true").lower() == "true"
        self.strip_comments = os.getenv("DOC_MARKUP_STRIP_COMMENTS", "true").lower() == "true"

        # Output
        self.json_indent = int(os.getenv("DOC_MARKUP_JSON_INDENT", "2"))

    @staticmethod
    def _parse_section(name: str) -> ParseSection:
        section = ParseSection.from_name(name)
        if section is None:
            logger.warning(f"Unknown section '{name}' in DOC_MARKUP_PARSE_UP_TO, parsing to the end")
            return ParseSection.END
        return section
