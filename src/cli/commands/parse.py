"""Parse command - print the documentation model of one file or stdin."""

import json
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))

from src.cli.config import Config
from src.doc_markup.processor import DocumentationProcessor
from src.doc_markup.section_splitter import ParseSection

logger = logging.getLogger(__name__)


def parse_command(
    config: Config,
    path: str = None,
    up_to_section: ParseSection = None,
    strip_comments: bool = None,
    enable_doc_commands: bool = None,
):
    """Parse documentation from a file (or stdin) and print it as JSON."""
    processor = DocumentationProcessor(
        up_to_section=up_to_section if up_to_section is not None else config.parse_up_to,
        strip_comments=config.strip_comments if strip_comments is None else strip_comments,
        enable_doc_commands=(
            config.enable_doc_commands if enable_doc_commands is None else enable_doc_commands
        ),
    )

    if path is None or path == "-":
        record = processor.process_content(sys.stdin.read(), "<stdin>")
    else:
        record = processor.process_file(path)
        if record is None:
            logger.error(f"❌ Could not parse {path}")
            sys.exit(1)

    print(json.dumps(record["documentation"], indent=config.json_indent, ensure_ascii=False))
