"""Scan command - extract documentation from every file in a directory."""

import json
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))

from src.cli.config import Config
from src.doc_markup.processor import DocumentationProcessor
from src.doc_markup.scanner import ScannerConfig

logger = logging.getLogger(__name__)


def scan_command(config: Config, source_dir: str = None, output: str = None):
    """Process a documentation directory and write one JSON object keyed by file."""
    docs_dir = source_dir or config.source_dir
    logger.info(f"📁 Documentation directory: {docs_dir}")

    processor = DocumentationProcessor(
        up_to_section=config.parse_up_to,
        strip_comments=config.strip_comments,
        enable_doc_commands=config.enable_doc_commands,
        scanner_config=ScannerConfig(
            skip_hidden_files=config.skip_hidden_files,
            supported_extensions=config.file_extensions,
        ),
    )

    try:
        records = processor.process_directory(docs_dir)
    except (ValueError, NotADirectoryError) as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    stats = processor.get_processing_stats(list(records.values()))
    logger.info(f"📊 Processed {stats['total_files']} files, tags: {stats['tag_counts']}")

    payload = {path: record["documentation"] for path, record in records.items()}
    text = json.dumps(payload, indent=config.json_indent, ensure_ascii=False)

    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        logger.info(f"✅ Wrote {len(payload)} records to {output}")
    else:
        print(text)
