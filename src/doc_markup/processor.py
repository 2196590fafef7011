"""Main orchestration for extracting documentation models from files."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .documentation import DocumentationMarkup
from .parser import MarkupParser
from .scanner import DirectoryScanner, ScannerConfig
from .section_splitter import ParseSection

logger = logging.getLogger(__name__)


class DocumentationProcessor:
    """Runs scanning, parsing and documentation extraction for files and directories."""

    def __init__(
        self,
        up_to_section: ParseSection = ParseSection.END,
        strip_comments: bool = True,
        enable_doc_commands: bool = True,
        scanner_config: ScannerConfig = None,
    ):
        """
        Initialize the documentation processor.

        Args:
            up_to_section: Documentation past this section is ignored
            strip_comments: Remove ``///`` or ``/** */`` decoration before parsing
            enable_doc_commands: Recognize ``\\param``, ``\\returns`` and ``@Directive`` blocks
            scanner_config: File selection for directory processing
        """
        self.up_to_section = up_to_section
        self.strip_comments = strip_comments
        self.scanner = DirectoryScanner(scanner_config)
        self.parser = MarkupParser(enable_doc_commands=enable_doc_commands)

    def process_content(self, content: str, filename: str = "content.md") -> Dict[str, Any]:
        """
        Process documentation text directly (without file I/O).

        Args:
            content: Documentation markup or raw doc comment
            filename: Name recorded as the record's source

        Returns:
            Record with ``source_file`` and the serialized ``documentation``
        """
        logger.debug(f"Processing content for {filename}")

        if self.strip_comments:
            documentation = DocumentationMarkup.from_comment(
                content, self.up_to_section, parser=self.parser
            )
        else:
            documentation = DocumentationMarkup.from_text(
                content, self.up_to_section, parser=self.parser
            )
        return self._build_record(filename, documentation)

    def process_file(
        self, file_path: Union[str, Path], relative_path: str = None
    ) -> Optional[Dict[str, Any]]:
        """
        Process a single documentation file.

        Args:
            file_path: Full path to the file
            relative_path: Name recorded as the record's source (defaults to filename)

        Returns:
            Documentation record, or None if the file could not be read
        """
        file_path = Path(file_path)
        if relative_path is None:
            relative_path = file_path.name

        logger.debug(f"Processing file: {file_path}")

        parse_result = self.parser.parse_file(file_path, strip_comments=self.strip_comments)
        if not parse_result.success:
            logger.warning(f"Failed to parse file {file_path}: {parse_result.error}")
            return None

        documentation = DocumentationMarkup.from_markup(parse_result.document, self.up_to_section)
        return self._build_record(relative_path, documentation)

    def process_directory(self, docs_dir: Union[str, Path]) -> Dict[str, Dict[str, Any]]:
        """
        Process every documentation file under a directory.

        Args:
            docs_dir: Directory containing documentation files

        Returns:
            Records keyed by relative file path
        """
        docs_dir = Path(docs_dir)
        if not docs_dir.exists():
            raise ValueError(f"Directory does not exist: {docs_dir}")

        logger.info(f"Starting documentation processing for directory: {docs_dir}")

        records = {}
        failed_files = 0

        for relative_path in self.scanner.scan_for_documentation_files(str(docs_dir)):
            record = self.process_file(docs_dir / relative_path, relative_path)
            if record is None:
                failed_files += 1
                continue
            records[relative_path] = record

        logger.info(
            f"Processing complete: {len(records)} files processed, {failed_files} files failed"
        )
        return records

    def get_processing_stats(self, records: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Get statistics about processed documentation records.

        Args:
            records: Records returned by the process_* methods

        Returns:
            Dictionary with per-section and per-tag counts
        """
        tag_counts = {}
        with_abstract = 0
        with_discussion = 0

        for record in records:
            documentation = record.get("documentation", {})
            if "abstract" in documentation:
                with_abstract += 1
            if "discussion" in documentation:
                with_discussion += 1
            for key, value in documentation.items():
                if key in ("abstract", "discussion"):
                    continue
                count = 1 if key == "httpBody" else len(value)
                tag_counts[key] = tag_counts.get(key, 0) + count

        return {
            "total_files": len(records),
            "files_with_abstract": with_abstract,
            "files_with_discussion": with_discussion,
            "tag_counts": tag_counts,
        }

    def _build_record(self, source: str, documentation: DocumentationMarkup) -> Dict[str, Any]:
        return {"source_file": source, "documentation": documentation.to_dict()}
