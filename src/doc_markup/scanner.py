"""Directory Scanner for documentation files."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List

logger = logging.getLogger(__name__)


@dataclass
class ScannerConfig:
    """Configuration for the directory scanner."""

    skip_hidden_files: bool = True
    supported_extensions: List[str] = None

    def __post_init__(self):
        if self.supported_extensions is None:
            self.supported_extensions = [".md", ".markdown", ".txt"]
        self.supported_extensions = [ext.strip().lower() for ext in self.supported_extensions]


class DirectoryScanner:
    """Scans directories for documentation files."""

    def __init__(self, config: ScannerConfig = None):
        self.config = config or ScannerConfig()

    def scan_for_documentation_files(self, root_dir: str) -> Iterator[str]:
        """
        Recursively scan for documentation files.

        Args:
            root_dir: Root directory path to scan

        Yields:
            Relative file paths, in sorted order per directory
        """
        root_path = Path(root_dir)

        if not root_path.exists():
            raise FileNotFoundError(f"Directory not found: {root_dir}")

        if not root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root_dir}")

        for file_path in self._walk_directory(root_path):
            yield str(file_path.relative_to(root_path))

    def _walk_directory(self, path: Path) -> Iterator[Path]:
        """Recursively walk directory tree and yield matching files."""
        try:
            items = sorted(path.iterdir())
        except PermissionError:
            logger.warning(f"Skipping unreadable directory: {path}")
            return

        for item in items:
            if self.config.skip_hidden_files and item.name.startswith("."):
                continue

            if item.is_file():
                if self._is_documentation_file(item):
                    yield item
            elif item.is_dir():
                yield from self._walk_directory(item)

    def _is_documentation_file(self, file_path: Path) -> bool:
        """Check if file has a supported extension."""
        return file_path.suffix.lower() in self.config.supported_extensions
