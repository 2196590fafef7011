"""Main CLI entry point for doc-markup."""

import argparse
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.cli.commands.parse import parse_command
from src.cli.commands.scan import scan_command
from src.cli.config import Config
from src.doc_markup.section_splitter import ParseSection
from src.utils.logging_config import setup_logging

SECTION_CHOICES = [section.name.lower() for section in ParseSection]


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="doc-markup",
        description="Extract abstracts, discussions and tags from documentation comments",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse one documentation file (or stdin) to JSON")
    parse_parser.add_argument("path", nargs="?", default=None, help="File to parse; omit or use '-' for stdin")
    parse_parser.add_argument(
        "--up-to", choices=SECTION_CHOICES, default=None, help="Ignore documentation past this section"
    )
    parse_parser.add_argument(
        "--no-strip-comments", action="store_true", help="Parse the input as markup without removing /// or /** */"
    )
    parse_parser.add_argument(
        "--no-doc-commands", action="store_true", help="Do not recognize \\param, \\returns and @Directive blocks"
    )
    parse_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    parse_parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Extract documentation from every file in a directory")
    scan_parser.add_argument("source_dir", nargs="?", default=None, help="Directory to scan (default: from config)")
    scan_parser.add_argument("--output", help="Write JSON to this file instead of stdout", default=None)
    scan_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    scan_parser.add_argument("-v", "--verbose", action="store_true", help="Show progress and debug logging")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging(verbose=args.verbose)

    # Load configuration
    config = Config(args.config)

    # Execute command
    if args.command == "parse":
        parse_command(
            config=config,
            path=args.path,
            up_to_section=ParseSection.from_name(args.up_to) if args.up_to else None,
            strip_comments=False if args.no_strip_comments else None,
            enable_doc_commands=False if args.no_doc_commands else None,
        )
    elif args.command == "scan":
        scan_command(config=config, source_dir=args.source_dir, output=args.output)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
