"""
cli_entry.py - CLI Entry Point

Parses command-line flags into RenameOptions and starts the prompt session
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from core import RenameOptions, DEFAULT_LOG_FILE, __version__
from .cli_interactive import interactive_mode


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser"""
    parser = argparse.ArgumentParser(
        prog="renamed",
        description="ReNamed - Automatic Episode Renamer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode (prompts for show name and folder)
  renamed --cli

  # Preview only, logging to the default log file
  renamed --cli -d --log

  # Copy into another folder with a custom pattern
  renamed --cli -k -p ./renamed --pattern='Season ([0-9]+)-Episode ([0-9]+)'

If show name or source folder are not given, they are asked for interactively.
"""
    )

    parser.add_argument("-v", "--version", action="version",
                        version=f"ReNamed - Automatic Episode Renamer v{__version__}")
    parser.add_argument("-f", "--force", action="store_true",
                        help="Force renaming of all file types (not just video files)")
    parser.add_argument("-k", "--keep-originals", action="store_true", help="Keep original files (copy)")
    parser.add_argument("-d", "--dry-run", action="store_true",
                        help="Dry run mode (only show what would happen, don't rename files)")
    parser.add_argument("-p", "--path", type=str, help="Custom output path for renamed files")
    parser.add_argument("--log", nargs="?", const=DEFAULT_LOG_FILE, metavar="FILE",
                        help=f"Create log file (default: {DEFAULT_LOG_FILE})")
    parser.add_argument("--pattern", type=str, metavar="REGEX",
                        help="Custom regex pattern for episode detection")
    parser.add_argument("--show", type=str, help="Show name (skips the prompt)")
    parser.add_argument("--source", type=str, help="Folder with source files (skips the prompt)")
    parser.add_argument("--include-hidden", action="store_true", help="Include hidden files")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")

    return parser


def options_from_args(args: argparse.Namespace) -> RenameOptions:
    """Build RenameOptions from parsed arguments"""
    options = RenameOptions(
        force_mode=args.force,
        keep_originals=args.keep_originals,
        dry_run=args.dry_run,
        output_path=Path(args.path).expanduser() if args.path else None,
        custom_pattern=args.pattern,
        include_hidden=args.include_hidden,
    )
    if args.log is not None:
        options.use_log = True
        options.log_file = Path(args.log).expanduser()
    return options


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = create_parser()
    args = parser.parse_args(argv)

    options = options_from_args(args)
    return interactive_mode(
        options,
        show_name=args.show,
        source_dir=Path(args.source).expanduser() if args.source else None,
        assume_yes=args.yes,
    )


if __name__ == "__main__":
    sys.exit(main())
