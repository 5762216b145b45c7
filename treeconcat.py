#!/usr/bin/env python3
"""
treeconcat - Concatenate the text files of a directory tree into one file

Honors .gitignore files at every level (including those above the scanned
directory) and skips files that look binary. Each file is written as:

    # File: <path>

    <contents>

"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from src.treeconcat_core.config import ConcatConfig
from src.treeconcat_core.errors import TreeConcatError
from src.treeconcat_core.explain import explain_path
from src.treeconcat_core.walker import concatenate_directory
from src.utils import configure_logging

__version__ = "1.0.0"


class TreeConcatCLI:
    """Main treeconcat CLI implementation"""

    def __init__(self, argv: Optional[List[str]] = None):
        self.argv = argv

    def build_parser(self) -> argparse.ArgumentParser:
        """Build the argument parser"""
        parser = argparse.ArgumentParser(
            prog='treeconcat',
            description='Concatenate the text files of a directory tree, honoring .gitignore files',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=self.get_usage_examples()
        )
        parser.add_argument('root', nargs='?',
                            help='Directory to scan')
        parser.add_argument('-o', '--output',
                            help='Output file (default: combined.txt in the current directory)')
        parser.add_argument('--sort', action='store_true', default=None,
                            help='Visit directory entries in name order')
        parser.add_argument('--explain', nargs='+', metavar='PATH',
                            help='Show the ignore verdict for paths instead of writing output')
        parser.add_argument('--log-level',
                            help='Log level (TRACE, DEBUG, INFO, WARNING, ERROR)')
        parser.add_argument('--log-file',
                            help='Also write logs to this file')
        parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
        return parser

    def get_usage_examples(self) -> str:
        """Get usage examples for help text"""
        return """
Examples:
  treeconcat .                         # Combine current directory into combined.txt
  treeconcat src -o context.txt        # Combine src/ into context.txt
  treeconcat . --sort                  # Deterministic ordering
  treeconcat . --explain build/out.js  # Why is this file excluded?

Environment Variables:
  TREECONCAT_OUTPUT            Default output file
  TREECONCAT_IGNORE_FILENAME   Ignore file name (default: .gitignore)
  TREECONCAT_SORT              Sort directory entries (true/false)
  TREECONCAT_LOG_LEVEL         Log level
  TREECONCAT_LOG_FORMAT        Set to 'json' for JSON log lines
"""

    def run(self) -> int:
        """Main entry point"""
        parser = self.build_parser()
        args = parser.parse_args(self.argv)

        configure_logging(log_level=args.log_level, log_file=args.log_file)

        if not args.root:
            parser.print_usage(sys.stderr)
            print("Error: missing directory argument", file=sys.stderr)
            return 1

        try:
            config = ConcatConfig.from_sources(args.root, output=args.output, sort_entries=args.sort)
            if args.explain:
                return self.cmd_explain(config, args.explain)
            return self.cmd_concat(config)
        except (TreeConcatError, ValueError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    def cmd_concat(self, config: ConcatConfig) -> int:
        """Write the combined output file"""
        stats = concatenate_directory(config)
        print(f"Files have been combined into {config.output_path}")
        if stats.read_failures:
            print(f"Warning: {stats.read_failures} entries could not be read", file=sys.stderr)
        return 0

    def cmd_explain(self, config: ConcatConfig, paths: List[str]) -> int:
        """Print the ignore verdict for each path"""
        for raw_path in paths:
            path = Path(raw_path)
            if not path.exists():
                print(f"{path}: does not exist", file=sys.stderr)
                continue
            try:
                explanation = explain_path(config, path)
            except ValueError:
                print(f"{path}: not inside {config.root}", file=sys.stderr)
                continue
            print(explanation.describe())
        return 0


def main():
    """Main entry point"""
    cli = TreeConcatCLI()
    sys.exit(cli.run())


if __name__ == '__main__':
    main()
