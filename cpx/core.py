"""
Core functionality and CLI for cpx.
Handles command-line argument parsing and dispatches to the copy operation.

Author: Carlos Andrade <carlos@perezandrade.com>
"""

import sys
import argparse

from . import __version__
from .operations import do_copy


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def main(argv=None):
    """Main entry point for cpx CLI."""
    parser = _ArgumentParser(
        prog='cpx',
        description="Recursive copy with a single-line progress bar",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cpx file.txt /destination/          # Copy into an existing directory
  cpx file.txt /destination/new.txt   # Copy and rename
  cpx folder/ /destination/           # Creates /destination/folder
  cpx -n folder/ /destination/        # Dry-run: count files, copy nothing

Files are counted first, then copied; the bar shows files copied so far.
Errors on individual files are reported and the copy carries on.
        """
    )
    parser.add_argument('-n', '--dry-run', action='store_true',
                        help='count files and show where they would go without copying')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('source', help='source file or directory')
    parser.add_argument('destination', help='destination directory or target file path')

    args = parser.parse_args(argv)

    sys.exit(do_copy(args.source, args.destination, dry_run=args.dry_run))


if __name__ == '__main__':
    main()
