"""
Utility functions for cpx.
Holds tuning constants and the path helpers used by both traversal passes.

Author: Carlos Andrade <carlos@perezandrade.com>
"""

import os
from typing import Tuple

# Constants
CHUNK_SIZE = 8 * 1024  # 8KB
BAR_WIDTH = 40
MAX_PATH = 4096  # includes the terminator, so usable length is MAX_PATH - 1
DIR_MODE = 0o755


def join_path(base: str, child: str, max_path: int = MAX_PATH) -> Tuple[str, bool]:
    """Join base and child with a separator.

    Returns (path, ok). When the joined path would not fit in max_path,
    ok is False and the caller must skip the entry; the returned path is
    only good for error messages.
    """
    path = f"{base}{os.sep}{child}"
    if len(os.fsencode(path)) >= max_path:
        return path, False
    return path, True


def trim_trailing_separators(path: str) -> str:
    """Strip trailing separators, keeping a lone root separator."""
    end = len(path)
    while end > 1 and path[end - 1] == os.sep:
        end -= 1
    return path[:end]


def basename(path: str) -> str:
    """Return everything after the last separator, or the whole path."""
    index = path.rfind(os.sep)
    return path[index + 1:] if index >= 0 else path


def format_count(count: int) -> str:
    """Format a file count with the right plural."""
    return f"{count} file" if count == 1 else f"{count} files"
