"""
cpx - Recursive copy with a single-line progress bar

Counts the files under a source first, then copies them while redrawing
one progress line in place.

Author: Carlos Andrade <carlos@perezandrade.com>
"""

__version__ = "1.0.0"
__author__ = "Carlos Andrade"
__email__ = "carlos@perezandrade.com"

from .operations import CopyError, CopyPlan, count_files, copy_file, copy_dir, plan_copy, do_copy
from .ui import ProgressBar, ProgressState, Colors
from .utils import join_path, trim_trailing_separators, basename
from .core import main

__all__ = [
    'main',
    'do_copy',
    'plan_copy',
    'count_files',
    'copy_file',
    'copy_dir',
    'CopyError',
    'CopyPlan',
    'ProgressBar',
    'ProgressState',
    'Colors',
    'join_path',
    'trim_trailing_separators',
    'basename',
]
