"""
File operations for cpx.
Handles the scan pass, the copy pass, and the top-level copy policy.

Author: Carlos Andrade <carlos@perezandrade.com>
"""

import os
import stat
from typing import List, NamedTuple, Optional, TextIO

from .ui import ProgressBar, ProgressState, error, warn
from .utils import (
    join_path, trim_trailing_separators, basename, format_count,
    CHUNK_SIZE, MAX_PATH, DIR_MODE
)


class CopyError(Exception):
    """A fatal problem that stops the whole operation."""


class CopyPlan(NamedTuple):
    """Resolved source root and destination root for one copy."""
    source: str
    destination: str
    is_dir: bool


def count_files(path: str, state: ProgressState, follow_symlinks: bool = False, max_path: int = MAX_PATH):
    """Add every regular file under path to state.total.

    Missing or unreadable entries are ignored; they count as zero and the
    copy pass reports them when it gets there.
    """
    try:
        st = os.stat(path, follow_symlinks=follow_symlinks)
    except OSError:
        return

    if stat.S_ISREG(st.st_mode):
        state.increment_total()
        return
    if not stat.S_ISDIR(st.st_mode):
        return

    pending = [path]
    while pending:
        current = pending.pop()
        try:
            names = os.listdir(current)
        except OSError:
            continue

        for name in names:
            child, ok = join_path(current, name, max_path)
            if not ok:
                continue
            try:
                st = os.lstat(child)
            except OSError:
                continue
            if stat.S_ISREG(st.st_mode):
                state.increment_total()
            elif stat.S_ISDIR(st.st_mode):
                pending.append(child)


def copy_file(src: str, dst: str, progress: ProgressBar, chunk_size: int = CHUNK_SIZE) -> bool:
    """Copy a single file's bytes, then count it and redraw the bar.

    The destination is created or truncated. Returns False after reporting
    when either file can't be opened, a read, write or final flush fails,
    or a write falls short. A partially written destination is left in
    place.
    """
    try:
        fsrc = open(src, 'rb')
    except OSError as e:
        warn(f"Could not open source '{src}': {e.strerror or e}")
        return False

    with fsrc:
        try:
            fdst = open(dst, 'wb')
        except OSError as e:
            warn(f"Could not open destination '{dst}': {e.strerror or e}")
            return False

        # Closing flushes the last buffered chunk, so it can fail too
        try:
            with fdst:
                while True:
                    buf = fsrc.read(chunk_size)
                    if not buf:
                        break
                    written = fdst.write(buf)
                    if written != len(buf):
                        warn(f"Short write to '{dst}': {written} of {len(buf)} bytes")
                        return False
                fdst.flush()
        except OSError as e:
            warn(f"Could not copy '{src}' to '{dst}': {e.strerror or e}")
            return False

    progress.complete_item()
    return True


def _make_dir(path: str) -> bool:
    """Create path as a directory; an existing entry is fine."""
    try:
        os.mkdir(path, DIR_MODE)
    except FileExistsError:
        pass
    except OSError as e:
        warn(f"Could not create directory '{path}': {e.strerror or e}")
        return False
    return True


def _list_dir(path: str) -> Optional[List[str]]:
    try:
        return os.listdir(path)
    except OSError as e:
        warn(f"Could not read directory '{path}': {e.strerror or e}")
        return None


def copy_dir(src: str, dst: str, progress: ProgressBar, max_path: int = MAX_PATH) -> bool:
    """Recursively copy the directory src to dst, best effort.

    A failure on one entry is reported and its siblings still get copied.
    Symlinks, devices, sockets and FIFOs inside the tree are skipped.
    Returns False only when dst itself can't be created or src can't be
    listed.
    """
    if not _make_dir(dst):
        return False
    names = _list_dir(src)
    if names is None:
        return False

    # One name iterator per open directory, so a subdirectory is finished
    # before its next sibling is visited
    stack = [(iter(names), src, dst)]
    while stack:
        children, src_dir, dst_dir = stack[-1]
        name = next(children, None)
        if name is None:
            stack.pop()
            continue

        src_path, src_ok = join_path(src_dir, name, max_path)
        dst_path, dst_ok = join_path(dst_dir, name, max_path)
        if not (src_ok and dst_ok):
            warn(f"Path too long, skipping '{src_path if not src_ok else dst_path}'")
            continue

        try:
            st = os.lstat(src_path)
        except OSError as e:
            warn(f"Could not stat '{src_path}': {e.strerror or e}")
            continue

        if stat.S_ISDIR(st.st_mode):
            if not _make_dir(dst_path):
                continue
            grandchildren = _list_dir(src_path)
            if grandchildren is not None:
                stack.append((iter(grandchildren), src_path, dst_path))
        elif stat.S_ISREG(st.st_mode):
            copy_file(src_path, dst_path, progress)

    return True


def plan_copy(source: str, destination: str, max_path: int = MAX_PATH) -> CopyPlan:
    """Work out where the copy actually lands.

    A directory is always nested under destination using its own name. A
    file goes inside destination when that is an existing directory,
    otherwise destination is the target file path itself.

    Raises CopyError for a missing or unsupported source, or when the
    resolved path would be too long.
    """
    try:
        st = os.stat(source)
    except OSError as e:
        raise CopyError(f"Cannot stat '{source}': {e.strerror or e}") from e

    if stat.S_ISDIR(st.st_mode):
        name = basename(trim_trailing_separators(source))
        target, ok = join_path(destination, name, max_path)
        if not ok:
            raise CopyError(f"Destination path too long: '{target}'")
        return CopyPlan(source, target, True)

    if stat.S_ISREG(st.st_mode):
        if os.path.isdir(destination):
            target, ok = join_path(destination, basename(source), max_path)
        else:
            target, ok = destination, len(os.fsencode(destination)) < max_path
        if not ok:
            raise CopyError(f"Destination path too long: '{target}'")
        return CopyPlan(source, target, False)

    raise CopyError(f"Unsupported source type: '{source}'")


def do_copy(source: str, destination: str, dry_run: bool = False,
            stream: Optional[TextIO] = None, max_path: int = MAX_PATH) -> int:
    """Execute the copy with a progress bar and return the exit status.

    Args:
        source: Source file or directory path
        destination: Destination directory, or target file path for a file
        dry_run: Scan and resolve the destination without copying
        stream: Where progress goes (default: stdout)
        max_path: Longest path, in bytes including the terminator

    Per-entry failures during the copy are reported as warnings and do not
    change the status; only fatal errors return 1.
    """
    try:
        os.stat(source)
    except OSError as e:
        error(f"Cannot stat '{source}': {e.strerror or e}")
        return 1

    state = ProgressState()
    count_files(source, state, follow_symlinks=True, max_path=max_path)
    total, _ = state.snapshot()
    if total == 0:
        print("No files to copy.", file=stream)
        return 0

    try:
        plan = plan_copy(source, destination, max_path)
    except CopyError as e:
        error(str(e))
        return 1

    if dry_run:
        print(f"Would copy {format_count(total)} to '{plan.destination}'", file=stream)
        return 0

    progress = ProgressBar(state, stream)

    if plan.is_dir:
        # Create the top-level folder once; failing here is fatal
        try:
            os.mkdir(plan.destination, DIR_MODE)
        except FileExistsError:
            pass
        except OSError as e:
            error(f"Cannot create directory '{plan.destination}': {e.strerror or e}")
            return 1
        copy_dir(plan.source, plan.destination, progress, max_path)
    else:
        copy_file(plan.source, plan.destination, progress)

    progress.finish()
    return 0
