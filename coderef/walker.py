"""
File discovery under a search root.

Unreadable directories and files are skipped, never reported as errors;
oversized files are skipped to keep memory and latency bounded.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterator, Optional

from . import settings
from .languages import is_source_file

logger = logging.getLogger(__name__)

PathFilter = Callable[[Path], bool]


def default_dir_filter(path: Path) -> bool:
    """Skip VCS metadata, dependency installs, build output and caches"""
    return path.name not in settings.EXCLUDED_DIRS


def walk_files(
    root,
    dir_filter: PathFilter = default_dir_filter,
    file_filter: PathFilter = is_source_file,
    max_size: Optional[int] = settings.MAX_SYMBOL_FILE_SIZE,
) -> Iterator[Path]:
    """
    Yield files under root accepted by file_filter.

    Only directories accepted by dir_filter are entered. Symlinked
    directories are not followed. Files larger than max_size bytes are
    skipped (None disables the cap). Entries are yielded in sorted order
    per directory.
    """
    root = Path(root)
    if root.is_file():
        if file_filter(root) and _size_ok(root, max_size):
            yield root
        return

    stack = [root]
    while stack:
        directory = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            continue

        subdirs = []
        for entry in entries:
            path = Path(entry.path)
            try:
                if entry.is_dir(follow_symlinks=False):
                    if dir_filter(path):
                        subdirs.append(path)
                    continue
                if not entry.is_file():
                    continue
            except OSError as e:
                logger.debug("Skipping %s: %s", path, e)
                continue

            if file_filter(path) and _size_ok(path, max_size):
                yield path

        # reversed so the stack pops them in name order
        stack.extend(reversed(subdirs))


def _size_ok(path: Path, max_size: Optional[int]) -> bool:
    if max_size is None:
        return True
    try:
        size = path.stat().st_size
    except OSError as e:
        logger.debug("Skipping %s: %s", path, e)
        return False
    if size > max_size:
        logger.debug("Skipping %s: %s bytes exceeds %s", path, f"{size:,}", f"{max_size:,}")
        return False
    return True


def read_text(path, max_size: Optional[int] = settings.MAX_SYMBOL_FILE_SIZE) -> Optional[str]:
    """
    File content as text, or None if the file is too large or unreadable.
    """
    path = Path(path)
    if not _size_ok(path, max_size):
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping %s: %s", path, e)
        return None


def read_lines(path, max_size: Optional[int] = settings.MAX_SYMBOL_FILE_SIZE) -> Optional[list[str]]:
    content = read_text(path, max_size)
    if content is None:
        return None
    return content.splitlines()
