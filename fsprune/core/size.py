"""
Recursive directory size.

Sizes are path-tree sizes: symlinks are skipped (never followed) and a hard
link reached through two paths is counted twice. Only the root is strict;
unreadable subdirectories and entries that fail to stat mid-walk (vanished,
permission denied) count as zero.
"""
import os
import stat

from ..setup.logging import logger


def get_size(file_path: str) -> int:
    """
    Total byte size of a file or directory tree.

    Args:
        file_path (str): File or directory to measure.

    Returns:
        int: Size in bytes. Non-regular, non-directory objects measure 0.

    Raises:
        OSError: If the root cannot be stat'ed or, for a directory, listed.
    """
    root_stat = os.stat(file_path)

    if stat.S_ISREG(root_stat.st_mode):
        return root_stat.st_size
    if stat.S_ISDIR(root_stat.st_mode):
        return _directory_size(file_path, strict=True)
    return 0


def _directory_size(dir_path: str, strict: bool = False) -> int:
    total_size = 0
    try:
        with os.scandir(dir_path) as entries:
            for entry in entries:
                total_size += _entry_size(entry)
    except OSError as e:
        if strict:
            raise
        logger.warning(f"Skipping unreadable directory {dir_path}: {e}")
    return total_size


def _entry_size(entry: os.DirEntry) -> int:
    try:
        if entry.is_symlink():
            return 0
        if entry.is_dir(follow_symlinks=False):
            return _directory_size(entry.path)
        if entry.is_file(follow_symlinks=False):
            return entry.stat(follow_symlinks=False).st_size
    except OSError as e:
        logger.debug(f"Skipping unreadable entry {entry.path}: {e}")
    return 0
