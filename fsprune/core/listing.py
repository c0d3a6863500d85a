"""
Directory listing helpers.

get_dir_info lists one level with metadata; get_files collects regular files
(never symlinks) for eviction and batch operations.
"""
import os
import stat
from datetime import datetime
from typing import List

from .exceptions import ensure_text_path
from .schemas import DirectoryEntry, EntryKind
from ..setup.logging import logger


def _entry_kind(mode: int) -> EntryKind:
    if stat.S_ISREG(mode):
        return EntryKind.FILE
    if stat.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    return EntryKind.UNKNOWN


def _created_time(file_stat: os.stat_result) -> float:
    # st_birthtime is missing on most Linux builds; ctime is the closest stand-in
    return getattr(file_stat, "st_birthtime", file_stat.st_ctime)


def _stat_entry(entry: os.DirEntry):
    """
    Stat an entry, following symlinks.

    Links whose target cannot be stat'ed (dangling, looping, unreadable) are
    described by the link itself with kind Unknown. Returns None for entries
    that vanished after the directory was read.
    """
    try:
        file_stat = entry.stat()
        return file_stat, _entry_kind(file_stat.st_mode)
    except FileNotFoundError:
        if not entry.is_symlink():
            logger.debug(f"Entry vanished while listing: {entry.path}")
            return None
    except OSError:
        if not entry.is_symlink():
            raise

    try:
        return entry.stat(follow_symlinks=False), EntryKind.UNKNOWN
    except FileNotFoundError:
        logger.debug(f"Entry vanished while listing: {entry.path}")
        return None


def get_dir_info(dir_path: str) -> List[DirectoryEntry]:
    """
    Lists the direct children of a directory with their metadata.

    Metadata follows symlinks; a link whose target cannot be stat'ed (dangling,
    looping) is described by the link itself and reported as `Unknown`. Entries
    that vanish while listing are left out.

    Args:
        dir_path (str): Directory to list.

    Returns:
        list: DirectoryEntry objects sorted by name.

    Raises:
        OSError: If the directory cannot be listed.
        InvalidPathError: If an entry name is not valid UTF-8.
    """
    entries = []
    with os.scandir(dir_path) as it:
        for entry in it:
            name = ensure_text_path(entry.name)
            stat_result = _stat_entry(entry)
            if stat_result is None:
                continue
            file_stat, kind = stat_result

            entries.append(
                DirectoryEntry(
                    name=name,
                    kind=kind,
                    path=entry.path,
                    created_at=datetime.fromtimestamp(_created_time(file_stat)),
                    modified_at=datetime.fromtimestamp(file_stat.st_mtime),
                    size=file_stat.st_size,
                )
            )

    return sorted(entries, key=lambda e: e.name)


def get_files(dir_path: str, recursive: bool = True) -> List[str]:
    """
    Collects regular files under a directory, skipping symlinks.

    Args:
        dir_path (str): Root directory.
        recursive (bool): Descend into subdirectories. Defaults to True.

    Returns:
        list: File paths joined onto `dir_path`.

    Raises:
        OSError: If `dir_path` itself cannot be listed. Unreadable
                 subdirectories are skipped.
    """
    files = []
    with os.scandir(dir_path) as it:
        for entry in it:
            try:
                if entry.is_symlink():
                    continue
                if entry.is_file(follow_symlinks=False):
                    files.append(entry.path)
                elif recursive and entry.is_dir(follow_symlinks=False):
                    files.extend(_get_files_lenient(entry.path))
            except FileNotFoundError:
                continue
    return files


def _get_files_lenient(dir_path: str) -> List[str]:
    try:
        return get_files(dir_path, recursive=True)
    except OSError as e:
        logger.warning(f"Skipping unreadable directory {dir_path}: {e}")
        return []
