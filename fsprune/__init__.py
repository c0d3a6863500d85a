"""
fsprune: file and directory utilities with size-bounded eviction.
"""

from .core.eviction import remove_old_files
from .core.exceptions import InvalidPathError
from .core.listing import get_dir_info, get_files
from .core.schemas import DirectoryEntry, EntryKind
from .core.size import get_size
from .setup.config import EvictionScope
from .utils.archive import archive_dir, extract_archive, list_archive_contents
from .utils.file_ops import (
    move_file,
    read_file,
    read_files,
    read_text_file,
    remove_dir,
    remove_file,
    remove_files,
    write_file,
    write_text_file,
)

__all__ = [
    "DirectoryEntry",
    "EntryKind",
    "EvictionScope",
    "InvalidPathError",
    "archive_dir",
    "extract_archive",
    "get_dir_info",
    "get_files",
    "get_size",
    "list_archive_contents",
    "move_file",
    "read_file",
    "read_files",
    "read_text_file",
    "remove_dir",
    "remove_file",
    "remove_files",
    "remove_old_files",
    "write_file",
    "write_text_file",
]
