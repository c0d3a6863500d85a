"""
Size-bounded eviction.

remove_old_files trims a directory down to a byte budget by deleting the
least recently modified files first. Each call re-reads the filesystem; nothing
is cached between calls and no locking is done. Callers that may run
concurrently on the same directory must serialize themselves.
"""
import os
from dataclasses import dataclass
from typing import List

from .listing import get_files
from .size import get_size
from ..setup.config import EvictionScope
from ..setup.logging import logger
from ..utils.file_ops import remove_file


@dataclass(frozen=True)
class EvictionCandidate:
    path: str
    modified_time: float
    size: int


def collect_candidates(dir_path: str, scope: EvictionScope = EvictionScope.RECURSIVE) -> List[EvictionCandidate]:
    """
    Regular files under `dir_path`, oldest first.

    Ties on modification time are broken by path so the order is reproducible.
    Files that disappear before they can be stat'ed are left out.
    """
    candidates = []
    for file_path in get_files(dir_path, recursive=scope == EvictionScope.RECURSIVE):
        try:
            file_stat = os.lstat(file_path)
        except OSError as e:
            logger.debug(f"Skipping candidate {file_path}: {e}")
            continue
        candidates.append(EvictionCandidate(file_path, file_stat.st_mtime, file_stat.st_size))

    candidates.sort(key=lambda c: (c.modified_time, c.path))
    return candidates


def remove_old_files(
    dir_path: str,
    keep: int,
    scope: EvictionScope = EvictionScope.RECURSIVE,
    dry_run: bool = False,
) -> List[str]:
    """
    Deletes the oldest files of a directory until its size is at most `keep` bytes.

    Nothing happens when the directory is already strictly smaller than `keep`.
    Otherwise files are removed oldest-first (by mtime) and eviction stops as
    soon as the remaining size is `<= keep` or candidates run out. Running out
    is not an error; compare the result against get_size() to detect a shortfall.

    A file that cannot be deleted (already gone, permission denied) is logged
    and skipped; it does not count towards the freed bytes.

    Args:
        dir_path (str): Directory to trim.
        keep (int): Size budget in bytes.
        scope (EvictionScope): Whole tree (default) or direct children only.
        dry_run (bool): Select files without deleting them.

    Returns:
        list: Removed file paths, in removal order (oldest first).

    Raises:
        ValueError: If `keep` is negative.
        FileNotFoundError: If `dir_path` does not exist.
        NotADirectoryError: If `dir_path` is not a directory.
        OSError: If `dir_path` cannot be stat'ed or listed.
    """
    if keep < 0:
        raise ValueError(f"keep must be non-negative, got {keep}")

    if not os.path.isdir(dir_path):
        if os.path.exists(dir_path):
            raise NotADirectoryError(f"Not a directory: {dir_path}")
        raise FileNotFoundError(f"Path not found: {dir_path}")

    dir_size = get_size(dir_path)
    if dir_size < keep:
        logger.debug(f"{dir_path} is {dir_size} bytes, under budget of {keep} bytes")
        return []

    candidates = collect_candidates(dir_path, scope)
    removed_files = []

    for candidate in candidates:
        if dir_size <= keep:
            break

        if not dry_run:
            try:
                remove_file(candidate.path)
            except FileNotFoundError:
                logger.info(f"File vanished before eviction: {candidate.path}")
                continue
            except OSError as e:
                logger.warning(f"Could not evict {candidate.path}: {e}")
                continue

        dir_size -= candidate.size
        removed_files.append(candidate.path)

    if dir_size > keep:
        logger.warning(
            f"{dir_path} still holds {dir_size} bytes after eviction (budget {keep} bytes)"
        )

    action = "Would remove" if dry_run else "Removed"
    logger.info(f"{action} {len(removed_files)} file(s) from {dir_path}")
    return removed_files
