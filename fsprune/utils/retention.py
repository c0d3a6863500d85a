"""
Count-based retention.

Keeps the N most recent items of a folder and removes the rest. The logging
layer uses it to rotate its per-run log folders.
"""
import logging
from os import remove, scandir, path
from shutil import rmtree
from typing import List

logger = logging.getLogger(__name__)


def clear_latest_items(dir_path: str, n_to_keep: int) -> List[str]:
    """
    Clears items (files or folders) in the specified directory, keeping only
    the `n_to_keep` most recent ones.

    Items are sorted by modification time (oldest first, name breaks ties).
    Items from the beginning of this sorted list are removed until only
    `n_to_keep` items remain.

    Args:
        dir_path (str): The path to the directory containing the items.
        n_to_keep (int): The number of most recent items to keep.

    Returns:
        list: Paths of the removed items, oldest first.

    Raises:
        FileNotFoundError: If the specified `dir_path` is not found.
        OSError: If the directory cannot be scanned.
    """
    if n_to_keep < 0:
        raise ValueError(f"n_to_keep must be non-negative, got {n_to_keep}")

    if not path.exists(dir_path):
        raise FileNotFoundError(f"Path not found: {dir_path}")

    try:
        with scandir(dir_path) as entries:
            all_items = sorted(
                entries,
                key=lambda entry: (entry.stat(follow_symlinks=False).st_mtime, entry.name),
            )
    except OSError as e:
        raise OSError(f"Error scanning directory {dir_path}: {e}") from e

    num_items_to_delete = len(all_items) - n_to_keep
    removed = []

    for item_to_delete in all_items[:max(num_items_to_delete, 0)]:
        try:
            if item_to_delete.is_file() or item_to_delete.is_symlink():
                remove(item_to_delete.path)
            elif item_to_delete.is_dir():
                rmtree(item_to_delete.path)
            else:
                continue
            removed.append(item_to_delete.path)
        except OSError as e:
            # Keep going; one stuck item must not block the rest
            logger.error(f"Error deleting item {item_to_delete.path}: {e}")

    return removed
