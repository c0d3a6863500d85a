"""
Thin file and directory operations.

Single-item helpers raise the platform OSError unchanged. The batch removal
helper is lenient: it logs failures and keeps going.
"""
from os import remove
from shutil import move, rmtree
from typing import Iterable, List

from ..setup.logging import logger


def read_file(file_path: str) -> bytes:
    """Reads a file as bytes."""
    with open(file_path, "rb") as file:
        return file.read()


def write_file(file_path: str, data: bytes) -> None:
    """Writes bytes to a file, replacing any previous content."""
    with open(file_path, "wb") as file:
        file.write(data)


def read_text_file(file_path: str, encoding: str = "utf-8") -> str:
    """Reads a file as text."""
    with open(file_path, "r", encoding=encoding) as file:
        return file.read()


def write_text_file(file_path: str, data: str, encoding: str = "utf-8") -> None:
    """Writes text to a file, replacing any previous content."""
    with open(file_path, "w", encoding=encoding) as file:
        file.write(data)


def move_file(src: str, dest: str) -> str:
    """
    Moves a file or directory.

    Args:
        src (str): Source path.
        dest (str): Destination path.

    Returns:
        str: The destination path.
    """
    return move(src, dest)


def remove_file(file_path: str) -> None:
    """Removes a single file."""
    remove(file_path)


def remove_dir(dir_path: str) -> None:
    """Removes a directory and everything under it."""
    rmtree(dir_path)


def read_files(file_paths: Iterable[str]) -> List[bytes]:
    """
    Reads several files as bytes, in order.

    Raises:
        OSError: On the first file that cannot be read.
    """
    return [read_file(file_path) for file_path in file_paths]


def remove_files(file_paths: Iterable[str]) -> List[str]:
    """
    Removes several files, skipping the ones that fail.

    Args:
        file_paths: Files to remove.

    Returns:
        list: The paths that were actually removed.
    """
    removed = []
    for file_path in file_paths:
        try:
            remove(file_path)
        except OSError as e:
            logger.error(f"Error deleting file {file_path}: {e}")
            continue
        removed.append(file_path)
    return removed
