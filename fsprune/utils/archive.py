import tarfile
from os import path, remove
from typing import List, Optional

from ..setup.logging import logger


def archive_dir(dir_path: str, name: str, compresslevel: int = 9) -> str:
    """
    Compresses a directory into `<name>.tar.gz`.

    Entries are written sequentially through a gzip stream and stored under
    the directory's base name. Symlinks are archived as links.

    Args:
        dir_path (str): Directory to archive.
        name (str): Archive path without the `.tar.gz` suffix.
        compresslevel (int): gzip level, 1-9.

    Returns:
        str: Path of the created archive.

    Raises:
        FileNotFoundError: If `dir_path` does not exist (no archive is created).
        OSError: If a member cannot be read; the partial archive is removed.
        NotADirectoryError: If `dir_path` is not a directory.
    """
    if not path.exists(dir_path):
        raise FileNotFoundError(f"Path not found: {dir_path}")
    if not path.isdir(dir_path):
        raise NotADirectoryError(f"Not a directory: {dir_path}")

    archive_path = f"{name}.tar.gz"
    arcname = path.basename(path.normpath(dir_path))

    try:
        with tarfile.open(archive_path, "w:gz", compresslevel=compresslevel) as tar_ref:
            tar_ref.add(dir_path, arcname=arcname, recursive=True)
    except BaseException:
        # No truncated archive is left behind
        if path.exists(archive_path):
            remove(archive_path)
        raise

    logger.info(f"Archived {dir_path} into {archive_path}")
    return archive_path


def extract_archive(archive_path: str, extracted_files_path: str, max_files: Optional[int] = None) -> List[str]:
    """
    Extracts a tar.gz archive to the specified directory.

    Args:
        archive_path (str): The path to the archive.
        extracted_files_path (str): The directory where the files will be extracted.
        max_files (int, optional): Maximum number of members to extract. If None, extract all.

    Returns:
        list: Names of the extracted members.
    """
    with tarfile.open(archive_path, "r:gz") as tar_ref:
        members = tar_ref.getmembers()

        if max_files is not None and len(members) > max_files:
            # Sort members to ensure consistent selection (by name)
            members = sorted(members, key=lambda m: m.name)[:max_files]

        for member in members:
            tar_ref.extract(member, extracted_files_path, filter="data")

    return [member.name for member in members]


def list_archive_contents(archive_path: str) -> List[tarfile.TarInfo]:
    """
    Lists the members of a tar.gz archive.

    Args:
        archive_path (str): Path to the archive.

    Returns:
        list: TarInfo objects describing each member.
    """
    with tarfile.open(archive_path, "r:gz") as tar_ref:
        return tar_ref.getmembers()
