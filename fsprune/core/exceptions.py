"""
Errors raised by fsprune.

Filesystem failures surface as the builtin OSError family
(FileNotFoundError, PermissionError, NotADirectoryError, ...).
"""


class InvalidPathError(ValueError):
    """Raised when a file name cannot be represented as UTF-8 text."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Path is not valid UTF-8 text: {path!r}")


def ensure_text_path(file_path: str) -> str:
    """
    Return `file_path` unchanged if it encodes as UTF-8.

    Undecodable names come back from the OS as surrogate-escaped strings; those
    raise InvalidPathError instead of leaking into text output.
    """
    try:
        file_path.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidPathError(file_path) from e
    return file_path
