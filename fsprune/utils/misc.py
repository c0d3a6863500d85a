import re

UNIT_MULTIPLIER = {"B": 1, "K": 1024, "M": 1024 * 1024, "G": 1024 * 1024 * 1024}

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(?:(B)|([KMG])(?:I?B)?)?\s*$", re.IGNORECASE)


def convert_to_bytes(size_str) -> int:
    """
    This function converts a size string (e.g., "22K", "321M", "1.5G", "4096") into bytes.

    Args:
        size_str (str | int): The size to convert. Integers are returned as is.

    Returns:
        int: The size in bytes.

    Raises:
        ValueError: If the format is invalid or the size is negative.
    """
    if isinstance(size_str, int):
        if size_str < 0:
            raise ValueError(f"Size must be non-negative: {size_str}")
        return size_str

    match = _SIZE_PATTERN.match(str(size_str))
    if match is None:
        raise ValueError(f"Invalid size: {size_str!r}")

    size_value = float(match.group(1))
    size_unit = (match.group(2) or match.group(3) or "B").upper()

    return int(size_value * UNIT_MULTIPLIER[size_unit])


def format_bytes(size: int) -> str:
    """
    Formats a byte count for display (e.g., 1536 -> "1.50 KB").
    """
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size} B" if unit == "B" else f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} GB"
