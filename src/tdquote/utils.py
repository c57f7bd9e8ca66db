"""
Loading of raw quote files.
"""

from .types import FileUnreadableError


def load_quote_file(path: str) -> bytes:
    """Read an entire quote file into memory.

    Args:
        path: Path to the raw quote file

    Returns:
        File contents

    Raises:
        FileUnreadableError: If the file cannot be opened or read
    """
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise FileUnreadableError(f"Error reading quote file {path}: {e}") from e
