"""File system safety utilities - pure functions for path validation."""

from pathlib import Path


def is_safe_filename(filename: str) -> bool:
    """Check if a picked filename is safe to use inside managed storage.

    Pure function that rejects anything that could escape the target
    directory once joined to it.

    Args:
        filename: The filename to check

    Returns:
        True if safe, False otherwise
    """
    if not filename or filename in ('.', '..'):
        return False

    # Reject path traversal and nested paths
    if '..' in filename or '/' in filename or '\\' in filename:
        return False

    # Reject Windows drive prefixes
    if len(filename) > 1 and filename[1] == ':':
        return False

    return True


def is_within(path: str | Path, root: str | Path) -> bool:
    """Check whether path resolves to a location inside root.

    Args:
        path: Candidate path
        root: Directory that should contain it

    Returns:
        True if path is root itself or below it
    """
    try:
        Path(path).resolve().relative_to(Path(root).resolve())
    except ValueError:
        return False
    return True
