"""
Path helpers for display in the user interface.
"""
import os
from pathlib import Path
from typing import Optional, Tuple


def shrink_home(path: str) -> str:
    """
    Replace the user's home directory prefix with "~".

    Args:
        path: Absolute file path

    Returns:
        The shortened path, or the original one when it is not under home
    """
    try:
        home = str(Path.home())
    except RuntimeError:
        return path

    directory, name = os.path.split(path)
    if directory == home or directory.startswith(home + os.sep):
        return os.path.join("~" + directory[len(home):], name)
    return path


def split_for_title(path: str) -> Tuple[str, str]:
    """Split a path into (file name, shortened directory) for a window title."""
    directory, name = os.path.split(shrink_home(path))
    return name, directory


def file_url_to_path(url: str) -> Optional[str]:
    """
    Convert the first line of a dropped text/uri-list to a local path.

    Returns:
        The path, or None if the URL is not a file:// URL
    """
    first = url.splitlines()[0].strip() if url else ""
    if not first.startswith("file://"):
        return None
    return first[len("file://"):]


def ensure_pdf_suffix(path: str) -> str:
    """Append ".pdf" unless the path already ends with it (any case)."""
    if path.lower().endswith(".pdf"):
        return path
    return path + ".pdf"
