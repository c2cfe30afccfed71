"""File handling utilities for report exports."""

import re
import unicodedata
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists

    Returns:
        The path (for chaining)
    """
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_filename(name: str, max_length: int = 255) -> str:
    """Convert a course or report name to a safe filename.

    Args:
        name: Original name
        max_length: Maximum length of the resulting filename

    Returns:
        Safe filename string
    """
    name = unicodedata.normalize("NFKD", name)
    name = name.encode("ascii", "ignore").decode("ascii")
    name = name.replace(" ", "_")
    name = re.sub(r'[<>:"/\\|?*\x00-\x1f]', "", name)
    name = name.strip(". ")

    if len(name) > max_length:
        name = name[:max_length]

    return name or "report"


def write_text_report(path: Path, content: str) -> Path:
    """Write an exported report, creating parent directories.

    Args:
        path: Destination file
        content: Report text

    Returns:
        The written path
    """
    ensure_dir(path.parent)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path
