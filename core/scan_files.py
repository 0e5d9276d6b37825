"""
scan_files.py - File Scanning Module

Lists candidate episode files of a single directory
"""

from pathlib import Path
from typing import List, Optional, Callable

from .models_fs import FileItem
from .sort_rules import sort_by_name
from .text_match import is_video_file


def scan_directory(
    directory: Path,
    force_mode: bool = False,
    include_hidden: bool = False,
    file_filter: Optional[Callable[[Path], bool]] = None,
    progress_callback: Optional[Callable[[str], None]] = None
) -> List[FileItem]:
    """
    Scan single directory (non-recursive) for candidate files

    Args:
        directory: Source directory
        force_mode: Accept all file types instead of video files only
        include_hidden: Whether to include hidden files
        file_filter: Additional file filter function
        progress_callback: Progress callback function

    Returns:
        File list sorted by name
    """
    directory = Path(directory).resolve()
    if not directory.is_dir():
        raise ValueError(f"Directory does not exist: {directory}")

    results: List[FileItem] = []

    for item in directory.iterdir():
        # Only regular files, not directories
        if not item.is_file():
            continue

        if not include_hidden and item.name.startswith('.'):
            continue

        if not force_mode and not is_video_file(item.name):
            continue

        if file_filter and not file_filter(item):
            continue

        try:
            results.append(FileItem.from_path(item))
        except (OSError, PermissionError) as e:
            # Skip inaccessible files
            if progress_callback:
                progress_callback(f"Warning: Cannot get stats for '{item.name}': {e}")

    return sort_by_name(results)


def get_existing_names(directory: Path, case_insensitive: bool = True) -> set:
    """
    Get set of existing filenames in directory (for conflict detection)

    Args:
        directory: Target directory
        case_insensitive: Whether case-insensitive

    Returns:
        Filename set
    """
    directory = Path(directory)
    if not directory.is_dir():
        return set()

    names = set()
    for item in directory.iterdir():
        if item.is_file():
            name = item.name.casefold() if case_insensitive else item.name
            names.add(name)

    return names
