"""
sort_rules.py - Sorting Rules Module

Plan ordering and stable file ordering
"""

from typing import List, Callable
from .models_fs import FileItem, NamingEntry


def get_sort_key() -> Callable[[NamingEntry], tuple]:
    """
    Get plan sort key function

    Regular episodes come before specials, then ascending episode number.
    """
    return lambda e: e.sort_key


def sort_entries(entries: List[NamingEntry]) -> List[NamingEntry]:
    """
    Sort naming entries

    sorted() is stable, so entries with equal keys keep their discovery order.

    Args:
        entries: Entry list

    Returns:
        Sorted entry list (new list)
    """
    return sorted(entries, key=get_sort_key())


def sort_by_name(files: List[FileItem]) -> List[FileItem]:
    """
    Sort by filename (for ensuring stable discovery order)

    Args:
        files: File list

    Returns:
        Sorted file list
    """
    return sorted(files, key=lambda f: (f.name.lower(), f.name))
