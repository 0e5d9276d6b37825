"""
safety_checks.py - Pre-operation Checks

Every rename or copy is checked right before it runs; a failed check turns
into a per-file failure, never an overwrite.
"""

from pathlib import Path
from typing import Tuple, Optional
import os
import platform

from .text_match import is_valid_filename

WINDOWS_MAX_PATH = 260

CheckResult = Tuple[bool, Optional[str]]


def check_writable(path: Path) -> CheckResult:
    """
    Check that a file, or the folder a new file goes into, accepts writes

    Returns:
        (is_writable, error_reason)
    """
    if path.exists():
        if os.access(path, os.W_OK):
            return True, None
        return False, f"File is not writable: {path}"

    folder = path.parent
    if not folder.exists():
        return False, f"Parent directory does not exist: {folder}"
    if not os.access(folder, os.W_OK):
        return False, f"Directory is not writable: {folder}"
    return True, None


def check_path_length(path: Path, max_length: int = WINDOWS_MAX_PATH) -> CheckResult:
    """Check a full path against the platform path limit"""
    length = len(str(path))
    if length > max_length:
        return False, f"Path length ({length}) exceeds limit ({max_length}): {path}"
    return True, None


def check_source(src: Path) -> CheckResult:
    """Source must be an existing regular file"""
    if not src.exists():
        return False, f"Source file does not exist: {src}"
    if not src.is_file():
        return False, f"Source path is not a file: {src}"
    return True, None


def check_destination(dst: Path) -> CheckResult:
    """Destination must be a usable, free name in a writable folder"""
    valid, error = is_valid_filename(dst.name)
    if not valid:
        return False, error

    if platform.system() == "Windows":
        valid, error = check_path_length(dst)
        if not valid:
            return False, error

    # Existing files are never replaced
    if dst.exists():
        return False, f"Destination already exists: {dst}"

    return check_writable(dst)


def check_rename_op(src: Path, dst: Path, keep_source: bool = False) -> CheckResult:
    """
    Check a single rename or copy

    Args:
        src: Source path
        dst: Destination path
        keep_source: Source is only read (copy), so it need not be writable

    Returns:
        (is_safe, error_reason)
    """
    for valid, error in (check_source(src), check_destination(dst)):
        if not valid:
            return False, error

    if keep_source:
        return True, None
    return check_writable(src)


def is_same_filesystem(path1: Path, path2: Path) -> bool:
    """Whether a plain os.rename can move path1 to path2"""
    try:
        dev1 = os.stat(path1 if path1.exists() else path1.parent).st_dev
        dev2 = os.stat(path2 if path2.exists() else path2.parent).st_dev
    except OSError:
        return False
    return dev1 == dev2
