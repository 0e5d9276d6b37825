"""
text_match.py - Filename Text Helpers

Extension handling, video-type detection and filename validity checks
"""

from typing import Optional

from .models_fs import VIDEO_EXTENSIONS

INVALID_CHARS = '<>:"/\\|?*'

RESERVED_NAMES = {
    'CON', 'PRN', 'AUX', 'NUL',
    'COM1', 'COM2', 'COM3', 'COM4', 'COM5', 'COM6', 'COM7', 'COM8', 'COM9',
    'LPT1', 'LPT2', 'LPT3', 'LPT4', 'LPT5', 'LPT6', 'LPT7', 'LPT8', 'LPT9'
}


def get_file_extension(filename: str) -> str:
    """
    Get extension including the dot ("" when there is none)

    A leading dot alone (".hidden") does not count as an extension.
    """
    dot = filename.rfind('.')
    if dot <= 0:
        return ""
    return filename[dot:]


def is_video_file(filename: str) -> bool:
    """Check if the filename has a video extension (case-insensitive)"""
    return get_file_extension(filename).lower() in VIDEO_EXTENSIONS


def find_invalid_char(text: str) -> Optional[str]:
    """Return the first character not allowed in filenames, or None"""
    for char in INVALID_CHARS:
        if char in text:
            return char
    return None


def check_show_name(show_name: str) -> tuple[bool, Optional[str]]:
    """
    Check that a show name can prefix destination filenames

    Args:
        show_name: Show name

    Returns:
        (is_valid, error_reason)
    """
    if not show_name or not show_name.strip():
        return False, "Show name cannot be empty"

    char = find_invalid_char(show_name)
    if char:
        return False, f"Show name contains invalid character: {char}"

    return True, None


def is_valid_filename(name: str) -> tuple[bool, Optional[str]]:
    """
    Check if filename is valid (mainly for Windows)

    Args:
        name: Filename

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Filename cannot be empty"

    char = find_invalid_char(name)
    if char:
        return False, f"Filename contains invalid character: {char}"

    # Trailing space or dot
    if name.endswith(' ') or name.endswith('.'):
        return False, "Filename cannot end with space or dot"

    name_upper = name.upper().split('.')[0]
    if name_upper in RESERVED_NAMES:
        return False, f"Filename is a Windows reserved name: {name_upper}"

    if len(name) > 255:
        return False, "Filename exceeds 255 characters"

    return True, None
