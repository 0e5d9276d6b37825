"""
episode_match.py - Episode Detection

Provides:
- classify(): special-episode detection from filename markers
- extract(): episode number detection, either through the built-in pattern
  cascade or through a single user-supplied pattern
"""

from functools import lru_cache
from typing import List, Optional, Pattern, Tuple
import re

from .models_fs import NamingMode, MAX_PATTERN_LENGTH


class PatternError(ValueError):
    """Custom episode pattern cannot be used"""


# Markers for special episodes, matched case-insensitively anywhere in the name
SPECIAL_MARKERS = [
    ("special", r"special"),
    ("sp_number", r"SP[0-9]+"),
    ("ova", r"OVA"),
    ("extra", r"Extra"),
    ("bonus", r"Bonus"),
]

# Episode number cascade (order matters, first usable match wins)
EPISODE_PATTERNS = [
    ("episode", r"Episode[ ]*([0-9]{1,3})"),                # Episode 1, Episode 12
    ("ep", r"Ep[ ]*([0-9]{1,3})"),                          # Ep 1, Ep12
    ("e_number", r"E([0-9]{1,3})(?:[^0-9]|$)"),             # E01, E12
    ("dash", r"-[ ]*([0-9]{1,3})(?:[^0-9]|$)"),             # - 01, -12
    ("season_dash", r"S[0-9]+[ ]*-[ ]*([0-9]{1,3})"),       # S2 - 10
    ("season_space", r"S[0-9]+[ ]+([0-9]{1,3})"),          # S2 08
    ("sp_number", r"SP[ ]*([0-9]{1,3})"),                   # SP01, SP 3
    ("isolated", r" ([0-9]{1,2})[^0-9]"),                   # Show 07 [1080p]
]

# Last resort: first two-digit run with no digit on either side
TWO_DIGIT_FALLBACK = r"(?<![0-9])([0-9]{2})(?![0-9])"


def _compile_patterns(patterns: List[Tuple[str, str]], flags: int = 0) -> List[Tuple[str, Pattern]]:
    """Compile (name, pattern) pairs, leaving out any that fail to compile"""
    compiled = []
    for name, pattern in patterns:
        try:
            compiled.append((name, re.compile(pattern, flags)))
        except re.error:
            continue
    return compiled


_SPECIAL_REGEXES = _compile_patterns(SPECIAL_MARKERS, re.IGNORECASE)
_EPISODE_REGEXES = _compile_patterns(EPISODE_PATTERNS)
_FALLBACK_REGEX = re.compile(TWO_DIGIT_FALLBACK)


def classify(filename: str) -> bool:
    """
    Check if the file is a special episode

    Args:
        filename: Filename

    Returns:
        True when any special marker occurs in the filename
    """
    return any(regex.search(filename) for _, regex in _SPECIAL_REGEXES)


def parse_episode_number(digits: Optional[str]) -> Optional[int]:
    """
    Convert captured digits to an episode number

    Returns None for missing or non-decimal text, and for 0, which is never
    a usable episode number.
    """
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    number = int(digits)
    return number if number > 0 else None


@lru_cache(maxsize=32)
def compile_custom_pattern(pattern: str) -> Pattern:
    """
    Compile a user-supplied episode pattern

    Raises:
        PatternError: Pattern is empty, too long or not a valid regex
    """
    if not pattern:
        raise PatternError("Custom pattern cannot be empty")
    if len(pattern) >= MAX_PATTERN_LENGTH:
        raise PatternError(f"Custom pattern exceeds {MAX_PATTERN_LENGTH - 1} characters")
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternError(f"Error compiling custom pattern '{pattern}': {e}") from e


_LEADING_NUMBER = re.compile(r"\s*([0-9]+)")


def parse_leading_number(text: Optional[str]) -> Optional[int]:
    """
    Parse the decimal digits a captured group starts with

    Leading whitespace is ignored and parsing stops at the first non-digit,
    so " 12" and "12v2" both give 12.
    """
    if text is None:
        return None
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return parse_episode_number(match.group(1))


def extract_default(filename: str) -> Optional[int]:
    """Run the built-in cascade, then the two-digit fallback"""
    for _, regex in _EPISODE_REGEXES:
        match = regex.search(filename)
        if not match:
            continue
        digits = match.group(1)
        # Single digits get a leading zero, keeping the two-digit convention
        if len(digits) == 1:
            digits = digits.zfill(2)
        number = parse_episode_number(digits)
        if number is not None:
            return number

    # Only the first isolated pair counts, "00" there means not found
    match = _FALLBACK_REGEX.search(filename)
    if match:
        return parse_episode_number(match.group(1))
    return None


def extract_custom(filename: str, pattern: str) -> Optional[int]:
    """
    Extract the episode number with a custom pattern

    Group 2 (Season-Episode convention) wins over group 1 when it participates.

    Raises:
        PatternError: Pattern cannot be compiled
    """
    regex = compile_custom_pattern(pattern)
    match = regex.search(filename)
    if not match:
        return None

    if regex.groups >= 2 and match.group(2) is not None:
        return parse_leading_number(match.group(2))
    if regex.groups >= 1 and match.group(1) is not None:
        return parse_leading_number(match.group(1))
    return None


def extract(filename: str, mode: Optional[NamingMode] = None) -> Optional[int]:
    """
    Extract episode number from a filename

    Args:
        filename: Filename
        mode: Naming mode (None or default mode runs the built-in cascade)

    Returns:
        Episode number, or None when not found

    Raises:
        PatternError: Custom pattern cannot be compiled
    """
    if mode is not None and mode.is_custom:
        return extract_custom(filename, mode.pattern)
    return extract_default(filename)
