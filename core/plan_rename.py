"""
plan_rename.py - Rename Plan Generation Module

Responsibilities:
- Classify each candidate and extract its episode number
- Compose destination names ("<show> - NN[ - Special]<ext>")
- Enforce batch capacity and configuration checks
- Detect destination collisions (reported, never auto-resolved)
- Output NamingPlan
"""

from pathlib import Path
from typing import List, Dict, Optional, Sequence
from collections import defaultdict

from .models_fs import (
    NamingEntry, NamingPlan, NamingMode, RenameOptions, Collision,
    DiagnosticKind, SPECIALS_DIR, normalize_for_comparison
)
from .episode_match import classify, extract, compile_custom_pattern, PatternError
from .text_match import get_file_extension, is_valid_filename, check_show_name
from .sort_rules import sort_entries
from .scan_files import get_existing_names


def format_episode_name(show_name: str, episode_number: int, is_special: bool, extension: str) -> str:
    """
    Compose a destination filename

    Episode numbers are padded to two digits; wider numbers keep their width.
    """
    if is_special:
        return f"{show_name} - {episode_number:02d} - Special{extension}"
    return f"{show_name} - {episode_number:02d}{extension}"


def find_collisions(entries: List[NamingEntry], case_insensitive: bool = False) -> List[Collision]:
    """
    Find destination names claimed by more than one entry

    Args:
        entries: Planned entries
        case_insensitive: Compare names case-insensitively

    Returns:
        Collision list, in plan order
    """
    groups: Dict[str, List[NamingEntry]] = defaultdict(list)
    for entry in entries:
        groups[normalize_for_comparison(entry.new_name, case_insensitive)].append(entry)

    return [
        Collision(new_name=group[0].new_name, sources=tuple(e.original_name for e in group))
        for group in groups.values()
        if len(group) > 1
    ]


def plan_episode_rename(
    candidates: Sequence[str],
    show_name: str,
    mode: Optional[NamingMode] = None,
    options: Optional[RenameOptions] = None
) -> NamingPlan:
    """
    Generate episode rename plan

    Args:
        candidates: Candidate filenames, in discovery order
        show_name: Show name used as destination prefix
        mode: Naming mode (None selects the built-in cascade)
        options: Rename options

    Returns:
        Naming plan; fatal problems leave it without entries and with an error diagnostic
    """
    if options is None:
        options = RenameOptions()
    if mode is None:
        mode = NamingMode()

    plan = NamingPlan(show_name=show_name, mode=mode)

    if len(candidates) > options.max_files:
        plan.add_diagnostic(
            DiagnosticKind.CAPACITY_EXCEEDED,
            f"Batch too large: {len(candidates)} files (maximum is {options.max_files})"
        )
        return plan

    valid, error = check_show_name(show_name)
    if not valid:
        plan.add_diagnostic(DiagnosticKind.CONFIG_ERROR, error)
        return plan

    if mode.is_custom:
        try:
            compile_custom_pattern(mode.pattern)
        except PatternError as e:
            plan.add_diagnostic(DiagnosticKind.CONFIG_ERROR, str(e))
            return plan

    entries: List[NamingEntry] = []
    for filename in candidates:
        if not filename:
            plan.add_diagnostic(DiagnosticKind.INVALID_NAME, "Empty filename, skipping.")
            continue

        is_special = classify(filename)
        episode_number = extract(filename, mode)

        if episode_number is None:
            plan.add_diagnostic(
                DiagnosticKind.NOT_FOUND,
                f"No episode number found in '{filename}', skipping.",
                filename,
            )
            continue

        new_name = format_episode_name(show_name, episode_number, is_special, get_file_extension(filename))

        valid, error = is_valid_filename(new_name)
        if not valid:
            plan.add_diagnostic(DiagnosticKind.INVALID_NAME, f"Skip '{filename}': {error}", filename)
            continue

        entries.append(NamingEntry(
            original_name=filename,
            new_name=new_name,
            episode_number=episode_number,
            is_special=is_special,
        ))

    plan.entries = sort_entries(entries)

    plan.collisions = find_collisions(plan.entries, options.case_insensitive_detect)
    for collision in plan.collisions:
        sources = ", ".join(f"'{s}'" for s in collision.sources)
        plan.add_diagnostic(
            DiagnosticKind.COLLISION,
            f"Multiple files have the same destination '{collision.new_name}': {sources}",
            collision.new_name,
        )

    return plan


def target_directory(entry: NamingEntry, dest_dir: Path) -> Path:
    """Directory an entry is written to (specials go to the Specials subfolder)"""
    return dest_dir / SPECIALS_DIR if entry.is_special else dest_dir


def validate_plan(
    plan: NamingPlan,
    source_dir: Path,
    dest_dir: Path,
    case_insensitive: bool = False
) -> List[str]:
    """
    Validate rename plan against the filesystem

    Args:
        plan: Naming plan
        source_dir: Folder holding the original files
        dest_dir: Destination folder
        case_insensitive: Whether name comparison is case-insensitive

    Returns:
        Error list
    """
    errors = []
    source_dir = Path(source_dir).resolve()
    dest_dir = Path(dest_dir).resolve()

    # Check if source files exist
    for entry in plan.entries:
        if not (source_dir / entry.original_name).is_file():
            errors.append(f"Source file does not exist: {source_dir / entry.original_name}")

    # Names on disk that are not freed by this batch stay occupied
    occupied: Dict[Path, set] = {}
    for entry in plan.entries:
        directory = target_directory(entry, dest_dir)
        if directory not in occupied:
            names = get_existing_names(directory, case_insensitive)
            if directory == source_dir:
                names -= {normalize_for_comparison(e.original_name, case_insensitive) for e in plan.entries}
            occupied[directory] = names

        if entry.is_same and directory == source_dir:
            continue
        if normalize_for_comparison(entry.new_name, case_insensitive) in occupied[directory]:
            errors.append(f"Destination already exists: {directory / entry.new_name}")

    return errors
