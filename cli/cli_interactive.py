"""
cli_interactive.py - Interactive CLI

Prompts for show name and folders, shows the rename plan and executes it
after confirmation
"""

from pathlib import Path
from typing import Optional

from core import (
    scan_directory, plan_episode_rename, validate_plan, execute_plan,
    AuditLog, RenameOptions, NamingPlan, RenameResult, SPECIALS_DIR
)

NAME_WIDTH = 70


def read_line(prompt: str) -> Optional[str]:
    """Read one stripped line, None when input is closed"""
    try:
        return input(prompt).strip()
    except EOFError:
        return None


def input_text(prompt: str, empty_error: str) -> Optional[str]:
    """Input a non-empty value (prints the reason and returns None otherwise)"""
    value = read_line(f"{prompt}: ")
    if value is None:
        print("Error reading input.")
        return None
    if not value:
        print(empty_error)
        return None
    return value


def input_confirm(prompt: str) -> Optional[bool]:
    """Input yes/no; anything starting with 'y' counts as yes"""
    value = read_line(f"{prompt} (yes/no): ")
    if value is None:
        return None
    return value.lower().startswith('y')


def truncate_name(name: str, width: int = NAME_WIDTH) -> str:
    """Shorten long names to width, ending with '...'"""
    if len(name) <= width:
        return name
    return name[:width - 3] + "..."


def print_plan(plan: NamingPlan, options: RenameOptions, dest_dir: Path, logging_enabled: bool = False) -> None:
    """Print the rename plan table"""
    print(f"\nFound {plan.total_count} files. Rename Plan{' (DRY RUN)' if options.dry_run else ''}:")

    if options.dry_run:
        print("Operation mode: DRY RUN - no actual changes will be made")
    elif options.keep_originals:
        print("Operation mode: Copying files (keeping originals)")
    else:
        print("Operation mode: Moving/renaming files")
    print(f"Destination directory: {dest_dir}")
    if logging_enabled:
        print(f"Logging enabled: '{options.log_file}'")
    print(f"Episode detection: {plan.mode.describe()}")

    print(f"\n{'Original Filename':<{NAME_WIDTH}} -> New Filename")
    print("-" * 80)
    for entry in plan.entries:
        original = truncate_name(entry.original_name)
        if entry.is_special:
            print(f"{original:<{NAME_WIDTH}} -> {SPECIALS_DIR}/{entry.new_name} (SPECIAL)")
        else:
            print(f"{original:<{NAME_WIDTH}} -> {entry.new_name}")


def print_result(result: RenameResult, plan: NamingPlan, options: RenameOptions, dest_dir: Path) -> None:
    """Print per-file outcome and summary"""
    verb = "copied" if options.keep_originals else "renamed"

    if result.specials_created:
        print(f"Created '{SPECIALS_DIR}' directory in '{dest_dir}'.")
    for op in result.success:
        if options.keep_originals:
            print(f"Copied '{op.src.name}' to '{op.dst}'")
        else:
            print(f"Renamed '{op.src.name}' to '{op.dst.name}'")
    for op, error in result.failed:
        action = "copying" if options.keep_originals else "renaming"
        print(f"Error {action} '{op.src.name}' to '{op.dst.name}': {error}")
    for op in result.skipped:
        print(f"'{op.src.name}' already has its final name")

    print("\nOperation complete!")
    print(f"- {result.success_count} of {plan.total_count} files successfully {verb}")
    print(f"- {plan.regular_count} regular episodes")
    special_line = f"- {plan.special_count} special episodes"
    if plan.special_count > 0:
        special_line += f" moved to {SPECIALS_DIR} folder"
    print(special_line)


def _run_session(
    options: RenameOptions,
    audit: AuditLog,
    show_name: Optional[str],
    source_dir: Optional[Path],
    assume_yes: bool
) -> int:
    if show_name is None:
        show_name = input_text("Enter show name", "Show name cannot be empty.")
        if show_name is None:
            return 1

    if source_dir is None:
        folder = input_text("Enter folder path with source files", "Folder path cannot be empty.")
        if folder is None:
            return 1
        source_dir = Path(folder).expanduser()

    # Destination: -p, else ask when keeping originals, else rename in place
    if options.output_path:
        dest_dir = options.output_path
    elif options.keep_originals:
        folder = input_text(
            "Enter destination folder path for renamed files",
            "Destination path cannot be empty when using backup mode.",
        )
        if folder is None:
            return 1
        dest_dir = Path(folder).expanduser()
    else:
        dest_dir = source_dir

    audit.info(f"Show name: '{show_name}'")
    audit.info(f"Source folder: '{source_dir}'")
    audit.info(f"Destination folder: '{dest_dir}'")
    if options.custom_pattern is not None:
        audit.info(f"Using custom pattern: '{options.custom_pattern}'")

    if options.force_mode:
        print("Scanning directory for all files (force mode)...")
    else:
        print("Scanning directory for video files...")

    try:
        files = scan_directory(source_dir, force_mode=options.force_mode,
                               include_hidden=options.include_hidden, progress_callback=print)
    except (ValueError, OSError) as e:
        print(f"Error: Unable to open directory '{source_dir}': {e}")
        audit.error(f"Unable to open directory '{source_dir}': {e}")
        return 1

    plan = plan_episode_rename([f.name for f in files], show_name, options.naming_mode, options)

    if plan.is_aborted:
        for diag in plan.errors:
            print(f"Error: {diag.message}")
            audit.error(diag.message)
        return 1

    for diag in plan.skipped:
        print(f"Warning: {diag.message}")
        audit.warning(diag.message)

    if not plan.entries:
        print("No suitable files found in the directory.")
        audit.info("No suitable files found in the directory.")
        return 1

    print_plan(plan, options, dest_dir, audit.is_open)

    if plan.has_collisions:
        print()
        for collision in plan.collisions:
            sources = ", ".join(f"'{s}'" for s in collision.sources)
            message = f"Multiple files map to '{collision.new_name}': {sources}"
            print(f"Error: {message}")
            audit.error(message)
        print("Resolve the collisions (e.g. with --pattern) before renaming.")
        return 1

    for problem in validate_plan(plan, source_dir, dest_dir, options.case_insensitive_detect):
        print(f"Warning: {problem}")
        audit.warning(problem)

    if options.dry_run:
        print("\nDRY RUN completed. No files were modified.")
        audit.info("DRY RUN completed. No files were modified.")
        return 0

    if not assume_yes:
        print()
        answer = input_confirm(f"Continue with {'copying' if options.keep_originals else 'renaming'}?")
        if answer is None:
            print("Error reading input.")
            audit.error("Failed to read user confirmation.")
            return 1
        if not answer:
            print("Operation cancelled.")
            audit.info("Operation cancelled by user.")
            return 0

    try:
        result = execute_plan(
            plan,
            source_dir,
            dest_dir,
            keep_originals=options.keep_originals,
            audit=audit,
        )
    except OSError as e:
        print(f"Error: Failed to create destination directory '{dest_dir}': {e}")
        audit.error(f"Failed to create destination directory '{dest_dir}': {e}")
        return 1

    print_result(result, plan, options, dest_dir)

    verb = "copied" if options.keep_originals else "renamed"
    audit.info(f"Operation complete! {result.success_count} of {plan.total_count} files successfully {verb}.")
    audit.info(f"{plan.regular_count} regular episodes, {plan.special_count} special episodes.")

    return 0 if result.failed_count == 0 else 1


def interactive_mode(
    options: Optional[RenameOptions] = None,
    show_name: Optional[str] = None,
    source_dir: Optional[Path] = None,
    assume_yes: bool = False
) -> int:
    """
    Run one rename session

    Args:
        options: Rename options
        show_name: Show name (prompted when None)
        source_dir: Folder with source files (prompted when None)
        assume_yes: Skip the confirmation prompt

    Returns:
        Exit code
    """
    if options is None:
        options = RenameOptions()

    audit = AuditLog(options.log_file)
    if options.use_log and not audit.open():
        print(f"Warning: Could not open log file '{options.log_file}': {audit.open_error}")
        print("Continuing without logging.")

    with audit:
        audit.session_start(options.dry_run)
        try:
            return _run_session(options, audit, show_name, source_dir, assume_yes)
        finally:
            audit.session_end()
