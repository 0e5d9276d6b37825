"""
core - Episode Renamer Core Module

Provides episode detection, naming plan generation, scanning and execution.
"""

__version__ = "1.0.0"

from .models_fs import (
    FileItem,
    RenameOp,
    RenameOptions,
    NamingMode,
    NamingEntry,
    NamingPlan,
    Collision,
    Diagnostic,
    DiagnosticKind,
    MAX_FILES,
    DEFAULT_LOG_FILE,
    SPECIALS_DIR,
    VIDEO_EXTENSIONS,
)

from .episode_match import (
    classify,
    extract,
    compile_custom_pattern,
    PatternError,
)

from .text_match import (
    get_file_extension,
    is_video_file,
    is_valid_filename,
    check_show_name,
)

from .scan_files import (
    scan_directory,
    get_existing_names,
)

from .sort_rules import (
    sort_entries,
    sort_by_name,
    get_sort_key,
)

from .plan_rename import (
    plan_episode_rename,
    format_episode_name,
    find_collisions,
    validate_plan,
)

from .exec_rename import (
    build_ops,
    execute_plan,
    RenameResult,
)

from .safety_checks import (
    check_writable,
    check_path_length,
    check_rename_op,
)

from .audit_log import AuditLog

__all__ = [
    "__version__",

    # Data models
    "FileItem",
    "RenameOp",
    "RenameOptions",
    "NamingMode",
    "NamingEntry",
    "NamingPlan",
    "Collision",
    "Diagnostic",
    "DiagnosticKind",
    "RenameResult",
    "MAX_FILES",
    "DEFAULT_LOG_FILE",
    "SPECIALS_DIR",
    "VIDEO_EXTENSIONS",

    # Episode detection
    "classify",
    "extract",
    "compile_custom_pattern",
    "PatternError",

    # Text processing
    "get_file_extension",
    "is_video_file",
    "is_valid_filename",
    "check_show_name",

    # Scanning
    "scan_directory",
    "get_existing_names",

    # Sorting
    "sort_entries",
    "sort_by_name",
    "get_sort_key",

    # Planning
    "plan_episode_rename",
    "format_episode_name",
    "find_collisions",
    "validate_plan",

    # Execution
    "build_ops",
    "execute_plan",

    # Safety checks
    "check_writable",
    "check_path_length",
    "check_rename_op",

    # Logging
    "AuditLog",
]
