"""
models_fs.py - Core Data Structure Definitions

Contains:
- NamingMode: Default pattern cascade or a single custom pattern
- NamingEntry: One planned episode rename
- NamingPlan: Ordered batch plan with diagnostics and collisions
- RenameOptions: Run configuration
- FileItem / RenameOp: Scanned file and executable operation
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Tuple
from enum import Enum
import platform


MAX_FILES = 1000                    # Maximum candidates accepted in one batch
MAX_PATTERN_LENGTH = 256            # Maximum custom pattern length
DEFAULT_LOG_FILE = "renamed_log.txt"
SPECIALS_DIR = "Specials"
VIDEO_EXTENSIONS = {".mp4", ".mkv", ".avi"}


class DiagnosticKind(Enum):
    """Diagnostic kind enumeration"""
    NOT_FOUND = "not_found"                  # No episode number, file skipped
    INVALID_NAME = "invalid_name"            # Malformed input or destination name
    CONFIG_ERROR = "config_error"            # Bad pattern or show name (fatal)
    CAPACITY_EXCEEDED = "capacity_exceeded"  # Too many candidates (fatal)
    COLLISION = "collision"                  # Several files share a destination


FATAL_KINDS = {DiagnosticKind.CONFIG_ERROR, DiagnosticKind.CAPACITY_EXCEEDED}


@dataclass(frozen=True)
class Diagnostic:
    """Planning diagnostic"""
    kind: DiagnosticKind
    message: str
    filename: str = ""

    @property
    def is_fatal(self) -> bool:
        return self.kind in FATAL_KINDS


@dataclass(frozen=True)
class NamingMode:
    """Episode detection mode (pattern=None selects the built-in cascade)"""
    pattern: Optional[str] = None

    @property
    def is_custom(self) -> bool:
        return self.pattern is not None

    def describe(self) -> str:
        if self.is_custom:
            return f"custom pattern '{self.pattern}'"
        return "default patterns"


@dataclass(frozen=True)
class NamingEntry:
    """Single planned episode rename"""
    original_name: str              # Source filename
    new_name: str                   # Destination filename
    episode_number: int             # Extracted episode number (never 0)
    is_special: bool                # Special episode flag

    @property
    def sort_key(self) -> Tuple[bool, int]:
        return self.is_special, self.episode_number

    @property
    def is_same(self) -> bool:
        """Whether the file already carries its destination name"""
        return self.original_name == self.new_name


@dataclass(frozen=True)
class Collision:
    """Destination name claimed by more than one source file"""
    new_name: str
    sources: Tuple[str, ...]


@dataclass
class RenameOptions:
    """Rename options configuration"""
    force_mode: bool = False        # Accept all file types, not just video files
    keep_originals: bool = False    # Copy instead of rename
    dry_run: bool = False           # Preview only, do not actually execute
    output_path: Optional[Path] = None  # Destination folder (None = source folder)

    # Audit log
    use_log: bool = False
    log_file: Path = field(default_factory=lambda: Path(DEFAULT_LOG_FILE))

    # Episode detection
    custom_pattern: Optional[str] = None

    # Scanning and planning
    include_hidden: bool = False
    case_insensitive_detect: bool = field(default_factory=lambda: platform.system() in ("Windows", "Darwin"))
    max_files: int = MAX_FILES

    @property
    def naming_mode(self) -> NamingMode:
        return NamingMode(pattern=self.custom_pattern)


@dataclass
class NamingPlan:
    """Ordered batch naming plan"""
    show_name: str = ""
    mode: NamingMode = field(default_factory=NamingMode)
    entries: List[NamingEntry] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    collisions: List[Collision] = field(default_factory=list)

    @property
    def errors(self) -> List[Diagnostic]:
        """Fatal diagnostics"""
        return [d for d in self.diagnostics if d.is_fatal]

    @property
    def warnings(self) -> List[Diagnostic]:
        """Non-fatal diagnostics"""
        return [d for d in self.diagnostics if not d.is_fatal]

    @property
    def skipped(self) -> List[Diagnostic]:
        """Files left out of the plan"""
        return [d for d in self.diagnostics
                if d.kind in (DiagnosticKind.NOT_FOUND, DiagnosticKind.INVALID_NAME)]

    @property
    def is_aborted(self) -> bool:
        return bool(self.errors)

    @property
    def has_collisions(self) -> bool:
        return bool(self.collisions)

    @property
    def has_specials(self) -> bool:
        return any(e.is_special for e in self.entries)

    @property
    def special_count(self) -> int:
        return sum(1 for e in self.entries if e.is_special)

    @property
    def regular_count(self) -> int:
        return len(self.entries) - self.special_count

    @property
    def total_count(self) -> int:
        return len(self.entries)

    def add_diagnostic(self, kind: DiagnosticKind, message: str, filename: str = "") -> None:
        """Add diagnostic"""
        self.diagnostics.append(Diagnostic(kind=kind, message=message, filename=filename))


@dataclass
class FileItem:
    """File information data class"""
    path: Path                      # Full path
    name: str                       # Filename (with suffix)
    size: int                       # File size (bytes)

    @classmethod
    def from_path(cls, p: Path) -> "FileItem":
        """Create FileItem from Path object"""
        return cls(path=p, name=p.name, size=p.stat().st_size)


@dataclass
class RenameOp:
    """Single rename or copy operation"""
    src: Path                       # Source path
    dst: Path                       # Destination path
    action: str = "RENAME"          # RENAME or COPY
    is_special: bool = False

    @property
    def is_same(self) -> bool:
        """Whether source and destination are the same"""
        return self.src == self.dst


def normalize_for_comparison(name: str, case_insensitive: bool) -> str:
    """Normalize filename for comparison"""
    if case_insensitive:
        return name.casefold()
    return name
