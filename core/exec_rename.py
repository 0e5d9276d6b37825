"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Map plan entries to rename/copy operations (specials into Specials/)
- Two-phase renaming (first to a temporary name, then to the final name)
- Copying when originals are kept
- Never overwrite existing files
- Audit logging and dry_run support
"""

from pathlib import Path
from typing import List, Tuple, Optional, Callable
from dataclasses import dataclass, field
import os
import shutil
import uuid

from .models_fs import NamingPlan, RenameOp, SPECIALS_DIR
from .plan_rename import target_directory
from .safety_checks import check_rename_op, is_same_filesystem
from .audit_log import AuditLog


@dataclass
class RenameResult:
    """Rename execution result"""
    success: List[RenameOp] = field(default_factory=list)
    failed: List[Tuple[RenameOp, str]] = field(default_factory=list)  # (op, error_msg)
    skipped: List[RenameOp] = field(default_factory=list)
    specials_created: bool = False

    @property
    def success_count(self) -> int:
        return len(self.success)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def special_count(self) -> int:
        return sum(1 for op in self.success if op.is_special)

    @property
    def regular_count(self) -> int:
        return self.success_count - self.special_count

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            f"Execution Result:",
            f"  - Success: {self.success_count}",
            f"  - Failed: {self.failed_count}",
            f"  - Skipped: {self.skipped_count}",
        ]
        if self.failed:
            lines.append("Failure Details:")
            for op, error in self.failed[:10]:  # Show at most 10
                lines.append(f"  - {op.src.name} -> {op.dst.name}: {error}")
            if len(self.failed) > 10:
                lines.append(f"  ... and {len(self.failed) - 10} more failures")
        return "\n".join(lines)


def _generate_temp_name(original: Path) -> Path:
    """Generate temporary filename"""
    unique_id = uuid.uuid4().hex[:8]
    temp_name = f".__tmp_rename__{unique_id}__{original.name}"
    return original.parent / temp_name


def build_ops(
    plan: NamingPlan,
    source_dir: Path,
    dest_dir: Path,
    keep_originals: bool = False
) -> List[RenameOp]:
    """
    Map plan entries to operations, in plan order

    Args:
        plan: Naming plan
        source_dir: Folder holding the original files
        dest_dir: Destination folder
        keep_originals: Copy instead of rename

    Returns:
        Operation list
    """
    source_dir = Path(source_dir)
    dest_dir = Path(dest_dir)
    action = "COPY" if keep_originals else "RENAME"
    return [
        RenameOp(
            src=source_dir / entry.original_name,
            dst=target_directory(entry, dest_dir) / entry.new_name,
            action=action,
            is_special=entry.is_special,
        )
        for entry in plan.entries
    ]


def _move(src: Path, dst: Path) -> None:
    if is_same_filesystem(src, dst):
        os.rename(src, dst)
    else:
        shutil.move(str(src), str(dst))


def _prepare_directories(plan: NamingPlan, dest_dir: Path, result: RenameResult, audit: AuditLog) -> None:
    dest_dir.mkdir(parents=True, exist_ok=True)
    if plan.has_specials:
        specials = dest_dir / SPECIALS_DIR
        if not specials.is_dir():
            specials.mkdir()
            result.specials_created = True
            audit.info(f"Created '{SPECIALS_DIR}' directory in '{dest_dir}'.")


def _execute_copies(
    ops: List[RenameOp],
    result: RenameResult,
    audit: AuditLog,
    progress_callback: Optional[Callable[[int, int, str], None]]
) -> None:
    total = len(ops)
    for i, op in enumerate(ops):
        if progress_callback:
            progress_callback(i + 1, total, f"[Copy] {op.src.name} -> {op.dst.name}")

        valid, error = check_rename_op(op.src, op.dst, keep_source=True)
        if not valid:
            result.failed.append((op, error))
            audit.operation(op.action, op.src, op.dst, False)
            continue

        try:
            shutil.copy2(op.src, op.dst)
        except OSError as e:
            result.failed.append((op, f"Copy failed: {e}"))
            audit.operation(op.action, op.src, op.dst, False)
            continue

        result.success.append(op)
        audit.operation(op.action, op.src, op.dst, True)


def _execute_renames(
    ops: List[RenameOp],
    result: RenameResult,
    audit: AuditLog,
    progress_callback: Optional[Callable[[int, int, str], None]]
) -> None:
    total = len(ops)

    # Phase 1: Rename all to temporary names
    temp_mapping: List[Tuple[RenameOp, Path]] = []  # (original_op, temp_path)

    for i, op in enumerate(ops):
        if progress_callback:
            progress_callback(i + 1, total * 2, f"[Phase 1] {op.src.name} -> temp name")

        if not op.src.is_file():
            result.failed.append((op, "Source file does not exist"))
            audit.operation(op.action, op.src, op.dst, False)
            continue

        # Even case-only changes go through a temporary name
        temp_path = _generate_temp_name(op.src)

        try:
            os.rename(op.src, temp_path)
            temp_mapping.append((op, temp_path))
        except OSError as e:
            result.failed.append((op, f"Phase 1 failed: {e}"))
            audit.operation(op.action, op.src, op.dst, False)

    # Phase 2: Rename from temporary names to final names
    for i, (op, temp_path) in enumerate(temp_mapping):
        if progress_callback:
            progress_callback(total + i + 1, total * 2, f"[Phase 2] temp name -> {op.dst.name}")

        valid, error = check_rename_op(temp_path, op.dst)
        if valid:
            try:
                _move(temp_path, op.dst)
            except OSError as e:
                error = str(e)
            else:
                result.success.append(op)
                audit.operation(op.action, op.src, op.dst, True)
                continue

        # Try to restore
        try:
            os.rename(temp_path, op.src)
            result.failed.append((op, f"Phase 2 failed (restored): {error}"))
        except OSError as e2:
            result.failed.append((op, f"Phase 2 failed (restore also failed): {error}, restore error: {e2}"))
        audit.operation(op.action, op.src, op.dst, False)


def execute_plan(
    plan: NamingPlan,
    source_dir: Path,
    dest_dir: Optional[Path] = None,
    keep_originals: bool = False,
    dry_run: bool = False,
    audit: Optional[AuditLog] = None,
    progress_callback: Optional[Callable[[int, int, str], None]] = None
) -> RenameResult:
    """
    Execute naming plan

    Args:
        plan: Naming plan
        source_dir: Folder holding the original files
        dest_dir: Destination folder (None = source folder)
        keep_originals: Copy instead of rename
        dry_run: Whether to preview only
        audit: Audit log (None disables logging)
        progress_callback: Progress callback (current, total, message)

    Returns:
        Execution result
    """
    result = RenameResult()
    if audit is None:
        audit = AuditLog(Path(os.devnull))

    if plan.is_aborted:
        raise ValueError(f"Cannot execute an aborted plan: {plan.errors[0].message}")
    if plan.has_collisions:
        raise ValueError(f"Cannot execute a plan with {len(plan.collisions)} destination collision(s)")

    source_dir = Path(source_dir).resolve()
    dest_dir = Path(dest_dir).resolve() if dest_dir else source_dir

    ops = []
    for op in build_ops(plan, source_dir, dest_dir, keep_originals):
        if op.is_same:
            result.skipped.append(op)
        else:
            ops.append(op)

    if not ops:
        return result

    if dry_run:
        # Preview mode only
        for i, op in enumerate(ops):
            if progress_callback:
                progress_callback(i + 1, len(ops), f"[Preview] {op.src.name} -> {op.dst.name}")
            result.success.append(op)
        return result

    _prepare_directories(plan, dest_dir, result, audit)

    if keep_originals:
        _execute_copies(ops, result, audit, progress_callback)
    else:
        _execute_renames(ops, result, audit, progress_callback)

    return result
