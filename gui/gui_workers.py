"""
gui_workers.py - GUI Worker Threads

Runs scanning/planning and execution off the UI thread
"""

from pathlib import Path
from typing import Optional

from PySide6.QtCore import QThread, Signal, QObject

from core import (
    scan_directory, plan_episode_rename, validate_plan, execute_plan,
    AuditLog, RenameOptions, NamingPlan
)


class PlanWorker(QThread):
    """Scan source folder and build the naming plan"""

    # Signals
    progress = Signal(str)              # Progress message
    finished = Signal(object, list)     # NamingPlan, filesystem problems
    error = Signal(str)                 # Error message

    def __init__(
        self,
        source_dir: Path,
        dest_dir: Path,
        show_name: str,
        options: RenameOptions,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.source_dir = source_dir
        self.dest_dir = dest_dir
        self.show_name = show_name
        self.options = options

    def run(self):
        try:
            self.progress.emit(f"Scanning {self.source_dir} ...")
            files = scan_directory(
                self.source_dir,
                force_mode=self.options.force_mode,
                include_hidden=self.options.include_hidden,
                progress_callback=self.progress.emit,
            )

            self.progress.emit("Generating rename plan...")
            plan = plan_episode_rename(
                [f.name for f in files],
                self.show_name,
                self.options.naming_mode,
                self.options,
            )

            problems = []
            if plan.entries and not plan.is_aborted:
                problems = validate_plan(
                    plan, self.source_dir, self.dest_dir, self.options.case_insensitive_detect
                )

            self.finished.emit(plan, problems)
        except (ValueError, OSError) as e:
            self.error.emit(str(e))


class RenameWorker(QThread):
    """Rename execution worker thread"""

    # Signals
    progress = Signal(int, int, str)    # current, total, message
    finished = Signal(object)           # RenameResult
    error = Signal(str)                 # Error message

    def __init__(
        self,
        plan: NamingPlan,
        source_dir: Path,
        dest_dir: Path,
        options: RenameOptions,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self.plan = plan
        self.source_dir = source_dir
        self.dest_dir = dest_dir
        self.options = options

    def run(self):
        audit = AuditLog(self.options.log_file)
        if self.options.use_log and not audit.open():
            self.progress.emit(0, 0, f"Could not open log file: {audit.open_error}")

        with audit:
            audit.session_start(self.options.dry_run)
            audit.info(f"Show name: '{self.plan.show_name}'")
            audit.info(f"Source folder: '{self.source_dir}'")
            audit.info(f"Destination folder: '{self.dest_dir}'")
            try:
                def progress_callback(current: int, total: int, msg: str):
                    self.progress.emit(current, total, msg)

                result = execute_plan(
                    self.plan,
                    self.source_dir,
                    self.dest_dir,
                    keep_originals=self.options.keep_originals,
                    dry_run=self.options.dry_run,
                    audit=audit,
                    progress_callback=progress_callback,
                )
                audit.info(f"Operation complete! {result.success_count} of {self.plan.total_count} files processed.")
                self.finished.emit(result)
            except (ValueError, OSError) as e:
                audit.error(str(e))
                self.error.emit(str(e))
            finally:
                audit.session_end()
