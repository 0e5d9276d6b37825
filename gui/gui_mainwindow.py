"""
gui_mainwindow.py - GUI Main Window

Single form: show name, folders, detection options, plan preview and execution
"""

from pathlib import Path
from typing import Optional, List

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QLineEdit, QPushButton, QCheckBox,
    QTableWidget, QTableWidgetItem, QTextEdit, QProgressBar,
    QFileDialog, QMessageBox, QHeaderView, QGroupBox
)
from PySide6.QtCore import Slot
from PySide6.QtGui import QColor

from core import (
    NamingPlan, RenameResult, RenameOptions, SPECIALS_DIR, DEFAULT_LOG_FILE
)
from .gui_workers import PlanWorker, RenameWorker


class RenamePanel(QWidget):
    """Episode rename panel"""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.plan: Optional[NamingPlan] = None
        self.options: Optional[RenameOptions] = None
        self.source_dir: Optional[Path] = None
        self.dest_dir: Optional[Path] = None
        self.plan_worker: Optional[PlanWorker] = None
        self.rename_worker: Optional[RenameWorker] = None

        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)

        # Show and folder settings
        source_group = QGroupBox("Show Settings")
        source_layout = QGridLayout(source_group)

        source_layout.addWidget(QLabel("Show name:"), 0, 0)
        self.show_edit = QLineEdit()
        self.show_edit.setPlaceholderText("e.g., My Show")
        source_layout.addWidget(self.show_edit, 0, 1, 1, 2)

        source_layout.addWidget(QLabel("Source folder:"), 1, 0)
        self.source_edit = QLineEdit()
        self.source_edit.setPlaceholderText("Folder with episode files...")
        source_layout.addWidget(self.source_edit, 1, 1)
        self.source_btn = QPushButton("Browse...")
        self.source_btn.clicked.connect(lambda: self._browse_directory(self.source_edit))
        source_layout.addWidget(self.source_btn, 1, 2)

        source_layout.addWidget(QLabel("Destination:"), 2, 0)
        self.dest_edit = QLineEdit()
        self.dest_edit.setPlaceholderText("Leave empty to rename in the source folder")
        source_layout.addWidget(self.dest_edit, 2, 1)
        self.dest_btn = QPushButton("Browse...")
        self.dest_btn.clicked.connect(lambda: self._browse_directory(self.dest_edit))
        source_layout.addWidget(self.dest_btn, 2, 2)

        layout.addWidget(source_group)

        # Detection and execution options
        options_group = QGroupBox("Options")
        options_layout = QGridLayout(options_group)

        options_layout.addWidget(QLabel("Custom pattern:"), 0, 0)
        self.pattern_edit = QLineEdit()
        self.pattern_edit.setPlaceholderText("Optional regex, e.g. S([0-9]+)E([0-9]+)")
        options_layout.addWidget(self.pattern_edit, 0, 1)

        checks_layout = QHBoxLayout()
        self.force_check = QCheckBox("All File Types")
        self.keep_check = QCheckBox("Keep Originals (copy)")
        self.dry_run_check = QCheckBox("Dry Run")
        self.log_check = QCheckBox(f"Write {DEFAULT_LOG_FILE}")
        for check in (self.force_check, self.keep_check, self.dry_run_check, self.log_check):
            checks_layout.addWidget(check)
        checks_layout.addStretch()
        options_layout.addLayout(checks_layout, 1, 0, 1, 2)

        self.preview_btn = QPushButton("Preview")
        self.preview_btn.clicked.connect(self._do_preview)
        options_layout.addWidget(self.preview_btn, 2, 0, 1, 2)

        layout.addWidget(options_group)

        # Plan table
        self.table = QTableWidget()
        self.table.setColumnCount(5)
        self.table.setHorizontalHeaderLabels(["Original Name", "New Name", "Episode", "Type", "Status"])
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        for column in (2, 3, 4):
            self.table.horizontalHeader().setSectionResizeMode(column, QHeaderView.ResizeMode.ResizeToContents)
        self.table.setSelectionBehavior(QTableWidget.SelectionBehavior.SelectRows)
        layout.addWidget(self.table, 1)

        # Diagnostics
        self.diagnostics_view = QTextEdit()
        self.diagnostics_view.setReadOnly(True)
        self.diagnostics_view.setMaximumHeight(110)
        self.diagnostics_view.setPlaceholderText("Skipped files and warnings appear here")
        layout.addWidget(self.diagnostics_view)

        # Progress and execution
        bottom_layout = QHBoxLayout()

        self.progress_bar = QProgressBar()
        self.progress_bar.setVisible(False)
        bottom_layout.addWidget(self.progress_bar, 1)

        self.execute_btn = QPushButton("Execute Rename")
        self.execute_btn.clicked.connect(self._do_execute)
        self.execute_btn.setEnabled(False)
        self.execute_btn.setStyleSheet("QPushButton { background-color: #4CAF50; color: white; font-weight: bold; padding: 8px 16px; }")
        bottom_layout.addWidget(self.execute_btn)

        layout.addLayout(bottom_layout)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

    def _browse_directory(self, target: QLineEdit):
        """Browse and select directory"""
        directory = QFileDialog.getExistingDirectory(self, "Select Directory")
        if directory:
            target.setText(directory)

    def _collect_options(self) -> RenameOptions:
        pattern = self.pattern_edit.text().strip()
        dest = self.dest_edit.text().strip()
        return RenameOptions(
            force_mode=self.force_check.isChecked(),
            keep_originals=self.keep_check.isChecked(),
            dry_run=self.dry_run_check.isChecked(),
            output_path=Path(dest).expanduser() if dest else None,
            use_log=self.log_check.isChecked(),
            custom_pattern=pattern or None,
        )

    def _do_preview(self):
        """Scan and generate preview"""
        show_name = self.show_edit.text().strip()
        if not show_name:
            QMessageBox.warning(self, "Warning", "Show name cannot be empty")
            return

        source = self.source_edit.text().strip()
        if not source or not Path(source).expanduser().is_dir():
            QMessageBox.warning(self, "Warning", f"Directory does not exist: {source}")
            return

        self.options = self._collect_options()
        if self.options.keep_originals and self.options.output_path is None:
            QMessageBox.warning(self, "Warning", "Destination path cannot be empty when keeping originals")
            return

        self.source_dir = Path(source).expanduser().resolve()
        self.dest_dir = (self.options.output_path or self.source_dir).resolve()

        self.preview_btn.setEnabled(False)
        self.preview_btn.setText("Generating...")
        self.execute_btn.setEnabled(False)
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, 0)  # Indeterminate progress

        self.plan_worker = PlanWorker(self.source_dir, self.dest_dir, show_name, self.options)
        self.plan_worker.progress.connect(self._on_plan_progress)
        self.plan_worker.finished.connect(self._on_plan_finished)
        self.plan_worker.error.connect(self._on_plan_error)
        self.plan_worker.start()

    @Slot(str)
    def _on_plan_progress(self, msg: str):
        self.status_label.setText(msg[-80:] if len(msg) > 80 else msg)

    @Slot(object, list)
    def _on_plan_finished(self, plan: NamingPlan, problems: List[str]):
        """Plan generation complete"""
        self.plan = plan
        self.preview_btn.setEnabled(True)
        self.preview_btn.setText("Preview")
        self.progress_bar.setVisible(False)

        if plan.is_aborted:
            self.table.setRowCount(0)
            self.diagnostics_view.clear()
            QMessageBox.critical(self, "Error", "\n".join(d.message for d in plan.errors))
            self.status_label.setText("Plan aborted")
            return

        self._update_table(plan)

        lines = [d.message for d in plan.warnings] + problems
        self.diagnostics_view.setPlainText("\n".join(lines))

        if not plan.entries:
            self.status_label.setText("No suitable files found in the directory")
        elif plan.has_collisions:
            self.status_label.setText(f"{len(plan.collisions)} destination collision(s), resolve before renaming")
        elif self.options.dry_run:
            self.status_label.setText(f"DRY RUN: {plan.total_count} files planned, nothing will be modified")
        else:
            self.execute_btn.setEnabled(True)
            self.status_label.setText(
                f"Will process {plan.total_count} files "
                f"({plan.regular_count} regular, {plan.special_count} special)"
            )

    @Slot(str)
    def _on_plan_error(self, error: str):
        """Plan generation error"""
        self.preview_btn.setEnabled(True)
        self.preview_btn.setText("Preview")
        self.progress_bar.setVisible(False)
        QMessageBox.critical(self, "Error", f"Failed to generate preview: {error}")

    def _update_table(self, plan: NamingPlan):
        """Update table to display the plan"""
        colliding = {name for c in plan.collisions for name in c.sources}

        self.table.setRowCount(len(plan.entries))
        for i, entry in enumerate(plan.entries):
            new_name = f"{SPECIALS_DIR}/{entry.new_name}" if entry.is_special else entry.new_name
            self.table.setItem(i, 0, QTableWidgetItem(entry.original_name))
            self.table.setItem(i, 1, QTableWidgetItem(new_name))
            self.table.setItem(i, 2, QTableWidgetItem(f"{entry.episode_number:02d}"))
            self.table.setItem(i, 3, QTableWidgetItem("Special" if entry.is_special else "Regular"))

            if entry.original_name in colliding:
                status_item = QTableWidgetItem("Collision")
                status_item.setForeground(QColor(200, 0, 0))
            elif entry.is_same and self.dest_dir == self.source_dir:
                status_item = QTableWidgetItem("No Change")
                status_item.setForeground(QColor(150, 150, 150))
            else:
                status_item = QTableWidgetItem("Will Copy" if self.options.keep_originals else "Will Rename")
                status_item.setForeground(QColor(0, 150, 0))
            self.table.setItem(i, 4, status_item)

    def _do_execute(self):
        """Execute rename"""
        if not self.plan or not self.plan.entries:
            return

        verb = "copy" if self.options.keep_originals else "rename"
        reply = QMessageBox.question(
            self, "Confirm",
            f"Are you sure you want to {verb} {self.plan.total_count} files?",
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No
        )
        if reply != QMessageBox.StandardButton.Yes:
            return

        self.execute_btn.setEnabled(False)
        self.execute_btn.setText("Executing...")
        self.preview_btn.setEnabled(False)
        self.progress_bar.setVisible(True)
        self.progress_bar.setRange(0, self.plan.total_count * 2)

        self.rename_worker = RenameWorker(self.plan, self.source_dir, self.dest_dir, self.options)
        self.rename_worker.progress.connect(self._on_rename_progress)
        self.rename_worker.finished.connect(self._on_rename_finished)
        self.rename_worker.error.connect(self._on_rename_error)
        self.rename_worker.start()

    @Slot(int, int, str)
    def _on_rename_progress(self, current: int, total: int, msg: str):
        if total:
            self.progress_bar.setRange(0, total)
            self.progress_bar.setValue(current)
        self.status_label.setText(msg)

    @Slot(object)
    def _on_rename_finished(self, result: RenameResult):
        """Execution complete"""
        self.execute_btn.setText("Execute Rename")
        self.preview_btn.setEnabled(True)
        self.progress_bar.setVisible(False)

        msg = (
            f"Operation complete!\n\n"
            f"Success: {result.success_count}\nFailed: {result.failed_count}\n"
            f"Regular episodes: {result.regular_count}\nSpecial episodes: {result.special_count}"
        )
        if result.failed_count > 0:
            msg += "\n\nFailure Details:\n"
            for op, error in result.failed[:5]:
                msg += f"  {op.src.name}: {error}\n"
            if len(result.failed) > 5:
                msg += f"  ... and {len(result.failed) - 5} more failures"

        QMessageBox.information(self, "Complete", msg)

        self.plan = None
        self.table.setRowCount(0)
        self.status_label.setText("Complete")

    @Slot(str)
    def _on_rename_error(self, error: str):
        """Execution error"""
        self.execute_btn.setEnabled(True)
        self.execute_btn.setText("Execute Rename")
        self.preview_btn.setEnabled(True)
        self.progress_bar.setVisible(False)
        QMessageBox.critical(self, "Error", f"Execution failed: {error}")


class MainWindow(QMainWindow):
    """Main window"""

    def __init__(self):
        super().__init__()
        self.setWindowTitle("ReNamed - Automatic Episode Renamer")
        self.setMinimumSize(900, 650)

        self.panel = RenamePanel()
        self.setCentralWidget(self.panel)

        self.statusBar().showMessage("Ready")
