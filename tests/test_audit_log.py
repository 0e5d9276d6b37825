"""Tests for the append-only audit log and pre-operation safety checks."""

import re
from pathlib import Path

from core.audit_log import AuditLog
from core.safety_checks import check_rename_op, check_path_length, is_same_filesystem


class TestAuditLog:
    """Tests for AuditLog."""

    def test_operation_line_format(self, tmp_path):
        path = tmp_path / "log.txt"
        with AuditLog(path) as audit:
            audit.open()
            audit.operation("COPY", Path("a.mkv"), Path("X - 01.mkv"), False)
            audit.operation("RENAME", Path("b.mkv"), Path("X - 02.mkv"), True)

        lines = path.read_text(encoding="utf-8").splitlines()
        assert re.fullmatch(r"\[\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\] COPY: a\.mkv -> X - 01\.mkv \[FAILED\]", lines[0])
        assert lines[1].endswith("] RENAME: b.mkv -> X - 02.mkv [SUCCESS]")

    def test_session_markers(self, tmp_path):
        path = tmp_path / "log.txt"
        with AuditLog(path) as audit:
            audit.open()
            audit.session_start(dry_run=True)
            audit.warning("careful")
            audit.error("broken")
            audit.session_end()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == ""
        assert lines[1].startswith("----- ReNamed Session Started at ")
        assert lines[2] == "[INFO] Running in DRY RUN mode - no actual changes made"
        assert lines[3:] == ["[WARNING] careful", "[ERROR] broken", "----- ReNamed Session Ended -----", ""]

    def test_appends(self, tmp_path):
        path = tmp_path / "log.txt"
        path.write_text("existing\n", encoding="utf-8")

        with AuditLog(path) as audit:
            audit.open()
            audit.info("more")

        assert path.read_text(encoding="utf-8") == "existing\n[INFO] more\n"

    def test_unopened_log_writes_nothing(self, tmp_path):
        path = tmp_path / "log.txt"
        audit = AuditLog(path)

        audit.info("ignored")
        audit.operation("RENAME", Path("a"), Path("b"), True)

        assert not audit.is_open
        assert not path.exists()

    def test_open_failure(self, tmp_path):
        audit = AuditLog(tmp_path)

        assert audit.open() is False
        assert not audit.is_open
        assert audit.open_error


class TestSafetyChecks:
    """Tests for check_rename_op() and friends."""

    def test_safe_rename(self, tmp_path):
        src = tmp_path / "a.mkv"
        src.write_text("a", encoding="utf-8")

        assert check_rename_op(src, tmp_path / "X - 01.mkv") == (True, None)

    def test_missing_source(self, tmp_path):
        valid, error = check_rename_op(tmp_path / "a.mkv", tmp_path / "b.mkv")

        assert not valid
        assert error.startswith("Source file does not exist")

    def test_source_is_directory(self, tmp_path):
        (tmp_path / "dir.mkv").mkdir()

        valid, error = check_rename_op(tmp_path / "dir.mkv", tmp_path / "b.mkv")

        assert not valid
        assert error.startswith("Source path is not a file")

    def test_destination_exists(self, tmp_path):
        src = tmp_path / "a.mkv"
        dst = tmp_path / "b.mkv"
        src.write_text("a", encoding="utf-8")
        dst.write_text("b", encoding="utf-8")

        valid, error = check_rename_op(src, dst, keep_source=True)

        assert not valid
        assert error == f"Destination already exists: {dst}"

    def test_invalid_destination_name(self, tmp_path):
        src = tmp_path / "a.mkv"
        src.write_text("a", encoding="utf-8")

        valid, error = check_rename_op(src, tmp_path / "CON.mkv")

        assert not valid
        assert "reserved" in error

    def test_missing_destination_parent(self, tmp_path):
        src = tmp_path / "a.mkv"
        src.write_text("a", encoding="utf-8")

        valid, error = check_rename_op(src, tmp_path / "missing" / "b.mkv")

        assert not valid
        assert error.startswith("Parent directory does not exist")

    def test_path_length(self):
        assert check_path_length(Path("x" * 10), max_length=10) == (True, None)
        assert check_path_length(Path("x" * 11), max_length=10)[0] is False

    def test_same_filesystem(self, tmp_path):
        assert is_same_filesystem(tmp_path / "a", tmp_path / "b")
