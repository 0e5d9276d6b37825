"""Tests for the GUI worker threads, run synchronously."""

import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from core.models_fs import RenameOptions  # noqa: E402
from gui.gui_workers import PlanWorker, RenameWorker  # noqa: E402


@pytest.fixture(scope="module")
def qt_app():
    return QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])


def _plan(qt_app, source, show_name, options):
    worker = PlanWorker(source, source, show_name, options)
    received = []
    worker.finished.connect(lambda plan, problems: received.append((plan, problems)))
    worker.error.connect(lambda msg: received.append(msg))
    worker.run()
    return received


def test_plan_worker(qt_app, make_files):
    source = make_files(["Show - 02.mkv", "Show - 01.mkv", "RandomName.mkv"])

    received = _plan(qt_app, source, "X", RenameOptions(case_insensitive_detect=False))

    plan, problems = received[0]
    assert [e.new_name for e in plan.entries] == ["X - 01.mkv", "X - 02.mkv"]
    assert len(plan.skipped) == 1
    assert problems == []


def test_plan_worker_missing_folder(qt_app, tmp_path):
    received = _plan(qt_app, tmp_path / "missing", "X", RenameOptions())

    assert len(received) == 1
    assert "Directory does not exist" in received[0]


def test_rename_worker(qt_app, make_files, tmp_path):
    source = make_files(["Show - 01.mkv", "Show SP1.mkv"])
    options = RenameOptions(case_insensitive_detect=False, use_log=True, log_file=tmp_path / "log.txt")
    plan, _ = _plan(qt_app, source, "X", options)[0]

    worker = RenameWorker(plan, source, source, options)
    results = []
    worker.finished.connect(results.append)
    worker.run()

    assert results[0].success_count == 2
    assert (source / "Specials" / "X - 01 - Special.mkv").exists()
    assert "[SUCCESS]" in (tmp_path / "log.txt").read_text(encoding="utf-8")


def test_rename_worker_rejects_collisions(qt_app, make_files):
    source = make_files(["Show - 01.mkv", "Show Episode 1.mkv"])
    options = RenameOptions(case_insensitive_detect=False)
    plan, _ = _plan(qt_app, source, "X", options)[0]

    worker = RenameWorker(plan, source, source, options)
    errors = []
    worker.error.connect(errors.append)
    worker.run()

    assert errors and "collision" in errors[0]
