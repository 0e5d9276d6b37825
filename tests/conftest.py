"""Shared fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def make_files(tmp_path):
    """Create files (content = their own name) and return the folder."""

    def _make(names, folder: Path = None) -> Path:
        folder = folder or tmp_path / "source"
        folder.mkdir(parents=True, exist_ok=True)
        for name in names:
            (folder / name).write_text(name, encoding="utf-8")
        return folder

    return _make
