import logging
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def reset_app_logging():
    """CLI runs attach a handler bound to CliRunner's stderr; drop it between tests."""
    yield
    logging.getLogger("mdcollect").handlers.clear()


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """Creates a small mixed-language tree used across the tests."""
    proj_dir = tmp_path / "proj"
    proj_dir.mkdir()

    (proj_dir / "a.go").write_text("package a\n")
    (proj_dir / "b.md").write_text("# notes\n")
    (proj_dir / "c.txt").write_text("not selected\n")
    (proj_dir / "Makefile").write_text("all:\n")
    (proj_dir / "zz.go").write_text("package zz\n")

    (proj_dir / "sub").mkdir()
    (proj_dir / "sub" / "d.go").write_text("package sub\n")
    (proj_dir / "sub" / "deeper").mkdir()
    (proj_dir / "sub" / "deeper" / "e.go").write_text("package deeper\n")

    return proj_dir
