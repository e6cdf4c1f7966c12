from __future__ import annotations

import logging
from pathlib import Path

import pytest

from superclaude_lite.constants import EXPECTED_CORE_FILES, LAYOUT
from superclaude_lite.lib import git


def make_framework_repo(root: Path) -> Path:
    """Lay out a minimal framework checkout the way the real repository looks."""
    core = root / LAYOUT.core_source
    commands = root / LAYOUT.commands_source
    core.mkdir(parents=True)
    commands.mkdir(parents=True)
    for name in EXPECTED_CORE_FILES:
        (core / name).write_text(f"# {name}\n", encoding="utf-8")
    (core / "notes.txt").write_text("not markdown\n", encoding="utf-8")
    (commands / "build.md").write_text("# build\n", encoding="utf-8")
    (commands / "nested").mkdir()
    (commands / "nested" / "test.md").write_text("# test\n", encoding="utf-8")
    return root


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Replace git with a local fake so no network or git binary is needed."""
    clones: list[str] = []
    counter = {"n": 0}

    def make_temp_clone_dir() -> str:
        counter["n"] += 1
        d = tmp_path / f"clone-{counter['n']}"
        d.mkdir()
        return str(d)

    def clone_repository(dest: str, **_: object) -> None:
        make_framework_repo(Path(dest))
        clones.append(dest)

    monkeypatch.setattr(git, "validate_git_installed", lambda: None)
    monkeypatch.setattr(git, "make_temp_clone_dir", make_temp_clone_dir)
    monkeypatch.setattr(git, "clone_repository", clone_repository)
    return clones


@pytest.fixture
def target(tmp_path: Path) -> Path:
    d = tmp_path / "project"
    d.mkdir()
    return d


@pytest.fixture(autouse=True)
def reset_root_logging():
    """Drop handlers configure_logging attached so none outlive the test's captured streams."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in root.handlers[:]:
        # pytest's own capture handlers are subclasses; leave them alone.
        if h not in handlers and type(h) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_superclaude_configured", "_superclaude_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
