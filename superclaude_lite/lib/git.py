from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Tuple

from ..constants import FIXED_COMMIT, LAYOUT, REPO_URL
from .command import run_cmd

logger = logging.getLogger(__name__)


def validate_git_installed() -> None:
    if shutil.which("git") is None:
        raise RuntimeError("git is not installed or not in PATH")


def make_temp_clone_dir() -> str:
    return tempfile.mkdtemp(prefix="superclaude-clone-")


def clone_repository(dest: str, *, url: str = REPO_URL, commit: str = FIXED_COMMIT) -> None:
    """Clone the framework repository into ``dest`` and pin it to ``commit``."""
    run_cmd(["git", "clone", "--quiet", url, dest])
    run_cmd(["git", "checkout", "--quiet", commit], cwd=dest)
    logger.info("Cloned %s at %s into %s", url, commit, dest)


def cleanup_temp_dir(path: str | None) -> None:
    if not path:
        return
    shutil.rmtree(path)
    logger.info("Removed temp directory %s", path)


def source_paths(repo_dir: str) -> Tuple[Path, Path]:
    """(core, commands) source directories inside a cloned repository."""
    root = Path(repo_dir)
    return root / LAYOUT.core_source, root / LAYOUT.commands_source
