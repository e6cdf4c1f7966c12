from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .constants import BACKUP_DIR_PREFIX, LAYOUT
from .errors import BackupNotFoundError
from .install_config import InstallConfig
from .lib.files import copy_path, path_exists

logger = logging.getLogger(__name__)


@dataclass
class ExistingFiles:
    """Which artifacts were present in the target before installation."""

    claude_md: bool = False
    mcp_config: bool = False
    superclaude_dir: bool = False
    claude_dir: bool = False


@dataclass
class BackupManager:
    backup_dir: str
    # original path -> backup path
    files: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_backup_dir(cls, backup_dir: str, target_dir: str) -> "BackupManager":
        """Rebuild the map from a backup directory written by a previous run."""
        root = Path(backup_dir)
        if not root.is_dir():
            raise BackupNotFoundError(backup_dir)

        files = {str(Path(target_dir) / entry.name): str(entry) for entry in sorted(root.iterdir())}
        return cls(backup_dir=str(root), files=files)

    def backup_path(self, path: str) -> Optional[str]:
        """Copy ``path`` into the backup dir. Missing paths are skipped (returns None)."""
        if not path_exists(path):
            return None

        Path(self.backup_dir).mkdir(parents=True, exist_ok=True)
        dest = str(Path(self.backup_dir) / Path(path).name)
        try:
            copy_path(path, dest)
        except OSError as e:
            raise OSError(f"failed to backup {path}: {e}") from e

        self.files[path] = dest
        logger.info("Backed up %s -> %s", path, dest)
        return dest


@dataclass
class ExecutionContext:
    """Mutable state threaded through every step of one run."""

    target_dir: str
    config: InstallConfig
    backup_dir: Optional[str] = None
    backup_manager: Optional[BackupManager] = None
    temp_dir: Optional[str] = None
    repo_path: Optional[str] = None
    completed: List[str] = field(default_factory=list)
    existing_files: ExistingFiles = field(default_factory=ExistingFiles)
    skip_claude_dir: bool = False
    dry_run: bool = False

    def target(self, *parts: str) -> Path:
        return Path(self.target_dir).joinpath(*parts)

    def scan_existing_files(self) -> ExistingFiles:
        self.existing_files = ExistingFiles(
            claude_md=path_exists(self.target(LAYOUT.claude_file)),
            mcp_config=path_exists(self.target(LAYOUT.mcp_config_file)),
            superclaude_dir=path_exists(self.target(LAYOUT.superclaude_dir)),
            claude_dir=path_exists(self.target(LAYOUT.claude_dir)),
        )
        return self.existing_files


def default_backup_dir(target_dir: str, now: Optional[float] = None) -> str:
    stamp = time.strftime("%Y%m%d-%H%M%S", time.localtime(now))
    return str(Path(target_dir) / f"{BACKUP_DIR_PREFIX}-{stamp}")


def new_execution_context(target_dir: str, config: InstallConfig) -> ExecutionContext:
    backup_dir: Optional[str] = None
    backup_manager: Optional[BackupManager] = None

    if not config.no_backup:
        backup_dir = config.backup_dir or default_backup_dir(target_dir)
        backup_manager = BackupManager(backup_dir=backup_dir)

    return ExecutionContext(
        target_dir=target_dir,
        config=config,
        backup_dir=backup_dir,
        backup_manager=backup_manager,
        dry_run=config.dry_run,
    )
