from __future__ import annotations

import logging
from pathlib import Path

from ..constants import LAYOUT
from ..context import ExecutionContext
from ..lib import git
from ..lib.files import check_write_permissions

logger = logging.getLogger(__name__)


class CheckPrerequisitesStep:
    name = "CheckPrerequisites"

    def execute(self, ctx: ExecutionContext) -> None:
        git.validate_git_installed()
        check_write_permissions(ctx.target_dir)


class ScanExistingFilesStep:
    name = "ScanExistingFiles"

    def execute(self, ctx: ExecutionContext) -> None:
        found = ctx.scan_existing_files()
        logger.info(
            "Existing files: CLAUDE.md=%s .mcp.json=%s .superclaude=%s .claude=%s",
            found.claude_md,
            found.mcp_config,
            found.superclaude_dir,
            found.claude_dir,
        )


class CreateBackupsStep:
    name = "CreateBackups"

    def execute(self, ctx: ExecutionContext) -> None:
        if ctx.config.no_backup or ctx.backup_manager is None:
            logger.info("Backups disabled")
            return

        candidates = [
            ctx.target(LAYOUT.claude_file),
            ctx.target(LAYOUT.mcp_config_file),
            ctx.target(LAYOUT.superclaude_dir),
            ctx.target(LAYOUT.claude_dir),
        ]

        if ctx.dry_run:
            for path in candidates:
                if path.exists():
                    logger.info("[DRY RUN] Would back up %s to %s", path, ctx.backup_manager.backup_dir)
            return

        for path in candidates:
            ctx.backup_manager.backup_path(str(path))


class CheckTargetDirectoryStep:
    name = "CheckTargetDirectory"

    def execute(self, ctx: ExecutionContext) -> None:
        target = Path(ctx.target_dir)
        if target.exists() and not target.is_dir():
            raise NotADirectoryError(f"target is not a directory: {target}")

        if ctx.dry_run:
            if not target.exists():
                logger.info("[DRY RUN] Would create target directory: %s", target)
            return

        target.mkdir(mode=0o750, parents=True, exist_ok=True)
