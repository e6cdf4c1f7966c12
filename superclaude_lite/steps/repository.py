from __future__ import annotations

import logging

from ..context import ExecutionContext
from ..lib import git

logger = logging.getLogger(__name__)


class CloneRepositoryStep:
    name = "CloneRepository"

    def execute(self, ctx: ExecutionContext) -> None:
        if ctx.dry_run:
            logger.info("[DRY RUN] Would clone repository to temp directory")
            return

        temp_dir = git.make_temp_clone_dir()
        ctx.temp_dir = temp_dir
        ctx.repo_path = temp_dir
        git.clone_repository(temp_dir)

    def validate(self, ctx: ExecutionContext) -> None:
        if ctx.dry_run:
            return
        if not ctx.repo_path:
            raise RuntimeError("repository path not set after cloning")

        core, commands = git.source_paths(ctx.repo_path)
        if not core.is_dir():
            raise FileNotFoundError(f"core source directory not found: {core}")
        if not commands.is_dir():
            raise FileNotFoundError(f"commands source directory not found: {commands}")


class CleanupTempFilesStep:
    name = "CleanupTempFiles"

    def execute(self, ctx: ExecutionContext) -> None:
        if not ctx.temp_dir:
            return
        if ctx.dry_run:
            logger.info("[DRY RUN] Would cleanup temp directory: %s", ctx.temp_dir)
            return

        git.cleanup_temp_dir(ctx.temp_dir)
        ctx.temp_dir = None
