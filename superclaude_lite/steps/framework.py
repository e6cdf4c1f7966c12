from __future__ import annotations

import logging
import os

from ..constants import EXPECTED_CORE_FILES, LAYOUT
from ..context import ExecutionContext
from ..lib import git
from ..lib.files import copy_markdown_files, path_exists

logger = logging.getLogger(__name__)


def _repo_path(ctx: ExecutionContext) -> str:
    if not ctx.repo_path:
        raise RuntimeError("repository has not been cloned")
    return ctx.repo_path


def _creates_claude_dir(ctx: ExecutionContext) -> bool:
    # A pre-existing .claude belongs to the user; we leave it alone.
    return not ctx.skip_claude_dir and not ctx.existing_files.claude_dir


class CreateDirectoryStructureStep:
    name = "CreateDirectoryStructure"

    def execute(self, ctx: ExecutionContext) -> None:
        dirs = [
            ctx.target(LAYOUT.superclaude_dir),
            ctx.target(LAYOUT.superclaude_dir, LAYOUT.commands_dir),
        ]
        if _creates_claude_dir(ctx):
            dirs += [
                ctx.target(LAYOUT.claude_dir),
                ctx.target(LAYOUT.claude_dir, "commands"),
            ]

        for d in dirs:
            if ctx.dry_run:
                logger.info("[DRY RUN] Would create directory: %s", d)
                continue
            d.mkdir(mode=0o750, parents=True, exist_ok=True)


class CopyCoreFilesStep:
    name = "CopyCoreFiles"

    def execute(self, ctx: ExecutionContext) -> None:
        if ctx.dry_run:
            logger.info("[DRY RUN] Would copy core files from %s", LAYOUT.core_source)
            return

        core, _ = git.source_paths(_repo_path(ctx))
        copy_markdown_files(core, ctx.target(LAYOUT.superclaude_dir))

    def validate(self, ctx: ExecutionContext) -> None:
        if ctx.dry_run:
            return

        core_dir = ctx.target(LAYOUT.superclaude_dir)
        for name in EXPECTED_CORE_FILES:
            if not (core_dir / name).exists():
                raise FileNotFoundError(f"core file missing: {core_dir / name}")


class CopyCommandFilesStep:
    name = "CopyCommandFiles"

    def execute(self, ctx: ExecutionContext) -> None:
        if ctx.dry_run:
            logger.info("[DRY RUN] Would copy command files from %s", LAYOUT.commands_source)
            return

        _, commands = git.source_paths(_repo_path(ctx))
        copy_markdown_files(commands, ctx.target(LAYOUT.superclaude_dir, LAYOUT.commands_dir))

    def validate(self, ctx: ExecutionContext) -> None:
        if ctx.dry_run:
            return

        commands_dir = ctx.target(LAYOUT.superclaude_dir, LAYOUT.commands_dir)
        if not commands_dir.is_dir():
            raise FileNotFoundError(f"commands directory missing: {commands_dir}")
        if not any(commands_dir.iterdir()):
            raise FileNotFoundError(f"no command files found in {commands_dir}")


class CreateCommandSymlinkStep:
    name = "CreateCommandSymlink"

    # Relative so the installation survives moving the project directory.
    link_target = os.path.join("..", "..", LAYOUT.superclaude_dir, LAYOUT.commands_dir)

    def execute(self, ctx: ExecutionContext) -> None:
        link = ctx.target(LAYOUT.claude_dir, "commands", LAYOUT.command_link)
        if ctx.dry_run:
            logger.info("[DRY RUN] Would create symlink %s -> %s", link, self.link_target)
            return

        if path_exists(link):
            if link.is_dir() and not link.is_symlink():
                raise IsADirectoryError(f"refusing to replace directory with symlink: {link}")
            link.unlink()

        link.parent.mkdir(mode=0o750, parents=True, exist_ok=True)
        os.symlink(self.link_target, link)
        logger.info("Linked %s -> %s", link, self.link_target)
