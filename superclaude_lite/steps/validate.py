from __future__ import annotations

import logging
import os

from ..constants import LAYOUT
from ..context import ExecutionContext

logger = logging.getLogger(__name__)


class ValidateInstallationStep:
    name = "ValidateInstallation"

    def execute(self, ctx: ExecutionContext) -> None:
        if ctx.dry_run:
            logger.info("[DRY RUN] Would validate installation files")
            return

        required = [
            ctx.target(LAYOUT.superclaude_dir, "CLAUDE.md"),
            ctx.target(LAYOUT.claude_file),
        ]
        for path in required:
            if not path.exists():
                raise FileNotFoundError(f"required file missing: {path}")

        if not ctx.skip_claude_dir and not ctx.existing_files.claude_dir:
            link = ctx.target(LAYOUT.claude_dir, "commands", LAYOUT.command_link)
            if not os.path.lexists(link):
                raise FileNotFoundError(f"command symlink missing: {link}")

        if ctx.config.add_recommended_mcp:
            mcp = ctx.target(LAYOUT.mcp_config_file)
            if not mcp.exists():
                raise FileNotFoundError(f"MCP config file missing (expected due to --add-mcp flag): {mcp}")

        logger.info("Installation validated")
