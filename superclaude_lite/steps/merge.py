from __future__ import annotations

import logging

from ..constants import LAYOUT
from ..context import ExecutionContext
from ..lib.merge import create_claude_md, create_mcp_config, merge_claude_md, merge_mcp_config

logger = logging.getLogger(__name__)


class MergeOrCreateClaudeMdStep:
    name = "MergeOrCreateCLAUDEmd"

    def execute(self, ctx: ExecutionContext) -> None:
        path = ctx.target(LAYOUT.claude_file)
        existing = ctx.existing_files.claude_md

        if ctx.dry_run:
            if existing:
                logger.info("[DRY RUN] Would merge SuperClaude import into existing %s", path)
            else:
                logger.info("[DRY RUN] Would create new %s", path)
            return

        if existing:
            merge_claude_md(path)
        else:
            create_claude_md(path)


class MergeOrCreateMCPConfigStep:
    name = "MergeOrCreateMCPConfig"

    def execute(self, ctx: ExecutionContext) -> None:
        # Only touch .mcp.json when the user asked for the recommended servers.
        if not ctx.config.add_recommended_mcp:
            return

        path = ctx.target(LAYOUT.mcp_config_file)
        existing = ctx.existing_files.mcp_config

        if ctx.dry_run:
            if existing:
                logger.info("[DRY RUN] Would merge recommended servers into %s", path)
            else:
                logger.info("[DRY RUN] Would create %s with recommended servers", path)
            return

        if existing:
            added = merge_mcp_config(path)
            logger.info("Added MCP servers to %s: %s", path, ", ".join(added) or "(none)")
        else:
            create_mcp_config(path)
