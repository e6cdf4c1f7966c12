from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

from .context import ExecutionContext, ExistingFiles, new_execution_context
from .errors import NoBackupAvailableError, RestoreError, StepExecutionError, StepValidationError, UnknownStepError
from .install_config import InstallConfig
from .lib.files import copy_path
from .rules import build_installation_graph
from .steps import Step, get_install_steps

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionSummary:
    target_dir: str
    backup_dir: Optional[str]
    completed_steps: List[str]
    backed_up_files: List[str] = field(default_factory=list)
    existing_files: ExistingFiles = field(default_factory=ExistingFiles)
    mcp_config_created: bool = False

    def render(self) -> str:
        lines = ["", "SuperClaude installation completed successfully!", ""]
        lines.append(f"Installation directory: {self.target_dir}")

        if self.backed_up_files:
            lines += ["", f"Backed up files to: {self.backup_dir}"]
            lines += [f"  - {path}" for path in self.backed_up_files]

        lines += ["", "Files created/modified:"]
        if self.existing_files.claude_md:
            lines.append("  - CLAUDE.md (merged with SuperClaude import)")
        else:
            lines.append("  - CLAUDE.md (created)")

        if self.mcp_config_created:
            if self.existing_files.mcp_config:
                lines.append("  - .mcp.json (merged with recommended servers)")
            else:
                lines.append("  - .mcp.json (created with recommended servers)")

        lines.append("  - .superclaude/ (framework files)")
        if not self.existing_files.claude_dir:
            lines.append("  - .claude/ (created)")

        lines += [
            "",
            "Next steps:",
            "1. Review CLAUDE.md to ensure imports are correct",
            "2. Restart Claude Code to load new configuration",
            "3. Use SuperClaude commands and features in Claude Code",
        ]
        return "\n".join(lines)


class Orchestrator:
    """Runs installation steps in dependency order against one context.

    Fail-fast: the first failing ``execute`` or ``validate`` aborts the run,
    so ``context.completed`` is always a prefix of the order.
    """

    def __init__(self, context: ExecutionContext, steps: Optional[Mapping[str, Step]] = None) -> None:
        self.context = context
        self.steps: Mapping[str, Step] = steps if steps is not None else get_install_steps()

    def execution_order(self) -> List[str]:
        graph = build_installation_graph(self.context.config, known_steps=self.steps.keys())
        return graph.get_topological_order()

    def run(self, order: Optional[Sequence[str]] = None) -> List[str]:
        """Execute every step of ``order`` (computed from the rules when omitted)."""
        if order is None:
            order = self.execution_order()

        for name in order:
            if name not in self.steps:
                raise UnknownStepError(name)

        logger.info("Execution order: %s", ", ".join(order))
        if self.context.dry_run:
            logger.info("[DRY RUN] No files will be modified")

        for name in order:
            step = self.steps[name]
            logger.info("Executing step: %s", name)

            try:
                step.execute(self.context)
            except Exception as e:
                logger.error("Step %s failed: %s", name, e)
                raise StepExecutionError(name, e) from e

            validate = getattr(step, "validate", None)
            if validate is not None:
                try:
                    validate(self.context)
                except Exception as e:
                    logger.error("Validation of step %s failed: %s", name, e)
                    raise StepValidationError(name, e) from e

            self.context.completed.append(name)
            logger.info("Completed step: %s", name)

        return list(self.context.completed)

    def rollback(self) -> List[str]:
        """Restore every backed-up path. Returns the restored originals."""
        manager = self.context.backup_manager
        if manager is None or not manager.files:
            raise NoBackupAvailableError()

        logger.info("Rolling back installation...")
        restored: List[str] = []
        for original, backup in manager.files.items():
            logger.info("Restoring %s from %s", original, backup)
            try:
                copy_path(backup, original)
            except OSError as e:
                raise RestoreError(original, e) from e
            restored.append(original)

        logger.info("Rollback completed (%d paths)", len(restored))
        return restored

    def get_summary(self) -> ExecutionSummary:
        ctx = self.context
        backed_up: List[str] = []
        if ctx.backup_manager is not None:
            backed_up = sorted(ctx.backup_manager.files)

        return ExecutionSummary(
            target_dir=ctx.target_dir,
            backup_dir=ctx.backup_dir,
            completed_steps=list(ctx.completed),
            backed_up_files=backed_up,
            existing_files=ExistingFiles(**vars(ctx.existing_files)),
            mcp_config_created=ctx.config.add_recommended_mcp,
        )


def new_installer(target_dir: str, config: InstallConfig) -> Orchestrator:
    return Orchestrator(new_execution_context(target_dir, config))
