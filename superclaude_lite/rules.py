"""Dependency rule table for the installation steps.

Rules are ``(dependent, prerequisite)`` pairs. The static table always
applies; :func:`conditional_rules` adds edges gated by configuration.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .dependency_graph import DependencyGraph, Rule
from .install_config import InstallConfig
from .steps import STEP_NAMES

STATIC_RULES: Tuple[Rule, ...] = (
    ("ScanExistingFiles", "CheckPrerequisites"),
    ("CreateBackups", "ScanExistingFiles"),
    ("CheckTargetDirectory", "CreateBackups"),
    ("CloneRepository", "CheckTargetDirectory"),
    ("CreateDirectoryStructure", "CheckTargetDirectory"),
    ("CopyCoreFiles", "CloneRepository"),
    ("CopyCoreFiles", "CreateDirectoryStructure"),
    ("CopyCommandFiles", "CloneRepository"),
    ("CopyCommandFiles", "CreateDirectoryStructure"),
    ("MergeOrCreateCLAUDEmd", "CreateDirectoryStructure"),
    ("MergeOrCreateMCPConfig", "CreateDirectoryStructure"),
    ("CreateCommandSymlink", "CopyCommandFiles"),
    ("CreateCommandSymlink", "CreateDirectoryStructure"),
    # Validation sees every produced artifact.
    ("ValidateInstallation", "CopyCoreFiles"),
    ("ValidateInstallation", "CopyCommandFiles"),
    ("ValidateInstallation", "MergeOrCreateCLAUDEmd"),
    ("ValidateInstallation", "CreateCommandSymlink"),
    # Cleanup runs last.
    ("CleanupTempFiles", "CopyCoreFiles"),
    ("CleanupTempFiles", "CopyCommandFiles"),
    ("CleanupTempFiles", "MergeOrCreateCLAUDEmd"),
    ("CleanupTempFiles", "CreateCommandSymlink"),
    ("CleanupTempFiles", "ValidateInstallation"),
)

MCP_RULES: Tuple[Rule, ...] = (
    ("ValidateInstallation", "MergeOrCreateMCPConfig"),
    ("CleanupTempFiles", "MergeOrCreateMCPConfig"),
)


def conditional_rules(config: Optional[InstallConfig]) -> List[Rule]:
    rules: List[Rule] = []
    if config is not None and config.add_recommended_mcp:
        rules.extend(MCP_RULES)
    return rules


def build_installation_graph(
    config: Optional[InstallConfig],
    *,
    known_steps: Optional[Iterable[str]] = None,
) -> DependencyGraph:
    """Build a fresh graph for one run. ``known_steps`` defaults to the step registry."""
    if known_steps is None:
        known_steps = STEP_NAMES

    graph = DependencyGraph(known_steps=known_steps)
    graph.build_from_rules(STATIC_RULES, config, conditional=conditional_rules)
    return graph
