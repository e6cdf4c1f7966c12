"""Canonical installation step registry."""

from typing import Dict, Tuple

from .base import Step
from .framework import (
    CopyCommandFilesStep,
    CopyCoreFilesStep,
    CreateCommandSymlinkStep,
    CreateDirectoryStructureStep,
)
from .merge import MergeOrCreateClaudeMdStep, MergeOrCreateMCPConfigStep
from .prepare import (
    CheckPrerequisitesStep,
    CheckTargetDirectoryStep,
    CreateBackupsStep,
    ScanExistingFilesStep,
)
from .repository import CleanupTempFilesStep, CloneRepositoryStep
from .validate import ValidateInstallationStep

STEP_CLASSES = (
    CheckPrerequisitesStep,
    ScanExistingFilesStep,
    CreateBackupsStep,
    CheckTargetDirectoryStep,
    CloneRepositoryStep,
    CreateDirectoryStructureStep,
    CopyCoreFilesStep,
    CopyCommandFilesStep,
    MergeOrCreateClaudeMdStep,
    MergeOrCreateMCPConfigStep,
    CreateCommandSymlinkStep,
    ValidateInstallationStep,
    CleanupTempFilesStep,
)

STEP_NAMES: Tuple[str, ...] = tuple(cls.name for cls in STEP_CLASSES)


def get_install_steps() -> Dict[str, Step]:
    """Fresh step instances keyed by name."""
    return {cls.name: cls() for cls in STEP_CLASSES}


__all__ = [
    "Step",
    "STEP_CLASSES",
    "STEP_NAMES",
    "get_install_steps",
    "CheckPrerequisitesStep",
    "ScanExistingFilesStep",
    "CreateBackupsStep",
    "CheckTargetDirectoryStep",
    "CloneRepositoryStep",
    "CreateDirectoryStructureStep",
    "CopyCoreFilesStep",
    "CopyCommandFilesStep",
    "MergeOrCreateClaudeMdStep",
    "MergeOrCreateMCPConfigStep",
    "CreateCommandSymlinkStep",
    "ValidateInstallationStep",
    "CleanupTempFilesStep",
]
