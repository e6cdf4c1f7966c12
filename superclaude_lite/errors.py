from __future__ import annotations

from typing import List, Optional, Sequence


class InstallerError(Exception):
    """Base class for every error raised by the installer core."""


class GraphConstructionError(InstallerError):
    pass


class EmptyNameError(GraphConstructionError):
    pass


class DuplicateStepError(GraphConstructionError):
    def __init__(self, step: str) -> None:
        super().__init__(f"step '{step}' has already been added")
        self.step = step


class SelfDependencyError(GraphConstructionError):
    def __init__(self, step: str) -> None:
        super().__init__(f"step cannot depend on itself: {step}")
        self.step = step


class UnknownStepError(GraphConstructionError):
    def __init__(self, step: str) -> None:
        super().__init__(f"step '{step}' has not been added to the graph")
        self.step = step


class UnknownStepReferenceError(GraphConstructionError):
    """Dependency rules name steps that are missing from the step registry."""

    def __init__(self, missing: Sequence[str], available: Sequence[str]) -> None:
        self.missing: List[str] = sorted(missing)
        self.available: List[str] = sorted(available)
        avail = ", ".join(self.available)
        if len(self.missing) == 1:
            msg = f"dependency references unknown installation step '{self.missing[0]}'. Available steps: {avail}"
        else:
            msg = (
                f"dependencies reference {len(self.missing)} unknown installation steps: "
                f"{', '.join(self.missing)}. Available steps: {avail}"
            )
        super().__init__(msg)


class CycleError(InstallerError):
    def __init__(self, message: str, cycle: Optional[Sequence[str]] = None) -> None:
        super().__init__(message)
        self.cycle: List[str] = list(cycle or [])


class StepError(InstallerError):
    phase = "execution"

    def __init__(self, step: str, cause: BaseException) -> None:
        super().__init__(f"{self.phase} failed for step {step}: {cause}")
        self.step = step
        self.cause = cause


class StepExecutionError(StepError):
    phase = "execution"


class StepValidationError(StepError):
    phase = "validation"


class RollbackError(InstallerError):
    pass


class NoBackupAvailableError(RollbackError):
    def __init__(self) -> None:
        super().__init__("no backup available for rollback")


class RestoreError(RollbackError):
    def __init__(self, path: str, cause: BaseException) -> None:
        super().__init__(f"failed to restore {path}: {cause}")
        self.path = path
        self.cause = cause


class BackupNotFoundError(RollbackError):
    def __init__(self, backup_dir: str) -> None:
        super().__init__(f"backup directory does not exist: {backup_dir}")
        self.backup_dir = backup_dir
