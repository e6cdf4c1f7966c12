from __future__ import annotations

from typing import Protocol

from ..context import ExecutionContext


class Step(Protocol):
    """A named unit of installation work.

    ``execute`` raises on failure. Steps may also define
    ``validate(ctx)``, which the orchestrator calls after a successful
    ``execute``.
    """

    name: str

    def execute(self, ctx: ExecutionContext) -> None:
        ...
