"""
PipelineStep — one stage of a fetch-validate-render run.

A run is four steps over a shared RunContext: fetch_json fills ctx.data,
validate_schema fills ctx.validation, present_report hands the result
to a ReportSink, and render passes valid data to the caller's callback.
PipelineEngine owns ordering, skip handling and failure capture.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from jsonguard.core.constants import StepStatus
from jsonguard.pipeline.context import RunContext, StepResult


class PipelineStep(ABC):
    """
    A named unit of work in a run.

    Concrete steps set `name` (used as StepResult.step_name and to tell a
    render failure from a load failure) and `description` (logged by the
    engine), and implement execute().  Override should_skip() when the
    step depends on an earlier outcome, as RenderStep does.
    """

    name: str = "unnamed_step"
    description: str = "No description"

    @abstractmethod
    async def execute(self, ctx: RunContext) -> StepResult:
        """
        Do the work and return a COMPLETED StepResult via _success().

        Raise a StepExecutionError subclass (FetchError, RenderError) to
        stop the run; the engine records it as a FAILED step.
        """
        ...

    async def should_skip(self, ctx: RunContext) -> bool:
        return False

    def _success(
        self,
        started_at: datetime,
        metadata: dict[str, Any] | None = None,
    ) -> StepResult:
        now = datetime.now(timezone.utc)
        return StepResult(
            step_name=self.name,
            status=StepStatus.COMPLETED,
            started_at=started_at,
            completed_at=now,
            duration_ms=int((now - started_at).total_seconds() * 1000),
            metadata=metadata or {},
        )

    def _now(self) -> datetime:
        return datetime.now(timezone.utc)
