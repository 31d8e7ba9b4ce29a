"""PresentReportStep — hand the validation outcome to a report sink."""

from __future__ import annotations

from jsonguard.core.errors import StepExecutionError
from jsonguard.pipeline.context import RunContext, StepResult
from jsonguard.pipeline.step import PipelineStep
from jsonguard.reporting.presenter import ReportSink


class PresentReportStep(PipelineStep):
    """Present errors/warnings for the fetched resource, pass or fail."""

    name = "present_report"
    description = "Present validation report"

    def __init__(self, sink: ReportSink) -> None:
        self._sink = sink

    async def execute(self, ctx: RunContext) -> StepResult:
        started_at = self._now()

        if ctx.validation is None:
            raise StepExecutionError(
                "No validation result to present",
                execution_id=ctx.execution_id,
                step_name=self.name,
            )

        self._sink.present(ctx.url, ctx.validation.errors, ctx.validation.warnings)

        return self._success(started_at, metadata={"sink": type(self._sink).__name__})
