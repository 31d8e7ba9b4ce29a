"""
PipelineEngine — runs steps sequentially against one RunContext.

Responsibilities:
    - Execute each step with timing, logging, and error handling
    - Honour should_skip()
    - Stop at the first failed step
    - Return a complete RunResult

There is no retry: every failure is terminal for the run.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

import structlog

from jsonguard.core.constants import RunStatus, StepStatus
from jsonguard.core.errors import StepExecutionError
from jsonguard.pipeline.context import RunContext, StepResult
from jsonguard.pipeline.step import PipelineStep


@dataclass
class RunResult:
    """Final outcome of a pipeline execution."""

    execution_id: str
    status: str                     # RunStatus value
    started_at: datetime | None = None
    completed_at: datetime | None = None
    total_duration_ms: int = 0
    steps_completed: int = 0
    total_steps: int = 0
    step_results: list[dict[str, Any]] = field(default_factory=list)
    context_summary: dict[str, Any] = field(default_factory=dict)
    failed_step: str | None = None
    error: str | None = None


class PipelineEngine:
    """
    Runs a sequence of PipelineStep objects against a RunContext.

    Usage::

        engine = PipelineEngine()
        result = await engine.run_steps(ctx, [FetchJsonStep(), ValidateSchemaStep()])
    """

    def __init__(self) -> None:
        self.logger = structlog.get_logger("pipeline.engine")

    async def run_steps(
        self,
        ctx: RunContext,
        steps: list[PipelineStep],
    ) -> RunResult:
        """Execute an ordered list of steps against a context."""
        started_at = datetime.now(timezone.utc)
        ctx.total_steps = len(steps)

        log = self.logger.bind(
            execution_id=ctx.execution_id,
            url=ctx.url,
            total_steps=len(steps),
        )

        steps_completed = 0
        failed_step: str | None = None
        error: str | None = None

        for index, step in enumerate(steps):
            ctx.current_step_index = index
            step_number = index + 1

            step_log = log.bind(
                step_name=step.name,
                step_index=step_number,
            )

            # ── Check skip condition ──────────────────
            try:
                if await step.should_skip(ctx):
                    step_log.info("Step skipped")
                    now = datetime.now(timezone.utc)
                    ctx.step_results.append(StepResult(
                        step_name=step.name,
                        status=StepStatus.SKIPPED,
                        started_at=now,
                        completed_at=now,
                    ))
                    steps_completed += 1
                    continue
            except Exception as exc:
                step_log.warning("should_skip raised, running step anyway", error=str(exc))

            step_log.debug(f"Step {step_number}/{len(steps)}: {step.description}")

            result = await self._execute(step, ctx, step_log)
            ctx.step_results.append(result)

            if result.status == StepStatus.COMPLETED:
                steps_completed += 1
                step_log.debug(
                    "Step completed",
                    duration_ms=result.duration_ms,
                    metadata=result.metadata,
                )
            else:
                step_log.warning(
                    "Step failed, pipeline stopping",
                    error=result.error,
                    duration_ms=result.duration_ms,
                )
                ctx.add_error(f"Step '{step.name}' failed: {result.error}")
                failed_step = step.name
                error = result.error
                break

        # ── Finalise ──────────────────────────────────
        completed_at = datetime.now(timezone.utc)
        total_duration_ms = int((completed_at - started_at).total_seconds() * 1000)

        run_status = RunStatus.FAILED if failed_step is not None else RunStatus.COMPLETED

        return RunResult(
            execution_id=ctx.execution_id,
            status=run_status,
            started_at=started_at,
            completed_at=completed_at,
            total_duration_ms=total_duration_ms,
            steps_completed=steps_completed,
            total_steps=len(steps),
            step_results=[sr.to_dict() for sr in ctx.step_results],
            context_summary=ctx.to_summary_dict(),
            failed_step=failed_step,
            error=error,
        )

    async def _execute(
        self,
        step: PipelineStep,
        ctx: RunContext,
        log: structlog.stdlib.BoundLogger,
    ) -> StepResult:
        """Execute a step, converting any exception into a FAILED StepResult."""
        try:
            return await step.execute(ctx)

        except StepExecutionError as exc:
            return StepResult(
                step_name=step.name,
                status=StepStatus.FAILED,
                started_at=datetime.now(timezone.utc),
                completed_at=datetime.now(timezone.utc),
                error=str(exc),
                metadata={"exception": type(exc).__name__},
            )

        except Exception as exc:
            # Steps wrap their own failures; anything else is a bug
            log.exception("Unexpected error in step", error=str(exc))
            return StepResult(
                step_name=step.name,
                status=StepStatus.FAILED,
                started_at=datetime.now(timezone.utc),
                completed_at=datetime.now(timezone.utc),
                error=f"Unexpected: {exc}",
                metadata={"traceback": traceback.format_exc()},
            )
