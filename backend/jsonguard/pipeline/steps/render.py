"""
RenderStep — pass the validated document to the caller's render callback.

Skipped when validation produced errors.  The callback may be a plain
function or a coroutine function; whatever it raises becomes a
RenderError.
"""

from __future__ import annotations

import inspect

from jsonguard.core.errors import RenderError
from jsonguard.pipeline.context import RunContext, StepResult
from jsonguard.pipeline.step import PipelineStep


class RenderStep(PipelineStep):
    """Invoke ctx.render(ctx.data) and await it when needed."""

    name = "render"
    description = "Render validated document"

    async def should_skip(self, ctx: RunContext) -> bool:
        return ctx.render is None or ctx.has_validation_errors

    async def execute(self, ctx: RunContext) -> StepResult:
        started_at = self._now()

        try:
            outcome = ctx.render(ctx.data)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            raise RenderError(
                str(exc),
                execution_id=ctx.execution_id,
                step_name=self.name,
                details={"exception": type(exc).__name__},
            ) from exc

        ctx.rendered = True
        return self._success(started_at)
