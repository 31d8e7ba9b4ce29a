"""
ValidateSchemaStep — run the schema matcher on the fetched document.

Violations are not step failures: they are stored in ctx.validation and
the run carries on so the report can be presented.  Only a malformed
schema fails the step.
"""

from __future__ import annotations

from jsonguard.core.errors import SchemaDefinitionError, StepExecutionError
from jsonguard.core.logging import get_logger
from jsonguard.pipeline.context import RunContext, StepResult
from jsonguard.pipeline.step import PipelineStep
from jsonguard.validation.matcher import match
from jsonguard.validation.schema import Schema

logger = get_logger(__name__)


class ValidateSchemaStep(PipelineStep):
    """Validate the decoded JSON against the caller's schema."""

    name = "validate_schema"
    description = "Validate document against schema"

    async def execute(self, ctx: RunContext) -> StepResult:
        started_at = self._now()

        try:
            schema = Schema.parse(ctx.schema)
        except SchemaDefinitionError as exc:
            raise StepExecutionError(
                str(exc),
                execution_id=ctx.execution_id,
                step_name=self.name,
                details=exc.details,
            ) from exc

        ctx.validation = match(ctx.data, schema, ctx.validation_path)

        logger.info(
            "Schema validation complete",
            url=ctx.url,
            status=ctx.validation.status,
            errors=len(ctx.validation.errors),
            warnings=len(ctx.validation.warnings),
        )

        return self._success(started_at, metadata={
            "errors": len(ctx.validation.errors),
            "warnings": len(ctx.validation.warnings),
        })
