"""
Fetch-validate-render orchestration.

    FetchJsonStep → ValidateSchemaStep → PresentReportStep → RenderStep

validate_and_render() never raises.  Whatever goes wrong is logged, and
when the caller named a mount point that exists on the surface, a
fallback message replaces its content:

    - load failure        "Failed to load <url>: <message>"
    - validation errors   "Validation failed for <url>. See details above."
    - render failure      "Failed to render <url>: <message>"
"""

from __future__ import annotations

import html
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from jsonguard.core.constants import FailureKind, RunStatus
from jsonguard.core.logging import get_logger
from jsonguard.pipeline.context import RenderCallback, RunContext
from jsonguard.pipeline.engine import PipelineEngine, RunResult
from jsonguard.pipeline.step import PipelineStep
from jsonguard.pipeline.steps.fetch_json import FetchJsonStep
from jsonguard.pipeline.steps.present_report import PresentReportStep
from jsonguard.pipeline.steps.render import RenderStep
from jsonguard.pipeline.steps.validate_schema import ValidateSchemaStep
from jsonguard.reporting.presenter import HtmlPanelPresenter, LogReportSink, ReportSink
from jsonguard.reporting.surface import DisplaySurface
from jsonguard.validation.matcher import ValidationResult
from jsonguard.validation.schema import Schema

logger = get_logger(__name__)

_FALLBACK_CLASS = "bg-red-100 text-red-700 p-4 rounded"


@dataclass
class RenderOptions:
    """What the caller hands to validate_and_render()."""

    url: str
    schema: Schema | Mapping[str, Any]
    render: RenderCallback | None = None
    mount_on_error_id: str | None = None


@dataclass
class RunOutcome:
    """Summary of one run.  Callers are free to ignore it."""

    url: str
    status: str                     # RunStatus value
    failure: FailureKind | None = None
    message: str | None = None
    validation: ValidationResult | None = None
    rendered: bool = False
    run: RunResult | None = field(default=None, repr=False)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "status": self.status,
            "failure": self.failure,
            "message": self.message,
            "errors": list(self.validation.errors) if self.validation else [],
            "warnings": list(self.validation.warnings) if self.validation else [],
            "rendered": self.rendered,
        }


def build_steps(
    sink: ReportSink,
    client: httpx.AsyncClient | None = None,
) -> list[PipelineStep]:
    """The fixed step sequence for one run."""
    return [
        FetchJsonStep(client=client),
        ValidateSchemaStep(),
        PresentReportStep(sink),
        RenderStep(),
    ]


async def validate_and_render(
    options: RenderOptions,
    *,
    surface: DisplaySurface | None = None,
    sink: ReportSink | None = None,
    client: httpx.AsyncClient | None = None,
) -> RunOutcome:
    """
    Fetch `options.url`, validate it, report, and render on success.

    Args:
        options: Resource, schema, render callback and fallback mount id.
        surface: Page that receives the report panel and fallback messages.
        sink: Report sink.  Defaults to an HtmlPanelPresenter on `surface`
              when one is given, otherwise to diagnostics only.
        client: Optional shared httpx client.
    """
    if sink is None:
        sink = HtmlPanelPresenter(surface) if surface is not None else LogReportSink()

    ctx = RunContext(
        url=options.url,
        schema=options.schema,
        render=options.render,
        mount_on_error_id=options.mount_on_error_id,
    )
    log = logger.bind(url=options.url, execution_id=ctx.execution_id)

    try:
        result = await PipelineEngine().run_steps(ctx, build_steps(sink, client))
    except Exception as exc:
        log.exception("Run aborted", error=str(exc))
        return _fail(ctx, surface, FailureKind.LOAD, str(exc), None)

    if result.status == RunStatus.FAILED:
        if result.failed_step == RenderStep.name:
            log.error("Failed to render", error=result.error)
            return _fail(ctx, surface, FailureKind.RENDER, result.error, result)
        log.error("Failed to load", error=result.error)
        return _fail(ctx, surface, FailureKind.LOAD, result.error, result)

    if ctx.has_validation_errors:
        _replace_mount(
            surface,
            ctx.mount_on_error_id,
            f"Validation failed for <b>{html.escape(ctx.url)}</b>. See details above.",
        )
        return RunOutcome(
            url=ctx.url,
            status=RunStatus.FAILED,
            failure=FailureKind.VALIDATION,
            message=f"Validation failed for {ctx.url}",
            validation=ctx.validation,
            run=result,
        )

    log.info("Run completed", rendered=ctx.rendered, duration_ms=result.total_duration_ms)
    return RunOutcome(
        url=ctx.url,
        status=RunStatus.COMPLETED,
        validation=ctx.validation,
        rendered=ctx.rendered,
        run=result,
    )


def _fail(
    ctx: RunContext,
    surface: DisplaySurface | None,
    kind: FailureKind,
    error: str | None,
    result: RunResult | None,
) -> RunOutcome:
    verb = "render" if kind == FailureKind.RENDER else "load"
    _replace_mount(
        surface,
        ctx.mount_on_error_id,
        f"Failed to {verb} <b>{html.escape(ctx.url)}</b>: {html.escape(error or '')}",
    )
    return RunOutcome(
        url=ctx.url,
        status=RunStatus.FAILED,
        failure=kind,
        message=f"Failed to {verb} {ctx.url}: {error}",
        validation=ctx.validation,
        rendered=ctx.rendered,
        run=result,
    )


def _replace_mount(surface: DisplaySurface | None, mount_id: str | None, message: str) -> None:
    if surface is None:
        return
    mount = surface.get_mount(mount_id)
    if mount is not None:
        mount.replace(f'<div class="{_FALLBACK_CLASS}">{message}</div>')
