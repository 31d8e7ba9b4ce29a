"""
Pipeline — step-based fetch → validate → present → render runs.

Each run executes a fixed sequence of steps against one RunContext,
with per-step logging and error handling.
"""

from jsonguard.pipeline.context import RunContext, StepResult
from jsonguard.pipeline.engine import PipelineEngine, RunResult
from jsonguard.pipeline.orchestrator import RenderOptions, RunOutcome, validate_and_render
from jsonguard.pipeline.step import PipelineStep

__all__ = [
    "PipelineEngine",
    "PipelineStep",
    "RunContext",
    "RunResult",
    "StepResult",
    "RenderOptions",
    "RunOutcome",
    "validate_and_render",
]
