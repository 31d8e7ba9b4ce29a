"""jsonguard — fetch JSON, check it against an ad-hoc schema, report, render."""

from jsonguard.pipeline.orchestrator import RenderOptions, RunOutcome, validate_and_render
from jsonguard.validation import Schema, ValidationResult, match

__version__ = "0.1.0"

__all__ = [
    "Schema",
    "ValidationResult",
    "match",
    "RenderOptions",
    "RunOutcome",
    "validate_and_render",
]
