"""
RunContext — mutable state object carried through every step.

This is the single source of truth for one fetch-validate-render run.
Each step reads from and writes to the context; nothing is shared
between runs.
"""

from __future__ import annotations

import re
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable

from jsonguard.validation.matcher import ValidationResult
from jsonguard.validation.schema import Schema

# Receives the validated JSON.  May be a plain function or a coroutine function.
RenderCallback = Callable[[Any], Awaitable[None] | None]

_JSON_SUFFIX = re.compile(r"\.json$")


def path_for_url(url: str) -> str:
    """Initial message path for a resource: the locator minus a trailing .json."""
    return _JSON_SUFFIX.sub("", url)


# ═══════════════════════════════════════════════════════════
#  StepResult
# ═══════════════════════════════════════════════════════════

@dataclass
class StepResult:
    """Outcome of a single pipeline step execution."""

    step_name: str
    status: str                     # StepStatus value
    started_at: datetime | None = None
    completed_at: datetime | None = None
    duration_ms: int = 0
    error: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "step_name": self.step_name,
            "status": self.status,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_ms": self.duration_ms,
            "error": self.error,
            "metadata": self.metadata,
        }


# ═══════════════════════════════════════════════════════════
#  RunContext
# ═══════════════════════════════════════════════════════════

@dataclass
class RunContext:
    """
    Carries all state between pipeline steps.

    Populated progressively: the fetch step fills in `data`, the
    validation step fills in `validation`, the render step flips
    `rendered`.
    """

    # ─── Caller input ─────────────────────────────────
    url: str
    schema: Schema | Mapping[str, Any]
    render: RenderCallback | None = None
    mount_on_error_id: str | None = None
    execution_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # ─── Fetch ────────────────────────────────────────
    data: Any = None
    loaded: bool = False
    status_code: int | None = None

    # ─── Validation / render ──────────────────────────
    validation: ValidationResult | None = None
    rendered: bool = False

    # ─── Execution tracking ───────────────────────────
    current_step_index: int = 0
    total_steps: int = 0
    step_results: list[StepResult] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def validation_path(self) -> str:
        return path_for_url(self.url)

    @property
    def has_validation_errors(self) -> bool:
        return self.validation is not None and not self.validation.ok

    def add_error(self, error: str) -> None:
        """Record a step failure."""
        self.errors.append(error)

    def to_summary_dict(self) -> dict[str, Any]:
        """Compact summary for logging / API responses."""
        return {
            "execution_id": self.execution_id,
            "url": self.url,
            "loaded": self.loaded,
            "status_code": self.status_code,
            "validation_errors": len(self.validation.errors) if self.validation else None,
            "validation_warnings": len(self.validation.warnings) if self.validation else None,
            "rendered": self.rendered,
            "steps_completed": len(self.step_results),
            "total_steps": self.total_steps,
            "errors": self.errors,
        }
