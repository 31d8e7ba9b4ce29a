"""
Domain-specific exception hierarchy for jsonguard.

All exceptions inherit from JsonGuardError so callers can catch broadly
or narrowly as needed.  Each exception carries structured context
(step name, execution ID, etc.) for logging/debugging.

Schema *violations* are never raised; they are accumulated as strings
in a ValidationResult.
"""

from __future__ import annotations


class JsonGuardError(Exception):
    """Base exception for all jsonguard errors."""

    def __init__(
        self,
        message: str,
        *,
        execution_id: str | None = None,
        step_name: str | None = None,
        details: dict | None = None,
    ) -> None:
        self.execution_id = execution_id
        self.step_name = step_name
        self.details = details or {}
        super().__init__(message)


class SchemaDefinitionError(JsonGuardError):
    """A schema description is malformed (unknown key, bad regex, ...)."""
    pass


class StepExecutionError(JsonGuardError):
    """A step failed during execution."""
    pass


class FetchError(StepExecutionError):
    """The JSON resource could not be fetched or decoded."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        response_body: str | None = None,
        **kwargs,
    ) -> None:
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, **kwargs)


class RenderError(StepExecutionError):
    """The caller-supplied render callback raised."""
    pass
