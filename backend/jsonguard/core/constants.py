"""Shared constants and enums used across the application."""

from enum import StrEnum


class JsonType(StrEnum):
    """Runtime type tags understood by the schema dialect."""

    NULL = "null"
    ARRAY = "array"
    OBJECT = "object"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FUNCTION = "function"


class RunStatus(StrEnum):
    """Overall status of a fetch-validate-render run."""

    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class StepStatus(StrEnum):
    """Status of an individual pipeline step."""

    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    SKIPPED = "SKIPPED"


class ValidationStatus(StrEnum):
    """Validation result for a fetched document."""

    PASSED = "PASSED"
    FAILED = "FAILED"


class FailureKind(StrEnum):
    """Which stage of a run failed."""

    LOAD = "LOAD"
    VALIDATION = "VALIDATION"
    RENDER = "RENDER"
