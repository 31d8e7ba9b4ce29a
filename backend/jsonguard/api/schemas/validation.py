"""Validation request/response schemas."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from jsonguard.core.constants import FailureKind, RunStatus


class ValidateRequest(BaseModel):
    """A resource to fetch and the schema description to check it against."""

    url: str = Field(..., min_length=1, max_length=2048)
    schema_: dict[str, Any] = Field(..., alias="schema")


class ValidateResponse(BaseModel):
    """Outcome of one fetch-validate run."""

    url: str
    status: RunStatus
    failure: FailureKind | None = None
    message: str | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
