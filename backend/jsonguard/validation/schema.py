"""
Schema — the ad-hoc structural description a JSON value is checked against.

Schemas are immutable pydantic models, validated when they are built:
unknown keys, unknown type tags, negative ``minItems`` and regular
expressions that do not compile are rejected up front, so the matcher
never has to second-guess the description it walks.

The dialect keeps its camelCase keys, so a schema can be written as
plain data::

    Schema.parse({
        "type": "object",
        "required": ["title", "items"],
        "properties": {
            "title": {"type": "string", "pattern": r"\\S"},
            "items": {"type": "array", "minItems": 1, "items": {"type": "number"}},
        },
    })
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from jsonguard.core.constants import JsonType
from jsonguard.core.errors import SchemaDefinitionError

# Hook contract: receives the node's data, returns a violation message
# (non-empty string) or None/"" when the node is acceptable.  May raise.
CustomValidator = Callable[[Any], str | None]


class Schema(BaseModel):
    """One node of a schema description.  Every field is optional."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )

    type: JsonType | None = None
    properties: dict[str, Schema] = Field(default_factory=dict)
    required: tuple[str, ...] = ()
    items: Schema | None = None
    min_items: int | None = Field(default=None, alias="minItems", ge=0)
    pattern: str | None = None
    any_of: tuple[Schema, ...] | None = Field(default=None, alias="anyOf")
    custom: CustomValidator | None = None

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: str | None) -> str | None:
        if value is not None:
            try:
                re.compile(value)
            except re.error as exc:
                raise ValueError(f"invalid regular expression {value!r}: {exc}") from exc
        return value

    @classmethod
    def parse(cls, value: Schema | Mapping[str, Any]) -> Schema:
        """
        Build a Schema from plain data (or pass an existing one through).

        Raises SchemaDefinitionError when the description is malformed.
        """
        if isinstance(value, Schema):
            return value
        if not isinstance(value, Mapping):
            raise SchemaDefinitionError(
                f"Schema must be a mapping, got {type(value).__name__}"
            )
        try:
            return cls.model_validate(dict(value))
        except ValidationError as exc:
            raise SchemaDefinitionError(
                f"Invalid schema: {exc.error_count()} problem(s)",
                details={"errors": exc.errors(include_url=False, include_context=False)},
            ) from exc


Schema.model_rebuild()
