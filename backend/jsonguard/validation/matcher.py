"""Schema matcher — recursive structural comparison of data against a Schema."""

from __future__ import annotations

import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from jsonguard.core.constants import JsonType, ValidationStatus
from jsonguard.validation.schema import Schema

_EMPTY_SCHEMA = Schema()


@dataclass
class ValidationResult:
    """Accumulated violations (errors) and soft issues (warnings)."""

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def status(self) -> ValidationStatus:
        return ValidationStatus.PASSED if self.ok else ValidationStatus.FAILED

    def extend(self, other: ValidationResult) -> None:
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }


def type_of(value: Any) -> str:
    """
    Runtime type tag of a decoded JSON value.

    bool is checked before number because bool is an int subclass.
    Values outside the JSON model report their class name.
    """
    if value is None:
        return JsonType.NULL
    if isinstance(value, bool):
        return JsonType.BOOLEAN
    if isinstance(value, numbers.Real):
        return JsonType.NUMBER
    if isinstance(value, str):
        return JsonType.STRING
    if isinstance(value, (list, tuple)):
        return JsonType.ARRAY
    if isinstance(value, Mapping):
        return JsonType.OBJECT
    if callable(value):
        return JsonType.FUNCTION
    return type(value).__name__


def match(data: Any, schema: Schema, path: str = "") -> ValidationResult:
    """
    Compare `data` against `schema`, returning every violation found.

    Pure: no logging, no side effects.  Violations inside one node's
    subtree never stop sibling checks; only a type mismatch or an
    anyOf evaluation ends the checks for the node itself.
    """
    result = ValidationResult()

    def add_error(message: str) -> None:
        result.errors.append(f"{path}: {message}" if path else message)

    def add_warning(message: str) -> None:
        result.warnings.append(f"{path}: {message}" if path else message)

    # ── anyOf: at least one alternative must pass ──
    if schema.any_of is not None:
        outcomes = [match(data, alternative, path) for alternative in schema.any_of]
        passing = next((o for o in outcomes if o.ok), None)
        if passing is None:
            add_error("Value must match one of the allowed shapes.")
            for index, outcome in enumerate(outcomes):
                for error in outcome.errors:
                    add_warning(f"anyOf[{index}] → {error}")
        else:
            result.warnings.extend(passing.warnings)
        return result

    actual = type_of(data)
    if schema.type is not None and schema.type != actual:
        add_error(f'Expected type "{schema.type}" but got "{actual}".')
        return result

    if schema.type == JsonType.OBJECT:
        _match_object(data or {}, schema, path, result, add_error)

    if schema.type == JsonType.ARRAY:
        _match_array(data or [], schema, path, result, add_error)

    if schema.type == JsonType.STRING and schema.pattern:
        if re.search(schema.pattern, data) is None:
            add_error(f"String does not match pattern {schema.pattern}.")

    return result


def _match_object(data, schema, path, result, add_error) -> None:
    for key in schema.required:
        if key not in data:
            add_error(f'Missing required key "{key}".')

    # Keys without a property schema are allowed through.
    for key, value in data.items():
        child = schema.properties.get(key)
        if child is None:
            continue
        result.extend(match(value, child, f"{path}.{key}" if path else key))

    if schema.custom is not None and callable(schema.custom):
        try:
            message = schema.custom(data)
        except Exception as exc:
            add_error(f"Custom validator threw: {exc}")
        else:
            if isinstance(message, str) and message:
                add_error(message)


def _match_array(data, schema, path, result, add_error) -> None:
    item_schema = schema.items or _EMPTY_SCHEMA
    for index, item in enumerate(data):
        result.extend(match(item, item_schema, f"{path}[{index}]"))

    if schema.min_items is not None and len(data) < schema.min_items:
        add_error(f"Array has {len(data)} items; expected at least {schema.min_items}.")
