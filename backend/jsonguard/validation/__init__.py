"""Schema dialect and matcher."""

from jsonguard.validation.matcher import ValidationResult, match, type_of
from jsonguard.validation.schema import CustomValidator, Schema

__all__ = ["Schema", "CustomValidator", "ValidationResult", "match", "type_of"]
