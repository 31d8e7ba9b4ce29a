"""API schema package."""

from jsonguard.api.schemas.validation import ValidateRequest, ValidateResponse

__all__ = ["ValidateRequest", "ValidateResponse"]
