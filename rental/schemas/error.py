"""Standardized error response schema."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error body for domain exceptions."""

    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Localized, human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
