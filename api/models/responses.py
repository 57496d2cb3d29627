"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field


HELLO_MESSAGE = "Hello World!"


class HelloResponse(BaseModel):
    """Response for GET / endpoint."""
    
    message: str = HELLO_MESSAGE


class ErrorDetail(BaseModel):
    """Detailed error information."""
    
    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""
    
    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
