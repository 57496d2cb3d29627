"""API response models."""

from api.models.responses import (
    HELLO_MESSAGE,
    HelloResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "HELLO_MESSAGE",
    "HelloResponse",
    "ErrorDetail",
    "ErrorResponse",
]
