"""Pydantic models for API I/O."""

from .payloads import (
    CategoryPayload,
    ErrorResponse,
    HealthResponse,
    PlayerPayload,
    TagPayload,
)

__all__ = [
    "CategoryPayload",
    "PlayerPayload",
    "TagPayload",
    "ErrorResponse",
    "HealthResponse",
]
