"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class Pagination(BaseModel):
    """Offset pagination metadata returned by list endpoints."""

    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0, description="Number of rows matching the filter.")
    pages: int = Field(..., ge=0)


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
