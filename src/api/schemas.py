"""Pydantic response schemas for the Discovery API that are not catalog views.

The search and detail endpoints respond with the view models from
:mod:`src.models.views`; this module holds the envelope types shared by
every route (errors, health).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Sanitized error body returned for every failed request."""

    error: str = Field(description="Exception class name, e.g. NotFoundError")
    detail: str = Field(description="Human-readable message")


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any] = Field(default_factory=dict)
