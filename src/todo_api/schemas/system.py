"""Common system-level response models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class RootResponse(BaseModel):
    """Metadata payload returned by the root endpoint."""

    name: str = Field(description="Human-friendly service name")
    environment: str = Field(description="Deployment environment identifier")
    version: str = Field(description="Semantic version of the service")
    api_prefix: str = Field(description="Base path for REST routes")
    graphql_path: str = Field(description="Path of the GraphQL endpoint")
    docs_url: str = Field(description="Location of the interactive API docs")


class HealthCheckResponse(BaseModel):
    """Payload returned by the health check endpoint."""

    status: Literal["ok", "unavailable"] = Field(default="ok", description="Service health indicator")
    database: Literal["ok", "unavailable"] = Field(default="ok", description="Database connectivity")


class FieldErrorSchema(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Standardised error envelope returned by exception handlers."""

    status: Literal["error"] = Field(default="error")
    message: str = Field(description="Human-readable error message")
    errors: list[FieldErrorSchema] | None = Field(
        default=None,
        description="Per-field problems; always present for validation errors.",
    )


__all__ = ["ErrorResponse", "FieldErrorSchema", "HealthCheckResponse", "RootResponse"]
