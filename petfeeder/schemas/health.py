"""Health check schema."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponseSchema(BaseModel):
    """Result of the health probe."""

    status: Literal["healthy", "unhealthy"]
    database: Literal["connected", "disconnected"]
    error: str | None = Field(None, description="What is failing, when unhealthy")
