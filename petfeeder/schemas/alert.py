"""Alert schemas for API response validation."""

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AlertSchema(BaseModel):
    """An alert as shown in the dashboard feed."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str = Field(..., validation_alias=AliasChoices("alert_type", "type"))
    message: str
    is_read: bool
    timestamp: datetime = Field(
        ...,
        validation_alias=AliasChoices("created_at", "timestamp"),
        description="Server local time, same clock as history date and time",
    )


class AlertListResponseSchema(BaseModel):
    """Response schema for the alert feed."""

    success: Literal[True] = True
    alerts: list[AlertSchema]
