"""Settings and device status schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from petfeeder.services.device_state import format_timestamp


class SettingsResponseSchema(BaseModel):
    """Raw key-value settings."""

    success: Literal[True] = True
    settings: dict[str, str]


class DeviceStatusSchema(BaseModel):
    """Derived device status."""

    model_config = ConfigDict(from_attributes=True)

    online: bool
    weight: int
    battery: int
    last_heartbeat: datetime | None = Field(
        None, description="Last heartbeat (UTC, YYYY-MM-DD HH:MM:SS)"
    )

    @field_serializer("last_heartbeat")
    def serialize_heartbeat(self, value: datetime | None) -> str | None:
        """Keep the stored heartbeat format on the wire."""
        return format_timestamp(value) if value else None


class DeviceStatusResponseSchema(BaseModel):
    """Response schema for the status poll."""

    success: Literal[True] = True
    status: DeviceStatusSchema
