"""Hardware telemetry schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class HardwareUpdateRequestSchema(BaseModel):
    """Telemetry report sent by the feeder."""

    weight: int | None = Field(None, ge=0, strict=True, description="Hopper weight in grams")
    battery: int | None = Field(None, ge=0, le=100, strict=True, description="Battery percent")
    dispensed: int | None = Field(
        None, ge=0, strict=True, description="Rounds the device fed on its own"
    )
    type: Literal["Scheduled", "Manual"] | None = Field(
        None, description="History type for dispensed rounds"
    )


class HardwareUpdateResponseSchema(BaseModel):
    """Acknowledgement listing the readings that were applied."""

    success: Literal[True] = True
    message: str
    updated: list[Literal["weight", "battery"]]
