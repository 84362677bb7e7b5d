"""Feed schemas for API request/response validation."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DispenseRequestSchema(BaseModel):
    """Request schema for a manual dispense."""

    model_config = ConfigDict(populate_by_name=True)

    rounds: int = Field(..., ge=1, le=50, strict=True, description="Rounds to dispense")
    type: Literal["Manual", "Scheduled"] = Field("Manual", description="History type")
    weight_dispensed: int = Field(
        ...,
        alias="weightDispensed",
        strict=True,
        ge=0,
        description="Grams the dispense removes from the hopper",
    )


class DispenseResponseSchema(BaseModel):
    """Response schema for a successful dispense."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    message: str
    current_weight: int = Field(..., alias="currentWeight")


class RecalibrateResponseSchema(BaseModel):
    """Response schema for a recalibration."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    current_weight: int = Field(..., alias="currentWeight")
