"""Schedule schemas for API request/response validation."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from petfeeder.models.schedule import Frequency, Interval

TIME_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"


class ScheduleRequestSchema(BaseModel):
    """Request schema for creating or replacing a schedule."""

    model_config = ConfigDict(populate_by_name=True)

    interval: Interval = Field(..., description="Advisory interval label", examples=["4h"])
    time: str = Field(
        ..., pattern=TIME_PATTERN, description="Start time (HH:MM)", examples=["08:30"]
    )
    rounds: int = Field(..., ge=-1, strict=True, description="Rounds to feed; -1 for free feed")
    frequency: Frequency = Field(..., description="Day rule", examples=["weekdays"])
    custom_days: str | None = Field(
        None,
        alias="customDays",
        max_length=100,
        description="Comma-separated weekdays for custom frequency",
        examples=["Mon,Wed,Fri"],
    )
    active: bool | None = Field(None, description="Whether the device should see it")


class ScheduleIdSchema(BaseModel):
    """Path parameter for schedule endpoints."""

    id: int = Field(..., gt=0)


class ScheduleListQuerySchema(BaseModel):
    """Query parameters for listing schedules."""

    include_inactive: bool = Field(False, description="Also list disabled schedules")


class ScheduleResponseSchema(BaseModel):
    """A schedule as shown to the dashboard."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    interval: str = Field(..., validation_alias=AliasChoices("interval_type", "interval"))
    time: str = Field(..., validation_alias=AliasChoices("start_time", "time"))
    rounds: int
    frequency: str
    custom_days: str = Field(
        "",
        validation_alias=AliasChoices("custom_days", "customDays"),
        serialization_alias="customDays",
    )
    active: bool = Field(..., validation_alias=AliasChoices("is_active", "active"))


class ScheduleListResponseSchema(BaseModel):
    """Response schema for the dashboard schedule list."""

    success: Literal[True] = True
    schedules: list[ScheduleResponseSchema]


class DueScheduleSchema(BaseModel):
    """A schedule due today, as polled by the device."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    interval: str = Field(..., validation_alias=AliasChoices("interval_type", "interval"))
    start_time: str
    rounds: int


class DueScheduleListResponseSchema(BaseModel):
    """Response schema for the device's schedule poll."""

    success: Literal[True] = True
    schedules: list[DueScheduleSchema]
    current_time: str = Field(..., description="Server local time (HH:MM:SS)")


class ScheduleCreatedResponseSchema(BaseModel):
    """Response schema for a created schedule."""

    success: Literal[True] = True
    message: str
    id: int
