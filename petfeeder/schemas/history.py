"""History schemas for API request/response validation."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class HistoryQuerySchema(BaseModel):
    """Query parameters for the history search."""

    search: str | None = Field(
        None, max_length=100, description="Substring matched against date, time, type and status"
    )
    limit: int | None = Field(None, ge=1, le=1000, description="Maximum rows returned")


class HistoryEntrySchema(BaseModel):
    """A feed event as shown to the dashboard."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    date: str = Field(..., validation_alias=AliasChoices("feed_date", "date"))
    time: str = Field(..., validation_alias=AliasChoices("feed_time", "time"))
    rounds: int
    type: str
    status: str


class HistoryListResponseSchema(BaseModel):
    """Response schema for the history search."""

    success: Literal[True] = True
    history: list[HistoryEntrySchema]
