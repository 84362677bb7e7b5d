"""Error response schema."""

from pydantic import BaseModel, ConfigDict, Field


class FieldErrorSchema(BaseModel):
    """A single field-level validation failure."""

    field: str = Field(..., description="Dotted path of the offending field")
    message: str = Field(..., description="What is wrong with it")


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code")
    errors: list[FieldErrorSchema] | None = Field(
        None, description="Field-level validation errors"
    )
    current_weight: int | None = Field(
        None,
        alias="currentWeight",
        description="Remaining feed, included when a dispense is refused",
    )
    correlation_id: str | None = Field(
        None, alias="correlationId", description="Request correlation ID"
    )


class MessageResponseSchema(BaseModel):
    """Plain success acknowledgement."""

    success: bool = Field(True)
    message: str = Field(..., description="Human readable outcome")
