"""Staple schemas."""

from pydantic import BaseModel, ConfigDict, Field


class StapleCreate(BaseModel):
    """Create a staple."""

    name: str = Field(..., min_length=1, max_length=255)
    minimum_quantity: float = Field(1, ge=0)
    unit: str = Field("each", min_length=1, max_length=50)
    location: str = Field("Pantry", min_length=1, max_length=100)


class StapleUpdate(BaseModel):
    """Update a staple."""

    name: str | None = Field(None, min_length=1, max_length=255)
    minimum_quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, min_length=1, max_length=50)
    location: str | None = Field(None, min_length=1, max_length=100)


class StapleResponse(BaseModel):
    """Staple with its current Jackson stock."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    minimum_quantity: float
    unit: str
    location: str
    current_quantity: float = 0
    is_low: bool = False


class LowStaplesResult(BaseModel):
    """Result of pushing low staples onto the shopping list."""

    added: int
    updated: int
