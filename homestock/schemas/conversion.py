"""Conversion factor schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ConversionFactorCreate(BaseModel):
    """Record that 1 from_unit of an ingredient equals `factor` to_unit."""

    ingredient_name: str = Field(..., min_length=1, max_length=255)
    from_unit: str = Field(..., min_length=1, max_length=50)
    to_unit: str = Field(..., min_length=1, max_length=50)
    factor: float = Field(..., gt=0)


class ConversionFactorUpdate(BaseModel):
    """Update a conversion factor."""

    ingredient_name: str | None = Field(None, min_length=1, max_length=255)
    from_unit: str | None = Field(None, min_length=1, max_length=50)
    to_unit: str | None = Field(None, min_length=1, max_length=50)
    factor: float | None = Field(None, gt=0)


class ConversionFactorResponse(BaseModel):
    """Conversion factor response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    ingredient_name: str
    from_unit: str
    to_unit: str
    factor: float
    created_at: datetime
    updated_at: datetime


class ConversionLookupResponse(BaseModel):
    """Answer to a single lookup."""

    ingredient_name: str
    from_unit: str
    to_unit: str
    factor: float | None
