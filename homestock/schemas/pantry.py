"""Pantry schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from homestock.models.enums import Site


class PantryItemCreate(BaseModel):
    """Add stock to a site's pantry."""

    name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(1, ge=0)
    unit: str = Field("each", min_length=1, max_length=50)
    location: str = Field(..., min_length=1, max_length=100)
    site: Site


class PantryItemUpdate(BaseModel):
    """Update a pantry item."""

    name: str | None = Field(None, min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, min_length=1, max_length=50)
    location: str | None = Field(None, min_length=1, max_length=100)


class PantryItemResponse(BaseModel):
    """Pantry item response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    quantity: float
    unit: str
    location: str
    site: Site
    created_at: datetime
    updated_at: datetime


class PantryAddResponse(PantryItemResponse):
    """Pantry item after an add, noting whether it merged into existing stock."""

    merged: bool


class TransferLine(BaseModel):
    """Quantity of one pantry record to move."""

    item_id: int
    quantity: float | None = Field(None, gt=0)  # None moves everything


class PantryTransferRequest(BaseModel):
    """Move stock to the other site."""

    items: list[TransferLine] = Field(..., min_length=1)
    target_location: str = Field(..., min_length=1, max_length=100)


class PantryTransferResponse(BaseModel):
    """Result of a transfer."""

    transferred: int
    target_site: Site
    items: list[PantryItemResponse]
