"""Shopping list schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from homestock.models.enums import Site


class ShoppingListEntryCreate(BaseModel):
    """Add a row to the shopping list."""

    name: str = Field(..., min_length=1, max_length=255)
    site: Site = Site.JACKSON
    quantity: float = Field(1, ge=0)
    unit: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=100)
    is_staple: bool = False


class ShoppingListEntryUpdate(BaseModel):
    """Update a single shopping list row."""

    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=100)
    is_purchased: bool | None = None


class ShoppingListEntryResponse(BaseModel):
    """Shopping list row response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    item_name: str
    quantity: float
    unit: str | None
    location: str | None
    is_purchased: bool
    is_staple: bool
    created_at: datetime
    updated_at: datetime


class ConsolidatedItem(BaseModel):
    """One display row merging the Jackson and Shore rows for an item."""

    name: str
    category: str = "Other"
    shore_id: int | None = None
    shore_quantity: float | None = None
    shore_unit: str | None = None
    shore_purchased: bool = False
    jackson_id: int | None = None
    jackson_quantity: float | None = None
    jackson_unit: str | None = None
    jackson_purchased: bool = False
    is_purchased: bool = False
    is_staple: bool = False


class ConsolidatedSiteUpdate(BaseModel):
    """Edit the quantity or unit of one site's row of a consolidated item."""

    site: Site
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)


class ConsolidatedPurchasedUpdate(BaseModel):
    """Toggle purchased on every row of a consolidated item."""

    is_purchased: bool


class StockPurchasedResponse(BaseModel):
    """Result of moving purchased rows into the pantry."""

    added: int
    updated: int
    removed: int
