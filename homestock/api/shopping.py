"""Shopping list API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from homestock.api.dependencies import get_shopping_service
from homestock.database import get_db
from homestock.models.shopping import ShoppingListEntry
from homestock.schemas.shopping import (
    ConsolidatedItem,
    ConsolidatedPurchasedUpdate,
    ConsolidatedSiteUpdate,
    ShoppingListEntryCreate,
    ShoppingListEntryResponse,
    ShoppingListEntryUpdate,
    StockPurchasedResponse,
)
from homestock.services.shopping_service import ShoppingService

router = APIRouter(prefix="/api/v1/shopping-list", tags=["shopping-list"])


def get_entry(db: Session, entry_id: int) -> ShoppingListEntry:
    """Get a shopping list row or 404."""
    entry = db.query(ShoppingListEntry).filter(ShoppingListEntry.id == entry_id).first()
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Shopping list item not found"
        )
    return entry


def get_consolidated(service: ShoppingService, name: str) -> list[ShoppingListEntry]:
    """Rows behind a consolidated item or 404."""
    rows = service.rows_for(name)
    if not rows:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Shopping list item not found"
        )
    return rows


@router.get("", response_model=list[ShoppingListEntryResponse])
def list_entries(db: Annotated[Session, Depends(get_db)]):
    """List raw shopping list rows."""
    return db.query(ShoppingListEntry).order_by(ShoppingListEntry.id).all()


@router.post("", response_model=ShoppingListEntryResponse, status_code=status.HTTP_201_CREATED)
def add_entry(
    data: ShoppingListEntryCreate,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ShoppingService, Depends(get_shopping_service)],
):
    """Add (or overwrite) the site's row for an item."""
    entry = service.upsert(
        data.name.strip(),
        data.site,
        data.quantity,
        data.unit,
        data.location,
        is_staple=data.is_staple,
    )
    db.commit()
    db.refresh(entry)
    return entry


@router.get("/consolidated", response_model=list[ConsolidatedItem])
def list_consolidated(
    service: Annotated[ShoppingService, Depends(get_shopping_service)],
):
    """Shopping list with Jackson and Shore rows for the same item merged."""
    return service.list_consolidated()


@router.put("/consolidated/{name}", response_model=ConsolidatedItem)
def update_consolidated_site(
    name: str,
    data: ConsolidatedSiteUpdate,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ShoppingService, Depends(get_shopping_service)],
):
    """Edit quantity or unit of one site's row of a consolidated item.

    Duplicate rows for that site are folded into one before the edit, so the
    new quantity is exactly what the consolidated view shows.
    """
    entry = service.update_site_row(name, data.site, data.quantity, data.unit)
    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No {data.site.value} row for '{name}'",
        )
    db.commit()

    return service.consolidate(service.rows_for(name))[0]


@router.put("/consolidated/{name}/purchased", response_model=ConsolidatedItem)
def set_consolidated_purchased(
    name: str,
    data: ConsolidatedPurchasedUpdate,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ShoppingService, Depends(get_shopping_service)],
):
    """Mark every row of a consolidated item purchased (or not)."""
    rows = get_consolidated(service, name)
    for row in rows:
        row.is_purchased = data.is_purchased
    db.commit()

    return service.consolidate(rows)[0]


@router.delete("/consolidated/{name}", status_code=status.HTTP_204_NO_CONTENT)
def delete_consolidated(
    name: str,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[ShoppingService, Depends(get_shopping_service)],
):
    """Remove every row of a consolidated item."""
    for row in get_consolidated(service, name):
        db.delete(row)
    db.commit()


@router.post("/stock-purchased", response_model=StockPurchasedResponse)
def stock_purchased(
    service: Annotated[ShoppingService, Depends(get_shopping_service)],
):
    """Move purchased rows into the pantry of their site."""
    return service.add_purchased_to_inventory()


@router.put("/{entry_id}", response_model=ShoppingListEntryResponse)
def update_entry(
    entry_id: int,
    data: ShoppingListEntryUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a single row."""
    entry = get_entry(db, entry_id)

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(entry, field, value)

    db.commit()
    db.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(
    entry_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Remove a single row."""
    entry = get_entry(db, entry_id)
    db.delete(entry)
    db.commit()
