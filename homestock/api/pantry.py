"""Pantry API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from homestock.api.dependencies import get_pantry_service
from homestock.database import get_db
from homestock.models.enums import Site
from homestock.models.pantry import PantryItem
from homestock.schemas.pantry import (
    PantryAddResponse,
    PantryItemCreate,
    PantryItemResponse,
    PantryItemUpdate,
    PantryTransferRequest,
    PantryTransferResponse,
)
from homestock.services.pantry_service import PantryService

router = APIRouter(prefix="/api/v1/pantry", tags=["pantry"])


def get_pantry_item(db: Session, item_id: int) -> PantryItem:
    """Get a pantry item or 404."""
    item = db.query(PantryItem).filter(PantryItem.id == item_id).first()
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pantry item not found")
    return item


@router.get("", response_model=list[PantryItemResponse])
def list_pantry_items(
    db: Annotated[Session, Depends(get_db)],
    site: Site | None = None,
    location: str | None = None,
    search: str | None = None,
):
    """List pantry items, optionally for one site or location."""
    query = db.query(PantryItem)
    if site is not None:
        query = query.filter(PantryItem.site == site.value)
    if location:
        query = query.filter(PantryItem.location == location)
    if search:
        query = query.filter(PantryItem.name.ilike(f"%{search.strip()}%"))
    return query.order_by(PantryItem.name, PantryItem.id).all()


@router.post("", response_model=PantryAddResponse, status_code=status.HTTP_201_CREATED)
def add_pantry_item(
    item_data: PantryItemCreate,
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Add stock; an item already at the same location and site is topped up."""
    item, merged = service.add_stock(
        name=item_data.name.strip(),
        quantity=item_data.quantity,
        unit=item_data.unit,
        location=item_data.location,
        site=item_data.site,
    )
    response = PantryItemResponse.model_validate(item)
    return PantryAddResponse(**response.model_dump(), merged=merged)


@router.post("/transfer", response_model=PantryTransferResponse)
def transfer_pantry_items(
    request: PantryTransferRequest,
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Move stock to the other site."""
    target_site, items = service.transfer(
        [(line.item_id, line.quantity) for line in request.items],
        request.target_location,
    )
    return PantryTransferResponse(
        transferred=len(items),
        target_site=target_site,
        items=[PantryItemResponse.model_validate(item) for item in items],
    )


@router.get("/{item_id}", response_model=PantryItemResponse)
def get_pantry_item_endpoint(
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific pantry item."""
    return get_pantry_item(db, item_id)


@router.put("/{item_id}", response_model=PantryItemResponse)
def update_pantry_item(
    item_id: int,
    item_data: PantryItemUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a pantry item."""
    item = get_pantry_item(db, item_id)

    if item_data.name is not None:
        item.name = item_data.name.strip()
    if item_data.quantity is not None:
        item.quantity = item_data.quantity
    if item_data.unit is not None:
        item.unit = item_data.unit
    if item_data.location is not None:
        item.location = item_data.location

    db.commit()
    db.refresh(item)
    return item


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pantry_item(
    item_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Remove an item from the pantry."""
    item = get_pantry_item(db, item_id)
    db.delete(item)
    db.commit()
