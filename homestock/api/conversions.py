"""Conversion factor API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from homestock.api.dependencies import get_conversion_service
from homestock.database import get_db
from homestock.models.conversion_factor import ConversionFactor
from homestock.schemas.conversion import (
    ConversionFactorCreate,
    ConversionFactorResponse,
    ConversionFactorUpdate,
    ConversionLookupResponse,
)
from homestock.services.conversion_service import ConversionService

router = APIRouter(prefix="/api/v1/conversions", tags=["conversions"])


def get_conversion(db: Session, conversion_id: int) -> ConversionFactor:
    """Get a conversion factor or 404."""
    conversion = db.query(ConversionFactor).filter(ConversionFactor.id == conversion_id).first()
    if not conversion:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Conversion factor not found"
        )
    return conversion


@router.get("", response_model=list[ConversionFactorResponse])
def list_conversions(db: Annotated[Session, Depends(get_db)]):
    """List all conversion factors."""
    return (
        db.query(ConversionFactor)
        .order_by(ConversionFactor.ingredient_name, ConversionFactor.id)
        .all()
    )


@router.get("/lookup", response_model=ConversionLookupResponse)
def lookup_conversion(
    ingredient_name: str,
    from_unit: str,
    to_unit: str,
    service: Annotated[ConversionService, Depends(get_conversion_service)],
):
    """How many to_unit equal one from_unit of the ingredient (null when unknown)."""
    return ConversionLookupResponse(
        ingredient_name=ingredient_name,
        from_unit=from_unit,
        to_unit=to_unit,
        factor=service.lookup(ingredient_name, from_unit, to_unit),
    )


@router.get("/duplicates")
def list_duplicate_conversions(
    service: Annotated[ConversionService, Depends(get_conversion_service)],
):
    """Triples stored more than once; lookups use the oldest."""
    return service.find_duplicates()


@router.post("", response_model=ConversionFactorResponse, status_code=status.HTTP_201_CREATED)
def create_conversion(
    data: ConversionFactorCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Add a conversion factor."""
    conversion = ConversionFactor(
        ingredient_name=data.ingredient_name.strip(),
        from_unit=data.from_unit.strip(),
        to_unit=data.to_unit.strip(),
        factor=data.factor,
    )
    db.add(conversion)
    db.commit()
    db.refresh(conversion)
    return conversion


@router.put("/{conversion_id}", response_model=ConversionFactorResponse)
def update_conversion(
    conversion_id: int,
    data: ConversionFactorUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a conversion factor."""
    conversion = get_conversion(db, conversion_id)

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(conversion, field, value.strip() if isinstance(value, str) else value)

    db.commit()
    db.refresh(conversion)
    return conversion


@router.delete("/{conversion_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_conversion(
    conversion_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a conversion factor."""
    conversion = get_conversion(db, conversion_id)
    db.delete(conversion)
    db.commit()
