"""Staples API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from homestock.api.dependencies import get_staple_service
from homestock.database import get_db
from homestock.models.staple import Staple
from homestock.schemas.staple import (
    LowStaplesResult,
    StapleCreate,
    StapleResponse,
    StapleUpdate,
)
from homestock.services.staple_service import StapleService

router = APIRouter(prefix="/api/v1/staples", tags=["staples"])


def get_staple(db: Session, staple_id: int) -> Staple:
    """Get a staple or 404."""
    staple = db.query(Staple).filter(Staple.id == staple_id).first()
    if not staple:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Staple not found")
    return staple


@router.get("", response_model=list[StapleResponse])
def list_staples(
    service: Annotated[StapleService, Depends(get_staple_service)],
):
    """List staples with current Jackson stock and low flags."""
    return service.list_with_status()


@router.post("", response_model=StapleResponse, status_code=status.HTTP_201_CREATED)
def create_staple(
    data: StapleCreate,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[StapleService, Depends(get_staple_service)],
):
    """Add a staple."""
    staple = Staple(
        name=data.name.strip(),
        minimum_quantity=data.minimum_quantity,
        unit=data.unit,
        location=data.location,
    )
    db.add(staple)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Staple '{data.name}' already exists",
        ) from None
    db.refresh(staple)
    return service.with_status(staple)


@router.post("/add-low-to-list", response_model=LowStaplesResult)
def add_low_staples_to_list(
    service: Annotated[StapleService, Depends(get_staple_service)],
):
    """Put every staple below its minimum on the shopping list."""
    return service.add_low_staples_to_list()


@router.put("/{staple_id}", response_model=StapleResponse)
def update_staple(
    staple_id: int,
    data: StapleUpdate,
    db: Annotated[Session, Depends(get_db)],
    service: Annotated[StapleService, Depends(get_staple_service)],
):
    """Update a staple."""
    staple = get_staple(db, staple_id)

    for field, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(staple, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A staple with this name already exists",
        ) from None
    db.refresh(staple)
    return service.with_status(staple)


@router.delete("/{staple_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_staple(
    staple_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Remove a staple."""
    staple = get_staple(db, staple_id)
    db.delete(staple)
    db.commit()
