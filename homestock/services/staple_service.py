"""Staple service: minimum-stock checks and restocking."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from homestock.models.enums import Site
from homestock.models.pantry import PantryItem
from homestock.models.shopping import ShoppingListEntry
from homestock.models.staple import Staple
from homestock.schemas.staple import StapleResponse

logger = logging.getLogger(__name__)


class StapleService:
    """Service for staple-related operations.

    Staples are checked against Jackson stock, summed across all locations.
    """

    def __init__(self, db: Session):
        self.db = db

    def current_quantity(self, name: str) -> float:
        total = (
            self.db.query(func.coalesce(func.sum(PantryItem.quantity), 0))
            .filter(PantryItem.name == name, PantryItem.site == Site.JACKSON.value)
            .scalar()
        )
        return float(total)

    def with_status(self, staple: Staple) -> StapleResponse:
        current = self.current_quantity(staple.name)
        return StapleResponse(
            id=staple.id,
            name=staple.name,
            minimum_quantity=staple.minimum_quantity,
            unit=staple.unit,
            location=staple.location,
            current_quantity=current,
            is_low=current < float(staple.minimum_quantity),
        )

    def list_with_status(self) -> list[StapleResponse]:
        staples = self.db.query(Staple).order_by(Staple.name).all()
        return [self.with_status(staple) for staple in staples]

    def add_low_staples_to_list(self) -> dict:
        """Put every low staple on the shopping list for the missing amount.

        Returns:
            {"added": int, "updated": int}
        """
        result = {"added": 0, "updated": 0}

        for staple in self.list_with_status():
            if not staple.is_low:
                continue

            needed = staple.minimum_quantity - staple.current_quantity
            existing = (
                self.db.query(ShoppingListEntry)
                .filter(ShoppingListEntry.item_name == staple.name)
                .order_by(ShoppingListEntry.id)
                .first()
            )
            if existing:
                existing.quantity = needed
                existing.unit = staple.unit
                existing.is_staple = True
                result["updated"] += 1
            else:
                self.db.add(
                    ShoppingListEntry(
                        item_name=staple.name,
                        quantity=needed,
                        unit=staple.unit,
                        location=staple.location,
                        is_purchased=False,
                        is_staple=True,
                    )
                )
                result["added"] += 1

        self.db.commit()
        logger.info(f"Low staples: {result['added']} added, {result['updated']} updated")
        return result
