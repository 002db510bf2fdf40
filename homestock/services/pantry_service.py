"""Pantry service for stocking and moving items between sites."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from homestock.models.enums import Site
from homestock.models.pantry import PantryItem

logger = logging.getLogger(__name__)


class PantryService:
    """Service for pantry-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def find_item(self, name: str, location: str, site: Site) -> PantryItem | None:
        """First record with this exact (name, location, site)."""
        return (
            self.db.query(PantryItem)
            .filter(
                PantryItem.name == name,
                PantryItem.location == location,
                PantryItem.site == Site(site).value,
            )
            .order_by(PantryItem.id)
            .first()
        )

    def add_stock(
        self, name: str, quantity: float, unit: str, location: str, site: Site
    ) -> tuple[PantryItem, bool]:
        """Add stock, summing into an existing record at the same place.

        Returns:
            (item, merged) where merged is True when an existing record grew.
        """
        existing = self.find_item(name, location, site)
        if existing:
            existing.quantity = float(existing.quantity or 0) + quantity
            self.db.commit()
            self.db.refresh(existing)
            return existing, True

        item = PantryItem(
            name=name,
            quantity=quantity,
            unit=unit,
            location=location,
            site=Site(site).value,
        )
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        return item, False

    def transfer(
        self, lines: list[tuple[int, float | None]], target_location: str
    ) -> tuple[Site, list[PantryItem]]:
        """Move stock to the other site.

        Each line is (pantry item id, quantity or None for all of it). The moved
        quantity merges into a record with the same name at the target
        location, or creates one. Emptied source records are deleted.

        Returns:
            (target site, target records)
        """
        items = []
        for item_id, quantity in lines:
            item = self.db.query(PantryItem).filter(PantryItem.id == item_id).first()
            if not item:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"Pantry item {item_id} not found",
                )
            items.append((item, quantity))

        sites = {Site(item.site) for item, _ in items}
        if len(sites) > 1:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="All transferred items must come from the same site",
            )
        target_site = sites.pop().other()

        targets = []
        for item, quantity in items:
            available = float(item.quantity or 0)
            moved = available if quantity is None else max(0.0, min(quantity, available))
            if moved <= 0:
                continue

            target = self.find_item(item.name, target_location, target_site)
            if target:
                target.quantity = float(target.quantity or 0) + moved
            else:
                target = PantryItem(
                    name=item.name,
                    quantity=moved,
                    unit=item.unit,
                    location=target_location,
                    site=target_site.value,
                )
                self.db.add(target)

            remaining = available - moved
            if remaining > 0:
                item.quantity = remaining
            else:
                self.db.delete(item)

            self.db.flush()
            targets.append(target)

        self.db.commit()
        for target in targets:
            self.db.refresh(target)

        logger.info(f"Transferred {len(targets)} items to {target_site.value} ({target_location})")
        return target_site, targets
