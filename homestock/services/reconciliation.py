"""Ingredient reconciliation: deduct a recipe's ingredients from a site's pantry."""

import logging
from collections.abc import Iterable
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from homestock.models.enums import Site
from homestock.models.pantry import PantryItem
from homestock.models.shopping import ShoppingListEntry
from homestock.schemas.reconciliation import (
    ConversionNeeded,
    Deduction,
    MissingIngredient,
    ReconciliationResult,
)
from homestock.services.conversion_service import ConversionService
from homestock.services.errors import PersistenceFailure
from homestock.services.reconciliation_rules import ReconciliationRules, get_rules
from homestock.services.shopping_service import apply_marker

logger = logging.getLogger(__name__)


class IngredientLine(Protocol):
    """Anything shaped like a recipe ingredient row."""

    ingredient_name: str
    quantity: float | None
    unit: str | None
    location: str | None


class ReconciliationEngine:
    """Resolve recipe ingredient requirements against a site's current stock.

    The site's pantry is read once per call. Each ingredient's write is
    committed on its own, so a store failure part way through leaves the
    earlier deductions in place.

    Two concurrent calls touching the same pantry record race on the
    read-modify-write and the last commit wins. Fixing that needs an atomic
    decrement-with-floor in the store.
    """

    def __init__(
        self,
        db: Session,
        rules: ReconciliationRules | None = None,
        conversions: ConversionService | None = None,
    ):
        self.db = db
        self.rules = rules or get_rules()
        self.conversions = conversions or ConversionService(db)

    def reconcile(
        self,
        ingredients: Iterable[IngredientLine],
        site: Site,
        *,
        match_location: bool = False,
        restock_on_depletion: bool = False,
    ) -> ReconciliationResult:
        """Deduct every ingredient line from the site's pantry.

        Pantry records keep their own unit. When a line needs a stored
        conversion factor, the amount removed is the required quantity
        converted back into the record's unit, capped at what is on hand.

        Args:
            ingredients: Recipe ingredient lines, processed in order.
            site: Site whose pantry is deducted from.
            match_location: Only match pantry records at the line's location.
            restock_on_depletion: Add a marker-prefixed shopping list entry for
                every record a deduction leaves at exactly zero.

        Raises:
            PersistenceFailure: The store rejected a read or write. Remaining
                lines are not processed.
        """
        site = Site(site)
        result = ReconciliationResult(site=site)

        # Keep the snapshot loaded across the per-ingredient commits
        expire_on_commit = self.db.expire_on_commit
        self.db.expire_on_commit = False
        try:
            try:
                pantry = self._load_pantry(site)
            except SQLAlchemyError as e:
                self._fail(result, e)
                raise PersistenceFailure(f"Failed to load {site.value} pantry: {e}", result) from e

            for line in ingredients:
                name = line.ingredient_name
                try:
                    self._reconcile_line(
                        line, site, pantry, result, match_location, restock_on_depletion
                    )
                except SQLAlchemyError as e:
                    self._fail(result, e)
                    raise PersistenceFailure(
                        f"Failed to update pantry for {name}: {e}", result
                    ) from e
        finally:
            self.db.expire_on_commit = expire_on_commit

        logger.info(
            f"Reconciled {result.satisfied_count} ingredients at {site.value}: "
            f"{len(result.missing)} missing, {len(result.conversion_needed)} need conversion"
        )
        return result

    def _load_pantry(self, site: Site) -> list[PantryItem]:
        return (
            self.db.query(PantryItem)
            .filter(PantryItem.site == site.value)
            .order_by(PantryItem.id)
            .all()
        )

    def _reconcile_line(
        self,
        line: IngredientLine,
        site: Site,
        pantry: list[PantryItem],
        result: ReconciliationResult,
        match_location: bool,
        restock_on_depletion: bool,
    ) -> None:
        name = line.ingredient_name
        required = float(line.quantity or 0)
        unit = line.unit or self.rules.default_unit

        if self.rules.is_exempt(name):
            result.exempt.append(name)
            return

        lookup_name, lookup_quantity, lookup_unit = self.rules.substitute(
            name, required, unit, site
        )

        item = self._find_item(pantry, lookup_name, line.location if match_location else None)
        if item is None:
            logger.warning(f"No {site.value} pantry record for '{lookup_name}'")
            result.missing.append(MissingIngredient(ingredient_name=name, location=line.location))
            return

        current = float(item.quantity or 0)
        to_deduct = lookup_quantity

        if item.unit != lookup_unit:
            factor = self.conversions.lookup(lookup_name, item.unit, lookup_unit)
            if not factor:
                result.conversion_needed.append(
                    ConversionNeeded(
                        ingredient_name=lookup_name,
                        required_quantity=lookup_quantity,
                        required_unit=lookup_unit,
                        pantry_quantity=current,
                        pantry_unit=item.unit,
                    )
                )
                return
            # Never take more than the converted stock, then go back to pantry units
            to_deduct = min(lookup_quantity, current * factor) / factor

        if to_deduct <= 0:
            result.deducted.append(self._deduction(name, item, current, current))
            return

        new_quantity = round(current - to_deduct, 6) if current >= to_deduct else 0.0
        item.quantity = new_quantity
        self.db.commit()
        result.deducted.append(self._deduction(name, item, current, new_quantity))

        if restock_on_depletion and new_quantity == 0:
            entry = ShoppingListEntry(
                item_name=apply_marker(name, site, self.rules.shore_marker),
                quantity=required,
                unit=line.unit,
                location=line.location,
                is_purchased=False,
            )
            self.db.add(entry)
            self.db.commit()
            result.shopping_entry_ids.append(entry.id)
            logger.info(f"Added restock entry '{entry.item_name}' after depleting {item.name}")

    @staticmethod
    def _find_item(
        pantry: list[PantryItem], name: str, location: str | None
    ) -> PantryItem | None:
        for item in pantry:
            if item.name != name:
                continue
            if location is not None and item.location != location:
                continue
            return item
        return None

    @staticmethod
    def _deduction(name: str, item: PantryItem, previous: float, new: float) -> Deduction:
        return Deduction(
            ingredient_name=name,
            pantry_item_id=item.id,
            pantry_item_name=item.name,
            previous_quantity=previous,
            new_quantity=new,
            unit=item.unit,
        )

    def _fail(self, result: ReconciliationResult, error: SQLAlchemyError) -> None:
        self.db.rollback()
        result.failed = True
        result.error = str(error)
        logger.error(f"Reconciliation at {result.site.value} aborted: {error}")
