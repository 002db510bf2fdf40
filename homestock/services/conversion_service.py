"""Unit conversion factor lookup."""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from homestock.models.conversion_factor import ConversionFactor

logger = logging.getLogger(__name__)


class ConversionService:
    """Answer "how many to_unit equal one from_unit of an ingredient?"."""

    def __init__(self, db: Session):
        self.db = db

    def lookup(self, ingredient_name: str, from_unit: str, to_unit: str) -> float | None:
        """Find the stored factor for (ingredient, from_unit -> to_unit).

        Matching is case-insensitive on all three keys. There is no inverse
        lookup (a stored A->B factor does not answer B->A) and no chaining
        through intermediate units. When duplicates exist the oldest row wins.
        """
        matches = (
            self.db.query(ConversionFactor)
            .filter(
                func.lower(ConversionFactor.ingredient_name) == ingredient_name.lower().strip(),
                func.lower(ConversionFactor.from_unit) == from_unit.lower().strip(),
                func.lower(ConversionFactor.to_unit) == to_unit.lower().strip(),
            )
            .order_by(ConversionFactor.id)
            .all()
        )

        if not matches:
            return None

        if len(matches) > 1:
            logger.warning(
                f"{len(matches)} conversion factors stored for '{ingredient_name}' "
                f"{from_unit} -> {to_unit}; using factor {matches[0].factor}"
            )

        return float(matches[0].factor)

    def find_duplicates(self) -> list[dict]:
        """List (ingredient, from_unit, to_unit) triples stored more than once."""
        rows = (
            self.db.query(
                func.lower(ConversionFactor.ingredient_name),
                func.lower(ConversionFactor.from_unit),
                func.lower(ConversionFactor.to_unit),
                func.count(ConversionFactor.id),
            )
            .group_by(
                func.lower(ConversionFactor.ingredient_name),
                func.lower(ConversionFactor.from_unit),
                func.lower(ConversionFactor.to_unit),
            )
            .having(func.count(ConversionFactor.id) > 1)
            .all()
        )
        return [
            {"ingredient_name": name, "from_unit": from_unit, "to_unit": to_unit, "count": count}
            for name, from_unit, to_unit, count in rows
        ]
