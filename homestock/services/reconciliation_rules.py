"""Rule table for ingredient reconciliation.

Exempt ingredients, fruit/juice substitutions and the Shore-origin marker
live here instead of in the engine so they can be swapped per call or loaded
from a JSON file (see `Settings.reconciliation_rules_file`).
"""

import json
import logging
import math
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field

from homestock.config import get_settings
from homestock.models.enums import Site

logger = logging.getLogger(__name__)


class FruitJuiceRule(BaseModel):
    """1 whole fruit yields `factor` `unit` of `juice_name`."""

    juice_name: str
    factor: float = Field(..., gt=0)
    unit: str


class ReconciliationRules(BaseModel):
    """Configuration consumed by the reconciliation engine."""

    exempt_ingredients: set[str] = Field(
        default_factory=lambda: {"salt", "pepper", "olive oil", "oil"}
    )
    fruit_juice_rules: dict[str, FruitJuiceRule] = Field(
        default_factory=lambda: {
            "lemon": FruitJuiceRule(juice_name="lemon juice", factor=2, unit="tbsp"),
            "lime": FruitJuiceRule(juice_name="lime juice", factor=1.5, unit="tsp"),
            "orange": FruitJuiceRule(juice_name="orange juice", factor=3, unit="tbsp"),
        }
    )
    whole_unit: str = "whole"
    default_unit: str = "each"
    substitution_sites: set[Site] = Field(default_factory=lambda: {Site.JACKSON})
    shore_marker: str = "&"

    def is_exempt(self, ingredient_name: str) -> bool:
        """Check if an ingredient is assumed to be always in stock."""
        return ingredient_name.lower().strip() in {
            name.lower() for name in self.exempt_ingredients
        }

    def substitute(
        self, name: str, quantity: float, unit: str, site: Site
    ) -> tuple[str, float, str]:
        """Swap whole fruit for juice (or juice for whole fruit) at sites that track it.

        Returns the (name, quantity, unit) to look up in the pantry.
        """
        if site not in self.substitution_sites:
            return name, quantity, unit

        normalized = name.lower().strip()
        for fruit, rule in self.fruit_juice_rules.items():
            if normalized == fruit.lower() and unit == self.whole_unit:
                return rule.juice_name, quantity * rule.factor, rule.unit
            if normalized == rule.juice_name.lower():
                return fruit, float(_ceil(quantity / rule.factor)), self.whole_unit

        return name, quantity, unit


def _ceil(value: float) -> int:
    # Round first so float noise like 3.0000000000000004 does not bump the count
    return math.ceil(round(value, 9))


def load_rules(path: str | Path) -> ReconciliationRules:
    """Load a rule table from a JSON file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    rules = ReconciliationRules.model_validate(data)
    logger.info(f"Loaded reconciliation rules from {path}")
    return rules


@lru_cache
def get_rules() -> ReconciliationRules:
    """Get the configured rule table, falling back to the built-in defaults."""
    settings = get_settings()
    if settings.reconciliation_rules_file:
        return load_rules(settings.reconciliation_rules_file)
    return ReconciliationRules()
