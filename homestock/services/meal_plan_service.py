"""Meal plan service: week-level grocery list generation."""

import logging
from collections import defaultdict

from sqlalchemy import func
from sqlalchemy.orm import Session

from homestock.models.enums import Site, WeekType
from homestock.models.meal_plan import MealPlan
from homestock.models.pantry import PantryItem
from homestock.schemas.meal_plan import GroceryListLine, GroceryListResult
from homestock.services.reconciliation_rules import ReconciliationRules, get_rules
from homestock.services.shopping_service import ShoppingService

logger = logging.getLogger(__name__)


class MealPlanService:
    """Service for meal-plan operations."""

    def __init__(self, db: Session, rules: ReconciliationRules | None = None):
        self.db = db
        self.rules = rules or get_rules()

    def week_plans(self, site: Site, week_type: WeekType) -> list[MealPlan]:
        return (
            self.db.query(MealPlan)
            .filter(MealPlan.site == Site(site).value, MealPlan.week_type == WeekType(week_type).value)
            .order_by(MealPlan.id)
            .all()
        )

    def clear_week(self, site: Site, week_type: WeekType) -> int:
        """Remove every slot of a site's week. Returns the number removed."""
        removed = (
            self.db.query(MealPlan)
            .filter(MealPlan.site == Site(site).value, MealPlan.week_type == WeekType(week_type).value)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return removed

    def generate_grocery_list(self, site: Site, week_type: WeekType) -> GroceryListResult:
        """Put whatever the planned week needs beyond current stock on the shopping list.

        Ingredient lines are summed per (name, location) across every planned
        meal and compared with the site's stock at that location. Shortfalls
        are written to the site's shopping list row for the ingredient.
        """
        site = Site(site)
        week_type = WeekType(week_type)

        required: dict[tuple[str, str | None], float] = defaultdict(float)
        units: dict[tuple[str, str | None], str | None] = {}
        for plan in self.week_plans(site, week_type):
            for ingredient in plan.recipe.ingredients:
                if self.rules.is_exempt(ingredient.ingredient_name):
                    continue
                key = (ingredient.ingredient_name, ingredient.location)
                required[key] += float(ingredient.quantity or 0)
                units.setdefault(key, ingredient.unit)

        # Shortfalls per name; a name needed at several locations shares one row
        needed_by_name: dict[str, dict] = {}
        for (name, location), quantity in required.items():
            on_hand = (
                self.db.query(func.coalesce(func.sum(PantryItem.quantity), 0))
                .filter(
                    PantryItem.name == name,
                    PantryItem.location == location,
                    PantryItem.site == site.value,
                )
                .scalar()
            )
            needed = max(0.0, quantity - float(on_hand))
            if needed <= 0:
                continue
            if name in needed_by_name:
                needed_by_name[name]["quantity"] += needed
            else:
                needed_by_name[name] = {
                    "quantity": needed,
                    "unit": units[(name, location)],
                    "location": location,
                }

        shopping = ShoppingService(self.db, self.rules)
        lines = []
        for name, data in needed_by_name.items():
            entry = shopping.upsert(name, site, data["quantity"], data["unit"], data["location"])
            lines.append(
                GroceryListLine(
                    name=name,
                    quantity=data["quantity"],
                    unit=data["unit"],
                    location=data["location"],
                    entry_id=entry.id,
                )
            )
        self.db.commit()

        logger.info(f"Generated {len(lines)} grocery lines for {site.value} week {week_type.value}")
        return GroceryListResult(site=site, week_type=week_type, lines=lines)
