"""Recipe service for marking recipes and planned meals as cooked."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from homestock.models.enums import Site
from homestock.models.meal_plan import MealPlan
from homestock.models.recipe import Recipe
from homestock.schemas.reconciliation import CookResult, ReconciliationResult
from homestock.services.errors import PersistenceFailure
from homestock.services.reconciliation import ReconciliationEngine
from homestock.services.reconciliation_rules import ReconciliationRules

logger = logging.getLogger(__name__)


class RecipeService:
    """Service for recipe-related operations."""

    def __init__(self, db: Session, rules: ReconciliationRules | None = None):
        self.db = db
        self.engine = ReconciliationEngine(db, rules=rules)

    def get_recipe(self, recipe_id: int) -> Recipe:
        recipe = self.db.query(Recipe).filter(Recipe.id == recipe_id).first()
        if not recipe:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
        return recipe

    def cook_recipe(self, recipe_id: int, site: Site) -> CookResult:
        """Mark a catalog recipe as made at a site and deduct its ingredients."""
        recipe = self.get_recipe(recipe_id)
        return self._cook(recipe, Site(site))

    def cook_meal_plan(self, meal_plan_id: int) -> CookResult:
        """Mark a planned meal as cooked.

        Lines are matched to pantry records at their own location, and at the
        Shore any record driven to zero is queued on the shopping list.
        """
        meal_plan = self.db.query(MealPlan).filter(MealPlan.id == meal_plan_id).first()
        if not meal_plan:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal plan not found")

        site = Site(meal_plan.site)
        return self._cook(
            meal_plan.recipe,
            site,
            match_location=True,
            restock_on_depletion=site == Site.SHORE,
        )

    def _cook(
        self,
        recipe: Recipe,
        site: Site,
        match_location: bool = False,
        restock_on_depletion: bool = False,
    ) -> CookResult:
        recipe_id = recipe.id
        recipe_name = recipe.name
        ingredients = list(recipe.ingredients)

        try:
            result = self.engine.reconcile(
                ingredients,
                site,
                match_location=match_location,
                restock_on_depletion=restock_on_depletion,
            )
        except PersistenceFailure as e:
            logger.error(f"Error marking {recipe_name} as made at {site.value}: {e}")
            result = e.partial_result

        return self._build_result(recipe_id, recipe_name, result)

    @staticmethod
    def _build_result(
        recipe_id: int, recipe_name: str, result: ReconciliationResult
    ) -> CookResult:
        return CookResult(
            recipe_id=recipe_id,
            recipe_name=recipe_name,
            status=result.status,
            message=result.summary(recipe_name),
            result=result,
        )
