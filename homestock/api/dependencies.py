"""FastAPI dependencies for services."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from homestock.database import get_db
from homestock.services.conversion_service import ConversionService
from homestock.services.meal_plan_service import MealPlanService
from homestock.services.pantry_service import PantryService
from homestock.services.recipe_service import RecipeService
from homestock.services.shopping_service import ShoppingService
from homestock.services.staple_service import StapleService


def get_recipe_service(
    db: Annotated[Session, Depends(get_db)],
) -> RecipeService:
    """Get recipe service with dependencies."""
    return RecipeService(db)


def get_pantry_service(
    db: Annotated[Session, Depends(get_db)],
) -> PantryService:
    """Get pantry service with dependencies."""
    return PantryService(db)


def get_conversion_service(
    db: Annotated[Session, Depends(get_db)],
) -> ConversionService:
    """Get conversion service with dependencies."""
    return ConversionService(db)


def get_shopping_service(
    db: Annotated[Session, Depends(get_db)],
) -> ShoppingService:
    """Get shopping service with dependencies."""
    return ShoppingService(db)


def get_staple_service(
    db: Annotated[Session, Depends(get_db)],
) -> StapleService:
    """Get staple service with dependencies."""
    return StapleService(db)


def get_meal_plan_service(
    db: Annotated[Session, Depends(get_db)],
) -> MealPlanService:
    """Get meal plan service with dependencies."""
    return MealPlanService(db)
