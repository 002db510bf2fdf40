"""Meal plan API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from homestock.api.dependencies import get_meal_plan_service, get_recipe_service
from homestock.database import get_db
from homestock.models.enums import Site, WeekType
from homestock.models.meal_plan import MealPlan
from homestock.models.recipe import Recipe
from homestock.schemas.meal_plan import GroceryListResult, MealPlanCreate, MealPlanResponse
from homestock.schemas.reconciliation import CookResult
from homestock.services.meal_plan_service import MealPlanService
from homestock.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/meal-plans", tags=["meal-plans"])


def to_response(meal_plan: MealPlan) -> MealPlanResponse:
    return MealPlanResponse(
        id=meal_plan.id,
        recipe_id=meal_plan.recipe_id,
        recipe_name=meal_plan.recipe.name if meal_plan.recipe else None,
        site=meal_plan.site,
        week_type=meal_plan.week_type,
        day_of_week=meal_plan.day_of_week,
        meal_type=meal_plan.meal_type,
        created_at=meal_plan.created_at,
    )


@router.get("", response_model=list[MealPlanResponse])
def list_meal_plans(
    site: Site,
    week_type: WeekType,
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """List a site's week."""
    return [to_response(plan) for plan in service.week_plans(site, week_type)]


@router.post("", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
def schedule_meal(
    data: MealPlanCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Schedule a recipe into a slot."""
    if not db.query(Recipe).filter(Recipe.id == data.recipe_id).first():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")

    meal_plan = MealPlan(
        recipe_id=data.recipe_id,
        site=data.site.value,
        week_type=data.week_type.value,
        day_of_week=data.day_of_week.value,
        meal_type=data.meal_type.value,
    )
    db.add(meal_plan)
    db.commit()
    db.refresh(meal_plan)
    return to_response(meal_plan)


@router.delete("", status_code=status.HTTP_200_OK)
def clear_week(
    site: Site,
    week_type: WeekType,
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Clear a site's week."""
    return {"removed": service.clear_week(site, week_type)}


@router.post("/grocery-list", response_model=GroceryListResult)
def generate_grocery_list(
    site: Site,
    week_type: WeekType,
    service: Annotated[MealPlanService, Depends(get_meal_plan_service)],
):
    """Add whatever the planned week needs beyond current stock to the shopping list."""
    return service.generate_grocery_list(site, week_type)


@router.post("/{meal_plan_id}/cook", response_model=CookResult)
def cook_meal(
    meal_plan_id: int,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Mark a planned meal as cooked and deduct its ingredients from the plan's site."""
    return service.cook_meal_plan(meal_plan_id)


@router.delete("/{meal_plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_meal(
    meal_plan_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Remove a meal from the plan."""
    meal_plan = db.query(MealPlan).filter(MealPlan.id == meal_plan_id).first()
    if not meal_plan:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meal plan not found")
    db.delete(meal_plan)
    db.commit()
