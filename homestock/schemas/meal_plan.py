"""Meal plan schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from homestock.models.enums import DayOfWeek, MealType, Site, WeekType


class MealPlanCreate(BaseModel):
    """Schedule a recipe into a slot."""

    recipe_id: int
    site: Site
    week_type: WeekType
    day_of_week: DayOfWeek
    meal_type: MealType


class MealPlanResponse(BaseModel):
    """Meal plan slot response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    recipe_name: str | None = None
    site: Site
    week_type: WeekType
    day_of_week: DayOfWeek
    meal_type: MealType
    created_at: datetime


class GroceryListLine(BaseModel):
    """One ingredient the planned week still needs."""

    name: str
    quantity: float
    unit: str | None
    location: str | None
    entry_id: int


class GroceryListResult(BaseModel):
    """Result of generating a week's grocery list."""

    site: Site
    week_type: WeekType
    lines: list[GroceryListLine]
