"""SQLAlchemy models."""

from homestock.models.conversion_factor import ConversionFactor
from homestock.models.meal_plan import MealPlan
from homestock.models.pantry import PantryItem
from homestock.models.recipe import Recipe, RecipeIngredient
from homestock.models.shopping import ShoppingListEntry
from homestock.models.staple import Staple

__all__ = [
    "PantryItem",
    "Recipe",
    "RecipeIngredient",
    "ConversionFactor",
    "ShoppingListEntry",
    "Staple",
    "MealPlan",
]
