"""Pydantic schemas for API requests and responses."""

from homestock.schemas.conversion import (
    ConversionFactorCreate,
    ConversionFactorResponse,
    ConversionFactorUpdate,
)
from homestock.schemas.pantry import PantryItemCreate, PantryItemResponse, PantryItemUpdate
from homestock.schemas.reconciliation import CookResult, ReconciliationResult
from homestock.schemas.recipe import RecipeCreate, RecipeResponse, RecipeUpdate

__all__ = [
    "PantryItemCreate",
    "PantryItemUpdate",
    "PantryItemResponse",
    "RecipeCreate",
    "RecipeUpdate",
    "RecipeResponse",
    "ConversionFactorCreate",
    "ConversionFactorUpdate",
    "ConversionFactorResponse",
    "ReconciliationResult",
    "CookResult",
]
