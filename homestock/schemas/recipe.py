"""Recipe schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from homestock.models.enums import Site

# --- Recipe Ingredient ---


class RecipeIngredientCreate(BaseModel):
    """Create a recipe ingredient."""

    ingredient_name: str = Field(..., min_length=1, max_length=255)
    quantity: float = Field(0, ge=0)
    unit: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=100)


class RecipeIngredientUpdate(BaseModel):
    """Update a recipe ingredient."""

    ingredient_name: str | None = Field(None, min_length=1, max_length=255)
    quantity: float | None = Field(None, ge=0)
    unit: str | None = Field(None, max_length=50)
    location: str | None = Field(None, max_length=100)


class RecipeIngredientResponse(BaseModel):
    """Recipe ingredient response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipe_id: int
    ingredient_name: str
    quantity: float
    unit: str | None
    location: str | None
    position: int


# --- Recipe ---


class RecipeCreate(BaseModel):
    """Create a new recipe."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    directions: str | None = Field(None, max_length=50000)
    notes: str | None = Field(None, max_length=10000)
    tags: list[str] = []
    servings: int | None = Field(None, ge=1)
    cook_time: str | None = Field(None, max_length=50)
    ingredients: list[RecipeIngredientCreate] = []


class RecipeUpdate(BaseModel):
    """Update a recipe."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    directions: str | None = Field(None, max_length=50000)
    notes: str | None = Field(None, max_length=10000)
    tags: list[str] | None = None
    servings: int | None = Field(None, ge=1)
    cook_time: str | None = Field(None, max_length=50)


class RecipeResponse(BaseModel):
    """Recipe response with ingredients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    directions: str | None
    notes: str | None
    tags: list[str] | None
    servings: int | None
    cook_time: str | None
    ingredients: list[RecipeIngredientResponse]
    created_at: datetime
    updated_at: datetime


class RecipeListResponse(BaseModel):
    """Recipe summary for list view."""

    id: int
    name: str
    description: str | None
    tags: list[str] | None
    servings: int | None
    cook_time: str | None
    ingredient_count: int


class CookRequest(BaseModel):
    """Mark a recipe as made at a site."""

    site: Site
