"""Recipe API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from homestock.api.dependencies import get_recipe_service
from homestock.database import get_db
from homestock.models.recipe import Recipe, RecipeIngredient
from homestock.schemas.reconciliation import CookResult
from homestock.schemas.recipe import (
    CookRequest,
    RecipeCreate,
    RecipeIngredientCreate,
    RecipeIngredientResponse,
    RecipeIngredientUpdate,
    RecipeListResponse,
    RecipeResponse,
    RecipeUpdate,
)
from homestock.services.recipe_service import RecipeService

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


def get_recipe(db: Session, recipe_id: int) -> Recipe:
    """Get a recipe or 404."""
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe


def get_ingredient(db: Session, ingredient_id: int) -> RecipeIngredient:
    """Get a recipe ingredient or 404."""
    ingredient = db.query(RecipeIngredient).filter(RecipeIngredient.id == ingredient_id).first()
    if not ingredient:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ingredient not found")
    return ingredient


@router.get("", response_model=list[RecipeListResponse])
def list_recipes(
    db: Annotated[Session, Depends(get_db)],
    search: str | None = None,
    tag: str | None = None,
):
    """List recipes, optionally filtered by name/description text and tag."""
    recipes = db.query(Recipe).order_by(Recipe.name).all()

    result = []
    for recipe in recipes:
        if search:
            term = search.lower()
            in_name = term in recipe.name.lower()
            in_description = term in (recipe.description or "").lower()
            if not (in_name or in_description):
                continue
        if tag and tag not in (recipe.tags or []):
            continue

        result.append(
            RecipeListResponse(
                id=recipe.id,
                name=recipe.name,
                description=recipe.description,
                tags=recipe.tags,
                servings=recipe.servings,
                cook_time=recipe.cook_time,
                ingredient_count=len(recipe.ingredients),
            )
        )
    return result


@router.get("/tags", response_model=list[str])
def list_tags(db: Annotated[Session, Depends(get_db)]):
    """All tags in use, sorted."""
    tags: set[str] = set()
    for (recipe_tags,) in db.query(Recipe.tags).all():
        tags.update(recipe_tags or [])
    return sorted(tags)


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    recipe_data: RecipeCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new recipe with ingredients."""
    recipe = Recipe(
        name=recipe_data.name,
        description=recipe_data.description,
        directions=recipe_data.directions,
        notes=recipe_data.notes,
        tags=recipe_data.tags,
        servings=recipe_data.servings,
        cook_time=recipe_data.cook_time,
    )

    for position, ing_data in enumerate(recipe_data.ingredients):
        recipe.ingredients.append(
            RecipeIngredient(
                ingredient_name=ing_data.ingredient_name.strip(),
                quantity=ing_data.quantity,
                unit=ing_data.unit,
                location=ing_data.location,
                position=position,
            )
        )

    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    return recipe


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe_endpoint(
    recipe_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a specific recipe."""
    return get_recipe(db, recipe_id)


@router.put("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: int,
    recipe_data: RecipeUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Update recipe metadata."""
    recipe = get_recipe(db, recipe_id)

    for field, value in recipe_data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(recipe, field, value)

    db.commit()
    db.refresh(recipe)
    return recipe


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a recipe, its ingredients and any meal plan slots using it."""
    recipe = get_recipe(db, recipe_id)
    db.delete(recipe)
    db.commit()


@router.post("/{recipe_id}/cook", response_model=CookResult)
def cook_recipe(
    recipe_id: int,
    request: CookRequest,
    service: Annotated[RecipeService, Depends(get_recipe_service)],
):
    """Mark a recipe as made at a site, deducting its ingredients from that pantry.

    Always answers with a summary: missing ingredients and ingredients that
    need a conversion factor are listed, and a store failure reports which
    deductions were already applied.
    """
    return service.cook_recipe(recipe_id, request.site)


# --- Ingredients ---


@router.post(
    "/{recipe_id}/ingredients",
    response_model=RecipeIngredientResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_ingredient(
    recipe_id: int,
    ingredient_data: RecipeIngredientCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Add an ingredient to a recipe."""
    recipe = get_recipe(db, recipe_id)
    position = max((i.position for i in recipe.ingredients), default=-1) + 1

    ingredient = RecipeIngredient(
        recipe_id=recipe.id,
        ingredient_name=ingredient_data.ingredient_name.strip(),
        quantity=ingredient_data.quantity,
        unit=ingredient_data.unit,
        location=ingredient_data.location,
        position=position,
    )
    db.add(ingredient)
    db.commit()
    db.refresh(ingredient)
    return ingredient


@router.put("/ingredients/{ingredient_id}", response_model=RecipeIngredientResponse)
def update_ingredient(
    ingredient_id: int,
    ingredient_data: RecipeIngredientUpdate,
    db: Annotated[Session, Depends(get_db)],
):
    """Update a recipe ingredient."""
    ingredient = get_ingredient(db, ingredient_id)

    for field, value in ingredient_data.model_dump(exclude_unset=True, exclude_none=True).items():
        if field == "ingredient_name":
            value = value.strip()
        setattr(ingredient, field, value)

    db.commit()
    db.refresh(ingredient)
    return ingredient


@router.delete("/ingredients/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_ingredient(
    ingredient_id: int,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a recipe ingredient."""
    ingredient = get_ingredient(db, ingredient_id)
    db.delete(ingredient)
    db.commit()
