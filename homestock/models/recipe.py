"""Recipe and RecipeIngredient models."""

from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from homestock.database import Base
from homestock.models.mixins import TimestampMixin


class Recipe(Base, TimestampMixin):
    """Recipe model for storing recipe definitions."""

    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    directions = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)  # ["dinner", "vegetarian", ...]
    servings = Column(Integer, nullable=True)
    cook_time = Column(String(50), nullable=True)

    # Relationships
    ingredients = relationship(
        "RecipeIngredient",
        back_populates="recipe",
        cascade="all, delete-orphan",
        order_by="RecipeIngredient.position, RecipeIngredient.id",
    )


class RecipeIngredient(Base, TimestampMixin):
    """Required amount of one ingredient within a recipe."""

    __tablename__ = "recipe_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    ingredient_name = Column(String(255), nullable=False)
    quantity = Column(Float, nullable=False, default=0)
    unit = Column(String(50), nullable=True)
    location = Column(String(100), nullable=True)
    position = Column(Integer, nullable=False, default=0)

    # Relationships
    recipe = relationship("Recipe", back_populates="ingredients")
