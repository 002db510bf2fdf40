"""Meal plan model for the weekly A/B schedule."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import backref, relationship

from homestock.database import Base
from homestock.models.mixins import TimestampMixin


class MealPlan(Base, TimestampMixin):
    """A recipe scheduled into one slot of a site's week."""

    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id"), nullable=False, index=True)
    site = Column(String(20), nullable=False, index=True)
    week_type = Column(String(1), nullable=False)  # "A" | "B"
    day_of_week = Column(String(10), nullable=False)
    meal_type = Column(String(20), nullable=False)

    # Relationships
    recipe = relationship(
        "Recipe", backref=backref("meal_plans", cascade="all, delete-orphan")
    )
