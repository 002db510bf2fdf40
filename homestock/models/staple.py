"""Staple model: ingredients the household always wants a minimum of."""

from sqlalchemy import Column, Float, Integer, String

from homestock.database import Base
from homestock.models.mixins import TimestampMixin


class Staple(Base, TimestampMixin):
    """Minimum desired stock for an ingredient."""

    __tablename__ = "staples"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True)
    minimum_quantity = Column(Float, nullable=False, default=1)
    unit = Column(String(50), nullable=False, default="each")
    location = Column(String(100), nullable=False, default="Pantry")
