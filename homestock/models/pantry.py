"""Pantry item model for tracking stock at each site."""

from sqlalchemy import Column, Float, Integer, String

from homestock.database import Base
from homestock.models.mixins import TimestampMixin


class PantryItem(Base, TimestampMixin):
    """Stock of one ingredient at one location of a site.

    (name, location, site) is unique in practice but not enforced; lookups
    take the first matching record.
    """

    __tablename__ = "pantry_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    quantity = Column(Float, nullable=False, default=0)
    unit = Column(String(50), nullable=False, default="each")
    location = Column(String(100), nullable=False)  # "Pantry", "Inside fridge", ...
    site = Column(String(20), nullable=False, index=True)  # "jackson" | "shore"
