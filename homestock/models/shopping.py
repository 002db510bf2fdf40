"""Shopping list entry model."""

from sqlalchemy import Boolean, Column, Float, Integer, String

from homestock.database import Base
from homestock.models.mixins import TimestampMixin


class ShoppingListEntry(Base, TimestampMixin):
    """One row of the shared shopping list.

    A leading Shore marker on item_name ("&" unless the reconciliation
    rules configure another) marks the row as Shore-origin.
    """

    __tablename__ = "shopping_list"

    id = Column(Integer, primary_key=True, index=True)
    item_name = Column(String(255), nullable=False, index=True)
    quantity = Column(Float, nullable=False, default=1)
    unit = Column(String(50), nullable=True)
    location = Column(String(100), nullable=True)
    is_purchased = Column(Boolean, nullable=False, default=False)
    is_staple = Column(Boolean, nullable=False, default=False)
