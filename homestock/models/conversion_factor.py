"""Per-ingredient unit conversion factors."""

from sqlalchemy import Column, Float, Integer, String

from homestock.database import Base
from homestock.models.mixins import TimestampMixin


class ConversionFactor(Base, TimestampMixin):
    """Asserts that 1 from_unit of an ingredient equals `factor` to_unit."""

    __tablename__ = "conversion_factors"

    id = Column(Integer, primary_key=True, index=True)
    ingredient_name = Column(String(255), nullable=False, index=True)
    from_unit = Column(String(50), nullable=False)
    to_unit = Column(String(50), nullable=False)
    factor = Column(Float, nullable=False)
