"""Reconciliation result schemas."""

from typing import Literal

from pydantic import BaseModel, Field, computed_field

from homestock.models.enums import Site


class Deduction(BaseModel):
    """A pantry record that was updated for one ingredient line."""

    ingredient_name: str
    pantry_item_id: int
    pantry_item_name: str
    previous_quantity: float
    new_quantity: float
    unit: str


class MissingIngredient(BaseModel):
    """No pantry record at the site for the ingredient."""

    ingredient_name: str
    location: str | None = None

    def describe(self) -> str:
        return f"{self.ingredient_name} ({self.location or 'any location'})"


class ConversionNeeded(BaseModel):
    """Pantry unit differs from the required unit and no factor is on file."""

    ingredient_name: str
    required_quantity: float
    required_unit: str
    pantry_quantity: float
    pantry_unit: str

    def describe(self) -> str:
        return (
            f"Cannot subtract {self.required_quantity:g} {self.required_unit} of "
            f"{self.ingredient_name} from {self.pantry_quantity:g} {self.pantry_unit}. "
            "Please add conversion factor."
        )


class ReconciliationResult(BaseModel):
    """Outcome of reconciling one recipe against one site's pantry."""

    site: Site
    deducted: list[Deduction] = Field(default_factory=list)
    exempt: list[str] = Field(default_factory=list)
    missing: list[MissingIngredient] = Field(default_factory=list)
    conversion_needed: list[ConversionNeeded] = Field(default_factory=list)
    shopping_entry_ids: list[int] = Field(default_factory=list)
    failed: bool = False
    error: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> Literal["success", "partial", "failed"]:
        if self.failed:
            return "failed"
        if self.missing or self.conversion_needed:
            return "partial"
        return "success"

    @property
    def deductions(self) -> dict[int, float]:
        """Map of pantry item id -> quantity written back."""
        return {d.pantry_item_id: d.new_quantity for d in self.deducted}

    @property
    def shortages(self) -> list[str]:
        """Every ingredient that could not be deducted, missing ones first."""
        return [m.describe() for m in self.missing] + [
            c.ingredient_name for c in self.conversion_needed
        ]

    @property
    def satisfied_count(self) -> int:
        return len(self.deducted) + len(self.exempt)

    def summary(self, recipe_name: str) -> str:
        """User-facing message distinguishing success, partial success and failure."""
        where = f"at {self.site.display_name}"
        if self.failed:
            return (
                f"Failed to mark {recipe_name} as made {where}: {self.error or 'Unknown error'}. "
                f"{self.satisfied_count} ingredients were deducted before the failure."
            )

        if self.status == "success":
            return (
                f"{recipe_name} marked as made {where}. "
                f"All {self.satisfied_count} ingredients deducted."
            )

        parts = [f"{recipe_name} marked as made {where}."]
        if self.missing:
            parts.append(
                "Missing ingredients: " + ", ".join(m.describe() for m in self.missing) + "."
            )
        if self.conversion_needed:
            parts.append(
                "Unit conversion needed: "
                + ", ".join(c.ingredient_name for c in self.conversion_needed)
                + "."
            )
        return " ".join(parts)


class CookResult(BaseModel):
    """Response for marking a recipe or planned meal as cooked."""

    recipe_id: int
    recipe_name: str
    status: Literal["success", "partial", "failed"]
    message: str
    result: ReconciliationResult
