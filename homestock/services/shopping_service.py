"""Shopping list consolidation and write-back."""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from homestock.models.enums import Site
from homestock.models.pantry import PantryItem
from homestock.models.shopping import ShoppingListEntry
from homestock.schemas.shopping import ConsolidatedItem
from homestock.services.reconciliation_rules import ReconciliationRules, get_rules

logger = logging.getLogger(__name__)

CATEGORY_ORDER = [
    "Produce",
    "Meat & Seafood",
    "Dairy",
    "Frozen",
    "Pantry",
    "Bread & Bakery",
    "Beverages",
    "Other",
]

# Keyword -> aisle; first category whose keyword appears in the name wins
GROCERY_CATEGORIES = {
    "Produce": [
        "lettuce", "tomato", "onion", "garlic", "carrot", "celery", "pepper", "cucumber",
        "apple", "banana", "orange", "lemon", "lime", "potato", "mushroom", "spinach",
        "broccoli", "cauliflower", "avocado", "strawberry", "berry", "grapes", "melon",
        "squash", "zucchini", "corn", "bean", "pea", "herb", "basil", "parsley",
        "cilantro", "mint",
    ],
    "Meat & Seafood": [
        "chicken", "beef", "pork", "turkey", "fish", "salmon", "shrimp", "crab",
        "lobster", "sausage", "bacon", "ham", "ground beef", "steak", "chop",
    ],
    "Dairy": ["milk", "cheese", "yogurt", "butter", "cream", "egg", "sour cream"],
    "Frozen": ["frozen", "ice cream"],
    "Pantry": [
        "flour", "sugar", "rice", "pasta", "oil", "vinegar", "sauce", "spice", "salt",
        "can", "soup", "cereal", "oats", "honey", "syrup", "broth", "stock",
    ],
    "Bread & Bakery": ["bread", "rolls", "bagel", "muffin", "cake", "cookie", "pastry"],
    "Beverages": ["juice", "soda", "water", "coffee", "tea", "wine", "beer"],
}

# Shopping list locations are Shore-style; Jackson stores them under longer names
JACKSON_LOCATION_MAP = {
    "Fridge": "Inside fridge",
    "Freezer": "Inside freezer",
    "Pantry": "Pantry",
}


def strip_marker(item_name: str, marker: str | None = None) -> tuple[str, bool]:
    """Split a list entry name into (base name, is Shore-origin).

    The marker defaults to the configured `shore_marker` rule.
    """
    marker = marker or get_rules().shore_marker
    if item_name.startswith(marker):
        return item_name[len(marker) :], True
    return item_name, False


def apply_marker(base_name: str, site: Site, marker: str | None = None) -> str:
    """Name a list entry for a site: Shore entries carry the marker."""
    marker = marker or get_rules().shore_marker
    return f"{marker}{base_name}" if Site(site) == Site.SHORE else base_name


def categorize_item(item_name: str, marker: str | None = None) -> str:
    """Assign a grocery aisle from keywords in the name."""
    lower_name = strip_marker(item_name, marker)[0].lower()
    for category, keywords in GROCERY_CATEGORIES.items():
        if any(keyword in lower_name for keyword in keywords):
            return category
    return "Other"


def consolidate(
    entries: Iterable[ShoppingListEntry], marker: str | None = None
) -> list[ConsolidatedItem]:
    """Merge per-site rows for the same item into one display row.

    Rows are grouped by base name (marker stripped). Each site keeps its own
    quantity, unit and row id. Several rows for the same site are shown as
    one: quantities are summed, the oldest row's id and unit are used, and
    that site counts as purchased only when all of them are. The combined
    purchased flag is true only when every row present is purchased.
    """
    marker = marker or get_rules().shore_marker
    consolidated: dict[str, ConsolidatedItem] = {}

    for entry in sorted(entries, key=lambda e: e.id):
        name, is_shore = strip_marker(entry.item_name, marker)
        item = consolidated.get(name)
        if item is None:
            item = ConsolidatedItem(name=name, category=categorize_item(name, marker))
            consolidated[name] = item

        quantity = float(entry.quantity or 0)
        purchased = bool(entry.is_purchased)
        if is_shore:
            if item.shore_id is None:
                item.shore_id = entry.id
                item.shore_quantity = quantity
                item.shore_unit = entry.unit
                item.shore_purchased = purchased
            else:
                item.shore_quantity += quantity
                item.shore_purchased = item.shore_purchased and purchased
        else:
            if item.jackson_id is None:
                item.jackson_id = entry.id
                item.jackson_quantity = quantity
                item.jackson_unit = entry.unit
                item.jackson_purchased = purchased
            else:
                item.jackson_quantity += quantity
                item.jackson_purchased = item.jackson_purchased and purchased

        item.is_staple = item.is_staple or bool(entry.is_staple)

    for item in consolidated.values():
        flags = [
            purchased
            for row_id, purchased in (
                (item.shore_id, item.shore_purchased),
                (item.jackson_id, item.jackson_purchased),
            )
            if row_id is not None
        ]
        item.is_purchased = bool(flags) and all(flags)

    return sort_items(list(consolidated.values()))


def sort_items(items: list[ConsolidatedItem]) -> list[ConsolidatedItem]:
    """Order by aisle, then by name."""
    return sorted(
        items,
        key=lambda i: (CATEGORY_ORDER.index(i.category), i.name.lower()),
    )


class ShoppingService:
    """Service for shopping list write-back and restocking.

    Shore rows are recognised by the `shore_marker` of the rules the service
    is built with, the same marker the reconciliation engine writes.
    """

    def __init__(self, db: Session, rules: ReconciliationRules | None = None):
        self.db = db
        self.marker = (rules or get_rules()).shore_marker

    def consolidate(self, entries: Iterable[ShoppingListEntry]) -> list[ConsolidatedItem]:
        return consolidate(entries, self.marker)

    def list_consolidated(self) -> list[ConsolidatedItem]:
        entries = self.db.query(ShoppingListEntry).order_by(ShoppingListEntry.id).all()
        return self.consolidate(entries)

    def rows_for(self, name: str) -> list[ShoppingListEntry]:
        """Underlying rows (either site) behind one consolidated item."""
        return (
            self.db.query(ShoppingListEntry)
            .filter(
                ShoppingListEntry.item_name.in_(
                    [
                        apply_marker(name, Site.JACKSON, self.marker),
                        apply_marker(name, Site.SHORE, self.marker),
                    ]
                )
            )
            .order_by(ShoppingListEntry.id)
            .all()
        )

    def site_rows(self, name: str, site: Site) -> list[ShoppingListEntry]:
        """Every row for an item at one site, oldest first."""
        return (
            self.db.query(ShoppingListEntry)
            .filter(ShoppingListEntry.item_name == apply_marker(name, site, self.marker))
            .order_by(ShoppingListEntry.id)
            .all()
        )

    def row_for_site(self, name: str, site: Site) -> ShoppingListEntry | None:
        """The site's row for an item, folding any duplicate rows into the oldest."""
        rows = self.site_rows(name, site)
        if not rows:
            return None

        row, duplicates = rows[0], rows[1:]
        for duplicate in duplicates:
            row.quantity = float(row.quantity or 0) + float(duplicate.quantity or 0)
            row.is_purchased = bool(row.is_purchased) and bool(duplicate.is_purchased)
            row.is_staple = bool(row.is_staple) or bool(duplicate.is_staple)
            self.db.delete(duplicate)
        if duplicates:
            self.db.flush()
            logger.info(f"Merged {len(duplicates)} duplicate rows into '{row.item_name}'")
        return row

    def update_site_row(
        self, name: str, site: Site, quantity: float | None, unit: str | None
    ) -> ShoppingListEntry | None:
        """Set quantity or unit of the site's row for an item (no commit)."""
        entry = self.row_for_site(name, site)
        if entry is None:
            return None

        if quantity is not None:
            entry.quantity = quantity
        if unit is not None:
            entry.unit = unit
        self.db.flush()
        return entry

    def upsert(
        self,
        name: str,
        site: Site,
        quantity: float,
        unit: str | None,
        location: str | None,
        is_staple: bool = False,
    ) -> ShoppingListEntry:
        """Insert or overwrite the site's row for an item."""
        entry = self.row_for_site(name, site)
        if entry:
            entry.quantity = quantity
            entry.unit = unit
            entry.location = location
            entry.is_staple = entry.is_staple or is_staple
        else:
            entry = ShoppingListEntry(
                item_name=apply_marker(name, site, self.marker),
                quantity=quantity,
                unit=unit,
                location=location,
                is_purchased=False,
                is_staple=is_staple,
            )
            self.db.add(entry)
        self.db.flush()
        return entry

    def add_purchased_to_inventory(self) -> dict:
        """Move purchased rows into the pantry of the site their marker names.

        Returns:
            {"added": int, "updated": int, "removed": int}
        """
        purchased = (
            self.db.query(ShoppingListEntry)
            .filter(ShoppingListEntry.is_purchased.is_(True))
            .order_by(ShoppingListEntry.id)
            .all()
        )
        result = {"added": 0, "updated": 0, "removed": 0}

        for entry in purchased:
            name, is_shore = strip_marker(entry.item_name, self.marker)
            site = Site.SHORE if is_shore else Site.JACKSON

            existing = (
                self.db.query(PantryItem)
                .filter(PantryItem.name == name, PantryItem.site == site.value)
                .order_by(PantryItem.id)
                .first()
            )

            if existing:
                existing.quantity = float(existing.quantity or 0) + float(entry.quantity or 0)
                result["updated"] += 1
            else:
                location = entry.location or "Pantry"
                if site == Site.JACKSON:
                    location = JACKSON_LOCATION_MAP.get(location, "Pantry")
                self.db.add(
                    PantryItem(
                        name=name,
                        quantity=entry.quantity or 0,
                        unit=entry.unit or "each",
                        location=location,
                        site=site.value,
                    )
                )
                result["added"] += 1

            self.db.delete(entry)
            result["removed"] += 1

        self.db.commit()
        logger.info(
            f"Stocked {result['removed']} purchased items "
            f"({result['added']} new, {result['updated']} topped up)"
        )
        return result
