"""Meal plan API tests."""

import pytest

from homestock.models.pantry import PantryItem
from homestock.models.shopping import ShoppingListEntry

TACOS = [
    ("ground beef", 1, "lb", "Fridge"),
    ("tortillas", 8, "each", "Pantry"),
    ("salt", 1, "tsp", "Pantry"),
]


@pytest.fixture
def tacos(make_recipe):
    return make_recipe("Tacos", TACOS)


def schedule(client, recipe_id, site="shore", week_type="A", day="Monday", meal="Dinner"):
    response = client.post(
        "/api/v1/meal-plans",
        json={
            "recipe_id": recipe_id,
            "site": site,
            "week_type": week_type,
            "day_of_week": day,
            "meal_type": meal,
        },
    )
    assert response.status_code == 201
    return response.json()


def test_schedule_meal(client, tacos):
    data = schedule(client, tacos.id)
    assert data["recipe_name"] == "Tacos"
    assert data["site"] == "shore"
    assert data["week_type"] == "A"
    assert data["day_of_week"] == "Monday"
    assert data["meal_type"] == "Dinner"


def test_schedule_unknown_recipe(client):
    response = client.post(
        "/api/v1/meal-plans",
        json={
            "recipe_id": 99999,
            "site": "shore",
            "week_type": "A",
            "day_of_week": "Monday",
            "meal_type": "Dinner",
        },
    )
    assert response.status_code == 404


def test_schedule_invalid_slot(client, tacos):
    response = client.post(
        "/api/v1/meal-plans",
        json={
            "recipe_id": tacos.id,
            "site": "shore",
            "week_type": "C",
            "day_of_week": "Monday",
            "meal_type": "Dinner",
        },
    )
    assert response.status_code == 422


def test_list_week(client, tacos):
    schedule(client, tacos.id, day="Monday")
    schedule(client, tacos.id, day="Friday")
    schedule(client, tacos.id, week_type="B")
    schedule(client, tacos.id, site="jackson")

    data = client.get("/api/v1/meal-plans", params={"site": "shore", "week_type": "A"}).json()
    assert [p["day_of_week"] for p in data] == ["Monday", "Friday"]


def test_clear_week(client, tacos):
    schedule(client, tacos.id, day="Monday")
    schedule(client, tacos.id, day="Friday")
    schedule(client, tacos.id, week_type="B")

    response = client.delete("/api/v1/meal-plans", params={"site": "shore", "week_type": "A"})
    assert response.json() == {"removed": 2}

    remaining = client.get("/api/v1/meal-plans", params={"site": "shore", "week_type": "B"})
    assert len(remaining.json()) == 1


def test_remove_meal(client, tacos):
    plan = schedule(client, tacos.id)

    assert client.delete(f"/api/v1/meal-plans/{plan['id']}").status_code == 204
    assert client.delete(f"/api/v1/meal-plans/{plan['id']}").status_code == 404


def test_deleting_recipe_removes_its_slots(client, tacos):
    schedule(client, tacos.id)

    client.delete(f"/api/v1/recipes/{tacos.id}")

    data = client.get("/api/v1/meal-plans", params={"site": "shore", "week_type": "A"}).json()
    assert data == []


# --- Grocery list ---


def test_grocery_list_for_shore(client, db, tacos, add_pantry):
    """Shore shortfalls are written as marker-prefixed entries."""
    add_pantry("tortillas", 3, "each", "Pantry", site="shore")
    add_pantry("ground beef", 5, "lb", "Fridge", site="jackson")
    schedule(client, tacos.id, day="Monday")
    schedule(client, tacos.id, day="Thursday")

    response = client.post(
        "/api/v1/meal-plans/grocery-list", params={"site": "shore", "week_type": "A"}
    )
    assert response.status_code == 200
    lines = {line["name"]: line for line in response.json()["lines"]}
    assert set(lines) == {"ground beef", "tortillas"}
    assert lines["ground beef"]["quantity"] == 2
    assert lines["tortillas"]["quantity"] == 13

    entries = {e.item_name: e for e in db.query(ShoppingListEntry).all()}
    assert set(entries) == {"&ground beef", "&tortillas"}
    assert entries["&ground beef"].location == "Fridge"


def test_grocery_list_skips_covered_items(client, db, tacos, add_pantry):
    add_pantry("tortillas", 20, "each", "Pantry", site="jackson")
    add_pantry("ground beef", 1, "lb", "Fridge", site="jackson")
    schedule(client, tacos.id, site="jackson")

    response = client.post(
        "/api/v1/meal-plans/grocery-list", params={"site": "jackson", "week_type": "A"}
    )
    assert response.json()["lines"] == []
    assert db.query(ShoppingListEntry).count() == 0


def test_grocery_list_counts_stock_at_the_line_location(client, tacos, add_pantry):
    """Stock stored somewhere else does not cover a line."""
    add_pantry("ground beef", 5, "lb", "Freezer", site="shore")
    schedule(client, tacos.id)

    response = client.post(
        "/api/v1/meal-plans/grocery-list", params={"site": "shore", "week_type": "A"}
    )
    lines = {line["name"]: line for line in response.json()["lines"]}
    assert lines["ground beef"]["quantity"] == 1


def test_grocery_list_for_jackson_uses_plain_names(client, db, tacos):
    schedule(client, tacos.id, site="jackson")

    client.post("/api/v1/meal-plans/grocery-list", params={"site": "jackson", "week_type": "A"})

    names = {e.item_name for e in db.query(ShoppingListEntry).all()}
    assert names == {"ground beef", "tortillas"}


def test_grocery_list_regenerated_overwrites(client, db, tacos):
    schedule(client, tacos.id)
    client.post("/api/v1/meal-plans/grocery-list", params={"site": "shore", "week_type": "A"})
    client.post("/api/v1/meal-plans/grocery-list", params={"site": "shore", "week_type": "A"})

    assert db.query(ShoppingListEntry).count() == 2


# --- Cooking planned meals ---


def test_cook_shore_meal_queues_restock(client, db, tacos, add_pantry):
    """Depleting a Shore record puts it back on the shopping list."""
    beef = add_pantry("ground beef", 1, "lb", "Fridge", site="shore")
    tortillas = add_pantry("tortillas", 10, "each", "Pantry", site="shore")
    plan = schedule(client, tacos.id)

    response = client.post(f"/api/v1/meal-plans/{plan['id']}/cook")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "success"
    assert data["message"] == "Tacos marked as made at Shore. All 3 ingredients deducted."

    db.expire_all()
    assert db.query(PantryItem).filter_by(id=beef.id).one().quantity == 0
    assert db.query(PantryItem).filter_by(id=tortillas.id).one().quantity == 2

    entries = db.query(ShoppingListEntry).all()
    assert [(e.item_name, e.quantity, e.location) for e in entries] == [
        ("&ground beef", 1, "Fridge")
    ]
    assert data["result"]["shopping_entry_ids"] == [entries[0].id]


def test_cook_shore_meal_matches_location(client, tacos, add_pantry):
    """Planned meals only draw on stock at the ingredient's location."""
    add_pantry("ground beef", 1, "lb", "Freezer", site="shore")
    add_pantry("tortillas", 10, "each", "Pantry", site="shore")
    plan = schedule(client, tacos.id)

    data = client.post(f"/api/v1/meal-plans/{plan['id']}/cook").json()
    assert data["status"] == "partial"
    assert "Missing ingredients: ground beef (Fridge)." in data["message"]


def test_cook_jackson_meal_does_not_restock(client, db, tacos, add_pantry):
    add_pantry("ground beef", 1, "lb", "Fridge")
    add_pantry("tortillas", 8, "each", "Pantry")
    plan = schedule(client, tacos.id, site="jackson")

    data = client.post(f"/api/v1/meal-plans/{plan['id']}/cook").json()
    assert data["status"] == "success"
    assert db.query(ShoppingListEntry).count() == 0


def test_cook_unknown_meal_plan(client):
    response = client.post("/api/v1/meal-plans/99999/cook")
    assert response.status_code == 404
