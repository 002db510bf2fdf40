"""Pantry API tests."""

from homestock.models.pantry import PantryItem


def test_create_pantry_item(client):
    """Test adding stock to a site."""
    response = client.post(
        "/api/v1/pantry",
        json={"name": "Rice", "quantity": 2, "unit": "lb", "location": "Pantry", "site": "jackson"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Rice"
    assert data["quantity"] == 2
    assert data["unit"] == "lb"
    assert data["site"] == "jackson"
    assert data["merged"] is False


def test_create_pantry_item_defaults(client):
    """Test default quantity and unit."""
    response = client.post(
        "/api/v1/pantry", json={"name": "Eggs", "location": "Fridge", "site": "shore"}
    )
    assert response.status_code == 201
    data = response.json()
    assert data["quantity"] == 1
    assert data["unit"] == "each"


def test_add_same_place_merges(client):
    """Adding an item already at the same location and site sums quantities."""
    first = client.post(
        "/api/v1/pantry",
        json={"name": "Rice", "quantity": 2, "location": "Pantry", "site": "jackson"},
    ).json()
    response = client.post(
        "/api/v1/pantry",
        json={"name": "Rice", "quantity": 3, "location": "Pantry", "site": "jackson"},
    )
    data = response.json()
    assert data["id"] == first["id"]
    assert data["quantity"] == 5
    assert data["merged"] is True


def test_add_other_site_does_not_merge(client):
    """The same item at the other site is a separate record."""
    client.post(
        "/api/v1/pantry",
        json={"name": "Rice", "quantity": 2, "location": "Pantry", "site": "jackson"},
    )
    response = client.post(
        "/api/v1/pantry",
        json={"name": "Rice", "quantity": 3, "location": "Pantry", "site": "shore"},
    )
    assert response.json()["merged"] is False
    assert len(client.get("/api/v1/pantry").json()) == 2


def test_create_pantry_item_requires_site(client):
    response = client.post("/api/v1/pantry", json={"name": "Rice", "location": "Pantry"})
    assert response.status_code == 422


def test_negative_quantity_rejected(client):
    response = client.post(
        "/api/v1/pantry",
        json={"name": "Rice", "quantity": -1, "location": "Pantry", "site": "jackson"},
    )
    assert response.status_code == 422


def test_list_pantry_items_filters(client, add_pantry):
    """Test filtering by site, location and search text."""
    add_pantry("Milk", 1, "gallon", "Inside fridge")
    add_pantry("Butter", 1, "lb", "Inside fridge")
    add_pantry("Milk", 1, "gallon", "Fridge", site="shore")

    assert len(client.get("/api/v1/pantry").json()) == 3

    shore = client.get("/api/v1/pantry", params={"site": "shore"}).json()
    assert [(i["name"], i["site"]) for i in shore] == [("Milk", "shore")]

    fridge = client.get("/api/v1/pantry", params={"location": "Inside fridge"}).json()
    assert [i["name"] for i in fridge] == ["Butter", "Milk"]

    milk = client.get("/api/v1/pantry", params={"search": "mil"}).json()
    assert len(milk) == 2


def test_get_pantry_item(client, add_pantry):
    item = add_pantry("Flour", 4, "cup")

    response = client.get(f"/api/v1/pantry/{item.id}")
    assert response.status_code == 200
    assert response.json()["name"] == "Flour"


def test_get_pantry_item_not_found(client):
    response = client.get("/api/v1/pantry/99999")
    assert response.status_code == 404


def test_update_pantry_item(client, add_pantry):
    """Test updating quantity and location."""
    item = add_pantry("Flour", 4, "cup")

    response = client.put(
        f"/api/v1/pantry/{item.id}", json={"quantity": 2.5, "location": "Basement"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["quantity"] == 2.5
    assert data["location"] == "Basement"
    assert data["unit"] == "cup"


def test_update_pantry_item_to_zero_keeps_record(client, add_pantry):
    item = add_pantry("Flour", 4, "cup")

    client.put(f"/api/v1/pantry/{item.id}", json={"quantity": 0})

    response = client.get(f"/api/v1/pantry/{item.id}")
    assert response.status_code == 200
    assert response.json()["quantity"] == 0


def test_delete_pantry_item(client, add_pantry):
    item = add_pantry("Flour", 4, "cup")

    response = client.delete(f"/api/v1/pantry/{item.id}")
    assert response.status_code == 204

    response = client.get(f"/api/v1/pantry/{item.id}")
    assert response.status_code == 404


# --- Transfer ---


def test_transfer_partial_quantity(client, db, add_pantry):
    """Moving part of a record leaves the rest behind."""
    rice = add_pantry("Rice", 5, "lb")

    response = client.post(
        "/api/v1/pantry/transfer",
        json={"items": [{"item_id": rice.id, "quantity": 2}], "target_location": "Pantry"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["transferred"] == 1
    assert data["target_site"] == "shore"
    assert data["items"][0]["quantity"] == 2
    assert data["items"][0]["unit"] == "lb"

    db.expire_all()
    assert db.query(PantryItem).filter(PantryItem.id == rice.id).one().quantity == 3


def test_transfer_everything_deletes_source(client, db, add_pantry):
    """Moving a whole record removes it from the source site."""
    beans = add_pantry("Beans", 2, "can", site="shore")

    response = client.post(
        "/api/v1/pantry/transfer",
        json={"items": [{"item_id": beans.id}], "target_location": "Pantry"},
    )
    data = response.json()
    assert data["target_site"] == "jackson"
    assert data["items"][0]["quantity"] == 2

    db.expire_all()
    assert db.query(PantryItem).filter(PantryItem.id == beans.id).first() is None


def test_transfer_more_than_available_moves_all(client, db, add_pantry):
    beans = add_pantry("Beans", 2, "can")

    response = client.post(
        "/api/v1/pantry/transfer",
        json={"items": [{"item_id": beans.id, "quantity": 10}], "target_location": "Pantry"},
    )
    assert response.json()["items"][0]["quantity"] == 2

    db.expire_all()
    assert db.query(PantryItem).filter(PantryItem.id == beans.id).first() is None


def test_transfer_merges_into_target(client, add_pantry):
    """Transferred stock tops up an existing record at the target location."""
    source = add_pantry("Coffee", 3, "bag")
    target = add_pantry("Coffee", 1, "bag", "Pantry", site="shore")

    response = client.post(
        "/api/v1/pantry/transfer",
        json={"items": [{"item_id": source.id, "quantity": 1}], "target_location": "Pantry"},
    )
    items = response.json()["items"]
    assert items[0]["id"] == target.id
    assert items[0]["quantity"] == 2


def test_transfer_mixed_sites_rejected(client, add_pantry):
    jackson = add_pantry("Coffee", 3, "bag")
    shore = add_pantry("Tea", 3, "box", site="shore")

    response = client.post(
        "/api/v1/pantry/transfer",
        json={
            "items": [{"item_id": jackson.id}, {"item_id": shore.id}],
            "target_location": "Pantry",
        },
    )
    assert response.status_code == 400


def test_transfer_unknown_item(client):
    response = client.post(
        "/api/v1/pantry/transfer",
        json={"items": [{"item_id": 99999}], "target_location": "Pantry"},
    )
    assert response.status_code == 404


def test_transfer_requires_items(client):
    response = client.post(
        "/api/v1/pantry/transfer", json={"items": [], "target_location": "Pantry"}
    )
    assert response.status_code == 422
