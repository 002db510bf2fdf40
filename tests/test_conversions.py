"""Conversion factor lookup and API tests."""

import logging

from homestock.models.conversion_factor import ConversionFactor
from homestock.services.conversion_service import ConversionService


def add_factor(db, name, from_unit, to_unit, factor):
    conversion = ConversionFactor(
        ingredient_name=name, from_unit=from_unit, to_unit=to_unit, factor=factor
    )
    db.add(conversion)
    db.commit()
    return conversion


def test_lookup_is_case_insensitive(db):
    add_factor(db, "Flour", "Cup", "OZ", 4.25)

    assert ConversionService(db).lookup("flour", "cup", "oz") == 4.25
    assert ConversionService(db).lookup("FLOUR", "CUP", "Oz") == 4.25


def test_lookup_not_found(db):
    add_factor(db, "flour", "cup", "oz", 4.25)

    service = ConversionService(db)
    assert service.lookup("sugar", "cup", "oz") is None
    assert service.lookup("flour", "oz", "cup") is None  # no inverse


def test_lookup_has_no_transitive_path(db):
    add_factor(db, "milk", "gallon", "quart", 4)
    add_factor(db, "milk", "quart", "cup", 4)

    assert ConversionService(db).lookup("milk", "gallon", "cup") is None


def test_duplicate_factors_warn(db, caplog):
    add_factor(db, "rice", "cup", "g", 185)
    add_factor(db, "Rice", "CUP", "g", 200)

    with caplog.at_level(logging.WARNING):
        factor = ConversionService(db).lookup("rice", "cup", "g")

    assert factor == 185
    assert "2 conversion factors stored" in caplog.text

    duplicates = ConversionService(db).find_duplicates()
    assert duplicates == [{"ingredient_name": "rice", "from_unit": "cup", "to_unit": "g", "count": 2}]


def test_conversion_crud(client):
    response = client.post(
        "/api/v1/conversions",
        json={"ingredient_name": "Butter", "from_unit": "stick", "to_unit": "tbsp", "factor": 8},
    )
    assert response.status_code == 201
    conversion_id = response.json()["id"]

    response = client.put(f"/api/v1/conversions/{conversion_id}", json={"factor": 8.5})
    assert response.status_code == 200
    assert response.json()["factor"] == 8.5

    listing = client.get("/api/v1/conversions").json()
    assert len(listing) == 1

    response = client.delete(f"/api/v1/conversions/{conversion_id}")
    assert response.status_code == 204
    assert client.get("/api/v1/conversions").json() == []


def test_conversion_rejects_non_positive_factor(client):
    response = client.post(
        "/api/v1/conversions",
        json={"ingredient_name": "Butter", "from_unit": "stick", "to_unit": "tbsp", "factor": 0},
    )
    assert response.status_code == 422


def test_lookup_endpoint(client):
    client.post(
        "/api/v1/conversions",
        json={"ingredient_name": "garlic", "from_unit": "whole", "to_unit": "clove", "factor": 10},
    )

    response = client.get(
        "/api/v1/conversions/lookup",
        params={"ingredient_name": "Garlic", "from_unit": "whole", "to_unit": "clove"},
    )
    assert response.status_code == 200
    assert response.json()["factor"] == 10

    response = client.get(
        "/api/v1/conversions/lookup",
        params={"ingredient_name": "garlic", "from_unit": "clove", "to_unit": "whole"},
    )
    assert response.json()["factor"] is None


def test_update_missing_conversion(client):
    response = client.put("/api/v1/conversions/99999", json={"factor": 2})
    assert response.status_code == 404
