"""
Tests for the pets API endpoints.

Tests FastAPI routes end to end against an in-memory SQLite database.
Validates request validation, response schemas, and error mapping.
"""

from unittest.mock import MagicMock

import pytest

from petcare.interfaces.pets.dependencies import get_database
from petcare.main import app

OWNER_PAYLOAD = {
    "firstName": "jean",
    "lastName": "dupont",
    "email": "Jean.Dupont@Example.com",
    "phoneNumber": "0612345678",
    "street": "123 Rue de la République",
    "city": "paris",
    "postalCode": "75001",
}

SECOND_OWNER_PAYLOAD = {
    "firstName": "Marie",
    "lastName": "Martin",
    "email": "marie.martin@example.com",
    "phoneNumber": "0623456789",
    "street": "456 Avenue des Champs",
    "city": "Lyon",
    "postalCode": "69001",
}


def _create_owner(client, payload=None) -> dict:
    response = client.post("/api/owners", json=payload or OWNER_PAYLOAD)
    assert response.status_code == 201, response.text
    return response.json()


def _create_dog(client, owner_id: int, **overrides) -> dict:
    payload = {
        "type": "dog",
        "name": "Rex",
        "birthDate": "2019-03-15",
        "weight": 25.5,
        "color": "Marron",
        "ownerId": owner_id,
        "breed": "Berger Allemand",
    }
    payload.update(overrides)
    response = client.post("/api/animals", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _create_cat(client, owner_id: int) -> dict:
    response = client.post(
        "/api/animals",
        json={
            "type": "cat",
            "name": "Minou",
            "birthDate": "2018-11-05",
            "weight": 4.5,
            "color": "Gris",
            "ownerId": owner_id,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()


class TestHealth:
    """Tests for GET /api/health."""

    def test_health(self, client) -> None:
        response = client.get("/api/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "ok"
        assert body["database"] == "up"
        assert "version" in body

    def test_health_degraded_when_database_down(self, client) -> None:
        broken = MagicMock()
        broken.ping.return_value = False
        app.dependency_overrides[get_database] = lambda: broken

        body = client.get("/api/health").json()

        assert body["status"] == "degraded"
        assert body["database"] == "down"

    def test_security_headers_present(self, client) -> None:
        """All security headers must be present on every response."""
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "Content-Security-Policy" in response.headers
        assert "Permissions-Policy" in response.headers

    def test_api_responses_are_not_cached(self, client) -> None:
        assert client.get("/api/owners").headers["Cache-Control"] == "no-store"


class TestOwnerEndpoints:
    """Tests for /api/owners."""

    def test_create_owner(self, client) -> None:
        body = _create_owner(client)
        assert body["id"] is not None
        assert body["firstName"] == "Jean"
        assert body["lastName"] == "DUPONT"
        assert body["fullName"] == "Jean DUPONT"
        assert body["email"] == "jean.dupont@example.com"
        assert body["phoneNumber"] == "06 12 34 56 78"
        assert body["address"]["city"] == "Paris"
        assert body["address"]["postalCode"] == "75001"
        assert body["address"]["country"] == "France"
        assert body["isActive"] is True
        assert body["totalAnimals"] == 0

    def test_duplicate_email_is_conflict(self, client) -> None:
        _create_owner(client)
        payload = {**SECOND_OWNER_PAYLOAD, "email": "jean.dupont@example.com"}
        response = client.post("/api/owners", json=payload)
        assert response.status_code == 409
        assert response.json()["error"] == "Conflict"

    def test_invalid_postal_code_rejected(self, client) -> None:
        response = client.post("/api/owners", json={**OWNER_PAYLOAD, "postalCode": "7500"})
        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Validation failed"
        assert "postal_code" in body["detail"]

    def test_invalid_email_rejected(self, client) -> None:
        response = client.post("/api/owners", json={**OWNER_PAYLOAD, "email": "not-an-email"})
        assert response.status_code == 400

    def test_missing_field_rejected(self, client) -> None:
        payload = {k: v for k, v in OWNER_PAYLOAD.items() if k != "email"}
        response = client.post("/api/owners", json=payload)
        assert response.status_code == 422

    def test_get_owner_with_details(self, client) -> None:
        owner = _create_owner(client)
        _create_dog(client, owner["id"])

        response = client.get(f"/api/owners/{owner['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["totalAnimals"] == 1
        assert [a["name"] for a in body["animals"]] == ["Rex"]
        assert body["statistics"]["animalsByType"] == {"Chien": 1}

    def test_get_missing_owner(self, client) -> None:
        response = client.get("/api/owners/999")
        assert response.status_code == 404
        assert response.json()["error"] == "Owner not found"

    def test_list_owners_paginated(self, client) -> None:
        _create_owner(client)
        _create_owner(client, SECOND_OWNER_PAYLOAD)
        _create_owner(
            client,
            {**SECOND_OWNER_PAYLOAD, "firstName": "Pierre", "lastName": "Dubois",
             "email": "pierre.dubois@example.com"},
        )

        response = client.get("/api/owners", params={"page": 1, "perPage": 2})

        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 3
        assert body["page"] == 1
        assert body["perPage"] == 2
        assert body["totalPages"] == 2
        assert [o["lastName"] for o in body["items"]] == ["DUBOIS", "DUPONT"]
        assert body["items"][0]["animals"] is None

    def test_list_owners_by_city(self, client) -> None:
        _create_owner(client)
        _create_owner(client, SECOND_OWNER_PAYLOAD)
        body = client.get("/api/owners", params={"city": "lyon"}).json()
        assert [o["lastName"] for o in body["items"]] == ["MARTIN"]

    def test_invalid_page_rejected(self, client) -> None:
        assert client.get("/api/owners", params={"page": 0}).status_code == 422
        assert client.get("/api/owners", params={"perPage": 500}).status_code == 422

    def test_update_owner(self, client) -> None:
        owner = _create_owner(client)

        response = client.patch(
            f"/api/owners/{owner['id']}",
            json={"city": "Lyon", "postalCode": "69002", "isActive": False},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["address"]["city"] == "Lyon"
        assert body["address"]["street"] == "123 Rue de la République"
        assert body["isActive"] is False
        assert body["email"] == "jean.dupont@example.com"

    def test_update_to_taken_email_is_conflict(self, client) -> None:
        _create_owner(client)
        other = _create_owner(client, SECOND_OWNER_PAYLOAD)
        response = client.patch(
            f"/api/owners/{other['id']}", json={"email": "jean.dupont@example.com"}
        )
        assert response.status_code == 409

    def test_delete_owner_removes_animals(self, client) -> None:
        owner = _create_owner(client)
        dog = _create_dog(client, owner["id"])

        response = client.delete(f"/api/owners/{owner['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/owners/{owner['id']}").status_code == 404
        assert client.get(f"/api/animals/{dog['id']}").status_code == 404

    def test_annual_cost(self, client) -> None:
        owner = _create_owner(client)
        _create_dog(client, owner["id"])
        _create_cat(client, owner["id"])

        response = client.get(f"/api/owners/{owner['id']}/annual-cost")

        assert response.status_code == 200
        body = response.json()
        assert body["ownerId"] == owner["id"]
        assert body["breakdown"] == {"Rex": 2125, "Minou": 500}
        assert body["total"] == 2625
        assert body["currency"] == "EUR"


class TestAnimalEndpoints:
    """Tests for /api/animals."""

    def test_create_dog(self, client) -> None:
        owner = _create_owner(client)

        body = _create_dog(client, owner["id"])

        assert body["id"] is not None
        assert body["type"] == "dog"
        assert body["typeLabel"] == "Chien"
        assert body["birthDate"] == "2019-03-15"
        assert body["owner"] == {"id": owner["id"], "name": "Jean DUPONT"}
        assert body["sound"] == "WOOF WOOF!"
        assert body["specificData"]["breed"] == "Berger Allemand"
        assert body["specificData"]["estimatedAnnualCost"]["total"] == 2125
        assert body["weightAlert"] is False

    def test_create_for_missing_owner(self, client) -> None:
        response = client.post(
            "/api/animals",
            json={
                "type": "cat",
                "name": "Minou",
                "birthDate": "2018-11-05",
                "weight": 4.5,
                "color": "Gris",
                "ownerId": 999,
            },
        )
        assert response.status_code == 404
        assert response.json()["error"] == "Owner not found"

    def test_create_with_unknown_type(self, client) -> None:
        owner = _create_owner(client)
        response = client.post(
            "/api/animals",
            json={
                "type": "fish",
                "name": "Nemo",
                "birthDate": "2022-01-10",
                "weight": 0.1,
                "color": "Orange",
                "ownerId": owner["id"],
            },
        )
        assert response.status_code == 400

    def test_create_with_invalid_weight(self, client) -> None:
        owner = _create_owner(client)
        response = client.post(
            "/api/animals",
            json={
                "type": "cat",
                "name": "Minou",
                "birthDate": "2018-11-05",
                "weight": -1,
                "color": "Gris",
                "ownerId": owner["id"],
            },
        )
        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_get_missing_animal(self, client) -> None:
        response = client.get("/api/animals/999")
        assert response.status_code == 404
        assert response.json()["error"] == "Animal not found"

    def test_list_and_filter(self, client) -> None:
        owner = _create_owner(client)
        _create_dog(client, owner["id"])
        cat = _create_cat(client, owner["id"])

        everything = client.get("/api/animals").json()
        cats = client.get("/api/animals", params={"type": "cat"}).json()

        assert everything["total"] == 2
        assert cats["total"] == 1
        assert cats["items"][0]["id"] == cat["id"]

    def test_list_with_unknown_type(self, client) -> None:
        response = client.get("/api/animals", params={"type": "fish"})
        assert response.status_code == 400

    def test_statistics(self, client) -> None:
        owner = _create_owner(client)
        _create_dog(client, owner["id"])
        _create_cat(client, owner["id"])

        response = client.get("/api/animals/statistics")

        assert response.status_code == 200
        body = response.json()
        assert body["totalAnimals"] == 2
        assert body["byType"] == {"Chien": 1, "Chat": 1}
        assert isinstance(body["needingAttention"], list)

    @pytest.mark.parametrize("weight, alert", [(26.0, False), (30.0, True)])
    def test_update_weight(self, client, weight, alert) -> None:
        owner = _create_owner(client)
        dog = _create_dog(client, owner["id"])

        response = client.patch(f"/api/animals/{dog['id']}/weight", json={"weight": weight})

        assert response.status_code == 200
        assert response.json()["weight"] == weight
        assert response.json()["weightAlert"] is alert
        assert client.get(f"/api/animals/{dog['id']}").json()["weight"] == weight

    def test_transfer(self, client) -> None:
        first = _create_owner(client)
        second = _create_owner(client, SECOND_OWNER_PAYLOAD)
        cat = _create_cat(client, first["id"])

        response = client.post(
            f"/api/animals/{cat['id']}/transfer", json={"newOwnerId": second["id"]}
        )

        assert response.status_code == 200
        assert response.json()["owner"]["id"] == second["id"]
        assert client.get(f"/api/owners/{first['id']}").json()["totalAnimals"] == 0
        assert client.get(f"/api/owners/{second['id']}").json()["totalAnimals"] == 1

    def test_transfer_to_missing_owner(self, client) -> None:
        owner = _create_owner(client)
        cat = _create_cat(client, owner["id"])
        response = client.post(f"/api/animals/{cat['id']}/transfer", json={"newOwnerId": 999})
        assert response.status_code == 404

    def test_dog_limit_is_conflict(self, client) -> None:
        owner = _create_owner(client)
        for index in range(5):
            _create_dog(client, owner["id"], name=f"Chien{'x' * (index + 1)}")

        response = client.post(
            "/api/animals",
            json={
                "type": "dog",
                "name": "Sixieme",
                "birthDate": "2020-07-22",
                "weight": 8.2,
                "color": "Blanc",
                "ownerId": owner["id"],
                "breed": "Jack Russell",
            },
        )

        assert response.status_code == 409

    def test_delete_animal(self, client) -> None:
        owner = _create_owner(client)
        cat = _create_cat(client, owner["id"])

        response = client.delete(f"/api/animals/{cat['id']}")

        assert response.status_code == 204
        assert client.get(f"/api/animals/{cat['id']}").status_code == 404
        assert client.delete(f"/api/animals/{cat['id']}").status_code == 404
