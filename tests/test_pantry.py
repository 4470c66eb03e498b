"""Pantry API tests."""

import pytest


def create_item(client, headers, **overrides):
    payload = {
        "title": "Milk",
        "type": "Dairy",
        "location": "Fridge",
        "expiryDate": "2024-12-31",
        "count": 1,
    }
    payload.update(overrides)
    response = client.post("/api/v1/pantry", headers=headers, json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_pantry_item(client, auth_headers):
    """Test adding an item to the pantry."""
    data = create_item(client, auth_headers, notes="2% milk")

    assert data["title"] == "Milk"
    assert data["userId"] == auth_headers.user_id
    assert data["itemId"]
    assert data["sortKey"] == f"Dairy#Fridge#{data['itemId']}"
    assert data["expiryDate"] == "2024-12-31"
    assert data["notes"] == "2% milk"


def test_create_items_get_distinct_ids(client, auth_headers):
    """Test that identical payloads become separate items."""
    first = create_item(client, auth_headers)
    second = create_item(client, auth_headers)
    assert first["itemId"] != second["itemId"]


def test_create_reports_every_violation(client, auth_headers):
    """Test that all invalid fields are reported together."""
    response = client.post(
        "/api/v1/pantry",
        headers=auth_headers,
        json={
            "title": "x" * 51,
            "type": "Candy",
            "location": "Fridge",
            "expiryDate": "31/12/2024",
            "count": 0,
        },
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Validation failed"
    details = " ".join(body["details"])
    assert len(body["details"]) == 4
    for field in ("title", "type", "expiryDate", "count"):
        assert field in details


def test_create_rejects_impossible_date(client, auth_headers):
    """Test that a well-formed but non-existent date is rejected."""
    response = client.post(
        "/api/v1/pantry",
        headers=auth_headers,
        json={
            "title": "Milk",
            "type": "Dairy",
            "location": "Fridge",
            "expiryDate": "2024-02-30",
            "count": 1,
        },
    )
    assert response.status_code == 400


def test_create_rejects_long_notes(client, auth_headers):
    """Test the notes length limit."""
    response = client.post(
        "/api/v1/pantry",
        headers=auth_headers,
        json={
            "title": "Milk",
            "type": "Dairy",
            "location": "Fridge",
            "expiryDate": "2024-12-31",
            "count": 1,
            "notes": "n" * 201,
        },
    )
    assert response.status_code == 400
    assert any("notes" in detail for detail in response.json()["details"])


def test_get_pantry_item(client, auth_headers):
    """Test getting a specific pantry item."""
    created = create_item(client, auth_headers)

    response = client.get(f"/api/v1/pantry/{created['itemId']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == created


def test_get_missing_item(client, auth_headers):
    """Test that an unknown item id is a 404."""
    response = client.get("/api/v1/pantry/does-not-exist", headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "Item not found"}


def test_update_type_keeps_location(client, auth_headers):
    """Test that changing the type re-keys the item under its stored location."""
    created = create_item(client, auth_headers)
    item_id = created["itemId"]

    response = client.put(
        f"/api/v1/pantry/{item_id}", headers=auth_headers, json={"type": "Produce"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "Produce"
    assert data["location"] == "Fridge"
    assert data["sortKey"] == f"Produce#Fridge#{item_id}"
    assert data["title"] == "Milk"

    listed = client.get("/api/v1/pantry", headers=auth_headers).json()["items"]
    assert [item["sortKey"] for item in listed] == [f"Produce#Fridge#{item_id}"]


def test_update_plain_fields(client, auth_headers):
    """Test updating fields that are not part of the key."""
    created = create_item(client, auth_headers)

    response = client.put(
        f"/api/v1/pantry/{created['itemId']}",
        headers=auth_headers,
        json={"count": 3, "notes": "Opened"},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 3
    assert data["notes"] == "Opened"
    assert data["sortKey"] == created["sortKey"]


def test_update_skips_empty_values(client, auth_headers):
    """Test that empty strings leave stored values unchanged."""
    created = create_item(client, auth_headers, notes="keep me")

    response = client.put(
        f"/api/v1/pantry/{created['itemId']}",
        headers=auth_headers,
        json={"title": "", "notes": "", "expiryDate": "", "count": 2},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Milk"
    assert data["notes"] == "keep me"
    assert data["expiryDate"] == "2024-12-31"
    assert data["count"] == 2


def test_update_with_nothing_to_change(client, auth_headers):
    """Test that an update without any usable field is rejected."""
    created = create_item(client, auth_headers)

    response = client.put(
        f"/api/v1/pantry/{created['itemId']}", headers=auth_headers, json={"notes": ""}
    )
    assert response.status_code == 400
    assert response.json()["details"] == ["No valid fields to update"]


def test_update_missing_item(client, auth_headers):
    """Test that updating an unknown item is a 404."""
    response = client.put(
        "/api/v1/pantry/does-not-exist", headers=auth_headers, json={"count": 2}
    )
    assert response.status_code == 404


def test_update_rejects_invalid_values(client, auth_headers):
    """Test that update payloads are validated."""
    created = create_item(client, auth_headers)

    response = client.put(
        f"/api/v1/pantry/{created['itemId']}",
        headers=auth_headers,
        json={"count": -1, "location": "Attic"},
    )
    assert response.status_code == 400
    assert len(response.json()["details"]) == 2


def test_delete_pantry_item(client, auth_headers):
    """Test removing an item."""
    created = create_item(client, auth_headers)

    response = client.delete(f"/api/v1/pantry/{created['itemId']}", headers=auth_headers)
    assert response.status_code == 204

    response = client.get(f"/api/v1/pantry/{created['itemId']}", headers=auth_headers)
    assert response.status_code == 404


def test_delete_missing_item(client, auth_headers):
    """Test that deleting an unknown item is a 404."""
    response = client.delete("/api/v1/pantry/does-not-exist", headers=auth_headers)
    assert response.status_code == 404


def test_list_by_type_and_location(client, auth_headers):
    """Test that type and location narrow the listing."""
    milk = create_item(client, auth_headers, title="Milk", type="Dairy", location="Fridge")
    create_item(client, auth_headers, title="Ice Cream", type="Dairy", location="Freezer")
    create_item(client, auth_headers, title="Apples", type="Produce", location="Fridge")

    response = client.get(
        "/api/v1/pantry", headers=auth_headers, params={"type": "Dairy", "location": "Fridge"}
    )
    assert response.status_code == 200
    items = response.json()["items"]
    assert [item["itemId"] for item in items] == [milk["itemId"]]


def test_list_by_type(client, auth_headers):
    """Test listing one type across locations."""
    create_item(client, auth_headers, title="Milk", type="Dairy", location="Fridge")
    create_item(client, auth_headers, title="Ice Cream", type="Dairy", location="Freezer")
    create_item(client, auth_headers, title="Apples", type="Produce", location="Fridge")

    items = client.get(
        "/api/v1/pantry", headers=auth_headers, params={"type": "Dairy"}
    ).json()["items"]
    assert sorted(item["title"] for item in items) == ["Ice Cream", "Milk"]


def test_list_by_location_only(client, auth_headers):
    """Test listing one location across types."""
    create_item(client, auth_headers, title="Milk", type="Dairy", location="Fridge")
    create_item(client, auth_headers, title="Ice Cream", type="Dairy", location="Freezer")
    create_item(client, auth_headers, title="Apples", type="Produce", location="Fridge")

    items = client.get(
        "/api/v1/pantry", headers=auth_headers, params={"location": "Fridge"}
    ).json()["items"]
    assert sorted(item["title"] for item in items) == ["Apples", "Milk"]


def test_list_ignores_unknown_filters(client, auth_headers):
    """Test that unrecognized filter values list everything."""
    create_item(client, auth_headers, title="Milk")
    create_item(client, auth_headers, title="Rice", type="Grains", location="Pantry")

    items = client.get(
        "/api/v1/pantry", headers=auth_headers, params={"type": "Candy", "location": "Attic"}
    ).json()["items"]
    assert len(items) == 2


def test_list_pagination(client, auth_headers):
    """Test paging through the pantry with lastEvaluatedKey."""
    for i in range(7):
        create_item(client, auth_headers, title=f"Item {i}")

    first = client.get("/api/v1/pantry", headers=auth_headers).json()
    assert len(first["items"]) == 5
    assert first["lastEvaluatedKey"]

    second = client.get(
        "/api/v1/pantry",
        headers=auth_headers,
        params={"lastEvaluatedKey": first["lastEvaluatedKey"]},
    ).json()
    assert len(second["items"]) == 2
    assert second.get("lastEvaluatedKey") is None

    seen = {item["itemId"] for item in first["items"] + second["items"]}
    assert len(seen) == 7


def test_list_explicit_limit(client, auth_headers):
    """Test a caller-supplied page size."""
    for i in range(3):
        create_item(client, auth_headers, title=f"Item {i}")

    data = client.get("/api/v1/pantry", headers=auth_headers, params={"limit": 2}).json()
    assert len(data["items"]) == 2
    assert data["lastEvaluatedKey"]


def test_list_rejects_bad_token(client, auth_headers):
    """Test that a corrupt continuation token is a validation error."""
    response = client.get(
        "/api/v1/pantry", headers=auth_headers, params={"lastEvaluatedKey": "garbage"}
    )
    assert response.status_code == 400


def test_empty_pantry(client, auth_headers):
    """Test listing an empty pantry."""
    response = client.get("/api/v1/pantry", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["items"] == []


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/api/v1/pantry"),
        ("post", "/api/v1/pantry"),
        ("get", "/api/v1/pantry/some-id"),
        ("put", "/api/v1/pantry/some-id"),
        ("delete", "/api/v1/pantry/some-id"),
    ],
)
def test_requires_authentication(client, method, path):
    """Test that every pantry route rejects anonymous requests."""
    response = client.request(method, path)
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_rejects_invalid_token(client):
    """Test that a forged token is rejected."""
    response = client.get("/api/v1/pantry", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_users_cannot_see_each_others_items(client, auth_headers, other_auth_headers):
    """Test that pantries are isolated per user."""
    created = create_item(client, auth_headers)

    response = client.get(f"/api/v1/pantry/{created['itemId']}", headers=other_auth_headers)
    assert response.status_code == 404

    response = client.delete(f"/api/v1/pantry/{created['itemId']}", headers=other_auth_headers)
    assert response.status_code == 404

    assert client.get("/api/v1/pantry", headers=other_auth_headers).json()["items"] == []
    assert len(client.get("/api/v1/pantry", headers=auth_headers).json()["items"]) == 1
