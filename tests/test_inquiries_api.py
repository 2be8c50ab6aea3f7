# tests/test_inquiries_api.py

"""
Tests for the /inquiries endpoints.
"""

import uuid
from unittest.mock import Mock, patch

import httpx
import pytest
from fastapi.testclient import TestClient


def create(client, payload):
    response = client.post("/inquiries", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["inquiry"]


# ============================================================
# POST /inquiries
# ============================================================
def test_create_inquiry_starts_as_new(client: TestClient, valid_payload):
    """Test that a valid submission is stored with status new and an id."""
    response = client.post("/inquiries", json=valid_payload)

    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Inquiry submitted successfully"
    inquiry = data["inquiry"]
    assert inquiry["status"] == "new"
    assert inquiry["priority"] == "medium"
    assert inquiry["id"]
    assert inquiry["documents"] == []
    assert inquiry["created_at"]
    assert inquiry["updated_at"]


def test_create_inquiry_ids_are_unique(client: TestClient, valid_payload):
    """Test that every created inquiry gets a fresh id."""
    ids = {create(client, valid_payload)["id"] for _ in range(5)}
    assert len(ids) == 5


def test_create_inquiry_optional_fields_default(client: TestClient, valid_payload, fake_supabase):
    """Test that omitted optional fields are stored as null."""
    create(client, valid_payload)

    row = fake_supabase.rows("inquiries")[0]
    for field in ("area", "subcategory", "budget_range", "timeline", "special_requirements"):
        assert row[field] is None
    assert row["documents"] == []


def test_create_inquiry_ignores_client_status(client: TestClient, valid_payload):
    """Test that the public form cannot choose status or priority."""
    inquiry = create(client, {**valid_payload, "status": "completed", "priority": "urgent"})

    assert inquiry["status"] == "new"
    assert inquiry["priority"] == "medium"


@pytest.mark.parametrize(
    "field", ["name", "email", "phone", "state", "city", "category", "description"]
)
def test_create_inquiry_missing_field(client: TestClient, valid_payload, fake_supabase, field):
    """Test that each missing required field is named and nothing is stored."""
    payload = dict(valid_payload)
    del payload[field]

    response = client.post("/inquiries", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": f"Missing required field: {field}"}
    assert fake_supabase.rows("inquiries") == []


def test_create_inquiry_blank_field_counts_as_missing(client: TestClient, valid_payload, fake_supabase):
    """Test that whitespace-only values are rejected like absent ones."""
    response = client.post("/inquiries", json={**valid_payload, "city": "   "})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing required field: city"
    assert fake_supabase.rows("inquiries") == []


def test_create_inquiry_reports_first_missing_field(client: TestClient):
    """Test that the first missing field in declaration order is reported."""
    response = client.post("/inquiries", json={"email": "a@x.com"})

    assert response.status_code == 400
    assert response.json()["error"] == "Missing required field: name"


def test_create_inquiry_missing_field_before_bad_value(client: TestClient, fake_supabase):
    """Test that a missing field is reported ahead of an invalid category."""
    response = client.post("/inquiries", json={"email": "a@x.com", "category": "Bogus"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required field: name"}
    assert fake_supabase.rows("inquiries") == []


def test_create_inquiry_unknown_category(client: TestClient, valid_payload, fake_supabase):
    """Test that a category outside the closed set is rejected at the boundary."""
    response = client.post("/inquiries", json={**valid_payload, "category": "Industrial"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid value for field: category"
    assert fake_supabase.rows("inquiries") == []


def test_create_inquiry_database_error(client: TestClient, valid_payload, fake_supabase):
    """Test that a store failure answers 500 with an error body."""
    fake_supabase.fail_with = Exception("connection refused")

    response = client.post("/inquiries", json=valid_payload)

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to submit inquiry"}


def test_create_inquiry_database_timeout(client: TestClient, valid_payload, fake_supabase):
    """Test that a store timeout is reported apart from other failures."""
    fake_supabase.fail_with = httpx.ReadTimeout("read timed out")

    response = client.post("/inquiries", json=valid_payload)

    assert response.status_code == 504
    assert "timed out" in response.json()["error"]


def test_create_inquiry_without_database(app, valid_payload):
    """Test the answer when Supabase credentials are missing."""
    with patch("routers.inquiries.get_supabase_client", return_value=None):
        with TestClient(app) as test_client:
            response = test_client.post("/inquiries", json=valid_payload)

    assert response.status_code == 500
    assert response.json() == {"error": "Database client not configured"}


# ============================================================
# GET /inquiries
# ============================================================
def seed(client, valid_payload):
    rows = [
        {"category": "Medical", "status": "completed"},
        {"category": "Medical", "status": "new"},
        {"category": "Residential", "status": "completed"},
        {"category": "Medical", "status": "completed", "priority": "urgent"},
        {"category": "Education", "status": "contacted"},
    ]
    created = []
    for row in rows:
        inquiry = create(client, {**valid_payload, "category": row["category"]})
        changes = {k: v for k, v in row.items() if k in ("status", "priority")}
        if changes != {"status": "new"}:
            client.patch(f"/inquiries/{inquiry['id']}", json=changes)
        created.append(inquiry["id"])
    return created


def test_list_inquiries_newest_first(client: TestClient, valid_payload):
    """Test that listing returns every row ordered by created_at descending."""
    ids = seed(client, valid_payload)

    response = client.get("/inquiries")

    assert response.status_code == 200
    data = response.json()
    assert [i["id"] for i in data["inquiries"]] == list(reversed(ids))
    assert data["total"] == 5
    assert data["limit"] == 50
    assert data["offset"] == 0


def test_list_inquiries_filters_are_a_conjunction(client: TestClient, valid_payload):
    """Test status=completed&category=Medical returns exactly the matching rows."""
    ids = seed(client, valid_payload)

    response = client.get("/inquiries?status=completed&category=Medical")

    data = response.json()
    assert [i["id"] for i in data["inquiries"]] == [ids[3], ids[0]]
    assert all(i["status"] == "completed" and i["category"] == "Medical" for i in data["inquiries"])
    assert data["total"] == 2


def test_list_inquiries_all_means_no_filter(client: TestClient, valid_payload):
    """Test that the 'all' sentinel disables a filter."""
    seed(client, valid_payload)

    response = client.get("/inquiries?status=all&category=all&priority=urgent")

    data = response.json()
    assert data["total"] == 1
    assert data["inquiries"][0]["priority"] == "urgent"


def test_list_inquiries_unknown_filter_matches_nothing(client: TestClient, valid_payload):
    """Test that an unknown filter value is not an error."""
    seed(client, valid_payload)

    response = client.get("/inquiries?status=archived")

    assert response.status_code == 200
    assert response.json()["inquiries"] == []
    assert response.json()["total"] == 0


def test_list_inquiries_pagination(client: TestClient, valid_payload):
    """Test limit/offset slicing with the total of all matches."""
    ids = seed(client, valid_payload)

    response = client.get("/inquiries?limit=2&offset=1")

    data = response.json()
    assert [i["id"] for i in data["inquiries"]] == [ids[3], ids[2]]
    assert data["total"] == 5
    assert data["limit"] == 2
    assert data["offset"] == 1


def test_list_inquiries_rejects_bad_limit(client: TestClient):
    """Test that an out-of-range limit is a 400 with an error body."""
    response = client.get("/inquiries?limit=0")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid value for field: limit"}


# ============================================================
# GET /inquiries/{id}
# ============================================================
def test_get_inquiry(client: TestClient, valid_payload):
    """Test fetching one inquiry by id."""
    created = create(client, valid_payload)

    response = client.get(f"/inquiries/{created['id']}")

    assert response.status_code == 200
    assert response.json()["inquiry"] == created


def test_get_inquiry_not_found(client: TestClient):
    """Test getting a non-existent inquiry."""
    response = client.get("/inquiries/nonexistent-id")

    assert response.status_code == 404
    assert response.json() == {"error": "Inquiry not found"}


def test_get_inquiry_unknown_uuid(client: TestClient):
    """Test that a well-formed but unknown id is also 404."""
    response = client.get(f"/inquiries/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json() == {"error": "Inquiry not found"}


# ============================================================
# PATCH /inquiries/{id}
# ============================================================
def test_update_status_then_get(client: TestClient, valid_payload):
    """Test PATCH status=completed is visible on GET with other fields unchanged."""
    created = create(client, valid_payload)

    response = client.patch(f"/inquiries/{created['id']}", json={"status": "completed"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Inquiry updated successfully"
    assert data["inquiry"]["status"] == "completed"

    fetched = client.get(f"/inquiries/{created['id']}").json()["inquiry"]
    assert fetched["status"] == "completed"
    for key, value in created.items():
        if key not in ("status", "updated_at"):
            assert fetched[key] == value


def test_update_refreshes_updated_at(client: TestClient, valid_payload):
    """Test that updated_at moves and created_at does not."""
    created = create(client, valid_payload)

    updated = client.patch(
        f"/inquiries/{created['id']}", json={"priority": "high"}
    ).json()["inquiry"]

    assert updated["created_at"] == created["created_at"]
    assert updated["updated_at"] != created["updated_at"]


def test_update_empty_body(client: TestClient, valid_payload):
    """Test PATCH {} answers 400 with the no-op message."""
    created = create(client, valid_payload)

    response = client.patch(f"/inquiries/{created['id']}", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "No valid fields to update"}


def test_update_only_unknown_keys_is_noop(client: TestClient, valid_payload):
    """Test that non-allow-listed keys alone change nothing."""
    created = create(client, valid_payload)

    response = client.patch(
        f"/inquiries/{created['id']}", json={"name": "Mallory", "email": "m@x.com"}
    )

    assert response.status_code == 400
    assert response.json()["error"] == "No valid fields to update"
    assert client.get(f"/inquiries/{created['id']}").json()["inquiry"] == created


def test_update_mixed_keys_applies_allow_list_only(client: TestClient, valid_payload):
    """Test that only allow-listed keys of a mixed payload are applied."""
    created = create(client, valid_payload)

    response = client.patch(
        f"/inquiries/{created['id']}",
        json={"admin_notes": "Called twice", "name": "Mallory", "id": "x", "created_at": "2000-01-01"},
    )

    assert response.status_code == 200
    inquiry = response.json()["inquiry"]
    assert inquiry["admin_notes"] == "Called twice"
    assert inquiry["name"] == "A"
    assert inquiry["id"] == created["id"]
    assert inquiry["created_at"] == created["created_at"]


def test_update_is_idempotent(client: TestClient, valid_payload):
    """Test that applying the same patch twice gives the same row."""
    created = create(client, valid_payload)
    patch_body = {"status": "in_progress", "assigned_to": "Rahul"}

    first = client.patch(f"/inquiries/{created['id']}", json=patch_body).json()["inquiry"]
    second = client.patch(f"/inquiries/{created['id']}", json=patch_body).json()["inquiry"]

    first.pop("updated_at")
    second.pop("updated_at")
    assert first == second


def test_update_invalid_status(client: TestClient, valid_payload):
    """Test that a status outside the closed set is rejected."""
    created = create(client, valid_payload)

    response = client.patch(f"/inquiries/{created['id']}", json={"status": "archived"})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid value for field: status"
    assert client.get(f"/inquiries/{created['id']}").json()["inquiry"]["status"] == "new"


def test_update_clears_assignee(client: TestClient, valid_payload):
    """Test that null clears assigned_to."""
    created = create(client, valid_payload)
    client.patch(f"/inquiries/{created['id']}", json={"assigned_to": "Rahul"})

    response = client.patch(f"/inquiries/{created['id']}", json={"assigned_to": None})

    assert response.status_code == 200
    assert response.json()["inquiry"]["assigned_to"] is None


def test_update_not_found(client: TestClient):
    """Test updating an unknown inquiry."""
    response = client.patch(f"/inquiries/{uuid.uuid4()}", json={"status": "contacted"})

    assert response.status_code == 404
    assert response.json() == {"error": "Inquiry not found"}


def test_update_database_error(app, inquiry_factory):
    """Test that a failing update answers 500."""
    inquiry = inquiry_factory()
    with patch("routers.inquiries.get_supabase_client") as mock_supabase:
        mock_client = Mock()
        mock_client.table.return_value.update.return_value.eq.return_value.execute.side_effect = (
            Exception("deadlock detected")
        )
        mock_supabase.return_value = mock_client

        with TestClient(app) as test_client:
            response = test_client.patch(f"/inquiries/{inquiry['id']}", json={"status": "contacted"})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to update inquiry"}
