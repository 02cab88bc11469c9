from tests.helpers import volunteer_payload


def test_volunteer_signup_returns_record(client):
    response = client.post("/api/volunteers", json=volunteer_payload())
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["volunteer"]["id"] == 1
    assert body["volunteer"]["interests"] == ["Phone Banking"]
    assert body["volunteer"]["created_at"]


def test_signup_with_invalid_email_returns_422(client):
    response = client.post("/api/volunteers", json=volunteer_payload(email="not-an-email"))
    assert response.status_code == 422


def test_yard_sign_request_requires_address_and_positive_quantity(client):
    payload = {"name": "Al", "email": "al@example.com", "quantity": 2}
    assert client.post("/api/yard-sign-requests", json=payload).status_code == 422
    payload["address"] = "1 Main St"
    response = client.post("/api/yard-sign-requests", json=payload)
    assert response.status_code == 200
    assert response.json()["request"]["quantity"] == 2
    payload["quantity"] = 0
    assert client.post("/api/yard-sign-requests", json=payload).status_code == 422


def test_newsletter_duplicate_returns_400(client):
    assert client.post("/api/newsletter", json={"email": "n@example.com"}).status_code == 200
    response = client.post("/api/newsletter", json={"email": "n@example.com"})
    assert response.status_code == 400
    assert "already subscribed" in response.json()["detail"]


def test_list_update_and_delete_records(client):
    client.post("/api/volunteers", json=volunteer_payload())
    client.post("/api/volunteers", json=volunteer_payload(name="John Roe", email="john@example.com"))

    listing = client.get("/api/volunteers")
    assert listing.status_code == 200
    assert [item["name"] for item in listing.json()] == ["Jane Doe", "John Roe"]

    updated = client.put("/api/volunteers/2", json={"phone": "555-0100", "interests": ["Canvassing"]})
    assert updated.status_code == 200
    assert updated.json()["phone"] == "555-0100"
    assert updated.json()["interests"] == ["Canvassing"]

    assert client.delete("/api/volunteers/1").json() == {"success": True}
    assert [item["id"] for item in client.get("/api/volunteers").json()] == [2]


def test_update_rejects_immutable_empty_and_missing(client):
    client.post("/api/volunteers", json=volunteer_payload())
    assert client.put("/api/volunteers/1", json={"created_at": "2026-01-01T00:00:00"}).status_code == 422
    assert client.put("/api/volunteers/1", json={}).status_code == 400
    missing = client.put("/api/volunteers/99", json={"name": "Ghost"})
    assert missing.status_code == 404
    assert "not found" in missing.json()["detail"]


def test_delete_missing_record_returns_404(client):
    assert client.delete("/api/newsletter/5").status_code == 404


def test_unknown_kind_returns_422(client):
    assert client.get("/api/users").status_code == 422


def test_send_notification_composes_message(client):
    response = client.post(
        "/api/send-notification",
        json={"type": "donation", "data": {"amount": 2500, "email": "d@example.com"}},
    )
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Notification logged",
        "subject": "New Donation: $25.00",
        "content": "Donation of $25.00 from d@example.com",
    }


def test_update_rejects_null_for_required_columns(client):
    client.post("/api/volunteers", json=volunteer_payload(phone="555-0100"))
    assert client.put("/api/volunteers/1", json={"name": None}).status_code == 422
    assert client.put("/api/volunteers/1", json={"interests": None}).status_code == 422

    cleared = client.put("/api/volunteers/1", json={"phone": None})
    assert cleared.status_code == 200
    assert cleared.json()["phone"] is None
    assert cleared.json()["name"] == "Jane Doe"
