import csv
import io
import re

from tests.helpers import volunteer_payload


def _seed(client):
    for name, email in [
        ("Jane Doe", "jane@example.com"),
        ("Bob Stone", "bob@example.com"),
        ("Ann Jameson", "ann@example.com"),
    ]:
        assert client.post("/api/volunteers", json=volunteer_payload(name=name, email=email)).status_code == 200


def test_view_filters_and_sorts(client):
    _seed(client)
    response = client.get(
        "/api/admin/volunteers/view",
        params={"query": "jam", "search_fields": ["name", "email"], "sort_field": "name", "sort_direction": "asc"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["count"] == 1
    assert [item["name"] for item in body["items"]] == ["Ann Jameson"]

    ordered = client.get("/api/admin/volunteers/view", params={"sort_field": "name", "sort_direction": "desc"}).json()
    assert [item["name"] for item in ordered["items"]] == ["Jane Doe", "Bob Stone", "Ann Jameson"]
    assert ordered["search_fields"] == ["name", "email", "phone"]


def test_view_prunes_selection_to_visible_ids(client):
    _seed(client)
    body = client.get(
        "/api/admin/volunteers/view",
        params={"query": "bob", "selected": [1, 2, 42]},
    ).json()
    assert body["selection"] == [2]


def test_view_rejects_unknown_fields(client):
    assert client.get("/api/admin/volunteers/view", params={"sort_field": "salary"}).status_code == 400
    assert client.get("/api/admin/newsletter/view", params={"search_fields": ["name"]}).status_code == 400
    assert client.get("/api/admin/volunteers/view", params={"date_filter": "year"}).status_code == 422


def test_bulk_delete_reports_counts_and_skips_stale_ids(client):
    _seed(client)
    assert client.delete("/api/volunteers/3").status_code == 200
    response = client.post("/api/admin/volunteers/bulk-delete", json={"ids": [1, 3]})
    assert response.status_code == 200
    body = response.json()
    assert body["requested"] == 2
    assert body["attempted"] == 1
    assert body["succeeded"] == 1
    assert body["failed"] == 0
    assert body["deleted_ids"] == [1]
    assert body["remaining_selection"] == []
    assert [item["id"] for item in client.get("/api/volunteers").json()] == [2]


def test_export_selection_returns_csv_attachment(client):
    _seed(client)
    response = client.post(
        "/api/admin/volunteers/export",
        json={"ids": [3, 1], "sort_field": "name", "sort_direction": "asc"},
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert re.search(r'filename="volunteers-\d{4}-\d{2}-\d{2}\.csv"', response.headers["content-disposition"])
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["Name", "Email", "Phone", "Interests", "CreatedAt"]
    assert [row[0] for row in rows[1:]] == ["Ann Jameson", "Jane Doe"]
    assert rows[1][3] == "Phone Banking"


def test_export_all_with_custom_columns(client):
    _seed(client)
    response = client.post(
        "/api/admin/volunteers/export",
        json={
            "export_all": True,
            "sort_field": "email",
            "sort_direction": "asc",
            "columns": [{"display_name": "E-mail", "field_key": "Email"}],
        },
    )
    assert response.status_code == 200
    assert response.text == 'E-mail\n"ann@example.com"\n"bob@example.com"\n"jane@example.com"'
    assert response.headers["x-export-row-count"] == "3"


def test_export_view_csv_and_bad_column(client):
    _seed(client)
    response = client.get("/api/admin/volunteers/export.csv", params={"query": "example.com"})
    assert response.status_code == 200
    assert len(response.text.split("\n")) == 4
    bad = client.post(
        "/api/admin/volunteers/export",
        json={"export_all": True, "columns": [{"display_name": "X", "field_key": "salary"}]},
    )
    assert bad.status_code == 400


def test_stats_endpoint(client):
    _seed(client)
    client.post("/api/newsletter", json={"email": "n@example.com"})
    body = client.get("/api/admin/stats").json()
    assert body["volunteers_total"] == 3
    assert body["volunteers_this_week"] == 3
    assert body["newsletter_this_month"] == 1
    assert body["donations_total_dollars"] == 0.0
