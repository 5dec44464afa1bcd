"""Maintenance endpoints: checklist submission, completion and the upcoming window."""

from datetime import datetime, timedelta, timezone

import pytest


def _iso(delta):
    return (datetime.now(timezone.utc) + delta).isoformat()


@pytest.fixture
def maintenance(create):
    return create("maintenance", {
        "title": "Preventiva mensal",
        "asset_type": "generator",
        "asset_id": 1,
        "asset_name": "Gerador Principal",
        "technician_id": 2,
        "notes": "Agendada",
        "photo_urls": ["https://example.com/before.jpg"],
    })


class TestMaintenanceCrud:
    def test_defaults(self, maintenance):
        assert maintenance["status"] == "scheduled"
        assert maintenance["frequency"] == "once"
        assert maintenance["checklist"] == []
        assert maintenance["scheduled_date"]

    def test_required_fields(self, client):
        response = client.post("/api/maintenance", json={"title": "x", "asset_type": "generator"})

        assert response.status_code == 400

    def test_filters(self, client, create, maintenance):
        create("maintenance", {"title": "POP", "asset_type": "pop", "asset_id": 3, "technician_id": 1})

        by_asset = client.get("/api/maintenance", params={"asset_type": "pop"}).json()
        by_technician = client.get("/api/maintenance", params={"technician_id": 2}).json()
        by_search = client.get("/api/maintenance", params={"busca": "gerador principal"}).json()

        assert by_asset["total"] == 1
        assert by_technician["dados"][0]["id"] == maintenance["id"]
        assert by_search["total"] == 1


class TestChecklistSubmission:
    def test_replace_checklist(self, client, maintenance):
        checklist = [{"id": "oil", "type": "yes_no", "title": "Oil ok?", "value": True}]

        response = client.put(f"/api/maintenance/{maintenance['id']}/checklist", json={"checklist": checklist})

        assert response.status_code == 200
        assert response.json()["checklist"] == checklist
        assert response.json()["title"] == maintenance["title"]

    def test_checklist_must_be_a_list(self, client, maintenance):
        response = client.put(f"/api/maintenance/{maintenance['id']}/checklist", json={"checklist": "oil"})

        assert response.status_code == 400

    def test_unknown_maintenance(self, client):
        response = client.put("/api/maintenance/77/checklist", json={"checklist": []})

        assert response.status_code == 404


class TestCompletion:
    def test_complete(self, client, maintenance):
        response = client.post(
            f"/api/maintenance/{maintenance['id']}/complete",
            json={"final_notes": "Tudo ok", "final_photos": ["https://example.com/after.jpg"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "completed"
        assert data["completed_date"]
        assert data["notes"] == "Tudo ok"
        assert data["photo_urls"] == [
            "https://example.com/before.jpg",
            "https://example.com/after.jpg",
        ]

    def test_complete_without_body_keeps_notes(self, client, maintenance):
        response = client.post(f"/api/maintenance/{maintenance['id']}/complete")

        assert response.status_code == 200
        assert response.json()["notes"] == "Agendada"

    def test_complete_twice(self, client, maintenance):
        client.post(f"/api/maintenance/{maintenance['id']}/complete", json={})

        response = client.post(f"/api/maintenance/{maintenance['id']}/complete", json={})

        assert response.status_code == 400
        assert response.json() == {"error": "Maintenance already completed"}


class TestUpcoming:
    def test_window_and_order(self, client, create):
        base = {"asset_type": "generator", "asset_id": 1, "technician_id": 1}
        create("maintenance", {**base, "title": "in 10 days", "scheduled_date": _iso(timedelta(days=10))})
        create("maintenance", {**base, "title": "in 2 days", "scheduled_date": _iso(timedelta(days=2))})
        create("maintenance", {**base, "title": "in 60 days", "scheduled_date": _iso(timedelta(days=60))})
        create("maintenance", {**base, "title": "last week", "scheduled_date": _iso(timedelta(days=-7))})
        create("maintenance", {**base, "title": "done", "status": "completed",
                               "scheduled_date": _iso(timedelta(days=3))})

        data = client.get("/api/maintenance/upcoming").json()

        assert [m["title"] for m in data["dados"]] == ["in 2 days", "in 10 days"]
        assert data["total"] == 2
        assert data["period"]["days"] == 30
        assert set(data["period"]) == {"from", "to", "days"}

    def test_custom_days(self, client, create):
        create("maintenance", {"title": "in 60 days", "asset_type": "pop", "asset_id": 1,
                               "technician_id": 1, "scheduled_date": _iso(timedelta(days=60))})

        assert client.get("/api/maintenance/upcoming", params={"days": 90}).json()["total"] == 1
        assert client.get("/api/maintenance/upcoming", params={"days": "abc"}).json()["period"]["days"] == 30

    def test_zero_days_is_an_empty_window(self, client, create):
        create("maintenance", {"title": "tomorrow", "asset_type": "pop", "asset_id": 1,
                               "technician_id": 1, "scheduled_date": _iso(timedelta(days=1))})

        data = client.get("/api/maintenance/upcoming", params={"days": 0}).json()

        assert data["period"]["days"] == 0
        assert data["total"] == 0
        assert client.get("/api/maintenance/upcoming", params={"days": -5}).json()["period"]["days"] == 30
