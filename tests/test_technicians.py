"""Technician endpoints: e-mail uniqueness, the especialidade filter and work lists."""

import pytest


@pytest.fixture
def technicians(create):
    return [
        create("technicians", {
            "name": "João Silva",
            "email": "joao.silva@empresa.com",
            "specialization": "Ar Condicionado",
            "pop_id": 1,
        }),
        create("technicians", {
            "name": "Maria Santos",
            "email": "maria.santos@empresa.com",
            "specialization": "Elétrica",
            "pop_id": 2,
        }),
        create("technicians", {
            "name": "Pedro Costa",
            "email": "pedro.costa@empresa.com",
            "specialization": "Rede",
            "status": "vacation",
            "access_level": "senior",
        }),
    ]


class TestTechnicians:
    def test_defaults(self, technicians):
        assert technicians[0]["status"] == "active"
        assert technicians[0]["access_level"] == "technician"

    def test_duplicate_email(self, client, technicians):
        response = client.post(
            "/api/technicians", json={"name": "Another", "email": "joao.silva@empresa.com"}
        )

        assert response.status_code == 409
        assert response.json()["error"] == "Email already in use"

    def test_update_to_taken_email(self, client, technicians):
        response = client.put(
            "/api/technicians",
            params={"id": technicians[1]["id"]},
            json={"email": "joao.silva@empresa.com"},
        )

        assert response.status_code == 409

    def test_especialidade_is_substring_match(self, client, technicians):
        data = client.get("/api/technicians", params={"especialidade": "elétr"}).json()

        assert [t["name"] for t in data["dados"]] == ["Maria Santos"]

    def test_status_filter(self, client, technicians):
        data = client.get("/api/technicians", params={"status": "vacation"}).json()

        assert data["total"] == 1
        assert data["dados"][0]["access_level"] == "senior"

    def test_pop_filter(self, client, technicians):
        data = client.get("/api/technicians", params={"pop_id": 2}).json()

        assert [t["name"] for t in data["dados"]] == ["Maria Santos"]

    def test_search_by_email(self, client, technicians):
        data = client.get("/api/technicians", params={"busca": "PEDRO.COSTA"}).json()

        assert data["total"] == 1

    def test_missing_email(self, client):
        response = client.post("/api/technicians", json={"name": "No email"})

        assert response.status_code == 400


class TestTechnicianActivities:
    @pytest.fixture
    def assigned(self, create, technicians):
        joao = technicians[0]["id"]
        for title, status in [("AC filters", "pending"), ("Cleaning", "completed"), ("Cabling", "pending")]:
            create("activities", {"title": title, "status": status, "assigned_to": joao})
        create("activities", {"title": "Someone else", "assigned_to": technicians[1]["id"]})
        return joao

    def test_lists_assigned_activities(self, client, assigned):
        data = client.get(f"/api/technicians/{assigned}/activities").json()

        assert data["total"] == 3
        assert [a["title"] for a in data["dados"]] == ["AC filters", "Cleaning", "Cabling"]

    def test_status_filter_and_pagination(self, client, assigned):
        data = client.get(
            f"/api/technicians/{assigned}/activities", params={"status": "pending", "limit": 1, "page": 2}
        ).json()

        assert data["total"] == 2
        assert data["total_paginas"] == 2
        assert [a["title"] for a in data["dados"]] == ["Cabling"]

    def test_unknown_technician(self, client):
        response = client.get("/api/technicians/99/activities")

        assert response.status_code == 404
        assert response.json() == {"error": "Technician 99 not found"}
