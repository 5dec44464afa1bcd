"""POP endpoints: CRUD through the ``?id=`` contract, search and uniqueness."""


class TestCreatePop:
    def test_create_returns_record_with_timestamps(self, client):
        response = client.post("/api/pops", json={"name": "POP X", "code": "POP-099"})

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == 1
        assert data["name"] == "POP X"
        assert data["status"] == "active"
        assert data["created_at"]
        assert data["updated_at"]

    def test_duplicate_code_is_conflict_and_store_unchanged(self, client):
        client.post("/api/pops", json={"name": "POP X", "code": "POP-099"})

        response = client.post("/api/pops", json={"name": "Other", "code": "POP-099"})

        assert response.status_code == 409
        assert response.json() == {"error": "POP code already exists"}
        assert client.get("/api/pops").json()["total"] == 1

    def test_missing_required_field(self, client):
        response = client.post("/api/pops", json={"name": "POP X"})

        assert response.status_code == 400
        assert "code" in response.json()["error"]

    def test_empty_required_field(self, client):
        response = client.post("/api/pops", json={"name": "", "code": "POP-1"})

        assert response.status_code == 400

    def test_invalid_status(self, client):
        response = client.post("/api/pops", json={"name": "P", "code": "C", "status": "broken"})

        assert response.status_code == 400

    def test_ids_increase(self, client, create):
        first = create("pops", {"name": "A", "code": "A"})
        second = create("pops", {"name": "B", "code": "B"})

        assert second["id"] > first["id"]


class TestGetPop:
    def test_get_by_id(self, client, create, pop_data):
        pop = create("pops", pop_data)

        response = client.get("/api/pops", params={"id": pop["id"]})

        assert response.status_code == 200
        assert response.json()["code"] == "POP-001"

    def test_unknown_id(self, client):
        response = client.get("/api/pops", params={"id": 42})

        assert response.status_code == 404
        assert response.json() == {"error": "POP 42 not found"}

    def test_unparseable_id_is_not_found(self, client):
        response = client.get("/api/pops", params={"id": "abc"})

        assert response.status_code == 404


class TestListPops:
    def test_search_is_case_insensitive_across_fields(self, client, create, pop_data):
        create("pops", pop_data)
        create("pops", {"name": "POP Norte", "code": "POP-002", "address": "Av. Norte, 456"})

        by_address = client.get("/api/pops", params={"busca": "SÃO PAULO"}).json()
        by_code = client.get("/api/pops", params={"busca": "pop-002"}).json()

        assert [p["code"] for p in by_address["dados"]] == ["POP-001"]
        assert [p["code"] for p in by_code["dados"]] == ["POP-002"]

    def test_status_filter_and_search_are_combined(self, client, create):
        create("pops", {"name": "Central", "code": "C1", "status": "maintenance"})
        create("pops", {"name": "Central 2", "code": "C2"})

        data = client.get("/api/pops", params={"busca": "central", "status": "maintenance"}).json()

        assert data["total"] == 1
        assert data["dados"][0]["code"] == "C1"

    def test_pagination_metadata(self, client, create):
        for number in range(5):
            create("pops", {"name": f"POP {number}", "code": f"P{number}"})

        data = client.get("/api/pops", params={"page": 3, "limit": 2}).json()

        assert data["total"] == 5
        assert data["pagina"] == 3
        assert data["limite"] == 2
        assert data["total_paginas"] == 3
        assert [p["code"] for p in data["dados"]] == ["P4"]

    def test_invalid_pagination_falls_back_to_defaults(self, client, create):
        create("pops", {"name": "A", "code": "A"})

        data = client.get("/api/pops", params={"page": "x", "limit": "-3"}).json()

        assert data["pagina"] == 1
        assert data["limite"] == 10
        assert len(data["dados"]) == 1

    def test_empty_result(self, client):
        data = client.get("/api/pops", params={"busca": "nothing"}).json()

        assert data == {"dados": [], "total": 0, "pagina": 1, "limite": 10, "total_paginas": 0}


class TestUpdatePop:
    def test_update_preserves_absent_fields(self, client, create, pop_data):
        pop = create("pops", pop_data)

        response = client.put("/api/pops", params={"id": pop["id"]}, json={"status": "maintenance"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "maintenance"
        assert data["name"] == pop_data["name"]
        assert data["address"] == pop_data["address"]
        assert data["created_at"] == pop["created_at"]
        assert data["updated_at"] >= pop["updated_at"]

    def test_update_without_body_keeps_fields(self, client, create, pop_data):
        pop = create("pops", pop_data)

        response = client.put("/api/pops", params={"id": pop["id"]})

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == pop_data["name"]
        assert data["code"] == pop_data["code"]
        assert data["updated_at"] >= pop["updated_at"]

    def test_update_without_id(self, client):
        response = client.put("/api/pops", json={"name": "x"})

        assert response.status_code == 400
        assert response.json() == {"error": "ID is required"}

    def test_update_unknown_id(self, client):
        response = client.put("/api/pops", params={"id": 9}, json={"name": "x"})

        assert response.status_code == 404

    def test_update_to_taken_code(self, client, create):
        create("pops", {"name": "A", "code": "A"})
        second = create("pops", {"name": "B", "code": "B"})

        response = client.put("/api/pops", params={"id": second["id"]}, json={"code": "A"})

        assert response.status_code == 409

    def test_update_keeping_own_code(self, client, create):
        pop = create("pops", {"name": "A", "code": "A"})

        response = client.put("/api/pops", params={"id": pop["id"]}, json={"code": "A", "name": "A2"})

        assert response.status_code == 200
        assert response.json()["name"] == "A2"

    def test_nulling_mandatory_field(self, client, create):
        pop = create("pops", {"name": "A", "code": "A"})

        response = client.put("/api/pops", params={"id": pop["id"]}, json={"name": None})

        assert response.status_code == 400
        assert client.get("/api/pops", params={"id": pop["id"]}).json()["name"] == "A"


class TestDeletePop:
    def test_delete(self, client, create, pop_data):
        pop = create("pops", pop_data)

        response = client.delete("/api/pops", params={"id": pop["id"]})

        assert response.status_code == 204
        assert response.content == b""
        assert client.get("/api/pops", params={"id": pop["id"]}).status_code == 404

    def test_delete_unknown_id_leaves_store_unchanged(self, client, create, pop_data):
        create("pops", pop_data)

        response = client.delete("/api/pops", params={"id": 99})

        assert response.status_code == 404
        assert client.get("/api/pops").json()["total"] == 1

    def test_delete_without_id(self, client):
        response = client.delete("/api/pops")

        assert response.status_code == 400
