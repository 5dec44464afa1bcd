"""FieldOpsAPI client: result tuples, error messages and the GET cache."""

import json

import pytest
import requests

from field_ops_client import FieldOpsAPI


class FakeSession:
    """Records requests and answers from a queue of (status, body) pairs."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def queue(self, status_code, body=None):
        self.responses.append((status_code, body))

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "params": params, "json": json})
        status_code, body = self.responses.pop(0) if self.responses else (200, {})
        response = requests.Response()
        response.status_code = status_code
        response.url = url
        response._content = b"" if body is None else _dumps(body)
        return response


def _dumps(body):
    return json.dumps(body).encode("utf-8")


class Clock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def api(session, clock):
    return FieldOpsAPI(base_url="http://api.local/", cache_ttl=30, session=session, clock=clock)


class TestRequests:
    def test_list_builds_url_and_params(self, api, session):
        session.queue(200, {"dados": [], "total": 0})

        data, error = api.list("activities", status="pending", page=2)

        assert error is None
        assert data == {"dados": [], "total": 0}
        assert session.calls[0]["url"] == "http://api.local/api/activities"
        assert session.calls[0]["params"] == {"status": "pending", "page": 2}

    def test_update_sends_id_as_query_parameter(self, api, session):
        session.queue(200, {"id": 3})

        api.update("pops", 3, {"status": "inactive"})

        call = session.calls[0]
        assert call["method"] == "PUT"
        assert call["params"] == {"id": 3}
        assert call["json"] == {"status": "inactive"}

    def test_delete_with_empty_body(self, api, session):
        session.queue(204)

        assert api.delete("pops", 3) == (None, None)

    def test_error_message_comes_from_error_body(self, api, session):
        session.queue(409, {"error": "POP code already exists"})

        data, error = api.create("pops", {"name": "X", "code": "POP-001"})

        assert data is None
        assert error == {"status_code": 409, "message": "POP code already exists"}

    def test_connection_error(self, api, session, monkeypatch):
        def refuse(*args, **kwargs):
            raise requests.ConnectionError("connection refused")

        monkeypatch.setattr(session, "request", refuse)

        data, error = api.dashboard()

        assert data is None
        assert error["status_code"] is None
        assert "refused" in error["message"]

    def test_unknown_resource(self, api):
        with pytest.raises(ValueError):
            api.list("users")


class TestCache:
    def test_get_is_cached(self, api, session):
        session.queue(200, {"id": 1})

        first = api.get("pops", 1)
        second = api.get("pops", 1)

        assert first == second == ({"id": 1}, None)
        assert len(session.calls) == 1

    def test_different_params_are_cached_separately(self, api, session):
        api.list("pops", page=1)
        api.list("pops", page=2)

        assert len(session.calls) == 2

    def test_refresh_forces_refetch(self, api, session):
        api.dashboard()
        api.dashboard(refresh=True)

        assert len(session.calls) == 2

    def test_entries_expire(self, api, session, clock):
        api.list("pops")
        clock.now += 31
        api.list("pops")

        assert len(session.calls) == 2

    def test_errors_are_not_cached(self, api, session):
        session.queue(404, {"error": "POP 9 not found"})
        session.queue(200, {"id": 9})

        assert api.get("pops", 9)[1]["status_code"] == 404
        assert api.get("pops", 9) == ({"id": 9}, None)

    def test_write_invalidates_resource_and_dashboard_only(self, api, session):
        api.list("pops")
        api.list("technicians")
        api.dashboard()
        session.calls.clear()

        api.create("pops", {"name": "X", "code": "X"})
        api.list("pops")
        api.list("technicians")
        api.dashboard()

        fetched = [call["url"] for call in session.calls if call["method"] == "GET"]
        assert fetched == ["http://api.local/api/pops", "http://api.local/api/dashboard"]

    def test_failed_write_keeps_cache(self, api, session):
        api.list("pops")
        session.queue(400, {"error": "code: Field required"})
        api.create("pops", {"name": "X"})
        session.calls.clear()

        api.list("pops")

        assert session.calls == []

    def test_zero_ttl_disables_cache(self, session, clock):
        api = FieldOpsAPI(base_url="http://api.local", cache_ttl=0, session=session, clock=clock)

        api.list("pops")
        api.list("pops")

        assert len(session.calls) == 2

    def test_complete_maintenance_invalidates_maintenance(self, api, session):
        api.upcoming_maintenance()
        session.queue(200, {"id": 1, "status": "completed"})
        api.complete_maintenance(1, final_notes="ok")
        session.calls.clear()

        api.upcoming_maintenance()

        assert len(session.calls) == 1

    def test_supply_write_invalidates_generator_histories(self, api, session):
        api.fuel_history(1)
        session.queue(201, {"id": 1, "generator_id": 1})
        api.create("supplies", {"generator_id": 1})
        session.calls.clear()

        api.fuel_history(1)

        assert [call["url"] for call in session.calls] == [
            "http://api.local/api/generators/1/fuel-history"
        ]

    def test_maintenance_write_invalidates_histories_and_template_usage(self, api, session):
        api.maintenance_history(1)
        api.template_usage(2)
        api.list("pops")
        session.queue(200, {"id": 5})
        api.submit_checklist(5, [{"id": "oil", "value": True}])
        session.calls.clear()

        api.maintenance_history(1)
        api.template_usage(2)
        api.list("pops")

        assert [call["url"] for call in session.calls] == [
            "http://api.local/api/generators/1/maintenance-history",
            "http://api.local/api/checklists/2/usage",
        ]

    def test_activity_write_invalidates_technician_work_list(self, api, session):
        api.technician_activities(3, status="pending")
        session.queue(201, {"id": 1})
        api.create("activities", {"title": "New", "assigned_to": 3})
        session.calls.clear()

        api.technician_activities(3, status="pending")

        assert len(session.calls) == 1

    def test_expired_entries_are_dropped(self, api, session, clock):
        api.list("pops")
        clock.now += 31
        session.queue(500, {"error": "Internal server error"})

        data, error = api.list("pops")

        assert error["status_code"] == 500
        assert api._cache == {}


class TestActions:
    def test_technician_activities(self, api, session):
        api.technician_activities(3, status="pending", page=2)

        call = session.calls[0]
        assert call["url"] == "http://api.local/api/technicians/3/activities"
        assert call["params"] == {"status": "pending", "page": 2}

    def test_supply_reports(self, api, session):
        api.supply_summary()
        api.supplies_by_generator(days=180)

        assert session.calls[0]["url"] == "http://api.local/api/supplies/analytics/summary"
        assert session.calls[0]["params"] is None
        assert session.calls[1]["url"] == "http://api.local/api/supplies/analytics/by-generator"
        assert session.calls[1]["params"] == {"periodo": 180}
