"""Field operations API client.

A thin wrapper around the REST API served by ``field_ops_api`` for
dashboards and scripts.  It uses the ``requests`` library internally and
mirrors the data hooks of the dashboard front end:

* every call returns a tuple ``(data, error)`` instead of raising;
  ``error`` is ``{"status_code": ..., "message": ...}`` where the message
  is taken from the server's ``{"error": ...}`` body;
* GET responses are cached per path and query parameters for
  ``cache_ttl`` seconds; pass ``refresh=True`` to force a refetch;
* a successful write to a resource drops the cached responses of that
  resource, of the dashboard and of the views built from it (generator
  histories, template usage, technician work lists), so the next read
  sees the change.

Example::

    api = FieldOpsAPI(base_url="http://localhost:8000")
    pops, error = api.list("pops", status="active")
    created, error = api.create("pops", {"name": "POP Sul", "code": "POP-003"})
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]

#: Resource name -> path below the base URL.
RESOURCES = {
    "pops": "/api/pops",
    "activities": "/api/activities",
    "technicians": "/api/technicians",
    "supplies": "/api/supplies",
    "generators": "/api/generators",
    "maintenance": "/api/maintenance",
    "checklists": "/api/checklists",
}
DASHBOARD_PATH = "/api/dashboard"

#: Resource -> other resources whose cached views embed its rows.
RELATED = {
    "supplies": ("generators",),
    "maintenance": ("generators", "checklists"),
    "activities": ("technicians",),
}


class FieldOpsAPI:
    """Client for the field operations API.

    Args:
        base_url: Base URL of the API, e.g. ``http://localhost:8000``.
        cache_ttl: Seconds a cached GET response stays fresh.  ``0``
            disables caching.
        session: Optional requests session.  If not supplied a session
            will be created automatically.
        clock: Monotonic time source, replaceable in tests.
    """

    def __init__(
        self,
        *,
        base_url: str,
        cache_ttl: float = 30,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cache_ttl = cache_ttl
        self.session = session or requests.Session()
        self._clock = clock
        self._cache: Dict[Tuple[str, Tuple[Tuple[str, Any], ...]], Tuple[float, Any]] = {}

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Returns:
            A tuple ``(data, error)``. ``data`` contains the parsed JSON
            response on success (``None`` for empty bodies) and ``error``
            is ``None``. On failure, ``data`` is ``None`` and ``error``
            is a dictionary with keys ``status_code`` and ``message``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=15,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                except ValueError:
                    message = exc.response.text
                else:
                    if isinstance(err_json, dict):
                        message = err_json.get("error") or err_json.get("detail") or str(err_json)
                    else:
                        message = str(err_json)
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------
    @staticmethod
    def _cache_key(path: str, params: Optional[Dict[str, Any]]):
        items = tuple(sorted((k, v) for k, v in (params or {}).items() if v is not None))
        return path, items

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None, refresh: bool = False) -> Result:
        params = {k: v for k, v in (params or {}).items() if v is not None}
        key = self._cache_key(path, params)
        if not refresh and self.cache_ttl > 0:
            cached = self._cache.get(key)
            if cached is not None:
                if self._clock() - cached[0] < self.cache_ttl:
                    return cached[1], None
                del self._cache[key]
        data, error = self._request("GET", path, params=params or None)
        if error is None:
            self._cache[key] = (self._clock(), data)
        return data, error

    def invalidate(self, resource: Optional[str] = None) -> None:
        """Drop cached responses of ``resource`` and its dependants, or all of them."""
        if resource is None:
            self._cache.clear()
            return
        prefixes = (self._path(resource), DASHBOARD_PATH) + tuple(
            RESOURCES[name] for name in RELATED.get(resource, ())
        )
        for key in [key for key in self._cache if key[0].startswith(prefixes)]:
            del self._cache[key]

    def _write(self, resource: str, method: str, path: str, **kwargs: Any) -> Result:
        data, error = self._request(method, path, **kwargs)
        if error is None:
            self.invalidate(resource)
        return data, error

    @staticmethod
    def _path(resource: str) -> str:
        try:
            return RESOURCES[resource]
        except KeyError:
            raise ValueError(f"Unknown resource: {resource}") from None

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def list(self, resource: str, *, refresh: bool = False, **params: Any) -> Result:
        """Return one page of ``resource``: ``{dados, total, pagina, ...}``.

        Keyword arguments become query parameters, e.g.
        ``list("activities", status="pending", page=2)``.
        """
        return self._get(self._path(resource), params, refresh=refresh)

    def get(self, resource: str, record_id: int, *, refresh: bool = False) -> Result:
        return self._get(self._path(resource), {"id": record_id}, refresh=refresh)

    def create(self, resource: str, data: Dict[str, Any]) -> Result:
        return self._write(resource, "POST", self._path(resource), json_body=data)

    def update(self, resource: str, record_id: int, data: Dict[str, Any]) -> Result:
        return self._write(
            resource, "PUT", self._path(resource), params={"id": record_id}, json_body=data
        )

    def delete(self, resource: str, record_id: int) -> Result:
        return self._write(resource, "DELETE", self._path(resource), params={"id": record_id})

    # ------------------------------------------------------------------
    # Dashboard
    # ------------------------------------------------------------------
    def dashboard(self, *, refresh: bool = False) -> Result:
        return self._get(DASHBOARD_PATH, refresh=refresh)

    def alerts(self, *, refresh: bool = False) -> Result:
        return self._get(f"{DASHBOARD_PATH}/alerts", refresh=refresh)

    # ------------------------------------------------------------------
    # Resource actions
    # ------------------------------------------------------------------
    def fuel_history(self, generator_id: int, *, refresh: bool = False) -> Result:
        return self._get(f"{RESOURCES['generators']}/{generator_id}/fuel-history", refresh=refresh)

    def maintenance_history(self, generator_id: int, *, refresh: bool = False) -> Result:
        return self._get(
            f"{RESOURCES['generators']}/{generator_id}/maintenance-history", refresh=refresh
        )

    def upcoming_maintenance(self, days: int = 30, *, refresh: bool = False) -> Result:
        return self._get(f"{RESOURCES['maintenance']}/upcoming", {"days": days}, refresh=refresh)

    def submit_checklist(self, maintenance_id: int, checklist: List[Dict[str, Any]]) -> Result:
        path = f"{RESOURCES['maintenance']}/{maintenance_id}/checklist"
        return self._write("maintenance", "PUT", path, json_body={"checklist": checklist})

    def complete_maintenance(
        self,
        maintenance_id: int,
        final_notes: Optional[str] = None,
        final_photos: Optional[List[str]] = None,
    ) -> Result:
        body: Dict[str, Any] = {"final_photos": final_photos or []}
        if final_notes is not None:
            body["final_notes"] = final_notes
        path = f"{RESOURCES['maintenance']}/{maintenance_id}/complete"
        return self._write("maintenance", "POST", path, json_body=body)

    def duplicate_template(self, template_id: int, name: Optional[str] = None) -> Result:
        body = {"name": name} if name else {}
        path = f"{RESOURCES['checklists']}/{template_id}/duplicate"
        return self._write("checklists", "POST", path, json_body=body)

    def template_usage(self, template_id: int, *, refresh: bool = False) -> Result:
        return self._get(f"{RESOURCES['checklists']}/{template_id}/usage", refresh=refresh)

    def technician_activities(
        self, technician_id: int, *, refresh: bool = False, **params: Any
    ) -> Result:
        """One page of the activities assigned to a technician (``status``, ``page``, ``limit``)."""
        path = f"{RESOURCES['technicians']}/{technician_id}/activities"
        return self._get(path, params, refresh=refresh)

    def supply_summary(self, days: Optional[int] = None, *, refresh: bool = False) -> Result:
        return self._get(
            f"{RESOURCES['supplies']}/analytics/summary", {"periodo": days}, refresh=refresh
        )

    def supplies_by_generator(self, days: Optional[int] = None, *, refresh: bool = False) -> Result:
        return self._get(
            f"{RESOURCES['supplies']}/analytics/by-generator", {"periodo": days}, refresh=refresh
        )
