"""HTTP tests for the v1 routes, run once per store backend."""

from unittest.mock import patch

from fastapi.testclient import TestClient

from fibsrv_api.app.core.config import Settings
from fibsrv_api.app.core.errors import StorageFault
from fibsrv_api.app.main import create_app
from fibsrv_api.app.services.fib_service import FibService


def test_fib_values(client):
    for n, expected in [(0, 0), (1, 1), (2, 1), (5, 5), (10, 55), (15, 610), (20, 6765), (8, 21)]:
        resp = client.get("/v1/fib", params={"n": n})
        assert resp.status_code == 200
        assert resp.json() == {"result": expected}


def test_fibless_values(client):
    assert client.get("/v1/clear").status_code == 200
    for target, expected in [(0, 0), (1, 1), (2, 3), (11, 7), (120, 12), (58, 11)]:
        resp = client.get("/v1/fibless", params={"target": target})
        assert resp.status_code == 200
        assert resp.json()["result"] == expected


def test_negative_index_is_bad_request(client):
    resp = client.get("/v1/fib", params={"n": -3})
    assert resp.status_code == 400
    assert "non-negative" in resp.json()["detail"]


def test_negative_target_is_bad_request(client):
    resp = client.get("/v1/fibless", params={"target": -1})
    assert resp.status_code == 400


def test_fibless_route_uses_fib_less(client):
    with patch.object(FibService, "fib_less", return_value=42) as fib_less:
        resp = client.get("/v1/fibless", params={"target": 50})
    assert resp.json() == {"result": 42}
    assert fib_less.call_args.args[-1] == 50


def test_unreachable_fibless_target_is_bad_request(client):
    resp = client.get("/v1/fibless", params={"target": 2**64 - 1})
    assert resp.status_code == 400
    assert "Fib(93)" in resp.json()["detail"]


def test_non_integer_and_missing_parameters(client):
    assert client.get("/v1/fib", params={"n": "ten"}).status_code == 422
    assert client.get("/v1/fib").status_code == 422
    assert client.get("/v1/fibless").status_code == 422


def test_clear_and_memocount(client):
    client.get("/v1/fib", params={"n": 10})
    assert client.get("/v1/memocount", params={"target": 55}).json() == {"result": 11}

    resp = client.post("/v1/clear")
    assert resp.status_code == 200
    assert resp.json() == {"status": "cleared"}
    assert client.get("/v1/memocount", params={"target": 55}).json() == {"result": 0}


def test_stats(client):
    client.get("/v1/fib", params={"n": 2})
    client.get("/v1/fib", params={"n": 2})
    assert client.get("/v1/stats").json() == {"hits": 2, "misses": 2}


def test_info_reports_backend(client, api_settings):
    body = client.get("/v1/info").json()
    assert body["store"] == api_settings.store_backend
    assert body["project"] == api_settings.project_name
    assert body["version"] == api_settings.api_version


def test_storage_fault_is_server_error(client):
    store = client.app.state.fib_service.store
    with patch.object(store, "get", side_effect=StorageFault("database unavailable")):
        resp = client.get("/v1/fib", params={"n": 4})
    assert resp.status_code == 500
    assert resp.json()["detail"] == "database unavailable"


def test_clear_fault_is_server_error(client):
    store = client.app.state.fib_service.store
    with patch.object(store, "clear", side_effect=StorageFault("read-only")):
        resp = client.get("/v1/clear")
    assert resp.status_code == 500


def test_deadline_is_gateway_timeout(tmp_path):
    app = create_app(Settings(store_backend="memory", request_timeout=0))
    with TestClient(app) as c:
        resp = c.get("/v1/fib", params={"n": 5})
    assert resp.status_code == 504


def test_not_ready_before_startup():
    app = create_app(Settings(store_backend="memory"))
    # Without entering the context manager the startup hook never runs.
    resp = TestClient(app).get("/v1/fib", params={"n": 1})
    assert resp.status_code == 503


def test_values_beyond_signed_range_on_memory_store():
    app = create_app(Settings(store_backend="memory"))
    with TestClient(app) as c:
        assert c.get("/v1/fib", params={"n": 93}).json() == {"result": 12200160415121876738}


def test_shutdown_closes_store(tmp_path):
    app = create_app(Settings(store_backend="sqlite", database_url=str(tmp_path / "s.db"),
                              connect_attempts=1))
    with TestClient(app) as c:
        store = c.app.state.fib_service.store
        assert c.get("/v1/fib", params={"n": 3}).json() == {"result": 2}
    assert app.state.fib_service is None
    assert store._closed
