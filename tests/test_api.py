"""Tests for the HTTP surface (ingest, query, clear, health)."""

import json

import pytest
from fastapi.testclient import TestClient

from runtime.api.server import create_app


class TestIngest:

    def test_log_is_public_and_returns_empty_200(self, client, test_settings):
        response = client.post("/log", json={"server": "srv", "resource": "res", "type": "console", "data": "hi"})

        assert response.status_code == 200
        assert response.content == b""
        path = test_settings.log_dir / "srv" / "res.jsonl"
        stored = json.loads(path.read_text(encoding="utf-8").strip())
        assert stored["data"] == "hi"
        assert "timestamp" in stored

    def test_missing_resource_is_400(self, client):
        response = client.post("/log", json={"type": "console"})
        assert response.status_code == 400
        assert response.json() == {"error": "Resource name is required."}

    def test_invalid_json_is_400(self, client):
        response = client.post("/log", content=b"{nope", headers={"Content-Type": "application/json"})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_array_body_is_400(self, client):
        response = client.post("/log", json=[{"resource": "res"}])
        assert response.status_code == 400

    def test_inference_routes_fetch_call(self, authed_client):
        authed_client.post("/log", json={
            "server": "srv",
            "resource": "declared",
            "type": "fetch_call",
            "url": "https://myresource/api/ping",
        })
        assert authed_client.get("/logs", params={"server": "srv"}).json() == ["myresource"]

    def test_storage_failure_is_500(self, make_settings, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("x")
        app = create_app(make_settings(LOG_DIR=str(blocker)))
        response = TestClient(app).post("/log", json={"resource": "res", "type": "console"})

        assert response.status_code == 500
        assert "error" in response.json()

    def test_oversized_body_is_413(self, make_settings):
        client = TestClient(create_app(make_settings(MAX_BODY_BYTES=64)))
        response = client.post("/log", json={"resource": "res", "data": "x" * 200})
        assert response.status_code == 413

    def test_cors_preflight(self, client):
        response = client.options(
            "/log",
            headers={"Origin": "http://nui-game", "Access-Control-Request-Method": "POST"},
        )
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    def test_lone_surrogate_is_stored_and_read_back(self, authed_client, test_settings):
        body = b'{"server": "srv", "resource": "res", "type": "console", "data": "\\ud800"}'
        response = authed_client.post("/log", content=body, headers={"Content-Type": "application/json"})

        assert response.status_code == 200
        assert (test_settings.log_dir / "srv" / "res.jsonl").is_file()
        tail = authed_client.get("/logs", params={"server": "srv", "resource": "res"})
        assert tail.status_code == 200
        assert tail.json()[0]["data"] == "\ud800"

    def test_each_app_writes_to_its_own_log_dir(self, make_settings, tmp_path):
        settings_a = make_settings(LOG_DIR=str(tmp_path / "a"))
        app_a = create_app(settings_a)
        settings_b = make_settings(LOG_DIR=str(tmp_path / "b"))
        app_b = create_app(settings_b)

        assert TestClient(app_a).post("/log", json={"server": "srv", "resource": "res", "type": "console"}).status_code == 200

        assert (tmp_path / "a" / "srv" / "res.jsonl").is_file()
        assert not (tmp_path / "b").exists()
        assert TestClient(app_a).get("/health").json()["logDirectory"] == str(settings_a.log_dir)
        assert TestClient(app_b).get("/health").json()["logDirectory"] == str(settings_b.log_dir)


class TestQuery:

    @pytest.fixture(autouse=True)
    def _seed(self, authed_client):
        for server, resource in [("alpha", "menu"), ("alpha", "hud"), ("beta", "phone")]:
            authed_client.post("/log", json={"server": server, "resource": resource, "type": "console", "data": 1})

    def test_list_servers(self, authed_client):
        assert authed_client.get("/logs").json() == ["alpha", "beta"]

    def test_list_resources(self, authed_client):
        assert authed_client.get("/logs", params={"server": "alpha"}).json() == ["hud", "menu"]

    def test_list_resources_unknown_server(self, authed_client):
        response = authed_client.get("/logs", params={"server": "ghost"})
        assert response.status_code == 200
        assert response.json() == []

    def test_tail(self, authed_client):
        for i in range(3):
            authed_client.post("/log", json={"server": "alpha", "resource": "menu", "type": "nui_to_lua", "i": i})

        records = authed_client.get("/logs", params={"server": "alpha", "resource": "menu"}).json()

        assert isinstance(records, list)
        assert [r.get("i") for r in records] == [None, 0, 1, 2]
        assert all("timestamp" in r for r in records)

    def test_tail_missing_resource_is_empty(self, authed_client):
        assert authed_client.get("/logs", params={"server": "alpha", "resource": "nope"}).json() == []

    def test_resource_without_server_is_400(self, authed_client):
        response = authed_client.get("/logs", params={"resource": "menu"})
        assert response.status_code == 400
        assert "error" in response.json()


class TestClear:

    def test_clear_existing(self, authed_client):
        authed_client.post("/log", json={"server": "srv", "resource": "res", "type": "console"})

        response = authed_client.post("/clear", json={"server": "srv", "resource": "res"})

        assert response.status_code == 200
        assert response.json() == {"message": "Logs cleared for srv/res"}
        assert authed_client.get("/logs", params={"server": "srv", "resource": "res"}).json() == []

    def test_clear_missing_is_404(self, authed_client):
        response = authed_client.post("/clear", json={"server": "srv", "resource": "never"})
        assert response.status_code == 404
        assert "message" in response.json()

    @pytest.mark.parametrize("body", [{"server": "srv"}, {"resource": "res"}, {}])
    def test_clear_requires_server_and_resource(self, authed_client, body):
        response = authed_client.post("/clear", json=body)
        assert response.status_code == 400
        assert "error" in response.json()


class TestFlatStorage:

    @pytest.fixture
    def flat_client(self, make_settings):
        settings = make_settings(FLAT_STORAGE="true")
        client = TestClient(create_app(settings))
        client.cookies.set(settings.cookie_name, settings.pin)
        return client

    def test_flat_list_tail_and_clear(self, flat_client):
        flat_client.post("/log", json={"server": "ignored", "resource": "res", "type": "console"})

        assert flat_client.get("/logs").json() == ["res"]
        assert len(flat_client.get("/logs", params={"resource": "res"}).json()) == 1
        assert flat_client.post("/clear", json={"resource": "res"}).status_code == 200


def test_health(client, test_settings):
    response = client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "running"
    assert data["logDirectory"] == str(test_settings.log_dir)
    assert "timestamp" in data
