from sqlalchemy.exc import OperationalError

from conftest import as_user


def _db_down(*_a, **_kw):
    raise OperationalError("SELECT tasks", {}, Exception("db down"))


def test_welcome(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Welcome to the Task API", "version": "1.0.0"}


def test_unknown_route_envelope(client):
    resp = client.get("/api/v1/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Route not found"}


def test_method_not_allowed_reported_as_not_found(client, make_account):
    uid = make_account()
    resp = client.delete("/api/v1/tasks", headers=as_user(uid))
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Route not found"}


def test_storage_fault_hides_detail(client, make_account, monkeypatch):
    uid = make_account()
    monkeypatch.setattr("taskcore.tasks_api.svc_list_tasks", _db_down)
    resp = client.get("/api/v1/tasks", headers=as_user(uid))
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Server error while fetching tasks"}


def test_storage_fault_detail_in_development(app, client, make_account, monkeypatch):
    uid = make_account()
    monkeypatch.setitem(app.config, "EXPOSE_ERROR_DETAIL", True)
    monkeypatch.setattr("taskcore.tasks_api.svc_create_task", _db_down)
    resp = client.post("/api/v1/tasks", json={"title": "x"}, headers=as_user(uid))
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["message"] == "Server error while creating task"
    assert "db down" in body["error"]


def test_unexpected_exception_gets_incident_id(client, make_account, monkeypatch):
    uid = make_account()

    def explode(*_a, **_kw):
        raise RuntimeError("kaboom")

    monkeypatch.setattr("taskcore.tasks_api.svc_get_task", explode)
    resp = client.get("/api/v1/tasks/any", headers=as_user(uid))
    assert resp.status_code == 500
    body = resp.get_json()
    assert body["message"] == "Internal server error"
    assert body["incident_id"]
    assert "error" not in body


def test_request_id_echoed(client):
    resp = client.get("/", headers={"X-Request-Id": "req-123"})
    assert resp.headers["X-Request-Id"] == "req-123"
    assert resp.headers["Cache-Control"] == "no-store"
    generated = client.get("/")
    assert generated.headers["X-Request-Id"]


def test_cors_headers_for_allowed_origin(client):
    resp = client.get("/", headers={"Origin": "http://localhost:3000"})
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
    assert resp.headers["Access-Control-Allow-Credentials"] == "true"
    assert "PATCH" in resp.headers["Access-Control-Allow-Methods"]


def test_cors_headers_absent_for_other_origin(client):
    resp = client.get("/", headers={"Origin": "https://evil.example"})
    assert "Access-Control-Allow-Origin" not in resp.headers


def test_preflight_short_circuits_without_auth(client):
    resp = client.options(
        "/api/v1/tasks",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )
    assert resp.status_code == 204
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
