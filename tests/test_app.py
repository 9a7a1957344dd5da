from app.main import app
from app.shared.core.dependencies import get_notifier
from conftest import API


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["database"]["status"] == "healthy"


def test_root_info(client):
    body = client.get("/").json()
    assert body["name"] == "Menu Management API"
    assert body["api_base"] == "/api/v1"


def test_request_id_is_echoed(client):
    response = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_unknown_route_uses_envelope(client):
    response = client.get(f"{API}/nowhere")
    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["statusCode"] == 404


def test_malformed_json_body(client, admin):
    response = client.post(
        f"{API}/roles",
        content="{not json",
        headers={**admin.headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Validation failed"


def test_realtime_echo_and_status(client):
    with client.websocket_connect("/ws") as first, client.websocket_connect("/ws") as second:
        status = client.get(f"{API}/realtime/status").json()["data"]
        assert status["connections"] == 2

        first.send_text("not json")
        first.send_json({"event": "ignored", "data": 1})
        first.send_json({"event": "message", "data": {"text": "hello"}})

        assert first.receive_json() == {"event": "message", "data": {"text": "hello"}}
        assert second.receive_json() == {"event": "message", "data": {"text": "hello"}}


def test_unexpected_failure_renders_generic_500(client, admin):
    def broken_notifier():
        raise RuntimeError("notifier wiring exploded")

    app.dependency_overrides[get_notifier] = broken_notifier
    response = client.post(f"{API}/roles", json={"name": "Manager"}, headers=admin.headers)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "statusCode": 500,
        "message": "An unexpected error occurred",
        "error": None,
    }
    assert "exploded" not in response.text
    assert "Traceback" not in response.text
